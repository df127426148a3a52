"""Process a whole readme: sections, @lookup, code blocks and a ToC."""

from refmark import DictReferenceTable, ProcessorConfig, create_processor, scan_document

README = """\
## Intro

Start with @{pkg.Reader}. Bare `Reader` works too.

@lookup pkg.util

## Helpers

@{split_path|split_path()} handles separators:

    from pkg.util import split_path
    split_path("a/b")  # see @{split_path}

Sample output:

    @plain
    ['a', 'b']
"""

table = DictReferenceTable(
    {
        "pkg.Reader": ("reader.html", "Reader"),
        "pkg.util.split_path": ("util.html#split_path", "split_path"),
    }
)
processor = create_processor(ProcessorConfig(format="mistune", package_prefix="pkg"), table)

doc = scan_document("README.md", README)
for anchor, title in doc.table_of_contents():
    print(f"- [{title}](#{anchor})")
print()
print(processor(README, doc))
