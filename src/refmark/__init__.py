"""
refmark: Reference-resolving markup preprocessing for documentation generators

Turns comment and readme text written with a small reference syntax into
HTML-ready text, then hands it to a markdown renderer.

Quick Start:
    >>> from refmark import DictReferenceTable, ProcessorConfig, create_processor
    >>> table = DictReferenceTable({"Foo.bar": "foo.html#bar"})
    >>> processor = create_processor(ProcessorConfig(format="mistune"), table)
    >>> processor("See @{Foo.bar|the bar function}.")
    'See <a href="foo.html#bar">the bar function</a>.'

    >>> # Whole documents get section anchors and highlighted code blocks
    >>> html = processor.process_document("readme.md", readme_text)

Reference syntax:
    @{name}           link to name, labelled by the reference table
    @{name|label}     link with explicit label
    `name`            link if name resolves (renderer formats only)
    @lookup prefix    resolve later names in this document under prefix

Installation:
    pip install refmark              # mistune renderer
    pip install refmark[syntax]      # + Syntax highlighting via Rosettes
"""

from refmark.config import PLAIN_FORMAT, ProcessorConfig
from refmark.dispatch import Processor, create_processor, strip_paragraph
from refmark.errors import (
    ConfigError,
    ReferenceNotFoundError,
    RefmarkError,
    RendererNotFoundError,
)
from refmark.inline import InlineReferenceExpander, tokenize
from refmark.preprocess import BlockPreprocessor, CodeBlock, preprocess
from refmark.references import (
    DictReferenceTable,
    LoggingSink,
    LookupContext,
    Reference,
    ReferenceTable,
    WarningSink,
)
from refmark.renderers import MarkdownRenderer, available_renderers, load_renderer
from refmark.resolver import NameResolver
from refmark.sections import Section, SourceDocument, scan_document, scan_sections

__version__ = "0.1.0"


def render(
    text: str,
    table: ReferenceTable | None = None,
    *,
    renderer_name: str = "mistune",
    package_prefix: str | None = None,
    filename: str | None = None,
) -> str:
    """Process ``text`` in one call.

    With a ``filename`` the text is treated as a whole document (sections,
    code blocks, ``@lookup``); without one it is a single field.
    ``renderer_name`` is a registered renderer or ``"plain"``.

    Example:
        >>> render("Use @{Foo.bar}", DictReferenceTable({"Foo.bar": "foo.html#bar"}))
        'Use <a href="foo.html#bar">Foo.bar</a>'
    """
    config = ProcessorConfig(format=renderer_name, package_prefix=package_prefix)
    processor = create_processor(config, table)
    if filename is not None:
        return processor.process_document(filename, text)
    return processor(text)


__all__ = [  # noqa: RUF022 - grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "render",
    "create_processor",
    "Processor",
    "ProcessorConfig",
    "PLAIN_FORMAT",
    "strip_paragraph",
    # References
    "Reference",
    "ReferenceTable",
    "DictReferenceTable",
    "LookupContext",
    "WarningSink",
    "LoggingSink",
    "NameResolver",
    "InlineReferenceExpander",
    "tokenize",
    # Documents
    "Section",
    "SourceDocument",
    "scan_sections",
    "scan_document",
    "BlockPreprocessor",
    "CodeBlock",
    "preprocess",
    # Renderers
    "MarkdownRenderer",
    "available_renderers",
    "load_renderer",
    # Errors
    "RefmarkError",
    "ReferenceNotFoundError",
    "RendererNotFoundError",
    "ConfigError",
]
