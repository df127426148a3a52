"""Tests for processor creation and the end-to-end field/document paths."""

import pytest

from refmark import DictReferenceTable, ProcessorConfig, create_processor, render
from refmark.dispatch import Processor, strip_paragraph
from refmark.errors import ConfigError, ReferenceNotFoundError
from refmark.sections import SourceDocument, scan_document


def renderer_processor(table, renderer, **config) -> Processor:
    return create_processor(
        ProcessorConfig(format="upper", **config),
        table,
        renderer=renderer,
        highlighter=lambda filename, code, start_line: f"<pre>{code}</pre>",
    )


# =========================================================================
# Plain format
# =========================================================================


class TestPlainFormat:
    def test_expands_only(self, table) -> None:
        processor = create_processor(ProcessorConfig(), table)
        assert processor("a @{pkg.util.split_path} *b*") == (
            'a <a href="util.html#split_path">split_path</a> *b*'
        )

    def test_none_input(self, table) -> None:
        assert create_processor(ProcessorConfig(), table)(None) == ""

    def test_backticks_off_by_default(self, table) -> None:
        assert create_processor(ProcessorConfig(), table)("`list`") == "`list`"

    def test_backticks_explicitly_on(self, table) -> None:
        processor = create_processor(ProcessorConfig(backtick_references=True), table)
        assert processor("`list`") == '<a href="list.html">list</a>'

    def test_document_item_receives_warnings(self, table, caplog) -> None:
        processor = create_processor(ProcessorConfig(), table)
        assert processor("@{nope}", SourceDocument("mod.py")) == "???"
        assert "mod.py" in caplog.text


# =========================================================================
# Renderer format
# =========================================================================


class TestRendererFormat:
    def test_field_is_rendered_and_unwrapped(self, table, renderer) -> None:
        processor = renderer_processor(table, renderer)
        result = processor("See @{Foo.bar|the bar function}.")

        assert result == 'See <a href="foo.html#bar">the bar function</a>.'
        assert renderer.calls == ['See <a href="foo.html#bar">the bar function</a>.']

    def test_backticks_on_by_default(self, table, renderer) -> None:
        assert renderer_processor(table, renderer)("`list`") == '<a href="list.html">list</a>'

    def test_backticks_explicitly_off(self, table, renderer) -> None:
        processor = renderer_processor(table, renderer, backtick_references=False)
        assert processor("`list`") == "`list`"

    def test_underscores_escaped(self, table, renderer) -> None:
        renderer_processor(table, renderer)("@{pkg.util.split_path}")
        assert renderer.calls == ['<a href="util.html#split_path">split\\_path</a>']

    def test_none_input(self, table, renderer) -> None:
        assert renderer_processor(table, renderer)(None) == ""

    def test_field_ignores_lookup_and_code(self, table, renderer) -> None:
        processor = renderer_processor(table, renderer)
        processor("@lookup local\n    code")
        assert renderer.calls == ["@lookup local\n    code"]

    def test_document_is_preprocessed(self, table, renderer) -> None:
        processor = renderer_processor(table, renderer)
        text = "## Intro\n@lookup local\n@{only}\n\n    x = 1\n"
        processor(text, scan_document("readme.md", text))

        assert renderer.calls == [
            '<a name="intro"></a>\n## Intro\n'
            '<a href="local.html#only">local.only</a>\n\n'
            '<pre>x = 1\n</pre>'
        ]

    def test_process_document(self, table, renderer) -> None:
        processor = renderer_processor(table, renderer)
        processor.process_document("readme.md", "# Title\ntext")
        assert renderer.calls == ['<a name="title"></a>\n# Title\ntext']

    def test_package_prefix(self, table, renderer) -> None:
        processor = renderer_processor(table, renderer, package_prefix="pkg.")
        assert processor("@{Foo}") == '<a href="pkg.html#Foo">pkg.Foo</a>'

    def test_lookup_does_not_leak(self, table, renderer) -> None:
        processor = renderer_processor(table, renderer)
        processor("@lookup local\n", SourceDocument("a.md"))
        assert processor("@{only}", SourceDocument("b.md")) == "???"

    def test_with_table(self, table, renderer) -> None:
        processor = renderer_processor(table, renderer)
        other = processor.with_table(DictReferenceTable({"x": "x.html"}))

        assert other("@{x}") == '<a href="x.html">x</a>'
        assert other.renderer is processor.renderer
        assert processor("@{x}") == "???"

    def test_renderer_required(self, table) -> None:
        with pytest.raises(ConfigError, match="needs a renderer"):
            Processor(ProcessorConfig(format="upper"), table)


class TestRawEntryPoints:
    def test_expand_honors_plain_flag(self, table, renderer) -> None:
        processor = renderer_processor(table, renderer)
        assert processor.expand("@{pkg.util.split_path}") == (
            '<a href="util.html#split_path">split\\_path</a>'
        )
        assert processor.expand_plain("@{pkg.util.split_path}") == (
            '<a href="util.html#split_path">split_path</a>'
        )
        assert renderer.calls == []

    def test_resolve_and_href(self, table, renderer) -> None:
        processor = create_processor(
            ProcessorConfig(format="upper", package_prefix="pkg"),
            table,
            renderer=renderer,
            href=lambda ref: f"/{ref.qualified_name}",
        )
        ref = processor.resolve("Foo")
        assert ref.qualified_name == "pkg.Foo"
        assert processor.href(ref) == "/pkg.Foo"

    def test_resolve_failure(self, table) -> None:
        with pytest.raises(ReferenceNotFoundError):
            create_processor(ProcessorConfig(), table).resolve("nope")


class TestStripParagraph:
    @pytest.mark.parametrize(
        ("html", "expected"),
        [
            ("<p>one</p>\n", "one"),
            ("  <p>multi\nline</p>  ", "multi\nline"),
            ("<p>a</p>\n<p>b</p>\n", "<p>a</p>\n<p>b</p>\n"),
            ("<h1>x</h1>\n", "<h1>x</h1>\n"),
            ("<p>a</p><ul><li>b</li></ul>", "<p>a</p><ul><li>b</li></ul>"),
            ("", ""),
        ],
    )
    def test_strip(self, html: str, expected: str) -> None:
        assert strip_paragraph(html) == expected


class TestMistuneEndToEnd:
    """Full pipeline through the default mistune renderer."""

    def test_field(self) -> None:
        table = DictReferenceTable({"Foo.bar": "foo.html#bar"})
        assert render("See @{Foo.bar|the bar function}.", table) == (
            'See <a href="foo.html#bar">the bar function</a>.'
        )

    def test_unresolved_backtick_becomes_code_span(self) -> None:
        assert render("Use `baz` today", DictReferenceTable()) == "Use <code>baz</code> today"

    def test_multiple_paragraphs_kept(self) -> None:
        html = render("one\n\ntwo", DictReferenceTable())
        assert html.count("<p>") == 2

    def test_plain_renderer_name(self) -> None:
        table = DictReferenceTable({"Foo.bar": "foo.html#bar"})
        assert render("*@{Foo.bar}*", table, renderer_name="plain") == (
            '*<a href="foo.html#bar">Foo.bar</a>*'
        )
