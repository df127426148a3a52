"""Tests for refmark utility modules."""

from refmark.utils.logger import get_logger
from refmark.utils.text import (
    escape_html,
    expand_tabs,
    indent_width,
    is_blank,
    slugify,
    split_lines,
)


class TestSlugify:
    def test_basic_slugify(self) -> None:
        assert slugify("Hello World") == "hello-world"
        assert slugify("Hello World!") == "hello-world"
        assert slugify("Test & Code") == "test-code"

    def test_html_entities(self) -> None:
        assert slugify("Test &amp; Code") == "test-code"

    def test_unicode(self) -> None:
        assert slugify("Café") == "café"

    def test_underscores_kept(self) -> None:
        assert slugify("split_path usage") == "split_path-usage"

    def test_empty_string(self) -> None:
        assert slugify("") == ""
        assert slugify("!!!") == ""


class TestLineHelpers:
    def test_expand_tabs(self) -> None:
        assert expand_tabs("\tx\ty") == "    x    y"

    def test_indent_width(self) -> None:
        assert indent_width("    code") == 4
        assert indent_width("text") == 0
        assert indent_width("   ") == 3

    def test_is_blank(self) -> None:
        assert is_blank("")
        assert is_blank("  \t ")
        assert not is_blank("  x")


class TestSplitLines:
    def test_splits_on_newline_only(self) -> None:
        assert split_lines("a\x0cb\rc d\ne") == ["a\x0cb\rc d", "e"]

    def test_trailing_newline_gives_empty_line(self) -> None:
        assert split_lines("a\n") == ["a", ""]


class TestEscapeHtml:
    def test_quotes(self) -> None:
        assert escape_html("<a href='x'>") == "&lt;a href=&#x27;x&#x27;&gt;"

    def test_empty(self) -> None:
        assert escape_html("") == ""


class TestLogger:
    def test_prefix_added(self) -> None:
        assert get_logger("preprocess").name == "refmark.preprocess"

    def test_prefix_not_doubled(self) -> None:
        assert get_logger("refmark.inline").name == "refmark.inline"
        assert get_logger("refmark").name == "refmark"
