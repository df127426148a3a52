"""Text processing utilities for refmark.

Example:
    >>> from refmark.utils.text import slugify
    >>> slugify("Getting Started!")
    'getting-started'
"""

from __future__ import annotations

import html as html_module
import re

_NON_WORD = re.compile(r"[^\w\s-]")
_SEPARATORS = re.compile(r"[-\s]+")


def slugify(text: str, separator: str = "-") -> str:
    """Convert a heading title to an anchor-safe slug.

    Keeps Unicode word characters, so non-ASCII titles produce non-ASCII
    slugs. HTML entities are decoded first.

    Examples:
        >>> slugify("Hello World!")
        'hello-world'
        >>> slugify("Test &amp; Code")
        'test-code'
        >>> slugify("Café")
        'café'
    """
    if not text:
        return ""

    text = html_module.unescape(text).lower().strip()
    text = _NON_WORD.sub("", text)
    text = _SEPARATORS.sub(separator, text)
    return text.strip(separator)


def escape_html(text: str) -> str:
    """Escape HTML special characters for safe use in attributes.

    Examples:
        >>> escape_html("<a href='x'>")
        '&lt;a href=&#x27;x&#x27;&gt;'
    """
    if not text:
        return ""

    escaped = html_module.escape(text, quote=True)
    return escaped.replace("'", "&#x27;")


def split_lines(text: str) -> list[str]:
    """Split on newlines only.

    Form feeds, lone carriage returns and Unicode line separators stay inside
    their line, so every scanner numbers lines the same way.

    Examples:
        >>> split_lines("a\x0cb\nc")
        ['a\x0cb', 'c']
    """
    return text.split("\n")


def expand_tabs(line: str) -> str:
    """Replace every tab with four spaces."""
    return line.replace("\t", "    ")


def indent_width(line: str) -> int:
    """Count leading whitespace characters of an already tab-expanded line."""
    return len(line) - len(line.lstrip())


def is_blank(line: str) -> bool:
    """True when the line holds no non-whitespace character."""
    return not line.strip()
