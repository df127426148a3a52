"""Syntax highlighting for extracted code blocks.

Provides optional syntax highlighting for the indented code blocks the
preprocessor pulls out of documents. When refmark[syntax] is installed,
Rosettes is used automatically; otherwise code is HTML-escaped. When the
caller supplies an expander, references in the resulting HTML are resolved
either way.

Usage:
    # Automatic with refmark[syntax]
    from refmark.highlighting import highlight
    html = highlight("x = 1\\n", "python", filename="readme.md", start_line=12)

    # Manual injection
    from refmark.highlighting import set_highlighter

    def my_highlighter(code: str, language: str) -> str:
        return f'<span class="{language}">{code}</span>'

    set_highlighter(my_highlighter)
"""

from __future__ import annotations

from collections.abc import Callable
from html import escape
from typing import Protocol

from refmark.references import LoggingSink, WarningSink
from refmark.utils.logger import get_logger
from refmark.utils.text import split_lines

logger = get_logger(__name__)

ExpandFunction = Callable[[str, "WarningSink | None"], str]


class CodeHighlighter(Protocol):
    """Protocol for syntax highlighters.

    Highlighters take code and language and return a complete HTML block
    (including its <pre> wrapper) with syntax highlighting applied. The filename and start line only feed diagnostics.
    """

    def highlight(
        self,
        code: str,
        language: str,
        *,
        filename: str | None = None,
        start_line: int = 1,
    ) -> str:
        """Highlight code with syntax colors.

        Contract:
            - MUST return valid HTML (never raise for bad input)
            - MUST escape HTML entities in code
            - SHOULD fall back to plain text for unknown languages
        """
        ...

    def supports_language(self, language: str) -> bool:
        """Check if highlighter supports the given language."""
        ...


# Support for simple callable-based highlighters
SimpleHighlighter = Callable[[str, str], str]

_highlighter: CodeHighlighter | SimpleHighlighter | None = None
_tried_rosettes: bool = False


def set_highlighter(highlighter: CodeHighlighter | SimpleHighlighter | None) -> None:
    """Set the global syntax highlighter.

    Args:
        highlighter: A CodeHighlighter implementation, or a simple function
            that takes (code, language) and returns HTML. Pass None to clear
            the highlighter.
    """
    global _highlighter
    _highlighter = highlighter


def _try_import_rosettes() -> bool:
    """Try to import and configure the Rosettes highlighter."""
    global _highlighter, _tried_rosettes

    if _tried_rosettes:
        return _highlighter is not None

    _tried_rosettes = True

    try:
        import rosettes  # type: ignore[import-not-found]
    except ImportError:
        logger.debug("rosettes not installed, code blocks will be escaped only")
        return False

    class RosettesHighlighter:
        """Rosettes-based syntax highlighter implementing CodeHighlighter."""

        def highlight(
            self,
            code: str,
            language: str,
            *,
            filename: str | None = None,
            start_line: int = 1,
        ) -> str:
            result: str = rosettes.highlight(code, language=language)
            return result

        def supports_language(self, language: str) -> bool:
            try:
                result: bool = rosettes.supports_language(language)
                return result
            except Exception:
                return False

    _highlighter = RosettesHighlighter()
    logger.debug("using rosettes for code highlighting")
    return True


def escape_block(code: str) -> str:
    """Escaped code in the block wrapper used when nothing highlights it."""
    return f'<pre class="example">{escape(code, quote=False)}</pre>'


def expand_lines(
    html: str,
    *,
    filename: str | None = None,
    start_line: int = 1,
    expand: ExpandFunction,
) -> str:
    """Resolve references in block HTML line by line.

    Warnings for unresolved references point at ``filename:line`` of the
    original document. A marker split across highlighter spans is not found.
    """
    sink = LoggingSink(filename or "?", start_line)
    lines = []
    for offset, line in enumerate(split_lines(html)):
        sink.lineno = start_line + offset
        lines.append(expand(line, sink))
    return "\n".join(lines)


def _call_highlighter(
    code: str, language: str, filename: str | None, start_line: int
) -> str | None:
    if _highlighter is None:
        return None
    try:
        if hasattr(_highlighter, "highlight") and callable(_highlighter.highlight):
            return _highlighter.highlight(
                code, language, filename=filename, start_line=start_line
            )
        elif callable(_highlighter):
            return _highlighter(code, language)
    except Exception:
        logger.debug("Syntax highlighting failed for language %r", language, exc_info=True)
    return None


def highlight(
    code: str,
    language: str,
    *,
    filename: str | None = None,
    start_line: int = 1,
    expand: ExpandFunction | None = None,
) -> str:
    """Highlight code using the configured highlighter.

    The highlighter's output is a complete block and is returned as is.
    Falls back to escaped code in ``<pre class="example">`` if no highlighter
    is available or the highlighter fails. Automatically tries to use
    Rosettes if installed.

    Args:
        code: Dedented block text
        language: Language identifier
        filename: Document the block came from
        start_line: Line of the block's first code line in that document
        expand: Reference expander run over the resulting HTML

    Returns:
        HTML block (highlighted if available, escaped otherwise)
    """
    if _highlighter is None:
        _try_import_rosettes()

    html = _call_highlighter(code, language, filename, start_line)
    if html is None:
        html = escape_block(code)
    if expand is None:
        return html
    return expand_lines(html, filename=filename, start_line=start_line, expand=expand)

def has_highlighter() -> bool:
    """Check if a syntax highlighter is available."""
    if _highlighter is not None:
        return True
    return _try_import_rosettes()


def get_highlighter() -> CodeHighlighter | SimpleHighlighter | None:
    """Get the current highlighter instance.

    Automatically tries to load Rosettes if not already configured.
    """
    if _highlighter is None:
        _try_import_rosettes()
    return _highlighter
