"""Markdown renderers for refmark.

Built-in renderers, each backed by a third-party library:
- mistune: mistune 3 (installed with refmark)
- markdown: Python-Markdown (refmark[markdown])
- markdown-it: markdown-it-py (refmark[markdown-it])
- patitas: Patitas (refmark[patitas]), falls back to mistune

Usage:
    >>> from refmark.renderers import load_renderer
    >>> renderer = load_renderer("mistune")
    >>> html = renderer.render("Hello *world*")

"""

from refmark.renderers.protocol import MarkdownRenderer
from refmark.renderers.registry import (
    RENDERER_FALLBACKS,
    RENDERERS,
    available_renderers,
    load_renderer,
    register_renderer,
)

# Import built-in renderers to register them
# These imports trigger the @register_renderer decorators
from refmark.renderers.builtins import (  # noqa: E402
    MarkdownItRenderer,
    MistuneRenderer,
    PatitasRenderer,
    PythonMarkdownRenderer,
)

__all__ = [
    "MarkdownRenderer",
    "RENDERERS",
    "RENDERER_FALLBACKS",
    "available_renderers",
    "load_renderer",
    "register_renderer",
    "MarkdownItRenderer",
    "MistuneRenderer",
    "PatitasRenderer",
    "PythonMarkdownRenderer",
]
