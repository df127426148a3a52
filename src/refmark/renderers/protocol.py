"""MarkdownRenderer protocol: stable interface for markdown back ends.

Any object with ``render(text) -> str`` conforms. refmark never parses
markdown itself; it prepares the text and hands it to one of these.

Example:
    from refmark.renderers.protocol import MarkdownRenderer

    def finish(renderer: MarkdownRenderer, text: str) -> str:
        return renderer.render(text)

"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class MarkdownRenderer(Protocol):
    """Protocol for markdown-to-HTML renderers.

    Implementations must pass raw inline HTML through unchanged, since the
    preprocessor emits links, anchors and highlighted ``<pre>`` blocks.

    """

    @property
    def name(self) -> str:
        """Registry name of the renderer."""
        ...

    def render(self, text: str) -> str:
        """Render markdown text to an HTML fragment."""
        ...
