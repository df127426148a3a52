"""Built-in renderer adapters.

Each adapter imports its library in ``__init__`` so that a missing optional
dependency surfaces as ImportError at load time, never on first render.
"""

from __future__ import annotations

from refmark.renderers.registry import register_renderer


@register_renderer("mistune")
class MistuneRenderer:
    """mistune 3 with raw HTML passed through."""

    name = "mistune"

    def __init__(self) -> None:
        import mistune

        self._markdown = mistune.create_markdown(escape=False)

    def render(self, text: str) -> str:
        result: str = self._markdown(text)
        return result


@register_renderer("markdown")
class PythonMarkdownRenderer:
    """Python-Markdown."""

    name = "markdown"

    def __init__(self) -> None:
        import markdown

        self._markdown = markdown.Markdown()

    def render(self, text: str) -> str:
        self._markdown.reset()
        result: str = self._markdown.convert(text)
        return result


@register_renderer("markdown-it")
class MarkdownItRenderer:
    """markdown-it-py with the CommonMark preset."""

    name = "markdown-it"

    def __init__(self) -> None:
        from markdown_it import MarkdownIt

        self._markdown = MarkdownIt("commonmark")

    def render(self, text: str) -> str:
        result: str = self._markdown.render(text)
        return result


@register_renderer("patitas")
class PatitasRenderer:
    """Patitas, the typed-AST CommonMark parser."""

    name = "patitas"

    def __init__(self) -> None:
        from patitas import Markdown

        self._markdown = Markdown()

    def render(self, text: str) -> str:
        result: str = self._markdown(text)
        return result
