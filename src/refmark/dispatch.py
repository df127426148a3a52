"""Processor creation: choose the output mode and wire the lookup.

A processor is the single entry point the documentation generator calls for
every renderable field: summaries, descriptions and whole readme files.

- ``plain`` format: references are expanded and nothing else happens.
- any other format: whole documents go through the BlockPreprocessor, single
  fields through the expander alone; the result is rendered to HTML and a
  lone enclosing paragraph is removed, since callers add their own.

Lookup state is rebuilt for every call, so a ``@lookup`` directive in one
document is never seen by the next.

Example:
    >>> processor = create_processor(ProcessorConfig(format="mistune"), table)
    >>> processor("See @{Foo.bar|the bar function}.")
    'See <a href="foo.html#bar">the bar function</a>.'
"""

from __future__ import annotations

import re
from functools import partial
from typing import TYPE_CHECKING

from refmark import highlighting
from refmark.config import ProcessorConfig
from refmark.errors import ConfigError
from refmark.inline import InlineReferenceExpander
from refmark.preprocess import BlockPreprocessor
from refmark.references import DictReferenceTable, LookupContext, default_href
from refmark.renderers import load_renderer
from refmark.resolver import NameResolver
from refmark.sections import SourceDocument, scan_document
from refmark.utils.logger import get_logger

if TYPE_CHECKING:
    from refmark.preprocess import HighlightFunction
    from refmark.references import HrefFunction, Reference, ReferenceTable, WarningSink
    from refmark.renderers.protocol import MarkdownRenderer

logger = get_logger(__name__)

_PARAGRAPH = re.compile(r"^\s*<p>(.*)</p>\s*$", re.DOTALL)


def strip_paragraph(html: str) -> str:
    """Remove the ``<p>`` wrapper if the renderer produced exactly one paragraph."""
    match = _PARAGRAPH.match(html)
    if match is None:
        return html
    inner = match.group(1)
    if "<p>" in inner or "</p>" in inner:
        return html
    return inner


class Processor:
    """Turns raw field or document text into an HTML fragment.

    Immutable after creation; all per-document state lives in the
    LookupContext built by each call.

    Args:
        config: Output mode and lookup defaults
        table: Reference table of the module being documented
        href: Maps a Reference to a link target
        renderer: Markdown renderer (required unless the format is plain)
        highlighter: Replaces the default code highlighter

    Raises:
        ConfigError: If a renderer format is given without a renderer
    """

    __slots__ = ("config", "table", "_href", "renderer", "_highlighter")

    def __init__(
        self,
        config: ProcessorConfig,
        table: ReferenceTable,
        *,
        href: HrefFunction | None = None,
        renderer: MarkdownRenderer | None = None,
        highlighter: HighlightFunction | None = None,
    ) -> None:
        if renderer is None and not config.is_plain:
            raise ConfigError(f"format {config.format!r} needs a renderer")
        self.config = config
        self.table = table
        self._href = href or default_href
        self.renderer = renderer
        self._highlighter = highlighter

    @property
    def plain(self) -> bool:
        return self.config.is_plain

    def with_table(self, table: ReferenceTable) -> Processor:
        """Same processor bound to another module's reference table."""
        return Processor(
            self.config,
            table,
            href=self._href,
            renderer=self.renderer,
            highlighter=self._highlighter,
        )

    def new_context(self) -> LookupContext:
        prefix = self.config.package_prefix
        return LookupContext(
            package_prefix=prefix.rstrip(".") if prefix else None,
            backtick_references=self.config.backtick_enabled,
        )

    def expander(
        self, context: LookupContext | None = None, *, plain: bool | None = None
    ) -> InlineReferenceExpander:
        resolver = NameResolver(self.table, context or self.new_context())
        return InlineReferenceExpander(
            resolver,
            href=self._href,
            plain=self.plain if plain is None else plain,
        )

    def resolve(self, name: str) -> Reference:
        """Resolve ``name`` with a fresh context.

        Raises:
            ReferenceNotFoundError: If no lookup form matches
        """
        return NameResolver(self.table, self.new_context()).resolve(name)

    def href(self, ref: Reference) -> str | None:
        return self._href(ref)

    def expand(self, text: str, item: WarningSink | None = None) -> str:
        """Expand references only, honoring the processor's plain flag."""
        return self.expander().expand(text, item)

    def expand_plain(self, text: str, item: WarningSink | None = None) -> str:
        """Expand references without escaping; used inside code blocks."""
        return self.expander(plain=True).expand(text, item)

    def highlight(
        self,
        filename: str,
        code: str,
        start_line: int,
        context: LookupContext | None = None,
    ) -> str:
        """Highlight one code block and resolve references in its comments.

        ``context`` carries the document's ``@lookup`` prefix into the code.
        """
        expand = self.expander(context, plain=True).expand
        if self._highlighter is None:
            return highlighting.highlight(
                code,
                self.config.code_language,
                filename=filename,
                start_line=start_line,
                expand=expand,
            )
        try:
            html = self._highlighter(filename, code, start_line)
        except Exception:
            logger.debug(
                "Syntax highlighting failed for %s:%d", filename, start_line, exc_info=True
            )
            html = highlighting.escape_block(code)
        return highlighting.expand_lines(
            html, filename=filename, start_line=start_line, expand=expand
        )

    def __call__(self, text: str | None, item: WarningSink | SourceDocument | None = None) -> str:
        """Process one field or, when ``item`` is a SourceDocument, one document."""
        if text is None:
            return ""
        if self.plain:
            return self.expand(text, item)

        expander = self.expander()
        if isinstance(item, SourceDocument):
            highlight = partial(self.highlight, context=expander.resolver.context)
            text = BlockPreprocessor(expander, item, highlight).run(text)
        else:
            text = expander.expand(text, item)
        return strip_paragraph(self.renderer.render(text))

    def process_document(self, filename: str, text: str) -> str:
        """Scan sections of ``text`` and process it as a whole document."""
        return self(text, scan_document(filename, text))


def create_processor(
    config: ProcessorConfig | None = None,
    table: ReferenceTable | None = None,
    *,
    href: HrefFunction | None = None,
    renderer: MarkdownRenderer | None = None,
    highlighter: HighlightFunction | None = None,
) -> Processor:
    """Create a processor, loading the configured renderer now.

    Args:
        config: Processor configuration (plain format if None)
        table: Reference table (an empty one if None)
        href: Link target function (the Reference's own href if None)
        renderer: Use this renderer instead of loading ``config.format``
        highlighter: Code highlighter override

    Raises:
        RendererNotFoundError: If the renderer and its fallback cannot load
    """
    config = config or ProcessorConfig()
    if renderer is None and not config.is_plain:
        renderer = load_renderer(config.format)
        logger.debug("using %s renderer", renderer.name)
    return Processor(
        config,
        table if table is not None else DictReferenceTable(),
        href=href,
        renderer=renderer,
        highlighter=highlighter,
    )


__all__ = ["Processor", "create_processor", "strip_paragraph"]
