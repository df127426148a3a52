"""Whole-document preprocessing before markdown rendering.

Walks a document line by line in one of two states:

- prose: ``@lookup`` directives are consumed, references are expanded and
  section anchors are inserted in front of heading lines.
- code block: entered on a line indented by four or more columns. Lines are
  collected until a non-blank line with a smaller indent. The block is then
  dedented and handed to the highlighter, unless its first line is ``@plain``,
  in which case it is passed through untouched. The highlighter returns a
  complete block, ``<pre>`` wrapper included.

The markdown renderer only ever sees prose plus ready-made ``<pre>`` blocks.

Example:
    >>> doc = scan_document("readme.md", text)
    >>> BlockPreprocessor(expander, doc).run(text)
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from refmark import highlighting
from refmark.references import LoggingSink
from refmark.utils.logger import get_logger
from refmark.utils.text import expand_tabs, indent_width, is_blank, split_lines

if TYPE_CHECKING:
    from refmark.inline import InlineReferenceExpander
    from refmark.sections import SourceDocument

logger = get_logger(__name__)

CODE_INDENT = 4
DEFAULT_LANGUAGE = "python"

_LOOKUP = re.compile(r"@lookup\s+(\S+)")
_PLAIN = re.compile(r"^\s*@plain\s*$")

# (filename, code, start_line) -> html
HighlightFunction = Callable[[str, str, int], str]


def default_highlight(filename: str, code: str, start_line: int) -> str:
    """Highlight as Python through the globally configured highlighter."""
    return highlighting.highlight(
        code, DEFAULT_LANGUAGE, filename=filename, start_line=start_line
    )


@dataclass(slots=True)
class CodeBlock:
    """An indented block being collected.

    Attributes:
        start_indent: Indent of the first collected line
        start_line: Document line of the first collected line
        lines: Tab-expanded lines, still indented
        is_plain: Opted out of highlighting with ``@plain``
    """

    start_indent: int
    start_line: int
    lines: list[str] = field(default_factory=list)
    is_plain: bool = False

    def add(self, line: str) -> None:
        if not self.lines and not self.is_plain and _PLAIN.match(line):
            self.is_plain = True
            self.start_line += 1
            return
        self.lines.append(line)

    def dedented(self) -> str:
        """Code with the first line's indent removed and one trailing blank dropped."""
        lines = [
            line[min(self.start_indent, indent_width(line)) :] for line in self.lines
        ]
        if lines and is_blank(lines[-1]):
            lines.pop()
        return "\n".join(lines)


class BlockPreprocessor:
    """Turn a raw document into renderer-ready text.

    Args:
        expander: Expands references; its resolver's LookupContext receives
            ``@lookup`` prefixes
        document: Supplies the filename and the line -> anchor map
        highlight: Highlighter callable for non-plain code blocks
    """

    __slots__ = ("expander", "document", "highlight", "sink", "_anchors", "_out")

    def __init__(
        self,
        expander: InlineReferenceExpander,
        document: SourceDocument,
        highlight: HighlightFunction | None = None,
    ) -> None:
        self.expander = expander
        self.document = document
        self.highlight = highlight or default_highlight
        self.sink = LoggingSink(document.filename)
        self._anchors: dict[int, str] = {}
        self._out: list[str] = []

    def run(self, text: str) -> str:
        """Preprocess ``text`` and return the transformed document."""
        self._anchors = self.document.sections_by_line
        self._out = []
        block: CodeBlock | None = None

        for lineno, raw in enumerate(split_lines(text), start=1):
            self.sink.lineno = lineno
            if block is not None:
                line = expand_tabs(raw)
                if indent_width(line) >= CODE_INDENT or is_blank(line):
                    block.add(line)
                    continue
                self._flush(block)
                block = None

            lookup = _LOOKUP.search(raw)
            if lookup:
                self._set_local_prefix(lookup.group(1))
                continue

            line = expand_tabs(raw)
            indent = indent_width(line)
            if indent >= CODE_INDENT:
                block = CodeBlock(start_indent=indent, start_line=lineno)
                block.add(line)
                continue

            self._prose(lineno, raw)

        if block is not None:
            self._flush(block)
        return "\n".join(self._out)

    def _set_local_prefix(self, prefix: str) -> None:
        self.expander.resolver.context.local_prefix = prefix.rstrip(".")
        logger.debug(
            "%s:%d: local lookup prefix %r", self.document.filename, self.sink.lineno, prefix
        )

    def _prose(self, lineno: int, line: str) -> None:
        anchor = self._anchors.get(lineno)
        if anchor is not None:
            self._out.append(f'<a name="{anchor}"></a>')
        self._out.append(self.expander.expand(line, self.sink))

    def _flush(self, block: CodeBlock) -> None:
        if block.is_plain:
            self._out.extend(block.lines)
            return

        code = block.dedented()
        if is_blank(code):
            self._out.append("")
            return

        html = self.highlight(self.document.filename, code + "\n", block.start_line)
        self._out.append(html)


def preprocess(
    text: str,
    expander: InlineReferenceExpander,
    document: SourceDocument,
    highlight: HighlightFunction | None = None,
) -> str:
    """Run a BlockPreprocessor over ``text`` once."""
    return BlockPreprocessor(expander, document, highlight).run(text)
