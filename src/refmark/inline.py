"""Inline reference expansion.

Two syntaxes request a cross-link inside a line of text:

- ``@{name}`` and ``@{name|label}`` are always recognized. A failed lookup
  leaves a ``???`` placeholder and a warning.
- `` `name` `` is recognized only when back-tick references are enabled. A
  failed lookup leaves the span untouched and stays silent.

Text is first split into literal and marker segments; only literal segments
are then split on back-ticks, so the HTML produced for a marker is never
scanned again.

Example:
    >>> expander = InlineReferenceExpander(resolver)
    >>> expander.expand("See @{Foo.bar|the bar function}.")
    'See <a href="foo.html#bar">the bar function</a>.'
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from refmark.errors import ReferenceNotFoundError
from refmark.references import default_href
from refmark.utils.logger import get_logger
from refmark.utils.text import escape_html

if TYPE_CHECKING:
    from refmark.references import HrefFunction, WarningSink
    from refmark.resolver import NameResolver

logger = get_logger(__name__)

PLACEHOLDER = "???"
MISSING_LABEL = "?que"
MISSING_HREF = "#"

_MARKER_OPEN = "@{"
_MARKER_CLOSE = "}"
_BACKTICK = "`"


@dataclass(frozen=True, slots=True)
class Literal:
    """Text copied to the output unchanged."""

    text: str


@dataclass(frozen=True, slots=True)
class Marker:
    """An ``@{query|label}`` reference marker."""

    query: str
    label: str | None
    raw: str


@dataclass(frozen=True, slots=True)
class Backtick:
    """A `` `name` `` span that may be a reference."""

    name: str
    raw: str


Segment = Literal | Marker | Backtick


def _split_marker(body: str) -> tuple[str, str | None]:
    query, pipe, label = body.partition("|")
    if not pipe:
        return body, None
    return query.rstrip(), label


def tokenize_markers(text: str) -> Iterator[Literal | Marker]:
    """Split ``text`` into literal and ``@{...}`` marker segments.

    A marker runs to the first closing brace. An ``@{`` with no closing brace
    is literal text.
    """
    pos = 0
    while True:
        start = text.find(_MARKER_OPEN, pos)
        if start < 0:
            break
        end = text.find(_MARKER_CLOSE, start + len(_MARKER_OPEN))
        if end < 0:
            break
        if start > pos:
            yield Literal(text[pos:start])
        query, label = _split_marker(text[start + len(_MARKER_OPEN) : end])
        yield Marker(query=query, label=label, raw=text[start : end + 1])
        pos = end + 1
    if pos < len(text):
        yield Literal(text[pos:])


def tokenize_backticks(text: str) -> Iterator[Literal | Backtick]:
    """Split ``text`` into literal and back-tick segments.

    Empty spans never match: in ``a``b`` the first back-tick is literal and
    the second one opens the span.
    """
    pos = 0
    search = 0
    while True:
        start = text.find(_BACKTICK, search)
        if start < 0:
            break
        end = text.find(_BACKTICK, start + 1)
        if end < 0:
            break
        if end == start + 1:
            search = end
            continue
        if start > pos:
            yield Literal(text[pos:start])
        yield Backtick(name=text[start + 1 : end], raw=text[start : end + 1])
        pos = search = end + 1
    if pos < len(text):
        yield Literal(text[pos:])


def tokenize(text: str, *, backticks: bool = False) -> list[Segment]:
    """Tokenize a line into literal, marker and (optionally) back-tick segments."""
    segments: list[Segment] = []
    for segment in tokenize_markers(text):
        if backticks and isinstance(segment, Literal):
            segments.extend(tokenize_backticks(segment.text))
        else:
            segments.append(segment)
    return segments


def render_link(href: str | None, label: str | None) -> str:
    """Format an anchor, substituting placeholders for missing parts.

    The href is attribute-escaped; the label is markup and is used as is.
    """
    return f'<a href="{escape_html(href or MISSING_HREF)}">{label or MISSING_LABEL}</a>'


class InlineReferenceExpander:
    """Replace reference markers in a string with links.

    Args:
        resolver: NameResolver bound to the current lookup context
        href: Maps a Reference to its link target
        plain: Output is not going through a markdown renderer, so labels
            are left unescaped
    """

    __slots__ = ("resolver", "href", "plain")

    def __init__(
        self,
        resolver: NameResolver,
        *,
        href: HrefFunction | None = None,
        plain: bool = False,
    ) -> None:
        self.resolver = resolver
        self.href = href or default_href
        self.plain = plain

    @property
    def backtick_references(self) -> bool:
        return self.resolver.context.backtick_references

    def expand(self, text: str, item: WarningSink | None = None) -> str:
        """Expand every reference in ``text``.

        Args:
            text: A line or a short field such as a summary
            item: Receives a warning for each marker that fails to resolve

        Returns:
            The text with markers replaced by links or placeholders
        """
        if _MARKER_OPEN not in text and not (
            self.backtick_references and _BACKTICK in text
        ):
            return text

        parts: list[str] = []
        for segment in tokenize(text, backticks=self.backtick_references):
            match segment:
                case Literal():
                    parts.append(segment.text)
                case Marker():
                    parts.append(self._expand_marker(segment, item))
                case Backtick():
                    parts.append(self._expand_backtick(segment))
        return "".join(parts)

    def _expand_marker(self, marker: Marker, item: WarningSink | None) -> str:
        try:
            ref = self.resolver.resolve(marker.query)
        except ReferenceNotFoundError as err:
            message = f"{err.message} {marker.query}"
            if item is not None:
                item.warn(message)
            else:
                logger.warning("nofile error: %s", message)
            return PLACEHOLDER

        label = marker.label or ref.label
        if label and not self.plain:
            # the renderer would read bare underscores as emphasis
            label = label.replace("_", "\\_")
        return render_link(self.href(ref), label)

    def _expand_backtick(self, span: Backtick) -> str:
        try:
            ref = self.resolver.resolve(span.name)
        except ReferenceNotFoundError:
            return span.raw
        return render_link(self.href(ref), span.name)
