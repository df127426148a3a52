"""Heading discovery for readme-style documents.

Readme files get a table of contents built from their headings. The first
heading-looking line fixes the level that counts as a section; it and
every later heading at exactly that level become sections with unique
anchors. A text with no heading at all has no sections.

The scan only records which line gets which anchor. Inserting the anchors is
left to the preprocessor, which walks the same lines later.

Example:
    >>> doc = scan_document("readme.md", "## Intro\\ntext\\n## Setup\\n### Detail\\n")
    >>> doc.sections_by_line
    {1: 'intro', 3: 'setup'}
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from refmark.utils.logger import get_logger
from refmark.utils.text import slugify, split_lines

logger = get_logger(__name__)

_HEADING_LIKE = re.compile(r"^ {0,3}(#+)(?!#)\s*\S")
_HEADING = re.compile(r"^ {0,3}(#+)(?!#)(.*)$")
_CLOSING_HASHES = re.compile(r"(?:^|\s+)#+\s*$")


@dataclass(frozen=True, slots=True)
class Section:
    """One navigable heading.

    Attributes:
        anchor: Identifier unique within the document
        title: Heading text without hashes
        lineno: 1-based line of the heading in the original text
    """

    anchor: str
    title: str
    lineno: int


@dataclass(slots=True)
class SourceDocument:
    """A whole file being documented, with its discovered sections.

    Passing a SourceDocument as the item of a processor call marks the text
    as a full document rather than a single field.
    """

    filename: str
    sections: list[Section] = field(default_factory=list)

    @property
    def sections_by_line(self) -> dict[int, str]:
        return {section.lineno: section.anchor for section in self.sections}

    def table_of_contents(self) -> list[tuple[str, str]]:
        """(anchor, title) pairs in document order."""
        return [(section.anchor, section.title) for section in self.sections]

    def warn(self, message: str) -> None:
        logger.warning("%s: %s", self.filename, message)


class AnchorGenerator:
    """Hands out anchors that never repeat within one document."""

    __slots__ = ("_seen",)

    def __init__(self) -> None:
        self._seen: set[str] = set()

    def __call__(self, title: str) -> str:
        base = slugify(title) or "section"
        anchor = base
        suffix = 0
        while anchor in self._seen:
            suffix += 1
            anchor = f"{base}-{suffix}"
        self._seen.add(anchor)
        return anchor


def heading_title(line: str, level: int) -> str | None:
    """Title of ``line`` if it is a heading at exactly ``level``."""
    match = _HEADING.match(line)
    if match is None or len(match.group(1)) != level:
        return None
    title = _CLOSING_HASHES.sub("", match.group(2)).strip()
    return title or None


def scan_sections(text: str) -> list[Section]:
    """Find the section headings of ``text`` in a single forward pass."""
    level: int | None = None
    new_anchor = AnchorGenerator()
    sections: list[Section] = []
    for lineno, line in enumerate(split_lines(text), start=1):
        if level is None:
            match = _HEADING_LIKE.match(line)
            if match is None:
                continue
            level = len(match.group(1))
        title = heading_title(line, level)
        if title is not None:
            sections.append(Section(anchor=new_anchor(title), title=title, lineno=lineno))
    return sections


def scan_document(filename: str, text: str) -> SourceDocument:
    """Build a SourceDocument for ``text`` with its sections filled in."""
    return SourceDocument(filename=filename, sections=scan_sections(text))
