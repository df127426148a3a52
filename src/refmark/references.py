"""Reference data model shared by the resolver, expander and preprocessor.

A Reference is produced for one lookup and thrown away afterwards. The
LookupContext holds the only mutable state of a processing call and is created
fresh for every document, so nothing leaks from one document to the next.

Example:
    >>> table = DictReferenceTable({"pkg.Foo.bar": "foo.html#bar"})
    >>> table.resolve_see_reference("pkg.Foo.bar").href
    'foo.html#bar'
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Protocol

from refmark.errors import ReferenceNotFoundError
from refmark.utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class Reference:
    """Result of resolving one name.

    Attributes:
        query_name: The name as written in the text
        qualified_name: The fully qualified name that matched
        label: Default link text (None lets the caller pick one)
        href: Link target (None when the item has no page)
    """

    query_name: str
    qualified_name: str
    label: str | None = None
    href: str | None = None


HrefFunction = Callable[[Reference], "str | None"]


def default_href(ref: Reference) -> str | None:
    """Use the href the reference table stored on the Reference."""
    return ref.href


class ReferenceTable(Protocol):
    """Name lookup table supplied by the surrounding documentation model."""

    def resolve_see_reference(self, name: str) -> Reference:
        """Resolve a fully qualified name.

        Raises:
            ReferenceNotFoundError: If nothing is registered under ``name``
        """
        ...


class DictReferenceTable:
    """ReferenceTable backed by a mapping of qualified name to href.

    Values may be a plain href string or a ``(href, label)`` tuple. Without a
    label the qualified name is used as link text.
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, str | tuple[str, str]] | None = None) -> None:
        self._entries: dict[str, tuple[str, str | None]] = {}
        for name, value in (entries or {}).items():
            self.add(name, value)

    def add(self, name: str, value: str | tuple[str, str]) -> None:
        """Register ``name``; a tuple value carries an explicit label."""
        if isinstance(value, tuple):
            href, label = value
            self._entries[name] = (href, label)
        else:
            self._entries[name] = (value, None)

    def resolve_see_reference(self, name: str) -> Reference:
        entry = self._entries.get(name)
        if entry is None:
            raise ReferenceNotFoundError(name, "reference not found")
        href, label = entry
        return Reference(
            query_name=name,
            qualified_name=name,
            label=label if label is not None else name,
            href=href,
        )

    def __contains__(self, name: str) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


@dataclass(slots=True)
class LookupContext:
    """Per-document lookup state.

    Attributes:
        package_prefix: Global package prefix tried after the bare name
        local_prefix: Prefix set by an in-text ``@lookup`` directive
        backtick_references: Treat `name` spans as opportunistic references
    """

    package_prefix: str | None = None
    local_prefix: str | None = None
    backtick_references: bool = False

    def prefixes(self) -> list[str]:
        """Prefixes to try after the unprefixed attempt, in order."""
        return [p for p in (self.package_prefix, self.local_prefix) if p]


class WarningSink(Protocol):
    """Anything that can receive a non-fatal diagnostic."""

    def warn(self, message: str) -> None: ...


class LoggingSink:
    """WarningSink writing ``filename:line: message`` to the package logger.

    The preprocessor advances ``lineno`` as it walks the document so each
    warning points at the line it came from.
    """

    __slots__ = ("filename", "lineno")

    def __init__(self, filename: str, lineno: int = 0) -> None:
        self.filename = filename
        self.lineno = lineno

    def warn(self, message: str) -> None:
        logger.warning("%s:%d: %s", self.filename, self.lineno, message)
