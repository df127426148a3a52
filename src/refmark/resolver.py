"""Resolve short names against the current table and lookup context."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from refmark.errors import ReferenceNotFoundError

if TYPE_CHECKING:
    from refmark.references import LookupContext, Reference, ReferenceTable


class NameResolver:
    """Resolve a name, trying the bare name first and then each prefix.

    The order is: the name as written, ``package_prefix.name`` and finally
    ``local_prefix.name``. The first hit wins and later forms are never
    looked up. If every attempt fails, the error from the bare-name attempt is
    raised, since that message describes what the author actually wrote.

    Example:
        >>> resolver = NameResolver(table, LookupContext(package_prefix="pkg"))
        >>> resolver.resolve("Foo").qualified_name
        'pkg.Foo'
    """

    __slots__ = ("table", "context")

    def __init__(self, table: ReferenceTable, context: LookupContext) -> None:
        self.table = table
        self.context = context

    def resolve(self, name: str) -> Reference:
        """Resolve ``name`` to a Reference.

        Raises:
            ReferenceNotFoundError: From the unprefixed attempt, when nothing matched
        """
        try:
            return self.table.resolve_see_reference(name)
        except ReferenceNotFoundError as first_error:
            for prefix in self.context.prefixes():
                try:
                    ref = self.table.resolve_see_reference(f"{prefix}.{name}")
                except ReferenceNotFoundError:
                    continue
                return replace(ref, query_name=name)
            raise first_error
