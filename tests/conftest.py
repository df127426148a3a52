"""Shared fixtures for refmark tests."""

from __future__ import annotations

import pytest

from refmark.references import DictReferenceTable, LookupContext, Reference


class CountingTable(DictReferenceTable):
    """DictReferenceTable that records every name it was asked for."""

    __slots__ = ("queries",)

    def __init__(self, entries=None) -> None:
        super().__init__(entries)
        self.queries: list[str] = []

    def resolve_see_reference(self, name: str) -> Reference:
        self.queries.append(name)
        return super().resolve_see_reference(name)


class RecordingSink:
    """WarningSink that keeps messages for assertions."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def warn(self, message: str) -> None:
        self.messages.append(message)


class UpperRenderer:
    """Renderer stand-in: wraps text in one paragraph like real renderers."""

    name = "upper"

    def __init__(self) -> None:
        self.calls: list[str] = []

    def render(self, text: str) -> str:
        self.calls.append(text)
        return f"<p>{text}</p>\n"


@pytest.fixture
def table() -> CountingTable:
    """Reference table of a small package."""
    return CountingTable(
        {
            "Foo.bar": ("foo.html#bar", "Foo.bar"),
            "pkg.Foo": "pkg.html#Foo",
            "pkg.util.split_path": ("util.html#split_path", "split_path"),
            "list": "list.html",
            "local.only": "local.html#only",
        }
    )


@pytest.fixture
def context() -> LookupContext:
    return LookupContext()


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def renderer() -> UpperRenderer:
    return UpperRenderer()
