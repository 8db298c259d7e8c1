"""Shared fixtures: a scriptable stand-in for the autocomplete service."""

from __future__ import annotations

import asyncio

import pytest

from typeahead_cli.core import AutocompleteResponse, RawItem


def raw(item_id, name, **kwargs) -> RawItem:
    kwargs.setdefault("color", "#336699")
    kwargs.setdefault("type", "interest")
    return RawItem(id=item_id, name=name, **kwargs)


class FakeService:
    """Async query function with canned responses, failures and gates.

    A gate holds a request open until the test sets it, which lets tests
    finish requests in any order.
    """

    def __init__(self) -> None:
        self.calls: list[tuple[str, int, int]] = []
        self._responses: dict[tuple[str, int], AutocompleteResponse] = {}
        self._errors: dict[tuple[str, int], Exception] = {}
        self._gates: dict[tuple[str, int], asyncio.Event] = {}

    def respond(self, term: str, items: list[RawItem], pages_left: int = 0, page: int = 0) -> None:
        self._responses[(term, page)] = AutocompleteResponse(items=items, pages_left=pages_left)

    def fail(self, term: str, error: Exception | None = None, page: int = 0) -> None:
        self._errors[(term, page)] = error or ConnectionError("connection reset")

    def hold(self, term: str, page: int = 0) -> asyncio.Event:
        gate = asyncio.Event()
        self._gates[(term, page)] = gate
        return gate

    @property
    def terms(self) -> list[str]:
        return [term for term, _, _ in self.calls]

    async def __call__(self, term: str, limit: int, page: int) -> AutocompleteResponse:
        self.calls.append((term, limit, page))
        gate = self._gates.get((term, page))
        if gate is not None:
            await gate.wait()
        if (term, page) in self._errors:
            raise self._errors[(term, page)]
        return self._responses.get((term, page), AutocompleteResponse(items=[]))


@pytest.fixture
def service() -> FakeService:
    return FakeService()
