"""Accumulated results for one search session."""

from typing import Hashable, Iterable, Iterator

from typeahead_cli.core.items import SuggestionItem


class ResultCache:
    """Insertion-ordered, id-unique store of every item fetched so far."""

    def __init__(self, items: Iterable[SuggestionItem] = ()) -> None:
        self._items: dict[Hashable, SuggestionItem] = {}
        self.append_unique(items)

    def replace_all(self, items: Iterable[SuggestionItem]) -> None:
        """Discard current contents and install items in the given order."""
        self._items = {}
        self.append_unique(items)

    def append_unique(self, items: Iterable[SuggestionItem]) -> list[SuggestionItem]:
        """Append items whose id is not cached yet.

        Returns the items that were actually added, in arrival order.
        """
        added = []
        for item in items:
            if item.id in self._items:
                continue
            self._items[item.id] = item
            added.append(item)
        return added

    def snapshot(self) -> list[SuggestionItem]:
        return list(self._items.values())

    def clear(self) -> None:
        self._items.clear()

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __iter__(self) -> Iterator[SuggestionItem]:
        return iter(self.snapshot())

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)
