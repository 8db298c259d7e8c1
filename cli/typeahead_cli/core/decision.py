"""Client-side filtering and the cache-vs-network decision."""

from typing import Iterable

from typeahead_cli.core.cache import ResultCache
from typeahead_cli.core.items import SuggestionItem


def filter_items(items: Iterable[SuggestionItem], term: str) -> list[SuggestionItem]:
    """Return the items whose name or secondary term contains term.

    Matching is a case-insensitive substring test. Order is preserved and a
    blank term matches nothing.
    """
    if not term.strip():
        return []

    needle = term.lower()
    return [
        item
        for item in items
        if needle in item.name.lower()
        or (item.secondary_term is not None and needle in item.secondary_term.lower())
    ]


def should_use_cache(cache: ResultCache, term: str, last_committed_term: str) -> bool:
    """Decide whether cached results can serve term.

    Terms on the same typing path as the last fetched term (one a prefix of
    the other) are served from cache; anything else needs a fresh fetch.
    """
    if not cache:
        return False

    if not term.strip():
        return True

    if not last_committed_term:
        return False

    current = term.lower()
    committed = last_committed_term.lower()
    return current.startswith(committed) or committed.startswith(current)


def should_augment_in_background(term: str, last_committed_term: str) -> bool:
    """True when term narrows the last fetched term and more matches may exist."""
    return len(term) > len(last_committed_term) and term.lower().startswith(
        last_committed_term.lower()
    )
