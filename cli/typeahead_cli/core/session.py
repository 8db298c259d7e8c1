"""Mutable state of one search session."""

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum

from typeahead_cli.core.items import SuggestionItem


class FetchMode(str, Enum):
    """Kinds of network lookups."""

    PRIMARY = "primary"
    BACKGROUND = "background"
    PAGINATE = "paginate"


@dataclass
class SessionState:
    """State shared by the scheduler, fetch coordinator and paginator.

    ``current_term`` is updated on every keystroke and is the only value
    responses are checked against when they complete.
    """

    current_term: str = ""
    last_committed_term: str = ""
    page: int = 0
    pages_left: int = 0
    user_has_scrolled: bool = False
    display_items: list[SuggestionItem] = field(default_factory=list)
    in_flight: Counter = field(default_factory=Counter)

    def reset_for_term(self, term: str) -> None:
        self.current_term = term
        self.page = 0
        self.user_has_scrolled = False

    def is_loading(self, mode: FetchMode) -> bool:
        return self.in_flight[mode] > 0

    def begin(self, mode: FetchMode) -> None:
        self.in_flight[mode] += 1

    def end(self, mode: FetchMode) -> None:
        self.in_flight[mode] -= 1
        if self.in_flight[mode] <= 0:
            del self.in_flight[mode]
