"""CLI components."""

from .search_bar import SearchBar
from .results_list import ResultsList, SuggestionRow, PlaceholderRow
from .status_bar import StatusBar

__all__ = [
    "SearchBar",
    "ResultsList",
    "SuggestionRow",
    "PlaceholderRow",
    "StatusBar",
]
