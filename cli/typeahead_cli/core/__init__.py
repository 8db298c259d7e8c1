"""Query orchestration for search-as-you-type."""

from typeahead_cli.core.cache import ResultCache
from typeahead_cli.core.controller import SearchController
from typeahead_cli.core.debounce import DebounceScheduler
from typeahead_cli.core.decision import (
    filter_items,
    should_augment_in_background,
    should_use_cache,
)
from typeahead_cli.core.fetcher import FetchCoordinator, QueryFunction
from typeahead_cli.core.items import (
    AutocompleteResponse,
    ParsedName,
    RawItem,
    SuggestionItem,
    parse_name,
)
from typeahead_cli.core.pagination import PaginationController
from typeahead_cli.core.session import FetchMode, SessionState

__all__ = [
    "ResultCache",
    "SearchController",
    "DebounceScheduler",
    "filter_items",
    "should_augment_in_background",
    "should_use_cache",
    "FetchCoordinator",
    "QueryFunction",
    "AutocompleteResponse",
    "ParsedName",
    "RawItem",
    "SuggestionItem",
    "parse_name",
    "PaginationController",
    "FetchMode",
    "SessionState",
]
