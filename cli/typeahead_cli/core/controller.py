"""Search-as-you-type controller.

Ties the debounce scheduler, the cache-vs-network decision, the fetch
coordinator and the paginator to a single session. Renderers feed it input
and scroll events and read back ``display_items`` plus the loading flags.
"""

import asyncio
from typing import Callable

import structlog

from typeahead_cli.config import Settings
from typeahead_cli.core.cache import ResultCache
from typeahead_cli.core.debounce import DEFAULT_DELAY, DebounceScheduler
from typeahead_cli.core.decision import (
    filter_items,
    should_augment_in_background,
    should_use_cache,
)
from typeahead_cli.core.fetcher import FetchCoordinator, QueryFunction
from typeahead_cli.core.items import SuggestionItem
from typeahead_cli.core.pagination import PaginationController
from typeahead_cli.core.session import FetchMode, SessionState

logger = structlog.get_logger(__name__)

Listener = Callable[[], None]


class SearchController:
    """Owns one search session and its result cache."""

    def __init__(
        self,
        query: QueryFunction,
        page_size: int = 8,
        debounce_delay: float = DEFAULT_DELAY,
    ) -> None:
        self.state = SessionState()
        self.cache = ResultCache()
        self._listeners: list[Listener] = []

        self.fetcher = FetchCoordinator(
            query,
            self.cache,
            self.state,
            page_size=page_size,
            on_change=self._notify,
        )
        self.scheduler = DebounceScheduler(self.state, self._evaluate, delay=debounce_delay)
        self.paginator = PaginationController(self.state, self.fetcher)

    @classmethod
    def from_settings(cls, query: QueryFunction, settings: Settings) -> "SearchController":
        return cls(
            query,
            page_size=settings.page_size,
            debounce_delay=settings.debounce_seconds,
        )

    # -------------------------------------------------------------------------
    # Renderer surface
    # -------------------------------------------------------------------------

    @property
    def display_items(self) -> list[SuggestionItem]:
        return list(self.state.display_items)

    @property
    def current_term(self) -> str:
        return self.state.current_term

    @property
    def pages_left(self) -> int:
        return self.state.pages_left

    @property
    def is_loading_primary(self) -> bool:
        return self.state.is_loading(FetchMode.PRIMARY)

    @property
    def is_loading_background(self) -> bool:
        return self.state.is_loading(FetchMode.BACKGROUND)

    @property
    def is_loading_more(self) -> bool:
        return self.state.is_loading(FetchMode.PAGINATE)

    def on_query_changed(self, term: str) -> None:
        self.scheduler.submit(term)
        self._notify()

    def on_scroll_reached(self) -> None:
        self.paginator.on_scroll_reached()

    def on_end_reached(self) -> bool:
        return self.paginator.load_more()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener after every state change. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def wait_idle(self) -> None:
        """Wait for the pending evaluation (if any) and every in-flight fetch."""
        while self.scheduler.pending or self.fetcher.in_flight:
            if self.fetcher.in_flight:
                await self.fetcher.wait_idle()
            else:
                await asyncio.sleep(self.scheduler.delay)

    def close(self) -> None:
        self.scheduler.cancel()
        self.fetcher.close()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _evaluate(self, term: str) -> None:
        state = self.state

        if not term.strip():
            self.cache.clear()
            state.display_items = []
            self._notify()
            return

        if should_use_cache(self.cache, term, state.last_committed_term):
            filtered = filter_items(self.cache, term)
            state.display_items = filtered
            self._notify()

            if should_augment_in_background(term, state.last_committed_term):
                logger.debug("Serving from cache, augmenting", term=term, matches=len(filtered))
                self.fetcher.dispatch(term, 0, FetchMode.BACKGROUND)
            elif not filtered:
                logger.debug("No cached matches", term=term)
                self.fetcher.dispatch(term, 0, FetchMode.PRIMARY)
            else:
                logger.debug("Serving from cache", term=term, matches=len(filtered))
        else:
            self.fetcher.dispatch(term, 0, FetchMode.PRIMARY)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener()
            except Exception as e:
                logger.error("Listener failed", error=str(e))
