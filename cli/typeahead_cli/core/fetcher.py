"""Outbound autocomplete requests and merging of their results."""

import asyncio
from typing import Awaitable, Callable, Optional

import structlog

from typeahead_cli.core.cache import ResultCache
from typeahead_cli.core.items import AutocompleteResponse, SuggestionItem
from typeahead_cli.core.session import FetchMode, SessionState

logger = structlog.get_logger(__name__)

QueryFunction = Callable[[str, int, int], Awaitable[AutocompleteResponse]]


class FetchCoordinator:
    """Runs primary, background and paginate lookups against a query function.

    Requests are never aborted. A response is applied only if its term is
    still the session's current term when it arrives; otherwise it is
    dropped whole.
    """

    def __init__(
        self,
        query: QueryFunction,
        cache: ResultCache,
        state: SessionState,
        page_size: int = 8,
        on_change: Optional[Callable[[], None]] = None,
    ) -> None:
        self._query = query
        self.cache = cache
        self.state = state
        self.page_size = page_size
        self._on_change = on_change
        self._tasks: set[asyncio.Task] = set()

    @property
    def in_flight(self) -> int:
        return len(self._tasks)

    def dispatch(
        self,
        term: str,
        page: int = 0,
        mode: FetchMode = FetchMode.PRIMARY,
    ) -> Optional[asyncio.Task]:
        """Start a lookup and return its task.

        Loading flags and the optimistic reset of a primary fetch are applied
        before this returns. A blank term makes no request and returns None.
        """
        if mode is FetchMode.PAGINATE and page < 1:
            raise ValueError("paginate fetches start at page 1")

        if not term.strip():
            self.state.display_items = []
            if mode is FetchMode.PRIMARY:
                self.cache.clear()
            self._notify()
            return None

        self.state.begin(mode)
        if mode is FetchMode.PRIMARY:
            self.cache.clear()
            self.state.display_items = []
        self._notify()

        logger.debug("Dispatching autocomplete request", term=term, page=page, mode=mode.value)
        task = asyncio.create_task(self._run(term, page, mode))
        self._tasks.add(task)
        task.add_done_callback(lambda t: self._finished(t, mode))
        return task

    async def fetch(
        self,
        term: str,
        page: int = 0,
        mode: FetchMode = FetchMode.PRIMARY,
    ) -> None:
        task = self.dispatch(term, page, mode)
        if task is not None:
            await task

    async def wait_idle(self) -> None:
        """Wait until no lookup is in flight."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        for task in list(self._tasks):
            task.cancel()

    async def _run(self, term: str, page: int, mode: FetchMode) -> None:
        try:
            response = await self._query(term, self.page_size, page)
            self._apply(term, page, mode, response)
        except Exception as e:
            self._fail(term, page, mode, e)

    def _apply(
        self,
        term: str,
        page: int,
        mode: FetchMode,
        response: AutocompleteResponse,
    ) -> None:
        if term != self.state.current_term:
            logger.debug(
                "Discarding stale response",
                term=term,
                current_term=self.state.current_term,
                mode=mode.value,
            )
            return

        items = [SuggestionItem.from_raw(raw) for raw in response.items]

        if mode is FetchMode.BACKGROUND:
            added = self.cache.append_unique(items)
            if added:
                self.state.display_items = self.state.display_items + added
        elif mode is FetchMode.PAGINATE:
            self.cache.append_unique(items)
            self.state.display_items = self.state.display_items + items
        else:
            self.cache.replace_all(items)
            self.state.display_items = self.cache.snapshot()

        self.state.pages_left = response.pages_left or 0
        self.state.last_committed_term = term

        logger.debug(
            "Applied autocomplete response",
            term=term,
            page=page,
            mode=mode.value,
            received=len(items),
            cached=len(self.cache),
            pages_left=self.state.pages_left,
        )

    def _fail(self, term: str, page: int, mode: FetchMode, error: Exception) -> None:
        logger.error(
            "Autocomplete request failed",
            term=term,
            page=page,
            mode=mode.value,
            error=str(error),
            error_type=type(error).__name__,
            exc_info=error,
        )
        if mode is FetchMode.PRIMARY and term == self.state.current_term:
            self.cache.clear()
            self.state.display_items = []

    def _finished(self, task: asyncio.Task, mode: FetchMode) -> None:
        self._tasks.discard(task)
        self.state.end(mode)
        self._notify()

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change()
