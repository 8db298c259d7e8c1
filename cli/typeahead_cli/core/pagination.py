"""Scroll-gated "load more"."""

import structlog

from typeahead_cli.core.fetcher import FetchCoordinator
from typeahead_cli.core.session import FetchMode, SessionState

logger = structlog.get_logger(__name__)


class PaginationController:
    """Fetch the next page when the user has actually scrolled to the end.

    List widgets can report "end reached" on their first layout, before
    anyone scrolls; those reports are ignored until ``on_scroll_reached``
    has been seen for the current term.
    """

    def __init__(self, state: SessionState, fetcher: FetchCoordinator) -> None:
        self.state = state
        self.fetcher = fetcher

    def on_scroll_reached(self) -> None:
        if not self.state.user_has_scrolled:
            self.state.user_has_scrolled = True

    def load_more(self) -> bool:
        """Dispatch the next page if allowed. Returns whether a fetch started."""
        state = self.state
        if (
            state.pages_left <= 0
            or state.is_loading(FetchMode.PAGINATE)
            or not state.user_has_scrolled
            or not state.current_term.strip()
        ):
            return False

        state.page += 1
        logger.debug("Loading more results", term=state.current_term, page=state.page)
        return self.fetcher.dispatch(state.current_term, state.page, FetchMode.PAGINATE) is not None
