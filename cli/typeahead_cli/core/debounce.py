"""Keystroke debouncing."""

import asyncio
from typing import Callable, Optional

import structlog

from typeahead_cli.core.session import SessionState

logger = structlog.get_logger(__name__)

DEFAULT_DELAY = 0.3


class DebounceScheduler:
    """Coalesce rapid term changes into a single evaluation.

    Session bookkeeping happens immediately on every change; the evaluation
    runs once the input has been quiet for ``delay`` seconds, and only for
    the latest term.
    """

    def __init__(
        self,
        state: SessionState,
        evaluate: Callable[[str], None],
        delay: float = DEFAULT_DELAY,
    ) -> None:
        self.state = state
        self.delay = delay
        self._evaluate = evaluate
        self._handle: Optional[asyncio.TimerHandle] = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def submit(self, term: str) -> None:
        self.state.reset_for_term(term)
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, term)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _fire(self, term: str) -> None:
        self._handle = None
        logger.debug("Evaluating term", term=term)
        self._evaluate(term)
