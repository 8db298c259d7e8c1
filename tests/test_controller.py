"""End-to-end behaviour of the search controller against a fake service."""

from __future__ import annotations

import asyncio

import pytest
from structlog.testing import capture_logs

from conftest import raw
from typeahead_cli.config import Settings
from typeahead_cli.core import SearchController

DELAY = 0.01


def _names(controller: SearchController) -> list[str]:
    return [item.name for item in controller.display_items]


async def _type(controller: SearchController, term: str) -> None:
    """Change the term and let the debounced evaluation run."""
    controller.on_query_changed(term)
    await asyncio.sleep(DELAY * 3)


@pytest.fixture
def controller(service):
    controller = SearchController(service, page_size=8, debounce_delay=DELAY)
    yield controller
    controller.close()


async def _commit_mus(controller, service, pages_left: int = 0) -> None:
    service.respond("mus", [raw(1, "Music"), raw(2, "Museum")], pages_left=pages_left)
    await _type(controller, "mus")
    await controller.wait_idle()


@pytest.mark.asyncio
async def test_first_term_fetches_from_network(controller, service):
    await _commit_mus(controller, service)

    assert service.calls == [("mus", 8, 0)]
    assert _names(controller) == ["Music", "Museum"]
    assert controller.state.last_committed_term == "mus"


@pytest.mark.asyncio
async def test_rapid_typing_sends_one_request(controller, service):
    for term in ["m", "mu", "mus"]:
        controller.on_query_changed(term)
    await controller.wait_idle()

    assert service.calls == [("mus", 8, 0)]


@pytest.mark.asyncio
async def test_narrowing_serves_cache_and_augments_in_background(controller, service):
    await _commit_mus(controller, service)
    gate = service.hold("music")
    service.respond("music", [raw(1, "Music"), raw(3, "Musical [Theatre]")])

    await _type(controller, "music")

    # Cached match is shown while the background request is still open
    assert _names(controller) == ["Music"]
    assert controller.is_loading_background
    assert not controller.is_loading_primary
    assert service.terms == ["mus", "music"]

    gate.set()
    await controller.wait_idle()

    assert _names(controller) == ["Music", "Musical"]
    assert not controller.is_loading_background
    assert controller.state.last_committed_term == "music"


@pytest.mark.asyncio
async def test_widening_is_served_from_cache_without_request(controller, service):
    await _commit_mus(controller, service)

    await _type(controller, "mu")
    await controller.wait_idle()

    assert service.terms == ["mus"]
    assert _names(controller) == ["Music", "Museum"]


@pytest.mark.asyncio
async def test_related_term_without_cached_matches_fetches(controller, service):
    service.respond("mus", [raw(5, "Rock [Genre]")])
    await _type(controller, "mus")
    await controller.wait_idle()
    service.respond("mu", [raw(6, "Mural")])

    await _type(controller, "mu")
    await controller.wait_idle()

    assert service.terms == ["mus", "mu"]
    assert _names(controller) == ["Mural"]


@pytest.mark.asyncio
async def test_unrelated_term_clears_and_fetches(controller, service):
    await _commit_mus(controller, service)
    gate = service.hold("zzz")

    await _type(controller, "zzz")

    assert controller.is_loading_primary
    assert controller.display_items == []
    assert controller.cache.snapshot() == []

    gate.set()
    await controller.wait_idle()
    assert not controller.is_loading_primary


@pytest.mark.asyncio
async def test_primary_failure_empties_results(controller, service):
    service.fail("art")

    with capture_logs() as logs:
        await _type(controller, "art")
        await controller.wait_idle()

    assert controller.display_items == []
    assert controller.cache.snapshot() == []
    assert not controller.is_loading_primary
    assert any(log["event"] == "Autocomplete request failed" for log in logs)


@pytest.mark.asyncio
async def test_blank_term_clears_without_request(controller, service):
    await _commit_mus(controller, service)

    await _type(controller, "   ")

    assert controller.display_items == []
    assert controller.cache.snapshot() == []
    assert service.terms == ["mus"]


@pytest.mark.asyncio
async def test_response_for_superseded_term_is_ignored(controller, service):
    gate = service.hold("art")
    service.respond("art", [raw(1, "Art")])
    service.respond("zen", [raw(2, "Zen")])

    await _type(controller, "art")
    await _type(controller, "zen")
    gate.set()
    await controller.wait_idle()

    assert _names(controller) == ["Zen"]
    assert controller.state.last_committed_term == "zen"


@pytest.mark.asyncio
async def test_load_more_requires_user_scroll(controller, service):
    await _commit_mus(controller, service, pages_left=2)

    assert controller.on_end_reached() is False
    assert service.terms == ["mus"]


@pytest.mark.asyncio
async def test_load_more_fetches_next_page_after_scroll(controller, service):
    await _commit_mus(controller, service, pages_left=2)
    service.respond("mus", [raw(3, "Mustang")], pages_left=1, page=1)

    controller.on_scroll_reached()
    assert controller.on_end_reached() is True
    assert controller.is_loading_more
    await controller.wait_idle()

    assert service.calls[-1] == ("mus", 8, 1)
    assert controller.state.page == 1
    assert _names(controller) == ["Music", "Museum", "Mustang"]
    assert controller.pages_left == 1


@pytest.mark.asyncio
async def test_load_more_is_not_repeated_while_loading(controller, service):
    await _commit_mus(controller, service, pages_left=3)
    gate = service.hold("mus", page=1)

    controller.on_scroll_reached()
    assert controller.on_end_reached() is True
    assert controller.on_end_reached() is False

    gate.set()
    await controller.wait_idle()
    assert [page for _, _, page in service.calls] == [0, 1]


@pytest.mark.asyncio
async def test_load_more_stops_when_no_pages_left(controller, service):
    await _commit_mus(controller, service, pages_left=0)

    controller.on_scroll_reached()

    assert controller.on_end_reached() is False


@pytest.mark.asyncio
async def test_new_term_resets_scroll_gate_and_page(controller, service):
    await _commit_mus(controller, service, pages_left=2)
    controller.on_scroll_reached()
    controller.state.page = 4

    controller.on_query_changed("muse")

    assert controller.state.user_has_scrolled is False
    assert controller.state.page == 0
    assert controller.current_term == "muse"
    await controller.wait_idle()


@pytest.mark.asyncio
async def test_listeners_are_notified_and_failures_contained(controller, service):
    service.respond("mus", [raw(1, "Music")])
    calls: list[int] = []

    def broken() -> None:
        raise RuntimeError("render failed")

    unsubscribe = controller.subscribe(lambda: calls.append(len(controller.display_items)))
    controller.subscribe(broken)

    with capture_logs() as logs:
        await _type(controller, "mus")
        await controller.wait_idle()

    assert calls[-1] == 1
    assert any(log["event"] == "Listener failed" for log in logs)

    unsubscribe()
    count = len(calls)
    controller.on_query_changed("")
    assert len(calls) == count


@pytest.mark.asyncio
async def test_from_settings_uses_configured_values(service):
    settings = Settings(page_size=20, debounce_ms=50)

    controller = SearchController.from_settings(service, settings)

    assert controller.fetcher.page_size == 20
    assert controller.scheduler.delay == pytest.approx(0.05)
