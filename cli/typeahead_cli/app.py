"""Typeahead CLI - Main Textual Application."""

import logging
from pathlib import Path

from textual.app import App, ComposeResult
from textual.logging import TextualHandler
from textual.widgets import Header, Footer
from textual.containers import Container, Vertical
from textual.binding import Binding

from typeahead_cli.api import ApiClient
from typeahead_cli.config import Settings, get_settings
from typeahead_cli.core import SearchController
from typeahead_cli.logging import configure_logging
from typeahead_cli.components import (
    SearchBar,
    ResultsList,
    StatusBar,
)


class TypeaheadApp(App):
    """Search-as-you-type interest picker."""

    TITLE = "Typeahead"
    SUB_TITLE = "Search for interests"
    CSS_PATH = Path(__file__).parent / "styles" / "app.tcss"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("escape", "clear", "Clear", show=True),
        Binding("/", "focus_search", "Search", show=True),
    ]

    def __init__(self, settings: Settings | None = None):
        super().__init__()
        self.settings = settings or get_settings()
        self.api = ApiClient.from_settings(self.settings)
        self.controller = SearchController.from_settings(self.api.query, self.settings)

    def compose(self) -> ComposeResult:
        yield Header()

        with Container(id="main"):
            with Vertical(id="search-section"):
                yield SearchBar(id="search-bar")

            with Vertical(id="results-section"):
                yield ResultsList(id="results-list")

        yield StatusBar(id="status-bar")
        yield Footer()

    async def on_mount(self) -> None:
        """Initialize on mount."""
        await self.api.start()
        self.controller.subscribe(self._render_state)
        self.query_one("#search-bar", SearchBar).focus()

    async def on_unmount(self) -> None:
        self.controller.close()
        await self.api.close()

    def _render_state(self) -> None:
        """Push controller state into the widgets."""
        controller = self.controller

        results_list = self.query_one("#results-list", ResultsList)
        results_list.is_loading_primary = controller.is_loading_primary
        results_list.is_loading_background = controller.is_loading_background
        results_list.is_loading_more = controller.is_loading_more
        results_list.items = controller.display_items

        status_bar = self.query_one("#status-bar", StatusBar)
        status_bar.count = len(controller.display_items)
        status_bar.pages_left = controller.pages_left
        status_bar.is_loading_primary = controller.is_loading_primary
        status_bar.is_loading_background = controller.is_loading_background
        status_bar.is_loading_more = controller.is_loading_more

    def on_search_bar_query_changed(self, event: SearchBar.QueryChanged) -> None:
        self.controller.on_query_changed(event.term)

    def on_results_list_scrolled(self, event: ResultsList.Scrolled) -> None:
        self.controller.on_scroll_reached()

    def on_results_list_end_reached(self, event: ResultsList.EndReached) -> None:
        self.controller.on_end_reached()

    def on_results_list_suggestion_selected(
        self, event: ResultsList.SuggestionSelected
    ) -> None:
        status_bar = self.query_one("#status-bar", StatusBar)
        status_bar.set_message(f"Selected {event.item.label}")

    def action_focus_search(self) -> None:
        """Focus the search bar."""
        self.query_one("#search-bar", SearchBar).focus()

    def action_clear(self) -> None:
        """Clear the search."""
        search_bar = self.query_one("#search-bar", SearchBar)
        search_bar.value = ""
        search_bar.focus()


def run_app(settings: Settings | None = None):
    """Run the Typeahead TUI."""
    settings = settings or get_settings()
    if settings.log_file:
        handler = logging.FileHandler(settings.log_file)
    else:
        handler = TextualHandler()
    configure_logging(settings.log_level, handler=handler)

    app = TypeaheadApp(settings)
    app.run()


if __name__ == "__main__":
    run_app()
