"""Results list component."""

from textual import events
from textual.widgets import Static, ListItem, ListView
from textual.reactive import reactive
from textual.message import Message
from rich.text import Text

from typeahead_cli.core import SuggestionItem

SKELETON_ROWS = 5


class SuggestionRow(ListItem):
    """Single suggestion."""

    def __init__(self, item: SuggestionItem, index: int) -> None:
        super().__init__()
        self.item = item
        self.index = index

    def compose(self):
        text = Text()
        # Colour swatch stands in for the avatar
        text.append("● ", style=self.item.color or "grey50")
        text.append(self.item.name, style=f"bold {self.item.color}".strip())
        if self.item.secondary_term:
            text.append(f"  {self.item.secondary_term}", style="dim")
        if self.item.match is not None:
            text.append(f"  {self.item.match:g}", style="dim cyan")

        yield Static(text, classes="suggestion-name")


class PlaceholderRow(ListItem):
    """Non-selectable loading row."""

    def __init__(self, label: str, classes: str = "placeholder") -> None:
        super().__init__(disabled=True, classes=classes)
        self.label = label

    def compose(self):
        yield Static(self.label)


class ResultsList(ListView):
    """Suggestions with loading placeholders and scroll-gated paging."""

    items: reactive[list[SuggestionItem]] = reactive([], always_update=True)
    is_loading_primary: reactive[bool] = reactive(False)
    is_loading_background: reactive[bool] = reactive(False)
    is_loading_more: reactive[bool] = reactive(False)

    class Scrolled(Message):
        """Emitted when the user scrolls the list."""

    class EndReached(Message):
        """Emitted when the last suggestion is highlighted."""

    class SuggestionSelected(Message):
        """Emitted when a suggestion is chosen."""

        def __init__(self, item: SuggestionItem) -> None:
            self.item = item
            super().__init__()

    _rebuild_pending = False

    def watch_items(self, items: list[SuggestionItem]) -> None:
        self._schedule_rebuild()

    def watch_is_loading_primary(self, loading: bool) -> None:
        self._schedule_rebuild()

    def watch_is_loading_background(self, loading: bool) -> None:
        self._schedule_rebuild()

    def watch_is_loading_more(self, loading: bool) -> None:
        self._schedule_rebuild()

    def _schedule_rebuild(self) -> None:
        """Collapse the watcher calls of one state change into a single rebuild."""
        if not self._rebuild_pending:
            self._rebuild_pending = True
            self.call_after_refresh(self._rebuild)

    def _rebuild(self) -> None:
        self._rebuild_pending = False
        highlighted = self.highlighted_child
        keep_id = highlighted.item.id if isinstance(highlighted, SuggestionRow) else None

        self.clear()

        if self.is_loading_primary:
            for _ in range(SKELETON_ROWS):
                self.append(PlaceholderRow("░░░░░░░░░░░░░░░░░░░░", classes="skeleton"))
            return

        if self.is_loading_background:
            self.append(PlaceholderRow("⟳ Looking for more matches..."))

        offset = 1 if self.is_loading_background else 0
        for i, item in enumerate(self.items, 1):
            self.append(SuggestionRow(item, i))
            if item.id == keep_id:
                # Keep the cursor on the same suggestion across rebuilds
                self.call_after_refresh(self._restore_index, offset + i - 1)

        if self.is_loading_more:
            self.append(PlaceholderRow("⟳ Loading more..."))

    def _restore_index(self, index: int) -> None:
        if index < len(self):
            self.index = index

    def action_cursor_down(self) -> None:
        self.post_message(self.Scrolled())
        super().action_cursor_down()

    def action_cursor_up(self) -> None:
        self.post_message(self.Scrolled())
        super().action_cursor_up()

    def on_mouse_scroll_down(self, event: events.MouseScrollDown) -> None:
        self.post_message(self.Scrolled())

    def on_mouse_scroll_up(self, event: events.MouseScrollUp) -> None:
        self.post_message(self.Scrolled())

    def on_list_view_highlighted(self, event: ListView.Highlighted) -> None:
        """Report when the last suggestion comes into focus."""
        if isinstance(event.item, SuggestionRow) and event.item.index == len(self.items):
            self.post_message(self.EndReached())

    def on_list_view_selected(self, event: ListView.Selected) -> None:
        if isinstance(event.item, SuggestionRow):
            self.post_message(self.SuggestionSelected(event.item.item))
