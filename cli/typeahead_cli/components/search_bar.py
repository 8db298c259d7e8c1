"""Search bar component."""

from textual.widgets import Input
from textual.message import Message


class SearchBar(Input):
    """Search input that reports every keystroke.

    Debouncing is done by the search controller, so this widget forwards
    raw changes, including the blank term when the input is cleared.
    """

    class QueryChanged(Message):
        """Emitted whenever the search text changes."""

        def __init__(self, term: str) -> None:
            self.term = term
            super().__init__()

    def __init__(
        self,
        placeholder: str = "Search for interests...",
        id: str | None = None,
    ) -> None:
        super().__init__(placeholder=placeholder, id=id)

    def on_input_changed(self, event: Input.Changed) -> None:
        """Forward input changes."""
        if event.input is not self:
            return
        event.stop()
        self.post_message(self.QueryChanged(event.value))

    def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle Enter key - hand focus to the results."""
        event.stop()
        self.screen.focus_next()
