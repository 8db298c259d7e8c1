"""Status bar component."""

from textual.widgets import Static
from textual.reactive import reactive


class StatusBar(Static):
    """Status bar showing suggestion count and loading state."""

    count: reactive[int] = reactive(0)
    pages_left: reactive[int] = reactive(0)
    is_loading_primary: reactive[bool] = reactive(False)
    is_loading_background: reactive[bool] = reactive(False)
    is_loading_more: reactive[bool] = reactive(False)
    message: reactive[str] = reactive("")

    def render(self) -> str:
        parts = [f"[dim]{self.count:,} suggestions[/]"]

        if self.pages_left:
            parts.append(f"[dim]{self.pages_left} more pages[/]")

        # Loading state
        if self.is_loading_primary:
            parts.append("[yellow]⟳ Searching...[/]")
        if self.is_loading_background:
            parts.append("[yellow]⟳ Refining...[/]")
        if self.is_loading_more:
            parts.append("[yellow]⟳ Loading more...[/]")

        # Custom message
        if self.message:
            parts.append(f"[cyan]{self.message}[/]")

        return " │ ".join(parts)

    def set_message(self, message: str, duration: float = 3.0) -> None:
        """Show a temporary message."""
        self.message = message
        if duration > 0:
            self.set_timer(duration, lambda: self._clear_message())

    def _clear_message(self) -> None:
        self.message = ""
