"""Custom UI widgets for the time entry client."""
from rich.markup import escape
from textual.widgets import Static

from config import Config
from utils.time_utils import format_hours

KEY_HINTS = (
    "[bold]Tab[/bold] [dim]pane •[/dim] [bold]→[/bold] [dim]book •[/dim] "
    "[bold]d[/bold] [dim]delete •[/dim] [bold]?[/bold] [dim]help •[/dim] "
    "[bold]Esc[/bold] [dim]back/quit[/dim]"
)


def status_text(controller, config: Config) -> str:
    """
    Status line for the current controller state.

    A transient message wins over the delete confirmation prompt, which wins
    over the last update time and key hints.
    """
    if controller.error_message:
        return f"[bold {config.color_error}]Error: {escape(controller.error_message)}[/]"

    if controller.success_message:
        return f"[bold {config.color_success}]{escape(controller.success_message)}[/]"

    entry = controller.selected_entry
    if controller.confirming_delete and entry is not None:
        prompt = (
            f'Delete "{escape(entry.description)}" '
            f"({format_hours(entry.hours)}h on {escape(entry.date)})? "
            "Press d or Enter to confirm, Esc to cancel"
        )
        return f"[bold {config.color_error}]{prompt}[/]"

    if controller.last_update is not None:
        stamp = controller.last_update.strftime("%H:%M:%S")
        return f"[{config.color_dim}]Last update: {stamp}[/]  {KEY_HINTS}"
    return KEY_HINTS


class StatusBar(Static):
    """One line status bar docked at the bottom of the screen."""

    DEFAULT_CSS = """
    StatusBar {
        background: transparent;
        dock: bottom;
        height: 1;
        padding: 0 1;
    }
    """

    def __init__(self, config: Config, **kwargs):
        super().__init__(**kwargs)
        self.config = config

    def show(self, controller) -> None:
        self.update(status_text(controller, self.config))
