"""Help screen widget showing keyboard shortcuts."""
from textual import events
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import VerticalScroll
from textual.screen import Screen
from textual.widgets import Static


class HelpScreen(Screen):
    """Modal screen showing keyboard shortcuts."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close", show=False),
    ]

    CSS = """
    HelpScreen {
        align: center middle;
    }

    #help_container {
        width: 72;
        height: auto;
        max-height: 90%;
        border: round #5f5fff;
        padding: 1 2;
    }

    #help_title {
        text-align: center;
        text-style: bold;
        margin-bottom: 1;
    }

    #help_content {
        height: auto;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the help screen."""
        with VerticalScroll(id="help_container"):
            yield Static("Keyboard Shortcuts", id="help_title")
            yield Static(self.get_help_text(), id="help_content")

    def get_help_text(self) -> str:
        """Get formatted help text."""
        return """[bold]Panes[/bold]
Tab           Next pane (tasks → form → entries)
←             Back to the task list
Esc           Cancel delete, back to the task list, or quit
Mouse click   Focus the pane under the pointer

[bold]Task List[/bold]
↑/↓ or k/j    Move between tasks (project headers are skipped)
→             Book on the selected task (remembered for next start)

[bold]New Time Entry[/bold]
↑/↓           Previous/next field
Enter         Submit the entry
              • Duration: decimal hours (1.5) or H:MM (1:30)
              • Date defaults to today (YYYY-MM-DD)

[bold]Time Entries[/bold]
↑/↓ or k/j    Select an entry
d             Delete the selected entry
              • Press d or Enter again to confirm, Esc to cancel

[bold]General[/bold]
?             Show this help
Entries reload every 10 seconds.

[dim]Press Esc to close this help[/dim]"""

    def on_key(self, event: events.Key) -> None:
        """Handle key events - block all except Esc and arrow keys."""
        if event.key not in ("escape", "up", "down"):
            event.prevent_default()
            event.stop()

    def action_dismiss(self) -> None:
        """Close the help screen."""
        self.dismiss()
