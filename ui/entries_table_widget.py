"""Table of this week's time entries grouped by day."""
from typing import Optional, Tuple

from rich.markup import escape
from textual.widgets import Static

from business_logic.list_views import EntriesTableView, TableLine
from config import Config
from models import TimeEntry
from utils.time_utils import format_entry_date, format_hours

HOURS_WIDTH = 8
DEFAULT_WIDTH = 80
# Pane border and padding
FRAME_WIDTH = 4


def fit(text: str, width: int) -> str:
    """Cut ``text`` to ``width`` characters (with an ellipsis) and pad it."""
    if width <= 0:
        return ""
    if len(text) > width:
        text = text[:width - 1] + "…"
    return text.ljust(width)


class EntriesTableWidget(Static):
    """Widget showing entries per day with a daily total."""

    def __init__(self, view: EntriesTableView, config: Config, **kwargs):
        super().__init__(**kwargs)
        self.view = view
        self.config = config
        self.focused_pane = False
        self.selected_entry: Optional[TimeEntry] = None
        self.confirming_delete = False

    def column_widths(self) -> Tuple[int, int]:
        """Widths of the description and task columns for the current size."""
        available = (self.view.width or DEFAULT_WIDTH) - FRAME_WIDTH
        rest = max(20, available - HOURS_WIDTH - 2)
        description_width = rest // 2
        return description_width, rest - description_width

    def format_columns(self, description: str, hours: str, task: str) -> str:
        description_width, task_width = self.column_widths()
        return (
            f"{escape(fit(description, description_width))} "
            f"{hours.rjust(HOURS_WIDTH)} "
            f"{escape(fit(task, task_width))}"
        ).rstrip()

    def format_line(self, line: TableLine) -> str:
        if line.kind == "date":
            return f"[bold {self.config.color_header}]{escape(format_entry_date(line.date))}[/]"

        if line.kind == "total":
            text = self.format_columns("Total:", line.total, "")
            return f"[bold {self.config.color_total}]{text}[/]"

        if line.kind == "entry":
            entry = line.entry
            text = self.format_columns(entry.description, format_hours(entry.hours), entry.task_name)
            if line.entry_index != self.view.cursor:
                return text
            if self.confirming_delete and entry == self.selected_entry:
                return f"[bold {self.config.color_focused} on {self.config.color_error}]{text}[/]"
            if self.focused_pane:
                return f"[{self.config.color_focused} on {self.config.color_primary}]{text}[/]"
            return text

        return ""

    def render(self) -> str:
        """Render the column header and the visible table lines."""
        if not self.view.entries:
            return "[dim]No entries for this week.[/dim]"

        header = f"[bold]{self.format_columns('Entry', 'Hours', 'Task')}[/bold]"
        lines = [header]
        lines.extend(self.format_line(line) for line in self.view.visible_lines())
        return "\n".join(lines)
