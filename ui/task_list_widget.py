"""Task list widget for picking the task to book on."""
from rich.markup import escape
from textual.widgets import Static

from business_logic.list_views import TaskListView
from config import Config
from models import ProjectHeader, TaskRow


class TaskListWidget(Static):
    """Widget to display projects and their tasks."""

    def __init__(self, view: TaskListView, config: Config, **kwargs):
        super().__init__(**kwargs)
        self.view = view
        self.config = config
        self.focused_pane = True

    def format_header(self, header: ProjectHeader) -> str:
        """Project name, with the customer in parentheses when known."""
        line = f"[bold {self.config.color_primary}]{escape(header.name)}[/]"
        if header.customer_name:
            line += f" [dim]({escape(header.customer_name)})[/dim]"
        return line

    def format_row(self, row: TaskRow, selected: bool) -> str:
        """Task line like " > [2] Development"."""
        marker = ">" if selected else " "
        text = f" {marker} \\[{row.position}] {escape(row.name)}"
        if selected and self.focused_pane:
            return f"[bold {self.config.color_focused} on {self.config.color_primary}]{text}[/]"
        if selected:
            return f"[bold]{text}[/bold]"
        return text

    def render(self) -> str:
        """Render the visible part of the task list."""
        if not self.view.items:
            return "[dim]No assigned projects with tasks.[/dim]"

        lines = []
        for index, item in self.view.visible_items():
            if not item.selectable:
                lines.append(self.format_header(item))
            else:
                lines.append(self.format_row(item, index == self.view.cursor))
        return "\n".join(lines)
