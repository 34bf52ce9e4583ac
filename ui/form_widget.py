"""Form for booking a new time entry."""
from rich.markup import escape
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Input, Label, Static

from business_logic.form_state import FIELD_NAMES, FormState
from config import Config

FIELD_LABELS = ("Date:", "Duration:", "Description:")
FIELD_PLACEHOLDERS = ("YYYY-MM-DD", "e.g. 1.5 or 1:30", "Description")


class FieldFocused(Message):
    """Posted when one of the form inputs receives focus."""

    def __init__(self, index: int) -> None:
        super().__init__()
        self.index = index


class FormInput(Input):
    """Single line input that knows its position in the form."""

    def __init__(self, index: int, **kwargs):
        super().__init__(
            placeholder=FIELD_PLACEHOLDERS[index],
            id=f"field_{FIELD_NAMES[index]}",
            **kwargs,
        )
        self.index = index

    def on_focus(self) -> None:
        self.post_message(FieldFocused(self.index))


class TimeEntryForm(Vertical):
    """Task title, the date/duration/description inputs and a hint line."""

    DEFAULT_CSS = """
    TimeEntryForm .form_row {
        height: 1;
        margin-bottom: 1;
    }

    TimeEntryForm Label {
        width: 14;
    }

    TimeEntryForm FormInput {
        width: 1fr;
        height: 1;
        border: none;
        padding: 0 1;
    }

    TimeEntryForm #form_task {
        margin-bottom: 1;
    }
    """

    def __init__(self, config: Config, **kwargs):
        super().__init__(**kwargs)
        self.config = config

    def compose(self) -> ComposeResult:
        yield Static(id="form_task")
        for index, label in enumerate(FIELD_LABELS):
            with Horizontal(classes="form_row"):
                yield Label(label)
                yield FormInput(index)
        yield Static(
            "[dim]Enter submit • ↑/↓ field • Esc back[/dim]",
            id="form_hint",
        )

    def field_input(self, index: int) -> FormInput:
        return self.query_one(f"#field_{FIELD_NAMES[index]}", FormInput)

    def sync(self, form: FormState) -> None:
        """Copy the form state into the widgets without disturbing typing."""
        if form.task_title:
            title = f"Task: [bold {self.config.color_primary}]{escape(form.task_title)}[/]"
        else:
            title = "[dim]No task selected[/dim]"
        self.query_one("#form_task", Static).update(title)

        for index in range(len(FIELD_NAMES)):
            field = self.field_input(index)
            value = form.get_field(index)
            if field.value != value:
                field.value = value
