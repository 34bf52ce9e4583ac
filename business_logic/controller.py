"""Interactive state of the time entry client.

The controller owns everything the screen shows: which pane has focus, the
form, the task list and entries table cursors, a pending delete confirmation
and the transient status message. Input events come in through
``handle_key``, ``handle_click`` and ``handle_resize``; periodic reloads and
message expiry come from timers on the same event loop, so every transition
runs to completion before the next event is handled.

It knows nothing about Textual. The render layer reads its attributes.
"""
import logging
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Callable, List, Optional

from business_logic.form_state import FormState
from business_logic.list_views import EntriesTableView, TaskListView
from business_logic.scheduler import OneShotTimer, RepeatingTask, Scheduler
from business_logic.view_models import map_projects_to_items
from config import Config
from models import LastTask, Project, TimeEntry
from moco_client import ApiError
from preferences import LastTaskStore, PreferenceError
from utils.time_utils import DurationError, parse_duration

logger = logging.getLogger(__name__)

# Lines around the list and table that are not rows: pane border, status bar
# and, for the table, the column header
LIST_CHROME = 3
TABLE_CHROME = 4


class Pane(Enum):
    TASK_LIST = "task_list"
    FORM = "form"
    TIME_ENTRIES = "time_entries"


# Tab order
PANE_ORDER = (Pane.TASK_LIST, Pane.FORM, Pane.TIME_ENTRIES)


class MessageKind(Enum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class StatusMessage:
    kind: MessageKind
    text: str


class TimeEntryController:
    """
    State machine behind the time entry screen.

    Args:
        config: Application settings (intervals, layout)
        gateway: Backend with fetch_time_entries, create_time_entry and
            delete_time_entry (normally a MocoClient)
        preferences: Store for the last used task
        projects: Projects fetched at startup
        scheduler: Provides set_interval/set_timer (normally the Textual App)
        today: Returns the current day, for the form default and reloads
        clock: Returns the current time, for the last update stamp
    """

    def __init__(self, config: Config, gateway, preferences: LastTaskStore,
                 projects: List[Project], scheduler: Scheduler,
                 today: Callable[[], date] = date.today,
                 clock: Callable[[], datetime] = datetime.now):
        self.config = config
        self.gateway = gateway
        self.preferences = preferences
        self._today = today
        self._clock = clock

        self.task_list = TaskListView(map_projects_to_items(projects))
        self.entries_table = EntriesTableView()
        self.form = FormState(today)

        self.focused_pane = Pane.TASK_LIST
        self.project_id: Optional[int] = None
        self.task_id: Optional[int] = None
        self.entries: List[TimeEntry] = []
        self.selected_entry: Optional[TimeEntry] = None
        self.confirming_delete = False
        self.message: Optional[StatusMessage] = None
        self.last_update: Optional[datetime] = None
        self.width = 0
        self.height = 0
        self.quit_requested = False

        # Called after timer driven changes so the screen can redraw
        self.on_change: Optional[Callable[[], None]] = None

        self._refresh_task = RepeatingTask(scheduler, config.refresh_interval, self._on_refresh_tick)
        self._message_timer = OneShotTimer(scheduler, config.message_timeout, self._on_message_expired)

        self._key_handlers = {
            "escape": self._handle_escape,
            "enter": self._handle_enter,
            "right": self._handle_right,
            "left": self._handle_left,
            "up": lambda: self._handle_vertical(-1, text_key=False),
            "down": lambda: self._handle_vertical(1, text_key=False),
            "k": lambda: self._handle_vertical(-1, text_key=True),
            "j": lambda: self._handle_vertical(1, text_key=True),
            "tab": self._handle_tab,
            "d": self._handle_delete_key,
        }

        self._restore_last_task()

    # Lifecycle

    def start(self) -> None:
        """Start periodic refreshing and load the entries once."""
        self._refresh_task.start()
        self.reload_entries()

    def quit(self) -> None:
        """Stop all timers and ask the UI to exit."""
        self._refresh_task.stop()
        self._message_timer.cancel()
        self.quit_requested = True
        logger.info("Quit requested")

    @property
    def refreshing(self) -> bool:
        return self._refresh_task.running

    # Messages

    @property
    def error_message(self) -> Optional[str]:
        if self.message and self.message.kind is MessageKind.ERROR:
            return self.message.text
        return None

    @property
    def success_message(self) -> Optional[str]:
        if self.message and self.message.kind is MessageKind.SUCCESS:
            return self.message.text
        return None

    def _set_message(self, kind: MessageKind, text: str) -> None:
        self.message = StatusMessage(kind, text)
        self._message_timer.arm()

    def _set_error(self, text: str) -> None:
        self._set_message(MessageKind.ERROR, text)

    def _set_success(self, text: str) -> None:
        self._set_message(MessageKind.SUCCESS, text)

    def _clear_message(self) -> None:
        self._message_timer.cancel()
        self.message = None

    def _on_message_expired(self) -> None:
        self.message = None
        self._notify()

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()

    # Input events

    def handle_key(self, key: str) -> bool:
        """
        Apply a key press.

        Args:
            key: Textual key name, e.g. "escape", "enter", "up", "j"

        Returns:
            True if the key was consumed. Keys that are not consumed while the
            form has focus belong to the focused text field.
        """
        handler = self._key_handlers.get(key)
        if handler is None:
            return False
        return handler()

    def handle_click(self, x: int, y: int) -> bool:
        """
        Focus the pane under a pointer click.

        The left half of the screen is the task list. The right half holds
        the form in its top ``form_height`` rows and the entries table below.
        """
        if self.width <= 0:
            return False
        if x < self.width // 2:
            pane = Pane.TASK_LIST
        elif y < self.config.form_height:
            pane = Pane.FORM
        else:
            pane = Pane.TIME_ENTRIES
        self._focus_pane(pane)
        return True

    def handle_resize(self, width: int, height: int) -> None:
        """Record the viewport size and pass it on to the list and table."""
        self.width = width
        self.height = height
        left = width // 2
        self.task_list.set_size(left, height - LIST_CHROME)
        self.entries_table.set_size(width - left, height - self.config.form_height - TABLE_CHROME)

    def focus_form_field(self, index: int) -> None:
        """Give input focus to a form field, e.g. after it was clicked."""
        if self.focused_pane is not Pane.FORM:
            self._focus_pane(Pane.FORM)
        self.form.focused_field = index

    def update_form_field(self, index: int, value: str) -> None:
        """Store text edited in a form field."""
        self.form.set_field(index, value)

    # Key handlers

    def _handle_escape(self) -> bool:
        if self.confirming_delete:
            self.confirming_delete = False
            self.selected_entry = None
        elif self.focused_pane is not Pane.TASK_LIST:
            self._focus_pane(Pane.TASK_LIST)
            self.form.blur()
        else:
            self.quit()
        return True

    def _handle_enter(self) -> bool:
        if self.focused_pane is Pane.FORM:
            self.submit()
        elif self.confirming_delete:
            self.delete_selected_entry()
        return True

    def _handle_right(self) -> bool:
        if self.focused_pane is not Pane.TASK_LIST:
            return False
        self._focus_pane(Pane.FORM)
        self._save_last_task()
        return True

    def _handle_left(self) -> bool:
        if self.focused_pane is not Pane.TASK_LIST:
            self._focus_pane(Pane.TASK_LIST)
        return True

    def _handle_vertical(self, delta: int, text_key: bool) -> bool:
        if self.focused_pane is Pane.TASK_LIST:
            self.task_list.move(delta)
            self._sync_selected_task()
        elif self.focused_pane is Pane.FORM:
            if text_key:
                return False
            self.form.cycle(delta)
        else:
            self.entries_table.move(delta)
            entry = self.entries_table.entry_at_cursor()
            if self.confirming_delete and entry != self.selected_entry:
                self.confirming_delete = False
            self.selected_entry = entry
        return True

    def _handle_tab(self) -> bool:
        index = PANE_ORDER.index(self.focused_pane)
        self._focus_pane(PANE_ORDER[(index + 1) % len(PANE_ORDER)])
        return True

    def _handle_delete_key(self) -> bool:
        if self.focused_pane is Pane.FORM:
            return False
        if self.focused_pane is Pane.TIME_ENTRIES and self.selected_entry is not None:
            if not self.confirming_delete:
                self.confirming_delete = True
                self._clear_message()
            else:
                self.delete_selected_entry()
        return True

    def _focus_pane(self, pane: Pane) -> None:
        if pane is self.focused_pane:
            return
        if self.focused_pane is Pane.FORM:
            self.form.blur()
        if pane is Pane.FORM:
            self.form.focus_first()
        self.confirming_delete = False
        self.focused_pane = pane

    # Task selection

    def _sync_selected_task(self) -> None:
        row = self.task_list.selected_row()
        if row is None:
            return
        self.project_id = row.project_id
        self.task_id = row.task_id
        self.form.task_title = row.name

    def _restore_last_task(self) -> None:
        last_task = self.preferences.load()
        if last_task and self.task_list.select_task(last_task.project_id, last_task.task_id):
            self._sync_selected_task()
            self.form.task_title = last_task.task_title or self.form.task_title
            logger.info("Restored last task %s/%s", last_task.project_id, last_task.task_id)
        else:
            self._sync_selected_task()

    def _save_last_task(self) -> None:
        if self.project_id is None or self.task_id is None:
            return
        try:
            self.preferences.save(LastTask(self.project_id, self.task_id, self.form.task_title))
        except PreferenceError as e:
            self._set_error(str(e))

    # Commands

    def submit(self) -> bool:
        """
        Validate the form and book it as a new time entry.

        Checks run in order and the first failure becomes the error message
        without contacting the backend: task selected, duration parses, date
        given, description given, ids are integers.

        Returns:
            True if the entry was created
        """
        if self.project_id is None or self.task_id is None:
            self._set_error("Please select a project first")
            return False

        entry_date, duration, description = self.form.values()

        try:
            hours = parse_duration(duration)
        except DurationError as e:
            self._set_error(f"Invalid duration: {e}")
            return False

        entry_date = entry_date.strip()
        if not entry_date:
            self._set_error("Please enter a date")
            return False

        description = description.strip()
        if not description:
            self._set_error("Please enter a description")
            return False

        try:
            project_id = int(self.project_id)
            task_id = int(self.task_id)
        except (TypeError, ValueError):
            self._set_error("Invalid project or task ID")
            return False

        entry = TimeEntry(
            date=entry_date,
            hours=hours,
            project_id=project_id,
            task_id=task_id,
            description=description,
        )
        logger.info("Submitting time entry %s", entry.to_payload())
        try:
            self.gateway.create_time_entry(entry)
        except ApiError as e:
            logger.error("Submitting time entry failed: %s", e)
            self._set_error(f"Error submitting time entry: {e}")
            return False

        self._set_success("Time entry submitted successfully!")
        self.form.clear()
        self.reload_entries()
        return True

    def delete_selected_entry(self) -> bool:
        """
        Delete the selected entry once deletion was confirmed.

        Returns:
            True if the backend deleted the entry
        """
        entry = self.selected_entry
        if entry is None or not self.confirming_delete:
            return False

        self.confirming_delete = False
        if entry.id is None:
            self._set_error("Error deleting time entry: entry has no id")
            return False

        logger.info("Deleting time entry %s", entry.id)
        try:
            self.gateway.delete_time_entry(entry.id)
        except ApiError as e:
            logger.error("Deleting time entry %s failed: %s", entry.id, e)
            self._set_error(f"Error deleting time entry: {e}")
            return False

        self.selected_entry = None
        self._set_success("Time entry deleted successfully!")
        self.reload_entries()
        return True

    def reload_entries(self) -> bool:
        """
        Fetch this week's entries and replace the shown set.

        On failure the previous entries stay and an error message is shown.

        Returns:
            True if the entries were replaced
        """
        try:
            entries = self.gateway.fetch_time_entries(self._today())
        except ApiError as e:
            logger.warning("Loading time entries failed: %s", e)
            self._set_error(f"Error loading time entries: {e}")
            return False

        self.entries = entries
        cursor_valid = self.entries_table.set_entries(entries)
        self.last_update = self._clock()

        if self.selected_entry is not None:
            previous = self.selected_entry
            self.selected_entry = self.entries_table.entry_at_cursor() if cursor_valid else None
            if self.selected_entry is None or self.selected_entry.id != previous.id:
                self.confirming_delete = False
        return True

    def _on_refresh_tick(self) -> None:
        if self.quit_requested:
            return
        self.reload_entries()
        self._notify()
