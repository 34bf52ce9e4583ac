"""Main TUI application for booking MOCO time entries."""
import argparse
import logging
import sys
from typing import List, Optional

from textual import events
from textual.actions import SkipAction
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, Vertical
from textual.widgets import Input

from business_logic.controller import Pane, TimeEntryController
from config import Config, ConfigError
from models import Project
from moco_client import ApiError, MocoClient
from preferences import LastTaskStore
from ui.entries_table_widget import EntriesTableWidget
from ui.form_widget import FieldFocused, FormInput, TimeEntryForm
from ui.help_screen import HelpScreen
from ui.task_list_widget import TaskListWidget
from ui.widgets import StatusBar
from utils.log_utils import setup_logging

logger = logging.getLogger("app")

PANE_TITLES = {
    Pane.TASK_LIST: ("task_pane", "MOCO - Select a task"),
    Pane.FORM: ("form_pane", "New Time Entry"),
    Pane.TIME_ENTRIES: ("entries_pane", "Time Entries"),
}


class TimeEntryApp(App):
    """Terminal client for booking and reviewing MOCO time entries."""

    TITLE = "MOCO"

    # Focus follows the controller, not the first input in the form
    AUTO_FOCUS = None

    CSS = """
    #main {
        height: 1fr;
    }

    #task_pane {
        width: 50%;
        border: round #5f5fff;
        padding: 0 1;
    }

    #right_column {
        width: 1fr;
    }

    #form_pane {
        height: 12;
        border: round #5f5fff;
        padding: 0 1;
    }

    #entries_pane {
        height: 1fr;
        border: round #5f5fff;
        padding: 0 1;
    }

    TaskListWidget, EntriesTableWidget {
        height: auto;
    }
    """

    # Pane keys are priority bindings so they reach the controller before a
    # focused input. A key the controller does not consume is skipped and
    # falls through to the input.
    BINDINGS = [
        Binding("escape", "pane_key('escape')", "Back", show=False, priority=True),
        Binding("enter", "pane_key('enter')", "Submit", show=False, priority=True),
        Binding("tab", "pane_key('tab')", "Next pane", show=False, priority=True),
        Binding("up", "pane_key('up')", "Up", show=False, priority=True),
        Binding("down", "pane_key('down')", "Down", show=False, priority=True),
        Binding("left", "pane_key('left')", "Tasks", show=False, priority=True),
        Binding("right", "pane_key('right')", "Book", show=False, priority=True),
        Binding("k", "pane_key('k')", "Up", show=False),
        Binding("j", "pane_key('j')", "Down", show=False),
        Binding("d", "pane_key('d')", "Delete", show=False),
        Binding("question_mark", "show_help", "Help", show=False),
    ]

    def __init__(self, config: Config, gateway, preferences: LastTaskStore,
                 projects: List[Project]):
        super().__init__()
        self.config = config
        self.controller = TimeEntryController(config, gateway, preferences, projects, scheduler=self)
        self.task_widget = TaskListWidget(self.controller.task_list, config)
        self.form_widget = TimeEntryForm(config)
        self.table_widget = EntriesTableWidget(self.controller.entries_table, config)
        self.status_bar = StatusBar(config)

    def compose(self) -> ComposeResult:
        """Compose the UI."""
        with Horizontal(id="main"):
            yield Container(self.task_widget, id="task_pane")
            with Vertical(id="right_column"):
                yield Container(self.form_widget, id="form_pane")
                yield Container(self.table_widget, id="entries_pane")
        yield self.status_bar

    def on_mount(self) -> None:
        """Set up the app after mounting."""
        self.query_one("#form_pane").styles.height = self.config.form_height
        for pane_id, title in PANE_TITLES.values():
            self.query_one(f"#{pane_id}").border_title = title

        self.controller.handle_resize(self.size.width, self.size.height)
        self.controller.on_change = self.refresh_view
        self.controller.start()
        self.refresh_view()

    def on_unmount(self) -> None:
        self.controller.quit()

    def refresh_view(self) -> None:
        """Redraw every pane from the controller state."""
        controller = self.controller
        if controller.quit_requested:
            self.exit()
            return

        self.task_widget.focused_pane = controller.focused_pane is Pane.TASK_LIST
        self.task_widget.refresh(layout=True)

        self.table_widget.focused_pane = controller.focused_pane is Pane.TIME_ENTRIES
        self.table_widget.selected_entry = controller.selected_entry
        self.table_widget.confirming_delete = controller.confirming_delete
        self.table_widget.refresh(layout=True)

        self.form_widget.sync(controller.form)
        self.status_bar.show(controller)

        for pane, (pane_id, _) in PANE_TITLES.items():
            color = self.config.color_focused if pane is controller.focused_pane else self.config.color_border
            container = self.query_one(f"#{pane_id}")
            container.styles.border = ("round", color)
            container.styles.border_title_color = color

        self._sync_focus()

    def _sync_focus(self) -> None:
        """Give keyboard focus to the form field the controller has focused."""
        if len(self.screen_stack) > 1:
            return
        form = self.controller.form
        if self.controller.focused_pane is Pane.FORM and form.focused_field is not None:
            field = self.form_widget.field_input(form.focused_field)
            if self.focused is not field:
                field.focus()
        elif isinstance(self.focused, Input):
            self.set_focus(None)

    def action_pane_key(self, key: str) -> None:
        """Pass a navigation key to the controller."""
        # The help screen handles its own keys
        if len(self.screen_stack) > 1:
            raise SkipAction()
        if not self.controller.handle_key(key):
            raise SkipAction()
        self.refresh_view()

    def action_show_help(self) -> None:
        """Show the help screen."""
        if len(self.screen_stack) == 1:
            self.push_screen(HelpScreen())

    def on_click(self, event: events.Click) -> None:
        """Focus the pane under the pointer."""
        if len(self.screen_stack) > 1:
            return
        # Clicked inputs report their own field through FieldFocused
        if isinstance(event.widget, FormInput):
            return
        if self.controller.handle_click(event.screen_x, event.screen_y):
            self.refresh_view()

    def on_resize(self, event: events.Resize) -> None:
        self.controller.handle_resize(event.size.width, event.size.height)
        # Resize may arrive before on_mount has started the controller
        if self.controller.refreshing:
            self.refresh_view()

    def on_input_changed(self, event: Input.Changed) -> None:
        if isinstance(event.input, FormInput):
            self.controller.update_form_field(event.input.index, event.value)

    def on_field_focused(self, message: FieldFocused) -> None:
        """Keep the controller in step when an input is focused by mouse."""
        form = self.controller.form
        if self.controller.focused_pane is Pane.FORM and form.focused_field == message.index:
            return
        self.controller.focus_form_field(message.index)
        self.refresh_view()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="moco", description="Book time entries on MOCO.")
    parser.add_argument("--env-file", help="Read MOCO_DOMAIN and MOCO_API_KEY from this .env file")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help="Level of the file log (default: INFO)")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the application."""
    args = parse_args(argv)

    try:
        config = Config.load(args.env_file)
    except ConfigError as e:
        print(e, file=sys.stderr)
        return 1

    log_path = setup_logging(config.log_dir, args.log_level)
    logger.info("Starting for %s, logging to %s", config.domain, log_path)

    client = MocoClient(config)
    try:
        projects = client.fetch_projects()
    except ApiError as e:
        logger.error("Fetching projects failed: %s", e)
        print(f"Error fetching projects: {e}", file=sys.stderr)
        return 1

    app = TimeEntryApp(config, client, LastTaskStore(config.config_dir), projects)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
