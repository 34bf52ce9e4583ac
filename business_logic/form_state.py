"""State of the new time entry form."""
from datetime import date
from typing import Callable, Optional

from utils.time_utils import today_iso

FIELD_NAMES = ("date", "duration", "description")
DATE, DURATION, DESCRIPTION = range(len(FIELD_NAMES))


class FormState:
    """
    Values of the three form fields and which one has input focus.

    ``focused_field`` is None while the form is blurred, otherwise an index
    into FIELD_NAMES. Moving focus wraps around.
    """

    def __init__(self, today: Optional[Callable[[], date]] = None):
        self._today = today or date.today
        self.date = today_iso(self._today())
        self.duration = ""
        self.description = ""
        self.task_title = ""
        self.focused_field: Optional[int] = None

    def values(self) -> tuple:
        return self.date, self.duration, self.description

    def set_field(self, index: int, value: str) -> None:
        """Store text typed into a field."""
        setattr(self, FIELD_NAMES[index], value)

    def get_field(self, index: int) -> str:
        return getattr(self, FIELD_NAMES[index])

    def focus_first(self) -> None:
        self.focused_field = DATE

    def blur(self) -> None:
        self.focused_field = None

    def cycle(self, delta: int) -> None:
        """Move focus ``delta`` fields forward, wrapping modulo the field count."""
        current = DATE if self.focused_field is None else self.focused_field
        self.focused_field = (current + delta) % len(FIELD_NAMES)

    def clear(self) -> None:
        """Reset after a booking: empty duration and description, date back to today."""
        self.date = today_iso(self._today())
        self.duration = ""
        self.description = ""
