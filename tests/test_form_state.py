"""Tests for the time entry form state."""
from datetime import date

import pytest

from business_logic.form_state import DATE, DESCRIPTION, DURATION, FormState


@pytest.fixture
def form():
    return FormState(today=lambda: date(2024, 1, 3))


class TestFormState:
    """Test form values and field focus."""

    def test_defaults(self, form):
        """The date defaults to today, the rest is empty and nothing is focused."""
        assert form.values() == ("2024-01-03", "", "")
        assert form.focused_field is None

    def test_set_and_get_field(self, form):
        """Fields are addressed by index."""
        form.set_field(DURATION, "1:30")
        form.set_field(DESCRIPTION, "Review")
        assert form.get_field(DURATION) == "1:30"
        assert form.description == "Review"

    def test_cycle_wraps_forward(self, form):
        """Moving past the last field wraps to the first."""
        form.focus_first()
        form.cycle(1)
        assert form.focused_field == DURATION
        form.cycle(1)
        form.cycle(1)
        assert form.focused_field == DATE

    def test_cycle_wraps_backward(self, form):
        """Moving before the first field wraps to the last."""
        form.focus_first()
        form.cycle(-1)
        assert form.focused_field == DESCRIPTION

    def test_blur(self, form):
        """Blurring leaves no field focused."""
        form.focus_first()
        form.blur()
        assert form.focused_field is None

    def test_clear_resets_to_today(self, form):
        """Clearing empties duration and description and resets the date."""
        form.set_field(DATE, "2023-12-24")
        form.set_field(DURATION, "2")
        form.set_field(DESCRIPTION, "Work")
        form.task_title = "Design"
        form.clear()
        assert form.values() == ("2024-01-03", "", "")
        assert form.task_title == "Design"
