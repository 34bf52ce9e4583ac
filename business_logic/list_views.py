"""Cursor and scroll state for the task list and the entries table."""
from typing import List, NamedTuple, Optional, Tuple

from business_logic.view_models import flatten_buckets, group_entries_by_date
from models import DateBucket, TaskListItem, TaskRow, TimeEntry


class _ScrollWindow:
    """Keeps a cursor line inside a window of ``height`` lines."""

    def __init__(self):
        self.width = 0
        self.height = 0
        self.offset = 0

    def set_size(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)

    def scroll_to(self, line: int, total: int) -> None:
        """Scroll only when ``line`` leaves the window."""
        if self.height <= 0:
            self.offset = 0
            return
        if line < self.offset:
            self.offset = line
        elif line >= self.offset + self.height:
            self.offset = line - self.height + 1
        self.offset = max(0, min(self.offset, max(0, total - self.height)))

    def window(self, total: int) -> Tuple[int, int]:
        """Half-open range of visible lines. Unsized views show everything."""
        if self.height <= 0:
            return 0, total
        return self.offset, min(total, self.offset + self.height)


class TaskListView(_ScrollWindow):
    """
    Task list with a cursor that only ever rests on task rows.

    Project headers are shown but skipped by navigation.
    """

    def __init__(self, items: List[TaskListItem]):
        super().__init__()
        self.items = items
        self.cursor = 0
        rows = self.row_indices()
        if rows:
            self.cursor = rows[0]

    def row_indices(self) -> List[int]:
        return [i for i, item in enumerate(self.items) if item.selectable]

    def selected_row(self) -> Optional[TaskRow]:
        """The task row under the cursor, or None if there are no tasks."""
        if 0 <= self.cursor < len(self.items):
            item = self.items[self.cursor]
            if item.selectable:
                return item
        return None

    def move(self, delta: int) -> None:
        """Move the cursor by ``delta`` task rows, stopping at either end."""
        rows = self.row_indices()
        if not rows:
            return
        current = rows.index(self.cursor) if self.cursor in rows else 0
        target = max(0, min(len(rows) - 1, current + delta))
        self.cursor = rows[target]
        self.scroll_to(self.cursor, len(self.items))

    def select_task(self, project_id: int, task_id: int) -> bool:
        """Put the cursor on the given task. Returns False if it is not listed."""
        for i, item in enumerate(self.items):
            if item.selectable and item.project_id == project_id and item.task_id == task_id:
                self.cursor = i
                self.scroll_to(self.cursor, len(self.items))
                return True
        return False

    def set_size(self, width: int, height: int) -> None:
        super().set_size(width, height)
        self.scroll_to(self.cursor, len(self.items))

    def visible_items(self) -> List[Tuple[int, TaskListItem]]:
        start, end = self.window(len(self.items))
        return [(i, self.items[i]) for i in range(start, end)]


class TableLine(NamedTuple):
    """One rendered line of the entries table."""
    kind: str  # "date", "entry", "total" or "blank"
    date: str = ""
    entry: Optional[TimeEntry] = None
    entry_index: int = -1
    total: str = ""


class EntriesTableView(_ScrollWindow):
    """
    Time entries grouped by day with a cursor over entry rows.

    The cursor indexes entries in display order (newest day first), date
    headers, totals and separators are skipped.
    """

    def __init__(self):
        super().__init__()
        self.buckets: List[DateBucket] = []
        self.entries: List[TimeEntry] = []
        self.cursor = 0

    def set_entries(self, entries: List[TimeEntry]) -> bool:
        """
        Replace the shown entries.

        Returns:
            True if the cursor still points at an entry of the new set
        """
        self.buckets = group_entries_by_date(entries)
        self.entries = flatten_buckets(self.buckets)
        valid = self.cursor < len(self.entries)
        if not valid:
            self.cursor = max(0, len(self.entries) - 1)
        self._scroll_to_cursor()
        return valid

    def entry_at_cursor(self) -> Optional[TimeEntry]:
        if 0 <= self.cursor < len(self.entries):
            return self.entries[self.cursor]
        return None

    def move(self, delta: int) -> None:
        if not self.entries:
            return
        self.cursor = max(0, min(len(self.entries) - 1, self.cursor + delta))
        self._scroll_to_cursor()

    def set_size(self, width: int, height: int) -> None:
        super().set_size(width, height)
        self._scroll_to_cursor()

    def lines(self) -> List[TableLine]:
        """All table lines: per day a header, its entries, a total and a blank."""
        lines: List[TableLine] = []
        index = 0
        for bucket in self.buckets:
            lines.append(TableLine("date", date=bucket.date))
            for entry in bucket.entries:
                lines.append(TableLine("entry", date=bucket.date, entry=entry, entry_index=index))
                index += 1
            lines.append(TableLine("total", date=bucket.date, total=bucket.total_display))
            lines.append(TableLine("blank"))
        return lines

    def cursor_line(self) -> int:
        for i, line in enumerate(self.lines()):
            if line.entry_index == self.cursor:
                return i
        return 0

    def visible_lines(self) -> List[TableLine]:
        lines = self.lines()
        start, end = self.window(len(lines))
        return lines[start:end]

    def _scroll_to_cursor(self) -> None:
        self.scroll_to(self.cursor_line(), len(self.lines()))
