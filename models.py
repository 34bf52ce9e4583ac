"""Data models for MOCO projects, tasks and time entries."""
from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass(frozen=True)
class Customer:
    """Customer a project is billed to."""
    id: int
    name: str

    @classmethod
    def from_api(cls, data: Optional[dict]) -> 'Customer':
        data = data or {}
        return cls(id=int(data.get("id") or 0), name=data.get("name") or "")


@dataclass(frozen=True)
class Task:
    """A bookable task. Belongs to exactly one project, referenced by id."""
    id: int
    name: str
    project_id: int = 0
    active: bool = True
    billable: bool = True

    @classmethod
    def from_api(cls, data: dict, project_id: int = 0) -> 'Task':
        return cls(
            id=int(data["id"]),
            name=data.get("name") or "",
            project_id=project_id,
            active=bool(data.get("active", True)),
            billable=bool(data.get("billable", True)),
        )


@dataclass(frozen=True)
class Project:
    """An assigned project with its tasks in backend order."""
    id: int
    name: str
    customer: Customer = field(default_factory=lambda: Customer(0, ""))
    tasks: List[Task] = field(default_factory=list)

    @property
    def customer_name(self) -> str:
        return self.customer.name

    @classmethod
    def from_api(cls, data: dict) -> 'Project':
        project_id = int(data["id"])
        return cls(
            id=project_id,
            name=data.get("name") or "",
            customer=Customer.from_api(data.get("customer")),
            tasks=[Task.from_api(t, project_id) for t in data.get("tasks") or []],
        )


@dataclass(frozen=True)
class TimeEntry:
    """A booked activity.

    ``id`` is assigned by the backend and is None for an entry that has not
    been submitted yet. ``hours`` is always positive.
    """
    date: str
    hours: float
    project_id: int
    task_id: int
    description: str
    id: Optional[int] = None
    task_name: str = ""
    project_name: str = ""

    @classmethod
    def from_api(cls, data: dict) -> 'TimeEntry':
        """Build an entry from an activity payload.

        The task and project may come nested (``{"task": {"id", "name"}}``) or
        as bare ``task_id``/``project_id`` fields.
        """
        project = data.get("project") or {}
        task = data.get("task") or {}
        return cls(
            id=data.get("id"),
            date=data.get("date") or "",
            hours=float(data.get("hours") or 0),
            project_id=int(project.get("id") or data.get("project_id") or 0),
            task_id=int(task.get("id") or data.get("task_id") or 0),
            description=data.get("description") or "",
            task_name=task.get("name") or "",
            project_name=project.get("name") or "",
        )

    def to_payload(self) -> dict:
        """Body for creating this entry."""
        return {
            "date": self.date,
            "hours": self.hours,
            "project_id": self.project_id,
            "task_id": self.task_id,
            "description": self.description,
        }


@dataclass(frozen=True)
class ProjectHeader:
    """Display-only row naming a project in the task list."""
    project_id: int
    name: str
    customer_name: str = ""

    selectable = False


@dataclass(frozen=True)
class TaskRow:
    """Selectable task row. ``position`` is 1-based within its project."""
    task_id: int
    project_id: int
    name: str
    customer_name: str
    position: int

    selectable = True


TaskListItem = Union[ProjectHeader, TaskRow]


@dataclass
class DateBucket:
    """Time entries of one calendar day, in fetch order."""
    date: str
    entries: List[TimeEntry] = field(default_factory=list)

    @property
    def total_hours(self) -> float:
        return sum(entry.hours for entry in self.entries)

    @property
    def total_display(self) -> str:
        return f"{self.total_hours:.2f}"


@dataclass(frozen=True)
class LastTask:
    """The task the user booked on most recently."""
    project_id: int
    task_id: int
    task_title: str
