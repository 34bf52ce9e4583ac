"""Builders that turn fetched backend data into display rows."""
from typing import Dict, List

from models import DateBucket, Project, ProjectHeader, TaskListItem, TaskRow, TimeEntry


def map_projects_to_items(projects: List[Project]) -> List[TaskListItem]:
    """
    Flatten projects and their tasks into task list rows.

    Each project with at least one task yields a ProjectHeader followed by one
    TaskRow per task. Tasks are sorted by name (stable, so equal names keep
    backend order) and numbered from 1 within their project. Projects keep
    backend order; projects without tasks are left out entirely.

    Args:
        projects: Projects as returned by the gateway

    Returns:
        Flat list of ProjectHeader and TaskRow items
    """
    items: List[TaskListItem] = []
    for project in projects:
        if not project.tasks:
            continue

        items.append(ProjectHeader(
            project_id=project.id,
            name=project.name,
            customer_name=project.customer_name,
        ))

        for position, task in enumerate(sorted(project.tasks, key=lambda t: t.name), start=1):
            items.append(TaskRow(
                task_id=task.id,
                project_id=project.id,
                name=task.name,
                customer_name=project.customer_name,
                position=position,
            ))
    return items


def group_entries_by_date(entries: List[TimeEntry]) -> List[DateBucket]:
    """
    Group time entries by day, most recent day first.

    Dates are fixed-width YYYY-MM-DD strings, so plain string comparison
    orders them. Entries within a day keep fetch order. Days without entries
    never appear.
    """
    buckets: Dict[str, DateBucket] = {}
    for entry in entries:
        bucket = buckets.get(entry.date)
        if bucket is None:
            bucket = buckets[entry.date] = DateBucket(date=entry.date)
        bucket.entries.append(entry)

    return [buckets[day] for day in sorted(buckets, reverse=True)]


def flatten_buckets(buckets: List[DateBucket]) -> List[TimeEntry]:
    """Entries in the order the table shows them."""
    return [entry for bucket in buckets for entry in bucket.entries]
