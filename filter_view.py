"""Read-only projections of the canonical task order."""

from enum import Enum

from data import Task, Tasks


class FilterMode(str, Enum):
    ALL = "all"
    COMPLETED = "completed"
    PENDING = "pending"


def _matches(task: Task, mode: FilterMode) -> bool:
    if mode is FilterMode.COMPLETED:
        return task.completed
    if mode is FilterMode.PENDING:
        return not task.completed
    return True


def filter_view(tasks: Tasks, mode: FilterMode) -> Tasks:
    """Tasks matching ``mode``, in canonical relative order."""
    mode = FilterMode(mode)
    return tuple(task for task in tasks if _matches(task, mode))
