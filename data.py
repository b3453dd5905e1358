"""Task record and the pure collection transforms the history store is built on."""

from dataclasses import dataclass, replace
from collections import Counter
from typing import Callable, Iterable


@dataclass(frozen=True)
class Task:
    id: int
    title: str
    completed: bool = False

    def toggled(self) -> "Task":
        return replace(self, completed=not self.completed)


Tasks = tuple[Task, ...]


def task_ids(tasks: Tasks) -> list[int]:
    return [task.id for task in tasks]


def index_of(tasks: Tasks, task_id: int) -> int:
    """Canonical position of the task with ``task_id``, or -1."""
    for index, task in enumerate(tasks):
        if task.id == task_id:
            return index
    return -1


def append_task(tasks: Tasks, task: Task) -> Tasks:
    return tasks + (task,)


def remove_task(tasks: Tasks, task_id: int) -> Tasks:
    return tuple(task for task in tasks if task.id != task_id)


def update_task(tasks: Tasks, task_id: int, fn: Callable[[Task], Task]) -> Tasks:
    return tuple(fn(task) if task.id == task_id else task for task in tasks)


def is_permutation(tasks: Tasks, ids: Iterable[int]) -> bool:
    """True when ``ids`` names every task exactly once and nothing else."""
    ids = list(ids)
    current = task_ids(tasks)
    if len(ids) != len(current):
        return False
    counts = Counter(ids)
    if any(n != 1 for n in counts.values()):
        return False
    return counts == Counter(current)


def apply_order(tasks: Tasks, ids: Iterable[int]) -> Tasks:
    """Rearrange ``tasks`` into the order given by ``ids``.

    ``ids`` must be a permutation of the current ids; see ``is_permutation``.
    """
    by_id = {task.id: task for task in tasks}
    return tuple(by_id[task_id] for task_id in ids)


def move_task(tasks: Tasks, from_index: int, to_index: int) -> Tasks:
    """Remove the task at ``from_index`` and reinsert it at ``to_index``.

    ``to_index`` is interpreted after the removal, like ``list.insert``.
    """
    items = list(tasks)
    items.insert(to_index, items.pop(from_index))
    return tuple(items)
