"""Edits that can be dispatched into the history store."""

from dataclasses import dataclass
from typing import Union


@dataclass(frozen=True)
class AddTask:
    title: str


@dataclass(frozen=True)
class DeleteTask:
    task_id: int


@dataclass(frozen=True)
class ToggleComplete:
    task_id: int


@dataclass(frozen=True)
class ReorderTasks:
    task_ids: tuple[int, ...]
    announce: bool = True


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class Redo:
    pass


Action = Union[AddTask, DeleteTask, ToggleComplete, ReorderTasks, Undo, Redo]
