"""Linear undo/redo history over snapshots of the task collection."""

import itertools
import logging
from dataclasses import dataclass
from typing import Callable, Iterable

import data
from actions import Action, AddTask, DeleteTask, ToggleComplete, ReorderTasks, Undo, Redo
from data import Task, Tasks
from errors import InvariantViolation, ValidationError
from notices import LoggingNotifier, Notice, Notifier, send

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HistoryState:
    """
    past:    snapshots oldest -> newest; past[-1] directly precedes present
    present: the canonical collection
    future:  snapshots nearest redo -> farthest redo
    """
    past: tuple[Tasks, ...] = ()
    present: Tasks = ()
    future: tuple[Tasks, ...] = ()


class HistoryStore:
    """
    Owns the session's HistoryState. It is only changed through add, delete,
    toggle_complete, reorder, undo and redo (or dispatch, which routes to them).
    """

    def __init__(self, initial: Iterable[Task] = (),
                 notifier: Notifier | None = None,
                 id_source: Callable[[], int] | None = None):
        initial = tuple(initial)
        self._state = HistoryState(present=initial)
        self._notifier = notifier if notifier is not None else LoggingNotifier()
        if id_source is None:
            start = max((task.id for task in initial), default=0) + 1
            id_source = itertools.count(start).__next__
        self._next_id = id_source

    # ------------------------------------------------------------------ #
    # Read access                                                          #
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> HistoryState:
        return self._state

    @property
    def present(self) -> Tasks:
        return self._state.present

    @property
    def can_undo(self) -> bool:
        return bool(self._state.past)

    @property
    def can_redo(self) -> bool:
        return bool(self._state.future)

    # ------------------------------------------------------------------ #
    # Edits                                                                #
    # ------------------------------------------------------------------ #

    def add(self, title: str) -> Task:
        title = title.strip()
        if not title:
            logger.warning("Rejected task with empty title")
            send(self._notifier, Notice.VALIDATION_WARNING)
            raise ValidationError("Task cannot be empty")
        task = Task(id=self._next_id(), title=title)
        self._commit(data.append_task(self.present, task))
        logger.debug("Added task %d %r", task.id, task.title)
        send(self._notifier, Notice.TASK_ADDED)
        return task

    def delete(self, task_id: int) -> bool:
        if data.index_of(self.present, task_id) < 0:
            return False
        self._commit(data.remove_task(self.present, task_id))
        logger.debug("Deleted task %d", task_id)
        send(self._notifier, Notice.TASK_DELETED)
        return True

    def toggle_complete(self, task_id: int) -> bool:
        if data.index_of(self.present, task_id) < 0:
            return False
        self._commit(data.update_task(self.present, task_id, Task.toggled))
        logger.debug("Toggled task %d", task_id)
        send(self._notifier, Notice.STATUS_UPDATED)
        return True

    def reorder(self, task_ids: Iterable[int], announce: bool = True) -> None:
        """Replace present with the same tasks in ``task_ids`` order.

        Always records a history entry, even when the order is unchanged.
        Live drag steps pass ``announce=False`` and announce once on drop.
        """
        task_ids = list(task_ids)
        if not data.is_permutation(self.present, task_ids):
            raise InvariantViolation(
                f"Reorder payload {task_ids} is not a permutation of "
                f"{data.task_ids(self.present)}"
            )
        self._commit(data.apply_order(self.present, task_ids))
        logger.debug("Reordered tasks to %s", task_ids)
        if announce:
            send(self._notifier, Notice.TASKS_REORDERED)

    # ------------------------------------------------------------------ #
    # Navigation                                                           #
    # ------------------------------------------------------------------ #

    def undo(self) -> bool:
        s = self._state
        if not s.past:
            return False
        self._state = HistoryState(
            past=s.past[:-1],
            present=s.past[-1],
            future=(s.present,) + s.future,
        )
        logger.debug("Undo (%d left)", len(self._state.past))
        send(self._notifier, Notice.UNDO_PERFORMED)
        return True

    def redo(self) -> bool:
        s = self._state
        if not s.future:
            return False
        self._state = HistoryState(
            past=s.past + (s.present,),
            present=s.future[0],
            future=s.future[1:],
        )
        logger.debug("Redo (%d left)", len(self._state.future))
        send(self._notifier, Notice.REDO_PERFORMED)
        return True

    # ------------------------------------------------------------------ #
    # Dispatch                                                             #
    # ------------------------------------------------------------------ #

    def dispatch(self, action: Action) -> bool:
        """Apply one edit. Returns False when nothing changed.

        A blank AddTask is absorbed here: the warning notice has already
        been sent by ``add``.
        """
        if isinstance(action, AddTask):
            try:
                self.add(action.title)
            except ValidationError:
                return False
            return True
        elif isinstance(action, DeleteTask):
            return self.delete(action.task_id)
        elif isinstance(action, ToggleComplete):
            return self.toggle_complete(action.task_id)
        elif isinstance(action, ReorderTasks):
            self.reorder(action.task_ids, announce=action.announce)
            return True
        elif isinstance(action, Undo):
            return self.undo()
        elif isinstance(action, Redo):
            return self.redo()
        raise TypeError(f"Unknown action: {action!r}")

    def _commit(self, new_present: Tasks) -> None:
        s = self._state
        self._state = HistoryState(past=s.past + (s.present,), present=new_present, future=())
