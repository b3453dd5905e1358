"""Translate drag gestures over the filtered view into canonical reorders."""

import logging
from enum import Enum
from typing import Callable, Protocol

import data
from actions import ReorderTasks
from data import Tasks
from filter_view import FilterMode, filter_view
from history import HistoryStore
from notices import LoggingNotifier, Notice, Notifier, send

logger = logging.getLogger(__name__)


class DragPhase(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"
    DROPPED = "dropped"
    CANCELLED = "cancelled"


class TimerHandle(Protocol):
    def stop(self) -> None: ...


Scheduler = Callable[[int, Callable[[], None]], TimerHandle]


class DragReconciler:
    """
    One drag gesture at a time: IDLE -> DRAGGING -> DROPPED | CANCELLED -> IDLE.

    Indices passed in are positions in the filtered view as it is *now*.
    Every call re-derives the view, resolves the index to a task, and only
    then looks up canonical positions.
    """

    def __init__(self, store: HistoryStore, mode: Callable[[], FilterMode],
                 schedule: Scheduler | None = None,
                 notifier: Notifier | None = None,
                 drop_notice_delay_ms: int = 200):
        self._store = store
        self._mode = mode
        self._schedule = schedule
        self._notifier = notifier if notifier is not None else LoggingNotifier()
        self._delay_ms = drop_notice_delay_ms
        self._pending: list[TimerHandle] = []
        self._dragged_id: int | None = None
        self.phase = DragPhase.IDLE
        self.last_outcome: DragPhase | None = None

    @property
    def dragging(self) -> bool:
        return self.phase is DragPhase.DRAGGING

    @property
    def current_index(self) -> int:
        """Where the dragged task sits in the current view, or -1."""
        if self._dragged_id is None:
            return -1
        return data.index_of(self._view(), self._dragged_id)

    @property
    def pending_notices(self) -> int:
        return len(self._pending)

    # ------------------------------------------------------------------ #
    # Transport signals                                                    #
    # ------------------------------------------------------------------ #

    def drag_start(self, from_index: int) -> bool:
        if self.dragging:
            logger.warning("Drag started while another drag was active")
            self.cancel()
        view = self._view()
        if not 0 <= from_index < len(view):
            logger.warning("Drag start index %d outside view of %d", from_index, len(view))
            return False
        self._dragged_id = view[from_index].id
        self.phase = DragPhase.DRAGGING
        send(self._notifier, Notice.DRAG_STARTED)
        return True

    def hover(self, from_index: int, to_index: int) -> bool:
        """Live move while dragging. Each effective call is one history entry."""
        if not self.dragging or from_index == to_index:
            return False
        return self._move(from_index, to_index)

    def drop(self, from_index: int, to_index: int) -> bool:
        if not self.dragging:
            return False
        self._finish(DragPhase.DROPPED)
        if from_index == to_index:
            return False
        moved = self._move(from_index, to_index)
        if moved:
            self._announce()
        return moved

    def cancel(self) -> None:
        """End the gesture without a drop; hovers already applied stay applied."""
        if self.dragging:
            self._finish(DragPhase.CANCELLED)

    def end(self, did_drop: bool, from_index: int, to_index: int) -> bool:
        if did_drop:
            return self.drop(from_index, to_index)
        self.cancel()
        return False

    def close(self) -> None:
        """Stop pending completion notices; call when the session is torn down."""
        pending, self._pending = self._pending, []
        for handle in pending:
            handle.stop()
        self.cancel()

    # ------------------------------------------------------------------ #
    # Internals                                                            #
    # ------------------------------------------------------------------ #

    def _view(self) -> Tasks:
        return filter_view(self._store.present, self._mode())

    def _finish(self, outcome: DragPhase) -> None:
        logger.debug("Drag %s", outcome.value)
        self.last_outcome = outcome
        self._dragged_id = None
        self.phase = DragPhase.IDLE

    def _move(self, from_index: int, to_index: int) -> bool:
        present = self._store.present
        view = filter_view(present, self._mode())
        if not 0 <= from_index < len(view) or to_index < 0:
            logger.warning("Drag indices %d -> %d outside view of %d",
                           from_index, to_index, len(view))
            return False

        source = data.index_of(present, view[from_index].id)
        if to_index < len(view):
            target = data.index_of(present, view[to_index].id)
        else:
            target = len(present) - 1

        order = data.move_task(present, source, target)
        self._store.dispatch(ReorderTasks(tuple(data.task_ids(order)), announce=False))
        return True

    def _announce(self) -> None:
        if self._schedule is None:
            send(self._notifier, Notice.TASKS_REORDERED)
            return

        handle: TimerHandle | None = None

        def fire():
            if handle in self._pending:
                self._pending.remove(handle)
            send(self._notifier, Notice.TASKS_REORDERED)

        handle = self._schedule(self._delay_ms, fire)
        self._pending.append(handle)
