"""
Drag reconciler: filtered-view indices resolved to canonical moves.
"""

import logging

import pytest

from actions import ReorderTasks
from data import Task, task_ids
from drag import DragPhase, DragReconciler
from filter_view import FilterMode
from history import HistoryStore
from notices import Notice


class ModeBox:
    def __init__(self, mode=FilterMode.ALL):
        self.mode = mode

    def __call__(self):
        return self.mode


@pytest.fixture
def mode():
    return ModeBox()


@pytest.fixture
def reconciler(abc_store, mode, scheduler, notifier):
    return DragReconciler(abc_store, mode, schedule=scheduler, notifier=notifier,
                          drop_notice_delay_ms=200)


@pytest.fixture
def mixed_store(notifier):
    """A(done) B C(done) D with ids 1..4."""
    return HistoryStore(
        [Task(1, "A", True), Task(2, "B"), Task(3, "C", True), Task(4, "D")],
        notifier=notifier,
    )


class TestGestureScenario:
    def test_hover_commits_one_entry_and_drop_adds_none(self, abc_store, reconciler):
        assert reconciler.drag_start(0)
        assert reconciler.hover(0, 2)
        assert task_ids(abc_store.present) == [2, 3, 1]
        assert len(abc_store.state.past) == 1

        # the transport now reports the dragged task at index 2
        assert reconciler.current_index == 2
        assert not reconciler.drop(2, 2)
        assert len(abc_store.state.past) == 1
        assert reconciler.last_outcome is DragPhase.DROPPED
        assert reconciler.phase is DragPhase.IDLE

    def test_each_hover_is_a_history_entry(self, abc_store, reconciler):
        reconciler.drag_start(0)
        reconciler.hover(0, 1)
        reconciler.hover(1, 2)
        assert task_ids(abc_store.present) == [2, 3, 1]
        assert len(abc_store.state.past) == 2
        abc_store.undo()
        assert task_ids(abc_store.present) == [2, 1, 3]

    def test_hover_with_equal_indices_is_noop(self, abc_store, reconciler):
        reconciler.drag_start(1)
        assert not reconciler.hover(1, 1)
        assert not abc_store.can_undo

    def test_move_up(self, abc_store, reconciler):
        reconciler.drag_start(2)
        reconciler.hover(2, 0)
        assert task_ids(abc_store.present) == [3, 1, 2]


class TestFilteredIndices:
    def test_completed_view_move_down(self, mixed_store, notifier, scheduler):
        r = DragReconciler(mixed_store, ModeBox(FilterMode.COMPLETED),
                           schedule=scheduler, notifier=notifier)
        r.drag_start(0)
        r.hover(0, 1)
        assert task_ids(mixed_store.present) == [2, 3, 1, 4]

    def test_completed_view_move_up(self, mixed_store, notifier, scheduler):
        r = DragReconciler(mixed_store, ModeBox(FilterMode.COMPLETED),
                           schedule=scheduler, notifier=notifier)
        r.drag_start(1)
        r.hover(1, 0)
        assert task_ids(mixed_store.present) == [3, 1, 2, 4]

    def test_pending_view_keeps_hidden_tasks_in_place(self, mixed_store, notifier, scheduler):
        r = DragReconciler(mixed_store, ModeBox(FilterMode.PENDING),
                           schedule=scheduler, notifier=notifier)
        r.drag_start(1)
        r.hover(1, 0)
        assert task_ids(mixed_store.present) == [1, 4, 2, 3]
        completed = [t.id for t in mixed_store.present if t.completed]
        assert completed == [1, 3]

    def test_view_is_rederived_on_every_call(self, mixed_store, notifier, scheduler):
        mode = ModeBox(FilterMode.ALL)
        r = DragReconciler(mixed_store, mode, schedule=scheduler, notifier=notifier)
        r.drag_start(1)          # B
        mode.mode = FilterMode.PENDING
        # pending view is now [B, D]; index 0 is B, not A
        r.hover(0, 1)
        assert task_ids(mixed_store.present) == [1, 3, 4, 2]

    def test_current_index_follows_identity(self, mixed_store, notifier, scheduler):
        mode = ModeBox(FilterMode.ALL)
        r = DragReconciler(mixed_store, mode, schedule=scheduler, notifier=notifier)
        r.drag_start(3)          # D
        mode.mode = FilterMode.PENDING
        assert r.current_index == 1

    def test_target_past_end_moves_to_end(self, abc_store, reconciler):
        reconciler.drag_start(0)
        reconciler.hover(0, 10)
        assert task_ids(abc_store.present) == [2, 3, 1]

    def test_out_of_range_source_is_noop(self, abc_store, reconciler):
        reconciler.drag_start(0)
        assert not reconciler.hover(5, 0)
        assert not reconciler.hover(0, -1)
        assert not abc_store.can_undo


class TestPhases:
    def test_hover_requires_drag(self, abc_store, reconciler):
        assert not reconciler.hover(0, 2)
        assert not reconciler.drop(0, 2)
        assert not abc_store.can_undo

    def test_drag_start_out_of_range(self, reconciler):
        assert not reconciler.drag_start(7)
        assert reconciler.phase is DragPhase.IDLE

    def test_drag_start_notice(self, reconciler, notifier):
        reconciler.drag_start(0)
        assert notifier.kinds == [Notice.DRAG_STARTED]

    def test_cancel_keeps_live_hovers(self, abc_store, reconciler, scheduler):
        reconciler.drag_start(0)
        reconciler.hover(0, 1)
        reconciler.cancel()
        assert reconciler.last_outcome is DragPhase.CANCELLED
        assert reconciler.phase is DragPhase.IDLE
        assert task_ids(abc_store.present) == [2, 1, 3]
        assert scheduler.timers == []
        assert not reconciler.hover(1, 2)

    def test_end_without_drop_cancels(self, abc_store, reconciler):
        reconciler.drag_start(0)
        assert not reconciler.end(False, 0, 2)
        assert reconciler.last_outcome is DragPhase.CANCELLED
        assert not abc_store.can_undo

    def test_end_with_drop(self, abc_store, reconciler):
        reconciler.drag_start(0)
        assert reconciler.end(True, 0, 2)
        assert task_ids(abc_store.present) == [2, 3, 1]

    def test_restart_cancels_previous_gesture(self, reconciler):
        reconciler.drag_start(0)
        reconciler.drag_start(1)
        assert reconciler.last_outcome is DragPhase.CANCELLED
        assert reconciler.dragging


class TestDropNotice:
    def test_drop_schedules_delayed_notice(self, reconciler, scheduler, notifier):
        reconciler.drag_start(0)
        assert reconciler.drop(0, 2)
        assert [t.delay_ms for t in scheduler.timers] == [200]
        assert Notice.TASKS_REORDERED not in notifier.kinds

        scheduler.timers[0].fire()
        assert notifier.kinds[-1] is Notice.TASKS_REORDERED
        assert reconciler.pending_notices == 0

    def test_hover_does_not_announce(self, reconciler, notifier):
        reconciler.drag_start(0)
        reconciler.hover(0, 2)
        assert notifier.kinds == [Notice.DRAG_STARTED]

    def test_close_stops_pending_notices(self, reconciler, scheduler, notifier):
        reconciler.drag_start(0)
        reconciler.drop(0, 2)
        reconciler.close()
        assert scheduler.timers[0].stopped
        scheduler.timers[0].fire()
        assert Notice.TASKS_REORDERED not in notifier.kinds

    def test_without_scheduler_notice_is_immediate(self, abc_store, notifier):
        r = DragReconciler(abc_store, lambda: FilterMode.ALL, notifier=notifier)
        r.drag_start(0)
        r.drop(0, 1)
        assert notifier.kinds[-1] is Notice.TASKS_REORDERED


class RecordingStore(HistoryStore):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.dispatched = []

    def dispatch(self, action):
        self.dispatched.append(action)
        return super().dispatch(action)


class TestStoreRouting:
    def test_hover_dispatches_silent_reorder(self, notifier):
        store = RecordingStore([Task(1, "A"), Task(2, "B")], notifier=notifier)
        r = DragReconciler(store, lambda: FilterMode.ALL, notifier=notifier)
        r.drag_start(0)
        r.hover(0, 1)
        assert store.dispatched == [ReorderTasks((2, 1), announce=False)]

    def test_default_notifier_logs_drag_start(self, abc_store, caplog):
        r = DragReconciler(abc_store, lambda: FilterMode.ALL)
        with caplog.at_level(logging.INFO, logger="notices"):
            r.drag_start(0)
        assert any("drag-started" in rec.getMessage() for rec in caplog.records)
