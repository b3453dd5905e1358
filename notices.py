"""Notification kinds and the best-effort notifier contract."""

import logging
from enum import Enum
from typing import Protocol

logger = logging.getLogger(__name__)


class Notice(str, Enum):
    TASK_ADDED = "task-added"
    TASK_DELETED = "task-deleted"
    STATUS_UPDATED = "status-updated"
    TASKS_REORDERED = "tasks-reordered"
    UNDO_PERFORMED = "undo-performed"
    REDO_PERFORMED = "redo-performed"
    VALIDATION_WARNING = "validation-warning"
    DRAG_STARTED = "drag-started"


MESSAGES: dict[Notice, str] = {
    Notice.TASK_ADDED: "Task added successfully!",
    Notice.TASK_DELETED: "Task deleted!",
    Notice.STATUS_UPDATED: "Task status updated!",
    Notice.TASKS_REORDERED: "Tasks reordered!",
    Notice.UNDO_PERFORMED: "Undo last action.",
    Notice.REDO_PERFORMED: "Redo last action.",
    Notice.VALIDATION_WARNING: "Task cannot be empty!",
    Notice.DRAG_STARTED: "Dragging task...",
}


class Notifier(Protocol):
    def notify(self, notice: Notice, message: str) -> None: ...


class LoggingNotifier:
    """Writes notices to the log; used when no UI channel is attached."""

    def notify(self, notice: Notice, message: str) -> None:
        level = logging.WARNING if notice is Notice.VALIDATION_WARNING else logging.INFO
        logger.log(level, "%s: %s", notice.value, message)


def send(notifier: "Notifier | None", notice: Notice, message: str | None = None) -> None:
    """Deliver a notice without letting the notifier affect the caller."""
    if notifier is None:
        return
    try:
        notifier.notify(notice, message or MESSAGES[notice])
    except Exception:
        logger.exception("Notifier failed to deliver %s", notice.value)
