"""Main application window: owns the task history and renders its filtered view."""

import logging
from typing import Callable, Iterable

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QPushButton, QHBoxLayout, QLineEdit,
    QButtonGroup, QStatusBar
)
from PySide6.QtCore import QTimer
from PySide6.QtGui import QKeySequence, QShortcut

import style
from actions import AddTask, DeleteTask, ToggleComplete, Undo, Redo
from config import Settings, settings as default_settings
from data import Task
from drag import DragReconciler
from filter_view import FilterMode, filter_view
from history import HistoryStore
from list_widget import TaskListWidget
from notices import Notice

logger = logging.getLogger(__name__)


class StatusBarNotifier:
    """Shows notices in the window's status bar, like a short-lived toast."""

    def __init__(self, status_bar: QStatusBar, timeout_ms: int):
        self._status_bar = status_bar
        self._timeout_ms = timeout_ms

    def notify(self, notice: Notice, message: str) -> None:
        self._status_bar.showMessage(message, self._timeout_ms)


class MainWindow(QMainWindow):
    def __init__(self, tasks: Iterable[Task] = (), config: Settings = default_settings):
        super().__init__()
        self.setWindowTitle("Task Manager")
        self.resize(500, 600)

        self._notifier = StatusBarNotifier(self.statusBar(), config.NOTICE_TIMEOUT_MS)
        self._store = HistoryStore(tasks, notifier=self._notifier)
        self._filter = FilterMode(config.DEFAULT_FILTER)
        self._reconciler = DragReconciler(
            self._store,
            lambda: self._filter,
            schedule=self._start_timer,
            notifier=self._notifier,
            drop_notice_delay_ms=config.DROP_NOTICE_DELAY_MS,
        )

        # Shortcuts
        QShortcut(QKeySequence.StandardKey.Undo, self, self.undo)
        QShortcut(QKeySequence.StandardKey.Redo, self, self.redo)

        self._build_ui()
        self._refresh()

    @property
    def store(self) -> HistoryStore:
        return self._store

    @property
    def reconciler(self) -> DragReconciler:
        return self._reconciler

    @property
    def filter_mode(self) -> FilterMode:
        return self._filter

    # ------------------------------------------------------------------ #
    # UI construction                                                      #
    # ------------------------------------------------------------------ #

    def _build_ui(self):
        central = QWidget()
        self.setCentralWidget(central)
        root = QVBoxLayout(central)
        root.setContentsMargins(8, 8, 8, 8)
        root.setSpacing(6)

        # Entry row
        entry = QHBoxLayout()
        self.title_input = QLineEdit()
        self.title_input.setPlaceholderText("Enter a task")
        self.title_input.returnPressed.connect(self.add_task)
        btn_add = QPushButton("Add Task")
        btn_add.setFixedHeight(style.BUTTON_HEIGHT)
        btn_add.clicked.connect(self.add_task)
        entry.addWidget(self.title_input)
        entry.addWidget(btn_add)
        root.addLayout(entry)

        # Filters and history
        toolbar = QHBoxLayout()
        self._filter_group = QButtonGroup(self)
        self._filter_group.setExclusive(True)
        self._filter_buttons: dict[FilterMode, QPushButton] = {}
        for mode, label in ((FilterMode.ALL, "All"),
                            (FilterMode.COMPLETED, "Completed"),
                            (FilterMode.PENDING, "Pending")):
            btn = QPushButton(label)
            btn.setCheckable(True)
            btn.setChecked(mode is self._filter)
            btn.setFixedHeight(style.BUTTON_HEIGHT)
            btn.setStyleSheet(
                f"QPushButton:checked {{ background: {style.FILTER_CHECKED_BG};"
                f" color: {style.FILTER_CHECKED_FG}; }}"
            )
            btn.clicked.connect(lambda _=False, m=mode: self.set_filter(m))
            self._filter_group.addButton(btn)
            self._filter_buttons[mode] = btn
            toolbar.addWidget(btn)
        toolbar.addStretch()

        self.undo_button = QPushButton("⬅ Undo")
        self.undo_button.clicked.connect(self.undo)
        self.redo_button = QPushButton("Redo ➡")
        self.redo_button.clicked.connect(self.redo)
        for btn in (self.undo_button, self.redo_button):
            btn.setFixedHeight(style.BUTTON_HEIGHT)
            toolbar.addWidget(btn)
        root.addLayout(toolbar)

        # Tasks
        self.task_list = TaskListWidget(self._reconciler)
        self.task_list.toggle_requested.connect(self.toggle_task)
        self.task_list.delete_requested.connect(self.delete_task)
        self.task_list.order_changed.connect(self._refresh)
        root.addWidget(self.task_list)

        self.title_input.setFocus()

    # ------------------------------------------------------------------ #
    # Actions                                                              #
    # ------------------------------------------------------------------ #

    def add_task(self) -> None:
        if self._store.dispatch(AddTask(self.title_input.text())):
            self.title_input.clear()
            self._refresh()
        self.title_input.setFocus()

    def delete_task(self, task_id: int) -> None:
        if self._store.dispatch(DeleteTask(task_id)):
            self._refresh()

    def toggle_task(self, task_id: int) -> None:
        if self._store.dispatch(ToggleComplete(task_id)):
            self._refresh()

    def undo(self) -> None:
        if self._store.dispatch(Undo()):
            self._refresh()

    def redo(self) -> None:
        if self._store.dispatch(Redo()):
            self._refresh()

    def set_filter(self, mode: FilterMode) -> None:
        self._filter = FilterMode(mode)
        self._filter_buttons[self._filter].setChecked(True)
        self._refresh()

    def visible_tasks(self):
        return filter_view(self._store.present, self._filter)

    # ------------------------------------------------------------------ #
    # Helpers                                                              #
    # ------------------------------------------------------------------ #

    def _refresh(self) -> None:
        self.task_list.show_tasks(self.visible_tasks())
        self.undo_button.setEnabled(self._store.can_undo)
        self.redo_button.setEnabled(self._store.can_redo)

    def _start_timer(self, delay_ms: int, callback: Callable[[], None]) -> QTimer:
        """Single-shot timer owned by the window, so it dies with it."""
        timer = QTimer(self)
        timer.setSingleShot(True)
        timer.timeout.connect(callback)
        timer.timeout.connect(timer.deleteLater)
        timer.start(delay_ms)
        return timer

    def closeEvent(self, event):
        logger.debug("Closing; cancelling %d pending notices", self._reconciler.pending_notices)
        self._reconciler.close()
        event.accept()
