"""Custom widget for a single task row: drag handle, status toggle, title, delete."""

from PySide6.QtWidgets import (
    QWidget, QHBoxLayout, QLabel, QPushButton, QSizePolicy, QFrame, QApplication
)
from PySide6.QtCore import Qt, Signal, QPoint
from PySide6.QtGui import QPalette

import style
from data import Task


class DragHandle(QFrame):
    """Narrow strip on the left of a row; dragging it starts a reorder."""
    drag_requested = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._drag_start: QPoint | None = None
        self.setFixedWidth(style.DRAG_HANDLE_WIDTH)
        self.setCursor(Qt.CursorShape.OpenHandCursor)
        self.setToolTip("Drag to reorder")
        self.setStyleSheet(
            f"QFrame {{ background: {style.DRAG_HANDLE_COLOR}; border-radius: 3px; }}"
            f"QFrame:hover {{ background: {style.DRAG_HANDLE_HOVER_COLOR}; }}"
        )

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self._drag_start = event.position().toPoint()
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        if (self._drag_start is not None
                and event.buttons() & Qt.MouseButton.LeftButton):
            dist = (event.position().toPoint() - self._drag_start).manhattanLength()
            if dist >= QApplication.startDragDistance():
                self._drag_start = None
                self.drag_requested.emit()
                return  # row may be rebuilt by the time the drag completes
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        self._drag_start = None
        super().mouseReleaseEvent(event)


class StatusToggle(QLabel):
    """Check/cross glyph; a click flips the task's completion."""
    clicked = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setFixedWidth(style.STATUS_WIDTH)
        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setCursor(Qt.CursorShape.PointingHandCursor)

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self.clicked.emit()
            event.accept()
            return
        super().mousePressEvent(event)


class TaskRow(QWidget):
    """A single task row: [handle | status | title | delete]."""
    toggle_requested = Signal(int)   # task id
    delete_requested = Signal(int)   # task id
    drag_requested = Signal()

    def __init__(self, task: Task, parent=None):
        super().__init__(parent)
        self._task = task

        layout = QHBoxLayout(self)
        layout.setContentsMargins(2, 2, 2, 2)
        layout.setSpacing(6)

        self.handle = DragHandle(self)
        self.handle.drag_requested.connect(self.drag_requested)

        self.status = StatusToggle(self)
        self.status.clicked.connect(lambda: self.toggle_requested.emit(self._task.id))

        self.title = QLabel(self)
        self.title.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred)
        self.title.setWordWrap(True)

        self.delete_button = QPushButton("✕", self)
        self.delete_button.setFlat(True)
        self.delete_button.setToolTip("Delete task")
        self.delete_button.clicked.connect(lambda: self.delete_requested.emit(self._task.id))

        layout.addWidget(self.handle)
        layout.addWidget(self.status)
        layout.addWidget(self.title)
        layout.addWidget(self.delete_button)

        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Minimum)
        self.set_task(task)

    @property
    def task(self) -> Task:
        return self._task

    def set_task(self, task: Task) -> None:
        self._task = task
        self.status.setText(
            style.STATUS_DONE_GLYPH if task.completed else style.STATUS_PENDING_GLYPH
        )
        self.title.setText(task.title)

        font = self.title.font()
        font.setStrikeOut(task.completed)
        self.title.setFont(font)

        palette = self.title.palette()
        palette.setColor(
            QPalette.ColorRole.WindowText,
            style.TITLE_DONE_COLOR if task.completed else style.TITLE_COLOR,
        )
        self.title.setPalette(palette)
