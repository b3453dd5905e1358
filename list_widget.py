"""List widget that renders the filtered tasks and drives the drag reconciler."""

from PySide6.QtWidgets import (
    QListWidget, QListWidgetItem, QAbstractItemView, QSizePolicy
)
from PySide6.QtCore import Qt, Signal, QMimeData, QByteArray
from PySide6.QtGui import QDrag

import style
from data import Tasks
from drag import DragReconciler
from item_widget import TaskRow


_MIME_TYPE = "application/x-tasks-row"
_ID_ROLE = Qt.ItemDataRole.UserRole


class TaskListWidget(QListWidget):
    """
    Displays one TaskRow per task in the current filter view.

    Acts as the drag transport for the reconciler:
    - drag start on a row's handle      -> drag_start(row)
    - drag move over another row         -> hover(current, row)
    - drop on the list                   -> drop(current, row)
    - drag ending anywhere else          -> cancel()
    """
    toggle_requested = Signal(int)    # task id
    delete_requested = Signal(int)    # task id
    order_changed = Signal()          # a hover or drop reordered the tasks

    def __init__(self, reconciler: DragReconciler, parent=None):
        super().__init__(parent)
        self._reconciler = reconciler

        self.setDragDropMode(QAbstractItemView.DragDropMode.DragDrop)
        self.setDefaultDropAction(Qt.DropAction.MoveAction)
        self.setAcceptDrops(True)
        self.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
        self.setSpacing(2)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setStyleSheet(
            f"QListWidget {{ border: none; background: {style.LIST_BG}; }}"
            f"QListWidget::item {{ background: {style.ITEM_BG}; border: 1px solid {style.ITEM_BORDER};"
            "  border-radius: 4px; margin: 1px; }"
            f"QListWidget::item:selected {{ background: {style.ITEM_SELECTED_BG};"
            f"  border-color: {style.ITEM_SELECTED_BORDER}; }}"
        )

    # ------------------------------------------------------------------ #
    # Rendering                                                            #
    # ------------------------------------------------------------------ #

    def show_tasks(self, tasks: Tasks) -> None:
        """Rebuild the rows from a freshly derived filter view."""
        self.clear()
        for task in tasks:
            item = QListWidgetItem()
            item.setData(_ID_ROLE, task.id)
            self.addItem(item)
            row = TaskRow(task, self)
            row.toggle_requested.connect(self.toggle_requested)
            row.delete_requested.connect(self.delete_requested)
            row.drag_requested.connect(lambda item=item: self._start_drag(item))
            self.setItemWidget(item, row)
            item.setSizeHint(row.sizeHint())

    def task_ids(self) -> list[int]:
        return [self.item(i).data(_ID_ROLE) for i in range(self.count())]

    # ------------------------------------------------------------------ #
    # Drag and drop overrides                                              #
    # ------------------------------------------------------------------ #

    def startDrag(self, supported_actions):
        item = self.currentItem()
        if item is not None:
            self._start_drag(item)

    def dragEnterEvent(self, event):
        if event.mimeData().hasFormat(_MIME_TYPE):
            event.acceptProposedAction()
        else:
            event.ignore()

    def dragMoveEvent(self, event):
        if not event.mimeData().hasFormat(_MIME_TYPE):
            event.ignore()
            return
        from_index = self._reconciler.current_index
        to_index = self._row_at(event)
        if from_index >= 0 and self._reconciler.hover(from_index, to_index):
            self.order_changed.emit()
        event.acceptProposedAction()

    def dropEvent(self, event):
        if not event.mimeData().hasFormat(_MIME_TYPE):
            event.ignore()
            return
        from_index = self._reconciler.current_index
        to_index = self._row_at(event)
        if self._reconciler.drop(from_index, to_index):
            self.order_changed.emit()
        event.acceptProposedAction()

    # ------------------------------------------------------------------ #
    # Private helpers                                                      #
    # ------------------------------------------------------------------ #

    def _start_drag(self, item: QListWidgetItem) -> None:
        index = self.row(item)
        if index < 0 or not self._reconciler.drag_start(index):
            return

        mime = QMimeData()
        mime.setData(_MIME_TYPE, QByteArray(str(item.data(_ID_ROLE)).encode()))

        drag = QDrag(self)
        drag.setMimeData(mime)
        self._exec_drag(drag)

        # No drop reached us: the transport's did-drop signal is false
        if self._reconciler.dragging:
            self._reconciler.cancel()

    def _exec_drag(self, drag: QDrag) -> Qt.DropAction:
        """Run the platform drag loop; returns once the gesture ends."""
        return drag.exec(Qt.DropAction.MoveAction)

    def _row_at(self, event) -> int:
        dest_item = self.itemAt(event.position().toPoint())
        # Below the last row counts as the last row
        return self.row(dest_item) if dest_item else self.count() - 1
