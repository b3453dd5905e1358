"""Visual style constants — edit here to tweak the app's appearance."""

from PySide6.QtGui import QColor

# ── Drag handle ──────────────────────────────────────────────────────────────
DRAG_HANDLE_WIDTH = 14            # px wide strip on the left of each row
DRAG_HANDLE_COLOR = "#b0c4de"
DRAG_HANDLE_HOVER_COLOR = "#4682b4"

# ── Status toggle ────────────────────────────────────────────────────────────
STATUS_DONE_GLYPH = "✔"
STATUS_PENDING_GLYPH = "✘"
STATUS_WIDTH = 28

# ── Task title ───────────────────────────────────────────────────────────────
TITLE_COLOR = QColor("#1a1a1a")
TITLE_DONE_COLOR = QColor("#9e9e9e")

# ── List widget ──────────────────────────────────────────────────────────────
LIST_BG = "#f5f5f5"
ITEM_BG = "white"
ITEM_BORDER = "#ddd"
ITEM_SELECTED_BG = "#e3f2fd"
ITEM_SELECTED_BORDER = "#90caf9"

# ── Toolbar ──────────────────────────────────────────────────────────────────
BUTTON_HEIGHT = 28
FILTER_CHECKED_BG = "#4682b4"
FILTER_CHECKED_FG = "white"
