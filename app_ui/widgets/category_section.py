from __future__ import annotations

from typing import Callable, Dict, List, Optional

from PyQt6 import QtCore, QtWidgets

from launcher_core.catalog import Category
from launcher_core.tool_state import STATE_DONE, STATE_IDLE, STATE_LABELS, STATE_RUNNING

_BUTTON_STYLES = {
    STATE_IDLE: "",
    STATE_RUNNING: "QPushButton { color: #FF9F0A; }",
    STATE_DONE: "QPushButton { color: #32D74B; }",
}

CHEVRON_EXPANDED = "▼"
CHEVRON_COLLAPSED = "▶"


def tool_object_name(tool_name: str) -> str:
    """Stable widget id for a tool row ("Ping Connectivity" -> "btn-ping-connectivity")."""
    slug = "-".join(tool_name.split())
    slug = "".join(ch for ch in slug if ch.isascii() and (ch.isalnum() or ch == "-"))
    return f"btn-{slug.lower()}"


class ToolRow(QtWidgets.QWidget):
    """Name label + run button. The registry drives it through set_tool_state."""

    def __init__(
        self,
        tool_name: str,
        on_activate: Callable[[str], None],
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.tool_name = tool_name
        self.state = STATE_IDLE

        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(12, 2, 4, 2)

        self.name_label = QtWidgets.QLabel(tool_name)
        layout.addWidget(self.name_label, stretch=1)

        self.button = QtWidgets.QPushButton(STATE_LABELS[STATE_IDLE])
        self.button.setObjectName(tool_object_name(tool_name))
        self.button.setFixedWidth(96)
        self.button.clicked.connect(lambda _=False: on_activate(self.tool_name))
        layout.addWidget(self.button)

    def set_tool_state(self, state: str) -> None:
        self.state = state
        self.button.setText(STATE_LABELS.get(state, state))
        self.button.setEnabled(state == STATE_IDLE)
        self.button.setProperty("toolState", state)
        self.button.setStyleSheet(_BUTTON_STYLES.get(state, ""))

    def is_interactive(self) -> bool:
        return self.button.isEnabled()


class CategorySection(QtWidgets.QFrame):
    """Collapsible block: header (icon, title, chevron) over a list of tool rows."""

    toggled = QtCore.pyqtSignal(bool)

    def __init__(
        self,
        category: Category,
        on_activate: Callable[[str], None],
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.category = category
        self.setObjectName(f"category-{category.category_id}")
        self.setStyleSheet(
            f"QFrame#{self.objectName()} {{ border: 1px solid #ddd; border-radius: 4px; }}"
        )

        layout = QtWidgets.QVBoxLayout(self)
        layout.setContentsMargins(6, 4, 6, 4)
        layout.setSpacing(2)

        self.header = QtWidgets.QPushButton()
        self.header.setFlat(True)
        self.header.setStyleSheet("QPushButton { text-align: left; font-weight: bold; border: none; }")
        self.header.clicked.connect(lambda _=False: self.toggle())
        layout.addWidget(self.header)

        self.body = QtWidgets.QWidget()
        body_layout = QtWidgets.QVBoxLayout(self.body)
        body_layout.setContentsMargins(0, 0, 0, 0)
        body_layout.setSpacing(0)
        self.rows: Dict[str, ToolRow] = {}
        for tool_name in category.tools:
            row = ToolRow(tool_name, on_activate)
            body_layout.addWidget(row)
            self.rows[tool_name] = row
        layout.addWidget(self.body)

        self._expanded = True
        self._update_header()

    def _update_header(self) -> None:
        chevron = CHEVRON_EXPANDED if self._expanded else CHEVRON_COLLAPSED
        self.header.setText(f"{self.category.icon}  {self.category.title}    {chevron}")

    def is_expanded(self) -> bool:
        return self._expanded

    def set_expanded(self, expanded: bool) -> None:
        if expanded == self._expanded:
            return
        self._expanded = expanded
        self.body.setVisible(expanded)
        self._update_header()
        self.toggled.emit(expanded)

    def toggle(self) -> None:
        self.set_expanded(not self._expanded)

    def tool_rows(self) -> List[ToolRow]:
        return [self.rows[name] for name in self.category.tools]
