from __future__ import annotations

from typing import Callable, Optional

from PyQt6 import QtWidgets


class AppHeader(QtWidgets.QWidget):
    """Shared header: title + version + console actions."""

    def __init__(
        self,
        *,
        title: str,
        version: str = "",
        on_clear: Optional[Callable[[], None]] = None,
        on_export: Optional[Callable[[], None]] = None,
        on_reset: Optional[Callable[[], None]] = None,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)

        layout = QtWidgets.QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(8)

        title_label = QtWidgets.QLabel(title)
        title_label.setStyleSheet("font-size: 18px; font-weight: bold;")
        layout.addWidget(title_label)

        self.version_label = QtWidgets.QLabel(version)
        self.version_label.setStyleSheet("color: #86868B;")
        layout.addWidget(self.version_label)
        layout.addStretch()

        self._actions_layout = QtWidgets.QHBoxLayout()
        self._actions_layout.setContentsMargins(0, 0, 0, 0)
        self._actions_layout.setSpacing(6)
        layout.addLayout(self._actions_layout)

        self.clear_btn = self._add_action("Clear Logs", on_clear)
        self.export_btn = self._add_action("Export Logs", on_export)
        self.reset_btn = self._add_action("Reset All", on_reset)

    def _add_action(
        self, label: str, callback: Optional[Callable[[], None]]
    ) -> Optional[QtWidgets.QPushButton]:
        if callback is None:
            return None
        btn = QtWidgets.QPushButton(label)
        btn.clicked.connect(lambda _=False: callback())
        self._actions_layout.addWidget(btn)
        return btn
