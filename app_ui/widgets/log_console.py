from __future__ import annotations

import html
from typing import Optional

from PyQt6 import QtGui, QtWidgets

from launcher_core.log_aggregator import LogKind, LogLine

KIND_COLORS = {
    LogKind.HEADER: "#86868B",
    LogKind.ERROR: "#FF453A",
    LogKind.SUCCESS: "#32D74B",
    LogKind.SYSTEM: "#86868B",
}


def line_to_html(line: LogLine) -> str:
    body = html.escape(line.text).replace("\n", "<br>")
    style = []
    color = KIND_COLORS.get(line.kind)
    if color:
        style.append(f"color: {color};")
    if line.kind == LogKind.SYSTEM:
        style.append("font-style: italic;")
    if not style:
        return f"<span>{body}</span>"
    return f'<span style="{" ".join(style)}">{body}</span>'


class LogConsole(QtWidgets.QTextEdit):
    """Read-only log surface fed by the LogAggregator."""

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self.setReadOnly(True)
        self.setLineWrapMode(QtWidgets.QTextEdit.LineWrapMode.NoWrap)
        font = QtGui.QFontDatabase.systemFont(QtGui.QFontDatabase.SystemFont.FixedFont)
        self.setFont(font)
        self.setPlaceholderText("Tool output will appear here.")
        self._shown = 0

    def show_line(self, line: LogLine) -> None:
        self.append(line_to_html(line))
        self._shown += 1
        bar = self.verticalScrollBar()
        bar.setValue(bar.maximum())

    def clear_view(self) -> None:
        self.clear()
        self._shown = 0

    def shown_count(self) -> int:
        return self._shown
