from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence

from PyQt6 import QtCore, QtGui, QtWidgets

from launcher_core.bridge import BusExecutionBridge
from launcher_core.catalog import DEFAULT_CATALOG, Category, iter_categories, validate_catalog
from launcher_core.exporter import EXPORT_FILE_FILTER, FileLogExporter
from launcher_core.log_aggregator import LogAggregator, LogExporter, LogKind
from launcher_core.tool_state import DEFAULT_MOCK_DELAY_MS, ToolStateRegistry
from runtime_bus import RuntimeBus

from app_ui.versioning import APP_NAME, get_app_version
from app_ui.widgets.app_header import AppHeader
from app_ui.widgets.category_section import CategorySection, ToolRow
from app_ui.widgets.log_console import LogConsole

logger = logging.getLogger(__name__)


class _BusDispatchBridge(QtCore.QObject):
    """Re-posts bus callbacks onto the thread that owns this object."""

    call_dispatched = QtCore.pyqtSignal(object, object)

    def __init__(self, parent: Optional[QtCore.QObject] = None):
        super().__init__(parent)
        self.call_dispatched.connect(
            self._invoke_handler,
            QtCore.Qt.ConnectionType.QueuedConnection,
        )

    def wrap(self, handler: Callable[..., None]) -> Callable[..., None]:
        def _wrapped(*args: Any) -> None:
            self.call_dispatched.emit(handler, args)

        return _wrapped

    @QtCore.pyqtSlot(object, object)
    def _invoke_handler(self, handler: Callable[..., None], args: tuple) -> None:
        try:
            handler(*args)
        except Exception:
            logger.exception("bus callback failed")


def _qt_schedule(delay_ms: int, callback: Callable[[], None]) -> None:
    QtCore.QTimer.singleShot(int(delay_ms), callback)


class LauncherScreen(QtWidgets.QWidget):
    def __init__(
        self,
        *,
        catalog: Sequence[Category] = DEFAULT_CATALOG,
        bus: Optional[RuntimeBus] = None,
        mock_delay_ms: int = DEFAULT_MOCK_DELAY_MS,
        exporter: Optional[LogExporter] = None,
        export_dir: Optional[Path] = None,
        parent: Optional[QtWidgets.QWidget] = None,
    ):
        super().__init__(parent)
        self.catalog = validate_catalog(catalog)
        self.bus = bus

        self.console = LogConsole()
        self.log = LogAggregator(
            surface=self.console,
            exporter=exporter or FileLogExporter(self._choose_export_path, export_dir),
        )
        self.bridge = BusExecutionBridge(bus) if bus is not None else None
        self.registry = ToolStateRegistry(
            self.log,
            self.bridge,
            schedule=_qt_schedule,
            mock_delay_ms=mock_delay_ms,
        )
        self._dispatch = _BusDispatchBridge(self)

        layout = QtWidgets.QVBoxLayout(self)
        self.header = AppHeader(
            title=APP_NAME,
            version=get_app_version(),
            on_clear=self.clear_logs,
            on_export=self.export_logs,
            on_reset=self.reset_all,
        )
        layout.addWidget(self.header)

        splitter = QtWidgets.QSplitter(QtCore.Qt.Orientation.Horizontal)
        layout.addWidget(splitter, stretch=1)

        tools_scroll = QtWidgets.QScrollArea()
        tools_scroll.setWidgetResizable(True)
        tools_host = QtWidgets.QWidget()
        self._tools_layout = QtWidgets.QVBoxLayout(tools_host)
        self._tools_layout.setContentsMargins(0, 0, 0, 0)
        self.sections: List[CategorySection] = []
        self.rows: Dict[str, ToolRow] = {}
        self._build_sections()
        self._tools_layout.addStretch()
        tools_scroll.setWidget(tools_host)
        splitter.addWidget(tools_scroll)
        splitter.addWidget(self.console)
        splitter.setStretchFactor(0, 2)
        splitter.setStretchFactor(1, 3)

        if self.bridge is not None:
            self.bridge.connect(
                on_log=self._dispatch.wrap(self._on_bridge_log),
                on_done=self._dispatch.wrap(self._on_bridge_done),
            )
        logger.info(
            "launcher ready: %d categories, %d tools, backend=%s",
            len(self.sections),
            len(self.registry),
            "bus" if self.bridge and self.bridge.available() else "mock",
        )

    def _build_sections(self) -> None:
        for category in iter_categories(self.catalog):
            section = CategorySection(category, self.registry.invoke)
            for row in section.tool_rows():
                self.registry.register(row.tool_name, row)
                self.rows[row.tool_name] = row
            self._tools_layout.addWidget(section)
            self.sections.append(section)

    # --- bridge events (GUI thread)
    def _on_bridge_log(self, message: str, kind: Optional[LogKind]) -> None:
        self.log.append(message, kind=kind)

    def _on_bridge_done(self, tool_name: str, invocation_id: Optional[str]) -> None:
        self.registry.complete(tool_name, invocation_id)

    # --- header actions
    def clear_logs(self) -> None:
        self.log.clear()

    def export_logs(self) -> bool:
        return self.log.try_export()

    def reset_all(self) -> None:
        self.registry.reset_all()

    def _choose_export_path(self, suggested: str) -> Optional[str]:
        path, _ = QtWidgets.QFileDialog.getSaveFileName(
            self,
            "Export Logs",
            suggested,
            EXPORT_FILE_FILTER,
        )
        return path or None

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        if self.bridge is not None:
            self.bridge.close()
        super().closeEvent(event)
