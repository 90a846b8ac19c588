# =============================================================================
# NAV INDEX (search these tags)
# [NAV-00] Imports / constants
# [NAV-10] CLI arguments
# [NAV-90] MainWindow
# [NAV-99] main() entrypoint
# =============================================================================

# === [NAV-00] Imports / constants ============================================
# region NAV-00 Imports / constants
import argparse
import logging
import sys
from typing import List, Optional

from PyQt6 import QtGui, QtWidgets

from diagnostics.crash_capture import install_excepthook
from diagnostics.logging_setup import configure_logging
from launcher_core.errors import DuplicateTool
from runtime_bus import RuntimeBus
from runtime_bus.demo_backend import DemoBackend

from . import config as ui_config
from .screens.launcher import LauncherScreen
from .versioning import window_title

logger = logging.getLogger(__name__)
# endregion


# === [NAV-10] CLI arguments ==================================================
# region NAV-10 CLI arguments
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="checkpoint", description="Diagnostic tool launcher")
    parser.add_argument(
        "--demo-backend",
        action="store_true",
        help="answer tool requests with the simulated backend",
    )
    parser.add_argument(
        "--mock-delay-ms",
        type=int,
        default=None,
        help="completion delay used when no backend is listening",
    )
    return parser
# endregion


# === [NAV-90] MainWindow =====================================================
# region NAV-90 MainWindow
class MainWindow(QtWidgets.QMainWindow):
    def __init__(self, *, bus: RuntimeBus, mock_delay_ms: int, config: Optional[dict] = None):
        super().__init__()
        config = config if config is not None else ui_config.load_launcher_config()
        self.setWindowTitle(window_title())
        width, height = ui_config.get_window_size(config)
        self.resize(width, height)
        self.launcher = LauncherScreen(
            bus=bus,
            mock_delay_ms=mock_delay_ms,
            export_dir=ui_config.get_export_dir(config),
        )
        self.setCentralWidget(self.launcher)

    def closeEvent(self, event: QtGui.QCloseEvent) -> None:
        self.launcher.close()
        super().closeEvent(event)
# endregion


# === [NAV-99] main() entrypoint =============================================
# region NAV-99 main()
def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    log_info = configure_logging()
    install_excepthook()
    config = ui_config.load_launcher_config()
    logger.info("starting %s, log=%s", window_title(), log_info["log_path"])

    mock_delay_ms = ui_config.get_mock_delay_ms(config)
    if args.mock_delay_ms is not None:
        mock_delay_ms = max(0, args.mock_delay_ms)

    app = QtWidgets.QApplication(sys.argv[:1])
    bus = RuntimeBus()
    demo_enabled, demo_step_ms = ui_config.get_demo_backend(config)
    backend = None
    if args.demo_backend or demo_enabled:
        backend = DemoBackend(bus, step_ms=demo_step_ms)
        backend.start()

    try:
        window = MainWindow(bus=bus, mock_delay_ms=mock_delay_ms, config=config)
    except DuplicateTool as exc:
        logger.error("broken tool catalog: %s", exc)
        QtWidgets.QMessageBox.critical(None, "CheckPoint", f"Broken tool catalog: {exc}")
        return 2
    window.show()
    code = app.exec()
    if backend is not None:
        backend.stop()
    return code


if __name__ == "__main__":
    sys.exit(main())
# endregion
