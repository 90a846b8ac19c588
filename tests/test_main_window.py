from app_ui import main as app_main
from app_ui.versioning import APP_VERSION, get_build_info, window_title
from runtime_bus import RuntimeBus


def test_parser_flags() -> None:
    args = app_main.build_parser().parse_args(["--demo-backend", "--mock-delay-ms", "5"])
    assert args.demo_backend is True
    assert args.mock_delay_ms == 5
    defaults = app_main.build_parser().parse_args([])
    assert defaults.demo_backend is False
    assert defaults.mock_delay_ms is None


def test_main_window_uses_config(qapp) -> None:
    config = {"window_width": 800, "window_height": 600, "export_dir": ""}
    window = app_main.MainWindow(bus=RuntimeBus(), mock_delay_ms=10, config=config)
    assert window.windowTitle() == window_title()
    assert APP_VERSION in window.windowTitle()
    assert window.launcher.header.version_label.text() == APP_VERSION
    window.close()


def test_build_info() -> None:
    assert get_build_info()["app_version"] == APP_VERSION
