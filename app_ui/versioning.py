from __future__ import annotations

from typing import Dict

APP_NAME = "CheckPoint"
APP_VERSION = "v0.1.2"


def get_app_version() -> str:
    return APP_VERSION


def window_title() -> str:
    return f"{APP_NAME} {APP_VERSION}"


def get_build_info() -> Dict[str, str]:
    return {
        "app_name": APP_NAME,
        "app_version": get_app_version(),
    }
