from __future__ import annotations

import json
import sys
import time
import traceback
from pathlib import Path
from types import TracebackType
from typing import Any, Callable, Dict, Optional, Type

from .logging_setup import get_logger

_PREVIOUS_HOOK: Optional[Callable[..., Any]] = None


def get_crash_dir(base_dir: Optional[Path] = None) -> Path:
    root = base_dir or Path("data/roaming")
    crash_dir = root / "crashes"
    crash_dir.mkdir(parents=True, exist_ok=True)
    return crash_dir


def write_crash_marker(
    exc: BaseException,
    context: Dict[str, Any] | None = None,
    base_dir: Optional[Path] = None,
) -> Path:
    crash_dir = get_crash_dir(base_dir)
    payload = {
        "ts": time.time(),
        "exception_type": type(exc).__name__,
        "message": str(exc),
        "traceback": traceback.format_exception(type(exc), exc, exc.__traceback__),
        "context": context or {},
    }
    path = crash_dir / f"crash_marker_{int(time.time() * 1000)}.json"
    path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    return path


def install_excepthook(base_dir: Optional[Path] = None) -> None:
    """Log uncaught exceptions instead of letting PyQt abort the process."""
    global _PREVIOUS_HOOK
    if _PREVIOUS_HOOK is not None:
        return
    _PREVIOUS_HOOK = sys.excepthook

    def _hook(
        exc_type: Type[BaseException],
        exc: BaseException,
        tb: Optional[TracebackType],
    ) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            if _PREVIOUS_HOOK is not None:
                _PREVIOUS_HOOK(exc_type, exc, tb)
            return
        get_logger().error("uncaught exception", exc_info=(exc_type, exc, tb))
        try:
            write_crash_marker(exc, {"where": "excepthook"}, base_dir=base_dir)
        except OSError as write_exc:
            get_logger().error("crash marker write failed: %s", write_exc)

    sys.excepthook = _hook


def uninstall_excepthook() -> None:
    global _PREVIOUS_HOOK
    if _PREVIOUS_HOOK is None:
        return
    sys.excepthook = _PREVIOUS_HOOK
    _PREVIOUS_HOOK = None
