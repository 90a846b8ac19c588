# =============================================================================
# NAV INDEX (search these tags)
# [NAV-00] Imports / constants
# [NAV-10] Config loading (defaults/roaming)
# [NAV-20] Public getters
# [NAV-99] End
# =============================================================================

# === [NAV-00] Imports / constants ============================================
from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional, Tuple

CONFIG_PATH = Path("data/roaming/launcher_config.json")
_DEFAULT_CONFIG = {
    "mock_delay_ms": 1000,
    "demo_backend": False,
    "demo_step_ms": 150,
    "window_width": 1024,
    "window_height": 768,
    "export_dir": "",
}


# === [NAV-10] Config loading (defaults/roaming) ==============================
def load_launcher_config() -> Dict:
    path = CONFIG_PATH
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(_DEFAULT_CONFIG, indent=2), encoding="utf-8")
        return _DEFAULT_CONFIG.copy()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except Exception:
        return _DEFAULT_CONFIG.copy()
    if not isinstance(data, dict):
        return _DEFAULT_CONFIG.copy()
    for key, value in _DEFAULT_CONFIG.items():
        data.setdefault(key, value)
    return data


def save_launcher_config(data: Dict) -> None:
    CONFIG_PATH.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_PATH.write_text(json.dumps(data, indent=2), encoding="utf-8")


# === [NAV-20] Public getters ==================================================
def _get_int(config: Dict, key: str) -> int:
    try:
        value = int(config.get(key, _DEFAULT_CONFIG[key]))
    except (TypeError, ValueError):
        value = int(_DEFAULT_CONFIG[key])
    return max(0, value)


def get_mock_delay_ms(config: Optional[Dict] = None) -> int:
    return _get_int(config if config is not None else load_launcher_config(), "mock_delay_ms")


def get_demo_backend(config: Optional[Dict] = None) -> Tuple[bool, int]:
    config = config if config is not None else load_launcher_config()
    return bool(config.get("demo_backend", False)), _get_int(config, "demo_step_ms")


def get_window_size(config: Optional[Dict] = None) -> Tuple[int, int]:
    config = config if config is not None else load_launcher_config()
    width = _get_int(config, "window_width") or int(_DEFAULT_CONFIG["window_width"])
    height = _get_int(config, "window_height") or int(_DEFAULT_CONFIG["window_height"])
    return width, height


def get_export_dir(config: Optional[Dict] = None) -> Optional[Path]:
    config = config if config is not None else load_launcher_config()
    raw = str(config.get("export_dir") or "").strip()
    return Path(raw).expanduser() if raw else None


# === [NAV-99] End =============================================================
__all__ = [
    "CONFIG_PATH",
    "load_launcher_config",
    "save_launcher_config",
    "get_mock_delay_ms",
    "get_demo_backend",
    "get_window_size",
    "get_export_dir",
]
