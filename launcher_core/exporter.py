from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Callable, Optional

from .errors import ExportFailed

logger = logging.getLogger(__name__)

EXPORT_FILE_FILTER = "Text Files (*.txt)"

PathChooser = Callable[[str], Optional[str]]


def default_export_name(now: Optional[float] = None) -> str:
    stamp = time.strftime("%Y%m%d-%H%M%S", time.localtime(now))
    return f"checkpoint-log-{stamp}.txt"


class FileLogExporter:
    """Writes exported log text to a file picked by ``choose_path``.

    ``choose_path`` receives the suggested file name and returns the target
    path, or an empty value when the user cancels.
    """

    def __init__(self, choose_path: PathChooser, default_dir: Optional[Path] = None) -> None:
        self._choose_path = choose_path
        self._default_dir = default_dir

    def suggested_path(self) -> str:
        name = default_export_name()
        if self._default_dir:
            return str(self._default_dir / name)
        return name

    def export_logs(self, content: str) -> Optional[Path]:
        target = self._choose_path(self.suggested_path())
        if not target:
            logger.info("log export cancelled")
            return None
        path = Path(target)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise ExportFailed(f"{path}: {exc}") from exc
        logger.info("exported %d bytes of log to %s", len(content), path)
        return path
