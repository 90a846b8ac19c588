from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Protocol

from .errors import ExportFailed, ExportUnavailable, LauncherError

logger = logging.getLogger(__name__)

CLEAR_NOTICE = "--- Console Cleared ---"
RESET_NOTICE = "System Reset Complete. Ready."

HEADER_PREFIX = "==="
ERROR_PREFIX = "[ERROR]"
SUCCESS_PREFIX = "[OK]"


class LogKind(str, Enum):
    HEADER = "header"
    ERROR = "error"
    SUCCESS = "success"
    PLAIN = "plain"
    SYSTEM = "system"


@dataclass(frozen=True)
class LogLine:
    text: str
    kind: LogKind = LogKind.PLAIN


class LogSurface(Protocol):
    def show_line(self, line: LogLine) -> None:
        ...

    def clear_view(self) -> None:
        ...


class LogExporter(Protocol):
    def export_logs(self, content: str) -> object:
        ...


def classify_line(text: str) -> LogKind:
    if text.startswith(HEADER_PREFIX):
        return LogKind.HEADER
    if text.startswith(ERROR_PREFIX):
        return LogKind.ERROR
    if text.startswith(SUCCESS_PREFIX):
        return LogKind.SUCCESS
    return LogKind.PLAIN


def coerce_kind(value: object) -> Optional[LogKind]:
    """Map a kind tag attached at the source (bus payload) to a LogKind."""
    if isinstance(value, LogKind):
        return value
    if not value:
        return None
    try:
        return LogKind(str(value).strip().lower())
    except ValueError:
        return None


class LogAggregator:
    """Ordered, append-only console log with a flattened export buffer."""

    def __init__(
        self,
        surface: Optional[LogSurface] = None,
        exporter: Optional[LogExporter] = None,
    ) -> None:
        self._lines: List[str] = []
        self._surface = surface
        self._exporter = exporter

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    @property
    def text(self) -> str:
        return "".join(f"{line}\n" for line in self._lines)

    def __len__(self) -> int:
        return len(self._lines)

    # --- operations
    def append(
        self,
        line: Optional[str],
        classify: bool = True,
        kind: Optional[LogKind] = None,
    ) -> Optional[LogLine]:
        if not line:
            return None
        text = str(line)
        if kind is None:
            kind = classify_line(text) if classify else LogKind.PLAIN
        self._lines.append(text)
        entry = LogLine(text=text, kind=kind)
        if self._surface is not None:
            self._surface.show_line(entry)
        return entry

    def clear(self, notice: str = CLEAR_NOTICE, record: bool = True) -> None:
        self._lines.clear()
        if self._surface is not None:
            self._surface.clear_view()
        if not notice:
            return
        if record:
            self.append(notice, classify=False)
        elif self._surface is not None:
            self._surface.show_line(LogLine(text=notice, kind=LogKind.SYSTEM))

    def export(self) -> str:
        if self._exporter is None:
            raise ExportUnavailable()
        content = self.text
        try:
            self._exporter.export_logs(content)
        except LauncherError:
            raise
        except Exception as exc:
            raise ExportFailed(str(exc)) from exc
        return content

    def try_export(self) -> bool:
        try:
            self.export()
        except LauncherError as exc:
            logger.warning("log export failed: %s", exc)
            self.append(f"{ERROR_PREFIX} Save failed: {exc}")
            return False
        return True
