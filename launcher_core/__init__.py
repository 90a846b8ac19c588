"""Launcher core: tool catalog, log aggregation and tool state tracking."""

from .catalog import DEFAULT_CATALOG, Category, iter_tools, tool_names, validate_catalog
from .errors import (
    DuplicateTool,
    ExportFailed,
    ExportUnavailable,
    LauncherError,
    UnknownCompletionTarget,
)
from .log_aggregator import LogAggregator, LogKind, LogLine, classify_line
from .tool_state import (
    STATE_DONE,
    STATE_IDLE,
    STATE_LABELS,
    STATE_RUNNING,
    ToolStateRegistry,
)

__all__ = [
    "Category",
    "DEFAULT_CATALOG",
    "iter_tools",
    "tool_names",
    "validate_catalog",
    "LauncherError",
    "DuplicateTool",
    "ExportUnavailable",
    "ExportFailed",
    "UnknownCompletionTarget",
    "LogAggregator",
    "LogKind",
    "LogLine",
    "classify_line",
    "ToolStateRegistry",
    "STATE_IDLE",
    "STATE_RUNNING",
    "STATE_DONE",
    "STATE_LABELS",
]
