from __future__ import annotations


class LauncherError(Exception):
    pass


class DuplicateTool(LauncherError):
    """A tool name was declared or registered more than once."""

    def __init__(self, tool_name: str, where: str = "") -> None:
        self.tool_name = tool_name
        detail = f" ({where})" if where else ""
        super().__init__(f"duplicate tool name: {tool_name!r}{detail}")


class ExportUnavailable(LauncherError):
    def __init__(self, message: str = "no log exporter available") -> None:
        super().__init__(message)


class ExportFailed(LauncherError):
    pass


class UnknownCompletionTarget(LauncherError):
    """Completion event for a tool the registry does not know.

    Only used to build the warning; never raised out of the registry.
    """

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"received done event for unknown tool: {tool_name!r}")
