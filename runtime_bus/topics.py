"""Topic constants for the runtime bus."""

# Execution bridge: UI -> backend
TOOL_EXECUTE_REQUEST = "tool.execute.request"

# Execution bridge: backend -> UI
TOOL_LOG = "tool.log"
TOOL_DONE = "tool.done"

__all__ = [
    "TOOL_EXECUTE_REQUEST",
    "TOOL_LOG",
    "TOOL_DONE",
]
