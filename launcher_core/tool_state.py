from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Protocol

from .errors import DuplicateTool, UnknownCompletionTarget
from .log_aggregator import ERROR_PREFIX, RESET_NOTICE, LogAggregator

logger = logging.getLogger(__name__)

STATE_IDLE = "idle"
STATE_RUNNING = "running"
STATE_DONE = "done"

STATE_LABELS = {
    STATE_IDLE: "Run",
    STATE_RUNNING: "Running...",
    STATE_DONE: "Done",
}

DEFAULT_MOCK_DELAY_MS = 1000

Scheduler = Callable[[int, Callable[[], None]], None]


class ToolControl(Protocol):
    def set_tool_state(self, state: str) -> None:
        ...


class ExecutionBridge(Protocol):
    def available(self) -> bool:
        ...

    def execute_command(self, tool_name: str, invocation_id: Optional[str] = None) -> None:
        ...


@dataclass
class _ToolEntry:
    control: ToolControl
    state: str = STATE_IDLE
    invocation_id: Optional[str] = None


class ToolStateRegistry:
    """Tool name -> lifecycle state and bound control.

    All calls are expected on one thread (the GUI thread); the double-click
    guard in ``invoke`` relies on that.
    ``schedule(delay_ms, callback)`` must defer the callback; the GUI passes
    ``QTimer.singleShot``.
    """

    def __init__(
        self,
        log: LogAggregator,
        bridge: Optional[ExecutionBridge] = None,
        *,
        schedule: Scheduler,
        mock_delay_ms: int = DEFAULT_MOCK_DELAY_MS,
    ) -> None:
        self._log = log
        self._bridge = bridge
        self._schedule = schedule
        self._mock_delay_ms = max(0, int(mock_delay_ms))
        self._entries: Dict[str, _ToolEntry] = {}

    def __contains__(self, tool_name: object) -> bool:
        return tool_name in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._entries))

    def register(self, tool_name: str, control: ToolControl) -> None:
        if tool_name in self._entries:
            raise DuplicateTool(tool_name, "already registered")
        self._entries[tool_name] = _ToolEntry(control=control)
        control.set_tool_state(STATE_IDLE)

    def state_of(self, tool_name: str) -> Optional[str]:
        entry = self._entries.get(tool_name)
        return entry.state if entry else None

    def snapshot_states(self) -> Dict[str, str]:
        return {name: entry.state for name, entry in self._entries.items()}

    def running_tools(self) -> List[str]:
        return [name for name, entry in self._entries.items() if entry.state == STATE_RUNNING]

    def invoke(self, tool_name: str) -> Optional[str]:
        """Start a tool if it is idle; return its invocation id, else None."""
        entry = self._entries.get(tool_name)
        if entry is None:
            logger.warning("invoke for unregistered tool: %s", tool_name)
            return None
        if entry.state != STATE_IDLE:
            return None

        invocation_id = uuid.uuid4().hex
        entry.state = STATE_RUNNING
        entry.invocation_id = invocation_id
        entry.control.set_tool_state(STATE_RUNNING)
        logger.info("tool started: %s invocation=%s", tool_name, invocation_id)

        bridge = self._bridge
        if bridge is None or not bridge.available():
            self._log.append(f"[MOCK] Starting {tool_name}...")
            self._schedule(
                self._mock_delay_ms,
                lambda: self.complete(tool_name, invocation_id),
            )
            return invocation_id

        try:
            bridge.execute_command(tool_name, invocation_id)
        except Exception as exc:
            logger.error("dispatch failed for %s: %s", tool_name, exc)
            self._log.append(f"{ERROR_PREFIX} Failed to dispatch {tool_name}: {exc}")
            self.complete(tool_name, invocation_id)
        return invocation_id

    def complete(self, tool_name: str, invocation_id: Optional[str] = None) -> bool:
        entry = self._entries.get(tool_name)
        if entry is None:
            logger.warning("%s", UnknownCompletionTarget(tool_name))
            return False
        if invocation_id is not None and invocation_id != entry.invocation_id:
            logger.warning(
                "ignoring stale done event for %s: invocation=%s current=%s",
                tool_name,
                invocation_id,
                entry.invocation_id,
            )
            return False
        # Done is sticky until reset_all, whatever the prior state was.
        entry.state = STATE_DONE
        entry.invocation_id = None
        entry.control.set_tool_state(STATE_DONE)
        logger.info("tool done: %s", tool_name)
        return True

    def reset_all(self) -> None:
        for entry in self._entries.values():
            entry.state = STATE_IDLE
            entry.invocation_id = None
            entry.control.set_tool_state(STATE_IDLE)
        self._log.clear(RESET_NOTICE, record=False)
        logger.info("reset all tools (%d)", len(self._entries))
