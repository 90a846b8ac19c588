from __future__ import annotations

import logging
from typing import Callable, List, Optional

from runtime_bus import MessageEnvelope, RuntimeBus, topics

from .log_aggregator import LogKind, coerce_kind

logger = logging.getLogger(__name__)

SOURCE_UI = "launcher.ui"

LogCallback = Callable[[str, Optional[LogKind]], None]
DoneCallback = Callable[[str, Optional[str]], None]


class BusExecutionBridge:
    """Execution bridge reached over the runtime bus.

    Requests are fire-and-forget; log and done events come back on
    ``topics.TOOL_LOG`` / ``topics.TOOL_DONE`` on whatever thread the
    backend publishes from.
    """

    def __init__(self, bus: RuntimeBus, *, source: str = SOURCE_UI) -> None:
        self.bus = bus
        self._source = source
        self._subscriptions: List[str] = []

    def available(self) -> bool:
        return self.bus.has_subscribers(topics.TOOL_EXECUTE_REQUEST)

    def execute_command(self, tool_name: str, invocation_id: Optional[str] = None) -> None:
        payload = {"tool": tool_name, "invocation_id": invocation_id}
        self.bus.publish(
            topics.TOOL_EXECUTE_REQUEST,
            payload,
            source=self._source,
            correlation_id=invocation_id,
        )

    def connect(self, on_log: LogCallback, on_done: DoneCallback) -> None:
        if self._subscriptions:
            self.close()

        def _on_log(envelope: MessageEnvelope) -> None:
            message = envelope.get_text("message")
            if not message:
                return
            on_log(message, coerce_kind(envelope.payload.get("kind")))

        def _on_done(envelope: MessageEnvelope) -> None:
            tool_name = envelope.get_text("tool")
            invocation_id = envelope.payload.get("invocation_id") or None
            on_done(tool_name, str(invocation_id) if invocation_id else None)

        self._subscriptions = [
            self.bus.subscribe(topics.TOOL_LOG, _on_log),
            self.bus.subscribe(topics.TOOL_DONE, _on_done),
        ]
        logger.debug("execution bridge connected (%d subscriptions)", len(self._subscriptions))

    def close(self) -> None:
        for sub_id in self._subscriptions:
            self.bus.unsubscribe(sub_id)
        self._subscriptions = []
