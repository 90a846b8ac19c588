"""Simulated execution backend for dev runs and smoke tests.

Answers ``tool.execute.request`` with the same banner / output / done
sequence a real backend streams, without touching the host system.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Callable, List, Optional

from . import topics
from .bus import RuntimeBus
from .messages import MessageEnvelope

logger = logging.getLogger(__name__)

SOURCE_DEMO = "demo.backend"
BANNER_RULE = "====================================="
MIN_VISIBLE_MS = 700


def format_banner(tool_name: str, started: float) -> str:
    stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime(started))
    return "\n".join(
        [
            BANNER_RULE,
            f"[ {tool_name} ]",
            f"Time : {stamp}",
            "Status : Running...",
            BANNER_RULE,
        ]
    )


class DemoBackend:
    def __init__(
        self,
        bus: RuntimeBus,
        *,
        step_ms: int = 150,
        min_duration_ms: int = MIN_VISIBLE_MS,
        threaded: bool = True,
        sleep: Callable[[float], None] = time.sleep,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.bus = bus
        self._step = max(0, int(step_ms)) / 1000
        self._min_duration = max(0, int(min_duration_ms)) / 1000
        self._threaded = threaded
        self._sleep = sleep
        self._clock = clock
        self._sub_id: Optional[str] = None
        self._threads: List[threading.Thread] = []

    def start(self) -> None:
        if self._sub_id is None:
            self._sub_id = self.bus.subscribe(topics.TOOL_EXECUTE_REQUEST, self._on_request)
            logger.info("demo backend listening on %s", topics.TOOL_EXECUTE_REQUEST)

    def stop(self) -> None:
        if self._sub_id is not None:
            self.bus.unsubscribe(self._sub_id)
            self._sub_id = None

    def join(self, timeout: Optional[float] = None) -> None:
        for thread in list(self._threads):
            thread.join(timeout)
        self._threads = [t for t in self._threads if t.is_alive()]

    def _on_request(self, envelope: MessageEnvelope) -> None:
        tool_name = envelope.get_text("tool")
        invocation_id = envelope.payload.get("invocation_id")
        if not self._threaded:
            self._run(tool_name, invocation_id)
            return
        thread = threading.Thread(
            target=self._run,
            args=(tool_name, invocation_id),
            name=f"demo-backend-{tool_name}",
            daemon=True,
        )
        self._threads = [t for t in self._threads if t.is_alive()]
        self._threads.append(thread)
        thread.start()

    def _emit(self, message: str, **extra: object) -> None:
        payload = {"message": message}
        payload.update(extra)
        self.bus.publish(topics.TOOL_LOG, payload, source=SOURCE_DEMO)

    def _run(self, tool_name: str, invocation_id: object) -> None:
        started = self._clock()
        self._emit(format_banner(tool_name, time.time()), tool=tool_name)
        if not tool_name:
            self._emit("[ERROR] Failed to start command: empty tool name", kind="error")
        else:
            for index in range(1, 3):
                if self._step:
                    self._sleep(self._step)
                self._emit(f"(simulated) {tool_name}: step {index}/2", tool=tool_name)
            self._emit("\n[OK] Process completed successfully.", tool=tool_name, kind="success")

        elapsed = self._clock() - started
        if elapsed < self._min_duration:
            self._sleep(self._min_duration - elapsed)

        self.bus.publish(
            topics.TOOL_DONE,
            {"tool": tool_name, "invocation_id": invocation_id},
            source=SOURCE_DEMO,
            correlation_id=str(invocation_id) if invocation_id else None,
        )
