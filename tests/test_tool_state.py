import logging

import pytest

from launcher_core.catalog import tool_names
from launcher_core.errors import DuplicateTool
from launcher_core.log_aggregator import RESET_NOTICE, LogAggregator
from launcher_core.tool_state import (
    STATE_DONE,
    STATE_IDLE,
    STATE_LABELS,
    STATE_RUNNING,
    ToolStateRegistry,
)


class _Control:
    def __init__(self) -> None:
        self.history: list[str] = []

    @property
    def state(self) -> str:
        return self.history[-1]

    @property
    def label(self) -> str:
        return STATE_LABELS[self.state]

    @property
    def interactive(self) -> bool:
        return self.state == STATE_IDLE

    def set_tool_state(self, state: str) -> None:
        self.history.append(state)


class _Bridge:
    def __init__(self, available: bool = True, error: Exception | None = None) -> None:
        self._available = available
        self.error = error
        self.calls: list[tuple[str, str | None]] = []

    def available(self) -> bool:
        return self._available

    def execute_command(self, tool_name: str, invocation_id: str | None = None) -> None:
        self.calls.append((tool_name, invocation_id))
        if self.error is not None:
            raise self.error


class _Scheduler:
    def __init__(self) -> None:
        self.pending: list[tuple[int, object]] = []

    def __call__(self, delay_ms, callback) -> None:
        self.pending.append((delay_ms, callback))

    def run_all(self) -> None:
        pending, self.pending = self.pending, []
        for _, callback in pending:
            callback()


def _registry(names=("Ping Connectivity", "Netstat"), **kwargs):
    log = LogAggregator()
    bridge = kwargs.pop("bridge", _Bridge())
    kwargs.setdefault("schedule", _Scheduler())
    registry = ToolStateRegistry(log, bridge, **kwargs)
    controls = {}
    for name in names:
        controls[name] = _Control()
        registry.register(name, controls[name])
    return registry, log, bridge, controls


def test_register_starts_idle_and_rejects_duplicates() -> None:
    registry, _, _, controls = _registry()
    assert registry.snapshot_states() == {"Ping Connectivity": STATE_IDLE, "Netstat": STATE_IDLE}
    assert controls["Netstat"].history == [STATE_IDLE]
    with pytest.raises(DuplicateTool):
        registry.register("Netstat", _Control())
    assert len(registry) == 2


def test_register_whole_catalog_once_per_tool() -> None:
    registry, _, _, _ = _registry(names=tool_names())
    assert list(registry) == tool_names()


def test_invoke_dispatches_once() -> None:
    registry, _, bridge, controls = _registry()
    invocation_id = registry.invoke("Ping Connectivity")
    assert invocation_id
    assert registry.state_of("Ping Connectivity") == STATE_RUNNING
    assert controls["Ping Connectivity"].label == "Running..."
    assert not controls["Ping Connectivity"].interactive

    assert registry.invoke("Ping Connectivity") is None
    assert bridge.calls == [("Ping Connectivity", invocation_id)]
    assert registry.running_tools() == ["Ping Connectivity"]


def test_ping_scenario_done_is_sticky() -> None:
    registry, log, bridge, controls = _registry()
    registry.invoke("Ping Connectivity")
    log.append("PING 8.8.8.8: 56 data bytes")
    log.append("[OK] Process completed successfully.")
    assert registry.complete("Ping Connectivity") is True

    control = controls["Ping Connectivity"]
    assert registry.state_of("Ping Connectivity") == STATE_DONE
    assert control.label == "Done"
    assert not control.interactive
    assert registry.invoke("Ping Connectivity") is None
    assert len(bridge.calls) == 1
    assert len(log) == 2


def test_complete_unknown_tool_warns_once(caplog) -> None:
    registry, _, _, controls = _registry()
    before = registry.snapshot_states()
    with caplog.at_level(logging.WARNING, logger="launcher_core.tool_state"):
        assert registry.complete("NoSuchTool") is False
    assert registry.snapshot_states() == before
    assert all(control.history == [STATE_IDLE] for control in controls.values())
    warnings = [rec for rec in caplog.records if rec.levelno == logging.WARNING]
    assert len(warnings) == 1
    assert "NoSuchTool" in warnings[0].getMessage()


def test_complete_is_unconditional_for_name_only_events() -> None:
    registry, _, _, controls = _registry()
    assert registry.complete("Netstat") is True
    assert registry.state_of("Netstat") == STATE_DONE
    assert controls["Netstat"].state == STATE_DONE


def test_stale_invocation_is_ignored_after_reset() -> None:
    registry, _, _, _ = _registry()
    old_id = registry.invoke("Netstat")
    registry.reset_all()
    new_id = registry.invoke("Netstat")
    assert new_id != old_id
    assert registry.complete("Netstat", old_id) is False
    assert registry.state_of("Netstat") == STATE_RUNNING
    assert registry.complete("Netstat", new_id) is True
    assert registry.state_of("Netstat") == STATE_DONE


@pytest.mark.parametrize("prepare", ["none", "running", "done", "mixed"])
def test_reset_all_is_total(prepare) -> None:
    registry, log, _, controls = _registry()
    if prepare in ("running", "mixed"):
        registry.invoke("Ping Connectivity")
    if prepare in ("done", "mixed"):
        registry.invoke("Netstat")
        registry.complete("Netstat")
    log.append("[OK] something")

    registry.reset_all()

    assert set(registry.snapshot_states().values()) == {STATE_IDLE}
    assert all(control.interactive for control in controls.values())
    assert log.text == ""
    assert RESET_NOTICE not in log.lines


def test_invoke_without_bridge_falls_back_to_mock() -> None:
    scheduler = _Scheduler()
    registry, log, _, controls = _registry(bridge=None, schedule=scheduler, mock_delay_ms=1000)
    registry.invoke("Netstat")
    assert log.lines == ["[MOCK] Starting Netstat..."]
    assert [delay for delay, _ in scheduler.pending] == [1000]
    assert registry.state_of("Netstat") == STATE_RUNNING

    scheduler.run_all()
    assert registry.state_of("Netstat") == STATE_DONE
    assert controls["Netstat"].label == "Done"


def test_unavailable_bridge_uses_mock_and_skips_dispatch() -> None:
    scheduler = _Scheduler()
    bridge = _Bridge(available=False)
    registry, _, _, _ = _registry(bridge=bridge, schedule=scheduler)
    registry.invoke("Netstat")
    assert bridge.calls == []
    assert len(scheduler.pending) == 1


def test_mock_completion_after_reset_is_stale() -> None:
    scheduler = _Scheduler()
    registry, _, _, _ = _registry(bridge=None, schedule=scheduler)
    registry.invoke("Netstat")
    registry.reset_all()
    scheduler.run_all()
    assert registry.state_of("Netstat") == STATE_IDLE


def test_registry_requires_a_scheduler() -> None:
    with pytest.raises(TypeError):
        ToolStateRegistry(LogAggregator(), None)


def test_mock_run_stays_running_until_scheduler_fires() -> None:
    scheduler = _Scheduler()
    registry, _, _, controls = _registry(bridge=None, schedule=scheduler, mock_delay_ms=1000)
    registry.invoke("Netstat")
    assert registry.state_of("Netstat") == STATE_RUNNING
    assert controls["Netstat"].label == "Running..."
    assert registry.invoke("Netstat") is None
    assert len(scheduler.pending) == 1


def test_dispatch_error_is_logged_and_completes() -> None:
    bridge = _Bridge(error=RuntimeError("bus gone"))
    registry, log, _, _ = _registry(bridge=bridge)
    registry.invoke("Netstat")
    assert log.lines == ["[ERROR] Failed to dispatch Netstat: bus gone"]
    assert registry.state_of("Netstat") == STATE_DONE
    assert registry.invoke("Ping Connectivity")


def test_invoke_unknown_tool_is_noop() -> None:
    registry, _, bridge, _ = _registry()
    assert registry.invoke("NoSuchTool") is None
    assert bridge.calls == []
    assert "NoSuchTool" not in registry
