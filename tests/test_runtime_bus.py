from runtime_bus import RuntimeBus, topics


def test_publish_delivers_in_subscription_order() -> None:
    bus = RuntimeBus()
    seen: list[str] = []
    bus.subscribe(topics.TOOL_LOG, lambda env: seen.append("a:" + env.get_text("message")))
    bus.subscribe(topics.TOOL_LOG, lambda env: seen.append("b:" + env.get_text("message")))
    bus.publish(topics.TOOL_LOG, {"message": "one"}, source="test")
    bus.publish(topics.TOOL_LOG, {"message": "two"}, source="test")
    assert seen == ["a:one", "b:one", "a:two", "b:two"]


def test_unsubscribe_and_has_subscribers() -> None:
    bus = RuntimeBus()
    assert not bus.has_subscribers(topics.TOOL_EXECUTE_REQUEST)
    sub_id = bus.subscribe(topics.TOOL_EXECUTE_REQUEST, lambda env: None)
    assert bus.has_subscribers(topics.TOOL_EXECUTE_REQUEST)
    bus.unsubscribe(sub_id)
    assert not bus.has_subscribers(topics.TOOL_EXECUTE_REQUEST)
    bus.unsubscribe(sub_id)
    assert bus.stats()["subscribers"] == 0


def test_failing_handler_does_not_block_others() -> None:
    bus = RuntimeBus()
    seen: list[str] = []

    def _boom(env):
        raise RuntimeError("boom")

    bus.subscribe(topics.TOOL_DONE, _boom)
    bus.subscribe(topics.TOOL_DONE, lambda env: seen.append(env.get_text("tool")))
    envelope = bus.publish(topics.TOOL_DONE, {"tool": "Netstat"}, source="test", correlation_id="abc")
    assert seen == ["Netstat"]
    assert envelope.correlation_id == "abc"
    assert envelope.to_dict()["topic"] == topics.TOOL_DONE


def test_envelope_payload_is_copied() -> None:
    bus = RuntimeBus()
    payload = {"message": "x"}
    envelope = bus.publish(topics.TOOL_LOG, payload, source="test")
    payload["message"] = "changed"
    assert envelope.get_text("message") == "x"
    assert envelope.get_text("missing") == ""
    assert bus.publish(topics.TOOL_LOG, None, source="test").payload == {}
