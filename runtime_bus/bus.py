from __future__ import annotations

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional

from .messages import MessageEnvelope

logger = logging.getLogger(__name__)

Handler = Callable[[MessageEnvelope], None]


def _iso_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class RuntimeBus:
    """In-process pub/sub bus.

    Handlers run synchronously on the publishing thread. Callers that own
    thread-affine state (Qt widgets) must marshal onto their own thread.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._subscribers: Dict[str, tuple[str, Handler]] = {}
        self._topic_index: Dict[str, List[str]] = {}
        self._published = 0

    def subscribe(self, topic: str, handler: Handler) -> str:
        sub_id = str(uuid.uuid4())
        with self._lock:
            self._subscribers[sub_id] = (topic, handler)
            self._topic_index.setdefault(topic, []).append(sub_id)
        return sub_id

    def unsubscribe(self, sub_id: str) -> None:
        with self._lock:
            topic, _ = self._subscribers.pop(sub_id, (None, None))
            if topic and topic in self._topic_index:
                ids = self._topic_index[topic]
                if sub_id in ids:
                    ids.remove(sub_id)
                if not ids:
                    self._topic_index.pop(topic, None)

    def has_subscribers(self, topic: str) -> bool:
        with self._lock:
            return bool(self._topic_index.get(topic))

    def publish(
        self,
        topic: str,
        payload: Optional[Dict[str, object]],
        source: str,
        correlation_id: Optional[str] = None,
    ) -> MessageEnvelope:
        envelope = self._build_envelope(topic, payload, source, correlation_id)
        handlers = self._copy_handlers(topic)
        with self._lock:
            self._published += 1
        for handler in handlers:
            try:
                handler(envelope)
            except Exception as exc:
                logger.error("runtime_bus publish handler error on %s: %s", topic, exc)
        return envelope

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {
                "published": self._published,
                "subscribers": len(self._subscribers),
                "topics": len(self._topic_index),
            }

    def _build_envelope(
        self,
        topic: str,
        payload: Optional[Dict[str, object]],
        source: str,
        correlation_id: Optional[str],
    ) -> MessageEnvelope:
        body = payload if isinstance(payload, dict) else {}
        return MessageEnvelope(
            msg_id=str(uuid.uuid4()),
            topic=topic,
            timestamp=_iso_timestamp(),
            source=source,
            payload=dict(body),
            correlation_id=correlation_id,
        )

    def _copy_handlers(self, topic: str) -> List[Handler]:
        # Subscription order is delivery order.
        with self._lock:
            sub_ids = list(self._topic_index.get(topic, ()))
            return [self._subscribers[sid][1] for sid in sub_ids if sid in self._subscribers]
