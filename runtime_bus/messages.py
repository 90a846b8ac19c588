from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass(slots=True)
class MessageEnvelope:
    """Standard message envelope for all runtime bus traffic."""

    msg_id: str
    topic: str
    timestamp: str
    source: str
    payload: Dict[str, object] = field(default_factory=dict)
    correlation_id: Optional[str] = None

    def get_text(self, key: str) -> str:
        value = self.payload.get(key)
        if value is None:
            return ""
        return str(value)

    def to_dict(self) -> Dict[str, object]:
        return {
            "msg_id": self.msg_id,
            "topic": self.topic,
            "timestamp": self.timestamp,
            "source": self.source,
            "payload": dict(self.payload),
            "correlation_id": self.correlation_id,
        }
