"""Domain events primitives for the order service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict
from uuid import UUID, uuid4


@dataclass(frozen=True)
class DomainEvent:
    """Base domain event (immutable).

    Subclasses set ``event_type`` to the dotted name consumers subscribe to.
    """

    event_type: ClassVar[str] = "domain.event"

    aggregate_id: str
    payload: Dict[str, Any] = field(default_factory=dict)
    event_id: UUID = field(default_factory=uuid4)
    occurred_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": str(self.event_id),
            "type": self.event_type,
            "payload": dict(self.payload),
            "timestamp": self.occurred_on.isoformat(),
        }
