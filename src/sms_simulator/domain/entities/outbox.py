from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from sms_simulator.domain.value_objects.ids import DeviceKey


@dataclass(frozen=True, slots=True)
class OutboxEntry:
    device: DeviceKey
    body: str
    timestamp: datetime
    id: str | None = None


@dataclass(frozen=True, slots=True)
class OutboxSnapshot:
    """Every service-to-device message, in whatever order the server sent."""

    entries: tuple[OutboxEntry, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.entries)

    def newest_first(self) -> list[OutboxEntry]:
        return sorted(self.entries, key=lambda e: e.timestamp, reverse=True)
