from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sms_simulator.domain.value_objects.enums import MessageDirection
from sms_simulator.domain.value_objects.ids import DeviceKey


@dataclass(frozen=True, slots=True)
class Message:
    direction: MessageDirection
    body: str
    timestamp: datetime
    id: str | None = None
    device: DeviceKey | None = None
