from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from sms_simulator.domain.value_objects.ids import DeviceKey


@dataclass(frozen=True, slots=True)
class Device:
    key: DeviceKey
    label: str
    message_count: int = 0
    last_activity: datetime | None = None
