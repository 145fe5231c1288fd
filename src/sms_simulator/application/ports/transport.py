from __future__ import annotations

from typing import Protocol

from sms_simulator.application.dto.results import ResetResult, SendResult
from sms_simulator.domain.entities.conversation import Conversation
from sms_simulator.domain.entities.device import Device
from sms_simulator.domain.entities.outbox import OutboxSnapshot
from sms_simulator.domain.value_objects.ids import DeviceKey


class SimulatorTransport(Protocol):
    """Remote simulator operations. Failures raise RequestFailedError."""

    async def send(self, device: DeviceKey, body: str) -> SendResult: ...

    async def fetch_conversation(self, device: DeviceKey) -> Conversation: ...

    async def fetch_devices(self) -> list[Device]: ...

    async def fetch_outbox(self) -> OutboxSnapshot: ...

    async def reset(self) -> ResetResult: ...
