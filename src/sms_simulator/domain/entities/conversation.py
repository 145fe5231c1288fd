from __future__ import annotations

from dataclasses import dataclass, field

from sms_simulator.domain.entities.message import Message
from sms_simulator.domain.value_objects.ids import DeviceKey


@dataclass(frozen=True, slots=True)
class Conversation:
    device: DeviceKey
    messages: tuple[Message, ...] = field(default_factory=tuple)

    def extended(self, *messages: Message) -> Conversation:
        return Conversation(device=self.device, messages=self.messages + messages)
