"""Wire models for the simulator HTTP contract (camelCase on the wire)."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from sms_simulator.domain.entities.conversation import Conversation
from sms_simulator.domain.entities.device import Device
from sms_simulator.domain.entities.message import Message
from sms_simulator.domain.entities.outbox import OutboxEntry
from sms_simulator.domain.value_objects.enums import MessageDirection
from sms_simulator.domain.value_objects.ids import DeviceKey


class WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SendMessageRequest(WireModel):
    phone_number: str = ""
    body: str = ""


class ChatMessageSchema(WireModel):
    id: str | None = None
    phone_number: str | None = None
    direction: MessageDirection = MessageDirection.OUTBOUND
    body: str = ""
    timestamp: datetime

    @classmethod
    def from_entity(cls, message: Message) -> ChatMessageSchema:
        return cls(
            id=message.id,
            phone_number=message.device,
            direction=message.direction,
            body=message.body,
            timestamp=message.timestamp,
        )

    def to_entity(self) -> Message:
        return Message(
            direction=self.direction,
            body=self.body,
            timestamp=self.timestamp,
            id=self.id,
            device=DeviceKey(self.phone_number) if self.phone_number else None,
        )

    def to_outbox_entry(self) -> OutboxEntry:
        return OutboxEntry(
            device=DeviceKey(self.phone_number or ""),
            body=self.body,
            timestamp=self.timestamp,
            id=self.id,
        )


class SendMessageResponse(WireModel):
    user_message: ChatMessageSchema
    system_response: ChatMessageSchema


class ConversationSchema(WireModel):
    phone_number: str
    messages: list[ChatMessageSchema] = []

    def to_entity(self) -> Conversation:
        return Conversation(
            device=DeviceKey(self.phone_number),
            messages=tuple(m.to_entity() for m in self.messages),
        )


class DeviceSchema(WireModel):
    phone_number: str
    label: str = ""
    message_count: int = 0
    last_activity: datetime | None = None

    @classmethod
    def from_entity(cls, device: Device) -> DeviceSchema:
        return cls(
            phone_number=device.key,
            label=device.label,
            message_count=device.message_count,
            last_activity=device.last_activity,
        )

    def to_entity(self) -> Device:
        return Device(
            key=DeviceKey(self.phone_number),
            label=self.label,
            message_count=max(self.message_count, 0),
            last_activity=self.last_activity,
        )


class ResetResponse(WireModel):
    status: str
    message: str = ""


class ErrorResponse(WireModel):
    message: str
