"""In-memory state behind the mock simulator backend."""
from __future__ import annotations

import itertools
import logging

from sms_simulator.application.exceptions import ValidationError
from sms_simulator.application.ports.clock import Clock, SystemClock
from sms_simulator.domain.entities.conversation import Conversation
from sms_simulator.domain.entities.device import Device
from sms_simulator.domain.entities.message import Message
from sms_simulator.domain.entities.outbox import OutboxEntry
from sms_simulator.domain.value_objects.enums import MessageDirection
from sms_simulator.domain.value_objects.ids import DeviceKey
from sms_simulator.domain.value_objects.phone import (
    DEFAULT_COUNTRY_CODE,
    device_label,
    normalize_phone,
)
from sms_simulator.services.responder import reply_to

logger = logging.getLogger(__name__)


def _truncate(text: str, limit: int = 50) -> str:
    return text if len(text) <= limit else text[: limit - 3] + "..."


class SimulatorStore:
    """Conversations per device plus the outbox of every outbound message."""

    def __init__(
        self,
        clock: Clock | None = None,
        country_code: str = DEFAULT_COUNTRY_CODE,
    ) -> None:
        self._clock = clock or SystemClock()
        self._country_code = country_code
        self._conversations: dict[DeviceKey, list[Message]] = {}
        self._outbox: list[OutboxEntry] = []
        self._ids = itertools.count(1)

    def normalize(self, raw: str) -> DeviceKey:
        return normalize_phone(raw, self._country_code)

    def send(self, raw_phone: str, body: str) -> tuple[Message, Message]:
        phone = self.normalize((raw_phone or "").strip())
        body = (body or "").strip()
        if not phone:
            raise ValidationError("Phone number is required")
        if not body:
            raise ValidationError("Message body is required")

        logger.info("Received message from %s - %s", phone, _truncate(body))
        user_message = self._record(phone, MessageDirection.INBOUND, body)
        system_response = self.push_outbound(phone, reply_to(body))
        return user_message, system_response

    def push_outbound(self, phone: DeviceKey, body: str) -> Message:
        """Record a service-to-device message; it lands in the outbox too."""
        message = self._record(phone, MessageDirection.OUTBOUND, body)
        self._outbox.append(
            OutboxEntry(device=phone, body=body, timestamp=message.timestamp, id=message.id),
        )
        logger.info("Response to %s - %s", phone, _truncate(body))
        return message

    def conversation(self, phone: DeviceKey) -> Conversation:
        messages = sorted(self._conversations.get(phone, []), key=lambda m: m.timestamp)
        return Conversation(device=phone, messages=tuple(messages))

    def devices(self) -> list[Device]:
        """Every phone with history; outbound messages are recorded there too."""
        return [
            Device(
                key=phone,
                label=device_label(phone),
                message_count=len(messages),
                last_activity=messages[-1].timestamp,
            )
            for phone, messages in self._conversations.items()
        ]

    def outbox(self) -> list[OutboxEntry]:
        return list(self._outbox)

    def reset(self) -> None:
        self._conversations.clear()
        self._outbox.clear()
        logger.info("Simulator reset: cleared all conversations and outbox")

    def _record(self, phone: DeviceKey, direction: MessageDirection, body: str) -> Message:
        prefix = "IN" if direction is MessageDirection.INBOUND else "OUT"
        message = Message(
            direction=direction,
            body=body,
            timestamp=self._clock.now(),
            id=f"{prefix}-{next(self._ids)}",
            device=phone,
        )
        self._conversations.setdefault(phone, []).append(message)
        return message
