from __future__ import annotations

from dataclasses import dataclass

from sms_simulator.domain.entities.message import Message


@dataclass(frozen=True, slots=True)
class SendResult:
    user_message: Message
    system_response: Message


@dataclass(frozen=True, slots=True)
class ResetResult:
    status: str
    message: str
