"""Shared test fixtures."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

import pytest

from sms_simulator.application.dto.results import ResetResult, SendResult
from sms_simulator.application.dto.views import (
    ConversationView,
    DeviceListView,
    MessageView,
    OutboxView,
)
from sms_simulator.application.exceptions import RequestFailedError
from sms_simulator.application.ports.clock import TickCallback
from sms_simulator.domain.entities.conversation import Conversation
from sms_simulator.domain.entities.device import Device
from sms_simulator.domain.entities.message import Message
from sms_simulator.domain.entities.outbox import OutboxEntry, OutboxSnapshot
from sms_simulator.domain.value_objects.enums import MessageDirection
from sms_simulator.domain.value_objects.ids import DeviceKey
from sms_simulator.services.reconciliation import SimulatorController

PHONE = DeviceKey("+249912345678")
OTHER_PHONE = DeviceKey("+249911111111")

BASE_TIME = datetime(2026, 1, 5, 9, 30, tzinfo=timezone.utc)


def make_message(
    *,
    direction: MessageDirection = MessageDirection.INBOUND,
    body: str = "HELP",
    minutes: int = 0,
    device: DeviceKey | None = PHONE,
) -> Message:
    return Message(
        direction=direction,
        body=body,
        timestamp=BASE_TIME + timedelta(minutes=minutes),
        device=device,
    )


def make_outbox(size: int, device: DeviceKey = PHONE) -> OutboxSnapshot:
    return OutboxSnapshot(
        entries=tuple(
            OutboxEntry(
                device=device,
                body=f"reply {i}",
                timestamp=BASE_TIME + timedelta(minutes=i),
                id=f"OUT-{i}",
            )
            for i in range(size)
        )
    )


def make_device(key: DeviceKey = PHONE, message_count: int = 2) -> Device:
    return Device(key=key, label=f"Phone ...{key[-4:]}", message_count=message_count)


@dataclass
class FakeTransport:
    """In-memory SimulatorTransport.

    ``failures`` maps an operation name to the error it raises; ``gates``
    maps an operation name to an event the call waits on before answering.
    """

    conversations: dict[DeviceKey, Conversation] = field(default_factory=dict)
    devices: list[Device] = field(default_factory=list)
    outbox: OutboxSnapshot = field(default_factory=OutboxSnapshot)
    reply: str = "Commands: REG, EMERGENCY, HELP"
    failures: dict[str, RequestFailedError] = field(default_factory=dict)
    gates: dict[str, asyncio.Event] = field(default_factory=dict)
    calls: list[tuple[str, Any]] = field(default_factory=list)

    async def _enter(self, op: str, arg: Any = None) -> None:
        self.calls.append((op, arg))
        gate = self.gates.get(op)
        if gate is not None:
            await gate.wait()
        if op in self.failures:
            raise self.failures[op]

    def ops(self) -> list[str]:
        return [op for op, _ in self.calls]

    async def send(self, device: DeviceKey, body: str) -> SendResult:
        await self._enter("send", (device, body))
        return SendResult(
            user_message=make_message(body=body, minutes=10, device=device),
            system_response=make_message(
                direction=MessageDirection.OUTBOUND, body=self.reply, minutes=11, device=device,
            ),
        )

    async def fetch_conversation(self, device: DeviceKey) -> Conversation:
        await self._enter("fetch_conversation", device)
        return self.conversations.get(device, Conversation(device=device))

    async def fetch_devices(self) -> list[Device]:
        await self._enter("fetch_devices")
        return list(self.devices)

    async def fetch_outbox(self) -> OutboxSnapshot:
        await self._enter("fetch_outbox")
        return self.outbox

    async def reset(self) -> ResetResult:
        await self._enter("reset")
        return ResetResult(status="reset", message="All conversations and outbox cleared")


@dataclass
class RecordingView:
    """ViewEmitter that keeps everything it was told."""

    confirm_answer: bool = True
    events: list[tuple[str, Any]] = field(default_factory=list)
    prompts: list[str] = field(default_factory=list)
    send_enabled: bool | None = None

    def render_conversation(self, view: ConversationView) -> None:
        self.events.append(("conversation", view))

    def append_messages(self, messages: list[MessageView]) -> None:
        self.events.append(("append", list(messages)))

    def render_devices(self, view: DeviceListView) -> None:
        self.events.append(("devices", view))

    def render_outbox(self, view: OutboxView) -> None:
        self.events.append(("outbox", view))

    def set_send_enabled(self, enabled: bool) -> None:
        self.send_enabled = enabled
        self.events.append(("send_enabled", enabled))

    def notice(self, message: str) -> None:
        self.events.append(("notice", message))

    async def confirm(self, prompt: str) -> bool:
        self.prompts.append(prompt)
        return self.confirm_answer

    def of_kind(self, kind: str) -> list[Any]:
        return [payload for k, payload in self.events if k == kind]

    def last(self, kind: str) -> Any:
        found = self.of_kind(kind)
        return found[-1] if found else None

    def clear(self) -> None:
        self.events.clear()


@dataclass
class _ManualTimer:
    interval: float
    callback: TickCallback
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler:
    """Scheduler whose ticks are fired by the test."""

    timers: list[_ManualTimer] = field(default_factory=list)

    def call_every(self, interval: float, callback: TickCallback) -> _ManualTimer:
        timer = _ManualTimer(interval, callback)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> list[_ManualTimer]:
        return [t for t in self.timers if not t.cancelled]

    async def tick(self) -> None:
        for timer in self.active:
            await timer.callback()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def controller(transport, view, scheduler) -> SimulatorController:
    return SimulatorController(transport, view, scheduler, poll_interval=2.0)
