"""Fully resolved view models handed to the ViewEmitter."""
from __future__ import annotations

from dataclasses import dataclass, field

from sms_simulator.domain.value_objects.enums import ConversationStatus, MessageDirection
from sms_simulator.domain.value_objects.ids import DeviceKey


@dataclass(frozen=True, slots=True)
class MessageView:
    direction: MessageDirection
    body: str
    time_label: str
    rtl: bool = False


@dataclass(frozen=True, slots=True)
class ConversationView:
    status: ConversationStatus
    device: DeviceKey | None = None
    messages: tuple[MessageView, ...] = field(default_factory=tuple)
    error: str | None = None


@dataclass(frozen=True, slots=True)
class DeviceOption:
    key: DeviceKey
    caption: str


@dataclass(frozen=True, slots=True)
class DeviceListView:
    options: tuple[DeviceOption, ...] = field(default_factory=tuple)
    selected: DeviceKey | None = None


@dataclass(frozen=True, slots=True)
class OutboxItemView:
    device: DeviceKey
    body: str
    time_label: str
    rtl: bool = False


@dataclass(frozen=True, slots=True)
class OutboxView:
    items: tuple[OutboxItemView, ...] = field(default_factory=tuple)
