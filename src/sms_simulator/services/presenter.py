from __future__ import annotations

from datetime import datetime
from typing import Iterable

from sms_simulator.application.dto.views import (
    ConversationView,
    DeviceListView,
    DeviceOption,
    MessageView,
    OutboxItemView,
    OutboxView,
)
from sms_simulator.application.policies.text_direction import is_right_to_left
from sms_simulator.domain.entities.conversation import Conversation
from sms_simulator.domain.entities.device import Device
from sms_simulator.domain.entities.message import Message
from sms_simulator.domain.entities.outbox import OutboxSnapshot
from sms_simulator.domain.value_objects.enums import ConversationStatus
from sms_simulator.domain.value_objects.ids import DeviceKey


def format_time(timestamp: datetime | None) -> str:
    if timestamp is None:
        return ""
    return timestamp.strftime("%H:%M")


def message_view(message: Message) -> MessageView:
    return MessageView(
        direction=message.direction,
        body=message.body,
        time_label=format_time(message.timestamp),
        rtl=is_right_to_left(message.body),
    )


def conversation_view(conversation: Conversation) -> ConversationView:
    return ConversationView(
        status=ConversationStatus.READY,
        device=conversation.device,
        messages=tuple(message_view(m) for m in conversation.messages),
    )


def empty_conversation_view() -> ConversationView:
    return ConversationView(status=ConversationStatus.EMPTY)


def loading_conversation_view(device: DeviceKey) -> ConversationView:
    return ConversationView(status=ConversationStatus.LOADING, device=device)


def error_conversation_view(device: DeviceKey, detail: str) -> ConversationView:
    return ConversationView(
        status=ConversationStatus.ERROR,
        device=device,
        error=f"Failed to load conversation: {detail}",
    )


def device_list_view(devices: Iterable[Device], selected: DeviceKey | None) -> DeviceListView:
    """Selection is only reported when the selected key is in the list."""
    options = tuple(
        DeviceOption(key=d.key, caption=f"{d.key} ({d.message_count} msgs)")
        for d in devices
    )
    keys = {o.key for o in options}
    return DeviceListView(
        options=options,
        selected=selected if selected in keys else None,
    )


def outbox_view(snapshot: OutboxSnapshot) -> OutboxView:
    return OutboxView(
        items=tuple(
            OutboxItemView(
                device=e.device,
                body=e.body,
                time_label=format_time(e.timestamp),
                rtl=is_right_to_left(e.body),
            )
            for e in snapshot.newest_first()
        )
    )
