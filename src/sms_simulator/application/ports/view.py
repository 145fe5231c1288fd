from __future__ import annotations

from typing import Protocol

from sms_simulator.application.dto.views import (
    ConversationView,
    DeviceListView,
    MessageView,
    OutboxView,
)


class ViewEmitter(Protocol):
    """Whatever paints the simulator. The controller only ever pushes to it."""

    def render_conversation(self, view: ConversationView) -> None: ...

    def append_messages(self, messages: list[MessageView]) -> None: ...

    def render_devices(self, view: DeviceListView) -> None: ...

    def render_outbox(self, view: OutboxView) -> None: ...

    def set_send_enabled(self, enabled: bool) -> None: ...

    def notice(self, message: str) -> None: ...

    async def confirm(self, prompt: str) -> bool: ...
