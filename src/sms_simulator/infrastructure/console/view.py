"""ViewEmitter that writes every view to the log."""
from __future__ import annotations

import asyncio
import logging
from typing import Callable

from sms_simulator.application.dto.views import (
    ConversationView,
    DeviceListView,
    MessageView,
    OutboxView,
)
from sms_simulator.domain.value_objects.enums import ConversationStatus, MessageDirection

logger = logging.getLogger(__name__)


def _format_message(message: MessageView) -> str:
    arrow = ">>" if message.direction == MessageDirection.INBOUND else "<<"
    marker = " [rtl]" if message.rtl else ""
    return f"{message.time_label} {arrow} {message.body}{marker}"


class LoggingViewEmitter:
    """Implements application.ports.view.ViewEmitter for a terminal.

    ``ask`` answers confirmations in a worker thread; the console passes
    an ``input``-based prompt, tests can pass a lambda.
    """

    def __init__(self, ask: Callable[[str], bool] | None = None) -> None:
        self._ask = ask or (lambda _prompt: True)
        self.send_enabled = False

    def render_conversation(self, view: ConversationView) -> None:
        if view.status == ConversationStatus.EMPTY:
            logger.info("No device selected. Use /use <phone> to start.")
        elif view.status == ConversationStatus.LOADING:
            logger.debug("Loading conversation for %s", view.device)
        elif view.status == ConversationStatus.ERROR:
            logger.error("%s", view.error)
        elif not view.messages:
            logger.info("[%s] No messages yet", view.device)
        else:
            logger.info(
                "[%s]\n%s", view.device, "\n".join(_format_message(m) for m in view.messages),
            )

    def append_messages(self, messages: list[MessageView]) -> None:
        for message in messages:
            logger.info("%s", _format_message(message))

    def render_devices(self, view: DeviceListView) -> None:
        if not view.options:
            logger.info("Devices: none")
            return
        lines = [
            f"{'*' if o.key == view.selected else ' '} {o.caption}" for o in view.options
        ]
        logger.info("Devices:\n%s", "\n".join(lines))

    def render_outbox(self, view: OutboxView) -> None:
        if not view.items:
            logger.info("Outbox: no outbound messages yet")
            return
        lines = [f"{i.time_label} To: {i.device} {i.body}" for i in view.items]
        logger.info("Outbox (%d):\n%s", len(view.items), "\n".join(lines))

    def set_send_enabled(self, enabled: bool) -> None:
        self.send_enabled = enabled

    def notice(self, message: str) -> None:
        logger.warning("%s", message)

    async def confirm(self, prompt: str) -> bool:
        # ask may block on stdin; polling keeps running meanwhile.
        return await asyncio.to_thread(self._ask, prompt)
