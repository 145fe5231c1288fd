"""Client-side reconciliation of the simulator's three views.

The server has no push channel, so the controller keeps the device list,
the selected device's conversation and the global outbox current by
polling. A poll tick only compares the outbox size with the last size seen;
when it differs the outbox is re-rendered and the selected conversation
and the device list are fetched again. The size comparison misses a
replacement that keeps the count equal; there is no change token on the
server to do better.

Every fetch carries a generation number taken when it was dispatched.
A result whose generation is no longer current (the selection moved, a
newer fetch went out, a send appended locally, or the simulator was reset)
is dropped instead of overwriting a newer view.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from sms_simulator.application.dto.results import SendResult
from sms_simulator.application.dto.views import DeviceListView, OutboxView
from sms_simulator.application.exceptions import RequestFailedError, ValidationError
from sms_simulator.application.ports.clock import AsyncioScheduler, Scheduler, TimerHandle
from sms_simulator.application.ports.transport import SimulatorTransport
from sms_simulator.application.ports.view import ViewEmitter
from sms_simulator.domain.entities.conversation import Conversation
from sms_simulator.domain.entities.device import Device
from sms_simulator.domain.entities.outbox import OutboxSnapshot
from sms_simulator.domain.value_objects.ids import DeviceKey
from sms_simulator.domain.value_objects.phone import (
    DEFAULT_COUNTRY_CODE,
    device_label,
    normalize_phone,
)
from sms_simulator.services import presenter

logger = logging.getLogger(__name__)

QUICK_COMMANDS = ("REG MOTHER CAMP A ZONE 3", "EMERGENCY", "HELP")
RESET_PROMPT = "Reset all conversations and outbox?"


@dataclass
class EngineState:
    selected_device: DeviceKey | None = None
    last_outbox_size: int = 0
    poll_handle: TimerHandle | None = None
    devices: list[Device] = field(default_factory=list)
    conversation: Conversation | None = None
    send_in_flight: bool = False
    conversation_generation: int = 0
    devices_generation: int = 0
    outbox_generation: int = 0


class SimulatorController:
    """Owns EngineState and routes user actions and poll ticks."""

    def __init__(
        self,
        transport: SimulatorTransport,
        view: ViewEmitter,
        scheduler: Scheduler | None = None,
        *,
        poll_interval: float = 2.0,
        country_code: str = DEFAULT_COUNTRY_CODE,
    ) -> None:
        self._transport = transport
        self._view = view
        self._scheduler = scheduler or AsyncioScheduler()
        self._poll_interval = poll_interval
        self._country_code = country_code
        self.state = EngineState()

    async def start(self) -> None:
        """Initial load: devices, outbox, then background polling."""
        await self.refresh_devices()
        await self.refresh_outbox()
        self.start_polling()

    def close(self) -> None:
        self.stop_polling()

    def start_polling(self, interval: float | None = None) -> None:
        self.stop_polling()
        interval = interval if interval is not None else self._poll_interval
        self.state.poll_handle = self._scheduler.call_every(interval, self.poll_once)
        logger.info("Polling started (interval=%.1fs)", interval)

    def stop_polling(self) -> None:
        if self.state.poll_handle is not None:
            self.state.poll_handle.cancel()
            self.state.poll_handle = None
            logger.info("Polling stopped")

    async def select_device(self, key: str | None) -> None:
        self.state.conversation_generation += 1
        if not key:
            self.state.selected_device = None
            self.state.conversation = None
            self._view.set_send_enabled(False)
            self._view.render_conversation(presenter.empty_conversation_view())
            return

        device = DeviceKey(key)
        self.state.selected_device = device
        self._view.set_send_enabled(True)
        await self.refresh_conversation(device)

    async def add_device(self, raw: str) -> DeviceKey | None:
        """Select a typed-in phone, showing it in the list before the server knows it."""
        try:
            key = self._parse_device(raw)
        except ValidationError as exc:
            self._view.notice(exc.detail)
            return None

        self.state.selected_device = key
        if all(d.key != key for d in self.state.devices):
            provisional = Device(key=key, label=device_label(key), message_count=0)
            self.state.devices = [*self.state.devices, provisional]
        self._render_devices()

        await self.select_device(key)
        return key

    async def send_message(self, body: str) -> SendResult | None:
        body = (body or "").strip()
        device = self.state.selected_device
        if not body or device is None:
            return None
        if self.state.send_in_flight:
            logger.debug("Send to %s ignored: previous send still in flight", device)
            return None

        self.state.send_in_flight = True
        self._view.set_send_enabled(False)
        try:
            result = await self._transport.send(device, body)
        except RequestFailedError as exc:
            logger.warning("Failed to send message to %s: %s", device, exc.detail)
            self._view.notice(f"Failed to send message: {exc.detail}")
            return None
        finally:
            self.state.send_in_flight = False
            self._view.set_send_enabled(self.state.selected_device is not None)

        self._append_to_conversation(device, result)
        await self.refresh_outbox()
        await self.refresh_devices()
        return result

    def quick_command(self, command: str) -> str | None:
        """Text to drop into the input for a preset command button."""
        if self.state.selected_device is None:
            self._view.notice("Please select or add a phone number first")
            return None
        return command

    async def reset(self) -> bool:
        if not await self._view.confirm(RESET_PROMPT):
            return False

        try:
            result = await self._transport.reset()
        except RequestFailedError as exc:
            logger.warning("Failed to reset simulator: %s", exc.detail)
            self._view.notice(f"Failed to reset: {exc.detail}")
            return False

        state = self.state
        state.selected_device = None
        state.conversation = None
        state.devices = []
        state.last_outbox_size = 0
        state.conversation_generation += 1
        state.devices_generation += 1
        state.outbox_generation += 1

        self._view.set_send_enabled(False)
        self._view.render_conversation(presenter.empty_conversation_view())
        self._view.render_devices(DeviceListView())
        self._view.render_outbox(OutboxView())
        logger.info("Simulator reset: %s", result.message or result.status)
        return True

    async def refresh_conversation(self, key: DeviceKey) -> None:
        self.state.conversation_generation += 1
        generation = self.state.conversation_generation
        self._view.render_conversation(presenter.loading_conversation_view(key))

        try:
            conversation = await self._transport.fetch_conversation(key)
        except RequestFailedError as exc:
            logger.warning("Failed to load conversation for %s: %s", key, exc.detail)
            if self._conversation_is_current(generation, key):
                self._view.render_conversation(
                    presenter.error_conversation_view(key, exc.detail),
                )
            return

        if not self._conversation_is_current(generation, key):
            logger.debug("Dropping stale conversation for %s", key)
            current = self.state.conversation
            if self.state.selected_device == key and current is not None and current.device == key:
                self._view.render_conversation(presenter.conversation_view(current))
            return
        self.state.conversation = conversation
        self._view.render_conversation(presenter.conversation_view(conversation))

    async def refresh_devices(self) -> None:
        self.state.devices_generation += 1
        generation = self.state.devices_generation

        try:
            devices = await self._transport.fetch_devices()
        except RequestFailedError as exc:
            logger.warning("Failed to load devices: %s", exc.detail)
            return

        if generation != self.state.devices_generation:
            logger.debug("Dropping stale device list")
            return
        self.state.devices = list(devices)
        self._render_devices()

    async def refresh_outbox(self) -> None:
        snapshot = await self._fetch_outbox()
        if snapshot is not None:
            self._apply_outbox(snapshot)

    async def poll_once(self) -> None:
        """One polling tick."""
        snapshot = await self._fetch_outbox()
        if snapshot is None or len(snapshot) == self.state.last_outbox_size:
            return

        logger.debug(
            "Outbox size changed %d -> %d", self.state.last_outbox_size, len(snapshot),
        )
        self._apply_outbox(snapshot)
        if self.state.selected_device is not None:
            await self.refresh_conversation(self.state.selected_device)
        await self.refresh_devices()

    def _parse_device(self, raw: str) -> DeviceKey:
        raw = (raw or "").strip()
        if not raw:
            raise ValidationError("Please enter a phone number")
        return normalize_phone(raw, self._country_code)

    def _conversation_is_current(self, generation: int, key: DeviceKey) -> bool:
        return (
            generation == self.state.conversation_generation
            and self.state.selected_device == key
        )

    def _append_to_conversation(self, device: DeviceKey, result: SendResult) -> None:
        if self.state.selected_device != device:
            return
        # In-flight fetches predate this send; their results would drop it.
        self.state.conversation_generation += 1
        current = self.state.conversation
        if current is None or current.device != device:
            current = Conversation(device=device)
        self.state.conversation = current.extended(result.user_message, result.system_response)
        self._view.append_messages([
            presenter.message_view(result.user_message),
            presenter.message_view(result.system_response),
        ])

    async def _fetch_outbox(self) -> OutboxSnapshot | None:
        self.state.outbox_generation += 1
        generation = self.state.outbox_generation
        try:
            snapshot = await self._transport.fetch_outbox()
        except RequestFailedError as exc:
            logger.warning("Failed to refresh outbox: %s", exc.detail)
            return None
        if generation != self.state.outbox_generation:
            logger.debug("Dropping stale outbox snapshot")
            return None
        return snapshot

    def _apply_outbox(self, snapshot: OutboxSnapshot) -> None:
        self.state.last_outbox_size = len(snapshot)
        self._view.render_outbox(presenter.outbox_view(snapshot))

    def _render_devices(self) -> None:
        self._view.render_devices(
            presenter.device_list_view(self.state.devices, self.state.selected_device),
        )
