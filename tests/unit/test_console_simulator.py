from __future__ import annotations

import logging
import threading

import pytest

from sms_simulator.infrastructure.console.view import LoggingViewEmitter
from sms_simulator.services.reconciliation import RESET_PROMPT, SimulatorController
from sms_simulator.workers.console_simulator import handle_line
from tests.conftest import PHONE, FakeTransport, ManualScheduler


@pytest.fixture
def console() -> tuple[SimulatorController, FakeTransport]:
    transport = FakeTransport()
    controller = SimulatorController(transport, LoggingViewEmitter(), ManualScheduler())
    return controller, transport


@pytest.mark.asyncio
async def test_use_then_send(console):
    controller, transport = console

    assert await handle_line(controller, "/use 0912345678") is True
    assert await handle_line(controller, "HELP") is True

    assert controller.state.selected_device == PHONE
    assert ("send", (PHONE, "HELP")) in transport.calls


@pytest.mark.asyncio
async def test_quick_command_without_device_logs_notice(console, caplog):
    controller, transport = console

    with caplog.at_level(logging.WARNING):
        await handle_line(controller, "/cmd 3")

    assert "Please select or add a phone number first" in caplog.text
    assert transport.ops() == []


@pytest.mark.asyncio
async def test_quick_command_sends_preset(console):
    controller, transport = console
    await handle_line(controller, "/use 0912345678")

    await handle_line(controller, "/cmd 2")

    assert ("send", (PHONE, "EMERGENCY")) in transport.calls


@pytest.mark.asyncio
async def test_quit(console):
    controller, _ = console
    assert await handle_line(controller, "/quit") is False


@pytest.mark.asyncio
@pytest.mark.parametrize("answer, expected_ops", [(False, []), (True, ["reset"])])
async def test_reset_prompt_is_answered_off_the_event_loop(answer, expected_ops):
    loop_thread = threading.get_ident()
    asked: list[tuple[str, int]] = []

    def ask(prompt: str) -> bool:
        asked.append((prompt, threading.get_ident()))
        return answer

    transport = FakeTransport()
    controller = SimulatorController(transport, LoggingViewEmitter(ask=ask), ManualScheduler())

    assert await handle_line(controller, "/reset") is True

    assert [prompt for prompt, _ in asked] == [RESET_PROMPT]
    assert asked[0][1] != loop_thread
    assert transport.ops() == expected_ops
