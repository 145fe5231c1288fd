"""Interactive terminal client: drives the controller from stdin."""
from __future__ import annotations

import asyncio
import logging

from sms_simulator.config import settings
from sms_simulator.infrastructure.console.view import LoggingViewEmitter
from sms_simulator.infrastructure.http.client import HttpSimulatorTransport
from sms_simulator.services.reconciliation import QUICK_COMMANDS, SimulatorController

logger = logging.getLogger(__name__)

USAGE = (
    "/use <phone>  add or select a device\n"
    "/devices      refresh the device list\n"
    "/outbox       refresh the outbox\n"
    "/cmd <n>      send quick command n: "
    + ", ".join(f"{i}={c}" for i, c in enumerate(QUICK_COMMANDS, 1))
    + "\n/reset        clear all conversations and the outbox\n"
    "/quit         exit\n"
    "anything else is sent as a message"
)


def _confirm(prompt: str) -> bool:
    return input(f"{prompt} [y/N] ").strip().lower() in ("y", "yes")


async def handle_line(controller: SimulatorController, line: str) -> bool:
    """Run one console command. Returns False when the user asked to quit."""
    line = line.strip()
    if not line:
        return True

    command, _, arg = line.partition(" ")
    if command == "/quit":
        return False
    if command == "/use":
        await controller.add_device(arg)
    elif command == "/devices":
        await controller.refresh_devices()
    elif command == "/outbox":
        await controller.refresh_outbox()
    elif command == "/reset":
        await controller.reset()
    elif command == "/cmd":
        index = int(arg) if arg.strip().isdigit() else 0
        if not 1 <= index <= len(QUICK_COMMANDS):
            logger.warning("Unknown quick command %r", arg)
            return True
        text = controller.quick_command(QUICK_COMMANDS[index - 1])
        if text:
            await controller.send_message(text)
    elif command == "/help":
        logger.info("\n%s", USAGE)
    else:
        await controller.send_message(line)
    return True


async def run_console() -> None:
    view = LoggingViewEmitter(ask=_confirm)
    async with HttpSimulatorTransport(settings.api_url, timeout=settings.HTTP_TIMEOUT) as transport:
        controller = SimulatorController(
            transport,
            view,
            poll_interval=settings.POLL_INTERVAL,
            country_code=settings.COUNTRY_CODE,
        )
        logger.info("Simulator console connected to %s (type /help)", settings.api_url)
        await controller.start()
        try:
            while True:
                line = await asyncio.to_thread(input, "> ")
                if not await handle_line(controller, line):
                    break
        except EOFError:
            logger.info("stdin closed, exiting")
        finally:
            controller.close()


def main() -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    asyncio.run(run_console())


if __name__ == "__main__":
    main()
