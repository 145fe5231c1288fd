"""Entrypoint: python -m sms_simulator (mock backend)"""
from __future__ import annotations

import uvicorn

from sms_simulator.config import settings


def main() -> None:
    uvicorn.run(
        "sms_simulator.app:create_app",
        factory=True,
        host=settings.MOCK_HOST,
        port=settings.MOCK_PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
