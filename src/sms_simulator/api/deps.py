"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from sms_simulator.services.simulator_service import SimulatorStore


def get_store(request: Request) -> SimulatorStore:
    return request.app.state.store


StoreDep = Annotated[SimulatorStore, Depends(get_store)]
