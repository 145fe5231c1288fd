"""Mock simulator backend: an in-memory implementation of the HTTP contract."""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sms_simulator.api.middleware.request_id import RequestIdMiddleware
from sms_simulator.api.v1.routers import health, simulator
from sms_simulator.api.v1.schemas.simulator import ErrorResponse
from sms_simulator.application.exceptions import ValidationError
from sms_simulator.application.ports.clock import Clock
from sms_simulator.config import settings
from sms_simulator.services.simulator_service import SimulatorStore

logger = logging.getLogger(__name__)


def create_app(clock: Clock | None = None) -> FastAPI:
    app = FastAPI(
        title="SMS Simulator Mock Backend",
        version="0.1.0",
    )
    app.state.store = SimulatorStore(clock=clock, country_code=settings.COUNTRY_CODE)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIdMiddleware)

    _register_exception_handlers(app)

    app.include_router(health.router)
    app.include_router(simulator.router)

    logger.info("Mock backend ready under %s", settings.SIMULATOR_API_PREFIX)
    return app


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def _validation(_req: Request, exc: ValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(message=exc.detail).model_dump(),
        )
