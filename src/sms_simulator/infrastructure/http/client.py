"""httpx-backed SimulatorTransport."""
from __future__ import annotations

import logging
import uuid
from types import TracebackType
from typing import Any, Callable, Self, TypeVar
from urllib.parse import quote

import httpx
from pydantic import TypeAdapter

from sms_simulator.api.middleware.request_id import HEADER
from sms_simulator.api.v1.schemas.simulator import (
    ChatMessageSchema,
    ConversationSchema,
    DeviceSchema,
    ResetResponse,
    SendMessageRequest,
    SendMessageResponse,
)
from sms_simulator.application.dto.results import ResetResult, SendResult
from sms_simulator.application.exceptions import RequestFailedError
from sms_simulator.domain.entities.conversation import Conversation
from sms_simulator.domain.entities.device import Device
from sms_simulator.domain.entities.outbox import OutboxSnapshot
from sms_simulator.domain.value_objects.ids import DeviceKey

logger = logging.getLogger(__name__)

T = TypeVar("T")

_devices_adapter = TypeAdapter(list[DeviceSchema])
_outbox_adapter = TypeAdapter(list[ChatMessageSchema])


class HttpSimulatorTransport:
    """Implements application.ports.transport.SimulatorTransport.

    ``base_url`` already includes the API prefix, e.g.
    ``http://localhost:8080/api/simulator``. Pass ``client`` to reuse a
    configured httpx.AsyncClient (tests hand in one with an ASGI transport);
    otherwise the transport owns and closes its own.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def send(self, device: DeviceKey, body: str) -> SendResult:
        payload = SendMessageRequest(phone_number=device, body=body)
        response = await self._request(
            "POST",
            "/send",
            SendMessageResponse.model_validate,
            json=payload.model_dump(by_alias=True),
            use_server_message=True,
        )
        return SendResult(
            user_message=response.user_message.to_entity(),
            system_response=response.system_response.to_entity(),
        )

    async def fetch_conversation(self, device: DeviceKey) -> Conversation:
        conversation = await self._request(
            "GET",
            f"/conversations/{quote(device, safe='')}",
            ConversationSchema.model_validate,
        )
        return conversation.to_entity()

    async def fetch_devices(self) -> list[Device]:
        devices = await self._request("GET", "/devices", _devices_adapter.validate_python)
        return [d.to_entity() for d in devices]

    async def fetch_outbox(self) -> OutboxSnapshot:
        messages = await self._request("GET", "/outbox", _outbox_adapter.validate_python)
        return OutboxSnapshot(entries=tuple(m.to_outbox_entry() for m in messages))

    async def reset(self) -> ResetResult:
        response = await self._request("DELETE", "/reset", ResetResponse.model_validate)
        return ResetResult(status=response.status, message=response.message)

    async def _request(
        self,
        method: str,
        path: str,
        parse: Callable[[Any], T],
        *,
        json: dict[str, Any] | None = None,
        use_server_message: bool = False,
    ) -> T:
        request_id = uuid.uuid4().hex
        url = self._base_url + path
        try:
            resp = await self._client.request(
                method, url, json=json, headers={HEADER: request_id},
            )
        except httpx.RequestError as exc:
            logger.warning("%s %s failed (request_id=%s): %s", method, path, request_id, exc)
            raise RequestFailedError(0, f"Network error: {exc}") from exc

        if resp.is_success:
            try:
                return parse(resp.json())
            except ValueError as exc:
                logger.warning("%s %s returned an unparseable body (request_id=%s)", method, path, request_id)
                raise RequestFailedError(resp.status_code, "Malformed response") from exc

        detail = _server_message(resp) if use_server_message else None
        logger.warning(
            "%s %s returned %d (request_id=%s)", method, path, resp.status_code, request_id,
        )
        raise RequestFailedError(resp.status_code, detail or f"HTTP {resp.status_code}")


def _server_message(resp: httpx.Response) -> str | None:
    try:
        body = resp.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    message = body.get("message") or body.get("detail")
    return message if isinstance(message, str) and message else None
