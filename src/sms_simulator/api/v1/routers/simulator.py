from __future__ import annotations

from fastapi import APIRouter

from sms_simulator.api.deps import StoreDep
from sms_simulator.api.v1.schemas.simulator import (
    ChatMessageSchema,
    ConversationSchema,
    DeviceSchema,
    ErrorResponse,
    ResetResponse,
    SendMessageRequest,
    SendMessageResponse,
)
from sms_simulator.config import settings

router = APIRouter(prefix=settings.SIMULATOR_API_PREFIX, tags=["simulator"])


@router.post(
    "/send",
    response_model=SendMessageResponse,
    responses={400: {"model": ErrorResponse}},
)
async def send_message(body: SendMessageRequest, store: StoreDep) -> SendMessageResponse:
    user_message, system_response = store.send(body.phone_number, body.body)
    return SendMessageResponse(
        user_message=ChatMessageSchema.from_entity(user_message),
        system_response=ChatMessageSchema.from_entity(system_response),
    )


@router.get("/conversations/{phone}", response_model=ConversationSchema)
async def get_conversation(phone: str, store: StoreDep) -> ConversationSchema:
    conversation = store.conversation(store.normalize(phone))
    return ConversationSchema(
        phone_number=conversation.device,
        messages=[ChatMessageSchema.from_entity(m) for m in conversation.messages],
    )


@router.get("/devices", response_model=list[DeviceSchema])
async def list_devices(store: StoreDep) -> list[DeviceSchema]:
    return [DeviceSchema.from_entity(d) for d in store.devices()]


@router.get("/outbox", response_model=list[ChatMessageSchema])
async def get_outbox(store: StoreDep) -> list[ChatMessageSchema]:
    return [
        ChatMessageSchema(
            id=e.id,
            phone_number=e.device,
            body=e.body,
            timestamp=e.timestamp,
        )
        for e in store.outbox()
    ]


@router.delete("/reset", response_model=ResetResponse)
async def reset(store: StoreDep) -> ResetResponse:
    store.reset()
    return ResetResponse(status="reset", message="All conversations and outbox cleared")
