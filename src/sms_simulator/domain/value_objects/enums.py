from __future__ import annotations

from enum import StrEnum


class MessageDirection(StrEnum):
    INBOUND = "INBOUND"
    OUTBOUND = "OUTBOUND"


class ConversationStatus(StrEnum):
    """What the conversation pane currently shows."""

    EMPTY = "empty"
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"
