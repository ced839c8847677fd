"""
Schemas Package

Pydantic models for API and WebSocket events.
"""

from lingosync.schemas.translation import (
    Language,
    TranslationResult,
    HistoryItem,
    TranslateRequest,
    SpeechRequest,
    LanguagesResponse,
)
from lingosync.schemas.websocket_events import (
    WebSocketEventBase,
    InputEvent,
    LanguageEvent,
    SwapEvent,
    ClearEvent,
    SpeakEvent,
    ClearHistoryEvent,
    PingEvent,
    client_event_adapter,
)

__all__ = [
    "Language",
    "TranslationResult",
    "HistoryItem",
    "TranslateRequest",
    "SpeechRequest",
    "LanguagesResponse",
    "WebSocketEventBase",
    "InputEvent",
    "LanguageEvent",
    "SwapEvent",
    "ClearEvent",
    "SpeakEvent",
    "ClearHistoryEvent",
    "PingEvent",
    "client_event_adapter",
]
