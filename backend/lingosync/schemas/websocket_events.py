"""
WebSocket Event Schemas

Pydantic models for type-safe WebSocket event handling.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter


# =============================================================================
# Client -> Server Events
# =============================================================================

class WebSocketEventBase(BaseModel):
    """Base model for all WebSocket events."""
    type: str


class InputEvent(WebSocketEventBase):
    """Input text changed (sent on every keystroke)."""
    type: Literal["input"] = "input"
    text: str = ""


class LanguageEvent(WebSocketEventBase):
    """Source or target language selection changed."""
    type: Literal["language"] = "language"
    which: Literal["source", "target"]
    code: str


class SwapEvent(WebSocketEventBase):
    """Swap languages and texts."""
    type: Literal["swap"] = "swap"


class ClearEvent(WebSocketEventBase):
    """Clear input, output and error."""
    type: Literal["clear"] = "clear"


class SpeakEvent(WebSocketEventBase):
    """Play the input or output text as speech."""
    type: Literal["speak"] = "speak"
    which: Literal["input", "output"] = "output"


class ClearHistoryEvent(WebSocketEventBase):
    """Forget all remembered translations."""
    type: Literal["clear_history"] = "clear_history"


class PingEvent(WebSocketEventBase):
    """Simple ping for latency check."""
    type: Literal["ping"] = "ping"


ClientEvent = Annotated[
    Union[
        InputEvent,
        LanguageEvent,
        SwapEvent,
        ClearEvent,
        SpeakEvent,
        ClearHistoryEvent,
        PingEvent,
    ],
    Field(discriminator="type"),
]

client_event_adapter: TypeAdapter[ClientEvent] = TypeAdapter(ClientEvent)
