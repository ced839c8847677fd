"""
WebSocket Router - Live Translation Endpoint

This is the thin routing layer that delegates to LiveSession
for all WebSocket session management.
"""
from fastapi import APIRouter, Depends, WebSocket

from lingosync.api.deps import get_debounce_delay, get_history, get_speech, get_translator
from lingosync.services.history import HistoryCache
from lingosync.services.protocols import (
    SpeechSynthesizerProtocol,
    StreamingTranslatorProtocol,
)
from lingosync.services.session.live import LiveSession

router = APIRouter()


@router.websocket("/ws/translate")
async def ws_endpoint(
    websocket: WebSocket,
    translator: StreamingTranslatorProtocol = Depends(get_translator),
    history: HistoryCache = Depends(get_history),
    speech: SpeechSynthesizerProtocol = Depends(get_speech),
    debounce_sec: float = Depends(get_debounce_delay),
):
    """
    WebSocket endpoint for live translation.

    Message Types (JSON, client -> server):
        - input: {"text"} input text changed
        - language: {"which": "source"|"target", "code"} selection changed
        - swap: swap languages and texts (ignored while source is "auto")
        - clear: clear input, output and error
        - speak: {"which": "input"|"output"} play text as speech
        - clear_history: forget remembered translations
        - ping: latency check

    Message Types (JSON, server -> client):
        - state: {"state": {...}} full session snapshot incl. history
        - error: {"message"} rejected event
        - pong
    """
    session = LiveSession(
        websocket=websocket,
        translator=translator,
        history=history,
        speech=speech,
        debounce_sec=debounce_sec,
    )
    await session.run()
