import asyncio
import logging
from typing import Any, Dict, Optional, Set

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import ValidationError

from lingosync.config.constants import DEBOUNCE_DELAY_SEC
from lingosync.schemas.websocket_events import (
    ClearEvent,
    ClearHistoryEvent,
    InputEvent,
    LanguageEvent,
    PingEvent,
    SpeakEvent,
    SwapEvent,
    client_event_adapter,
)
from lingosync.services.exceptions import InvalidLanguageError
from lingosync.services.history import HistoryCache
from lingosync.services.metrics import live_sessions_gauge
from lingosync.services.protocols import (
    SpeechSynthesizerProtocol,
    StreamingTranslatorProtocol,
)
from lingosync.services.session.orchestrator import TranslationOrchestrator

logger = logging.getLogger(__name__)


class LiveSession:
    """
    Runs one WebSocket connection.
    Handles:
    - Event parsing and dispatch to the orchestrator
    - Ordered delivery of state snapshots back to the client
    - Cleanup on disconnect
    """

    def __init__(
        self,
        websocket: WebSocket,
        translator: StreamingTranslatorProtocol,
        history: HistoryCache,
        speech: Optional[SpeechSynthesizerProtocol] = None,
        debounce_sec: float = DEBOUNCE_DELAY_SEC,
    ):
        self.websocket = websocket
        self._outbox: asyncio.Queue[Dict[str, Any]] = asyncio.Queue()
        self._speech_tasks: Set[asyncio.Task] = set()
        self.orchestrator = TranslationOrchestrator(
            translator=translator,
            history=history,
            speech=speech,
            on_update=self._queue_state,
            debounce_sec=debounce_sec,
        )

    async def run(self):
        """
        Main entry point for handling a WebSocket connection.
        """
        await self.websocket.accept()
        live_sessions_gauge.inc()
        logger.info("🔌 [LiveSession] Client connected")

        sender = asyncio.create_task(self._send_loop())
        self._queue_state(self.orchestrator.snapshot())

        try:
            await self._receive_loop()
        except WebSocketDisconnect:
            logger.info("[LiveSession] Client disconnected")
        finally:
            self.orchestrator.close()
            sender.cancel()
            live_sessions_gauge.dec()

    async def _receive_loop(self):
        while True:
            raw = await self.websocket.receive_text()
            try:
                event = client_event_adapter.validate_json(raw)
            except ValidationError as e:
                logger.warning(f"[LiveSession] Invalid event: {e.error_count()} errors")
                self._queue_error("Invalid event")
                continue
            await self._dispatch(event)

    async def _dispatch(self, event):
        orchestrator = self.orchestrator

        if isinstance(event, InputEvent):
            orchestrator.on_input_change(event.text)
        elif isinstance(event, LanguageEvent):
            try:
                orchestrator.on_language_change(event.which, event.code)
            except InvalidLanguageError as e:
                self._queue_error(str(e))
        elif isinstance(event, SwapEvent):
            orchestrator.swap_languages()
        elif isinstance(event, ClearEvent):
            orchestrator.clear_all()
        elif isinstance(event, SpeakEvent):
            # Playback can take seconds; keep reading events meanwhile
            task = asyncio.create_task(orchestrator.speak(event.which))
            self._speech_tasks.add(task)
            task.add_done_callback(self._speech_tasks.discard)
        elif isinstance(event, ClearHistoryEvent):
            await orchestrator.clear_history()
        elif isinstance(event, PingEvent):
            self._outbox.put_nowait({"type": "pong"})

    async def _send_loop(self):
        while True:
            message = await self._outbox.get()
            try:
                await self.websocket.send_json(message)
            except (WebSocketDisconnect, RuntimeError) as e:
                logger.debug(f"[LiveSession] Send failed, stopping sender: {e}")
                return

    def _queue_state(self, snapshot: Dict[str, Any]):
        self._outbox.put_nowait({"type": "state", "state": snapshot})

    def _queue_error(self, message: str):
        self._outbox.put_nowait({"type": "error", "message": message})
