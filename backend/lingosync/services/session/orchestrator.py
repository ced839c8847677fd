"""
Translation Orchestrator - Live Translation Session

Turns keystrokes into a streamed translation with as few remote calls as
possible, one instance per connected client.

Architecture:
    input/language change -> Debouncer (quiet period) -> translate_stream
    -> chunks accumulate into SessionState -> HistoryCache.record

Key Features:
- Every qualifying change restarts a single debounce timer
- Each started request gets a sequence number; state is only mutated by
  the request whose number is still current, and a superseded request's
  task is cancelled
- Every transition publishes a snapshot (state + history) to a listener

Usage:
    orchestrator = TranslationOrchestrator(
        translator=get_translation_service(),
        history=await get_history_cache(),
        speech=get_speech_service(),
        on_update=queue.put_nowait,
    )
    orchestrator.on_input_change("Hello")
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from lingosync.config.constants import (
    AUTO_DETECT,
    DEBOUNCE_DELAY_SEC,
    DEFAULT_SOURCE_LANGUAGE,
    DEFAULT_SPEECH_LANGUAGE,
    DEFAULT_TARGET_LANGUAGE,
    TRANSLATION_FAILED_MESSAGE,
)
from lingosync.config.languages import (
    get_language_name,
    is_source_language,
    is_target_language,
)
from lingosync.services.exceptions import InvalidLanguageError, TranslationCancelledError
from lingosync.services.history import HistoryCache
from lingosync.services.metrics import translation_latency, translations_total
from lingosync.services.protocols import (
    SpeechSynthesizerProtocol,
    StreamingTranslatorProtocol,
)
from lingosync.services.session.debounce import Debouncer

logger = logging.getLogger(__name__)

StateListener = Callable[[Dict[str, Any]], None]


@dataclass
class SessionState:
    """Everything the client renders for one live session."""
    input_text: str = ""
    translated_text: str = ""
    source_language: str = DEFAULT_SOURCE_LANGUAGE
    target_language: str = DEFAULT_TARGET_LANGUAGE
    is_translating: bool = False
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "inputText": self.input_text,
            "translatedText": self.translated_text,
            "sourceLanguage": self.source_language,
            "targetLanguage": self.target_language,
            "isTranslating": self.is_translating,
            "error": self.error,
        }


class TranslationOrchestrator:
    """
    Owns one SessionState and the single debounce timer that drives it.

    Not thread-safe: all methods must be called from the event loop.
    """

    def __init__(
        self,
        translator: StreamingTranslatorProtocol,
        history: HistoryCache,
        speech: Optional[SpeechSynthesizerProtocol] = None,
        on_update: Optional[StateListener] = None,
        debounce_sec: float = DEBOUNCE_DELAY_SEC,
    ):
        self.state = SessionState()
        self._translator = translator
        self._history = history
        self._speech = speech
        self._on_update = on_update
        self._debouncer = Debouncer(debounce_sec, self._start_translation)
        self._sequence = 0
        self._task: Optional[asyncio.Task] = None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def is_pending(self) -> bool:
        """True while a translation is scheduled but not yet started."""
        return self._debouncer.pending

    @property
    def current_task(self) -> Optional[asyncio.Task]:
        return self._task

    @property
    def can_swap(self) -> bool:
        return self.state.source_language != AUTO_DETECT

    def snapshot(self) -> Dict[str, Any]:
        data = self.state.to_dict()
        data["canSwap"] = self.can_swap
        data["history"] = [
            item.model_dump(mode="json", by_alias=True) for item in self._history.items
        ]
        return data

    # ------------------------------------------------------------------
    # User events
    # ------------------------------------------------------------------

    def on_input_change(self, text: str):
        self.state.input_text = text
        self._reschedule()

    def on_language_change(self, which: str, code: str):
        """Select the source or target language and restart the quiet period."""
        if which == "source":
            if not is_source_language(code):
                raise InvalidLanguageError(f"Unknown source language: {code}")
            self.state.source_language = code
        elif which == "target":
            if not is_target_language(code):
                raise InvalidLanguageError(f"Unknown target language: {code}")
            self.state.target_language = code
        else:
            raise ValueError(f"Expected 'source' or 'target', got {which!r}")
        self._reschedule()

    def swap_languages(self) -> bool:
        """
        Swap the language pair and the input/output texts.

        Returns False (and changes nothing) when the source is auto-detected,
        since the detected language's code is not known.
        """
        if not self.can_swap:
            return False

        state = self.state
        state.source_language, state.target_language = state.target_language, state.source_language
        state.input_text, state.translated_text = state.translated_text, state.input_text
        self._reschedule()
        return True

    def clear_all(self):
        """Clear input, output and error, dropping any scheduled or running request."""
        self._debouncer.cancel()
        self._invalidate()
        self.state.input_text = ""
        self.state.translated_text = ""
        self.state.error = None
        self.state.is_translating = False
        self._publish()

    async def speak(self, which: str) -> bool:
        """
        Speak the input or the output text.

        The input is spoken in English when the source is auto-detected.
        Returns False when there is nothing to speak.
        """
        state = self.state
        if which == "input":
            text = state.input_text
            code = DEFAULT_SPEECH_LANGUAGE if state.source_language == AUTO_DETECT else state.source_language
        elif which == "output":
            text = state.translated_text
            code = state.target_language
        else:
            raise ValueError(f"Expected 'input' or 'output', got {which!r}")

        language_name = get_language_name(code)
        if self._speech is None or not language_name or not text.strip():
            return False

        await self._speech.speak(text, language_name)
        return True

    async def clear_history(self):
        await self._history.clear()
        self._publish()

    def close(self):
        """Stop the timer and any running request (client went away)."""
        self._debouncer.cancel()
        self._invalidate()

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    async def run_translation(self, text: str, sequence: Optional[int] = None):
        """
        Stream one translation into the session state.

        Normally started by the debounce timer; calling it directly
        supersedes whatever request is current.
        """
        if sequence is None:
            self._invalidate()
            sequence = self._sequence

        source = self.state.source_language
        target = self.state.target_language
        language_pair = f"{source}-{target}"

        self.state.is_translating = True
        self.state.error = None
        self.state.translated_text = ""
        self._publish()

        chunks: list[str] = []

        def on_chunk(chunk: str):
            if not self._is_current(sequence):
                return
            chunks.append(chunk)
            self.state.translated_text = "".join(chunks)
            self._publish()

        start_time = time.perf_counter()
        status = "success"
        try:
            await self._translator.translate_stream(text, source, target, on_chunk)
            if self._is_current(sequence):
                await self._history.record(text, "".join(chunks), source, target)
        except asyncio.CancelledError:
            status = "superseded"
            raise
        except TranslationCancelledError as e:
            status = "cancelled"
            logger.info(f"[Orchestrator] Translation cancelled: {e}")
        except Exception as e:
            status = "error"
            logger.error(f"[Orchestrator] Translation failed ({language_pair}): {e}")
            if self._is_current(sequence):
                self.state.error = str(e) or TRANSLATION_FAILED_MESSAGE
        finally:
            translations_total.labels(status=status, language_pair=language_pair).inc()
            if self._is_current(sequence):
                translation_latency.labels(language_pair=language_pair).observe(
                    time.perf_counter() - start_time
                )
                self.state.is_translating = False
                self._publish()

    def _start_translation(self):
        """Debounce callback: supersede the current request and start a new one."""
        self._invalidate()
        sequence = self._sequence
        text = self.state.input_text
        logger.debug(f"[Orchestrator] Starting translation #{sequence}: '{text[:30]}'")
        self._task = asyncio.get_running_loop().create_task(
            self.run_translation(text, sequence=sequence)
        )

    def _reschedule(self):
        self._debouncer.cancel()
        if not self.state.input_text.strip():
            self._invalidate()
            self.state.translated_text = ""
            self.state.is_translating = False
        else:
            self._debouncer.schedule()
        self._publish()

    def _invalidate(self):
        """Revoke the current request's right to mutate state."""
        self._sequence += 1
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def _is_current(self, sequence: int) -> bool:
        return sequence == self._sequence

    def _publish(self):
        if self._on_update is not None:
            self._on_update(self.snapshot())
