"""
Shared FastAPI dependencies.

Route handlers receive their collaborators through these functions so tests
can swap them with `app.dependency_overrides`.
"""
from lingosync.config.constants import DEBOUNCE_DELAY_SEC
from lingosync.services.gemini import (
    GeminiSpeechService,
    GeminiTranslationService,
    get_speech_service,
    get_translation_service,
)
from lingosync.services.history import HistoryCache, get_history_cache


def get_translator() -> GeminiTranslationService:
    """
    Dependency for the translation adapter.
    """
    return get_translation_service()


def get_speech() -> GeminiSpeechService:
    return get_speech_service()


async def get_history() -> HistoryCache:
    """
    Dependency for the process-wide history cache (loaded on first use).
    """
    return await get_history_cache()


def get_debounce_delay() -> float:
    """Quiet period before a live session starts translating."""
    return DEBOUNCE_DELAY_SEC
