"""
Gemini Services Package

Exports the translation and speech adapters.
"""

from lingosync.services.gemini.translate import GeminiTranslationService, get_translation_service
from lingosync.services.gemini.tts import GeminiSpeechService, get_speech_service

__all__ = [
    "GeminiTranslationService",
    "get_translation_service",
    "GeminiSpeechService",
    "get_speech_service",
]
