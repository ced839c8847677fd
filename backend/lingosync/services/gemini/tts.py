"""
Gemini Text-to-Speech Service

Synthesizes speech with the Gemini TTS model through Google Cloud
Text-to-Speech and plays it on the default audio output.
"""

import asyncio
import logging
from typing import Callable, Optional

import numpy as np
from google.cloud import texttospeech

from lingosync.config.settings import settings
from lingosync.config.constants import (
    DEFAULT_SPEECH_LOCALE,
    GEMINI_TTS_MODEL_NAME,
    LANGUAGE_CODE_MAP,
    TTS_CHANNELS,
    TTS_SAMPLE_RATE_HZ,
    TTS_TIMEOUT_SEC,
    TTS_VOICE_NAME,
)
from lingosync.config.languages import get_language_code
from lingosync.services.exceptions import ServiceConfigurationError
from lingosync.services.gemini.audio import (
    decode_audio_payload,
    pcm16_to_float32,
    play_samples,
)
from lingosync.services.metrics import speech_requests

logger = logging.getLogger(__name__)


def locale_for_language(language_name: str) -> str:
    """Map a display name such as "Spanish" onto a TTS locale ("es-ES")."""
    code = get_language_code(language_name)
    return LANGUAGE_CODE_MAP.get(code, DEFAULT_SPEECH_LOCALE) if code else DEFAULT_SPEECH_LOCALE


class GeminiSpeechService:
    """Handles Text-to-Speech playback."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        player: Callable[[np.ndarray], None] = play_samples,
    ):
        self._api_key = api_key or settings.API_KEY
        self._player = player
        self._client = None

    def _get_client(self) -> texttospeech.TextToSpeechClient:
        if self._client is None:
            if not self._api_key:
                raise ServiceConfigurationError(
                    "API_KEY is not set. Please update backend/.env accordingly."
                )
            self._client = texttospeech.TextToSpeechClient(
                client_options={"api_key": self._api_key}
            )
        return self._client

    def synthesize(self, text: str, language_name: str) -> bytes:
        """Synthesize text to LINEAR16 audio spoken in the named language."""
        voice_params = texttospeech.VoiceSelectionParams(
            language_code=locale_for_language(language_name),
            name=TTS_VOICE_NAME,
            model_name=GEMINI_TTS_MODEL_NAME,
        )

        audio_config = texttospeech.AudioConfig(
            audio_encoding=texttospeech.AudioEncoding.LINEAR16,
            sample_rate_hertz=TTS_SAMPLE_RATE_HZ,
        )

        synthesis_input = texttospeech.SynthesisInput(
            text=text,
            prompt=f"Say this in {language_name}",
        )

        response = self._get_client().synthesize_speech(
            input=synthesis_input,
            voice=voice_params,
            audio_config=audio_config,
            timeout=TTS_TIMEOUT_SEC,
        )

        return response.audio_content

    async def speak(self, text: str, language_name: str) -> None:
        """
        Synthesize and play text. Never raises: failures are logged.
        """
        if not text or not text.strip():
            return

        loop = asyncio.get_running_loop()
        try:
            audio_content = await loop.run_in_executor(
                None, self.synthesize, text, language_name
            )
            if not audio_content:
                raise ValueError("No audio data returned")

            samples = pcm16_to_float32(decode_audio_payload(audio_content), TTS_CHANNELS)
            await loop.run_in_executor(None, self._player, samples)
            speech_requests.labels(status="success").inc()
            logger.info(f"🔊 [Speech] Played {len(samples)} frames in {language_name}")
        except Exception as e:
            speech_requests.labels(status="error").inc()
            logger.error(f"[Speech] Speech synthesis failed: {e}")


# Global singleton instance
_speech_service: Optional[GeminiSpeechService] = None


def get_speech_service() -> GeminiSpeechService:
    """Get or create the global GeminiSpeechService instance."""
    global _speech_service
    if _speech_service is None:
        _speech_service = GeminiSpeechService()
    return _speech_service
