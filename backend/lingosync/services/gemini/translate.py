"""
Gemini Translation Service

Streams and structured translations from Gemini via the Vertex AI SDK.
Authenticates with the API key from settings (Vertex AI express mode).

Usage:
    from lingosync.services.gemini import get_translation_service

    service = get_translation_service()
    full_text = await service.translate_stream("Hello", "auto", "es", on_chunk=print)
    result = await service.translate("Hello", "auto", "es")
"""

import logging
from typing import Callable, Optional

from google.api_core import exceptions as google_exceptions
from pydantic import ValidationError

from lingosync.config.settings import settings
from lingosync.config.constants import (
    AUTO_DETECT,
    GEMINI_MODEL_NAME,
    GEMINI_TEMPERATURE,
)
from lingosync.schemas.translation import TranslationPayload, TranslationResult
from lingosync.services.exceptions import (
    MalformedResponseError,
    ServiceConfigurationError,
    TranslationCancelledError,
    TranslationServiceError,
)

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = """You are a professional, high-fidelity translator.
Your task is to translate the user's input while STRICTLY PRESERVING:
1. All line breaks and paragraph spacing.
2. All formatting (bullet points, lists, indentation).
3. The tone and nuance of the original text.
Do not add any preamble, explanations, or meta-commentary. Return ONLY the translated text."""

STREAM_PROMPT = """Translate this text from {source} to {target}:

"{text}\""""

STRUCTURED_PROMPT = """Translate the following text into {target}.
Source language: {source}.
Text to translate: "{text}\""""

# OpenAPI subset accepted by GenerationConfig.response_schema
TRANSLATION_RESPONSE_SCHEMA = {
    "type": "OBJECT",
    "properties": {
        "translatedText": {"type": "STRING"},
        "detectedLanguage": {
            "type": "STRING",
            "description": "The ISO-639-1 code of the detected language if source was 'auto'",
        },
    },
    "required": ["translatedText"],
}


def build_stream_prompt(text: str, source_lang: str, target_lang: str) -> str:
    source = "automatically detected language" if source_lang == AUTO_DETECT else source_lang
    return STREAM_PROMPT.format(source=source, target=target_lang, text=text)


def build_structured_prompt(text: str, source_lang: str, target_lang: str) -> str:
    source = "Detect automatically" if source_lang == AUTO_DETECT else source_lang
    return STRUCTURED_PROMPT.format(source=source, target=target_lang, text=text)


def _response_text(response) -> str:
    # .text raises ValueError for chunks that only carry finish metadata
    try:
        return response.text or ""
    except ValueError:
        return ""


class GeminiTranslationService:
    """
    Translates text with Gemini.

    Lazy initialization: the SDK is configured on first use, so the
    application can start without credentials.
    """

    def __init__(self, api_key: Optional[str] = None, model_name: str = GEMINI_MODEL_NAME):
        self._api_key = api_key or settings.API_KEY
        self._model_name = model_name
        self._model = None

    def _initialize(self):
        """Lazy initialization of the Vertex AI client."""
        if self._model is not None:
            return

        if not self._api_key:
            raise ServiceConfigurationError(
                "API_KEY is not set. Please update backend/.env accordingly."
            )

        import vertexai
        from vertexai.generative_models import GenerativeModel

        vertexai.init(api_key=self._api_key)
        self._model = GenerativeModel(
            self._model_name,
            system_instruction=SYSTEM_INSTRUCTION,
        )
        logger.info(f"[Translation] Initialized Gemini (model={self._model_name})")

    async def translate_stream(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
        on_chunk: Callable[[str], None],
    ) -> str:
        """
        Stream a translation, calling on_chunk for each fragment.

        Returns the concatenated translation once the stream ends.
        """
        self._initialize()
        from vertexai.generative_models import GenerationConfig

        prompt = build_stream_prompt(text, source_lang, target_lang)
        generation_config = GenerationConfig(temperature=GEMINI_TEMPERATURE)

        parts: list[str] = []
        try:
            responses = await self._model.generate_content_async(
                prompt,
                generation_config=generation_config,
                stream=True,
            )
            async for response in responses:
                chunk = _response_text(response)
                if chunk:
                    parts.append(chunk)
                    on_chunk(chunk)
        except google_exceptions.Cancelled as e:
            raise TranslationCancelledError(str(e)) from e
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"[Translation] Streaming call failed: {e}")
            raise TranslationServiceError(str(e)) from e

        logger.debug(
            f"[Translation] Streamed {len(parts)} chunks "
            f"({source_lang} -> {target_lang})"
        )
        return "".join(parts)

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
    ) -> TranslationResult:
        """Translate in one request and parse the JSON response."""
        self._initialize()
        from vertexai.generative_models import GenerationConfig

        prompt = build_structured_prompt(text, source_lang, target_lang)
        generation_config = GenerationConfig(
            temperature=GEMINI_TEMPERATURE,
            response_mime_type="application/json",
            response_schema=TRANSLATION_RESPONSE_SCHEMA,
        )

        try:
            response = await self._model.generate_content_async(
                prompt,
                generation_config=generation_config,
            )
        except google_exceptions.Cancelled as e:
            raise TranslationCancelledError(str(e)) from e
        except google_exceptions.GoogleAPIError as e:
            logger.error(f"[Translation] Structured call failed: {e}")
            raise TranslationServiceError(str(e)) from e

        raw = _response_text(response)
        try:
            payload = TranslationPayload.model_validate_json(raw or "{}")
        except ValidationError as e:
            logger.warning(f"[Translation] Malformed structured response: {raw[:100]!r}")
            raise MalformedResponseError("Translation service returned an invalid response") from e

        return TranslationResult(
            translated_text=payload.translatedText,
            detected_language=payload.detectedLanguage,
            source_language=source_lang,
            target_language=target_lang,
        )


# Global singleton instance
_translation_service: Optional[GeminiTranslationService] = None


def get_translation_service() -> GeminiTranslationService:
    """Get or create the global GeminiTranslationService instance."""
    global _translation_service
    if _translation_service is None:
        _translation_service = GeminiTranslationService()
    return _translation_service
