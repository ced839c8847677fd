"""
Protocol definitions for the translation pipeline collaborators.

This module defines interfaces (Python Protocols) that allow:
- Swapping implementations (e.g., Gemini -> another hosted model)
- Testing without real API credentials
- Clear contracts between components

Usage:
    from lingosync.services.protocols import StreamingTranslatorProtocol

    async def preview(translator: StreamingTranslatorProtocol, text: str):
        await translator.translate_stream(text, "auto", "es", print)
"""

from typing import Callable, Optional, Protocol

from lingosync.schemas.translation import TranslationResult


class StreamingTranslatorProtocol(Protocol):
    """
    Interface for translation services.

    Implementations must provide both streaming and structured translation.
    """

    async def translate_stream(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
        on_chunk: Callable[[str], None],
    ) -> str:
        """
        Stream a translation, invoking on_chunk for every text fragment.

        Args:
            text: Text to translate
            source_lang: Source language code, or "auto" to detect it
            target_lang: Target language code
            on_chunk: Called synchronously with each fragment as it arrives

        Returns:
            The concatenated translation

        Raises:
            TranslationCancelledError: the service cancelled the call
            TranslationServiceError: any other failure
        """
        ...

    async def translate(
        self,
        text: str,
        source_lang: str,
        target_lang: str,
    ) -> TranslationResult:
        """
        Translate text in one request with a structured response.

        Raises:
            MalformedResponseError: the response did not match the schema
            TranslationServiceError: the call failed
        """
        ...


class SpeechSynthesizerProtocol(Protocol):
    """
    Interface for text-to-speech playback.

    Implementations never raise: failures are logged and swallowed.
    """

    async def speak(self, text: str, language_name: str) -> None:
        ...


class KeyValueStoreProtocol(Protocol):
    """
    Subset of the async Redis client used for history persistence.
    """

    async def get(self, key: str) -> Optional[str]:
        ...

    async def set(self, key: str, value: str) -> object:
        ...

    async def delete(self, *keys: str) -> int:
        ...
