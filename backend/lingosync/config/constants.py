"""
Application-wide constants for configuration and tuning.

This file centralizes all magic numbers and configuration values
to enable easy tuning and maintain consistency across the backend.

Note: Environment-dependent settings (Redis, API key) belong in settings.py.
This file is for operational parameters that rarely change between environments.
"""

# ==============================================================================
# LIVE TRANSLATION
# ==============================================================================

# Quiet period after the last keystroke before a translation starts (seconds)
DEBOUNCE_DELAY_SEC: float = 0.8

# Reserved source language value meaning "let the model detect it"
AUTO_DETECT: str = "auto"

# Initial language pair for a new session
DEFAULT_SOURCE_LANGUAGE: str = AUTO_DETECT
DEFAULT_TARGET_LANGUAGE: str = "es"

# Language used to speak the input when the source is auto-detected
DEFAULT_SPEECH_LANGUAGE: str = "en"

# Shown when a failed translation carries no message of its own
TRANSLATION_FAILED_MESSAGE: str = "Translation failed. Please try again."

# ==============================================================================
# GEMINI TRANSLATION
# ==============================================================================

# Gemini model used for both streaming and structured translation
GEMINI_MODEL_NAME: str = "gemini-3-flash-preview"

# Low temperature for literal, consistent translation
GEMINI_TEMPERATURE: float = 0.2

# ==============================================================================
# GEMINI SPEECH SYNTHESIS
# ==============================================================================

# Gemini TTS model served through Cloud Text-to-Speech
GEMINI_TTS_MODEL_NAME: str = "gemini-2.5-flash-preview-tts"

# Prebuilt voice used for every utterance
TTS_VOICE_NAME: str = "Kore"

# Raw PCM format returned by the TTS model
TTS_SAMPLE_RATE_HZ: int = 24000
TTS_CHANNELS: int = 1

# Bytes per sample (16-bit PCM = 2 bytes)
TTS_BYTES_PER_SAMPLE: int = 2

# Divisor mapping int16 samples onto [-1.0, 1.0]
PCM16_SCALE: float = 32768.0

# Text-to-Speech API timeout (seconds)
TTS_TIMEOUT_SEC: float = 30.0

# ==============================================================================
# HISTORY
# ==============================================================================

# Maximum number of remembered translations
HISTORY_MAX_ITEMS: int = 10

# Key holding the JSON-serialized history list
HISTORY_STORAGE_KEY: str = "translation_history"

# ==============================================================================
# LANGUAGE DEFAULTS
# ==============================================================================

# Fallback locale for speech synthesis when a code has no entry below
DEFAULT_SPEECH_LOCALE: str = "en-US"

# Language code expansion map (short code -> full locale)
LANGUAGE_CODE_MAP: dict[str, str] = {
    "en": "en-US",
    "es": "es-ES",
    "fr": "fr-FR",
    "de": "de-DE",
    "it": "it-IT",
    "pt": "pt-BR",
    "ru": "ru-RU",
    "he": "he-IL",
    "ar": "ar-XA",
    "hi": "hi-IN",
    "zh": "cmn-CN",
    "ja": "ja-JP",
    "ko": "ko-KR",
    "nl": "nl-NL",
    "pl": "pl-PL",
    "tr": "tr-TR",
    "uk": "uk-UA",
    "vi": "vi-VN",
}
