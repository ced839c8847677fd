"""
Tests for the Gemini translation adapter
"""
import pytest
from unittest.mock import MagicMock, patch

from google.api_core import exceptions as google_exceptions

from lingosync.config.constants import GEMINI_TEMPERATURE
from lingosync.services.exceptions import (
    MalformedResponseError,
    ServiceConfigurationError,
    TranslationCancelledError,
    TranslationServiceError,
)
from lingosync.services.gemini.translate import (
    GeminiTranslationService,
    SYSTEM_INSTRUCTION,
    TRANSLATION_RESPONSE_SCHEMA,
    build_stream_prompt,
    build_structured_prompt,
)


class FakeResponse:
    def __init__(self, text):
        self._text = text

    @property
    def text(self):
        if self._text is None:
            raise ValueError("Response has no text parts")
        return self._text


async def _stream(responses):
    for response in responses:
        yield response


class FakeModel:
    """Mimics GenerativeModel.generate_content_async."""

    def __init__(self, responses=(), error=None):
        self.responses = list(responses)
        self.error = error
        self.calls = []

    async def generate_content_async(self, contents, generation_config=None, stream=False):
        self.calls.append({"contents": contents, "config": generation_config, "stream": stream})
        if self.error is not None:
            raise self.error
        if stream:
            return _stream(self.responses)
        return self.responses[0]


@pytest.fixture
def generation_config(monkeypatch):
    config = MagicMock(name="GenerationConfig")
    monkeypatch.setattr("vertexai.generative_models.GenerationConfig", config)
    return config


def _service(model):
    service = GeminiTranslationService(api_key="test-key")
    service._model = model
    return service


def test_stream_prompt_mentions_auto_detection():
    prompt = build_stream_prompt("Hello", "auto", "es")
    assert "automatically detected language" in prompt
    assert "to es" in prompt
    assert '"Hello"' in prompt


def test_stream_prompt_with_explicit_source():
    prompt = build_stream_prompt("Hello", "en", "fr")
    assert "from en to fr" in prompt


def test_structured_prompt_mentions_source():
    assert "Detect automatically" in build_structured_prompt("Hi", "auto", "de")
    assert "Source language: en." in build_structured_prompt("Hi", "en", "de")


def test_system_instruction_requires_preserved_formatting():
    assert "line breaks" in SYSTEM_INSTRUCTION
    assert "Return ONLY the translated text" in SYSTEM_INSTRUCTION


@pytest.mark.asyncio
async def test_translate_stream_forwards_chunks(generation_config):
    model = FakeModel([FakeResponse("Hola"), FakeResponse(", "), FakeResponse(None), FakeResponse("mundo")])
    service = _service(model)
    chunks = []

    result = await service.translate_stream("Hello, world", "auto", "es", chunks.append)

    assert chunks == ["Hola", ", ", "mundo"]
    assert result == "Hola, mundo"
    assert model.calls[0]["stream"] is True
    generation_config.assert_called_once_with(temperature=GEMINI_TEMPERATURE)


@pytest.mark.asyncio
async def test_translate_stream_maps_cancellation(generation_config):
    service = _service(FakeModel(error=google_exceptions.Cancelled("client cancelled")))

    with pytest.raises(TranslationCancelledError):
        await service.translate_stream("Hello", "auto", "es", lambda chunk: None)


@pytest.mark.asyncio
async def test_translate_stream_maps_service_failure(generation_config):
    service = _service(FakeModel(error=google_exceptions.ServiceUnavailable("down")))

    with pytest.raises(TranslationServiceError) as exc_info:
        await service.translate_stream("Hello", "auto", "es", lambda chunk: None)

    assert not isinstance(exc_info.value, TranslationCancelledError)


@pytest.mark.asyncio
async def test_translate_parses_structured_response(generation_config):
    model = FakeModel([FakeResponse('{"translatedText": "Hola", "detectedLanguage": "en"}')])
    service = _service(model)

    result = await service.translate("Hello", "auto", "es")

    assert result.translated_text == "Hola"
    assert result.detected_language == "en"
    assert result.source_language == "auto"
    assert result.target_language == "es"
    generation_config.assert_called_once_with(
        temperature=GEMINI_TEMPERATURE,
        response_mime_type="application/json",
        response_schema=TRANSLATION_RESPONSE_SCHEMA,
    )


@pytest.mark.asyncio
async def test_translate_without_detected_language(generation_config):
    service = _service(FakeModel([FakeResponse('{"translatedText": "Bonjour"}')]))

    result = await service.translate("Hello", "en", "fr")

    assert result.translated_text == "Bonjour"
    assert result.detected_language is None


@pytest.mark.asyncio
@pytest.mark.parametrize("raw", [
    "Hola",
    '{"detectedLanguage": "en"}',
    "",
    None,
])
async def test_translate_rejects_malformed_response(generation_config, raw):
    service = _service(FakeModel([FakeResponse(raw)]))

    with pytest.raises(MalformedResponseError):
        await service.translate("Hello", "auto", "es")


def test_schema_requires_translated_text():
    assert TRANSLATION_RESPONSE_SCHEMA["required"] == ["translatedText"]
    assert set(TRANSLATION_RESPONSE_SCHEMA["properties"]) == {"translatedText", "detectedLanguage"}


@pytest.mark.asyncio
async def test_missing_api_key_raises_configuration_error(monkeypatch):
    monkeypatch.setattr("lingosync.services.gemini.translate.settings.API_KEY", None)
    service = GeminiTranslationService()

    with pytest.raises(ServiceConfigurationError):
        await service.translate_stream("Hello", "auto", "es", lambda chunk: None)


def test_initialize_uses_api_key():
    with patch("vertexai.init") as mock_init, \
         patch("vertexai.generative_models.GenerativeModel") as mock_model:
        service = GeminiTranslationService(api_key="secret", model_name="gemini-test")
        service._initialize()
        service._initialize()

    mock_init.assert_called_once_with(api_key="secret")
    mock_model.assert_called_once_with("gemini-test", system_instruction=SYSTEM_INSTRUCTION)
