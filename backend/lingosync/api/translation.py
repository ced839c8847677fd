"""
Translation API - One-shot endpoints

Implements:
- Language lists for source/target selection
- Structured (non-streaming) translation
- Speech playback of arbitrary text
"""
import logging

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, status

from lingosync.api.deps import get_speech, get_translator
from lingosync.config.languages import (
    SOURCE_LANGUAGES,
    TARGET_LANGUAGES,
    get_language_name,
    is_source_language,
    is_target_language,
)
from lingosync.schemas.translation import (
    LanguagesResponse,
    SpeechRequest,
    TranslateRequest,
    TranslationResult,
)
from lingosync.services.exceptions import (
    MalformedResponseError,
    ServiceConfigurationError,
    TranslationServiceError,
)
from lingosync.services.protocols import (
    SpeechSynthesizerProtocol,
    StreamingTranslatorProtocol,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/languages", response_model=LanguagesResponse)
async def list_languages():
    """Languages offered for the source (including auto-detect) and the target."""
    return LanguagesResponse(source=list(SOURCE_LANGUAGES), target=list(TARGET_LANGUAGES))


@router.post("/translate", response_model=TranslationResult, response_model_by_alias=True)
async def translate_text(
    request: TranslateRequest,
    translator: StreamingTranslatorProtocol = Depends(get_translator),
):
    """
    Translate text in a single request.

    Returns the translated text and, for auto-detected sources,
    the detected language code.
    """
    if not is_source_language(request.source_language):
        raise HTTPException(status_code=400, detail=f"Unknown source language: {request.source_language}")
    if not is_target_language(request.target_language):
        raise HTTPException(status_code=400, detail=f"Unknown target language: {request.target_language}")

    try:
        return await translator.translate(
            request.text,
            request.source_language,
            request.target_language,
        )
    except ServiceConfigurationError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except MalformedResponseError as e:
        raise HTTPException(status_code=502, detail=str(e))
    except TranslationServiceError as e:
        logger.error(f"[API] Translation failed: {e}")
        raise HTTPException(status_code=502, detail=str(e) or "Translation failed")


@router.post("/speech", status_code=status.HTTP_202_ACCEPTED)
async def speak_text(
    request: SpeechRequest,
    background_tasks: BackgroundTasks,
    speech: SpeechSynthesizerProtocol = Depends(get_speech),
):
    """Queue text for playback in the given language (code)."""
    language_name = get_language_name(request.language)
    if language_name is None:
        raise HTTPException(status_code=400, detail=f"Unknown language: {request.language}")

    background_tasks.add_task(speech.speak, request.text, language_name)
    return {"status": "queued", "language": language_name}
