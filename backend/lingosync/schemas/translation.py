"""
Translation Schemas

Pydantic models shared by the services, the REST API and the history store.
Records serialize with camelCase keys so persisted history stays compatible
with the browser client's storage format.
"""

import time
import uuid
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from lingosync.config.constants import AUTO_DETECT


class CamelModel(BaseModel):
    """Base model accepting and emitting camelCase field names."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class Language(CamelModel):
    code: str
    name: str


class TranslationResult(CamelModel):
    """Outcome of one completed translation request."""
    translated_text: str
    detected_language: Optional[str] = None
    source_language: str
    target_language: str


class HistoryItem(TranslationResult):
    """A remembered translation, stamped when it was recorded."""
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: int = Field(default_factory=lambda: int(time.time() * 1000))


class TranslationPayload(BaseModel):
    """Structured body returned by the model for a one-shot translation."""
    translatedText: str
    detectedLanguage: Optional[str] = None


# =============================================================================
# REST Request Models
# =============================================================================

class TranslateRequest(CamelModel):
    text: str = Field(..., min_length=1)
    source_language: str = AUTO_DETECT
    target_language: str


class SpeechRequest(CamelModel):
    text: str = Field(..., min_length=1)
    language: str


class LanguagesResponse(BaseModel):
    source: list[Language]
    target: list[Language]
