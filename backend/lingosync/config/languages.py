"""
Language Registry

Static code -> display name table used for source/target selection and for
naming the spoken language in speech requests.
"""

from typing import Optional

from lingosync.config.constants import AUTO_DETECT
from lingosync.schemas.translation import Language

TARGET_LANGUAGES: tuple[Language, ...] = (
    Language(code="en", name="English"),
    Language(code="es", name="Spanish"),
    Language(code="fr", name="French"),
    Language(code="de", name="German"),
    Language(code="it", name="Italian"),
    Language(code="pt", name="Portuguese"),
    Language(code="ru", name="Russian"),
    Language(code="he", name="Hebrew"),
    Language(code="ar", name="Arabic"),
    Language(code="hi", name="Hindi"),
    Language(code="zh", name="Chinese (Simplified)"),
    Language(code="ja", name="Japanese"),
    Language(code="ko", name="Korean"),
    Language(code="nl", name="Dutch"),
    Language(code="pl", name="Polish"),
    Language(code="tr", name="Turkish"),
    Language(code="uk", name="Ukrainian"),
    Language(code="vi", name="Vietnamese"),
)

SOURCE_LANGUAGES: tuple[Language, ...] = (
    Language(code=AUTO_DETECT, name="Detect Language"),
) + TARGET_LANGUAGES

_NAMES_BY_CODE: dict[str, str] = {lang.code: lang.name for lang in SOURCE_LANGUAGES}


def get_language_name(code: str) -> Optional[str]:
    """Display name for a code, or None when the code is unknown."""
    return _NAMES_BY_CODE.get(code)


def is_source_language(code: str) -> bool:
    return code in _NAMES_BY_CODE


def is_target_language(code: str) -> bool:
    return code != AUTO_DETECT and code in _NAMES_BY_CODE


def get_language_code(name: str) -> Optional[str]:
    """Reverse lookup used when only the display name is known."""
    for lang in TARGET_LANGUAGES:
        if lang.name == name:
            return lang.code
    return None
