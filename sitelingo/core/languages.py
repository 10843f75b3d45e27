"""
Languages served by the site.

German is the canonical source language; every other language is a
translation target.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable

from sitelingo.core.errors import ValidationError


class Language(str, Enum):
    """Supported site languages."""
    
    DE = "de"  # German (source of truth)
    EN = "en"
    FR = "fr"
    IT = "it"
    ES = "es"


DEFAULT_SOURCE_LANGUAGE = Language.DE


# Human-readable names, used inside provider prompts
LANGUAGE_NAMES: dict[str, str] = {
    "de": "German",
    "en": "English",
    "fr": "French",
    "it": "Italian",
    "es": "Spanish",
}


SUPPORTED_LANGUAGES = list(Language)


def get_language_name(code: str) -> str:
    """Get human-readable language name."""
    return LANGUAGE_NAMES.get(str(code).lower(), str(code))


def normalize_language_code(code: str) -> str:
    """Normalize language code to standard form."""
    code = code.lower().strip()
    
    variants = {
        "german": "de",
        "deutsch": "de",
        "english": "en",
        "englisch": "en",
        "french": "fr",
        "französisch": "fr",
        "italian": "it",
        "italienisch": "it",
        "spanish": "es",
        "spanisch": "es",
        # Regional variants collapse onto the base language
        "de-de": "de",
        "de-at": "de",
        "de-ch": "de",
        "en-us": "en",
        "en-gb": "en",
        "fr-fr": "fr",
        "fr-ch": "fr",
        "it-it": "it",
        "it-ch": "it",
        "es-es": "es",
    }
    
    return variants.get(code, code)


def parse_language(
    code: str | Language,
    supported: Iterable[Language] | None = None,
) -> Language:
    """
    Resolve a language code to a Language.
    
    Raises:
        ValidationError: if the code is unknown or not in ``supported``.
    """
    if isinstance(code, Language):
        language = code
    else:
        try:
            language = Language(normalize_language_code(str(code)))
        except ValueError:
            raise ValidationError(f"Unsupported language: {code!r}") from None
    
    if supported is not None and language not in set(supported):
        raise ValidationError(f"Language not enabled: {language.value!r}")
    
    return language
