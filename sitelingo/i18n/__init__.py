"""
Internationalization for site content.

Single strings go through the Translator, whole content trees through the
StructureTranslator, and multi-language batches through the
FanOutOrchestrator.
"""

from sitelingo.i18n.translator import Translator
from sitelingo.i18n.hints import ContextHints, looks_untranslatable
from sitelingo.i18n.structure import StructureTranslator
from sitelingo.i18n.document import (
    HERO_SLIDE_CONTEXTS,
    FEATURED_PROJECT_CONTEXTS,
    translate_fields,
    translate_homepage_content,
)
from sitelingo.i18n.fanout import FanOutOrchestrator, PROJECT_FIELDS

__all__ = [
    "Translator",
    "ContextHints",
    "looks_untranslatable",
    "StructureTranslator",
    "HERO_SLIDE_CONTEXTS",
    "FEATURED_PROJECT_CONTEXTS",
    "translate_fields",
    "translate_homepage_content",
    "FanOutOrchestrator",
    "PROJECT_FIELDS",
]
