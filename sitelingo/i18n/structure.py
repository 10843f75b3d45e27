"""
Recursive structure translator.

Walks JSON-like content (dicts, lists, scalars) and translates every
string leaf. The output always has the input's shape: same keys, same
list lengths, same non-string leaves.
"""

from __future__ import annotations

import asyncio
from typing import Any

from sitelingo.core.languages import Language, parse_language
from sitelingo.i18n.hints import ContextHints, looks_untranslatable
from sitelingo.i18n.translator import Translator


class StructureTranslator:
    """
    Translate arbitrary content trees.

    Usage:
        walker = StructureTranslator(translator, load_context_hints())
        page = await walker.translate_tree(
            {"title": "Haus am See", "year": 2024, "gallery": ["a.jpg"]},
            target="en",
        )

    Each string is translated with a context hint taken from the key that
    holds it (via ``hints``), falling back to the enclosing context.
    """

    def __init__(self, translator: Translator, hints: ContextHints | None = None):
        self.translator = translator
        self.hints = hints or ContextHints()

    async def translate_tree(
        self,
        value: Any,
        target: str | Language,
        source: str | Language | None = None,
        parent_context: str = "",
        fallback: bool = True,
    ) -> Any:
        """
        Translate every string leaf of ``value``.

        Args:
            value: dict, list, string or any other scalar
            target: Target language
            source: Source language (defaults to the translator's)
            parent_context: Context hint for strings under unknown keys
            fallback: Passed through to the translator

        Returns:
            New value with the same shape (input unchanged)
        """
        target = parse_language(target, self.translator.supported)
        if source is not None:
            source = parse_language(source, self.translator.supported)
        return await self.translate_value(
            value, target, source, key=None, parent_context=parent_context, fallback=fallback
        )

    async def translate_value(
        self,
        value: Any,
        target: Language,
        source: Language | None = None,
        key: str | None = None,
        parent_context: str = "",
        fallback: bool = True,
    ) -> Any:
        """Translate one value found under ``key``."""
        if self.hints.is_passthrough(key):
            return value

        if isinstance(value, str):
            if looks_untranslatable(value):
                return value
            context = self.hints.hint_for(key, parent_context)
            return await self.translator.translate(value, target, source, context, fallback=fallback)

        if isinstance(value, dict):
            scope = self._scope(key, parent_context)
            keys = list(value.keys())
            translated = await asyncio.gather(*(
                self.translate_value(value[k], target, source, key=str(k), parent_context=scope, fallback=fallback)
                for k in keys
            ))
            return dict(zip(keys, translated))

        if isinstance(value, (list, tuple)):
            leaf_context = self.hints.hint_for(key, parent_context)
            scope = self._scope(key, parent_context)
            items = await asyncio.gather(*(
                self.translate_value(
                    item,
                    target,
                    source,
                    key=None,
                    parent_context=leaf_context if isinstance(item, str) else scope,
                    fallback=fallback,
                )
                for item in value
            ))
            return type(value)(items)

        # Numbers, booleans, None and anything else
        return value

    def _scope(self, key: str | None, parent_context: str) -> str:
        """Context handed down to the children of a container under ``key``."""
        if key is None:
            return parent_context
        return self.hints.hint_for(key) or key
