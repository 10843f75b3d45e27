"""
Provider-backed translator with caching.

Translates single strings between site languages. Every call produces
some text: when the provider fails the mock output is used instead.
"""

from __future__ import annotations

import asyncio
from typing import Iterable

from sitelingo.cache import TransformCache
from sitelingo.core.languages import (
    DEFAULT_SOURCE_LANGUAGE,
    SUPPORTED_LANGUAGES,
    Language,
    parse_language,
)
from sitelingo.core.models import Operation, TransformRequest
from sitelingo.services.ai.client import ProviderClient
from sitelingo.services.ai.mock import MockProvider
from sitelingo.services.ai.prompts import DEFAULT_DOMAIN, build_translation_prompt
from sitelingo.services.base import ProviderBackedService


class Translator(ProviderBackedService):
    """
    Main translation service.

    Usage:
        translator = Translator(cache=TransformCache(), client=client)

        # Single translation
        en_text = await translator.translate("Neubau", target="en")

        # With context (better quality)
        fr_text = await translator.translate(
            "Sanierung eines Altbaus",
            target="fr",
            context="Architecture project title",
        )

        # Batch
        it_texts = await translator.translate_batch(["Bad", "Küche"], target="it")
    """

    service_id = "translation"

    def __init__(
        self,
        cache: TransformCache,
        client: ProviderClient | None = None,
        mock: MockProvider | None = None,
        default_source: Language = DEFAULT_SOURCE_LANGUAGE,
        supported: Iterable[Language] = SUPPORTED_LANGUAGES,
        max_attempts: int = 1,
        domain: str = DEFAULT_DOMAIN,
        temperature: float = 0.3,
        max_tokens: int = 2000,
    ):
        super().__init__(cache, client, mock, max_attempts)
        self.supported = list(supported)
        self.default_source = parse_language(default_source, self.supported)
        self.domain = domain
        self.temperature = temperature
        self.max_tokens = max_tokens

    def build_request(
        self,
        text: str,
        target: str | Language,
        source: str | Language | None = None,
        context: str = "",
    ) -> TransformRequest:
        """Validate languages and build the request. Raises ValidationError."""
        return TransformRequest(
            operation=Operation.TRANSLATE,
            text=text,
            source_language=parse_language(source, self.supported) if source else self.default_source,
            target_language=parse_language(target, self.supported),
            context_hint=context or "",
        )

    def mock_result(self, request: TransformRequest) -> str:
        return self.mock.translate(request.text, request.source_language, request.target_language)

    async def translate(
        self,
        text: str,
        target: str | Language,
        source: str | Language | None = None,
        context: str = "",
        fallback: bool = True,
    ) -> str:
        """
        Translate text to target language.

        Args:
            text: Text to translate
            target: Target language code
            source: Source language (defaults to the site's source language)
            context: Optional hint about what the text is, e.g. "project title"
            fallback: Use the mock when the provider fails. With False a
                ProviderError propagates to the caller.

        Returns:
            Translated text
        """
        request = self.build_request(text, target, source, context)

        # Same language or nothing to translate: return as-is
        if request.is_identity or not text.strip():
            return text

        prompt = build_translation_prompt(
            request.source_language,
            request.target_language,
            context=request.context_hint,
            domain=self.domain,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return await self.execute(request, prompt, fallback=fallback)

    async def translate_batch(
        self,
        texts: list[str],
        target: str | Language,
        source: str | Language | None = None,
        context: str = "",
    ) -> list[str]:
        """Translate several texts concurrently, preserving order."""
        if not texts:
            return []
        return list(await asyncio.gather(*(
            self.translate(text, target, source, context) for text in texts
        )))
