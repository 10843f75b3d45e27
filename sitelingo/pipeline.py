"""
Transformation pipeline facade.

Wires cache, provider client, engines, structure translator and fan-out
orchestrator from Settings, and exposes the operations callers use. HTTP
handlers, the demo and scripts all go through TransformPipeline.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

import httpx

from sitelingo.cache import TransformCache
from sitelingo.config import Settings, get_settings
from sitelingo.config_loader import load_context_hints
from sitelingo.core.languages import Language, get_language_name, parse_language
from sitelingo.core.models import OPTIMIZATION_OPERATIONS, LanguageMatrixResult, Operation
from sitelingo.i18n import (
    ContextHints,
    FanOutOrchestrator,
    StructureTranslator,
    Translator,
    translate_homepage_content,
)
from sitelingo.services.ai import MockProvider, ProviderClient
from sitelingo.services.optimizer import Optimizer
from sitelingo.storage import StorageProvider, create_local_storage

logger = logging.getLogger(__name__)


class TransformPipeline:
    """
    Entry point for every text transformation.

    Usage:
        pipeline = build_pipeline()

        await pipeline.translate("Neubau", "en")
        await pipeline.translate_object({"title": "Villa Jugendstil"}, "fr")
        await pipeline.optimize_text("Kurzer Text.", "shorten", "de")

        results = await pipeline.bulk_translate_project("p1")
    """

    def __init__(
        self,
        translator: Translator,
        optimizer: Optimizer,
        structure: StructureTranslator,
        orchestrator: FanOutOrchestrator,
        cache: TransformCache,
        client: ProviderClient | None = None,
    ):
        self.translator = translator
        self.optimizer = optimizer
        self.structure = structure
        self.orchestrator = orchestrator
        self.cache = cache
        self.client = client

    # =========================================================================
    # Translation
    # =========================================================================

    async def translate(
        self,
        text: str,
        target: str | Language,
        source: str | Language | None = None,
        context: str = "",
    ) -> str:
        return await self.translator.translate(text, target, source, context)

    async def translate_object(
        self,
        value: Any,
        target: str | Language,
        source: str | Language | None = None,
        context: str = "",
    ) -> Any:
        """Translate every string leaf of a content tree."""
        return await self.structure.translate_tree(value, target, source, parent_context=context)

    async def translate_homepage_content(
        self,
        homepage: dict[str, Any],
        target: str | Language,
        source: str | Language | None = None,
    ) -> dict[str, Any]:
        target = parse_language(target, self.translator.supported)
        return await translate_homepage_content(self.translator, homepage, target, source)

    async def translate_matrix(
        self,
        source_texts: dict[str, Any],
        source: str | Language | None,
        target_langs: Iterable[str | Language],
    ) -> list[LanguageMatrixResult]:
        return await self.orchestrator.translate_matrix(source_texts, source, target_langs)

    async def bulk_translate(
        self,
        texts: list[str],
        target_langs: Iterable[str | Language],
        source: str | Language | None = None,
    ) -> list[LanguageMatrixResult]:
        return await self.orchestrator.bulk_translate(texts, target_langs, source)

    async def bulk_translate_project(
        self,
        project_id: str,
        target_langs: Iterable[str | Language] | None = None,
        overwrite: bool = False,
    ) -> list[LanguageMatrixResult]:
        return await self.orchestrator.bulk_translate_project(project_id, target_langs, overwrite)

    # =========================================================================
    # Optimization
    # =========================================================================

    async def optimize_text(
        self,
        text: str,
        operation: str | Operation = Operation.OPTIMIZE,
        language: str | Language | None = None,
        context: str = "",
    ) -> str:
        return await self.optimizer.optimize(text, operation, language, context)

    async def optimize_project_content(
        self,
        project_data: dict[str, Any],
        language: str | Language | None = None,
    ) -> dict[str, Any]:
        return await self.optimizer.optimize_project_content(project_data, language)

    # =========================================================================
    # Introspection
    # =========================================================================

    def get_stats(self) -> dict[str, Any]:
        """Cache and provider usage since startup (or the last cache clear)."""
        return {
            "cache_size": len(self.cache),
            "cache_hits": self.cache.hits,
            "cache_misses": self.cache.misses,
            "cache_ttl_seconds": self.cache.ttl_seconds,
            "api_configured": self.translator.provider_configured,
            "provider": self.translator.provider_name,
            "translation": self.translator.stats(),
            "optimization": self.optimizer.stats(),
        }

    async def clear_cache(self) -> None:
        await self.cache.clear()

    def status(self) -> dict[str, Any]:
        """What the text-generation backend can do right now."""
        configured = self.optimizer.provider_configured
        return {
            "api_configured": configured,
            "provider": self.optimizer.provider_name,
            "model": self.client.model if self.client is not None and configured else None,
            "operations": [op.value for op in OPTIMIZATION_OPERATIONS],
            "languages": [
                {"code": lang.value, "name": get_language_name(lang.value)}
                for lang in self.translator.supported
            ],
            "source_language": self.translator.default_source.value,
        }

    async def aclose(self) -> None:
        if self.client is not None:
            await self.client.aclose()


def build_pipeline(
    settings: Settings | None = None,
    storage: StorageProvider | None = None,
    http_client: httpx.AsyncClient | None = None,
    hints: ContextHints | None = None,
) -> TransformPipeline:
    """
    Build a pipeline from settings.

    Args:
        settings: Defaults to get_settings()
        storage: Content and shared-cache backends (defaults to in-memory)
        http_client: Injected HTTP client for the provider (tests, pooling)
        hints: Field hint table (defaults to the configured YAML)
    """
    settings = settings or get_settings()
    storage = storage or create_local_storage()
    hints = hints or load_context_hints(settings.context_hints_path or None)

    cache = TransformCache(
        ttl_seconds=settings.cache_ttl_seconds,
        max_entries=settings.cache_max_entries,
        storage=storage.cache,
    )
    client = ProviderClient.from_settings(settings, http_client=http_client)
    mock = MockProvider()
    supported = settings.supported_languages_list

    translator = Translator(
        cache=cache,
        client=client,
        mock=mock,
        default_source=settings.source_language,
        supported=supported,
        max_attempts=settings.provider_max_attempts,
        domain=settings.business_domain,
        temperature=settings.translate_temperature,
        max_tokens=settings.provider_max_tokens,
    )
    optimizer = Optimizer(
        cache=cache,
        client=client,
        mock=mock,
        default_language=settings.source_language,
        supported=supported,
        max_attempts=settings.provider_max_attempts,
        domain=settings.business_domain,
        temperature=settings.optimize_temperature,
        max_tokens=settings.provider_max_tokens,
    )
    structure = StructureTranslator(translator, hints)
    orchestrator = FanOutOrchestrator(
        structure,
        metadata=storage.metadata,
        concurrency=settings.fanout_concurrency,
    )

    if client.is_configured:
        logger.info(f"Pipeline using {client.name} ({client.model})")
    else:
        logger.warning("Provider API key not configured, all transforms use the mock provider")

    return TransformPipeline(
        translator=translator,
        optimizer=optimizer,
        structure=structure,
        orchestrator=orchestrator,
        cache=cache,
        client=client,
    )
