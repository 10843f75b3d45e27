"""
Fan-out across the language matrix.

Every (language, field) pair is independent work. Pairs run concurrently
up to a fixed limit, and a failing pair only marks its own field as
failed: the batch as a whole never aborts.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Iterable

from sitelingo.core.errors import NotFoundError, TransformError
from sitelingo.core.languages import Language, parse_language
from sitelingo.core.models import LanguageMatrixResult
from sitelingo.i18n.structure import StructureTranslator
from sitelingo.storage.base import Collections, MetadataStorage

logger = logging.getLogger(__name__)


# Project columns carried into translation rows
PROJECT_FIELDS: tuple[str, ...] = ("title", "description", "location", "area", "details")


def _decode_json_field(value: Any) -> Any:
    """Details are stored as JSON text; hand the walker the structure."""
    if isinstance(value, str) and value.lstrip()[:1] in ("{", "["):
        try:
            return json.loads(value)
        except ValueError:
            return value
    return value


class FanOutOrchestrator:
    """
    Translate many fields into many languages.

    Usage:
        orchestrator = FanOutOrchestrator(structure, metadata=storage.metadata)

        results = await orchestrator.translate_matrix(
            {"title": "Villa Jugendstil", "location": "Saarbrücken"},
            source="de",
            target_langs=["en", "fr", "it"],
        )
        for result in results:
            print(result.language, result.status, result.translations)

    The provider fallback is switched off inside the matrix: a provider
    error turns into a ``failures`` entry so the caller can retry exactly
    those fields.
    """

    def __init__(
        self,
        structure: StructureTranslator,
        metadata: MetadataStorage | None = None,
        concurrency: int = 4,
    ):
        self.structure = structure
        self.translator = structure.translator
        self.metadata = metadata
        self.concurrency = max(1, concurrency)

    def _resolve_targets(self, target_langs: Iterable[str | Language]) -> list[Language]:
        supported = self.translator.supported
        targets = [parse_language(lang, supported) for lang in target_langs]
        return list(dict.fromkeys(targets))

    async def translate_matrix(
        self,
        source_texts: dict[str, Any],
        source: str | Language | None = None,
        target_langs: Iterable[str | Language] = (),
    ) -> list[LanguageMatrixResult]:
        """
        Translate every field into every target language.

        Args:
            source_texts: field -> string or content tree
            source: Source language (defaults to the translator's)
            target_langs: Target languages; duplicates are ignored

        Returns:
            One LanguageMatrixResult per target language, in input order

        Raises:
            ValidationError: If a language is unsupported (nothing runs)
        """
        supported = self.translator.supported
        src = parse_language(source, supported) if source else self.translator.default_source
        targets = self._resolve_targets(target_langs)

        results = {lang: LanguageMatrixResult(language=lang) for lang in targets}
        semaphore = asyncio.Semaphore(self.concurrency)

        async def run(lang: Language, key: str, value: Any) -> None:
            async with semaphore:
                try:
                    translated = await self.structure.translate_value(
                        value, lang, src, key=key, fallback=False
                    )
                except Exception as e:
                    logger.warning(f"Translating '{key}' to {lang.value} failed: {e}")
                    results[lang].add_failure(key, e)
                else:
                    results[lang].translations[key] = translated

        await asyncio.gather(*(
            run(lang, str(key), value)
            for lang in targets
            for key, value in source_texts.items()
        ))

        # Completion order is arbitrary; report fields in source order
        for result in results.values():
            result.translations = {
                str(k): result.translations[str(k)]
                for k in source_texts
                if str(k) in result.translations
            }
            if result.failures:
                logger.info(f"{result.language.value}: {len(result.failures)} of {len(source_texts)} fields failed")

        return [results[lang] for lang in targets]

    async def bulk_translate(
        self,
        texts: list[str],
        target_langs: Iterable[str | Language],
        source: str | Language | None = None,
    ) -> list[LanguageMatrixResult]:
        """Translate a list of texts; result keys are the list indexes."""
        return await self.translate_matrix(
            {str(i): text for i, text in enumerate(texts)},
            source,
            target_langs,
        )

    async def bulk_translate_project(
        self,
        project_id: str,
        target_langs: Iterable[str | Language] | None = None,
        overwrite: bool = False,
    ) -> list[LanguageMatrixResult]:
        """
        Produce translations for the languages a project is missing.

        The project's own source-language translation row is preferred
        over the base project columns. Languages that already have a row
        are skipped unless ``overwrite`` is set, and the source language
        is never a target. Nothing is written: the caller persists the
        results (upsert by project and language).

        Raises:
            NotFoundError: Unknown project
        """
        if self.metadata is None:
            raise TransformError("No metadata storage configured for project translation")

        project = await self.metadata.get(Collections.PROJECTS, project_id)
        if project is None:
            raise NotFoundError(f"Project not found: {project_id}")

        src = self.translator.default_source
        if target_langs is None:
            targets = [lang for lang in self.translator.supported if lang != src]
        else:
            targets = self._resolve_targets(target_langs)

        rows = await self.metadata.query(
            Collections.PROJECT_TRANSLATIONS,
            filters={"project_id": project_id},
            limit=1000,
        )
        existing = {row.get("language") for row in rows}
        source_row = next((row for row in rows if row.get("language") == src.value), None)
        source_data = source_row or project

        pending: list[Language] = []
        for lang in targets:
            if lang == src:
                continue
            if lang.value in existing and not overwrite:
                logger.info(f"Project {project_id} already has a {lang.value} translation, skipping")
                continue
            pending.append(lang)

        if not pending:
            return []

        fields = {
            name: _decode_json_field(source_data[name])
            for name in PROJECT_FIELDS
            if source_data.get(name) not in (None, "")
        }

        results = await self.translate_matrix(fields, src, pending)
        logger.info(f"Translated project {project_id} into {', '.join(lang.value for lang in pending)}")
        return results
