"""
FastAPI application for the site's text-transformation API.

Thin handlers over TransformPipeline. The bulk project translation
handler is the only place that writes content: it upserts one
project_translations row per completed language.
"""

from __future__ import annotations

import json
import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from sitelingo.config import get_settings
from sitelingo.core.errors import NotFoundError, TransformError, ValidationError
from sitelingo.core.languages import get_language_name
from sitelingo.pipeline import TransformPipeline, build_pipeline
from sitelingo.storage import (
    Collections,
    StorageProvider,
    create_local_storage,
    translation_row_id,
)

logger = logging.getLogger(__name__)


# =============================================================================
# App State
# =============================================================================


class AppState:
    """Application state - initialized at startup."""

    storage: StorageProvider
    pipeline: TransformPipeline


state = AppState()


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup app resources."""
    settings = get_settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    state.storage = create_local_storage()
    state.pipeline = build_pipeline(settings, storage=state.storage)

    logger.info(f"Sitelingo API starting in {settings.environment} mode")

    yield

    await state.pipeline.aclose()
    logger.info("Sitelingo API shutting down")


# =============================================================================
# App Setup
# =============================================================================


app = FastAPI(
    title="Sitelingo API",
    description="Translation and text optimization for multilingual site content",
    version="0.1.0",
    lifespan=lifespan,
)


# CORS
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Error Handlers
# =============================================================================


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(TransformError)
async def transform_error_handler(request: Request, exc: TransformError):
    logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


# =============================================================================
# Dependencies
# =============================================================================


def get_storage() -> StorageProvider:
    return state.storage


def get_pipeline() -> TransformPipeline:
    return state.pipeline


# =============================================================================
# Request Models
# =============================================================================


class TranslateRequest(BaseModel):
    text: str
    target_language: str
    source_language: str | None = None
    context: str = ""


class BulkTranslateRequest(BaseModel):
    texts: list[str]
    target_languages: list[str]
    source_language: str | None = None


class ObjectTranslateRequest(BaseModel):
    object: Any
    target_language: str
    source_language: str | None = None
    context: str = ""


class HomepageTranslateRequest(BaseModel):
    homepage: dict[str, Any]
    target_language: str
    source_language: str | None = None


class OptimizeRequest(BaseModel):
    text: str
    type: str = "optimize"
    language: str | None = None
    context: str = ""


class OptimizeProjectRequest(BaseModel):
    project: dict[str, Any]
    language: str | None = None


class BulkProjectTranslateRequest(BaseModel):
    target_languages: list[str] | None = None
    overwrite: bool = False


# =============================================================================
# Health Check
# =============================================================================


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "sitelingo-api"}


# =============================================================================
# Translation
# =============================================================================


@app.post("/api/translate")
async def translate_text(
    request: TranslateRequest,
    pipeline: TransformPipeline = Depends(get_pipeline),
):
    """Translate a single text."""
    if not request.text.strip():
        raise ValidationError("Text cannot be empty")

    translated = await pipeline.translate(
        request.text,
        target=request.target_language,
        source=request.source_language,
        context=request.context,
    )
    source = request.source_language or pipeline.translator.default_source.value
    return {
        "original": request.text,
        "translated": translated,
        "source_language": source,
        "target_language": request.target_language,
        "target_language_name": get_language_name(request.target_language),
    }


@app.post("/api/translate/bulk")
async def translate_bulk(
    request: BulkTranslateRequest,
    pipeline: TransformPipeline = Depends(get_pipeline),
):
    """
    Translate several texts into several languages.

    ``translations`` maps language -> list index -> text. Indexes that
    failed are listed under ``failures`` for that language.
    """
    results = await pipeline.bulk_translate(
        request.texts,
        request.target_languages,
        request.source_language,
    )
    return {
        "translations": {r.language.value: r.translations for r in results},
        "status": {r.language.value: r.status.value for r in results},
        "failures": {
            r.language.value: [f.model_dump() for f in r.failures]
            for r in results
            if r.failures
        },
    }


@app.post("/api/translate/object")
async def translate_object(
    request: ObjectTranslateRequest,
    pipeline: TransformPipeline = Depends(get_pipeline),
):
    """Translate every text in a nested object, keeping its shape."""
    translated = await pipeline.translate_object(
        request.object,
        target=request.target_language,
        source=request.source_language,
        context=request.context,
    )
    return {"original": request.object, "translated": translated}


@app.post("/api/translate/homepage")
async def translate_homepage(
    request: HomepageTranslateRequest,
    pipeline: TransformPipeline = Depends(get_pipeline),
):
    """Translate hero slides and featured projects of the homepage."""
    translated = await pipeline.translate_homepage_content(
        request.homepage,
        target=request.target_language,
        source=request.source_language,
    )
    return {"translated": translated, "target_language": request.target_language}


@app.get("/api/translate/stats")
async def translation_stats(pipeline: TransformPipeline = Depends(get_pipeline)):
    return pipeline.get_stats()


@app.delete("/api/translate/cache")
async def clear_translation_cache(pipeline: TransformPipeline = Depends(get_pipeline)):
    await pipeline.clear_cache()
    return {"message": "Translation cache cleared"}


# =============================================================================
# Optimization
# =============================================================================


@app.post("/api/ai/optimize")
async def optimize_text(
    request: OptimizeRequest,
    pipeline: TransformPipeline = Depends(get_pipeline),
):
    """Extend, optimize or shorten a text in its own language."""
    optimized = await pipeline.optimize_text(
        request.text,
        operation=request.type,
        language=request.language,
        context=request.context,
    )
    return {
        "original": request.text,
        "optimized": optimized,
        "type": request.type,
        "language": request.language or pipeline.optimizer.default_language.value,
    }


@app.post("/api/ai/optimize-project")
async def optimize_project(
    request: OptimizeProjectRequest,
    pipeline: TransformPipeline = Depends(get_pipeline),
):
    """Polish the title and extend description and details of a project."""
    optimized = await pipeline.optimize_project_content(request.project, request.language)
    return {"original": request.project, "optimized": optimized}


@app.get("/api/ai/status")
async def ai_status(pipeline: TransformPipeline = Depends(get_pipeline)):
    return pipeline.status()


# =============================================================================
# Project Translations
# =============================================================================


def _translation_row(project_id: str, language: str, translations: dict[str, Any]) -> dict[str, Any]:
    row = {"project_id": project_id, "language": language, **translations}
    # Details are stored as JSON text
    if isinstance(row.get("details"), (dict, list)):
        row["details"] = json.dumps(row["details"], ensure_ascii=False)
    return row


@app.post("/api/project-translations/bulk-translate/{project_id}")
async def bulk_translate_project(
    project_id: str,
    request: BulkProjectTranslateRequest | None = None,
    pipeline: TransformPipeline = Depends(get_pipeline),
    storage: StorageProvider = Depends(get_storage),
):
    """
    Create translation rows for the languages a project is missing.

    Only complete languages are saved. Partial languages are reported with
    their failed fields and stay missing, so calling again retries them.
    """
    request = request or BulkProjectTranslateRequest()
    results = await pipeline.bulk_translate_project(
        project_id,
        target_langs=request.target_languages,
        overwrite=request.overwrite,
    )

    saved: list[str] = []
    for result in results:
        if not result.is_complete:
            continue
        lang = result.language.value
        await storage.metadata.save(
            Collections.PROJECT_TRANSLATIONS,
            translation_row_id(project_id, lang),
            _translation_row(project_id, lang, result.translations),
        )
        saved.append(lang)

    if saved:
        logger.info(f"Saved {', '.join(saved)} translations for project {project_id}")

    return {
        "project_id": project_id,
        "saved": saved,
        "failures": {
            r.language.value: [f.model_dump() for f in r.failures]
            for r in results
            if not r.is_complete
        },
    }
