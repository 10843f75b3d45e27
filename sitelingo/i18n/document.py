"""
Document-level translation helpers.

Translates whole pages whose fields need more specific hints than the
generic field table gives.
"""

from __future__ import annotations

import asyncio
from typing import Any

from sitelingo.core.languages import Language
from sitelingo.i18n.translator import Translator


HERO_SLIDE_CONTEXTS: dict[str, str] = {
    "title": "Hero slide title for architecture website - should be impactful and professional",
    "subtitle": "Hero slide subtitle for architecture website - brief and elegant",
    "description": "Hero slide description for architecture website - detailed but concise",
}

FEATURED_PROJECT_CONTEXTS: dict[str, str] = {
    "title": "Architecture project name",
    "type": "Architecture project type (e.g., residential, commercial, public)",
    "location": "Project location/address",
}


async def translate_fields(
    translator: Translator,
    item: dict[str, Any],
    contexts: dict[str, str],
    target: str | Language,
    source: str | Language | None = None,
) -> dict[str, Any]:
    """
    Translate the listed fields of a dict, each with its own hint.

    Fields that are missing, empty or not strings are copied unchanged,
    as is every field not listed in ``contexts``.
    """
    result = dict(item)
    fields = [
        name for name in contexts
        if isinstance(item.get(name), str) and item[name].strip()
    ]
    translated = await asyncio.gather(*(
        translator.translate(item[name], target, source, context=contexts[name])
        for name in fields
    ))
    result.update(zip(fields, translated))
    return result


async def translate_homepage_content(
    translator: Translator,
    homepage: dict[str, Any],
    target: str | Language,
    source: str | Language | None = None,
) -> dict[str, Any]:
    """
    Translate homepage content.

    Translates:
    - Hero slides: title, subtitle, description (media URLs untouched)
    - Featured projects: title, type, location (image, year, id untouched)

    Every other homepage key is copied as-is.

    Returns:
        Translated homepage (new dict, original unchanged)
    """
    result = dict(homepage)

    slides = homepage.get("heroSlides") or []
    projects = homepage.get("featuredProjects") or []

    result["heroSlides"] = list(await asyncio.gather(*(
        translate_fields(translator, slide, HERO_SLIDE_CONTEXTS, target, source)
        for slide in slides
    )))
    result["featuredProjects"] = list(await asyncio.gather(*(
        translate_fields(translator, project, FEATURED_PROJECT_CONTEXTS, target, source)
        for project in projects
    )))

    return result
