"""
Sitelingo - Main entry point.

Runs the transformation pipeline against sample site content. Without a
provider API key everything goes through the mock provider, so the demo
works offline.
"""

from __future__ import annotations

import asyncio
import json

from dotenv import load_dotenv

# Load .env before settings are read
load_dotenv()

from sitelingo.config import get_settings
from sitelingo.pipeline import build_pipeline
from sitelingo.storage import Collections, create_local_storage


SAMPLE_PROJECT = {
    "title": "Villa Jugendstil",
    "description": "Behutsame Sanierung einer Stadtvilla aus dem Jahr 1905.",
    "location": "Saarbrücken",
    "area": "420 m²",
    "details": json.dumps({
        "scope": ["Fassade", "Dach", "Innenausbau"],
        "year": 2023,
        "image": "/uploads/villa.jpg",
    }),
}


async def demo():
    """
    Run a demonstration of the pipeline.

    Translates a string and a content tree, rewrites a text, then backfills
    the missing languages of a stored project.
    """
    print("=" * 60)
    print("SITELINGO DEMO")
    print("=" * 60)
    print()

    settings = get_settings()
    storage = create_local_storage()
    pipeline = build_pipeline(settings, storage=storage)

    status = pipeline.status()
    print(f"Provider: {status['provider']} (configured: {status['api_configured']})")
    print(f"Languages: {', '.join(lang['code'] for lang in status['languages'])}")
    print()

    # Single string
    print("Translating a string...")
    text = await pipeline.translate("Neubau eines Einfamilienhauses", "en")
    print(f"  ✓ en: {text}")
    print()

    # Content tree
    print("Translating a content tree...")
    tree = await pipeline.translate_object(
        {"title": "Villa Jugendstil", "location": "Saarbrücken", "year": 2023},
        "fr",
    )
    print(f"  ✓ fr: {tree}")
    print()

    # Optimization
    print("Optimizing text...")
    for mode in ("extend", "optimize", "shorten"):
        result = await pipeline.optimize_text(
            "Wir planen Wohnhäuser, Büros und öffentliche Gebäude im Saarland.",
            mode,
        )
        print(f"  ✓ {mode}: {result}")
    print()

    # Project backfill
    print("Backfilling project languages...")
    await storage.metadata.save(Collections.PROJECTS, "villa", SAMPLE_PROJECT)
    results = await pipeline.bulk_translate_project("villa")
    for result in results:
        print(f"  • {result.language.value} [{result.status.value}]: {result.translations.get('title')}")
    print()

    stats = pipeline.get_stats()
    print(f"Cache: {stats['cache_size']} entries, {stats['cache_hits']} hits, {stats['cache_misses']} misses")
    print()

    await pipeline.aclose()

    print("=" * 60)
    print("Demo complete!")
    print()
    print("Next steps:")
    print("  1. Set PROVIDER_API_KEY (or DEEPSEEK_API_KEY) in .env")
    print("  2. Serve sitelingo.api.app:app with any ASGI server")
    print("=" * 60)


def main():
    """Main entry point."""
    asyncio.run(demo())


if __name__ == "__main__":
    main()
