"""
Text-generation provider access.

The remote client and the offline mock share one job: turn a system
prompt plus source text into transformed text.
"""

from sitelingo.services.ai.client import ProviderClient, strip_wrapping_quotes
from sitelingo.services.ai.mock import MockProvider
from sitelingo.services.ai.prompts import (
    SystemPrompt,
    build_translation_prompt,
    build_optimization_prompt,
)

__all__ = [
    "ProviderClient",
    "strip_wrapping_quotes",
    "MockProvider",
    "SystemPrompt",
    "build_translation_prompt",
    "build_optimization_prompt",
]
