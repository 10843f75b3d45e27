"""
Offline stand-in for the remote provider.

Used when no credentials are configured or a remote call fails. Output is
deterministic and tagged so mock text is easy to spot on the site.
"""

from __future__ import annotations

import math

from sitelingo.core.languages import Language
from sitelingo.core.models import Operation


EXTEND_SUFFIX = (
    "[Extended with additional architectural details and professional context. "
    "This would normally be a longer, more detailed version of the text.]"
)
OPTIMIZE_MARKER = "[Optimized for clarity and engagement]"
ELLIPSIS = "…"
SHORTEN_RATIO = 0.6


class MockProvider:
    """Deterministic, side-effect-free transforms. Never raises."""
    
    name = "mock"
    
    def translate(self, text: str, source: Language, target: Language) -> str:
        if source == target:
            return text
        return f"{text} [{target.value.upper()}]"
    
    def optimize(self, text: str, operation: Operation) -> str:
        if operation == Operation.EXTEND:
            return f"{text} {EXTEND_SUFFIX}"
        if operation == Operation.OPTIMIZE:
            return f"{text} {OPTIMIZE_MARKER}"
        if operation == Operation.SHORTEN:
            return self.shorten(text)
        return text
    
    def shorten(self, text: str) -> str:
        """Keep ~60% of the words. Never returns more words or characters."""
        words = text.split()
        keep = max(1, math.floor(len(words) * SHORTEN_RATIO))
        if keep >= len(words):
            return text
        return " ".join(words[:keep]) + ELLIPSIS
