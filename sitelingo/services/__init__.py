"""
Provider-backed services.

Translation lives in sitelingo.i18n; optimization (same-language
rewriting) lives here next to the shared base class.
"""

from sitelingo.services.base import ProviderBackedService
from sitelingo.services.optimizer import Optimizer, PROJECT_FIELD_PLAN

__all__ = [
    "ProviderBackedService",
    "Optimizer",
    "PROJECT_FIELD_PLAN",
]
