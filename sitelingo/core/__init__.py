"""
Core types shared by every pipeline component.
"""

from sitelingo.core.errors import (
    TransformError,
    ValidationError,
    NotFoundError,
    ProviderError,
    PartialBatchError,
)
from sitelingo.core.languages import (
    Language,
    DEFAULT_SOURCE_LANGUAGE,
    SUPPORTED_LANGUAGES,
    get_language_name,
    normalize_language_code,
    parse_language,
)
from sitelingo.core.models import (
    Operation,
    OPTIMIZATION_OPERATIONS,
    BatchStatus,
    CacheKey,
    TransformRequest,
    FieldFailure,
    LanguageMatrixResult,
    parse_optimization,
)

__all__ = [
    # Errors
    "TransformError",
    "ValidationError",
    "NotFoundError",
    "ProviderError",
    "PartialBatchError",
    # Languages
    "Language",
    "DEFAULT_SOURCE_LANGUAGE",
    "SUPPORTED_LANGUAGES",
    "get_language_name",
    "normalize_language_code",
    "parse_language",
    # Models
    "Operation",
    "OPTIMIZATION_OPERATIONS",
    "BatchStatus",
    "CacheKey",
    "TransformRequest",
    "FieldFailure",
    "LanguageMatrixResult",
    "parse_optimization",
]
