"""
Core data models for the transformation pipeline.

Requests are immutable and built per call. Matrix results are what the
fan-out orchestrator hands back to callers for persistence.
"""

from __future__ import annotations

import hashlib
from enum import Enum
from typing import Any, NamedTuple

from pydantic import BaseModel, Field

from sitelingo.core.errors import PartialBatchError, ValidationError
from sitelingo.core.languages import Language


# =============================================================================
# Enums
# =============================================================================


class Operation(str, Enum):
    """Kinds of text transformation."""
    
    TRANSLATE = "translate"
    EXTEND = "extend"      # Same language, 2-3x longer
    OPTIMIZE = "optimize"  # Same language, similar length, clearer
    SHORTEN = "shorten"    # Same language, 30-50% shorter


OPTIMIZATION_OPERATIONS: tuple[Operation, ...] = (
    Operation.EXTEND,
    Operation.OPTIMIZE,
    Operation.SHORTEN,
)


def parse_optimization(operation: str | Operation) -> Operation:
    """Resolve an optimization mode, rejecting anything else."""
    value = operation.value if isinstance(operation, Operation) else str(operation).strip().lower()
    try:
        op = Operation(value)
    except ValueError:
        op = None
    if op not in OPTIMIZATION_OPERATIONS:
        allowed = ", ".join(o.value for o in OPTIMIZATION_OPERATIONS)
        raise ValidationError(f"Invalid optimization type {operation!r}. Must be one of: {allowed}")
    return op


class BatchStatus(str, Enum):
    """Outcome of one language inside a fan-out batch."""
    
    COMPLETE = "complete"
    PARTIAL = "partial"


# =============================================================================
# Requests
# =============================================================================


class CacheKey(NamedTuple):
    """
    Composite cache key.
    
    ``variant`` is the target language for translations and the
    transformation mode for optimizations. Text is matched exactly.
    """
    
    operation: str
    source_language: str
    variant: str
    text: str
    
    def storage_key(self) -> str:
        """Stable string key for shared key-value stores."""
        raw = "\x1f".join(self)
        digest = hashlib.sha256(raw.encode("utf-8")).hexdigest()
        return f"transform:{self.operation}:{digest}"


class TransformRequest(BaseModel):
    """A single transform of one piece of text."""
    
    model_config = {"frozen": True}
    
    operation: Operation
    text: str
    source_language: Language
    target_language: Language | None = None  # Translate only
    context_hint: str = ""
    
    @property
    def is_identity(self) -> bool:
        """Translation into the language the text is already in."""
        return (
            self.operation == Operation.TRANSLATE
            and self.source_language == self.target_language
        )
    
    @property
    def cache_key(self) -> CacheKey:
        if self.operation == Operation.TRANSLATE:
            variant = self.target_language.value if self.target_language else ""
        else:
            variant = self.operation.value
        return CacheKey(
            operation=self.operation.value,
            source_language=self.source_language.value,
            variant=variant,
            text=self.text,
        )


# =============================================================================
# Fan-out Results
# =============================================================================


class FieldFailure(BaseModel):
    """A field that could not be translated."""
    
    key: str
    error: str


class LanguageMatrixResult(BaseModel):
    """Translations of one batch into one target language."""
    
    language: Language
    translations: dict[str, Any] = Field(default_factory=dict)
    status: BatchStatus = BatchStatus.COMPLETE
    failures: list[FieldFailure] = Field(default_factory=list)
    
    @property
    def is_complete(self) -> bool:
        return self.status == BatchStatus.COMPLETE
    
    def add_failure(self, key: str, error: BaseException | str) -> None:
        self.failures.append(FieldFailure(key=key, error=str(error)))
        self.status = BatchStatus.PARTIAL
    
    def raise_for_status(self) -> None:
        """Raise PartialBatchError if any field failed."""
        if self.failures:
            raise PartialBatchError(self.language.value, self.failures)
