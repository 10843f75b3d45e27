"""
Text optimization service.

Rewrites text within one language: extend, optimize or shorten. Input is
validated before anything touches the cache or the network.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable

from sitelingo.cache import TransformCache
from sitelingo.core.errors import ValidationError
from sitelingo.core.languages import (
    DEFAULT_SOURCE_LANGUAGE,
    SUPPORTED_LANGUAGES,
    Language,
    parse_language,
)
from sitelingo.core.models import Operation, TransformRequest, parse_optimization
from sitelingo.services.ai.client import ProviderClient
from sitelingo.services.ai.mock import MockProvider
from sitelingo.services.ai.prompts import DEFAULT_DOMAIN, build_optimization_prompt
from sitelingo.services.base import ProviderBackedService

logger = logging.getLogger(__name__)


# field -> (operation, context hint)
PROJECT_FIELD_PLAN: dict[str, tuple[Operation, str]] = {
    "title": (
        Operation.OPTIMIZE,
        "Project title - should be clear and professional",
    ),
    "description": (
        Operation.EXTEND,
        "Project description - detailed overview of the architectural project",
    ),
    "details": (
        Operation.EXTEND,
        "Project details - comprehensive technical and design information",
    ),
}


class Optimizer(ProviderBackedService):
    """
    Extend, optimize or shorten text in its own language.

    Usage:
        optimizer = Optimizer(cache=TransformCache(), client=client)
        longer = await optimizer.optimize("Neubau in Saarbrücken.", "extend")
    """

    service_id = "optimization"

    def __init__(
        self,
        cache: TransformCache,
        client: ProviderClient | None = None,
        mock: MockProvider | None = None,
        default_language: Language = DEFAULT_SOURCE_LANGUAGE,
        supported: Iterable[Language] = SUPPORTED_LANGUAGES,
        max_attempts: int = 1,
        domain: str = DEFAULT_DOMAIN,
        temperature: float = 0.7,
        max_tokens: int = 2000,
    ):
        super().__init__(cache, client, mock, max_attempts)
        self.supported = list(supported)
        self.default_language = parse_language(default_language, self.supported)
        self.domain = domain
        self.temperature = temperature
        self.max_tokens = max_tokens

    def build_request(
        self,
        text: str,
        operation: str | Operation = Operation.OPTIMIZE,
        language: str | Language | None = None,
        context: str = "",
    ) -> TransformRequest:
        """Validate input and build the request. Raises ValidationError."""
        op = parse_optimization(operation)
        if not text or not text.strip():
            raise ValidationError("Text cannot be empty")
        lang = parse_language(language, self.supported) if language else self.default_language
        return TransformRequest(
            operation=op,
            text=text,
            source_language=lang,
            context_hint=context or "",
        )

    def mock_result(self, request: TransformRequest) -> str:
        return self.mock.optimize(request.text, request.operation)

    async def optimize(
        self,
        text: str,
        operation: str | Operation = Operation.OPTIMIZE,
        language: str | Language | None = None,
        context: str = "",
        fallback: bool = True,
    ) -> str:
        """
        Rewrite text.

        Args:
            text: Text to rewrite (must not be empty)
            operation: 'extend', 'optimize' or 'shorten'
            language: Working language of the text
            context: Optional hint, e.g. "Project description"
            fallback: Use the mock when the provider fails

        Raises:
            ValidationError: Bad operation, empty text or unsupported language
        """
        request = self.build_request(text, operation, language, context)
        prompt = build_optimization_prompt(
            request.operation,
            request.source_language,
            context=request.context_hint,
            domain=self.domain,
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )
        return await self.execute(request, prompt, fallback=fallback)

    async def optimize_project_content(
        self,
        project_data: dict[str, Any],
        language: str | Language | None = None,
    ) -> dict[str, Any]:
        """
        Optimize the text fields of a project.

        The title is polished, description and details are extended. Other
        keys are copied unchanged; empty fields are left alone.

        Returns:
            New dict (original unchanged)
        """
        optimized = dict(project_data)

        for field, (operation, context) in PROJECT_FIELD_PLAN.items():
            value = project_data.get(field)
            if isinstance(value, str) and value.strip():
                optimized[field] = await self.optimize(value, operation, language, context)

        logger.info(f"Optimized project fields: {', '.join(k for k in PROJECT_FIELD_PLAN if k in project_data)}")
        return optimized
