"""
Base class for provider-backed transform services.

Translation and optimization share the same flow:

    cache lookup → provider (or mock when unconfigured) → cache store

with the mock standing in whenever the provider fails. Subclasses only
decide how to validate input, which prompt to send and what the mock
returns.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections import Counter
from typing import Any

from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from sitelingo.core.errors import ProviderError
from sitelingo.core.models import TransformRequest
from sitelingo.cache import TransformCache
from sitelingo.services.ai.client import ProviderClient
from sitelingo.services.ai.mock import MockProvider
from sitelingo.services.ai.prompts import SystemPrompt

logger = logging.getLogger(__name__)


def _preview(text: str, limit: int = 50) -> str:
    return text if len(text) <= limit else f"{text[:limit]}..."


class ProviderBackedService(ABC):
    """
    Shared cache/provider/mock composition.

    Args:
        cache: Transform cache (shared across services is fine)
        client: Remote provider client; None or unconfigured routes every
            call to the mock
        mock: Offline fallback
        max_attempts: Provider attempts per call (1 = no retries)
    """

    service_id: str = "transform"

    def __init__(
        self,
        cache: TransformCache,
        client: ProviderClient | None = None,
        mock: MockProvider | None = None,
        max_attempts: int = 1,
    ):
        self.cache = cache
        self.client = client
        self.mock = mock or MockProvider()
        self.max_attempts = max(1, max_attempts)
        self.counters: Counter[str] = Counter()

    @property
    def provider_configured(self) -> bool:
        return self.client is not None and self.client.is_configured

    @property
    def provider_name(self) -> str:
        return self.client.name if self.provider_configured else self.mock.name

    @abstractmethod
    def mock_result(self, request: TransformRequest) -> str:
        """What the mock provider returns for this request."""
        pass

    async def _call_provider(self, prompt: SystemPrompt, text: str) -> str:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_exponential(multiplier=0.5, min=0.5, max=8),
            retry=retry_if_exception_type(ProviderError),
            reraise=True,
        )
        async for attempt in retrying:
            with attempt:
                return await self.client.call(prompt, text)

    async def execute(
        self,
        request: TransformRequest,
        prompt: SystemPrompt,
        *,
        fallback: bool = True,
    ) -> str:
        """
        Run one validated request through cache, provider and mock.

        Args:
            request: The transform to perform
            prompt: System prompt for the provider
            fallback: Fall back to the mock on ProviderError. When False the
                error propagates and nothing is cached.
        """
        key = request.cache_key

        cached = await self.cache.get(key)
        if cached is not None:
            self.counters["cache_hits"] += 1
            return cached

        op = request.operation.value
        if self.provider_configured:
            logger.info(f"{op} via {self.client.name}: \"{_preview(request.text)}\" ({request.source_language.value} -> {prompt.language})")
            try:
                result = await self._call_provider(prompt, request.text)
                self.counters["provider_calls"] += 1
            except ProviderError as e:
                self.counters["provider_errors"] += 1
                if not fallback:
                    raise
                logger.warning(f"Provider failed for {op}, falling back to mock: {e}")
                self.counters["fallbacks"] += 1
                result = self.mock_result(request)
        else:
            logger.debug(f"Using mock {op} for: \"{_preview(request.text)}\"")
            self.counters["mock_calls"] += 1
            result = self.mock_result(request)

        await self.cache.put(key, result)
        return result

    def stats(self) -> dict[str, Any]:
        return {
            "provider": self.provider_name,
            "api_configured": self.provider_configured,
            **{name: self.counters[name] for name in (
                "cache_hits", "provider_calls", "provider_errors", "fallbacks", "mock_calls",
            )},
        }

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.service_id}, provider={self.provider_name})>"
