"""
Chat-completion client for the remote text-generation provider.

Works with any OpenAI-compatible endpoint (DeepSeek by default). The
client does exactly one request per call: retries and fallbacks are the
caller's business.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

import httpx

from sitelingo.config import PLACEHOLDER_API_KEYS, Settings
from sitelingo.core.errors import ProviderError
from sitelingo.services.ai.prompts import SystemPrompt

logger = logging.getLogger(__name__)


DEFAULT_API_URL = "https://api.deepseek.com/v1/chat/completions"
DEFAULT_MODEL = "deepseek-chat"

# opening mark -> closing marks that pair with it
_QUOTE_PAIRS: dict[str, str] = {
    '"': '"',
    "'": "'",
    "„": "“”",
    "“": "”",
    "«": "»",
    "»": "«",
}


def strip_wrapping_quotes(text: str) -> str:
    """Remove one matching pair of quotation marks around the whole text."""
    text = text.strip()
    if len(text) >= 2 and text[-1] in _QUOTE_PAIRS.get(text[0], ""):
        text = text[1:-1]
    return text.strip()


class ProviderClient:
    """
    Async client for a chat-completion API.

    Usage:
        client = ProviderClient(api_key="sk-...")
        prompt = build_translation_prompt(Language.DE, Language.EN)
        text = await client.call(prompt, "Neubau eines Einfamilienhauses")

    Concurrent calls are bounded by ``max_concurrency`` to stay under the
    upstream rate limit.
    """

    name = "deepseek"

    def __init__(
        self,
        api_key: str = "",
        api_url: str = DEFAULT_API_URL,
        model: str = DEFAULT_MODEL,
        timeout: float = 30.0,
        max_concurrency: int = 4,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.api_url = api_url
        self.model = model
        self.timeout = timeout
        self._http_client = http_client
        self._semaphore = asyncio.Semaphore(max(1, max_concurrency))

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        http_client: httpx.AsyncClient | None = None,
    ) -> ProviderClient:
        return cls(
            api_key=settings.resolved_api_key,
            api_url=settings.provider_api_url,
            model=settings.provider_model,
            timeout=settings.provider_timeout_seconds,
            max_concurrency=settings.provider_max_concurrency,
            http_client=http_client,
        )

    @property
    def is_configured(self) -> bool:
        """Check if credentials are present (placeholders don't count)."""
        return self.api_key.strip() not in PLACEHOLDER_API_KEYS

    def build_payload(self, prompt: SystemPrompt, user_text: str) -> dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": prompt.content},
                {"role": "user", "content": user_text},
            ],
            "temperature": prompt.temperature,
            "max_tokens": prompt.max_tokens,
        }

    async def call(self, prompt: SystemPrompt, user_text: str) -> str:
        """
        Run one completion.

        Args:
            prompt: Task-specific system prompt
            user_text: The literal source text

        Returns:
            The first completion's content, trimmed

        Raises:
            ProviderError: On missing credentials, network failure, timeout,
                non-2xx status, or an empty/malformed body.
        """
        if not self.is_configured:
            raise ProviderError("Provider API key not configured")

        payload = self.build_payload(prompt, user_text)
        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {self.api_key}",
        }

        async with self._semaphore:
            try:
                response = await self._post(payload, headers)
            except httpx.TimeoutException as e:
                raise ProviderError(f"Provider request timed out: {e}") from e
            except httpx.HTTPError as e:
                raise ProviderError(f"Provider request failed: {e}") from e

        if not response.is_success:
            logger.error(f"Provider API error {response.status_code}: {response.text[:500]}")
            raise ProviderError(
                f"Provider API returned {response.status_code}",
                status_code=response.status_code,
            )

        return self._extract_content(response)

    async def _post(self, payload: dict[str, Any], headers: dict[str, str]) -> httpx.Response:
        if self._http_client is not None:
            return await self._http_client.post(
                self.api_url, json=payload, headers=headers, timeout=self.timeout
            )
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await client.post(self.api_url, json=payload, headers=headers)

    def _extract_content(self, response: httpx.Response) -> str:
        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderError(
                f"Invalid response from provider: {response.text[:200]}",
                status_code=response.status_code,
            ) from e

        text = strip_wrapping_quotes(content) if isinstance(content, str) else ""
        if not text:
            raise ProviderError(
                "Provider returned an empty completion",
                status_code=response.status_code,
            )

        return text

    async def aclose(self) -> None:
        """Close the injected HTTP client, if any."""
        if self._http_client is not None:
            await self._http_client.aclose()
