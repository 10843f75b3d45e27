"""
Shared fixtures for the pipeline tests.
"""

import asyncio

import pytest

from sitelingo.cache import TransformCache
from sitelingo.config_loader import load_context_hints
from sitelingo.core.errors import ProviderError
from sitelingo.core.models import Operation
from sitelingo.i18n import FanOutOrchestrator, StructureTranslator, Translator
from sitelingo.services.optimizer import Optimizer
from sitelingo.storage import create_local_storage


class StubProviderClient:
    """
    Stands in for ProviderClient.

    Translations come back as ``"<text> <lang>"`` and rewrites as
    ``"<mode>: <text>"``, so tests can tell provider output from mock
    output. Every call is recorded.
    """

    name = "stub"
    model = "stub-model"

    def __init__(
        self,
        fail_languages=(),
        fail_all=False,
        fail_times=0,
        configured=True,
        delay=0.0,
    ):
        self.fail_languages = set(fail_languages)
        self.fail_all = fail_all
        self.fail_times = fail_times
        self.is_configured = configured
        self.delay = delay
        self.calls = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def call(self, prompt, user_text):
        self.calls.append((prompt, user_text))
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if self.fail_all or prompt.language in self.fail_languages:
                raise ProviderError("stub provider unavailable", status_code=503)
            if self.fail_times > 0:
                self.fail_times -= 1
                raise ProviderError("stub provider hiccup", status_code=502)
        finally:
            self.in_flight -= 1

        if prompt.task == Operation.TRANSLATE:
            return f"{user_text} <{prompt.language}>"
        return f"{prompt.task.value}: {user_text}"

    async def aclose(self):
        pass


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def cache():
    """Fresh in-process transform cache."""
    return TransformCache()


@pytest.fixture
def stub_client():
    return StubProviderClient()


@pytest.fixture
def hints():
    """The bundled field hint table."""
    return load_context_hints()


@pytest.fixture
def translator(cache, stub_client):
    """Translator backed by the stub provider."""
    return Translator(cache=cache, client=stub_client)


@pytest.fixture
def mock_translator(cache):
    """Translator without credentials: everything goes to the mock."""
    return Translator(cache=cache)


@pytest.fixture
def optimizer(cache, stub_client):
    return Optimizer(cache=cache, client=stub_client)


@pytest.fixture
def storage():
    return create_local_storage()


@pytest.fixture
def structure(translator, hints):
    return StructureTranslator(translator, hints)


@pytest.fixture
def orchestrator(structure, storage):
    return FanOutOrchestrator(structure, metadata=storage.metadata, concurrency=4)


@pytest.fixture
def make_stub():
    """Factory for stub clients with custom failure behaviour."""
    return StubProviderClient
