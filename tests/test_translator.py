"""
Tests for the translation engine.

Every translation produces text: provider output when it works, mock
output when it doesn't, and the input itself for same-language requests.
"""

import pytest

from sitelingo.core.errors import ProviderError, ValidationError
from sitelingo.core.languages import Language
from sitelingo.i18n import Translator


# =============================================================================
# Short-circuits
# =============================================================================


class TestIdentity:
    @pytest.mark.asyncio
    async def test_same_language_is_a_no_op(self, translator, stub_client, cache):
        result = await translator.translate("Haus am See", target="de", source="de")

        assert result == "Haus am See"
        assert stub_client.calls == []
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_empty_text_returned_as_is(self, translator, stub_client):
        assert await translator.translate("", target="en") == ""
        assert await translator.translate("   ", target="en") == "   "
        assert stub_client.calls == []


# =============================================================================
# Provider & Cache
# =============================================================================


class TestProviderAndCache:
    @pytest.mark.asyncio
    async def test_uses_provider(self, translator):
        assert await translator.translate("Neubau", target="en") == "Neubau <en>"

    @pytest.mark.asyncio
    async def test_second_call_served_from_cache(self, translator, stub_client):
        first = await translator.translate("Neubau", target="en")
        second = await translator.translate("Neubau", target="en")

        assert first == second
        assert len(stub_client.calls) == 1
        assert translator.counters["cache_hits"] == 1
        assert translator.counters["provider_calls"] == 1

    @pytest.mark.asyncio
    async def test_context_does_not_split_cache(self, translator, stub_client):
        await translator.translate("Neubau", target="en", context="Project title")
        await translator.translate("Neubau", target="en", context="Project type")

        assert len(stub_client.calls) == 1

    @pytest.mark.asyncio
    async def test_each_target_is_cached_separately(self, translator, stub_client):
        await translator.translate("Neubau", target="en")
        await translator.translate("Neubau", target="fr")

        assert len(stub_client.calls) == 2

    @pytest.mark.asyncio
    async def test_prompt_parameters(self, translator, stub_client):
        await translator.translate("Neubau", target="it", context="Architecture project title")

        prompt, text = stub_client.calls[0]
        assert text == "Neubau"
        assert prompt.language == "it"
        assert prompt.temperature == 0.3
        assert "Italian" in prompt.content
        assert "Architecture project title" in prompt.content

    @pytest.mark.asyncio
    async def test_language_names_are_normalized(self, translator):
        assert await translator.translate("Neubau", target="English") == "Neubau <en>"
        assert await translator.translate("Neubau", target=" FR ") == "Neubau <fr>"


# =============================================================================
# Fallback
# =============================================================================


class TestFallback:
    @pytest.mark.asyncio
    async def test_provider_failure_falls_back_to_mock(self, cache, make_stub):
        client = make_stub(fail_all=True)
        translator = Translator(cache=cache, client=client)

        result = await translator.translate("Neubau", target="en")

        assert result == "Neubau [EN]"
        assert translator.counters["provider_errors"] == 1
        assert translator.counters["fallbacks"] == 1

    @pytest.mark.asyncio
    async def test_fallback_result_is_cached(self, cache, make_stub):
        client = make_stub(fail_all=True)
        translator = Translator(cache=cache, client=client)

        await translator.translate("Neubau", target="en")
        await translator.translate("Neubau", target="en")

        assert len(client.calls) == 1

    @pytest.mark.asyncio
    async def test_fallback_disabled_propagates(self, cache, make_stub):
        translator = Translator(cache=cache, client=make_stub(fail_all=True))

        with pytest.raises(ProviderError):
            await translator.translate("Neubau", target="en", fallback=False)
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_unconfigured_client_uses_mock(self, cache, make_stub):
        client = make_stub(configured=False)
        translator = Translator(cache=cache, client=client)

        assert await translator.translate("Neubau", target="es") == "Neubau [ES]"
        assert client.calls == []
        assert translator.provider_name == "mock"
        assert translator.counters["mock_calls"] == 1

    @pytest.mark.asyncio
    async def test_retries_before_falling_back(self, cache, make_stub):
        client = make_stub(fail_times=1)
        translator = Translator(cache=cache, client=client, max_attempts=2)

        assert await translator.translate("Neubau", target="en") == "Neubau <en>"
        assert len(client.calls) == 2
        assert translator.counters["fallbacks"] == 0


# =============================================================================
# Validation
# =============================================================================


class TestValidation:
    @pytest.mark.asyncio
    async def test_unknown_language(self, translator, stub_client):
        with pytest.raises(ValidationError):
            await translator.translate("Neubau", target="xx")
        assert stub_client.calls == []

    @pytest.mark.asyncio
    async def test_language_not_enabled(self, cache, stub_client):
        translator = Translator(cache=cache, client=stub_client, supported=[Language.DE, Language.EN])

        with pytest.raises(ValidationError):
            await translator.translate("Neubau", target="fr")
        assert stub_client.calls == []

    @pytest.mark.asyncio
    async def test_identity_still_validates(self, translator):
        with pytest.raises(ValidationError):
            await translator.translate("Neubau", target="xx", source="xx")


# =============================================================================
# Batch
# =============================================================================


class TestBatch:
    @pytest.mark.asyncio
    async def test_order_preserved(self, translator):
        results = await translator.translate_batch(["Bad", "Küche", "Dach"], target="en")

        assert results == ["Bad <en>", "Küche <en>", "Dach <en>"]

    @pytest.mark.asyncio
    async def test_empty_batch(self, translator, stub_client):
        assert await translator.translate_batch([], target="en") == []
        assert stub_client.calls == []
