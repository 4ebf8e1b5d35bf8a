"""Unit tests for the OpenAI-backed semantic classifier."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import httpx
import openai
import pytest

from app.categorization.semantic import SYSTEM_PROMPT, SemanticClassifier, build_prompt
from app.config import Settings
from app.core.exceptions import ProviderError

KNOWN = ["Food", "Transportation", "Shopping"]


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _client(reply=None, error=None) -> MagicMock:
    client = MagicMock()
    client.chat.completions.create = AsyncMock(return_value=reply, side_effect=error)
    return client


def _request() -> httpx.Request:
    return httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


class TestSemanticClassifier:
    async def test_returns_known_category(self):
        classifier = SemanticClassifier(client=_client(_completion("Transportation")))
        assert await classifier.classify("Uber to airport", KNOWN) == "Transportation"

    async def test_reply_is_trimmed_and_case_insensitive(self):
        classifier = SemanticClassifier(client=_client(_completion("  food \n")))
        assert await classifier.classify("Bagels", KNOWN) == "Food"

    async def test_unknown_reply_returns_none(self):
        classifier = SemanticClassifier(client=_client(_completion("Groceries")))
        assert await classifier.classify("Bagels", KNOWN) is None

    async def test_empty_reply_returns_none(self):
        classifier = SemanticClassifier(client=_client(_completion(None)))
        assert await classifier.classify("Bagels", KNOWN) is None

    async def test_no_choices_returns_none(self):
        classifier = SemanticClassifier(client=_client(SimpleNamespace(choices=[])))
        assert await classifier.classify("Bagels", KNOWN) is None

    async def test_request_parameters(self):
        client = _client(_completion("Food"))
        classifier = SemanticClassifier(client=client, model="gpt-test", temperature=0.1, max_tokens=5)

        await classifier.classify("Bagels", KNOWN)

        kwargs = client.chat.completions.create.await_args.kwargs
        assert kwargs["model"] == "gpt-test"
        assert kwargs["temperature"] == 0.1
        assert kwargs["max_tokens"] == 5
        assert kwargs["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert kwargs["messages"][1]["role"] == "user"
        assert "Food, Transportation, Shopping" in kwargs["messages"][1]["content"]
        assert '"Bagels"' in kwargs["messages"][1]["content"]

    @pytest.mark.parametrize(
        "error",
        [
            openai.APIConnectionError(request=_request()),
            openai.APITimeoutError(request=_request()),
        ],
    )
    async def test_provider_failures_raise_provider_error(self, error):
        classifier = SemanticClassifier(client=_client(error=error))

        with pytest.raises(ProviderError) as exc_info:
            await classifier.classify("Bagels", KNOWN)

        assert exc_info.value.error_code == "LLM_001"

    async def test_unconfigured_classifier_makes_no_call(self):
        classifier = SemanticClassifier(client=None)
        assert classifier.is_configured is False
        assert await classifier.classify("Bagels", KNOWN) is None


class TestFromSettings:
    def test_disabled_without_api_key(self):
        config = Settings(_env_file=None, openai_api_key=None)
        assert SemanticClassifier.from_settings(config).is_configured is False

    def test_disabled_with_blank_api_key(self):
        config = Settings(_env_file=None, openai_api_key="")
        assert SemanticClassifier.from_settings(config).is_configured is False

    def test_enabled_with_api_key(self):
        config = Settings(
            _env_file=None,
            openai_api_key="sk-test",
            openai_model="gpt-4o-mini",
            llm_temperature=0.2,
            llm_max_tokens=12,
        )
        classifier = SemanticClassifier.from_settings(config)

        assert classifier.is_configured is True
        assert classifier.model == "gpt-4o-mini"
        assert classifier.temperature == 0.2
        assert classifier.max_tokens == 12


def test_build_prompt_lists_categories() -> None:
    prompt = build_prompt("Team lunch", ["Food", "Housing"])
    assert 'expense description "Team lunch"' in prompt
    assert "Food, Housing" in prompt
    assert prompt.endswith("Response:")
