from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai
import pytest

from truthbubble.errors import ModelProviderError
from truthbubble.infrastructure.llm.llm_client import LLMClient

_REQ = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


@pytest.fixture
def llm():
    client = LLMClient(api_key="sk-test", model="gpt-4o-mini", timeout=5, temperature=0.2)
    client._client = MagicMock()
    return client


class TestConstruction:
    def test_openai_provider(self):
        client = LLMClient(api_key="sk-test", timeout=7)
        assert isinstance(client._client, openai.OpenAI)
        assert client._client.max_retries == 0

    def test_azure_from_settings(self):
        client = LLMClient.from_settings(
            {
                "PROVIDER_IN_USE": "azure",
                "AZURE_API_KEY": "az-key",
                "AZURE_ENDPOINT": "https://example.openai.azure.com",
                "OPENAI_API_KEY": "",
                "LLM_MODEL": "gpt-4o",
            }
        )
        assert isinstance(client._client, openai.AzureOpenAI)
        assert client.model == "gpt-4o"


class TestJudge:
    def test_returns_stripped_content(self, llm):
        llm._client.chat.completions.create.return_value = _completion('  {"label": "RED"}\n')
        messages = [{"role": "user", "content": "x"}]

        assert llm.judge(messages) == '{"label": "RED"}'

        kwargs = llm._client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["messages"] == messages
        assert kwargs["temperature"] == 0.2
        assert "response_format" not in kwargs

    def test_json_mode(self, llm):
        llm._client.chat.completions.create.return_value = _completion("{}")
        llm.judge([], json_mode=True)
        kwargs = llm._client.chat.completions.create.call_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}

    @pytest.mark.parametrize(
        "resp",
        [
            SimpleNamespace(choices=[]),
            _completion(None),
        ],
    )
    def test_empty_output(self, llm, resp):
        llm._client.chat.completions.create.return_value = resp
        assert llm.judge([]) == ""

    def test_connection_error(self, llm):
        llm._client.chat.completions.create.side_effect = openai.APIConnectionError(request=_REQ)
        with pytest.raises(ModelProviderError) as exc:
            llm.judge([])
        assert exc.value.detail == "APIConnectionError"
        assert exc.value.status == 500

    def test_status_error_does_not_leak_body(self, llm):
        err = openai.AuthenticationError(
            "Incorrect API key provided: sk-test",
            response=httpx.Response(401, request=_REQ),
            body={"error": {"message": "Incorrect API key provided: sk-test"}},
        )
        llm._client.chat.completions.create.side_effect = err
        with pytest.raises(ModelProviderError) as exc:
            llm.judge([])
        assert exc.value.detail == "AuthenticationError (HTTP 401)"
        assert "sk-test" not in exc.value.detail
