import pytest
from unittest.mock import MagicMock

from truthbubble import create_app
from truthbubble.errors import ModelProviderError
from truthbubble.infrastructure.llm.llm_client import LLMClient
from truthbubble.infrastructure.search.tavily_client import TavilyClient
from truthbubble.models import SearchResult
from truthbubble.providers import LLM_KEY, SEARCH_KEY


def make_results(n, prefix="r"):
    return [
        SearchResult(
            title=f"{prefix} title {i}",
            url=f"https://example.org/{prefix}/{i}",
            snippet=f"{prefix} snippet {i}",
        )
        for i in range(n)
    ]


@pytest.fixture
def search_results():
    return make_results(3)


@pytest.fixture
def app():
    app = create_app(
        {
            "TESTING": True,
            "OPENAI_API_KEY": "test-openai-key",
            "PROVIDER_IN_USE": "openai",
            "TAVILY_API_KEY": "test-tavily-key",
            "HEURISTIC_FALLBACK": False,
        }
    )
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def mock_llm(app):
    """Matches the interface of LLMClient; installed on the app."""
    llm = MagicMock(spec=LLMClient)
    llm.judge.return_value = (
        '{"label":"GREEN","verdict":"green","confidence":0.9,'
        '"summary":"ok","rationale":"ok","sources":[]}'
    )
    app.extensions[LLM_KEY] = llm
    return llm


@pytest.fixture
def mock_search(app, search_results):
    search = MagicMock(spec=TavilyClient)
    search.search.return_value = list(search_results)
    search.search_with_answer.return_value = ("short answer", list(search_results))
    app.extensions[SEARCH_KEY] = search
    return search


@pytest.fixture
def failing_llm(app):
    llm = MagicMock(spec=LLMClient)
    llm.judge.side_effect = ModelProviderError(detail="APIConnectionError")
    app.extensions[LLM_KEY] = llm
    return llm


@pytest.fixture
def results_factory():
    return make_results
