from __future__ import annotations

import logging
from typing import Any, Dict, List, Tuple

import requests

from ...errors import SearchProviderError
from ...models import SearchResult

logger = logging.getLogger(__name__)

TAVILY_URL = "https://api.tavily.com/search"
SNIPPET_MAX = 280


class TavilyClient:
    """
    Web search through Tavily.

    The verdict can be produced without search context, so this client
    fails soft: any transport error, non-2xx status or malformed body is
    logged and turned into an empty result list.
    """

    def __init__(
        self,
        api_key: str,
        timeout: float = 10.0,
        max_query_chars: int = 500,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self.max_query_chars = max_query_chars

    def search(
        self, query: str, max_results: int = 5, search_depth: str = "basic"
    ) -> List[SearchResult]:
        _, results = self.search_with_answer(
            query, max_results, include_answer=False, search_depth=search_depth
        )
        return results

    def search_with_answer(
        self,
        query: str,
        max_results: int = 5,
        include_answer: bool = True,
        search_depth: str = "basic",
    ) -> Tuple[str, List[SearchResult]]:
        """Return (short answer or "", results in provider order)."""
        try:
            data = self._request(query, max_results, include_answer, search_depth)
        except SearchProviderError as e:
            logger.warning("web search skipped: %s", e.detail or e.message)
            return "", []

        answer = data.get("answer") or data.get("summary") or ""
        items = data.get("results") or data.get("data") or []
        if not isinstance(items, list):
            items = []
        results = self._parse_results(items)
        logger.info("Tavily search successful. Found %d results.", len(results))
        return (answer if isinstance(answer, str) else ""), results[:max_results]

    def _request(
        self, query: str, max_results: int, include_answer: bool, search_depth: str
    ) -> Dict[str, Any]:
        payload = {
            # Tavily accepts the API key in the JSON body
            "api_key": self.api_key,
            "query": query[: self.max_query_chars],
            "search_depth": search_depth,
            "include_answer": include_answer,
            "include_images": False,
            "max_results": max_results,
        }
        try:
            resp = requests.post(TAVILY_URL, json=payload, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except requests.exceptions.HTTPError as e:
            status = e.response.status_code if e.response is not None else None
            raise SearchProviderError(detail=f"HTTP {status}") from e
        except requests.exceptions.RequestException as e:
            raise SearchProviderError(detail=type(e).__name__) from e
        except ValueError as e:
            raise SearchProviderError(detail="malformed JSON body") from e

        if not isinstance(data, dict):
            raise SearchProviderError(detail="unexpected response shape")
        return data

    @staticmethod
    def _parse_results(items: List[Any]) -> List[SearchResult]:
        results: List[SearchResult] = []
        for r in items:
            if not isinstance(r, dict):
                continue
            url = r.get("url") or r.get("link") or r.get("href") or ""
            if not isinstance(url, str) or not url.strip():
                continue
            title = r.get("title") or r.get("source") or url
            snippet = r.get("content") or r.get("snippet") or ""
            results.append(
                SearchResult(
                    title=str(title),
                    url=url.strip(),
                    snippet=str(snippet)[:SNIPPET_MAX],
                )
            )
        return results
