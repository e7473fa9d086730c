"""
Verification pipelines behind the four handlers.

Strategy
--------
1. (text handlers) optional web search - fails soft, empty list on error
2. prompt built from the subject + search results
3. one model call - a failure is a `ModelProviderError` (500), unless the
   heuristic fallback is enabled for the text handlers
4. raw model text -> `normalize` -> bounded `Verdict`

Public helpers
--------------
    verify_traffic(text, llm, search)     -> Verdict   (/verify)
    verify_labelled(text, llm, search)    -> Verdict   (/verify2)
    verify_image(image, llm)              -> Verdict   (/analyze)
    verify_heuristic(text)                -> Verdict   (/verify_heuristic)
"""
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from ..errors import ModelProviderError
from ..infrastructure.llm.llm_client import LLMClient
from ..infrastructure.search.tavily_client import TavilyClient
from ..models import ImageSubject, SearchResult, Verdict
from .prompts import build_image_messages, build_label_messages, build_traffic_messages
from .verdict import schemas
from .verdict.heuristics import score_text
from .verdict.normalizer import normalize
from .verdict.schemas import VariantSchema

logger = logging.getLogger(__name__)

TRAFFIC_QUERY_MAX = 500
LABELLED_QUERY_MAX = 400


def _judge(
    llm: LLMClient,
    messages: List[Dict],
    text: str,
    sources: Sequence[SearchResult],
    schema: VariantSchema,
    json_mode: bool = False,
    heuristic_fallback: bool = False,
) -> Verdict:
    try:
        raw = llm.judge(messages, json_mode=json_mode)
    except ModelProviderError as e:
        if not heuristic_fallback:
            raise
        logger.warning(
            "[%s] model provider failed (%s); answering with keyword heuristics",
            schema.name,
            e.detail,
        )
        return normalize(score_text(text), sources, schema)
    return normalize(raw, sources, schema)


def verify_traffic(
    text: str,
    llm: LLMClient,
    search: Optional[TavilyClient] = None,
    heuristic_fallback: bool = False,
) -> Verdict:
    answer, results = "", []
    if search is not None:
        answer, results = search.search_with_answer(
            text[:TRAFFIC_QUERY_MAX], max_results=5, include_answer=True, search_depth="basic"
        )
    messages = build_traffic_messages(text, answer, results)
    return _judge(
        llm, messages, text, results, schemas.TRAFFIC, heuristic_fallback=heuristic_fallback
    )


def verify_labelled(
    text: str,
    llm: LLMClient,
    search: Optional[TavilyClient] = None,
    heuristic_fallback: bool = False,
) -> Verdict:
    results: List[SearchResult] = []
    if search is not None:
        results = search.search(text[:LABELLED_QUERY_MAX], max_results=6, search_depth="advanced")
    messages = build_label_messages(text, results[:5])
    return _judge(
        llm,
        messages,
        text,
        results,
        schemas.LABELLED,
        json_mode=True,
        heuristic_fallback=heuristic_fallback,
    )


def verify_image(image: ImageSubject, llm: LLMClient) -> Verdict:
    raw = llm.judge(build_image_messages(image))
    return normalize(raw, [], schemas.IMAGE)


def verify_heuristic(text: str) -> Verdict:
    return normalize(score_text(text), [], schemas.HEURISTIC)
