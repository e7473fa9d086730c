"""
Chat messages for the model-backed handlers.

Every system prompt asks for one strict JSON object and forbids invented
links: the normalizer can only use what comes back as JSON, and any source
it forwards goes straight to the phone.
"""
from __future__ import annotations

import json
from typing import Dict, List, Sequence

from ..models import ImageSubject, SearchResult

NO_FABRICATION = (
    "Only cite URLs that appear in the provided sources; never invent or guess links. "
    "If no source supports your reasoning, return an empty sources list."
)


def _numbered(sources: Sequence[SearchResult]) -> str:
    if not sources:
        return "No web results."
    return "\n".join(
        f"{i + 1}. {s.title}\n{s.url}\n{s.snippet}\n" for i, s in enumerate(sources)
    )


def build_traffic_messages(
    text: str, answer: str, sources: Sequence[SearchResult]
) -> List[Dict]:
    """Messages for `/verify` (green / yellow / red)."""
    system = {"role": "system", "content": "You return strict JSON only."}
    listed = [{"title": s.title, "url": s.url} for s in sources]
    user = {
        "role": "user",
        "content": (
            "You are a cautious fact-checking assistant.\n\n"
            "Given:\n"
            "- A social post or claim (POST_TEXT).\n"
            "- An optional short web-search summary (SEARCH_SUMMARY).\n"
            "- A few URLs (SOURCES) that might be relevant.\n\n"
            "Goal:\n"
            "- Decide a confidence color for the claim:\n"
            '  * "green"  = looks accurate / low risk of misinformation\n'
            '  * "yellow" = uncertain or mixed; needs careful reading / missing context\n'
            '  * "red"    = likely false or misleading\n'
            "- Explain your reasoning in 2-4 sentences.\n"
            "- Return strict JSON with keys: verdict, confidence, rationale, sources\n"
            '  where "confidence" is a number between 0 and 1 and "sources" is a list of '
            "{ title, url } taken from the input sources.\n"
            f"- {NO_FABRICATION}\n\n"
            "Return ONLY JSON. No extra text.\n\n"
            f"POST_TEXT:\n{text}\n\n"
            f"SEARCH_SUMMARY:\n{answer or 'N/A'}\n\n"
            f"SOURCES:\n{json.dumps(listed, indent=2)}\n"
        ),
    }
    return [system, user]


def build_label_messages(text: str, sources: Sequence[SearchResult]) -> List[Dict]:
    """Messages for `/verify2` (GREEN / YELLOW / RED with confidence)."""
    system = {
        "role": "system",
        "content": (
            "You are a rigorous fact-checking assistant.\n"
            "Given a user's on-screen text (a social post) and a list of web results, "
            "decide a verdict label and provide a short explanation.\n"
            "Labels:\n"
            "- GREEN: likely correct / low risk\n"
            "- YELLOW: uncertain / mixed / needs caution\n"
            "- RED: likely false or misleading\n\n"
            'Return ONLY strict JSON: {"label":"GREEN|YELLOW|RED","confidence":0.0-1.0,'
            '"summary":"...","sources":[{"title":"...","url":"..."}]}\n'
            f"Base your decision on the provided sources. {NO_FABRICATION}"
        ),
    }
    user = {
        "role": "user",
        "content": f"POST_TEXT:\n{text}\n\nWEB_RESULTS:\n{_numbered(sources)}",
    }
    return [system, user]


def build_image_messages(image: ImageSubject) -> List[Dict]:
    """Messages for `/analyze` (screenshot, TRUE / MISLEADING / FALSE / UNVERIFIABLE)."""
    system = {
        "role": "system",
        "content": (
            "You are a fact-checking assistant.\n"
            "You will receive a social media screenshot (image).\n"
            "Your job:\n"
            "1) Extract the main claim(s) from the image text.\n"
            "2) Judge whether the claims are TRUE / MISLEADING / FALSE / UNVERIFIABLE.\n"
            "3) Provide a short explanation with reasoning.\n"
            "4) If you cannot verify without sources, say UNVERIFIABLE and explain what is missing.\n\n"
            "Return STRICT JSON only:\n"
            "{\n"
            '  "verdict": "TRUE|MISLEADING|FALSE|UNVERIFIABLE",\n'
            '  "confidence": 0.0-1.0,\n'
            '  "claim": "one sentence claim",\n'
            '  "explanation": "3-6 lines explanation",\n'
            '  "sources": []\n'
            "}\n"
            f"{NO_FABRICATION}"
        ),
    }
    user = {
        "role": "user",
        "content": [
            {
                "type": "text",
                "text": "Analyze this screenshot. Identify the main claim and return verdict.",
            },
            {"type": "image_url", "image_url": {"url": image.data_url}},
        ],
    }
    return [system, user]
