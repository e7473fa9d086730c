from __future__ import annotations

from flask import current_app

from . import api_bp
from .payload import request_payload
from .serializer import verdict_response
from ..core.pipeline import verify_labelled
from ..core.validation import extract_text
from ..core.verdict import schemas
from ..providers import get_llm_client, get_search_client

MIN_TEXT_LENGTH = 10


@api_bp.route("/verify2", methods=["POST"])
def verify2():
    """
    Body: { "text": "on-screen text of a post" }   (at least 10 characters)

    Response:
    {
      "label": "GREEN|YELLOW|RED",
      "confidence": 0.0-1.0,
      "summary": "...",
      "sources": [{"title": "...", "url": "...", "snippet": "..."}]
    }

    Web search is mandatory here: a missing TAVILY_API_KEY is a 500.
    """
    subject = extract_text(request_payload(), min_length=MIN_TEXT_LENGTH)
    search = get_search_client(required=True)
    llm = get_llm_client()

    verdict = verify_labelled(
        subject.text,
        llm,
        search,
        heuristic_fallback=current_app.config.get("HEURISTIC_FALLBACK", False),
    )
    return verdict_response(verdict, schemas.LABELLED)
