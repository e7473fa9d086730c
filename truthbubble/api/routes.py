from __future__ import annotations

from http import HTTPStatus

from flask import current_app, jsonify

from . import api_bp
from .payload import request_payload
from .serializer import verdict_response
from ..config import llm_configured
from ..core.pipeline import verify_traffic
from ..core.validation import extract_text
from ..core.verdict import schemas
from ..providers import get_llm_client, get_search_client


@api_bp.route("/verify", methods=["GET", "POST"])
def verify():
    """
    GET  /api/verify?text=...   or   POST /api/verify {"text": "..."}

    Response:
    {
      "verdict": "green|yellow|red",
      "confidence": 0.8,
      "rationale": "...",
      "sources": [{"title": "...", "url": "..."}]
    }
    """
    subject = extract_text(request_payload())
    llm = get_llm_client()
    search = get_search_client(required=False)

    verdict = verify_traffic(
        subject.text,
        llm,
        search,
        heuristic_fallback=current_app.config.get("HEURISTIC_FALLBACK", False),
    )
    return verdict_response(verdict, schemas.TRAFFIC)


@api_bp.route("/health", methods=["GET"])
def health():
    config = current_app.config
    return jsonify(
        {
            "status": "ok",
            "llm_configured": llm_configured(config),
            "search_configured": bool(config.get("TAVILY_API_KEY")),
        }
    ), HTTPStatus.OK
