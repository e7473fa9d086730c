from __future__ import annotations

from . import api_bp
from .payload import request_payload
from .serializer import verdict_response
from ..core.pipeline import verify_heuristic
from ..core.validation import extract_text
from ..core.verdict import schemas


@api_bp.route("/verify_heuristic", methods=["POST"])
def verify_heuristic_route():
    """
    Offline keyword scoring; needs no provider credentials.

    Response (the shape the Android app expects):
    {
      "label": "Likely True|Needs Review|Likely False",
      "color": "green|yellow|red",
      "confidence": 0.5,
      "summary": "...",
      "reasons": ["..."],
      "sources": [{"title": "...", "url": "..."}]
    }
    """
    subject = extract_text(request_payload())
    return verdict_response(verify_heuristic(subject.text), schemas.HEURISTIC)
