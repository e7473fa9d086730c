from __future__ import annotations

from flask import current_app

from . import api_bp
from .payload import request_payload
from .serializer import verdict_response
from ..core.pipeline import verify_image
from ..core.validation import extract_image
from ..core.verdict import schemas
from ..providers import get_llm_client


@api_bp.route("/analyze", methods=["POST"])
def analyze():
    """
    Body: { "image_base64": "BASE64 or data:image/...;base64,BASE64" }

    Response:
    {
      "verdict": "TRUE|UNVERIFIABLE|FALSE",
      "confidence": 0.0-1.0,
      "explanation": "...",
      "claim": "one sentence claim",
      "sources": [...]
    }
    """
    image = extract_image(request_payload(), max_bytes=current_app.config["MAX_IMAGE_BYTES"])
    llm = get_llm_client()
    return verdict_response(verify_image(image, llm), schemas.IMAGE)
