"""
Verdict / error -> JSON response.
"""
from __future__ import annotations

from http import HTTPStatus
from typing import Any, Dict

from flask import jsonify

from ..errors import TruthBubbleError
from ..models import Verdict
from ..core.verdict.schemas import VariantSchema


def render_verdict(verdict: Verdict, schema: VariantSchema) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    for key, vocabulary in schema.label_outputs.items():
        out[key] = vocabulary[verdict.label]
    out["confidence"] = verdict.confidence
    out[schema.summary_output] = verdict.summary
    for key in schema.extra_fields:
        out[key] = verdict.extras.get(key, schema.fallback_extras.get(key, ""))

    sources = []
    for s in verdict.sources:
        item = {"title": s.title, "url": s.url}
        if schema.emit_snippets:
            item["snippet"] = s.snippet
        sources.append(item)
    out["sources"] = sources
    return out


def verdict_response(verdict: Verdict, schema: VariantSchema):
    resp = jsonify(render_verdict(verdict, schema))
    resp.status_code = HTTPStatus.OK
    resp.headers["Cache-Control"] = "no-store"
    return resp


def error_response(error: TruthBubbleError):
    body: Dict[str, Any] = {"error": error.message}
    if error.detail:
        body["detail"] = error.detail
    return jsonify(body), int(error.status)
