"""
Keyword scoring used by `/verify_heuristic` and, when HEURISTIC_FALLBACK is
enabled, in place of an unreachable model provider.

No network, no model: a handful of phrasing cues nudge a neutral 0.5 score.
"""
from __future__ import annotations

import re
from typing import Dict, List

_IFCN_SOURCE = {
    "title": "Common WhatsApp hoax patterns (IFCN)",
    "url": "https://www.poynter.org/ifcn/",
}

_CHAIN_FORWARD = ("forward this", "whatsapp")
_SENSATIONAL = ("breaking", "shocking")
_ATTRIBUTION = ("according to", "reported by", "says")

ACCURATE_AT = 0.75
HIGH_RISK_AT = 0.35


def _color(score: float) -> str:
    if score >= ACCURATE_AT:
        return "green"
    if score <= HIGH_RISK_AT:
        return "red"
    return "yellow"


def score_text(text: str) -> Dict:
    """
    Return a provider-shaped dict ({color, confidence, summary, reasons,
    sources}) so it goes through the same normalizer as model output.
    """
    t = text.lower()
    score = 0.5
    reasons: List[str] = []
    sources: List[Dict[str, str]] = []

    if any(k in t for k in _CHAIN_FORWARD):
        score -= 0.2
        reasons.append("Chain-forward language detected")
        sources.append(dict(_IFCN_SOURCE))
    if any(k in t for k in _SENSATIONAL):
        score -= 0.1
        reasons.append("Sensational phrasing detected")
    if any(k in t for k in _ATTRIBUTION):
        score += 0.1
        reasons.append("Claim references a source")
    if len(re.findall(r"\d", t)) > 10:
        score += 0.05
        reasons.append("Contains specific numbers")

    score = max(0.0, min(1.0, score))
    if not reasons:
        reasons.append("Insufficient evidence; needs review")

    return {
        "color": _color(score),
        "confidence": round(score, 4),
        "summary": "; ".join(reasons),
        "reasons": reasons,
        "sources": sources,
    }
