"""
Turn untrusted model output into a bounded, client-safe `Verdict`.

Public helpers
--------------
    parse_provider_output(raw) -> Parsed | Unparseable
    coerce_tier(value)         -> Tier | None
    coerce_confidence(value)   -> float in [0, 1]
    normalize(raw, search_results, schema) -> Verdict

`normalize` never raises: whatever the provider sends back, the caller gets
a structurally valid verdict. When nothing usable can be read we fall back
to the "uncertain" tier, a fixed summary and the search results we already
had.
"""
from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from ...models import SearchResult, Tier, Verdict
from .schemas import VariantSchema

logger = logging.getLogger(__name__)

MAX_SOURCES = 5
TITLE_MAX = 140
SNIPPET_MAX = 220
SUMMARY_MAX = 1000
URL_MAX = 2048
EXTRA_TEXT_MAX = 300
EXTRA_LIST_MAX = 10
RAW_SCAN_MAX = 50_000

DEFAULT_CONFIDENCE = 0.5
FALLBACK_SUMMARY = "Could not verify confidently. Review sources manually."

# (prefix, tier); matched longest-prefix first so "real" beats "r" and
# "refuted" beats "r" while a bare "red" still lands on the high-risk tier.
_TIER_PREFIXES: Tuple[Tuple[str, Tier], ...] = (
    # traffic-light vocabulary
    ("g", Tier.ACCURATE),
    ("y", Tier.UNCERTAIN),
    ("r", Tier.HIGH_RISK),
    # accurate
    ("true", Tier.ACCURATE),
    ("accurate", Tier.ACCURATE),
    ("likely true", Tier.ACCURATE),
    ("mostly true", Tier.ACCURATE),
    ("correct", Tier.ACCURATE),
    ("supported", Tier.ACCURATE),
    ("real", Tier.ACCURATE),
    ("low risk", Tier.ACCURATE),
    ("low-risk", Tier.ACCURATE),
    # uncertain
    ("uncertain", Tier.UNCERTAIN),
    ("unverifiable", Tier.UNCERTAIN),
    ("unverified", Tier.UNCERTAIN),
    ("unclear", Tier.UNCERTAIN),
    ("mixed", Tier.UNCERTAIN),
    ("needs review", Tier.UNCERTAIN),
    ("needs context", Tier.UNCERTAIN),
    ("not enough info", Tier.UNCERTAIN),
    # high risk
    ("false", Tier.HIGH_RISK),
    ("misleading", Tier.HIGH_RISK),
    ("likely false", Tier.HIGH_RISK),
    ("mostly false", Tier.HIGH_RISK),
    ("fake", Tier.HIGH_RISK),
    ("refuted", Tier.HIGH_RISK),
    ("incorrect", Tier.HIGH_RISK),
    ("inaccurate", Tier.HIGH_RISK),
    ("high-risk", Tier.HIGH_RISK),
    ("high risk", Tier.HIGH_RISK),
)
_TIER_PREFIXES_BY_LENGTH = sorted(_TIER_PREFIXES, key=lambda p: len(p[0]), reverse=True)


# --------------------------------------------------------------------- #
# Parsing
# --------------------------------------------------------------------- #
@dataclass
class Parsed:
    data: Dict[str, Any]


@dataclass
class Unparseable:
    raw: str


ParseResult = Union[Parsed, Unparseable]


def parse_provider_output(raw: Any) -> ParseResult:
    """
    Strict parse first; otherwise the first `{...}` inside the text that
    decodes to a JSON object (handles code fences and prose around it).
    """
    if isinstance(raw, Mapping):
        return Parsed(dict(raw))
    if raw is None:
        return Unparseable("")
    if not isinstance(raw, str):
        raw = str(raw)

    text = raw.strip()
    try:
        data = json.loads(text)
        if isinstance(data, dict):
            return Parsed(data)
    except (ValueError, RecursionError):
        pass

    text = text[:RAW_SCAN_MAX]
    decoder = json.JSONDecoder()
    start = text.find("{")
    while start != -1:
        try:
            data, _ = decoder.raw_decode(text, start)
        except (ValueError, RecursionError):
            data = None
        if isinstance(data, dict):
            return Parsed(data)
        start = text.find("{", start + 1)

    return Unparseable(raw)


# --------------------------------------------------------------------- #
# Field coercion
# --------------------------------------------------------------------- #
def coerce_tier(value: Any) -> Optional[Tier]:
    if not isinstance(value, str):
        return None
    s = value.strip().lower()
    if not s:
        return None
    for prefix, tier in _TIER_PREFIXES_BY_LENGTH:
        if s.startswith(prefix):
            return tier
    return None


def coerce_confidence(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_CONFIDENCE
    try:
        value = float(value)
    except OverflowError:
        return DEFAULT_CONFIDENCE
    if math.isnan(value):
        return DEFAULT_CONFIDENCE
    return max(0.0, min(1.0, value))


def _bounded(value: Any, limit: int) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        value = str(value)
    return value.strip()[:limit].rstrip()


def _bound_source(title: Any, url: str, snippet: Any, keep_snippet: bool) -> SearchResult:
    return SearchResult(
        title=_bounded(title, TITLE_MAX) or "source",
        url=url,
        snippet=_bounded(snippet, SNIPPET_MAX) if keep_snippet else "",
    )


def _clean_url(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    url = value.strip()
    if not url or len(url) > URL_MAX:
        return None
    return url


def _provider_sources(items: Any, keep_snippet: bool) -> List[SearchResult]:
    if not isinstance(items, list):
        return []
    out: List[SearchResult] = []
    for item in items:
        if not isinstance(item, Mapping):
            continue
        url = _clean_url(item.get("url"))
        if url is None:
            continue
        snippet = item.get("snippet") or item.get("content") or ""
        out.append(_bound_source(item.get("title"), url, snippet, keep_snippet))
        if len(out) >= MAX_SOURCES:
            break
    return out


def bound_search_results(
    results: Optional[Sequence[SearchResult]], keep_snippet: bool = True
) -> List[SearchResult]:
    out: List[SearchResult] = []
    for r in results or ():
        url = _clean_url(getattr(r, "url", None))
        if url is None:
            continue
        out.append(
            _bound_source(getattr(r, "title", ""), url, getattr(r, "snippet", ""), keep_snippet)
        )
        if len(out) >= MAX_SOURCES:
            break
    return out


def _extras(data: Mapping[str, Any], schema: VariantSchema) -> Dict[str, Any]:
    extras: Dict[str, Any] = {}
    for key in schema.extra_fields:
        value = data.get(key)
        # the field's declared shape comes from its fallback value
        if isinstance(schema.fallback_extras.get(key), list):
            if isinstance(value, str):
                value = [value] if value.strip() else []
            elif not isinstance(value, list):
                value = []
            extras[key] = [
                _bounded(v, EXTRA_TEXT_MAX) for v in value[:EXTRA_LIST_MAX] if v is not None
            ]
        else:
            if isinstance(value, list):
                value = "; ".join(str(v).strip() for v in value if v is not None)
            extras[key] = _bounded(value, EXTRA_TEXT_MAX)
    return extras


# --------------------------------------------------------------------- #
# Verdict construction
# --------------------------------------------------------------------- #
def fallback_verdict(
    search_results: Optional[Sequence[SearchResult]], schema: VariantSchema
) -> Verdict:
    return Verdict(
        label=Tier.UNCERTAIN,
        confidence=DEFAULT_CONFIDENCE,
        summary=FALLBACK_SUMMARY,
        sources=bound_search_results(search_results, schema.emit_snippets),
        extras={k: (list(v) if isinstance(v, list) else v) for k, v in schema.fallback_extras.items()},
    )


def _build(
    data: Mapping[str, Any],
    search_results: Optional[Sequence[SearchResult]],
    schema: VariantSchema,
) -> Optional[Verdict]:
    label = None
    for key in schema.label_read_order:
        label = coerce_tier(data.get(key))
        if label is not None:
            break
    if label is None:
        return None

    summary = ""
    for key in schema.summary_read_order:
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            summary = _bounded(value, SUMMARY_MAX)
            break

    sources = _provider_sources(data.get("sources"), schema.emit_snippets)
    if not sources:
        sources = bound_search_results(search_results, schema.emit_snippets)

    return Verdict(
        label=label,
        confidence=coerce_confidence(data.get("confidence")),
        summary=summary,
        sources=sources,
        extras=_extras(data, schema),
    )


def normalize(
    raw: Any,
    search_results: Optional[Sequence[SearchResult]],
    schema: VariantSchema,
) -> Verdict:
    """Always returns a well-formed verdict for *schema*; never raises."""
    try:
        parsed = parse_provider_output(raw)
        if isinstance(parsed, Parsed):
            verdict = _build(parsed.data, search_results, schema)
            if verdict is not None:
                return verdict
            logger.info("[%s] provider output had no usable label; using fallback", schema.name)
        else:
            logger.info(
                "[%s] provider output was not JSON (%d chars); using fallback",
                schema.name,
                len(parsed.raw),
            )
    except Exception:
        logger.exception("[%s] normalization failed; using fallback", schema.name)

    try:
        return fallback_verdict(search_results, schema)
    except Exception:
        logger.exception("[%s] search results unusable in fallback", schema.name)
        return fallback_verdict([], schema)
