"""
Per-handler field-name mapping.

The four handlers answer in slightly different shapes (`label` vs `verdict`,
`summary` vs `rationale` vs `explanation`, an extra `color` or `claim`).
A `VariantSchema` captures those differences so one normalizer and one
serializer can serve all of them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple

from ...models import Tier

# provider keys we accept for the label / summary regardless of variant
LABEL_ALIASES: Tuple[str, ...] = ("label", "verdict", "color", "rating")
SUMMARY_ALIASES: Tuple[str, ...] = ("summary", "rationale", "explanation", "reason")


@dataclass(frozen=True)
class VariantSchema:
    name: str
    # provider keys tried first, before the generic aliases
    label_keys: Tuple[str, ...]
    summary_keys: Tuple[str, ...]
    # output key -> tier vocabulary; the first entry is the primary label
    label_outputs: Mapping[str, Mapping[Tier, str]]
    summary_output: str = "summary"
    emit_snippets: bool = True
    extra_fields: Tuple[str, ...] = ()
    fallback_extras: Mapping[str, Any] = field(default_factory=dict)

    def read_keys(self, own: Tuple[str, ...], aliases: Tuple[str, ...]) -> Tuple[str, ...]:
        return own + tuple(k for k in aliases if k not in own)

    @property
    def label_read_order(self) -> Tuple[str, ...]:
        return self.read_keys(self.label_keys, LABEL_ALIASES)

    @property
    def summary_read_order(self) -> Tuple[str, ...]:
        return self.read_keys(self.summary_keys, SUMMARY_ALIASES)


_TRAFFIC_LOWER: Dict[Tier, str] = {
    Tier.ACCURATE: "green",
    Tier.UNCERTAIN: "yellow",
    Tier.HIGH_RISK: "red",
}

# `/api/verify`: {verdict, confidence, rationale, sources:[{title,url}]}
TRAFFIC = VariantSchema(
    name="traffic",
    label_keys=("verdict",),
    summary_keys=("rationale",),
    label_outputs={"verdict": _TRAFFIC_LOWER},
    summary_output="rationale",
    emit_snippets=False,
)

# `/api/verify2`: {label, confidence, summary, sources:[{title,url,snippet}]}
LABELLED = VariantSchema(
    name="labelled",
    label_keys=("label",),
    summary_keys=("summary",),
    label_outputs={"label": {t: v.upper() for t, v in _TRAFFIC_LOWER.items()}},
    summary_output="summary",
)

# `/api/verify_heuristic`: {label, confidence, reasons, color, sources}
HEURISTIC = VariantSchema(
    name="heuristic",
    label_keys=("color", "label"),
    summary_keys=("summary",),
    label_outputs={
        "label": {
            Tier.ACCURATE: "Likely True",
            Tier.UNCERTAIN: "Needs Review",
            Tier.HIGH_RISK: "Likely False",
        },
        "color": _TRAFFIC_LOWER,
    },
    summary_output="summary",
    emit_snippets=False,
    extra_fields=("reasons",),
    fallback_extras={"reasons": ["Insufficient evidence; needs review"]},
)

# `/api/analyze`: {verdict, confidence, claim, explanation, sources}
IMAGE = VariantSchema(
    name="image",
    label_keys=("verdict",),
    summary_keys=("explanation",),
    label_outputs={
        "verdict": {
            Tier.ACCURATE: "TRUE",
            Tier.UNCERTAIN: "UNVERIFIABLE",
            Tier.HIGH_RISK: "FALSE",
        }
    },
    summary_output="explanation",
    extra_fields=("claim",),
    fallback_extras={"claim": "Could not parse claim reliably"},
)
