from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List


class Tier(str, Enum):
    """The three risk tiers every provider vocabulary collapses into."""

    ACCURATE = "accurate"
    UNCERTAIN = "uncertain"
    HIGH_RISK = "high-risk"


@dataclass
class SearchResult:
    title: str
    url: str
    snippet: str = ""


@dataclass
class Verdict:
    label: Tier
    confidence: float
    summary: str
    sources: List[SearchResult] = field(default_factory=list)
    # variant-specific bounded fields, e.g. the image claim or heuristic reasons
    extras: Dict[str, Any] = field(default_factory=dict)


@dataclass
class TextSubject:
    text: str


@dataclass
class ImageSubject:
    """A validated screenshot: cleaned base64 payload plus its sniffed MIME type."""

    data_b64: str
    mime_type: str = "image/jpeg"

    @property
    def data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.data_b64}"
