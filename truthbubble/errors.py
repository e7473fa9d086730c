"""
Error taxonomy shared by the handlers.

Each error knows the HTTP status it maps to; `api.serializer.error_response`
turns it into the `{error, detail?}` JSON body.
"""
from __future__ import annotations

from http import HTTPStatus
from typing import Optional

_DETAIL_MAX = 300


class TruthBubbleError(Exception):
    status: int = HTTPStatus.INTERNAL_SERVER_ERROR
    message: str = "Server error"

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None) -> None:
        super().__init__(message or self.message)
        if message:
            self.message = message
        self.detail = detail[:_DETAIL_MAX] if detail else None


class ValidationError(TruthBubbleError):
    """The caller sent something we cannot verify (missing / too short / bad encoding)."""

    status = HTTPStatus.BAD_REQUEST
    message = "Invalid request"


class ConfigurationError(TruthBubbleError):
    """A required credential is missing from the deployment."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR
    message = "Server not configured"


class ModelProviderError(TruthBubbleError):
    """The language-model call failed; there is no verdict without it."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR
    message = "Model provider error"


class SearchProviderError(TruthBubbleError):
    """Raised inside the search client only; always swallowed there."""

    status = HTTPStatus.BAD_GATEWAY
    message = "Search provider error"
