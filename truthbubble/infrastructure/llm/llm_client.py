from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

import openai

from ...errors import ModelProviderError

logger = logging.getLogger(__name__)

_MAX_TOKENS = 800  # verdict JSON is short; cost guardrail


class LLMClient:
    """
    Unified chat wrapper - same call-signature regardless of provider.

    Built once per app from settings (see `from_settings`) instead of a
    module-level client, so tests and multiple apps can hold their own.
    """

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        timeout: float = 30.0,
        temperature: float = 0.2,
        provider: str = "openai",
        azure_endpoint: str = "",
        api_version: str = "2025-01-01-preview",
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.provider = provider

        if provider == "azure":
            self._client = openai.AzureOpenAI(
                api_version=api_version,
                azure_endpoint=azure_endpoint,
                api_key=api_key,
                timeout=timeout,
                max_retries=0,
            )
        else:
            self._client = openai.OpenAI(api_key=api_key, timeout=timeout, max_retries=0)

    @classmethod
    def from_settings(cls, config: Mapping[str, Any]) -> "LLMClient":
        provider = config.get("PROVIDER_IN_USE", "openai")
        return cls(
            api_key=config["AZURE_API_KEY"] if provider == "azure" else config["OPENAI_API_KEY"],
            model=config.get("LLM_MODEL", "gpt-4o-mini"),
            timeout=float(config.get("LLM_TIMEOUT", 30)),
            temperature=float(config.get("LLM_TEMPERATURE", 0.2)),
            provider=provider,
            azure_endpoint=config.get("AZURE_ENDPOINT", ""),
            api_version=config.get("AZURE_API_VERSION", "2025-01-01-preview"),
        )

    def judge(self, messages: List[Dict], json_mode: bool = False) -> str:
        """
        Send *messages* and return the first choice's text (may be empty).

        Raises `ModelProviderError` on any SDK failure; the description only
        carries the error class and HTTP status, never the upstream body.
        """
        kwargs: dict = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
            "max_tokens": _MAX_TOKENS,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            resp = self._client.chat.completions.create(**kwargs)
        except openai.OpenAIError as e:
            desc = _describe(e)
            logger.error("model provider call failed: %s", desc)
            raise ModelProviderError(detail=desc) from e

        choices = getattr(resp, "choices", None) or []
        if not choices:
            logger.warning("model returned no choices")
            return ""
        content = getattr(choices[0].message, "content", None)
        return content.strip() if isinstance(content, str) else ""


def _describe(err: Exception) -> str:
    status: Optional[int] = getattr(err, "status_code", None)
    name = type(err).__name__
    return f"{name} (HTTP {status})" if status else name
