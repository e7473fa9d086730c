from __future__ import annotations
import os
from typing import Literal

PROVIDERS = ("openai", "azure")


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings:
    """
    Centralised runtime configuration pulled from environment variables.

    Values are read when the object is built, so `create_app()` always sees
    the current environment (and whatever `.env` put there).
    """

    def __init__(self) -> None:
        # ---- LLM -------------------------------------------------------
        self.OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
        self.AZURE_API_KEY: str = os.getenv("AZURE_API_KEY", "")
        self.AZURE_ENDPOINT: str = os.getenv("AZURE_ENDPOINT", "")
        self.AZURE_API_VERSION: str = os.getenv(
            "AZURE_API_VERSION", "2025-01-01-preview"
        )

        provider = os.getenv("PROVIDER_IN_USE", "openai").strip().lower()
        if provider not in PROVIDERS:
            raise ValueError(
                f"PROVIDER_IN_USE must be one of {', '.join(PROVIDERS)}, got {provider!r}"
            )
        self.PROVIDER_IN_USE: Literal["openai", "azure"] = provider

        self.LLM_MODEL: str = os.getenv("LLM_MODEL", "gpt-4o-mini")
        self.LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.2"))
        self.LLM_TIMEOUT: float = float(os.getenv("LLM_TIMEOUT", "30"))

        # ---- Web search ------------------------------------------------
        self.TAVILY_API_KEY: str = os.getenv("TAVILY_API_KEY", "")
        self.SEARCH_TIMEOUT: float = float(os.getenv("SEARCH_TIMEOUT", "10"))

        # ---- Request limits / behaviour --------------------------------
        self.MAX_IMAGE_BYTES: int = int(os.getenv("MAX_IMAGE_BYTES", str(8 * 1024 * 1024)))
        self.HEURISTIC_FALLBACK: bool = _env_bool("HEURISTIC_FALLBACK")

        # ----------------------------------------------------------------
        self.LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # convenience
    @property
    def llm_configured(self) -> bool:
        return llm_configured(vars(self))


def llm_configured(config) -> bool:
    """True when the credentials for the selected model provider are present."""
    if config.get("PROVIDER_IN_USE") == "azure":
        return bool(config.get("AZURE_API_KEY") and config.get("AZURE_ENDPOINT"))
    return bool(config.get("OPENAI_API_KEY"))
