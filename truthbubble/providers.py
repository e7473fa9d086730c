"""
Process-scoped provider clients, created lazily and kept on `app.extensions`.

Credentials are checked here, before any outbound call is attempted.
"""
from __future__ import annotations

import logging
from typing import Optional

from flask import current_app

from .config import llm_configured
from .errors import ConfigurationError
from .infrastructure.llm.llm_client import LLMClient
from .infrastructure.search.tavily_client import TavilyClient

logger = logging.getLogger(__name__)

LLM_KEY = "truthbubble.llm"
SEARCH_KEY = "truthbubble.search"


def get_llm_client() -> LLMClient:
    config = current_app.config
    if not llm_configured(config):
        missing = (
            "AZURE_API_KEY / AZURE_ENDPOINT"
            if config.get("PROVIDER_IN_USE") == "azure"
            else "OPENAI_API_KEY"
        )
        logger.error("model provider not configured (%s missing)", missing)
        raise ConfigurationError(detail=f"Server is missing {missing}.")

    client = current_app.extensions.get(LLM_KEY)
    if client is None:
        client = LLMClient.from_settings(config)
        current_app.extensions[LLM_KEY] = client
    return client


def get_search_client(required: bool = False) -> Optional[TavilyClient]:
    """The Tavily client, or None when no key is set and search is optional."""
    config = current_app.config
    if not config.get("TAVILY_API_KEY"):
        if required:
            logger.error("search provider not configured (TAVILY_API_KEY missing)")
            raise ConfigurationError(detail="Server is missing TAVILY_API_KEY.")
        logger.info("TAVILY_API_KEY not set; skipping web search")
        return None

    client = current_app.extensions.get(SEARCH_KEY)
    if client is None:
        client = TavilyClient(
            api_key=config["TAVILY_API_KEY"],
            timeout=float(config.get("SEARCH_TIMEOUT", 10)),
        )
        current_app.extensions[SEARCH_KEY] = client
    return client
