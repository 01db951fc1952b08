"""LLM provider factory."""

from typing import Optional

from ..config import Config
from .anthropic import AnthropicProvider
from .base import LLMProvider
from .openai import OpenAIProvider


def get_llm_provider(config: Config) -> Optional[LLMProvider]:
    """Create the configured LLM provider, or None when its API key is missing."""
    if not config.llm_enabled:
        return None
    if config.llm_provider == "claude":
        return AnthropicProvider(
            api_key=config.anthropic_api_key,
            model=config.default_model,
            timeout=config.llm_timeout,
        )
    return OpenAIProvider(
        api_key=config.openai_api_key,
        model=config.default_model,
        timeout=config.llm_timeout,
    )
