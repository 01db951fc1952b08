"""Claude/Anthropic LLM provider."""

from typing import Optional

import anthropic

from ..exceptions import LLMError
from ..log import get_logger
from .base import LLMProvider

logger = get_logger(__name__)

_DEFAULT_MAX_OUTPUT = 500
_TEMPERATURE = 0.3


class AnthropicProvider(LLMProvider):
    def __init__(
        self,
        api_key: str,
        model: str = "claude-3-5-haiku-latest",
        timeout: float = 15.0,
    ):
        self._client = anthropic.Anthropic(api_key=api_key, timeout=timeout, max_retries=0)
        self._model = model

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        max_output_tokens: Optional[int] = None,
    ) -> str:
        try:
            response = self._client.messages.create(
                model=self._model,
                max_tokens=max_output_tokens or _DEFAULT_MAX_OUTPUT,
                temperature=_TEMPERATURE,
                system=system_prompt,
                messages=[{"role": "user", "content": user_prompt}],
            )
        except anthropic.APIError as e:
            logger.warning("Anthropic request failed: %s", e)
            raise LLMError(f"Anthropic API error: {e}") from e
        text_blocks = [block.text for block in response.content if block.type == "text"]
        if not text_blocks:
            raise LLMError("Anthropic returned no text content")
        return "".join(text_blocks)
