"""OpenAI LLM provider."""

from typing import Optional

import openai

from ..exceptions import LLMError
from ..log import get_logger
from .base import LLMProvider

logger = get_logger(__name__)

_DEFAULT_MAX_OUTPUT = 500
_TEMPERATURE = 0.3


class OpenAIProvider(LLMProvider):
    def __init__(self, api_key: str, model: str = "gpt-4o-mini", timeout: float = 15.0):
        # Scans never retry; a failed call falls back to the heuristic path.
        self._client = openai.OpenAI(api_key=api_key, timeout=timeout, max_retries=0)
        self._model = model
        # Newer models (o1, o3, gpt-4.1, gpt-5, etc.) require
        # max_completion_tokens instead of max_tokens and reject temperature.
        self._use_max_completion_tokens = not self._is_legacy_model(model)

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        max_output_tokens: Optional[int] = None,
    ) -> str:
        tokens = max_output_tokens or _DEFAULT_MAX_OUTPUT
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]
        try:
            response = self._call_api(tokens, messages)
        except openai.APIError as e:
            logger.warning("OpenAI request failed: %s", e)
            raise LLMError(f"OpenAI API error: {e}") from e
        if not response.choices:
            raise LLMError("OpenAI returned no choices")
        return response.choices[0].message.content or ""

    def _call_api(self, tokens: int, messages: list):
        """Call the OpenAI API, auto-detecting max_tokens vs max_completion_tokens."""
        try:
            return self._client.chat.completions.create(
                model=self._model,
                messages=messages,
                **self._token_params(tokens),
            )
        except openai.BadRequestError as e:
            # If the parameter is unsupported, toggle and retry once
            if "unsupported_parameter" in str(e).lower() or "Unsupported parameter" in str(e):
                self._use_max_completion_tokens = not self._use_max_completion_tokens
                return self._client.chat.completions.create(
                    model=self._model,
                    messages=messages,
                    **self._token_params(tokens),
                )
            raise

    def _token_params(self, tokens: int) -> dict:
        if self._use_max_completion_tokens:
            return {"max_completion_tokens": tokens}
        return {"max_tokens": tokens, "temperature": _TEMPERATURE}

    @staticmethod
    def _is_legacy_model(model: str) -> bool:
        """Check if the model uses the legacy max_tokens parameter."""
        legacy_prefixes = ("gpt-3.5", "gpt-4o", "gpt-4-turbo", "gpt-4-")
        return any(model.startswith(p) for p in legacy_prefixes)
