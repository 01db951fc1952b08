"""Strict parsing of JSON objects returned by the LLM."""

import json
import re
from typing import Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import ResponseParseError
from ..models import Priority

T = TypeVar("T", bound=BaseModel)

_FENCE_RE = re.compile(r"^```(?:json)?\s*\n?(.*?)\n?```\s*$", re.DOTALL | re.IGNORECASE)


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ValueProposition(_Schema):
    clear: bool = False
    message: str = ""


class Headline(_Schema):
    effective: bool = False
    feedback: str = ""


class CallToAction(_Schema):
    present: bool = False
    clear: bool = False
    feedback: str = ""


class SocialProof(_Schema):
    present: bool = False
    type: str = ""


class Readability(_Schema):
    score: Optional[str] = None
    feedback: str = ""

    @field_validator("score")
    @classmethod
    def _known_grade(cls, value):
        if value is None:
            return None
        value = value.strip().lower()
        if value not in ("good", "fair", "poor"):
            raise ValueError(f"unknown readability grade {value!r}")
        return value


class Improvement(_Schema):
    priority: Priority = Priority.MEDIUM
    issue: str = Field(min_length=1)
    fix: str = ""

    @field_validator("priority", mode="before")
    @classmethod
    def _coerce_priority(cls, value):
        if isinstance(value, str) and value.strip().lower() in ("high", "medium", "low"):
            return value.strip().lower()
        return Priority.MEDIUM


class ContentAnalysis(_Schema):
    """The landing page critique requested by the Content Quality phase."""

    score: int
    value_proposition: Optional[ValueProposition] = Field(None, alias="valueProposition")
    headline: Optional[Headline] = None
    cta: Optional[CallToAction] = None
    social_proof: Optional[SocialProof] = Field(None, alias="socialProof")
    readability: Optional[Readability] = None
    improvements: list[Improvement] = Field(default_factory=list)

    @field_validator("score", mode="before")
    @classmethod
    def _bounded_score(cls, value):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError("score must be a number")
        return max(0, min(100, int(round(value))))


class ExecutiveSummary(_Schema):
    """The launch readiness summary requested after all phases have run."""

    summary: str = Field(min_length=1)
    priorities: list[str] = Field(default_factory=list)


def _strip_code_fence(text: str) -> str:
    match = _FENCE_RE.match(text)
    return match.group(1).strip() if match else text


def parse_json_response(text: Optional[str], schema: type[T]) -> T:
    """Decode the JSON object in an LLM reply and validate it against schema.

    Markdown code fences are stripped and leading prose before the first
    object is skipped; the object itself must decode completely and satisfy
    the schema. Raises ResponseParseError otherwise.
    """
    if not text or not text.strip():
        raise ResponseParseError("Empty LLM response")

    body = _strip_code_fence(text.strip())
    start = body.find("{")
    if start == -1:
        raise ResponseParseError("No JSON object in LLM response")

    try:
        data, _ = json.JSONDecoder().raw_decode(body, start)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Malformed JSON in LLM response: {e}") from e

    if not isinstance(data, dict):
        raise ResponseParseError("LLM response is not a JSON object")

    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise ResponseParseError(
            f"LLM response does not match {schema.__name__}: {e.error_count()} error(s)"
        ) from e
