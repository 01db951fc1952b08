"""Executive summary generation over the aggregated phase results."""

from typing import Optional

from .exceptions import LLMError, ResponseParseError
from .llm.base import LLMProvider
from .llm.parsing import ExecutiveSummary, parse_json_response
from .log import get_logger
from .models import PhaseResult, Priority

logger = get_logger(__name__)

MAX_OUTPUT_TOKENS = 400
MAX_HIGH_PRIORITY = 5
MAX_MEDIUM_PRIORITY = 3
MAX_PRIORITIES = 3


class SummaryGenerator:
    """Asks the LLM for a short readiness summary and the top 3 actions."""

    def __init__(self, llm: LLMProvider):
        self._llm = llm

    def _system_prompt(self) -> str:
        return (
            "You are a launch readiness consultant. Be concise and actionable. "
            "Return only valid JSON."
        )

    def _user_prompt(self, url: str, score: int, phases: list[PhaseResult]) -> str:
        phase_lines = "\n".join(
            f"{p.phase_name}: {p.score}/{p.max_score} ({round(p.score / p.max_score * 100)}%)"
            for p in phases
        )
        high = [
            f"- {p.phase_name}: {r.title}"
            for p in phases
            for r in p.recommendations
            if r.priority == Priority.HIGH
        ][:MAX_HIGH_PRIORITY]
        medium = [
            f"- {p.phase_name}: {r.title}"
            for p in phases
            for r in p.recommendations
            if r.priority == Priority.MEDIUM
        ][:MAX_MEDIUM_PRIORITY]

        return (
            "Based on this website scan:\n\n"
            f"URL: {url}\n"
            f"Overall Score: {score}/100\n\n"
            f"Phase Scores:\n{phase_lines}\n\n"
            f"Top Issues (High Priority):\n{chr(10).join(high) or 'None'}\n\n"
            f"Medium Priority Issues:\n{chr(10).join(medium) or 'None'}\n\n"
            "Generate:\n"
            "1. A 2-3 sentence executive summary of the site's launch readiness\n"
            "2. Top 3 specific actions to improve the score (be actionable and specific)\n\n"
            'Format as JSON: { "summary": "...", "priorities": ["action 1", "action 2", "action 3"] }'
        )

    def generate(
        self,
        url: str,
        score: int,
        phases: list[PhaseResult],
    ) -> Optional[ExecutiveSummary]:
        """Return the parsed summary, or None when the LLM call or its reply fails."""
        try:
            reply = self._llm.generate(
                self._system_prompt(),
                self._user_prompt(url, score, phases),
                max_output_tokens=MAX_OUTPUT_TOKENS,
            )
            summary = parse_json_response(reply, ExecutiveSummary)
        except (LLMError, ResponseParseError) as e:
            logger.warning("Executive summary unavailable for %s: %s", url, e)
            return None

        summary.priorities = summary.priorities[:MAX_PRIORITIES]
        return summary
