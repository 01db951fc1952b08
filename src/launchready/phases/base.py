"""Abstract base class for phase scorers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

import httpx

from ..config import Config
from ..llm.base import LLMProvider
from ..models import FindingType, PageSnapshot, PhaseResult

HTTP_USER_AGENT = "Mozilla/5.0 (compatible; LaunchReady/1.0; +https://launchready.me)"


@dataclass
class ScanContext:
    """Collaborators shared by the phases of one scan.

    The HTTP client and the LLM provider are only used for each phase's own
    secondary requests; the page itself arrives as the snapshot argument.
    """

    config: Config
    http: httpx.Client
    llm: Optional[LLMProvider] = None


class PhaseScorer(ABC):
    """Base class for all phase scorers.

    Subclasses define phase_name and _evaluate, which adds points, findings
    and recommendations to the result it is given. score() clamps the final
    score into [0, max_score].
    """

    max_score = 100

    def __init__(self, context: ScanContext):
        self._context = context

    @property
    @abstractmethod
    def phase_name(self) -> str:
        """Display name for this phase."""

    @abstractmethod
    def _evaluate(self, url: str, snapshot: PageSnapshot, result: PhaseResult) -> None:
        """Score the phase into result."""

    @property
    def _config(self) -> Config:
        return self._context.config

    def score(self, url: str, snapshot: PageSnapshot) -> PhaseResult:
        result = PhaseResult(phase_name=self.phase_name, max_score=self.max_score)
        self._evaluate(url, snapshot, result)
        result.score = max(0, min(result.max_score, int(result.score)))
        return result

    def timed_out(self, timeout: float) -> PhaseResult:
        """Result reported when the phase misses the scan deadline."""
        result = PhaseResult(phase_name=self.phase_name, max_score=self.max_score)
        result.add_finding(
            FindingType.ERROR,
            "Phase timed out",
            f"No result within {timeout:g}s",
        )
        return result

    @staticmethod
    def _report_unloaded(snapshot: PageSnapshot, result: PhaseResult) -> None:
        result.add_finding(
            FindingType.ERROR,
            "Failed to load page",
            snapshot.error or "Could not fetch page for analysis",
        )
