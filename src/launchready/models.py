"""Data models for launchready."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class FindingType(str, Enum):
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Finding:
    """A single observation made by a phase."""

    type: FindingType
    message: str
    details: Optional[str] = None


@dataclass(frozen=True)
class Recommendation:
    """A prioritized, actionable suggestion made by a phase."""

    priority: Priority
    title: str
    description: str
    actionable: str


@dataclass(frozen=True)
class PageSnapshot:
    """The fetched representation of a target page, shared read-only by all phases."""

    html: str = ""
    title: str = ""
    meta_tags: Mapping[str, str] = field(default_factory=dict)
    scripts: tuple[str, ...] = ()
    loaded: bool = False
    error: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "meta_tags", MappingProxyType(dict(self.meta_tags)))
        object.__setattr__(self, "scripts", tuple(self.scripts))

    @classmethod
    def unavailable(cls, error: str) -> "PageSnapshot":
        return cls(loaded=False, error=error)


@dataclass
class PhaseResult:
    """Score, findings and recommendations for one phase."""

    phase_name: str
    score: int = 0
    max_score: int = 100
    findings: list[Finding] = field(default_factory=list)
    recommendations: list[Recommendation] = field(default_factory=list)

    def add_finding(
        self,
        type: FindingType,
        message: str,
        details: Optional[str] = None,
    ) -> None:
        self.findings.append(Finding(type=type, message=message, details=details))

    def recommend(
        self,
        priority: Priority,
        title: str,
        description: str,
        actionable: str,
    ) -> None:
        self.recommendations.append(Recommendation(
            priority=priority,
            title=title,
            description=description,
            actionable=actionable,
        ))

    def has_errors(self) -> bool:
        return any(f.type == FindingType.ERROR for f in self.findings)

    def to_dict(self) -> dict:
        return {
            "phase_name": self.phase_name,
            "score": self.score,
            "max_score": self.max_score,
            "findings": [
                {"type": f.type.value, "message": f.message, "details": f.details}
                for f in self.findings
            ],
            "recommendations": [
                {
                    "priority": r.priority.value,
                    "title": r.title,
                    "description": r.description,
                    "actionable": r.actionable,
                }
                for r in self.recommendations
            ],
        }


@dataclass
class ScanResult:
    """The complete 8-phase readiness report for one URL."""

    url: str
    score: int
    phases: list[PhaseResult]
    max_score: int = 100
    scanned_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    executive_summary: Optional[str] = None
    top_priorities: Optional[list[str]] = None

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "score": self.score,
            "max_score": self.max_score,
            "scanned_at": self.scanned_at.isoformat(),
            "executive_summary": self.executive_summary,
            "top_priorities": self.top_priorities,
            "phases": [phase.to_dict() for phase in self.phases],
        }
