"""Phase registry."""

from .analytics import AnalyticsScorer
from .base import PhaseScorer, ScanContext
from .content import ContentScorer
from .domain import DomainScorer
from .monitoring import MonitoringScorer
from .performance import PerformanceScorer
from .security import SecurityScorer
from .seo import SEOScorer
from .social import SocialScorer

# Report order; the phases themselves are independent of each other.
PHASE_CLASSES: tuple[type[PhaseScorer], ...] = (
    DomainScorer,
    SEOScorer,
    PerformanceScorer,
    SecurityScorer,
    AnalyticsScorer,
    SocialScorer,
    ContentScorer,
    MonitoringScorer,
)


def build_phases(context: ScanContext) -> list[PhaseScorer]:
    """Instantiate every phase scorer, in report order."""
    return [cls(context) for cls in PHASE_CLASSES]


__all__ = [
    "PHASE_CLASSES",
    "PhaseScorer",
    "ScanContext",
    "build_phases",
]
