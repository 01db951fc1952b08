"""Website launch readiness scanner."""

from .models import (
    Finding,
    FindingType,
    PageSnapshot,
    PhaseResult,
    Priority,
    Recommendation,
    ScanResult,
)
from .scanner import Scanner, scan_url

__all__ = [
    "Finding",
    "FindingType",
    "PageSnapshot",
    "PhaseResult",
    "Priority",
    "Recommendation",
    "ScanResult",
    "Scanner",
    "scan_url",
]

__version__ = "0.1.0"
