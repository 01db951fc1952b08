"""Analytics phase."""

import re

from ..models import FindingType, PageSnapshot, PhaseResult, Priority
from .base import PhaseScorer
from .detection import detect_tools

ANALYTICS_PATTERNS = {
    "Google Analytics": [
        re.compile(r"google-analytics\.com/analytics\.js"),
        re.compile(r"googletagmanager\.com/gtag/js"),
        re.compile(r"googletagmanager\.com/gtm\.js"),
        re.compile(r"ga\(.*create"),
        re.compile(r"gtag\("),
    ],
    "PostHog": [
        re.compile(r"posthog\.com/static/array\.js"),
        re.compile(r"posthog\.init\("),
        re.compile(r"app\.posthog\.com"),
    ],
    "Plausible": [
        re.compile(r"plausible\.io/js/plausible"),
        re.compile(r"plausible\.io/js/script"),
    ],
    "Mixpanel": [
        re.compile(r"mixpanel\.com/libs/mixpanel"),
        re.compile(r"mixpanel\.init\("),
    ],
    "Segment": [
        re.compile(r"segment\.com/analytics\.js"),
        re.compile(r"analytics\.load\("),
    ],
    "Heap": [
        re.compile(r"heapanalytics\.com"),
        re.compile(r"heap\.load\("),
    ],
    "Amplitude": [
        re.compile(r"amplitude\.com.*\.js"),
        re.compile(r"amplitude\.getInstance\("),
    ],
    "Hotjar": [
        re.compile(r"static\.hotjar\.com"),
        re.compile(r"hjid:"),
    ],
    "Fathom": [
        re.compile(r"cdn\.usefathom\.com"),
        re.compile(r"fathom\("),
    ],
}

PRIVACY_FOCUSED = ("Plausible", "Fathom", "PostHog")
PRODUCT_ANALYTICS = ("PostHog", "Mixpanel", "Amplitude", "Heap")

DETECTED_POINTS = 60
MULTIPLE_TOOLS_POINTS = 20
PRIVACY_POINTS = 20


class AnalyticsScorer(PhaseScorer):
    @property
    def phase_name(self) -> str:
        return "Analytics"

    def _evaluate(self, url: str, snapshot: PageSnapshot, result: PhaseResult) -> None:
        if not snapshot.loaded:
            self._report_unloaded(snapshot, result)
            return

        tools = detect_tools(ANALYTICS_PATTERNS, snapshot)

        if not tools:
            result.add_finding(
                FindingType.ERROR,
                "No analytics tools detected",
                "Cannot track user behavior or measure conversions",
            )
            result.recommend(
                Priority.HIGH,
                "Install analytics",
                "Set up analytics to understand your users",
                "Add Google Analytics, PostHog, or Plausible to track visitors",
            )
            result.recommend(
                Priority.MEDIUM,
                "Set up conversion tracking",
                "Track key user actions (signups, purchases)",
                "Define events and goals in your analytics platform",
            )
            return

        result.score += DETECTED_POINTS
        result.add_finding(
            FindingType.SUCCESS,
            f"Analytics tools detected: {', '.join(tools)}",
            f"Found {len(tools)} analytics {'tool' if len(tools) == 1 else 'tools'}",
        )

        if len(tools) >= 2:
            result.score += MULTIPLE_TOOLS_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "Multiple analytics tools configured",
                "Good coverage with multiple tracking solutions",
            )

        privacy = [tool for tool in tools if tool in PRIVACY_FOCUSED]
        if privacy:
            result.score += PRIVACY_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "Privacy-focused analytics detected",
                f"{', '.join(privacy)} respects user privacy",
            )

        if not any(tool in PRODUCT_ANALYTICS for tool in tools):
            result.recommend(
                Priority.MEDIUM,
                "Add product analytics",
                "Consider adding event-based analytics for deeper insights",
                "Install PostHog, Mixpanel, or Amplitude for user behavior tracking",
            )
