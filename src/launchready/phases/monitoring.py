"""Monitoring & Alerts phase: error tracking, session recording and APM detection."""

import re
from urllib.parse import urljoin

import httpx

from ..log import get_logger
from ..models import FindingType, PageSnapshot, PhaseResult, Priority
from .base import PhaseScorer
from .detection import detect_tools

logger = get_logger(__name__)


def _ci(pattern: str) -> re.Pattern:
    return re.compile(pattern, re.IGNORECASE)


MONITORING_PATTERNS = {
    "Sentry": [_ci(r"sentry\.io"), _ci(r"sentry-cdn"), _ci(r"Sentry\.init\("), _ci(r"@sentry/"), _ci(r"dsn.*sentry")],
    "BugSnag": [_ci(r"bugsnag"), _ci(r"Bugsnag\.start\(")],
    "Rollbar": [_ci(r"rollbar\.com"), _ci(r"Rollbar\.init\(")],
    "LogRocket": [_ci(r"logrocket"), _ci(r"LogRocket\.init\(")],
    "Datadog": [_ci(r"datadoghq"), _ci(r"DD_RUM"), _ci(r"datadog-rum")],
    "New Relic": [_ci(r"newrelic"), _ci(r"NREUM"), _ci(r"nr-rum")],
    "Raygun": [_ci(r"raygun"), _ci(r"Raygun\.init\(")],
    "TrackJS": [_ci(r"trackjs")],
    "Airbrake": [_ci(r"airbrake")],
    "FullStory": [_ci(r"fullstory"), _ci(r"FullStory\.init\(")],
    "Clarity": [_ci(r"clarity\.ms")],
    "Vercel Analytics": [_ci(r"vercel-analytics"), _ci(r"_vercel"), _ci(r"vitals\.vercel-analytics")],
    "Vercel Speed Insights": [_ci(r"speed-insights"), _ci(r"@vercel/speed-insights")],
}

ERROR_TRACKERS = ("Sentry", "BugSnag", "Rollbar", "Raygun", "TrackJS", "Airbrake")
SESSION_RECORDERS = ("LogRocket", "FullStory", "Clarity")
APM_TOOLS = ("Datadog", "New Relic", "Vercel Analytics", "Vercel Speed Insights")

ERROR_TRACKING_POINTS = 40
SESSION_RECORDING_POINTS = 20
APM_POINTS = 25
ROBOTS_POINTS = 10
SITEMAP_POINTS = 5
NO_TOOLS_SCORE = 15
UNLOADED_SCORE = 20


class MonitoringScorer(PhaseScorer):
    @property
    def phase_name(self) -> str:
        return "Monitoring & Alerts"

    def _evaluate(self, url: str, snapshot: PageSnapshot, result: PhaseResult) -> None:
        if snapshot.loaded:
            self._check_tools(url, snapshot, result)
        else:
            result.score = UNLOADED_SCORE
            result.add_finding(
                FindingType.ERROR,
                "Could not analyze monitoring setup",
                snapshot.error or "Page data not available",
            )

        # Uptime cannot be observed from a single page fetch.
        result.recommend(
            Priority.HIGH,
            "Configure uptime monitoring",
            "Get alerted if your site goes down",
            "Use UptimeRobot (free), Pingdom, or Better Stack",
        )

    def _check_tools(self, url: str, snapshot: PageSnapshot, result: PhaseResult) -> None:
        tools = detect_tools(MONITORING_PATTERNS, snapshot)
        error_trackers = [t for t in tools if t in ERROR_TRACKERS]
        recorders = [t for t in tools if t in SESSION_RECORDERS]
        apm = [t for t in tools if t in APM_TOOLS]

        if error_trackers:
            result.score += ERROR_TRACKING_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                f"Error tracking: {', '.join(error_trackers)}",
                "Errors are being captured and monitored",
            )
        else:
            result.add_finding(
                FindingType.ERROR,
                "No error tracking detected",
                "Production errors may go unnoticed",
            )
            result.recommend(
                Priority.HIGH,
                "Set up error tracking",
                "Catch and track production errors before users report them",
                "Install Sentry (free tier available) or another error tracker",
            )

        if recorders:
            result.score += SESSION_RECORDING_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                f"Session recording: {', '.join(recorders)}",
                "User sessions are being recorded for debugging",
            )
        else:
            result.recommend(
                Priority.LOW,
                "Consider session recording",
                "See exactly what users experience when issues occur",
                "Try LogRocket, FullStory, or Microsoft Clarity (free)",
            )

        if apm:
            result.score += APM_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                f"Performance monitoring: {', '.join(apm)}",
                "Application performance is being tracked",
            )
        else:
            result.recommend(
                Priority.MEDIUM,
                "Add performance monitoring",
                "Track Core Web Vitals and server performance",
                "Enable Vercel Analytics or add Datadog RUM",
            )

        if self._has_robots_txt(url):
            result.score += ROBOTS_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "robots.txt present",
                "Search engine crawling is configured",
            )

        if "sitemap" in snapshot.html or "sitemap" in snapshot.meta_tags:
            result.score += SITEMAP_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "Sitemap reference found",
                "Helps search engines discover all pages",
            )

        if not tools:
            result.score = NO_TOOLS_SCORE
            result.add_finding(
                FindingType.WARNING,
                "No monitoring tools detected",
                "Consider adding error tracking and analytics",
            )

    def _has_robots_txt(self, url: str) -> bool:
        """Best-effort probe; any failure counts as absent."""
        try:
            response = self._context.http.get(
                urljoin(url, "/robots.txt"),
                headers={"User-Agent": "LaunchReady/1.0"},
                timeout=self._config.robots_timeout,
            )
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.debug("robots.txt probe failed for %s: %s", url, e)
            return False
        return response.is_success
