"""Performance phase.

Uses Google PageSpeed Insights (Lighthouse, mobile strategy) when an API key
is configured; otherwise, or when the API fails, falls back to a heuristic
over the snapshot's HTML size and script count.
"""

from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from ..exceptions import FetchError
from ..log import get_logger
from ..models import FindingType, PageSnapshot, PhaseResult, Priority
from ..utils import round_half_up
from .base import PhaseScorer

logger = get_logger(__name__)

PAGESPEED_URL = "https://www.googleapis.com/pagespeedonline/v5/runPagespeed"

HTML_SIZE_LIMIT = 100_000
HTML_SIZE_POINTS = 30
SCRIPT_LIMIT = 10
SCRIPT_POINTS = 20
LOADED_BASE_POINTS = 20
HEURISTIC_FLOOR = 40


@dataclass(frozen=True)
class _Metric:
    audit: str
    label: str
    scale: float  # divides Lighthouse's numericValue into display units
    good: float
    needs_improvement: float
    message: Callable[[float], str]
    details: Callable[[FindingType], str]
    recommendation: Optional[tuple[Priority, str, str, str]] = None


def _grade(value: float, good: float, needs_improvement: float) -> FindingType:
    if value <= good:
        return FindingType.SUCCESS
    if value <= needs_improvement:
        return FindingType.WARNING
    return FindingType.ERROR


def _banded(good: str, needs_improvement: str, poor: str) -> Callable[[FindingType], str]:
    labels = {
        FindingType.SUCCESS: good,
        FindingType.WARNING: needs_improvement,
        FindingType.ERROR: poor,
    }
    return labels.__getitem__


METRICS = (
    _Metric(
        audit="largest-contentful-paint",
        label="LCP",
        scale=1000,
        good=2.5,
        needs_improvement=4,
        message=lambda v: f"LCP: {v:.1f}s",
        details=_banded("Good (≤2.5s)", "Needs Improvement (2.5-4s)", "Poor (>4s)"),
        recommendation=(
            Priority.HIGH,
            "Improve Largest Contentful Paint",
            "LCP is {value:.1f}s, should be under 2.5s",
            "Optimize images, reduce server response time, remove render-blocking resources",
        ),
    ),
    _Metric(
        audit="total-blocking-time",
        label="TBT",
        scale=1,
        good=200,
        needs_improvement=600,
        message=lambda v: f"Total Blocking Time: {round(v)}ms",
        details=_banded("Good (≤200ms)", "Needs Improvement", "Poor (>600ms)"),
        recommendation=(
            Priority.HIGH,
            "Reduce JavaScript execution time",
            "Long tasks block the main thread and delay interactivity",
            "Break up long tasks, remove unused JavaScript, defer non-critical scripts",
        ),
    ),
    _Metric(
        audit="cumulative-layout-shift",
        label="CLS",
        scale=1,
        good=0.1,
        needs_improvement=0.25,
        message=lambda v: f"CLS: {v:.3f}",
        details=_banded("Good (≤0.1)", "Needs Improvement", "Poor (>0.25)"),
        recommendation=(
            Priority.MEDIUM,
            "Reduce layout shifts",
            "Content is moving around as the page loads",
            "Add size attributes to images/videos, avoid inserting content above existing content",
        ),
    ),
    _Metric(
        audit="speed-index",
        label="Speed Index",
        scale=1000,
        good=3.4,
        needs_improvement=5.8,
        message=lambda v: f"Speed Index: {v:.1f}s",
        details=lambda _: "How quickly content is visually displayed",
    ),
    _Metric(
        audit="first-contentful-paint",
        label="FCP",
        scale=1000,
        good=1.8,
        needs_improvement=3,
        message=lambda v: f"First Contentful Paint: {v:.1f}s",
        details=lambda _: "Time until first content appears",
    ),
)


class PerformanceScorer(PhaseScorer):
    @property
    def phase_name(self) -> str:
        return "Performance"

    def _evaluate(self, url: str, snapshot: PageSnapshot, result: PhaseResult) -> None:
        if not self._config.pagespeed_api_key:
            logger.info("No PageSpeed API key, using basic checks")
            self._heuristic(snapshot, result)
            return

        try:
            lighthouse = self._fetch_lighthouse(url)
        except FetchError as e:
            logger.warning("PageSpeed API failed for %s: %s", url, e)
            result.add_finding(
                FindingType.WARNING, "Could not fetch PageSpeed data", str(e)
            )
            self._heuristic(snapshot, result)
            return

        self._score_lighthouse(lighthouse, result)

    def _fetch_lighthouse(self, url: str) -> dict:
        params = {
            "url": url,
            "key": self._config.pagespeed_api_key,
            "category": "performance",
            "strategy": "mobile",
        }
        try:
            response = self._context.http.get(
                PAGESPEED_URL, params=params, timeout=self._config.pagespeed_timeout
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise FetchError(f"PageSpeed API error: {e.response.status_code}") from e
        except httpx.HTTPError as e:
            raise FetchError(f"PageSpeed request failed: {e}") from e
        except ValueError as e:
            raise FetchError(f"PageSpeed returned invalid JSON: {e}") from e

        lighthouse = data.get("lighthouseResult") if isinstance(data, dict) else None
        if not lighthouse:
            raise FetchError("No Lighthouse data in response")
        return lighthouse

    def _score_lighthouse(self, lighthouse: dict, result: PhaseResult) -> None:
        category = (lighthouse.get("categories") or {}).get("performance") or {}
        perf_score = round_half_up((category.get("score") or 0) * 100)
        result.score = perf_score
        result.add_finding(
            FindingType.SUCCESS if perf_score >= 90
            else FindingType.WARNING if perf_score >= 50
            else FindingType.ERROR,
            f"Performance Score: {perf_score}/100",
            "Based on Google Lighthouse mobile audit",
        )

        audits = lighthouse.get("audits") or {}
        for metric in METRICS:
            audit = audits.get(metric.audit)
            if not audit or audit.get("numericValue") is None:
                continue
            value = audit["numericValue"] / metric.scale
            grade = _grade(value, metric.good, metric.needs_improvement)
            result.add_finding(grade, metric.message(value), metric.details(grade))
            if metric.recommendation and grade != FindingType.SUCCESS:
                priority, title, description, actionable = metric.recommendation
                result.recommend(priority, title, description.format(value=value), actionable)

    def _heuristic(self, snapshot: PageSnapshot, result: PhaseResult) -> None:
        score = 0
        if snapshot.loaded:
            html_size = len(snapshot.html.encode("utf-8"))
            kb = round(html_size / 1024)
            if html_size < HTML_SIZE_LIMIT:
                score += HTML_SIZE_POINTS
                result.add_finding(
                    FindingType.SUCCESS, "HTML size is reasonable", f"{kb}KB HTML document"
                )
            else:
                result.add_finding(
                    FindingType.WARNING, "Large HTML document", f"{kb}KB - consider optimizing"
                )
                result.recommend(
                    Priority.MEDIUM,
                    "Reduce HTML size",
                    "Large HTML documents slow down initial page load",
                    "Remove unused code, minify HTML, use code splitting",
                )

            script_count = len(snapshot.scripts)
            if script_count <= SCRIPT_LIMIT:
                score += SCRIPT_POINTS
                result.add_finding(
                    FindingType.SUCCESS,
                    "Reasonable number of scripts",
                    f"{script_count} scripts detected",
                )
            else:
                result.add_finding(
                    FindingType.WARNING,
                    "Many scripts detected",
                    f"{script_count} scripts may impact load time",
                )
                result.recommend(
                    Priority.HIGH,
                    "Reduce JavaScript",
                    "Too many scripts slow down page load and interactivity",
                    "Bundle scripts, remove unused dependencies, use code splitting",
                )

            score += LOADED_BASE_POINTS
        else:
            self._report_unloaded(snapshot, result)

        result.recommend(
            Priority.HIGH,
            "Optimize images",
            "Compress and serve images in modern formats (WebP, AVIF)",
            "Use responsive, lazily loaded images served from an optimizing CDN",
        )
        result.recommend(
            Priority.MEDIUM,
            "Enable caching",
            "Configure proper cache headers for static assets",
            "Serve static assets through a CDN with long-lived cache headers",
        )
        result.score = max(score, HEURISTIC_FLOOR)
