"""Security phase: HTTPS, response security headers and page content checks."""

import re
from urllib.parse import urlparse

import httpx

from ..log import get_logger
from ..models import FindingType, PageSnapshot, PhaseResult, Priority
from .base import HTTP_USER_AGENT, PhaseScorer

logger = get_logger(__name__)

HTTPS_POINTS = 30
HSTS_POINTS = 15
FRAME_PROTECTION_POINTS = 10
NOSNIFF_POINTS = 10
CSP_POINTS = 15
XSS_PROTECTION_POINTS = 5
REFERRER_POLICY_POINTS = 5
PERMISSIONS_POLICY_POINTS = 10
HEADER_FAILURE_FLOOR_HTTPS = 40
HEADER_FAILURE_FLOOR_HTTP = 10
INLINE_HANDLER_LIMIT = 10

_INLINE_HANDLER_RE = re.compile(r"""\bon\w+\s*=\s*["'][^"']+["']""", re.IGNORECASE)
_HTTP_RESOURCE_RE = re.compile(r"""http://[^"'\s]+\.(js|css|jpg|png|gif)""", re.IGNORECASE)


class SecurityScorer(PhaseScorer):
    @property
    def phase_name(self) -> str:
        return "Security"

    def _evaluate(self, url: str, snapshot: PageSnapshot, result: PhaseResult) -> None:
        try:
            scheme = urlparse(url).scheme
        except ValueError as e:
            logger.info("Cannot parse %r: %s", url, e)
            scheme = None
        is_https = scheme == "https"

        if is_https:
            result.score += HTTPS_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "HTTPS enabled",
                "Encrypted connection protects data in transit",
            )
        else:
            result.add_finding(
                FindingType.ERROR, "HTTPS not enabled", "Data is transmitted in plain text"
            )
            result.recommend(
                Priority.HIGH,
                "Enable HTTPS",
                "All modern sites should use HTTPS",
                "Get an SSL certificate (free via Let's Encrypt or your host)",
            )

        if scheme is None:
            self._headers_unavailable(is_https, result, "URL could not be parsed")
        else:
            try:
                response = self._context.http.head(
                    url,
                    headers={"User-Agent": HTTP_USER_AGENT},
                    follow_redirects=True,
                    timeout=self._config.header_timeout,
                )
            except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
                logger.info("Could not fetch headers for %s: %s", url, e)
                self._headers_unavailable(is_https, result, "Headers check timed out or failed")
            else:
                self._check_headers(response.headers, result)

        if snapshot.loaded:
            self._check_content(snapshot, is_https, result)
        else:
            result.add_finding(
                FindingType.WARNING,
                "Page content not analyzed",
                snapshot.error or "Could not fetch page for analysis",
            )

        result.recommend(
            Priority.MEDIUM,
            "Regular dependency updates",
            "Keep dependencies updated to patch vulnerabilities",
            "Audit and update your dependencies regularly (e.g. `npm audit`, `pip-audit`)",
        )

    @staticmethod
    def _headers_unavailable(is_https: bool, result: PhaseResult, details: str) -> None:
        floor = HEADER_FAILURE_FLOOR_HTTPS if is_https else HEADER_FAILURE_FLOOR_HTTP
        result.score = max(result.score, floor)
        result.add_finding(FindingType.WARNING, "Could not check security headers", details)

    def _check_headers(self, headers: httpx.Headers, result: PhaseResult) -> None:
        hsts = headers.get("strict-transport-security")
        if hsts:
            result.score += HSTS_POINTS
            result.add_finding(FindingType.SUCCESS, "HSTS enabled", "Forces browsers to use HTTPS")
        else:
            result.recommend(
                Priority.HIGH,
                "Add HSTS header",
                "Strict-Transport-Security prevents protocol downgrade attacks",
                "Add header: Strict-Transport-Security: max-age=31536000; includeSubDomains",
            )

        xfo = headers.get("x-frame-options")
        csp = headers.get("content-security-policy")
        if xfo or (csp and "frame-ancestors" in csp):
            result.score += FRAME_PROTECTION_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "Clickjacking protection enabled",
                f"X-Frame-Options: {xfo}" if xfo else "CSP frame-ancestors configured",
            )
        else:
            result.recommend(
                Priority.MEDIUM,
                "Add clickjacking protection",
                "Prevent your site from being embedded in malicious frames",
                "Add header: X-Frame-Options: DENY or Content-Security-Policy: frame-ancestors 'none'",
            )

        if (headers.get("x-content-type-options") or "").strip().lower() == "nosniff":
            result.score += NOSNIFF_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "MIME sniffing protection enabled",
                "X-Content-Type-Options: nosniff",
            )
        else:
            result.recommend(
                Priority.MEDIUM,
                "Add X-Content-Type-Options",
                "Prevents browsers from MIME-sniffing responses",
                "Add header: X-Content-Type-Options: nosniff",
            )

        if csp:
            result.score += CSP_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "Content Security Policy configured",
                "CSP helps prevent XSS and data injection attacks",
            )
        else:
            result.recommend(
                Priority.HIGH,
                "Add Content Security Policy",
                "CSP is the most effective protection against XSS attacks",
                "Start with: Content-Security-Policy: default-src 'self'; script-src 'self'",
            )

        xxss = headers.get("x-xss-protection")
        if xxss:
            result.score += XSS_PROTECTION_POINTS
            result.add_finding(FindingType.SUCCESS, "XSS filter enabled", f"X-XSS-Protection: {xxss}")

        referrer_policy = headers.get("referrer-policy")
        if referrer_policy:
            result.score += REFERRER_POLICY_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "Referrer policy configured",
                f"Referrer-Policy: {referrer_policy}",
            )
        else:
            result.recommend(
                Priority.LOW,
                "Add Referrer-Policy",
                "Controls how much referrer information is shared",
                "Add header: Referrer-Policy: strict-origin-when-cross-origin",
            )

        if headers.get("permissions-policy") or headers.get("feature-policy"):
            result.score += PERMISSIONS_POLICY_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "Permissions Policy configured",
                "Controls browser feature access",
            )
        else:
            result.recommend(
                Priority.LOW,
                "Add Permissions-Policy",
                "Control which browser features your site can use",
                "Add header: Permissions-Policy: geolocation=(), microphone=(), camera=()",
            )

    def _check_content(self, snapshot: PageSnapshot, is_https: bool, result: PhaseResult) -> None:
        handlers = _INLINE_HANDLER_RE.findall(snapshot.html)
        if len(handlers) > INLINE_HANDLER_LIMIT:
            result.add_finding(
                FindingType.WARNING,
                "Many inline event handlers detected",
                f"{len(handlers)} inline handlers - consider moving to external scripts",
            )

        if is_https and "http://" in snapshot.html:
            http_resources = _HTTP_RESOURCE_RE.findall(snapshot.html)
            if http_resources:
                result.add_finding(
                    FindingType.WARNING,
                    "Potential mixed content",
                    f"Found {len(http_resources)} HTTP resources on HTTPS page",
                )
                result.recommend(
                    Priority.MEDIUM,
                    "Fix mixed content",
                    "HTTP resources on HTTPS pages cause security warnings",
                    "Update all resource URLs to use HTTPS",
                )
