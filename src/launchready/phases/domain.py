"""Domain & DNS phase."""

from urllib.parse import urlparse

from ..models import FindingType, PageSnapshot, PhaseResult, Priority
from ..utils import is_ipv4
from .base import PhaseScorer

HTTPS_POINTS = 30
VALID_DOMAIN_POINTS = 20
WWW_POINTS = 15
NO_WWW_POINTS = 10
REACHABLE_POINTS = 35


class DomainScorer(PhaseScorer):
    @property
    def phase_name(self) -> str:
        return "Domain & DNS"

    def _evaluate(self, url: str, snapshot: PageSnapshot, result: PhaseResult) -> None:
        try:
            parsed = urlparse(url)
            hostname = parsed.hostname
        except ValueError as e:
            self._invalid(result, str(e))
            return
        if not parsed.scheme or not hostname:
            self._invalid(result, f"Cannot parse a scheme and host from {url!r}")
            return

        if parsed.scheme == "https":
            result.score += HTTPS_POINTS
            result.add_finding(
                FindingType.SUCCESS, "Site uses HTTPS", "SSL/TLS encryption is active"
            )
        else:
            result.add_finding(
                FindingType.ERROR,
                "Site does not use HTTPS",
                "Unencrypted connection is insecure",
            )
            result.recommend(
                Priority.HIGH,
                "Enable HTTPS",
                "Secure your site with SSL/TLS certificate",
                "Use Let's Encrypt or your hosting provider's SSL",
            )

        if "localhost" not in hostname and not is_ipv4(hostname):
            result.score += VALID_DOMAIN_POINTS
            result.add_finding(FindingType.SUCCESS, "Valid domain name", f"Domain: {hostname}")

        if hostname.startswith("www."):
            result.score += WWW_POINTS
            result.add_finding(FindingType.SUCCESS, "WWW subdomain configured")
        else:
            result.score += NO_WWW_POINTS
            result.recommend(
                Priority.MEDIUM,
                "Configure WWW redirect",
                "Ensure both www and non-www versions work",
                "Set up DNS records and redirects for both variants",
            )

        # A URL that parsed is assumed reachable; the snapshot phases report load failures.
        result.score += REACHABLE_POINTS

    @staticmethod
    def _invalid(result: PhaseResult, details: str) -> None:
        result.score = 0
        result.add_finding(FindingType.ERROR, "Invalid URL format", details)
