"""Utility functions for launchready."""

import math
import re
from urllib.parse import urlparse

from bs4 import BeautifulSoup

from .exceptions import InvalidURLError

_IPV4_RE = re.compile(r"^\d+\.\d+\.\d+\.\d+$")


def slugify(text: str, max_length: int = 80) -> str:
    """Convert text to a filesystem-safe slug."""
    text = text.lower().strip()
    text = re.sub(r"[^\w\s-]", "", text)
    text = re.sub(r"[\s_]+", "-", text)
    text = re.sub(r"-+", "-", text)
    text = text.strip("-")
    if len(text) > max_length:
        text = text[:max_length].rstrip("-")
    return text or "untitled"


def normalize_url(value: str) -> str:
    """Trim the input and prepend https:// when no scheme is given."""
    value = (value or "").strip()
    if not value:
        return ""
    if value.startswith(("http://", "https://")):
        return value
    return f"https://{value}"


def validate_url(value: str) -> str:
    """Normalize a user-supplied address and check it is a usable http(s) URL."""
    url = normalize_url(value)
    if not url:
        raise InvalidURLError("Please enter a URL")
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError as e:
        raise InvalidURLError(f"Invalid URL {value!r}: {e}") from e
    if parsed.scheme not in ("http", "https") or not hostname:
        raise InvalidURLError(
            f"Invalid URL {value!r}. Use a full address such as https://example.com"
        )
    if " " in parsed.netloc:
        raise InvalidURLError(f"Invalid URL {value!r}: host contains whitespace")
    return url


def is_ipv4(hostname: str) -> bool:
    return bool(_IPV4_RE.match(hostname))


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def html_to_text(html: str, max_chars: int = 4000) -> str:
    """Visible text of an HTML document with whitespace collapsed."""
    soup = BeautifulSoup(html, "html.parser")
    for tag in soup(["script", "style"]):
        tag.decompose()
    text = " ".join(soup.get_text(" ", strip=True).split())
    return text[:max_chars]


def derive_report_name(url: str) -> str:
    """Derive a report file stem from the scanned URL."""
    parsed = urlparse(url)
    host = parsed.hostname or url
    path = parsed.path.strip("/").replace("/", " ")
    name = f"{host} {path}" if path else host
    return slugify(name.replace(".", "-"))
