"""Page snapshot fetching through a remote headless browser or Firecrawl."""

from typing import Optional

from bs4 import BeautifulSoup
from firecrawl import FirecrawlApp
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from .config import Config
from .exceptions import FetchError
from .log import get_logger
from .models import PageSnapshot

logger = get_logger(__name__)

BROWSERLESS_ENDPOINT = "wss://chrome.browserless.io?token={token}"
USER_AGENT = "LaunchReady Scanner Bot/1.0"


def parse_snapshot(html: str, title: Optional[str] = None) -> PageSnapshot:
    """Build a loaded snapshot from rendered HTML.

    Meta tags are keyed by their name (or property) attribute; only tags with
    both a key and content are kept and later tags overwrite earlier ones.
    Script sources keep document order and duplicates.
    """
    soup = BeautifulSoup(html, "html.parser")

    meta_tags: dict[str, str] = {}
    for meta in soup.find_all("meta"):
        key = meta.get("name") or meta.get("property") or ""
        content = meta.get("content") or ""
        if key and content:
            meta_tags[key] = content

    scripts = [script["src"] for script in soup.find_all("script", src=True) if script["src"]]

    if title is None:
        title = soup.title.get_text().strip() if soup.title else ""

    return PageSnapshot(
        html=html,
        title=title,
        meta_tags=meta_tags,
        scripts=scripts,
        loaded=True,
    )


def _fetch_with_browserless(url: str, config: Config) -> PageSnapshot:
    if not config.browserless_api_key:
        raise FetchError("Browserless API key not configured")

    endpoint = BROWSERLESS_ENDPOINT.format(token=config.browserless_api_key)
    try:
        with sync_playwright() as p:
            browser = p.chromium.connect(endpoint, timeout=config.connect_timeout * 1000)
            try:
                context = browser.new_context(user_agent=USER_AGENT)
                page = context.new_page()
                page.goto(
                    url,
                    wait_until="domcontentloaded",
                    timeout=config.navigation_timeout * 1000,
                )
                html = page.content()
                title = page.title()
            finally:
                browser.close()
    except PlaywrightError as e:
        raise FetchError(f"Failed to fetch page: {e}") from e

    return parse_snapshot(html, title=title)


def _fetch_with_firecrawl(url: str, config: Config) -> PageSnapshot:
    if not config.firecrawl_api_key:
        raise FetchError("Firecrawl API key not configured")

    app = FirecrawlApp(api_key=config.firecrawl_api_key)
    try:
        result = app.scrape(
            url,
            formats=["rawHtml"],
            timeout=int(config.navigation_timeout * 1000),
        )
    except Exception as e:
        raise FetchError(f"Failed to fetch page: {e}") from e

    if not result:
        raise FetchError(f"Empty response from Firecrawl for {url}")

    html = getattr(result, "raw_html", None) if not isinstance(result, dict) else result.get("rawHtml")
    if not html:
        raise FetchError(f"No HTML returned for {url}")

    return parse_snapshot(html)


def fetch_page(url: str, config: Config) -> PageSnapshot:
    """Fetch url and return its snapshot.

    Never raises for service or network failures: the returned snapshot has
    loaded=False and a descriptive error instead.
    """
    logger.info("Fetching %s via %s", url, config.snapshot_backend)
    fetch = _fetch_with_firecrawl if config.snapshot_backend == "firecrawl" else _fetch_with_browserless
    try:
        snapshot = fetch(url, config)
    except FetchError as e:
        logger.warning("Snapshot unavailable for %s: %s", url, e)
        return PageSnapshot.unavailable(str(e))

    logger.debug(
        "Fetched %s: %d bytes, %d meta tags, %d scripts",
        url,
        len(snapshot.html),
        len(snapshot.meta_tags),
        len(snapshot.scripts),
    )
    return snapshot
