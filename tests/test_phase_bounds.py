import httpx
import pytest

from launchready.phases import PHASE_CLASSES

from test_performance_security import ALL_SECURITY_HEADERS

VENDOR_SCRIPTS = [
    "https://www.googletagmanager.com/gtag/js?id=G-1",
    "https://us.posthog.com/static/array.js",
    "https://plausible.io/js/script.js",
    "https://cdn.mxpnl.com/mixpanel.com/libs/mixpanel-2-latest.min.js",
    "https://cdn.segment.com/analytics.js/v1/key/analytics.min.js",
    "https://cdn.heapanalytics.com/js/heap-1.js",
    "https://cdn.amplitude.com/libs/amplitude-8.js",
    "https://static.hotjar.com/c/hotjar-1.js",
    "https://cdn.usefathom.com/script.js",
    "https://browser.sentry-cdn.com/7.0.0/bundle.min.js",
    "https://d2wy8f7a9ursnm.cloudfront.net/v7/bugsnag.min.js",
    "https://cdn.rollbar.com/rollbarjs/refs/tags/v2.26.1/rollbar.min.js",
    "https://cdn.logrocket.io/logrocket.min.js",
    "https://www.datadoghq-browser-agent.com/datadog-rum.js",
    "https://js-agent.newrelic.com/nr-loader.js",
    "https://www.clarity.ms/tag/abc",
    "https://edge.fullstory.com/s/fs.js",
    "/_vercel/insights/script.js",
    "/_vercel/speed-insights/script.js",
]

MAXIMAL_META = {
    "description": "d" * 155,
    "keywords": "launch, checklist",
    "og:title": "Acme",
    "og:description": "Launch checklists",
    "og:image": "https://example.com/og.png",
    "og:url": "https://example.com",
    "og:type": "website",
    "og:site_name": "Acme",
    "og:image:width": "1200",
    "og:image:height": "630",
    "twitter:card": "summary_large_image",
    "twitter:site": "@acme",
}

MAXIMAL_HTML = (
    "<html><head><link rel=\"sitemap\" href=\"/sitemap.xml\"></head><body>"
    "<h1>Ship your product faster today</h1>"
    "<a href=\"/signup\">Get started</a> <section>Testimonials, 5 stars</section>"
    "<script>gtag('config', 'G-1'); posthog.init('k'); Sentry.init({}); DD_RUM.init({})</script>"
    "</body></html>"
)


def generous_handler(request):
    if request.method == "HEAD":
        return httpx.Response(200, headers=ALL_SECURITY_HEADERS)
    if request.url.path == "/robots.txt":
        return httpx.Response(200, text="User-agent: *")
    return httpx.Response(404)


@pytest.mark.parametrize("scorer_cls", PHASE_CLASSES, ids=lambda cls: cls.__name__)
class TestPhaseScoreBounds:
    def test_empty_page(self, scorer_cls, make_context, loaded_snapshot):
        snapshot = loaded_snapshot(html="", title="")
        result = scorer_cls(make_context()).score("https://example.com", snapshot)

        assert result.max_score == 100
        assert 0 <= result.score <= 100

    def test_maximal_page(self, scorer_cls, make_context, loaded_snapshot):
        snapshot = loaded_snapshot(
            html=MAXIMAL_HTML,
            title="Acme Launch Checklists - Ship Your Product With Confide",
            meta_tags=MAXIMAL_META,
            scripts=VENDOR_SCRIPTS,
        )
        result = scorer_cls(make_context(handler=generous_handler)).score(
            "https://www.example.com", snapshot
        )

        assert result.max_score == 100
        assert 0 <= result.score <= 100
