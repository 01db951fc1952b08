"""Social Media phase: Open Graph and Twitter Card metadata."""

from ..models import FindingType, PageSnapshot, PhaseResult, Priority
from .base import PhaseScorer

OG_CORE_POINTS = 40
OG_EXTENDED_POINTS = 10
OG_SITE_NAME_POINTS = 5
TWITTER_CARD_POINTS = 30
TWITTER_SITE_POINTS = 5
ABSOLUTE_IMAGE_POINTS = 5
IMAGE_DIMENSIONS_POINTS = 5


class SocialScorer(PhaseScorer):
    @property
    def phase_name(self) -> str:
        return "Social Media"

    def _evaluate(self, url: str, snapshot: PageSnapshot, result: PhaseResult) -> None:
        if not snapshot.loaded:
            self._report_unloaded(snapshot, result)
            return

        meta = snapshot.meta_tags
        og_title = meta.get("og:title")
        og_image = meta.get("og:image")

        self._check_open_graph(meta, result)
        self._check_twitter(meta, og_title, og_image, result)
        if og_image:
            self._check_image(meta, og_image, result)
        self._assess(result)

    def _check_open_graph(self, meta, result: PhaseResult) -> None:
        missing = [tag for tag in ("og:title", "og:description", "og:image") if not meta.get(tag)]
        if missing:
            result.add_finding(
                FindingType.ERROR,
                "Missing core Open Graph tags",
                f"Missing: {', '.join(missing)}",
            )
            result.recommend(
                Priority.HIGH,
                "Add Open Graph tags",
                "Open Graph tags control how your site appears when shared on "
                "Facebook, LinkedIn, and other platforms",
                "Add og:title, og:description, and og:image to your page metadata",
            )
            return

        result.score += OG_CORE_POINTS
        result.add_finding(
            FindingType.SUCCESS,
            "Core Open Graph tags present",
            "og:title, og:description, and og:image are configured",
        )
        if meta.get("og:url") and meta.get("og:type"):
            result.score += OG_EXTENDED_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "Extended Open Graph tags present",
                "og:url and og:type enhance social sharing",
            )
        if meta.get("og:site_name"):
            result.score += OG_SITE_NAME_POINTS

    def _check_twitter(self, meta, og_title, og_image, result: PhaseResult) -> None:
        card = meta.get("twitter:card")
        title = meta.get("twitter:title") or og_title
        image = meta.get("twitter:image") or og_image

        if not (card and title and image):
            result.add_finding(
                FindingType.WARNING,
                "Twitter Card tags missing or incomplete",
                "Twitter will fall back to Open Graph tags, but explicit Twitter "
                "tags provide better control",
            )
            result.recommend(
                Priority.MEDIUM,
                "Add Twitter Card tags",
                "Twitter Cards enhance how your content appears when shared on Twitter/X",
                "Add twitter:card (summary_large_image), twitter:title, "
                "twitter:description, and twitter:image",
            )
            return

        result.score += TWITTER_CARD_POINTS
        result.add_finding(FindingType.SUCCESS, "Twitter Card tags present", f"Card type: {card}")

        site = meta.get("twitter:site")
        if site:
            result.score += TWITTER_SITE_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "Twitter site attribution configured",
                f"@{site.replace('@', '', 1)}",
            )

    def _check_image(self, meta, og_image: str, result: PhaseResult) -> None:
        if og_image.startswith(("http://", "https://")):
            result.score += ABSOLUTE_IMAGE_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "Open Graph image URL is absolute",
                "Image will display correctly when shared",
            )
        else:
            result.add_finding(
                FindingType.WARNING,
                "Open Graph image URL is relative",
                "Use absolute URLs (https://...) for reliable social sharing",
            )
            result.recommend(
                Priority.MEDIUM,
                "Use absolute image URLs",
                "Relative image URLs may not work when content is shared",
                "Change og:image to use full https:// URL",
            )

        width = meta.get("og:image:width")
        height = meta.get("og:image:height")
        if width and height:
            result.score += IMAGE_DIMENSIONS_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "Image dimensions specified",
                f"{width}x{height} - helps platforms render faster",
            )

    @staticmethod
    def _assess(result: PhaseResult) -> None:
        if result.score >= 80:
            result.add_finding(
                FindingType.SUCCESS,
                "Excellent social media optimization",
                "Your site will look great when shared on social platforms",
            )
        elif result.score >= 50:
            result.add_finding(
                FindingType.WARNING,
                "Good social media setup, but could be improved",
                "Consider adding missing tags for better social sharing",
            )
        elif result.score > 0:
            result.add_finding(
                FindingType.WARNING,
                "Basic social media tags present",
                "Add more tags to improve how your site appears when shared",
            )
