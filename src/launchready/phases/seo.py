"""SEO Fundamentals phase."""

from ..models import FindingType, PageSnapshot, PhaseResult, Priority
from .base import PhaseScorer

TITLE_POINTS = 25
TITLE_LENGTH_BONUS = 10
TITLE_IDEAL = (50, 60)
DESCRIPTION_POINTS = 25
DESCRIPTION_LENGTH_BONUS = 10
DESCRIPTION_IDEAL = (150, 160)
OPEN_GRAPH_POINTS = 20
KEYWORDS_POINTS = 10


class SEOScorer(PhaseScorer):
    @property
    def phase_name(self) -> str:
        return "SEO Fundamentals"

    def _evaluate(self, url: str, snapshot: PageSnapshot, result: PhaseResult) -> None:
        if not snapshot.loaded:
            self._report_unloaded(snapshot, result)
            return

        self._check_title(snapshot.title, result)

        meta = snapshot.meta_tags
        self._check_description(meta.get("description") or meta.get("og:description"), result)

        missing_og = [tag for tag in ("og:title", "og:description", "og:image") if not meta.get(tag)]
        if not missing_og:
            result.score += OPEN_GRAPH_POINTS
            result.add_finding(
                FindingType.SUCCESS, "Open Graph tags present", "Good for social media sharing"
            )
        else:
            result.add_finding(
                FindingType.WARNING,
                "Incomplete Open Graph tags",
                f"Missing: {', '.join(missing_og)}",
            )
            result.recommend(
                Priority.MEDIUM,
                "Add Open Graph tags",
                "Improves how your site appears when shared on social media",
                "Add og:title, og:description, and og:image meta tags",
            )

        if meta.get("keywords"):
            result.score += KEYWORDS_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "Meta keywords present",
                "Keywords can help with topic relevance",
            )

    def _check_title(self, title: str, result: PhaseResult) -> None:
        if not title:
            result.add_finding(
                FindingType.ERROR,
                "Missing page title",
                "Every page should have a unique, descriptive title",
            )
            result.recommend(
                Priority.HIGH,
                "Add page title",
                "Page title is critical for SEO and user experience",
                "Add a <title> tag with 50-60 character description",
            )
            return

        result.score += TITLE_POINTS
        length = len(title)
        low, high = TITLE_IDEAL
        if low <= length <= high:
            result.score += TITLE_LENGTH_BONUS
            result.add_finding(
                FindingType.SUCCESS,
                "Page title is well-optimized",
                f"Title length: {length} characters (ideal: {low}-{high})",
            )
        else:
            result.add_finding(
                FindingType.WARNING,
                f"Page title length is {length} characters",
                f"Ideal length is {low}-{high} characters for SEO",
            )
            result.recommend(
                Priority.HIGH,
                "Optimize page title length",
                f"Page titles should be {low}-{high} characters for best SEO results",
                f"Current: {length} chars. {'Shorten' if length > high else 'Expand'} to {low}-{high} chars.",
            )

    def _check_description(self, description, result: PhaseResult) -> None:
        if not description:
            result.add_finding(
                FindingType.ERROR,
                "Missing meta description",
                "Meta description improves click-through rates from search",
            )
            result.recommend(
                Priority.HIGH,
                "Add meta description",
                "Write compelling meta description (150-160 chars)",
                'Add <meta name="description" content="..."> tag',
            )
            return

        result.score += DESCRIPTION_POINTS
        length = len(description)
        low, high = DESCRIPTION_IDEAL
        if low <= length <= high:
            result.score += DESCRIPTION_LENGTH_BONUS
            result.add_finding(
                FindingType.SUCCESS,
                "Meta description is well-optimized",
                f"Description length: {length} characters (ideal: {low}-{high})",
            )
        else:
            result.add_finding(
                FindingType.WARNING,
                f"Meta description length is {length} characters",
                f"Ideal length is {low}-{high} characters for SEO",
            )
            result.recommend(
                Priority.HIGH,
                "Optimize meta description length",
                f"Meta descriptions should be {low}-{high} characters",
                f"Current: {length} chars. {'Shorten' if length > high else 'Expand'} to {low}-{high} chars.",
            )
