"""Content Quality phase.

With an LLM configured, the visible page text is critiqued by the model;
otherwise, or when the model call or its reply fails, a deterministic
pattern analysis scores calls-to-action, social proof and headlines.
"""

import re

from bs4 import BeautifulSoup

from ..exceptions import LLMError, ResponseParseError
from ..llm.parsing import ContentAnalysis, parse_json_response
from ..log import get_logger
from ..models import FindingType, PageSnapshot, PhaseResult, Priority
from ..utils import html_to_text
from .base import PhaseScorer

logger = get_logger(__name__)

MAX_CONTENT_CHARS = 4000
MAX_OUTPUT_TOKENS = 800
MAX_IMPROVEMENTS = 3

CTA_POINTS = 25
SOCIAL_PROOF_POINTS = 20
TITLE_POINTS = 15
TITLE_RANGE = (30, 70)
HEADLINE_POINTS = 15
HEADLINE_MIN_CHARS = 10
BASE_POINTS = 15
FALLBACK_FLOOR = 35

CTA_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in (
        r"sign\s*up",
        r"get\s*started",
        r"try\s*(it\s*)?free",
        r"start\s*(your\s*)?(free\s*)?trial",
        r"book\s*(a\s*)?demo",
        r"contact\s*us",
        r"learn\s*more",
        r"buy\s*now",
        r"subscribe",
    )
]

SOCIAL_PROOF_PATTERNS = [
    re.compile(p, re.IGNORECASE)
    for p in (
        r"testimonial",
        r"review",
        r"customer",
        r"trusted\s*by",
        r"used\s*by",
        r"\d+\s*(k|\+)?\s*(users|customers|companies)",
        r"as\s*seen\s*(on|in)",
        r"rating",
        r"stars?",
    )
]


class ContentScorer(PhaseScorer):
    @property
    def phase_name(self) -> str:
        return "Content Quality"

    def _system_prompt(self) -> str:
        return (
            "You are a landing page optimization expert. Analyze the provided page "
            "content and return a JSON object with:\n"
            "- score: number 0-100 (overall content quality)\n"
            "- valueProposition: { clear: boolean, message: string }\n"
            "- headline: { effective: boolean, feedback: string }\n"
            "- cta: { present: boolean, clear: boolean, feedback: string }\n"
            "- socialProof: { present: boolean, type: string }\n"
            '- readability: { score: "good"|"fair"|"poor", feedback: string }\n'
            '- improvements: array of { priority: "high"|"medium"|"low", issue: string, fix: string }\n'
            "Be concise. Return only valid JSON."
        )

    def _user_prompt(self, snapshot: PageSnapshot) -> str:
        text = html_to_text(snapshot.html, max_chars=MAX_CONTENT_CHARS)
        description = snapshot.meta_tags.get("description") or "None"
        return (
            "Analyze this landing page content:\n\n"
            f"Title: {snapshot.title}\n"
            f"Description: {description}\n\n"
            f"Content:\n{text}"
        )

    def _evaluate(self, url: str, snapshot: PageSnapshot, result: PhaseResult) -> None:
        if not snapshot.loaded:
            self._report_unloaded(snapshot, result)
            return

        llm = self._context.llm
        if llm is None:
            logger.info("No LLM configured, using pattern analysis")
            self._pattern_analysis(snapshot, result)
            return

        try:
            reply = llm.generate(
                self._system_prompt(),
                self._user_prompt(snapshot),
                max_output_tokens=MAX_OUTPUT_TOKENS,
            )
            analysis = parse_json_response(reply, ContentAnalysis)
        except (LLMError, ResponseParseError) as e:
            logger.warning("LLM content analysis unavailable for %s: %s", url, e)
            self._pattern_analysis(snapshot, result)
            return

        self._apply_analysis(analysis, result)

    def _apply_analysis(self, analysis: ContentAnalysis, result: PhaseResult) -> None:
        result.score = analysis.score

        vp = analysis.value_proposition
        if vp and vp.clear:
            result.add_finding(FindingType.SUCCESS, "Clear value proposition", vp.message or None)
        else:
            result.add_finding(
                FindingType.WARNING,
                "Value proposition unclear",
                (vp.message if vp else "") or "Visitors may not understand what you offer",
            )
            result.recommend(
                Priority.HIGH,
                "Clarify your value proposition",
                "Visitors should instantly understand what you offer",
                "Lead with the main benefit in your headline",
            )

        headline = analysis.headline
        if headline and headline.effective:
            result.add_finding(FindingType.SUCCESS, "Effective headline", headline.feedback or None)
        else:
            result.add_finding(
                FindingType.WARNING,
                "Headline needs work",
                (headline.feedback if headline else "") or "Could be more compelling",
            )

        cta = analysis.cta
        if cta and cta.present and cta.clear:
            result.add_finding(FindingType.SUCCESS, "Clear call-to-action", cta.feedback or None)
        elif cta and cta.present:
            result.add_finding(FindingType.WARNING, "CTA could be clearer", cta.feedback or None)
        else:
            result.add_finding(
                FindingType.ERROR, "Missing call-to-action", "No clear next step for visitors"
            )
            result.recommend(
                Priority.HIGH,
                "Add clear call-to-action",
                "Every page needs a clear next step",
                "Add prominent action buttons above the fold",
            )

        proof = analysis.social_proof
        if proof and proof.present:
            result.add_finding(FindingType.SUCCESS, "Social proof present", f"Type: {proof.type}")
        else:
            result.recommend(
                Priority.MEDIUM,
                "Add social proof",
                "Testimonials and trust signals increase conversions",
                "Add customer quotes, logos, or metrics",
            )

        readability = analysis.readability
        grade = readability.score if readability and readability.score else "unknown"
        result.add_finding(
            FindingType.SUCCESS if grade == "good" else FindingType.WARNING,
            f"Readability: {grade}",
            readability.feedback if readability else "",
        )

        for improvement in analysis.improvements[:MAX_IMPROVEMENTS]:
            result.recommend(
                improvement.priority,
                improvement.issue,
                improvement.fix,
                improvement.fix,
            )

    def _pattern_analysis(self, snapshot: PageSnapshot, result: PhaseResult) -> None:
        score = 0
        html = snapshot.html
        title = snapshot.title or ""

        if any(p.search(html) for p in CTA_PATTERNS):
            score += CTA_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "Call-to-action detected",
                "Page has clear user action prompts",
            )
        else:
            result.recommend(
                Priority.HIGH,
                "Add clear call-to-action",
                "Every landing page needs a clear next step for visitors",
                'Add prominent "Get Started", "Sign Up", or "Learn More" buttons',
            )

        if any(p.search(html) for p in SOCIAL_PROOF_PATTERNS):
            score += SOCIAL_PROOF_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "Social proof detected",
                "Testimonials, reviews, or trust indicators found",
            )
        else:
            result.recommend(
                Priority.MEDIUM,
                "Add social proof",
                "Include testimonials, logos, or metrics to build trust",
                "Feature 3-5 customer quotes, company logos, or usage stats",
            )

        low, high = TITLE_RANGE
        if low <= len(title) <= high:
            score += TITLE_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "Page title is well-sized",
                f"{len(title)} characters - good for readability",
            )

        h1 = BeautifulSoup(html, "html.parser").find("h1")
        headline = h1.get_text(" ", strip=True) if h1 else ""
        if len(headline) > HEADLINE_MIN_CHARS:
            score += HEADLINE_POINTS
            result.add_finding(
                FindingType.SUCCESS,
                "Main headline (H1) present",
                f'"{headline[:50]}{"..." if len(headline) > 50 else ""}"',
            )
        else:
            result.recommend(
                Priority.HIGH,
                "Add compelling headline",
                "Your H1 should clearly communicate your value proposition",
                'Write a headline that answers "What do you offer and why should I care?"',
            )

        score += BASE_POINTS
        result.recommend(
            Priority.HIGH,
            "Write compelling copy",
            "Clear value proposition above the fold",
            "Answer: What problem do you solve? Why should I care?",
        )
        result.score = max(score, FALLBACK_FLOOR)
