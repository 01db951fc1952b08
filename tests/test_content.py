import json

from conftest import StubLLM, error_messages, recommendation_titles

from launchready.exceptions import LLMError
from launchready.models import FindingType, Priority
from launchready.phases.content import ContentScorer

LANDING_HTML = (
    "<html><head><title>Acme</title><style>body { color: red }</style></head>"
    "<body><h1>Ship your product faster today</h1>"
    '<a href="/signup">Get started</a>'
    "<section>Testimonials from our users</section>"
    "<script>window.secret = 'tracking-code';</script></body></html>"
)
LANDING_TITLE = "Acme - Launch checklists for small teams"

ANALYSIS = {
    "score": 72,
    "valueProposition": {"clear": True, "message": "Launch checklists for small teams"},
    "headline": {"effective": False, "feedback": "Too generic"},
    "cta": {"present": True, "clear": False, "feedback": "Two competing buttons"},
    "socialProof": {"present": False, "type": ""},
    "readability": {"score": "good", "feedback": "Short sentences"},
    "improvements": [
        {"priority": "high", "issue": "Weak headline", "fix": "Lead with the outcome"},
        {"priority": "low", "issue": "Footer clutter", "fix": "Trim footer links"},
        {"priority": "medium", "issue": "No pricing", "fix": "Link to pricing"},
        {"priority": "high", "issue": "Fourth", "fix": "Ignored"},
    ],
}


class TestContentPatternAnalysis:
    def test_landing_page_signals(self, make_context, loaded_snapshot):
        snapshot = loaded_snapshot(html=LANDING_HTML, title=LANDING_TITLE)
        result = ContentScorer(make_context()).score("https://example.com", snapshot)

        assert result.score == 25 + 20 + 15 + 15 + 15
        messages = [f.message for f in result.findings]
        assert "Call-to-action detected" in messages
        assert "Social proof detected" in messages
        assert "Main headline (H1) present" in messages

    def test_bare_page_is_floored(self, make_context, loaded_snapshot):
        snapshot = loaded_snapshot(html="<html><body><p>Hello</p></body></html>")
        result = ContentScorer(make_context()).score("https://example.com", snapshot)

        assert result.score == 35
        titles = recommendation_titles(result)
        assert "Add clear call-to-action" in titles
        assert "Add compelling headline" in titles

    def test_unloaded_snapshot(self, make_context, unloaded_snapshot):
        llm = StubLLM(json.dumps(ANALYSIS))
        result = ContentScorer(make_context(llm=llm)).score("https://example.com", unloaded_snapshot)

        assert result.score == 0
        assert error_messages(result) == ["Failed to load page"]
        assert llm.calls == []


class TestContentLLMAnalysis:
    def test_uses_llm_analysis(self, make_context, loaded_snapshot):
        llm = StubLLM("Here is the analysis:\n```json\n" + json.dumps(ANALYSIS) + "\n```")
        snapshot = loaded_snapshot(
            html=LANDING_HTML,
            title=LANDING_TITLE,
            meta_tags={"description": "Checklists for launches"},
        )
        result = ContentScorer(make_context(llm=llm)).score("https://example.com", snapshot)

        assert result.score == 72
        findings = {f.message: f.type for f in result.findings}
        assert findings["Clear value proposition"] == FindingType.SUCCESS
        assert findings["Headline needs work"] == FindingType.WARNING
        assert findings["CTA could be clearer"] == FindingType.WARNING
        assert findings["Readability: good"] == FindingType.SUCCESS

        improvements = [r for r in result.recommendations if r.title in ("Weak headline", "Footer clutter", "No pricing", "Fourth")]
        assert [r.title for r in improvements] == ["Weak headline", "Footer clutter", "No pricing"]
        assert improvements[1].priority == Priority.LOW
        assert "Add social proof" in recommendation_titles(result)

    def test_prompt_contains_visible_text_only(self, make_context, loaded_snapshot):
        llm = StubLLM(json.dumps(ANALYSIS))
        snapshot = loaded_snapshot(
            html=LANDING_HTML + ("<p>" + "word " * 2000 + "</p>"),
            title=LANDING_TITLE,
        )
        ContentScorer(make_context(llm=llm)).score("https://example.com", snapshot)

        system_prompt, user_prompt, max_tokens = llm.calls[0]
        assert "landing page optimization expert" in system_prompt
        assert max_tokens == 800
        assert "Ship your product faster today" in user_prompt
        assert "tracking-code" not in user_prompt
        assert "color: red" not in user_prompt
        assert "Description: None" in user_prompt
        content = user_prompt.split("Content:\n", 1)[1]
        assert len(content) <= 4000

    def test_missing_cta_is_an_error(self, make_context, loaded_snapshot):
        analysis = dict(ANALYSIS, cta={"present": False})
        llm = StubLLM(json.dumps(analysis))
        result = ContentScorer(make_context(llm=llm)).score(
            "https://example.com", loaded_snapshot(html=LANDING_HTML)
        )

        assert "Missing call-to-action" in error_messages(result)

    def test_out_of_range_score_is_clamped(self, make_context, loaded_snapshot):
        llm = StubLLM(json.dumps(dict(ANALYSIS, score=140)))
        result = ContentScorer(make_context(llm=llm)).score(
            "https://example.com", loaded_snapshot(html=LANDING_HTML)
        )

        assert result.score == 100

    def test_malformed_reply_falls_back_to_patterns(self, make_context, loaded_snapshot):
        llm = StubLLM("I think the page is great {not json")
        snapshot = loaded_snapshot(html=LANDING_HTML, title=LANDING_TITLE)
        result = ContentScorer(make_context(llm=llm)).score("https://example.com", snapshot)

        assert result.score == 90
        assert "Call-to-action detected" in [f.message for f in result.findings]

    def test_reply_without_score_falls_back(self, make_context, loaded_snapshot):
        analysis = {k: v for k, v in ANALYSIS.items() if k != "score"}
        llm = StubLLM(json.dumps(analysis))
        result = ContentScorer(make_context(llm=llm)).score(
            "https://example.com", loaded_snapshot(html="<p>Hello</p>")
        )

        assert result.score == 35

    def test_llm_error_falls_back(self, make_context, loaded_snapshot):
        llm = StubLLM(LLMError("OpenAI API error: timed out"))
        result = ContentScorer(make_context(llm=llm)).score(
            "https://example.com", loaded_snapshot(html="<p>Hello</p>")
        )

        assert result.score == 35
        assert len(llm.calls) == 1

    def test_headline_with_inline_markup(self, make_context, loaded_snapshot):
        snapshot = loaded_snapshot(html="<h1><span>Ship</span> your product faster</h1>")
        result = ContentScorer(make_context()).score("https://example.com", snapshot)

        headline = next(f for f in result.findings if f.message == "Main headline (H1) present")
        assert headline.details == '"Ship your product faster"'
        assert result.score == 35
