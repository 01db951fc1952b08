import json
from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from launchready.cli import main
from launchready.formatter import format_frontmatter, format_report, format_text
from launchready.models import FindingType, PhaseResult, Priority, ScanResult
from launchready.writer import write_report


def make_result(url="https://example.com", score=64):
    seo = PhaseResult(phase_name="SEO Fundamentals", score=55)
    seo.add_finding(FindingType.ERROR, "Missing meta description")
    seo.add_finding(FindingType.SUCCESS, "Page title present", '"Acme"')
    seo.recommend(
        Priority.HIGH,
        "Add meta description",
        "Meta descriptions appear in search results",
        "Add <meta name=\"description\" content=\"...\">",
    )
    domain = PhaseResult(phase_name="Domain & DNS", score=100)
    return ScanResult(
        url=url,
        score=score,
        phases=[domain, seo],
        scanned_at=datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        executive_summary="Close to launch.",
        top_priorities=["Add meta description"],
    )


@pytest.fixture
def scanner():
    with patch("launchready.config.load_dotenv"), patch("launchready.cli.configure_logging"), \
            patch("launchready.cli.Scanner") as scanner_cls:
        scanner_cls.return_value.scan.side_effect = lambda url: make_result(url=url)
        yield scanner_cls.return_value


class TestFormatter:
    def test_frontmatter(self):
        frontmatter = format_frontmatter(make_result(url='https://example.com/?q="x"'))

        assert frontmatter.startswith("---\n")
        assert 'url: "https://example.com/?q=\\"x\\""' in frontmatter
        assert "score: 64" in frontmatter
        assert "scanned: 2026-01-02T03:04:05+00:00" in frontmatter

    def test_markdown_report(self):
        report = format_report(make_result())

        assert "# Launch Readiness: https://example.com" in report
        assert "**Readiness score: 64/100**" in report
        assert "1. Add meta description" in report
        assert "| SEO Fundamentals | 55/100 |" in report
        assert "- ❌ Missing meta description" in report
        assert '- ✅ Page title present: "Acme"' in report
        assert "**[high] Add meta description**" in report

    def test_text_summary(self):
        text = format_text(make_result())

        assert text.splitlines()[0] == "https://example.com: 64/100"
        assert "(1 error)" in text
        assert "Close to launch." in text


class TestWriter:
    def test_directory_output_names_file_after_url(self, tmp_path):
        path = write_report(make_result(url="https://www.example.com/pricing"), tmp_path)

        assert path == tmp_path / "www-example-com-pricing.md"
        assert path.read_text(encoding="utf-8").startswith("---\n")

    def test_json_file_output(self, tmp_path):
        target = tmp_path / "reports" / "scan.json"
        path = write_report(make_result(), target, fmt="json")

        assert path == target
        assert json.loads(target.read_text(encoding="utf-8"))["score"] == 64


class TestCli:
    def test_text_output(self, scanner):
        result = CliRunner().invoke(main, ["example.com"])

        assert result.exit_code == 0
        assert "https://example.com: 64/100" in result.output
        scanner.scan.assert_called_once_with("https://example.com")

    def test_json_output(self, scanner):
        result = CliRunner().invoke(main, ["https://example.com", "--format", "json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["url"] == "https://example.com"
        assert [p["phase_name"] for p in data["phases"]] == ["Domain & DNS", "SEO Fundamentals"]

    def test_only_invalid_urls_exit_2(self, scanner):
        result = CliRunner().invoke(main, ["http://"])

        assert result.exit_code == 2
        scanner.scan.assert_not_called()

    def test_mixed_urls_exit_1(self, scanner):
        result = CliRunner().invoke(main, ["https://example.com", "not a url"])

        assert result.exit_code == 1
        assert scanner.scan.call_count == 1

    def test_output_directory_for_several_urls(self, scanner, tmp_path):
        out = tmp_path / "reports"
        result = CliRunner().invoke(
            main, ["https://a.example.com", "https://b.example.com", "-o", str(out)]
        )

        assert result.exit_code == 0
        assert sorted(p.name for p in out.iterdir()) == ["a-example-com.md", "b-example-com.md"]

    def test_output_path_that_is_a_file_exits_2(self, scanner, tmp_path):
        taken = tmp_path / "reports"
        taken.write_text("not a directory")
        result = CliRunner().invoke(
            main, ["https://a.example.com", "https://b.example.com", "-o", str(taken)]
        )

        assert result.exit_code == 2
        assert "Cannot use" in result.output
        scanner.scan.assert_not_called()

    def test_config_error_exit_2(self, scanner, monkeypatch):
        monkeypatch.setenv("SCAN_CONCURRENCY", "threads")
        result = CliRunner().invoke(main, ["https://example.com"])

        assert result.exit_code == 2
        assert "Configuration error" in result.output
