"""Report rendering: Markdown with YAML frontmatter, JSON, and console text."""

import json

from .models import FindingType, ScanResult

_FINDING_ICONS = {
    FindingType.SUCCESS: "✅",
    FindingType.WARNING: "⚠️",
    FindingType.ERROR: "❌",
}


def format_frontmatter(result: ScanResult) -> str:
    """Generate YAML frontmatter for a report."""
    lines = [
        "---",
        f"url: \"{_escape_yaml(result.url)}\"",
        f"score: {result.score}",
        f"max_score: {result.max_score}",
        f"scanned: {result.scanned_at.isoformat()}",
        "tags:",
        "  - launchready",
        "  - readiness-scan",
        "---",
    ]
    return "\n".join(lines)


def format_report(result: ScanResult) -> str:
    """Format a complete Markdown report with frontmatter."""
    parts = [
        format_frontmatter(result),
        "",
        f"# Launch Readiness: {result.url}",
        "",
        f"**Readiness score: {result.score}/{result.max_score}**",
        "",
    ]

    if result.executive_summary:
        parts.extend(["## Executive Summary", "", result.executive_summary, ""])
    if result.top_priorities:
        parts.extend(["## Top Priorities", ""])
        parts.extend(f"{i}. {item}" for i, item in enumerate(result.top_priorities, 1))
        parts.append("")

    parts.extend(["## Phase Scores", "", "| Phase | Score |", "|---|---|"])
    parts.extend(f"| {p.phase_name} | {p.score}/{p.max_score} |" for p in result.phases)
    parts.append("")

    for phase in result.phases:
        parts.extend([f"## {phase.phase_name} ({phase.score}/{phase.max_score})", ""])
        if phase.findings:
            parts.extend(["### Findings", ""])
            for finding in phase.findings:
                line = f"- {_FINDING_ICONS[finding.type]} {finding.message}"
                if finding.details:
                    line += f": {finding.details}"
                parts.append(line)
            parts.append("")
        if phase.recommendations:
            parts.extend(["### Recommendations", ""])
            for rec in phase.recommendations:
                parts.append(f"- **[{rec.priority.value}] {rec.title}**: {rec.description}")
                parts.append(f"  - {rec.actionable}")
            parts.append("")

    return "\n".join(parts).rstrip() + "\n"


def format_json(result: ScanResult) -> str:
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False) + "\n"


def format_text(result: ScanResult) -> str:
    """Short console summary of the overall and per-phase scores."""
    lines = [f"{result.url}: {result.score}/{result.max_score}"]
    width = max((len(p.phase_name) for p in result.phases), default=0)
    for phase in result.phases:
        errors = sum(1 for f in phase.findings if f.type == FindingType.ERROR)
        flag = f"  ({errors} error{'s' if errors != 1 else ''})" if errors else ""
        lines.append(f"  {phase.phase_name.ljust(width)}  {phase.score:>3}/{phase.max_score}{flag}")
    if result.executive_summary:
        lines.extend(["", f"  {result.executive_summary}"])
    if result.top_priorities:
        lines.append("")
        lines.extend(f"  {i}. {item}" for i, item in enumerate(result.top_priorities, 1))
    return "\n".join(lines) + "\n"


def _escape_yaml(text: str) -> str:
    """Escape special characters for YAML string values."""
    text = text.replace("\\", "\\\\")
    text = text.replace('"', '\\"')
    text = text.replace("\n", " ")
    return text
