"""Write scan reports to the filesystem."""

from pathlib import Path

from .formatter import format_json, format_report
from .models import ScanResult
from .utils import derive_report_name


def render(result: ScanResult, fmt: str) -> str:
    return format_json(result) if fmt == "json" else format_report(result)


def write_report(result: ScanResult, output: Path, fmt: str = "markdown") -> Path:
    """Write the report for result and return the file written.

    When output is an existing directory the file is named after the
    scanned URL; otherwise output is the file path itself.
    """
    if output.is_dir():
        suffix = ".json" if fmt == "json" else ".md"
        output = output / (derive_report_name(result.url) + suffix)
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(render(result, fmt), encoding="utf-8")
    return output
