"""CLI entry point for launchready."""

import sys
from pathlib import Path

import click

from .config import load_config
from .exceptions import ConfigError, InvalidURLError
from .formatter import format_json, format_report, format_text
from .log import configure_logging
from .scanner import Scanner
from .utils import validate_url
from .writer import write_report


@click.command()
@click.argument("urls", nargs=-1, required=True)
@click.option(
    "--format", "fmt",
    type=click.Choice(["text", "markdown", "json"]),
    default="text",
    help="Report format printed to stdout (default: text)",
)
@click.option(
    "--output", "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the report to this file, or into this directory when scanning several URLs",
)
@click.option(
    "--provider",
    type=click.Choice(["openai", "claude"]),
    default=None,
    help="LLM provider (default: openai, or LLM_PROVIDER env var)",
)
@click.option(
    "--model",
    type=str,
    default=None,
    help="LLM model to use (default: gpt-4o-mini or claude-3-5-haiku-latest)",
)
@click.option(
    "--backend",
    type=click.Choice(["browserless", "firecrawl"]),
    default=None,
    help="Page snapshot backend (default: browserless, or SNAPSHOT_BACKEND env var)",
)
@click.option(
    "--sequential",
    is_flag=True,
    default=False,
    help="Run the phases one at a time instead of concurrently",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    default=False,
    help="Enable verbose output",
)
def main(urls, fmt, output, provider, model, backend, sequential, verbose):
    """Scan website(s) for launch readiness.

    Each URL is scored across eight phases (domain, SEO, performance,
    security, analytics, social, content and monitoring) and summarized
    as a single 0-100 readiness score.

    Example: launchready https://example.com
    """
    try:
        config = load_config(
            provider=provider,
            model=model,
            backend=backend,
            sequential=sequential,
            verbose=verbose,
        )
    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(2)

    configure_logging(verbose=config.verbose, log_file=config.log_file or None)

    if verbose:
        click.echo(f"Snapshot backend: {config.snapshot_backend}")
        if config.llm_enabled:
            click.echo(f"LLM: {config.llm_provider} ({config.default_model})")
        else:
            click.echo("LLM: disabled (pattern analysis only)")

    if output is not None and len(urls) > 1:
        try:
            output.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            click.echo(f"Cannot use {output} as the report directory: {e}", err=True)
            sys.exit(2)

    scanner = Scanner(config)
    had_errors = False
    scanned = 0

    for raw_url in urls:
        try:
            url = validate_url(raw_url)
        except InvalidURLError as e:
            click.echo(f"Skipping {raw_url}: {e}", err=True)
            had_errors = True
            continue

        if verbose:
            click.echo(f"\nScanning: {url}")

        result = scanner.scan(url)
        scanned += 1

        if fmt == "json":
            click.echo(format_json(result), nl=False)
        elif fmt == "markdown":
            click.echo(format_report(result), nl=False)
        else:
            click.echo(format_text(result), nl=False)

        if output is not None:
            try:
                path = write_report(result, output, "json" if fmt == "json" else "markdown")
            except OSError as e:
                click.echo(f"  Failed to write report: {e}", err=True)
                had_errors = True
                continue
            click.echo(f"  Wrote report to: {path}", err=True)

    # Exit code
    if scanned == 0:
        sys.exit(2)
    elif had_errors:
        sys.exit(1)
    else:
        sys.exit(0)
