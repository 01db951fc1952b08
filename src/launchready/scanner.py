"""Readiness scan pipeline: one snapshot, eight phases, one normalized score."""

import concurrent.futures
import time
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

import httpx

from .config import Config, load_config
from .exceptions import FetchError
from .fetcher import fetch_page
from .llm import get_llm_provider
from .llm.base import LLMProvider
from .log import get_logger
from .models import PageSnapshot, PhaseResult, ScanResult
from .phases import PhaseScorer, ScanContext, build_phases
from .summary import SummaryGenerator
from .utils import round_half_up

logger = get_logger(__name__)

Fetcher = Callable[[str, Config], PageSnapshot]


def normalize_score(total: int, max_total: int) -> int:
    """Scale total/max_total to 0-100, rounding halves up."""
    if max_total <= 0:
        return 0
    return round_half_up(100 * total / max_total)


class Scanner:
    """Runs the readiness scan for a URL.

    The snapshot is fetched once and handed to every phase; each phase makes
    only its own secondary requests through the shared HTTP client.
    """

    def __init__(
        self,
        config: Config,
        fetcher: Fetcher = fetch_page,
        http: Optional[httpx.Client] = None,
        llm: Optional[LLMProvider] = None,
    ):
        self._config = config
        self._fetcher = fetcher
        self._http = http
        self._llm = llm if llm is not None else get_llm_provider(config)

    def scan(self, url: str) -> ScanResult:
        started = time.monotonic()
        logger.info("Starting scan for %s", url)

        snapshot = self._fetch(url)

        with self._http_client() as http:
            context = ScanContext(config=self._config, http=http, llm=self._llm)
            phases = build_phases(context)
            phase_started = time.monotonic()
            if self._config.concurrency == "sequential":
                results = [phase.score(url, snapshot) for phase in phases]
            else:
                results = self._run_parallel(phases, url, snapshot)
            logger.info(
                "All %d phases completed in %.0fms",
                len(results),
                (time.monotonic() - phase_started) * 1000,
            )

        score = normalize_score(
            sum(r.score for r in results),
            sum(r.max_score for r in results),
        )

        executive_summary = None
        top_priorities = None
        if self._llm is not None:
            summary = SummaryGenerator(self._llm).generate(url, score, results)
            if summary is not None:
                executive_summary = summary.summary
                top_priorities = summary.priorities

        logger.info(
            "Scan completed in %.0fms - Score: %d/100",
            (time.monotonic() - started) * 1000,
            score,
        )
        return ScanResult(
            url=url,
            score=score,
            phases=results,
            executive_summary=executive_summary,
            top_priorities=top_priorities,
        )

    def _fetch(self, url: str) -> PageSnapshot:
        fetch_started = time.monotonic()
        try:
            snapshot = self._fetcher(url, self._config)
        except FetchError as e:
            snapshot = PageSnapshot.unavailable(str(e))
        logger.info(
            "Page fetch %s in %.0fms",
            "completed" if snapshot.loaded else "failed",
            (time.monotonic() - fetch_started) * 1000,
        )
        return snapshot

    @contextmanager
    def _http_client(self) -> Iterator[httpx.Client]:
        if self._http is not None:
            yield self._http
            return
        with httpx.Client() as client:
            yield client

    def _run_parallel(
        self,
        phases: list[PhaseScorer],
        url: str,
        snapshot: PageSnapshot,
    ) -> list[PhaseResult]:
        """Fan the phases out on a thread pool and collect them in report order.

        All phases share one deadline; a phase that misses it is reported as
        timed out. Exceptions raised by a phase propagate.
        """
        timeout = self._config.phase_timeout
        executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=len(phases), thread_name_prefix="launchready-phase"
        )
        try:
            futures = [executor.submit(phase.score, url, snapshot) for phase in phases]
            deadline = time.monotonic() + timeout
            results = []
            for phase, future in zip(phases, futures):
                remaining = max(0.0, deadline - time.monotonic())
                try:
                    results.append(future.result(timeout=remaining))
                except concurrent.futures.TimeoutError:
                    logger.warning("Phase %s timed out after %.0fs", phase.phase_name, timeout)
                    results.append(phase.timed_out(timeout))
            return results
        finally:
            executor.shutdown(wait=False, cancel_futures=True)


def scan_url(url: str, config: Optional[Config] = None) -> ScanResult:
    """Scan url with the environment's configuration."""
    return Scanner(config or load_config()).scan(url)
