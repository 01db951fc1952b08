"""
Shared fixtures for the launchready test suite.

Network access is never used: secondary HTTP calls go through an
httpx.MockTransport and the LLM is replaced by a scripted provider.
"""

from typing import Callable, Optional

import httpx
import pytest

from launchready.config import Config
from launchready.llm.base import LLMProvider
from launchready.models import FindingType, PageSnapshot
from launchready.phases import ScanContext


class StubLLM(LLMProvider):
    """LLM provider returning canned replies (or raising) in call order."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.calls = []

    def generate(self, system_prompt, user_prompt, max_output_tokens=None):
        self.calls.append((system_prompt, user_prompt, max_output_tokens))
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(system_prompt, user_prompt)
        return reply


def default_handler(request: httpx.Request) -> httpx.Response:
    """HEAD succeeds without security headers; everything else is a 404."""
    if request.method == "HEAD":
        return httpx.Response(200)
    return httpx.Response(404)


def make_http(handler: Optional[Callable] = None) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler or default_handler))


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def make_context(config):
    """Build a ScanContext with a mock HTTP transport and optional LLM."""
    clients = []

    def _make(handler=None, llm=None, cfg=None) -> ScanContext:
        client = make_http(handler)
        clients.append(client)
        return ScanContext(config=cfg or config, http=client, llm=llm)

    yield _make

    for client in clients:
        client.close()


@pytest.fixture
def loaded_snapshot():
    def _make(**kwargs) -> PageSnapshot:
        kwargs.setdefault("html", "<html><head></head><body></body></html>")
        kwargs.setdefault("title", "")
        return PageSnapshot(loaded=True, **kwargs)

    return _make


@pytest.fixture
def unloaded_snapshot() -> PageSnapshot:
    return PageSnapshot.unavailable("Browserless API key not configured")


def error_messages(result):
    return [f.message for f in result.findings if f.type == FindingType.ERROR]


def recommendation_titles(result):
    return [r.title for r in result.recommendations]
