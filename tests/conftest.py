# File: tests/conftest.py
import asyncio
from typing import Callable, Dict, Optional, Tuple

import pytest

from ua_scout.config import ScannerConfig
from ua_scout.crawler.models import FetchOutcome, Form, FormField, OutcomeKind, Page


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


@pytest.fixture()
def basic_config() -> ScannerConfig:
    """
    Return a ScannerConfig tuned for local test servers.
    """
    return ScannerConfig(
        user_agent="TestAgent/1.0",
        workers=4,
        time_budget=5.0,
        max_pages=53,
        request_timeout=5.0,
        poll_interval=0.02,
    )


@pytest.fixture()
def make_page() -> Callable[..., Page]:
    """
    Factory for Page objects; ``forms`` takes (action, [(name, type), ...]) pairs.
    """

    def _make(url="http://example.com/", title="Example", links=(), forms=(), images=()):
        return Page(
            url=url,
            title=title,
            links=tuple(links),
            forms=tuple(
                Form(action=action, fields=tuple(FormField(n, t) for n, t in fields))
                for action, fields in forms
            ),
            image_urls=tuple(images),
        )

    return _make


class FakeFetcher:
    """
    Stands in for Fetcher in worker-pool tests.

    ``plan`` maps URL -> (delay seconds, outcome kind); unknown URLs are fast pages.
    """

    def __init__(self, plan: Optional[Dict[str, Tuple[float, OutcomeKind]]] = None) -> None:
        self.plan = plan or {}
        self.calls: list[str] = []

    async def fetch(self, url: str) -> FetchOutcome:
        self.calls.append(url)
        delay, kind = self.plan.get(url, (0.0, OutcomeKind.PAGE))
        await asyncio.sleep(delay)
        if kind is OutcomeKind.PAGE:
            return FetchOutcome(url, kind, page=Page(url=url), status=200, elapsed=delay)
        if kind is OutcomeKind.HTTP_ERROR:
            return FetchOutcome(url, kind, status=500)
        return FetchOutcome(url, kind, error="boom")


@pytest.fixture()
def fake_fetcher() -> Callable[..., FakeFetcher]:
    return FakeFetcher
