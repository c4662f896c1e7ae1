from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set

from aiohttp import ClientSession, ClientTimeout

from ua_scout.analyzer import CrawlContext, analyze_page
from ua_scout.config import ScannerConfig
from ua_scout.crawler.fetcher import Fetcher
from ua_scout.crawler.models import OutcomeKind, RoundResult
from ua_scout.crawler.pool import FetchRound, cancel_tasks
from ua_scout.crawler.urls import Origin, normalize_url
from ua_scout.software import FormSignal

__all__ = ("AsyncCrawler", "CrawlResult", "SeedFetchError")


class SeedFetchError(Exception):
    """The seed address could not be retrieved as an HTML page."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"could not retrieve {url}: {reason}")
        self.url = url
        self.reason = reason


@dataclass(slots=True)
class CrawlResult:
    """Everything the report needs from one crawl."""
    host: str
    processed: Set[str] = field(default_factory=set)
    failed: Set[str] = field(default_factory=set)
    forms: Dict[str, FormSignal] = field(default_factory=dict)
    samples: List[float] = field(default_factory=list)
    rounds: int = 0


class AsyncCrawler:
    """Round-based crawler bounded by a deadline and a page cap."""

    def __init__(self, seed: str, config: ScannerConfig, clock=time.monotonic) -> None:
        self.seed = seed
        self.config = config
        self.clock = clock
        self.session: Optional[ClientSession] = None
        self.logger = logging.getLogger("UAScout")
        self.context: Optional[CrawlContext] = None
        self._referer: Optional[str] = None
        self._stragglers: List[asyncio.Task[None]] = []

    async def __aenter__(self) -> AsyncCrawler:
        self.session = ClientSession(
            timeout=ClientTimeout(total=self.config.request_timeout),
            headers={"User-Agent": self.config.user_agent},
            raise_for_status=False,
        )
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await cancel_tasks(self._stragglers, timeout=1.0)
        self._stragglers.clear()
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> CrawlResult:
        if not self.session:
            raise RuntimeError("Session not initialized")
        deadline = self.clock() + self.config.time_budget
        self.logger.info("Старт обхода: %s", self.seed)
        start = time.monotonic()

        ctx = self.context = await self._start()
        rounds = 0
        progress = True
        while progress:
            progress = False
            queues = ctx.frontier.next_round_batch(self.config.workers)
            if not queues:
                break
            rounds += 1
            result = await self._run_round(ctx, queues, deadline)
            progress = self._merge(ctx, result)
            self.logger.debug(
                "Round %d: %d pages, %d failed, %d attempted",
                rounds, len(result.pages), len(result.failed), len(result.attempted),
            )

        duration = time.monotonic() - start
        self.logger.info(
            "Завершено: %d страниц за %.2f с, %d раундов, %d ошибок",
            len(ctx.frontier.processed), duration, rounds, len(ctx.frontier.failed),
        )
        return CrawlResult(
            host=ctx.origin.host,
            processed=set(ctx.frontier.processed),
            failed=set(ctx.frontier.failed),
            forms=dict(ctx.forms),
            samples=list(ctx.samples),
            rounds=rounds,
        )

    async def _start(self) -> CrawlContext:
        """Fetch the seed (following redirects) and build the crawl context around it."""
        outcome = await Fetcher(self.session).fetch(self.seed, allow_redirects=True)
        if outcome.kind is not OutcomeKind.PAGE or outcome.page is None:
            reason = outcome.error or (f"HTTP {outcome.status}" if outcome.status else "not an HTML page")
            raise SeedFetchError(self.seed, reason)

        page = outcome.page
        seed_url = normalize_url(page.url)
        try:
            origin = Origin.from_url(seed_url)
        except ValueError as exc:
            raise SeedFetchError(self.seed, str(exc)) from exc

        ctx = CrawlContext(origin=origin)
        ctx.frontier.record_distance(seed_url, 0)
        ctx.frontier.mark_processed(seed_url)
        ctx.samples.append(outcome.elapsed)
        self._analyze(ctx, page)
        self._referer = page.canonical_url or page.url
        return ctx

    async def _run_round(self, ctx: CrawlContext, queues: List[List[str]], deadline: float) -> RoundResult:
        fetcher = Fetcher(self.session, referer=self._referer)
        fetch_round = FetchRound(
            queues,
            fetcher,
            processed_count=len(ctx.frontier.processed),
            max_pages=self.config.max_pages,
            deadline=deadline,
            poll_interval=self.config.poll_interval,
            clock=self.clock,
        )
        result = await fetch_round.run()
        self._stragglers.extend(fetch_round.pending)
        return result

    def _merge(self, ctx: CrawlContext, result: RoundResult) -> bool:
        """Apply a closed round to the frontier. Returns True if any page was processed."""
        progress = False
        for url in result.failed:
            ctx.frontier.mark_failed(url)
        for fetched in result.pages:
            ctx.frontier.mark_processed(normalize_url(fetched.page.url))
            self._analyze(ctx, fetched.page)
            progress = True
        ctx.samples.extend(result.samples)
        for url in result.attempted:
            if ctx.frontier.is_unseen(url):
                ctx.frontier.mark_discarded(url)
        return progress

    def _analyze(self, ctx: CrawlContext, page) -> None:
        try:
            analyze_page(ctx, page)
        except Exception as exc:  # the page stays processed either way
            self.logger.warning("Analysis failed for %s: %r", page.url, exc)
