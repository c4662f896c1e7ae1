# ua_scout/crawler/pool.py
"""
Worker pool for a single crawl round.

One task per queue walks its queue in order. Before each fetch it checks the
admission gate (page cap and deadline). Accepted results go into round-local
buffers under one lock. The round closes when every worker is done or the
deadline passes; from then on ``expired`` is set and late results are dropped.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Awaitable, Callable, List, Optional, Protocol, Sequence

from ua_scout.crawler.models import FetchedPage, FetchOutcome, OutcomeKind, RoundResult

logger = logging.getLogger("UAScout")

Clock = Callable[[], float]


class SupportsFetch(Protocol):
    def fetch(self, url: str) -> Awaitable[FetchOutcome]: ...


class FetchRound:
    """Concurrent fetch of one round's queues under a shared admission gate."""

    def __init__(
        self,
        queues: Sequence[Sequence[str]],
        fetcher: SupportsFetch,
        *,
        processed_count: int,
        max_pages: int,
        deadline: float,
        poll_interval: float = 0.05,
        clock: Clock = time.monotonic,
    ) -> None:
        self.queues = [list(q) for q in queues]
        self.fetcher = fetcher
        self.processed_count = processed_count
        self.max_pages = max_pages
        self.deadline = deadline
        self.poll_interval = poll_interval
        self.clock = clock

        self.expired = False
        self._lock = asyncio.Lock()
        self._pages: List[FetchedPage] = []
        self._failed: List[str] = []
        self._samples: List[float] = []
        self._attempted: set[str] = set()
        self._tasks: List[asyncio.Task[None]] = []

    @property
    def pending(self) -> List[asyncio.Task[None]]:
        """Workers still running after the round closed."""
        return [t for t in self._tasks if not t.done()]

    def admits(self) -> bool:
        """Admission gate: room under the page cap and time before the deadline."""
        within_cap = self.processed_count + len(self._pages) + len(self.queues) < self.max_pages
        return within_cap and self.clock() < self.deadline and not self.expired

    async def run(self) -> RoundResult:
        self._tasks = [
            asyncio.create_task(self._worker(i, q), name=f"ua-worker-{i}")
            for i, q in enumerate(self.queues)
        ]
        timed_out = await self._wait()
        async with self._lock:
            self.expired = True
            result = RoundResult(
                pages=list(self._pages),
                failed=list(self._failed),
                attempted=set(self._attempted),
                samples=list(self._samples),
                timed_out=timed_out,
            )
        if timed_out:
            logger.info(
                "Deadline reached with %d worker(s) still fetching; their results are dropped",
                len(self.pending),
            )
        return result

    async def _wait(self) -> bool:
        """Poll until all workers finish or the deadline passes. Returns True on deadline."""
        remaining: set[asyncio.Task[None]] = set(self._tasks)
        while remaining:
            if self.clock() >= self.deadline:
                return True
            _, remaining = await asyncio.wait(remaining, timeout=self.poll_interval)
        return False

    async def _worker(self, index: int, queue: List[str]) -> None:
        for url in queue:
            # the gate only tightens, so once closed the rest of the queue is skipped
            if not self.admits():
                logger.debug("Worker %d: admission closed, %s and later skipped", index, url)
                return
            async with self._lock:
                self._attempted.add(url)
            try:
                outcome = await self.fetcher.fetch(url)
            except Exception as exc:
                logger.warning("Worker %d: fetch of %s raised %r; moving on", index, url, exc)
                continue
            await self._record(outcome)

    async def _record(self, outcome: FetchOutcome) -> None:
        async with self._lock:
            if self.expired:
                logger.debug("Discarding late %s result for %s", outcome.kind.value, outcome.url)
                return
            if outcome.kind is OutcomeKind.PAGE and outcome.page is not None:
                self._pages.append(FetchedPage(outcome.page, outcome.elapsed))
                self._samples.append(outcome.elapsed)
            elif outcome.kind is OutcomeKind.HTTP_ERROR:
                self._failed.append(outcome.url)


async def cancel_tasks(tasks: Sequence[asyncio.Task[None]], timeout: Optional[float] = None) -> None:
    """Cancel *tasks* and wait for them to unwind."""
    for task in tasks:
        task.cancel()
    if tasks:
        await asyncio.wait(tasks, timeout=timeout)


__all__ = ["FetchRound", "SupportsFetch", "cancel_tasks"]
