# ua_scout/crawler/frontier.py
"""
Frontier: distance map plus processed/failed/discarded membership.

Only the crawl controller touches a Frontier, and only between rounds.
"""
from __future__ import annotations

from typing import Dict, List, Set
from urllib.parse import urlsplit

#: distance assumed for a URL that has not been recorded yet
DEFAULT_DISTANCE_CAP = 4
#: pages at this distance or deeper are fetched but their links are not followed
EXPANSION_LIMIT = 3


class Frontier:
    """Tracks how far each known URL is from the seed and what happened to it."""

    def __init__(self) -> None:
        self.distances: Dict[str, int] = {}
        self.processed: Set[str] = set()
        self.failed: Set[str] = set()
        # attempted, but neither a page nor an HTTP error came back in time
        self.discarded: Set[str] = set()

    def record_distance(self, url: str, distance: int) -> int:
        """Store ``min(distance, current)`` for *url* and return the stored value."""
        current = self.distances.get(url, DEFAULT_DISTANCE_CAP)
        self.distances[url] = min(distance, current)
        return self.distances[url]

    def distance(self, url: str) -> int:
        return self.distances.get(url, DEFAULT_DISTANCE_CAP)

    def is_unseen(self, url: str) -> bool:
        return url not in self.processed and url not in self.failed and url not in self.discarded

    def expandable(self, url: str) -> bool:
        return self.distance(url) < EXPANSION_LIMIT

    def pending(self) -> List[str]:
        return [u for u in self.distances if self.is_unseen(u)]

    def mark_processed(self, url: str) -> None:
        self._check_untouched(url)
        self.processed.add(url)

    def mark_failed(self, url: str) -> None:
        self._check_untouched(url)
        self.failed.add(url)

    def mark_discarded(self, url: str) -> None:
        self._check_untouched(url)
        self.discarded.add(url)

    def next_round_batch(self, worker_count: int) -> List[List[str]]:
        """
        Order pending URLs by (distance, path length) and deal them round-robin
        into at most *worker_count* queues, so every queue mixes shallow and deep URLs.
        """
        if worker_count < 1:
            raise ValueError("worker_count must be >= 1")
        ordered = sorted(
            self.pending(),
            key=lambda u: (self.distances[u], len(urlsplit(u).path)),
        )
        queues: List[List[str]] = [[] for _ in range(min(worker_count, len(ordered)))]
        for i, url in enumerate(ordered):
            queues[i % worker_count].append(url)
        return queues

    def _check_untouched(self, url: str) -> None:
        if not self.is_unseen(url):
            raise ValueError(f"URL already settled: {url}")


__all__ = ["Frontier", "DEFAULT_DISTANCE_CAP", "EXPANSION_LIMIT"]
