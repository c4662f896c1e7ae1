# ua_scout/crawler/models.py
"""
Data models for the UAScout crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


@dataclass(frozen=True, slots=True)
class FormField:
    """Single form control: ``name`` and lower-cased ``type`` (``textarea``/``select`` for those tags)."""

    name: str
    type: str


@dataclass(frozen=True, slots=True)
class Form:
    """A ``<form>`` element with its raw ``action`` attribute and its controls."""

    action: str
    fields: tuple[FormField, ...] = ()


@dataclass(frozen=True, slots=True)
class Page:
    """Fetched HTML page. Links and image URLs are absolute."""

    url: str
    title: str = ""
    links: tuple[str, ...] = ()
    forms: tuple[Form, ...] = ()
    image_urls: tuple[str, ...] = ()
    canonical_url: Optional[str] = None


class OutcomeKind(Enum):
    PAGE = "page"
    HTTP_ERROR = "http_error"
    TRANSPORT_ERROR = "transport_error"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class FetchOutcome:
    """Result of one fetch attempt; exactly one of ``page``/``status``/``error`` is meaningful per kind."""

    url: str
    kind: OutcomeKind
    page: Optional[Page] = None
    status: Optional[int] = None
    error: Optional[str] = None
    elapsed: float = 0.0


@dataclass(frozen=True, slots=True)
class FetchedPage:
    """A page accepted into a round, with its retrieval latency."""

    page: Page
    elapsed: float


@dataclass(slots=True)
class RoundResult:
    """Snapshot of a round's buffers taken when the round closes."""

    pages: list[FetchedPage] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    attempted: set[str] = field(default_factory=set)
    samples: list[float] = field(default_factory=list)
    timed_out: bool = False
