# File: ua_scout/software.py
"""ua_scout.software: определение ПО, обрабатывающего форму, и отчёт о готовности к UA."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import cached_property
from typing import Callable, List, Sequence, Tuple, Union
from urllib.parse import urlsplit

from ua_scout.crawler.models import Page
from ua_scout.report.html_report import render_form_report


@dataclass(frozen=True, slots=True)
class Unready:
    """Software that was not UA-ready at the time of writing."""

    name: str
    homepage: str


@dataclass(frozen=True, slots=True)
class ConditionallyReady:
    """Software that is UA-ready only if *condition* holds, which cannot be verified remotely."""

    name: str
    homepage: str
    condition: str


Software = Union[Unready, ConditionallyReady]

#: template branch for each software variant
UNREADY = "unready"
CONDITIONAL = "conditional"

WORDPRESS = Unready("Wordpress", "https://wordpress.org")
CONTACT_FORM_7 = Unready("Contact Form 7", "https://contactform7.com")

_WP_PATH_RE = re.compile(r"^/wp-")
_CF7_ACTION_RE = re.compile(r"#wpcf7")


def advisory_kind(software: Software) -> str:
    """Map a software variant to the advisory template branch that describes it."""
    if isinstance(software, ConditionallyReady):
        return CONDITIONAL
    if isinstance(software, Unready):
        return UNREADY
    raise TypeError(f"unknown software variant: {software!r}")


def is_known_ready(software: Software) -> bool:
    """No detected software is positively confirmed as UA-ready yet."""
    return False


def detect_wordpress(page: Page) -> bool:
    """Any same-host image served from a ``/wp-*`` path."""
    host = urlsplit(page.url).hostname
    for url in page.image_urls:
        parts = urlsplit(url)
        if parts.hostname == host and _WP_PATH_RE.match(parts.path):
            return True
    return False


def detect_contact_form_7(page: Page) -> bool:
    return any(_CF7_ACTION_RE.search(form.action) for form in page.forms)


Detector = Tuple[Software, Callable[[Page], bool]]

DETECTORS: Sequence[Detector] = (
    (WORDPRESS, detect_wordpress),
    (CONTACT_FORM_7, detect_contact_form_7),
)


def detect_software(page: Page, detectors: Sequence[Detector] = DETECTORS) -> List[Software]:
    """Return every known software whose detector matches *page*, in detector order."""
    return [software for software, matches in detectors if matches(page)]


class FormSignal:
    """
    A page with at least one form asking for an email address.

    ``software`` and ``report`` are computed on first access and cached. Only the
    crawl controller touches a FormSignal, so the caches need no locking.
    """

    def __init__(self, page: Page) -> None:
        self.page = page

    @property
    def ua_ready(self) -> bool:
        return False

    @cached_property
    def software(self) -> List[Software]:
        return detect_software(self.page)

    @cached_property
    def report(self) -> str:
        """HTML explanation of the potential problem; empty if every detected software is ready."""
        detected = self.software
        unready = [s for s in detected if not is_known_ready(s)]
        if detected and not unready:
            return ""
        return render_form_report([(advisory_kind(s), s) for s in unready])

    def __repr__(self) -> str:
        return f"FormSignal({self.page.url!r})"


__all__ = [
    "Unready",
    "ConditionallyReady",
    "Software",
    "WORDPRESS",
    "CONTACT_FORM_7",
    "DETECTORS",
    "FormSignal",
    "detect_software",
    "detect_wordpress",
    "detect_contact_form_7",
    "is_known_ready",
    "advisory_kind",
    "UNREADY",
    "CONDITIONAL",
]
