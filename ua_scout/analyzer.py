# File: ua_scout/analyzer.py
"""ua_scout.analyzer: разбор загруженной страницы — новые ссылки во фронтир и формы с email."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List

from ua_scout.crawler.frontier import Frontier
from ua_scout.crawler.models import FormField, Page
from ua_scout.crawler.urls import Origin, normalize_url
from ua_scout.software import FormSignal

_MAIL_RE = re.compile(r"mail")
_FREE_TEXT_TYPES = frozenset({"text"})


@dataclass(slots=True)
class CrawlContext:
    """Состояние одного запуска: создаётся в начале обхода и изменяется только контроллером."""

    origin: Origin
    frontier: Frontier = field(default_factory=Frontier)
    forms: Dict[str, FormSignal] = field(default_factory=dict)
    samples: List[float] = field(default_factory=list)


def is_emailish(form_field: FormField) -> bool:
    """Поле типа ``email`` или текстовое поле, в имени которого есть ``mail``."""
    if form_field.type == "email":
        return True
    return form_field.type in _FREE_TEXT_TYPES and bool(_MAIL_RE.search(form_field.name))


def has_email_form(page: Page) -> bool:
    return any(is_emailish(f) for form in page.forms for f in form.fields)


def analyze_page(ctx: CrawlContext, page: Page) -> List[str]:
    """Обрабатывает страницу и возвращает список релевантных ссылок, записанных во фронтир.

    Ссылки берутся только со страниц на расстоянии меньше 3; формы проверяются всегда.
    """
    url = normalize_url(page.url)
    recorded: List[str] = []
    if ctx.frontier.expandable(url):
        distance = ctx.frontier.distance(url)
        for link in page.links:
            if not ctx.origin.relevant(link):
                continue
            link = normalize_url(link)
            ctx.frontier.record_distance(link, distance + 1)
            recorded.append(link)
    if has_email_form(page):
        ctx.forms.setdefault(url, FormSignal(page))
    return recorded


__all__ = ["CrawlContext", "analyze_page", "is_emailish", "has_email_form"]
