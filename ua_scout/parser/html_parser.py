# === FILE: ua_scout/parser/html_parser.py ===
"""HTML parsing for UAScout.

:func:`parse_html` turns markup into a :class:`~ua_scout.crawler.models.Page`
exposing only what the crawl needs:

* title — document <title> text or ``""`` if absent.
* links — absolute URLs from ``<a href>`` and ``<area href>``; links that
  cannot be resolved are dropped.
* forms — every ``<form>`` with its ``action`` and controls (name, type).
* image_urls — absolute ``<img src>`` URLs.
* canonical_url — ``<link rel="canonical">`` target, if any.

Fragments are kept here; identity decisions belong to the crawler.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Optional
from urllib.parse import urljoin, urlsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from ua_scout.crawler.models import Form, FormField, Page

__all__: Sequence[str] = ("parse_html", "resolve")

_SKIPPED_SCHEMES = ("mailto:", "javascript:", "tel:", "data:")


def resolve(base_url: str, href: str) -> Optional[str]:
    """Resolve *href* against *base_url*; return None if it cannot be resolved."""
    raw = href.strip()
    if not raw or raw.lower().startswith(_SKIPPED_SCHEMES):
        return None
    try:
        absolute = urljoin(base_url, raw)
        parts = urlsplit(absolute)
        # .port raises ValueError on a malformed port
        _ = parts.port
    except ValueError:
        return None
    if not parts.scheme or not parts.netloc:
        return None
    return absolute


def _field_type(tag: Tag) -> str:
    if tag.name == "input":
        value = tag.get("type")
        return value.strip().lower() if isinstance(value, str) and value.strip() else "text"
    return tag.name


def _parse_form(tag: Tag) -> Form:
    action = tag.get("action")
    fields: list[FormField] = []
    for control in tag.find_all(["input", "textarea", "select"]):
        if not isinstance(control, Tag):
            continue
        name = control.get("name")
        fields.append(FormField(name=name if isinstance(name, str) else "", type=_field_type(control)))
    return Form(action=action if isinstance(action, str) else "", fields=tuple(fields))


def parse_html(url: str, html: str) -> Page:
    """Parse *html* fetched from *url* into a :class:`Page`."""
    soup = BeautifulSoup(html, "html.parser")

    title_tag = soup.find("title")
    title = title_tag.get_text(strip=True) if title_tag else ""

    # <base href> changes how relative links resolve
    base_url = url
    base_tag = soup.find("base", href=True)
    if isinstance(base_tag, Tag):
        base_url = resolve(url, str(base_tag["href"])) or url

    links: list[str] = []
    for tag in soup.find_all(["a", "area"], href=True):
        absolute = resolve(base_url, str(tag["href"]))  # type: ignore[index]
        if absolute is not None:
            links.append(absolute)

    images: list[str] = []
    for tag in soup.find_all("img", src=True):
        absolute = resolve(base_url, str(tag["src"]))  # type: ignore[index]
        if absolute is not None:
            images.append(absolute)

    forms = tuple(_parse_form(tag) for tag in soup.find_all("form") if isinstance(tag, Tag))

    canonical: Optional[str] = None
    for tag in soup.find_all("link", href=True):
        rel = tag.get("rel") or []  # type: ignore[union-attr]
        if isinstance(rel, str):
            rel = rel.split()
        if "canonical" in [r.lower() for r in rel]:
            canonical = resolve(base_url, str(tag["href"]))  # type: ignore[index]
            break

    return Page(
        url=url,
        title=title,
        links=tuple(links),
        forms=forms,
        image_urls=tuple(images),
        canonical_url=canonical,
    )
