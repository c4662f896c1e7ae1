# ua_scout/crawler/fetcher.py
"""
Fetcher module: performs one HTTP GET and classifies the outcome.

Failures are returned as :class:`FetchOutcome` values; nothing is retried.
"""
from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

from aiohttp import ClientError, ClientSession

from ua_scout.crawler.models import FetchOutcome, OutcomeKind
from ua_scout.parser.html_parser import parse_html

logger = logging.getLogger("UAScout")

_HTML_TYPES = ("text/html", "application/xhtml+xml")


class Fetcher:
    """Fetches pages through a shared session with fixed request headers."""

    def __init__(self, session: ClientSession, referer: Optional[str] = None) -> None:
        self.session = session
        self.referer = referer

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "text/html"}
        if self.referer:
            headers["Referer"] = self.referer
        return headers

    async def fetch(self, url: str, *, allow_redirects: bool = False) -> FetchOutcome:
        """
        GET *url* and classify the response.

        Returns a PAGE outcome for an HTML 2xx response, HTTP_ERROR for status >= 400,
        SKIPPED for unfollowed redirects and non-HTML bodies, TRANSPORT_ERROR otherwise.
        """
        start = time.perf_counter()
        try:
            async with self.session.get(
                url, headers=self._headers(), allow_redirects=allow_redirects
            ) as resp:
                if resp.status >= 400:
                    logger.debug("HTTP %s for %s", resp.status, url)
                    return FetchOutcome(url, OutcomeKind.HTTP_ERROR, status=resp.status)
                if resp.status >= 300:
                    logger.debug("Not following redirect %s -> %s", url, resp.headers.get("Location"))
                    return FetchOutcome(url, OutcomeKind.SKIPPED, status=resp.status)
                mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                if mime and mime not in _HTML_TYPES:
                    return FetchOutcome(url, OutcomeKind.SKIPPED, status=resp.status)
                text = await resp.text(errors="replace")
                final_url = str(resp.url) if allow_redirects else url
        except (ClientError, asyncio.TimeoutError, UnicodeDecodeError, LookupError) as exc:
            logger.debug("Failed %s: %r", url, exc)
            return FetchOutcome(url, OutcomeKind.TRANSPORT_ERROR, error=repr(exc))
        elapsed = time.perf_counter() - start

        try:
            page = parse_html(final_url, text)
        except Exception as exc:  # bs4 raises ParserRejectedMarkup among others
            logger.debug("Unparseable page %s: %r", url, exc)
            return FetchOutcome(url, OutcomeKind.TRANSPORT_ERROR, error=repr(exc))
        return FetchOutcome(url, OutcomeKind.PAGE, page=page, status=resp.status, elapsed=elapsed)


__all__ = ["Fetcher"]
