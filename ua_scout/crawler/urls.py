# ua_scout/crawler/urls.py
"""
Same-origin relevance filter and URL normalization for UAScout.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urldefrag, urlsplit, urlunsplit

_DEFAULT_PORTS = {"http": 80, "https": 443}


def _split(url: str) -> tuple[str, str, Optional[int]]:
    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    # .port raises ValueError for out-of-range or non-numeric ports
    port = parts.port or _DEFAULT_PORTS.get(scheme)
    return scheme, (parts.hostname or ""), port


@dataclass(frozen=True, slots=True)
class Origin:
    """(scheme, host, port) of the seed page; defines which URLs are in scope."""

    scheme: str
    host: str
    port: Optional[int]

    @classmethod
    def from_url(cls, url: str) -> Origin:
        scheme, host, port = _split(url)
        if not scheme or not host:
            raise ValueError(f"URL has no scheme or host: {url!r}")
        return cls(scheme, host, port)

    def relevant(self, url: Optional[str]) -> bool:
        """Return True if *url* has exactly this origin's scheme, host and port."""
        if url is None:
            return False
        try:
            return _split(url) == (self.scheme, self.host, self.port)
        except ValueError:
            return False

    def __str__(self) -> str:
        if self.port == _DEFAULT_PORTS.get(self.scheme):
            return f"{self.scheme}://{self.host}"
        return f"{self.scheme}://{self.host}:{self.port}"


def normalize_url(url: str) -> str:
    """
    Drop the fragment and give an empty http(s) path the root path "/",
    so ``http://host`` and ``http://host/#top`` name the same page.
    """
    parts = urlsplit(urldefrag(url).url)
    if parts.scheme.lower() in _DEFAULT_PORTS and parts.netloc and not parts.path:
        parts = parts._replace(path="/")
    return urlunsplit(parts)


__all__ = ["Origin", "normalize_url"]
