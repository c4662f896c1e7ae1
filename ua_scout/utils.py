# File: ua_scout/utils.py
"""ua_scout.utils: Очистка адреса сайта, введённого пользователем."""

from __future__ import annotations

import re
from typing import Sequence

from ua_scout.logger import logger

__all__: Sequence[str] = ("InvalidHostError", "sanitize_host")

_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.-]*://")


class InvalidHostError(ValueError):
    """Строка не похожа на имя хоста, которое имеет смысл проверять."""


def _mostly_numeric(label: str) -> bool:
    digits = sum(ch.isdigit() for ch in label)
    return digits * 2 > len(label)


def sanitize_host(raw: str) -> str:
    """Приводит ввод вида ``http://user@example.com/path`` к ``https://example.com``.

    Отбрасывает схему, userinfo, путь, запрос и фрагмент. Хост без точки или с
    преимущественно цифровым доменом верхнего уровня (IP-адреса, мусор) отвергается.
    """
    host = _SCHEME_RE.sub("", raw.strip(), count=1)
    host = re.split(r"[/?#]", host, maxsplit=1)[0]
    host = host.rpartition("@")[2]
    host = host.strip().rstrip(".").lower()

    name = host.rsplit(":", 1)[0] if host.count(":") == 1 else host
    if "." not in name:
        raise InvalidHostError(f"no domain separator in {raw!r}")
    tld = name.rsplit(".", 1)[1]
    if not tld or _mostly_numeric(tld):
        raise InvalidHostError(f"implausible top-level domain in {raw!r}")

    logger.debug("Sanitized host: %r -> %s", raw, host)
    return f"https://{host}"
