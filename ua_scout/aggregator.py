# File: ua_scout/aggregator.py
"""ua_scout.aggregator: Модуль агрегатора результатов проверки."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional, Sequence

from ua_scout.config import ScannerConfig
from ua_scout.crawler.crawler import CrawlResult
from ua_scout.report.html_report import render_html
from ua_scout.software import FormSignal


@dataclass(slots=True)
class ProblemEntry:
    """Одна уникальная проблема: первая страница, где она найдена, и число повторов."""

    url: str
    title: str
    report: str
    repeats: int = 0


@dataclass(slots=True)
class LatencyStats:
    """Медиана, минимум и максимум времени загрузки страниц (секунд)."""

    median: float
    minimum: float
    maximum: float


@dataclass(slots=True)
class ScanReport:
    """Итог проверки сайта."""

    host: str
    pages_checked: int = 0
    forms_found: int = 0
    problems: List[ProblemEntry] = field(default_factory=list)
    repeated: int = 0
    latency: Optional[LatencyStats] = None
    failed_count: int = 0
    incomplete: bool = False

    def json(self, *, pretty: bool = False) -> str:
        """Возвращает JSON-представление ScanReport."""
        return json.dumps(asdict(self), ensure_ascii=False, indent=2 if pretty else None)

    def generate_html(self) -> str:
        """HTML-фрагмент для вывода в stdout."""
        return render_html(self)


def group_problems(signals: Sequence[FormSignal]) -> List[ProblemEntry]:
    """Группирует формы с одинаковым текстом отчёта; пустой отчёт проблемой не считается."""
    entries: Dict[str, ProblemEntry] = {}
    for signal in signals:
        if signal.ua_ready:
            continue
        text = signal.report
        if not text:
            continue
        entry = entries.get(text)
        if entry is None:
            entries[text] = ProblemEntry(url=signal.page.url, title=signal.page.title, report=text)
        else:
            entry.repeats += 1
    return list(entries.values())


def latency_stats(samples: Sequence[float], threshold: float) -> Optional[LatencyStats]:
    """Возвращает статистику, только если медиана больше порога."""
    if not samples:
        return None
    ordered = sorted(samples)
    median = ordered[len(ordered) // 2]
    if median <= threshold:
        return None
    return LatencyStats(median=median, minimum=ordered[0], maximum=ordered[-1])


def aggregate_results(result: CrawlResult, config: ScannerConfig) -> ScanReport:
    """Собирает все части отчёта в ScanReport."""
    problems = group_problems(list(result.forms.values()))
    failed_count = len(result.failed)
    return ScanReport(
        host=result.host,
        pages_checked=len(result.processed),
        forms_found=len(result.forms),
        problems=problems,
        repeated=sum(p.repeats for p in problems),
        latency=latency_stats(result.samples, config.slow_threshold),
        failed_count=failed_count,
        incomplete=failed_count > config.failure_threshold,
    )


__all__ = [
    "ScanReport",
    "ProblemEntry",
    "LatencyStats",
    "aggregate_results",
    "group_problems",
    "latency_stats",
]
