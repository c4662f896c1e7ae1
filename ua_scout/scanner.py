# === FILE: ua_scout/scanner.py ===
"""
Модуль-обёртка для функции запуска проверки.
"""
from ua_scout.aggregator import ScanReport, aggregate_results
from ua_scout.config import ScannerConfig
from ua_scout.crawler.crawler import AsyncCrawler


async def start_scan(seed: str, cfg: ScannerConfig) -> ScanReport:
    """
    Запускает асинхронный краулер в контексте и возвращает агрегированный отчёт.

    Parameters
    ----------
    seed : str
        Адрес стартовой страницы.
    cfg : ScannerConfig
        Конфигурация проверки.

    Returns
    -------
    ScanReport
        Итог проверки: найденные формы, проблемы и предупреждения.

    Raises
    ------
    SeedFetchError
        Стартовую страницу не удалось загрузить.
    """
    async with AsyncCrawler(seed, cfg) as crawler:
        result = await crawler.crawl()
    return aggregate_results(result, cfg)

__all__ = ["start_scan"]
