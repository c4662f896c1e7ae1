# File: ua_scout/report/html_report.py
"""ua_scout.report.html_report: Генерация HTML-фрагментов отчёта с помощью Jinja2."""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Sequence, Tuple

from jinja2 import Environment, PackageLoader, select_autoescape

if TYPE_CHECKING:
    from ua_scout.aggregator import ScanReport
    from ua_scout.software import Software

#: адрес, который пользователю предлагается ввести в форму
PROBE_ADDRESS = "dømi@dømi.fo"


@lru_cache(maxsize=1)
def _environment() -> Environment:
    return Environment(
        loader=PackageLoader("ua_scout", "report/templates"),
        autoescape=select_autoescape(["html", "xml", "j2"]),
    )


def render_form_report(advisories: Sequence[Tuple[str, Software]]) -> str:
    """Рендерит объяснение для одной формы по парам (вид совета, ПО).

    Вид совета берётся из ``software.advisory_kind``; пустой список означает,
    что ПО определить не удалось.
    """
    template = _environment().get_template("form_report.html.j2")
    return template.render(advisories=list(advisories), probe_address=PROBE_ADDRESS)


def render_html(report: ScanReport) -> str:
    """Рендерит итоговый HTML-фрагмент, который CLI печатает в stdout.

    Пример:
    ```python
    from ua_scout.report.html_report import render_html
    click.echo(render_html(report), nl=False)
    ```
    """
    template = _environment().get_template("report.html.j2")
    return template.render(report=report)


__all__ = ["render_form_report", "render_html", "PROBE_ADDRESS"]
