"""ua_scout.report: HTML- и JSON-отчёты, используемые CLI и тестами."""

from ua_scout.report.html_report import render_form_report, render_html

__all__ = ["render_form_report", "render_html"]
