# === FILE: ua_scout/cli.py ===
#!/usr/bin/env python3
"""
Точка входа для запуска проверки UAScout через командную строку.

Команды:
  scan SEED   Обойти сайт и вывести HTML-фрагмент с результатами в stdout
  config      Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (по умолчанию configs/default.yaml, если есть)
  --limit INT         Макс. число страниц (override max_pages)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Команда scan опции:
  --sanitize          Очистить SEED как имя хоста (схема, userinfo, путь) и проверять по https
  --time-budget SEC   Бюджет времени обхода (override time_budget)
  --json PATH         Дополнительно сохранить отчёт в JSON

Дополнительно:
  --version, -v       Показать версию UAScout

Пример:
  ua_scout --limit 30 scan --sanitize example.com
"""
import asyncio
import sys
from pathlib import Path

import click
from markupsafe import escape

from ua_scout import __version__
from ua_scout.config import load_config
from ua_scout.crawler.crawler import SeedFetchError
from ua_scout.logger import init_logging, logger
from ua_scout.report.html_report import render_html
from ua_scout.report.json_report import render_json
from ua_scout.scanner import start_scan
from ua_scout.utils import InvalidHostError, sanitize_host

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='UAScout, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--limit', '-l', 'limit',
    type=click.IntRange(min=1),
    default=None,
    help='Макс. число страниц для проверки (override max_pages)'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, limit, log_level, log_file, log_format):
    """Группа команд UAScout CLI."""
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    if limit is not None:
        cfg = cfg.model_copy(update={'max_pages': limit})
    log_target = log_file or cfg.log_file
    init_logging(
        level=log_level,
        log_file=str(log_target) if log_target else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


@cli.command('scan', context_settings=CONTEXT_SETTINGS)
@click.argument('seed')
@click.option(
    '--sanitize', is_flag=True,
    help='Считать SEED именем хоста: убрать схему, userinfo и путь, проверять по https'
)
@click.option(
    '--time-budget', 'time_budget',
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help='Бюджет времени обхода (секунд)'
)
@click.option(
    '--json', '-j', 'json_output',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Сохранить отчёт в JSON-файл'
)
@click.pass_context
def scan(ctx, seed, sanitize, time_budget, json_output):
    """Обойти сайт начиная с SEED и вывести HTML-фрагмент с результатами."""
    cfg = ctx.obj['config']
    if time_budget is not None:
        cfg = cfg.model_copy(update={'time_budget': time_budget})

    if sanitize:
        try:
            seed = sanitize_host(seed)
        except InvalidHostError as e:
            logger.warning('Rejected seed: %s', e)
            sys.exit(2)

    try:
        report = asyncio.run(start_scan(seed, cfg))
    except SeedFetchError as e:
        click.echo(f'<p>Could not retrieve {escape(seed)}: {escape(e.reason)}.</p>')
        sys.exit(1)
    except Exception as e:
        print_error(f'Ошибка при проверке: {e}')

    click.echo(render_html(report), nl=False)

    if json_output:
        try:
            saved_json = render_json(report, json_output)
            click.echo(f'JSON report: {saved_json}', err=True)
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON."""
    cfg = ctx.obj['config']
    click.echo(cfg.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
