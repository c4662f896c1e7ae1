# cli.py

"""
Точка входа для запуска UAScout без установки пакета.

Пример запуска:
    python cli.py scan --sanitize example.com
    python cli.py --config configs/default.yaml --log-level INFO scan https://example.com/
"""
from ua_scout.cli import cli


if __name__ == '__main__':
    cli()
