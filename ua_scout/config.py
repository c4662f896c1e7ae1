# === FILE: ua_scout/config.py ===
"""
Модуль для загрузки и валидации конфигурации UAScout.
Используется Pydantic для описания схемы и проверки данных.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator


class ScannerConfig(BaseModel):
    """Конфигурация для одного запуска проверки."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    user_agent: str = Field(
        "uasg.tech-UAChecker/0.1", min_length=1, description="Заголовок User-Agent."
    )
    workers: int = Field(8, ge=1, description="Число параллельных очередей в раунде.")
    time_budget: float = Field(30.0, gt=0, description="Общий бюджет времени обхода (секунд).")
    max_pages: int = Field(53, ge=1, description="Жесткий лимит по числу страниц.")
    request_timeout: float = Field(10.0, gt=0, description="Таймаут на один запрос (секунд).")
    poll_interval: float = Field(0.05, gt=0, description="Период опроса воркеров у дедлайна.")
    slow_threshold: float = Field(0.15, ge=0, description="Порог медианной задержки (секунд).")
    failure_threshold: int = Field(2, ge=0, description="Порог числа неудачных загрузок.")
    log_file: Optional[Path] = Field(None, description="Файл для логов.")

    @model_validator(mode="after")
    def _check_poll_interval(self) -> ScannerConfig:
        if self.poll_interval > self.time_budget:
            raise ValueError("poll_interval must not exceed time_budget")
        return self


_DEFAULT_CFG = Path("configs/default.yaml")


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Неправильный YAML в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень YAML должен быть mapping, получено {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Неправильный JSON в {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Верхний уровень JSON должен быть mapping, получено {type(data).__name__}")
    return data


def load_config(path: Union[str, Path, None]) -> ScannerConfig:
    """
    Читает YAML или JSON и возвращает проверенный объект ScannerConfig.
    Без пути используется configs/default.yaml, а если его нет — значения по умолчанию.
    """
    if path is None:
        if not _DEFAULT_CFG.exists():
            return ScannerConfig()
        path_obj = _DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Неподдерживаемый формат конфига: {suffix}")

    return ScannerConfig(**data)


__all__ = ["ScannerConfig", "load_config"]
