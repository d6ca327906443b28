"""
Загрузчик конфигурации templex.yaml.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import Config, DEFAULT_CONFIG
from .paths import config_path
from .typed import ConfigLoadError, build_typed

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigLoadError(f"invalid YAML in {path}: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"YAML must be a mapping: {path}")
    return raw


def load_config_file(path: Path) -> Config:
    """
    Загружает конфигурацию из явно указанного файла.

    Raises:
        ConfigLoadError: файл отсутствует, не является YAML-словарём
            или содержит неизвестные/некорректные поля
    """
    if not path.is_file():
        raise ConfigLoadError(f"Config file not found: {path}")
    config = build_typed(Config, _read_yaml_map(path))
    logger.debug(f"Loaded config from {path}: {config}")
    return config


def load_config(root: Path, explicit: Optional[Path] = None) -> Config:
    """
    Загружает конфигурацию проекта.

    Args:
        root: Каталог, в котором ищется templex.yaml
        explicit: Явный путь к файлу конфигурации (имеет приоритет)

    Returns:
        Конфигурация; значения по умолчанию, если файла нет
    """
    if explicit is not None:
        return load_config_file(explicit)

    path = config_path(root)
    if not path.is_file():
        logger.debug(f"No {path.name} in {root}, using defaults")
        return DEFAULT_CONFIG
    return load_config_file(path)


__all__ = ["load_config", "load_config_file"]
