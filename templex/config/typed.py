from __future__ import annotations

import dataclasses
import logging
import typing as t
from dataclasses import is_dataclass, fields

from pydantic import BaseModel, ValidationError

from ..errors import TemplexUserError

logger = logging.getLogger(__name__)


class ConfigLoadError(TemplexUserError, ValueError):
    """Ошибка типизированной загрузки конфигурации с указанием пути поля."""
    def __init__(self, message: str, path: tuple[str, ...] = ()):
        self.path = path
        prefix = f"{'.'.join(path)}: " if path else ""
        super().__init__(prefix + message)


_T = t.TypeVar("_T")


def build_typed(cls: type[_T], data: t.Any) -> _T:
    """
    Построить типизированный объект конфигурации (dataclass или pydantic BaseModel)
    по сырым данным из YAML, рекурсивно приводя вложенные структуры согласно type hints.
    """
    return t.cast(_T, _coerce_to_class(cls, data, path=()))


def _coerce_to_class(cls: t.Any, data: t.Any, path: tuple[str, ...]):
    name = getattr(cls, "__name__", str(cls))

    # None из пустой YAML-секции трактуем как «всё по умолчанию»
    if data is None:
        data = {}

    # Pydantic v2: доверяем собственной валидации модели
    if isinstance(cls, type) and issubclass(cls, BaseModel):
        if not isinstance(data, dict):
            raise ConfigLoadError(f"expected mapping for {name}, got {type(data).__name__}", path)
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            logger.debug("pydantic validation failed at %s: %s", ".".join(path) or "<root>", e)
            raise ConfigLoadError(str(e), path) from e

    if not is_dataclass(cls):
        raise ConfigLoadError(f"unsupported config type {name!r}", path)
    if not isinstance(data, dict):
        raise ConfigLoadError(f"expected mapping for {name}, got {type(data).__name__}", path)

    # строгая проверка лишних ключей
    allowed = {f.name for f in fields(cls)}
    extras = set(data.keys()) - allowed
    if extras:
        raise ConfigLoadError(f"unexpected keys: {sorted(extras)!r}", path)

    # аннотации в моделях строковые (from __future__ import annotations)
    hints = t.get_type_hints(cls)
    kwargs = {}
    for f in fields(cls):
        f_path = (*path, f.name)
        if f.name in data:
            kwargs[f.name] = coerce(data[f.name], hints[f.name], f_path)
        elif f.default is not dataclasses.MISSING:
            kwargs[f.name] = f.default
        elif f.default_factory is not dataclasses.MISSING:  # type: ignore[misc]
            kwargs[f.name] = f.default_factory()  # type: ignore[misc]
        else:
            raise ConfigLoadError("required field missing", f_path)
    return cls(**kwargs)


def coerce(value: t.Any, hint: t.Any, path: tuple[str, ...]) -> t.Any:
    """Рекурсивная нормализация согласно типу-подсказке."""
    # Литералы
    if t.get_origin(hint) is t.Literal:
        args = t.get_args(hint)
        if value not in args:
            raise ConfigLoadError(f"expected one of {args!r}, got {value!r}", path)
        return value

    # bool строго: bool("false") истинно
    if hint is bool:
        if isinstance(value, bool):
            return value
        raise ConfigLoadError(f"expected bool, got {type(value).__name__}", path)

    # Вложенные dataclass / pydantic-модели
    return _coerce_to_class(hint, value, path)


__all__ = ["ConfigLoadError", "build_typed", "coerce"]
