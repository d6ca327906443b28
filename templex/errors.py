"""
Базовое исключение templex для ошибок, которые показываются пользователю.

От TemplexUserError наследуются лексические ошибки шаблона (LexerError)
и ошибки конфигурации templex.yaml (ConfigLoadError). CLI печатает их
одной строкой в stderr без трассировки; прочие исключения считаются
ошибками программы и выходят с полным traceback.
"""

from __future__ import annotations


class TemplexUserError(Exception):
    """Ошибка, которую пользователь исправляет сам: шаблон, конфиг или путь к файлу."""
    pass


__all__ = ["TemplexUserError"]
