"""
Модели конфигурации templex.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

SingleCharOperators = Literal["emit", "reject"]


@dataclass(frozen=True)
class LexerConfig:
    """
    Настройки лексера.

    single_char_operators:
        emit  : одиночный символ-оператор внутри конструкции даёт токен OPERATOR;
        reject: такой символ считается ошибкой UnknownOperator.
    strict_eof:
        True : конец входа внутри директивы/подстановки даёт UnterminatedRegion;
        False: конец входа молча завершает поток токенов.
    """
    single_char_operators: SingleCharOperators = "emit"
    strict_eof: bool = True


@dataclass(frozen=True)
class Config:
    lexer: LexerConfig = field(default_factory=LexerConfig)


DEFAULT_CONFIG = Config()


__all__ = ["SingleCharOperators", "LexerConfig", "Config", "DEFAULT_CONFIG"]
