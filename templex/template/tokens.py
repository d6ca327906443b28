"""
Лексические типы шаблонизатора.

Определяет типы токенов, ключевые слова директив и состояния лексера.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional, Union


class TokenType(enum.Enum):
    """Типы токенов в шаблоне."""

    # Текстовый контент вне скобочных конструкций
    TEXT_CONTENT = "TEXT_CONTENT"

    # Разделители директив
    BEGIN_DIRECTIVE = "BEGIN_DIRECTIVE"          # {%
    END_DIRECTIVE = "END_DIRECTIVE"              # %}

    # Разделители подстановок
    BEGIN_SUBSTITUTION = "BEGIN_SUBSTITUTION"    # {{
    END_SUBSTITUTION = "END_SUBSTITUTION"        # }}

    # Содержимое скобочных конструкций
    KEYWORD = "KEYWORD"
    VARIABLE_NAME = "VARIABLE_NAME"
    OPERATOR = "OPERATOR"

    # Литералы
    STRING_LITERAL = "STRING_LITERAL"
    NUMBER_LITERAL = "NUMBER_LITERAL"

    # Зарезервированы, лексер их не порождает
    BOOLEAN_LITERAL = "BOOLEAN_LITERAL"
    LEFT_BRACKET = "LEFT_BRACKET"                # [
    RIGHT_BRACKET = "RIGHT_BRACKET"              # ]
    DOT = "DOT"                                  # .


class Keyword(enum.Enum):
    """Зарезервированные слова директив."""

    FOR = "for"
    IF = "if"
    THEN = "then"
    ELSE = "else"
    ELSEIF = "elseif"
    ENDFOR = "endfor"
    ENDIF = "endif"

    @classmethod
    def from_string(cls, text: str) -> Optional["Keyword"]:
        """Точное сравнение с учётом регистра: 'EndFor' ключевым словом не является."""
        return _KEYWORDS.get(text)


_KEYWORDS = {kw.value: kw for kw in Keyword}


class LexerState(enum.Enum):
    """Режим сканирования лексера."""

    NEUTRAL = "neutral"
    INSIDE_DIRECTIVE = "inside_directive"
    INSIDE_SUBSTITUTION = "inside_substitution"


# Полезная нагрузка токена: текст, число, ключевое слово или ничего
TokenValue = Union[str, int, bool, Keyword, None]


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией для точной диагностики ошибок.
    """
    type: TokenType
    value: TokenValue = None
    position: int = 0    # Позиция в исходном тексте (с нуля)
    line: int = 1        # Номер строки (начиная с 1)
    column: int = 1      # Номер колонки (начиная с 1)

    @property
    def kind(self) -> tuple[TokenType, TokenValue]:
        """Тип и значение без позиции, удобно для сравнения последовательностей."""
        return self.type, self.value

    def __repr__(self) -> str:
        if self.value is None:
            return f"Token({self.type.name}, {self.line}:{self.column})"
        value = self.value.name if isinstance(self.value, Keyword) else repr(self.value)
        return f"Token({self.type.name}, {value}, {self.line}:{self.column})"


__all__ = [
    "TokenType",
    "Keyword",
    "LexerState",
    "TokenValue",
    "Token",
]
