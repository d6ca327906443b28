"""
Ошибки лексического анализа.

Каждая ошибка несёт вид (LexErrorKind), смещение в исходном тексте,
строку/колонку и состояние лексера на момент сбоя. Вызывающая сторона
решает, остановиться или продолжить после resynchronize().
"""

from __future__ import annotations

import enum
from typing import Dict, Type

from ..errors import TemplexUserError
from .tokens import LexerState


class LexErrorKind(enum.Enum):
    """Таксономия лексических ошибок."""

    MALFORMED_BRACE_OPEN = "MalformedBraceOpen"
    MISMATCHED_CLOSE = "MismatchedClose"
    UNKNOWN_OPERATOR = "UnknownOperator"
    UNTERMINATED_REGION = "UnterminatedRegion"
    UNTERMINATED_STRING = "UnterminatedString"
    INVALID_NUMBER_LITERAL = "InvalidNumberLiteral"


class LexerError(TemplexUserError):
    """Ошибка лексического анализа."""

    kind: LexErrorKind

    def __init__(
        self,
        message: str,
        line: int,
        column: int,
        position: int,
        state: LexerState,
    ):
        super().__init__(f"{message} at {line}:{column}")
        self.message = message
        self.line = line
        self.column = column
        self.position = position
        self.state = state


class MalformedBraceOpen(LexerError):
    """За '{' не последовал ни '{', ни '%'."""
    kind = LexErrorKind.MALFORMED_BRACE_OPEN


class MismatchedClose(LexerError):
    """'%}' или '}}' встретился не в своём режиме."""
    kind = LexErrorKind.MISMATCHED_CLOSE


class UnknownOperator(LexerError):
    kind = LexErrorKind.UNKNOWN_OPERATOR


class UnterminatedRegion(LexerError):
    """Вход закончился внутри директивы или подстановки."""
    kind = LexErrorKind.UNTERMINATED_REGION


class UnterminatedString(LexerError):
    kind = LexErrorKind.UNTERMINATED_STRING


class InvalidNumberLiteral(LexerError):
    """Последовательность цифр не помещается в знаковое 32-битное целое."""
    kind = LexErrorKind.INVALID_NUMBER_LITERAL


ERROR_CLASSES: Dict[LexErrorKind, Type[LexerError]] = {
    cls.kind: cls
    for cls in (
        MalformedBraceOpen,
        MismatchedClose,
        UnknownOperator,
        UnterminatedRegion,
        UnterminatedString,
        InvalidNumberLiteral,
    )
}


__all__ = [
    "LexErrorKind",
    "LexerError",
    "MalformedBraceOpen",
    "MismatchedClose",
    "UnknownOperator",
    "UnterminatedRegion",
    "UnterminatedString",
    "InvalidNumberLiteral",
    "ERROR_CLASSES",
]
