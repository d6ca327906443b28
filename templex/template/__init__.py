"""
Лексический анализ шаблонов: текст, подстановки {{ ... }} и директивы {% ... %}.
"""

from __future__ import annotations

from .errors import (
    LexErrorKind,
    LexerError,
    MalformedBraceOpen,
    MismatchedClose,
    UnknownOperator,
    UnterminatedRegion,
    UnterminatedString,
    InvalidNumberLiteral,
)
from .lexer import TemplateLexer, tokenize_template
from .recovery import TokenizeResult, collect_tokens
from .tokens import Keyword, LexerState, Token, TokenType

__all__ = [
    "TemplateLexer",
    "tokenize_template",
    "collect_tokens",
    "TokenizeResult",
    "Token",
    "TokenType",
    "Keyword",
    "LexerState",
    "LexErrorKind",
    "LexerError",
    "MalformedBraceOpen",
    "MismatchedClose",
    "UnknownOperator",
    "UnterminatedRegion",
    "UnterminatedString",
    "InvalidNumberLiteral",
]
