"""
templex: лексический анализатор для языка шаблонов с подстановками {{ ... }}
и директивами {% ... %}.
"""

from __future__ import annotations

from .errors import TemplexUserError
from .template import (
    Keyword,
    LexerError,
    Token,
    TokenType,
    TemplateLexer,
    collect_tokens,
    tokenize_template,
)

__all__ = [
    "TemplexUserError",
    "TemplateLexer",
    "tokenize_template",
    "collect_tokens",
    "Token",
    "TokenType",
    "Keyword",
    "LexerError",
]
