"""
Сбор токенов с восстановлением после ошибок.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..config.model import LexerConfig
from .errors import LexerError
from .lexer import TemplateLexer
from .tokens import Token

logger = logging.getLogger(__name__)


@dataclass
class TokenizeResult:
    """Токены и ошибки, собранные за один проход лексера."""
    tokens: List[Token] = field(default_factory=list)
    errors: List[LexerError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors


def collect_tokens(
    source: Iterable[str],
    config: Optional[LexerConfig] = None,
    *,
    recover: bool = False,
) -> TokenizeResult:
    """
    Прогоняет лексер до конца входа, не выпуская ошибки наружу.

    Args:
        source: Исходный текст шаблона
        config: Настройки лексера
        recover: Продолжать после ошибок (resynchronize до ближайшего закрытия).
                 Без него сбор останавливается на первой ошибке.

    Returns:
        TokenizeResult с токенами, полученными до остановки, и ошибками
    """
    lexer = TemplateLexer(source, config)
    result = TokenizeResult()

    while True:
        try:
            token = lexer.next_token()
        except LexerError as e:
            result.errors.append(e)
            if not recover:
                break
            lexer.resynchronize()
            continue
        if token is None:
            break
        result.tokens.append(token)

    if result.errors:
        logger.debug(f"Collected {len(result.tokens)} tokens with {len(result.errors)} errors")
    return result


__all__ = ["TokenizeResult", "collect_tokens"]
