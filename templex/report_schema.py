"""
Схема JSON-отчёта команды `templex tokenize`.
"""

from __future__ import annotations

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from .template import LexerError, Token, TokenizeResult
from .template.tokens import Keyword


class TokenEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    type: str
    value: Optional[Union[bool, int, str]] = None
    position: int
    line: int
    column: int

    @classmethod
    def from_token(cls, token: Token) -> "TokenEntry":
        value = token.value.value if isinstance(token.value, Keyword) else token.value
        return cls(
            type=token.type.value,
            value=value,
            position=token.position,
            line=token.line,
            column=token.column,
        )


class ErrorEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    kind: str
    message: str
    position: int
    line: int
    column: int
    state: str

    @classmethod
    def from_error(cls, error: LexerError) -> "ErrorEntry":
        return cls(
            kind=error.kind.value,
            message=error.message,
            position=error.position,
            line=error.line,
            column=error.column,
            state=error.state.value,
        )


class TokenizeReport(BaseModel):
    model_config = ConfigDict(extra="forbid")

    ok: bool
    source: str = Field(description="Путь к шаблону или '-' для stdin")
    tokens: List[TokenEntry] = Field(default_factory=list)
    errors: List[ErrorEntry] = Field(default_factory=list)

    @classmethod
    def from_result(cls, source: str, result: TokenizeResult) -> "TokenizeReport":
        return cls(
            ok=result.ok,
            source=source,
            tokens=[TokenEntry.from_token(t) for t in result.tokens],
            errors=[ErrorEntry.from_error(e) for e in result.errors],
        )


__all__ = ["TokenEntry", "ErrorEntry", "TokenizeReport"]
