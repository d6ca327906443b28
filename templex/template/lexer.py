"""
Лексический анализатор шаблонов.

Разбивает поток символов на токены по требованию (pull-модель): каждый вызов
next_token() потребляет ровно столько символов, сколько нужно для одного
токена. Учитываются три режима сканирования:
- обычный текст (NEUTRAL)
- внутри подстановки {{ ... }}
- внутри директивы {% ... %}
"""

from __future__ import annotations

import enum
import logging
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from ..config.model import LexerConfig
from .errors import ERROR_CLASSES, LexErrorKind, LexerError
from .source import CharStream
from .tokens import Keyword, LexerState, Token, TokenType

logger = logging.getLogger(__name__)

INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1

# (position, line, column) начала токена
_Mark = Tuple[int, int, int]

_REGION_NAMES = {
    LexerState.INSIDE_DIRECTIVE: "directive",
    LexerState.INSIDE_SUBSTITUTION: "substitution",
}


class ConsumptionRule(enum.Enum):
    """Правило потребления символов внутри скобочной конструкции."""

    NAME = "name"          # имя переменной или ключевое слово
    NUMERIC = "numeric"    # целочисленный литерал
    DOUBLE = "double"      # ровно два символа: %} или }}
    STRING = "string"      # строка в двойных кавычках
    SINGLE = "single"      # одиночный символ-оператор

    @classmethod
    def determine(cls, char: str) -> "ConsumptionRule":
        """Выбирает правило по первому символу токена."""
        if char.isalpha():
            return cls.NAME
        if char.isnumeric():
            return cls.NUMERIC
        if char in "%}":
            return cls.DOUBLE
        if char == '"':
            return cls.STRING
        return cls.SINGLE


class TemplateLexer:
    """
    Лексический анализатор шаблонов.

    Является итератором: токены производятся лениво, только вперёд,
    без возврата и перезапуска. Экземпляр владеет курсором по входу
    и не предназначен для использования из нескольких потоков.

    Лексические ошибки поднимаются как подклассы LexerError. После ошибки
    можно вызвать resynchronize() и продолжить итерацию.
    """

    def __init__(self, source: Iterable[str], config: Optional[LexerConfig] = None):
        """
        Args:
            source: Итерируемый источник одиночных символов (обычно str)
            config: Настройки лексера; по умолчанию LexerConfig()
        """
        self.config = config or LexerConfig()
        self.chars = CharStream(source)
        self.state = LexerState.NEUTRAL

        # Где открыта текущая конструкция (для диагностики незакрытых областей)
        self._region_start: Optional[_Mark] = None

        self._handlers: Dict[ConsumptionRule, Callable[[_Mark], Token]] = {
            ConsumptionRule.NAME: self._consume_name,
            ConsumptionRule.NUMERIC: self._consume_numeric,
            ConsumptionRule.DOUBLE: self._consume_double,
            ConsumptionRule.STRING: self._consume_string,
            ConsumptionRule.SINGLE: self._consume_single,
        }

    def __iter__(self) -> "TemplateLexer":
        return self

    def __next__(self) -> Token:
        token = self.next_token()
        if token is None:
            raise StopIteration
        return token

    def tokenize(self) -> List[Token]:
        """Токенизирует весь оставшийся вход и возвращает список токенов."""
        return list(self)

    def next_token(self) -> Optional[Token]:
        """
        Извлекает следующий токен из входного потока.

        Returns:
            Токен или None, если вход исчерпан

        Raises:
            LexerError: При ошибке лексического анализа
        """
        if self.state is LexerState.NEUTRAL:
            return self._scan_text()
        return self._scan_region()

    def resynchronize(self) -> None:
        """
        Восстановление после ошибки.

        Пропускает вход до ближайшего '%}' или '}}' включительно
        и возвращает лексер в режим обычного текста. Вне конструкций ничего не делает.
        """
        if self.state is LexerState.NEUTRAL:
            return

        skipped = 0
        # Символ, уже потреблённый сбойным правилом, может начинать закрывающую пару
        prev: Optional[str] = self.chars.last
        while True:
            char = self.chars.next()
            if char is None:
                break
            skipped += 1
            if char == "}" and prev in ("%", "}"):
                break
            prev = char

        logger.debug(f"Resynchronized after skipping {skipped} chars, now at {self.chars.line}:{self.chars.column}")
        self._leave_region()

    # ---------------------------- Режим текста ---------------------------- #

    def _scan_text(self) -> Optional[Token]:
        start = self._mark()
        buffer: List[str] = []

        while True:
            char = self.chars.peek()
            if char is None:
                break
            if char == "{":
                if not buffer:
                    return self._open_region(start)
                # Скобку оставляем следующему вызову
                break
            buffer.append(char)
            self.chars.next()

        if buffer:
            return Token(TokenType.TEXT_CONTENT, "".join(buffer), *start)
        return None

    def _open_region(self, start: _Mark) -> Token:
        self.chars.next()  # '{'
        second = self.chars.next()

        if second == "{":
            self._enter_region(LexerState.INSIDE_SUBSTITUTION, start)
            return Token(TokenType.BEGIN_SUBSTITUTION, None, *start)
        if second == "%":
            self._enter_region(LexerState.INSIDE_DIRECTIVE, start)
            return Token(TokenType.BEGIN_DIRECTIVE, None, *start)

        found = "end of input" if second is None else repr(second)
        raise self._error(
            LexErrorKind.MALFORMED_BRACE_OPEN,
            f"Expected '{{' or '%' after '{{', got {found}",
            start,
        )

    # ------------------------- Внутри конструкций ------------------------- #

    def _scan_region(self) -> Optional[Token]:
        self._skip_whitespace()

        char = self.chars.peek()
        if char is None:
            return self._end_inside_region()

        start = self._mark()
        rule = ConsumptionRule.determine(char)
        return self._handlers[rule](start)

    def _end_inside_region(self) -> Optional[Token]:
        region = _REGION_NAMES[self.state]
        opened = self._region_start or self._mark()
        if self.config.strict_eof:
            raise self._error(
                LexErrorKind.UNTERMINATED_REGION,
                f"Unterminated {region} opened at {opened[1]}:{opened[2]}",
                self._mark(),
            )
        logger.debug(f"Input ended inside {region} opened at {opened[1]}:{opened[2]}")
        return None

    def _skip_whitespace(self) -> None:
        while True:
            char = self.chars.peek()
            if char is None or not char.isspace():
                return
            self.chars.next()

    def _take_while(self, predicate: Callable[[str], bool]) -> str:
        buffer: List[str] = []
        while True:
            char = self.chars.peek()
            if char is None or not predicate(char):
                break
            buffer.append(char)
            self.chars.next()
        return "".join(buffer)

    def _consume_name(self, start: _Mark) -> Token:
        text = self._take_while(lambda c: c.isalpha() or c.isnumeric())
        keyword = Keyword.from_string(text)
        if keyword is not None:
            return Token(TokenType.KEYWORD, keyword, *start)
        return Token(TokenType.VARIABLE_NAME, text, *start)

    def _consume_numeric(self, start: _Mark) -> Token:
        digits = self._take_while(str.isnumeric)
        # Только ASCII-цифры: int() принял бы и '١٢', и прочие десятичные цифры Unicode
        if not (digits.isascii() and digits.isdigit()):
            raise self._error(
                LexErrorKind.INVALID_NUMBER_LITERAL,
                f"Invalid number literal {digits!r}",
                start,
            )
        value = int(digits)
        if not INT32_MIN <= value <= INT32_MAX:
            raise self._error(
                LexErrorKind.INVALID_NUMBER_LITERAL,
                f"Number literal {digits} does not fit into a 32-bit signed integer",
                start,
            )
        return Token(TokenType.NUMBER_LITERAL, value, *start)

    def _consume_double(self, start: _Mark) -> Token:
        # Всегда ровно два символа, каким бы ни был второй
        pair = self.chars.next() + (self.chars.next() or "")

        if pair == "%}":
            if self.state is not LexerState.INSIDE_DIRECTIVE:
                raise self._mismatched_close("Encountered directive close while not inside directive", start)
            self._leave_region()
            return Token(TokenType.END_DIRECTIVE, None, *start)

        if pair == "}}":
            if self.state is not LexerState.INSIDE_SUBSTITUTION:
                raise self._mismatched_close("Encountered substitution close while not inside substitution", start)
            self._leave_region()
            return Token(TokenType.END_SUBSTITUTION, None, *start)

        raise self._error(LexErrorKind.UNKNOWN_OPERATOR, f"Unknown operator: {pair!r}", start)

    def _consume_string(self, start: _Mark) -> Token:
        self.chars.next()  # открывающая кавычка
        buffer: List[str] = []
        while True:
            char = self.chars.next()
            if char is None:
                raise self._error(LexErrorKind.UNTERMINATED_STRING, "Unterminated string literal", start)
            if char == '"':
                break
            buffer.append(char)
        return Token(TokenType.STRING_LITERAL, "".join(buffer), *start)

    def _consume_single(self, start: _Mark) -> Token:
        char = self.chars.next()
        if self.config.single_char_operators == "reject":
            raise self._error(LexErrorKind.UNKNOWN_OPERATOR, f"Unknown operator: {char!r}", start)
        return Token(TokenType.OPERATOR, char, *start)

    # ----------------------------- Состояние ------------------------------ #

    def _mark(self) -> _Mark:
        return self.chars.position, self.chars.line, self.chars.column

    def _enter_region(self, state: LexerState, start: _Mark) -> None:
        logger.debug(f"Entering {_REGION_NAMES[state]} at {start[1]}:{start[2]}")
        self.state = state
        self._region_start = start

    def _leave_region(self) -> None:
        logger.debug(f"Leaving {_REGION_NAMES[self.state]} at {self.chars.line}:{self.chars.column}")
        self.state = LexerState.NEUTRAL
        self._region_start = None

    def _mismatched_close(self, message: str, start: _Mark) -> LexerError:
        # Закрывающая пара уже потреблена: конструкция считается закрытой
        error = self._error(LexErrorKind.MISMATCHED_CLOSE, message, start)
        self._leave_region()
        return error

    def _error(self, kind: LexErrorKind, message: str, mark: _Mark) -> LexerError:
        position, line, column = mark
        error = ERROR_CLASSES[kind](message, line, column, position, self.state)
        logger.debug(f"{kind.value}: {error}")
        return error


def tokenize_template(text: Iterable[str], config: Optional[LexerConfig] = None) -> List[Token]:
    """
    Удобная функция для токенизации шаблона.

    Args:
        text: Исходный текст шаблона
        config: Настройки лексера

    Returns:
        Список токенов

    Raises:
        LexerError: При ошибке лексического анализа
    """
    return TemplateLexer(text, config).tokenize()


__all__ = [
    "ConsumptionRule",
    "TemplateLexer",
    "tokenize_template",
    "INT32_MIN",
    "INT32_MAX",
]
