"""
Источник символов для лексера.

Оборачивает произвольный итератор символов, добавляя просмотр на один символ
вперёд и отслеживание позиции (смещение, строка, колонка).
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional


class CharStream:
    """
    Поток символов с одним символом предпросмотра.

    Принимает любой итерируемый источник одиночных символов: строку,
    генератор, обёртку над файлом. Источник читается строго по порядку
    и ровно один раз.
    """

    def __init__(self, chars: Iterable[str]):
        self._chars: Iterator[str] = iter(chars)
        self._lookahead: Optional[str] = None
        self._exhausted = False

        # Последний потреблённый символ
        self.last: Optional[str] = None

        # Позиция следующего (ещё не прочитанного) символа
        self.position = 0
        self.line = 1
        self.column = 1

    def peek(self) -> Optional[str]:
        """Возвращает следующий символ, не потребляя его. None: конец входа."""
        if self._lookahead is None and not self._exhausted:
            try:
                self._lookahead = next(self._chars)
            except StopIteration:
                self._exhausted = True
        return self._lookahead

    def next(self) -> Optional[str]:
        """Потребляет и возвращает следующий символ. None: конец входа."""
        char = self.peek()
        if char is None:
            return None
        self._lookahead = None
        self.last = char
        self._advance(char)
        return char

    def at_end(self) -> bool:
        return self.peek() is None

    def _advance(self, char: str) -> None:
        """Обновляет номера строки и колонки после потребления символа."""
        self.position += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1


__all__ = ["CharStream"]
