"""
Лексические типы шаблона.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenType(enum.Enum):
    """Типы токенов в шаблоне."""

    # Текст вне выражений (включая раскрытые экранирования)
    TEXT = "TEXT"

    # Исходный текст выражения между разделителями
    EXPRESSION = "EXPRESSION"

    EOF = "EOF"


class LexerState(enum.Enum):
    """Состояния конечного автомата лексера."""
    LITERAL = "Literal"
    IN_EXPRESSION = "InExpression"
    IN_ESCAPE = "InEscape"
    DONE = "Done"
    ERROR = "Error"


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией для точной диагностики ошибок.

    Для TEXT value содержит уже раскрытый текст ({{ → {), а raw — исходный.
    Для EXPRESSION position указывает на начало текста выражения
    (сразу после открывающего разделителя).
    """
    type: TokenType
    value: str
    position: int        # Позиция в исходном тексте
    line: int           # Номер строки (начиная с 1)
    column: int         # Номер колонки (начиная с 1)
    raw: str = ""

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


__all__ = ["TokenType", "LexerState", "Token"]
