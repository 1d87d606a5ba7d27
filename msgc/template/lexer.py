"""
Лексический анализатор шаблонов сообщений.

Разбивает исходный текст на TEXT и EXPRESSION токены с помощью
конечного автомата с состояниями Literal, InExpression и InEscape:

- в Literal удвоенный открывающий разделитель даёт литерал "{",
  одиночный открывает выражение, закрывающий переводит в InEscape;
- в InEscape ожидается второй закрывающий разделитель ("}}" → "}");
- в InExpression символы накапливаются до закрывающего разделителя.

Конец ввода в Literal завершает разбор (Done), в InExpression или
InEscape приводит к ошибке (Error).
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .tokens import LexerState, Token, TokenType
from ..errors import InvalidEscape, UnbalancedDelimiter

logger = logging.getLogger(__name__)

Delimiters = Tuple[str, str]
DEFAULT_DELIMITERS: Delimiters = ("{", "}")

# (position, line, column)
_Mark = Tuple[int, int, int]


def validate_delimiters(delimiters: Delimiters) -> Delimiters:
    """
    Проверяет пару разделителей.

    Raises:
        ValueError: Если разделители не одиночные символы или совпадают
    """
    try:
        open_delim, close_delim = delimiters
    except (TypeError, ValueError):
        raise ValueError(f"Delimiters must be a pair of characters, got {delimiters!r}") from None
    if len(open_delim) != 1 or len(close_delim) != 1:
        raise ValueError(f"Delimiters must be single characters, got {delimiters!r}")
    if open_delim == close_delim:
        raise ValueError(f"Open and close delimiters must differ, got {delimiters!r}")
    if open_delim.isspace() or close_delim.isspace():
        raise ValueError("Delimiters must not be whitespace")
    return open_delim, close_delim


class TemplateLexer:
    """
    Лексический анализатор шаблонов.

    Смежный текст (включая раскрытые экранирования) собирается в один TEXT токен.
    """

    def __init__(self, text: str, delimiters: Delimiters = DEFAULT_DELIMITERS):
        self.text = text
        self.open_delim, self.close_delim = validate_delimiters(delimiters)
        self.position = 0
        self.line = 1
        self.column = 1
        self.length = len(text)
        self.state = LexerState.LITERAL

        # Накопитель литерального текста
        self._text_parts: List[str] = []
        self._text_start: Optional[_Mark] = None

        # Начало открывающего разделителя выражения / одиночного закрывающего
        self._open_mark: Optional[_Mark] = None
        self._escape_mark: Optional[_Mark] = None

    def tokenize(self) -> List[Token]:
        """
        Токенизирует весь исходный текст и возвращает список токенов.

        Raises:
            UnbalancedDelimiter: Выражение не закрыто или разделитель вложен
            InvalidEscape: Одиночный закрывающий разделитель
        """
        tokens: List[Token] = []

        while self.position < self.length:
            char = self.text[self.position]

            if self.state is LexerState.LITERAL:
                self._step_literal(char, tokens)
            elif self.state is LexerState.IN_ESCAPE:
                self._step_escape(char)
            else:
                self._step_expression(char, tokens)

        self._finish()
        self._flush_text(tokens)
        self.state = LexerState.DONE

        # Добавляем EOF токен
        tokens.append(Token(TokenType.EOF, "", self.position, self.line, self.column))
        logger.debug("Tokenized template into %d tokens", len(tokens))
        return tokens

    # ---- Состояния автомата ----

    def _step_literal(self, char: str, tokens: List[Token]) -> None:
        if char == self.open_delim:
            if self._peek(1) == self.open_delim:
                # {{ → литерал {
                self._start_text()
                self._text_parts.append(self.open_delim)
                self._advance(2)
                return
            self._flush_text(tokens)
            self._open_mark = self._mark()
            self._advance(1)
            self.state = LexerState.IN_EXPRESSION
            return

        if char == self.close_delim:
            self._start_text()
            self._escape_mark = self._mark()
            self._advance(1)
            self.state = LexerState.IN_ESCAPE
            return

        self._start_text()
        self._text_parts.append(char)
        self._advance(1)

    def _step_escape(self, char: str) -> None:
        if char != self.close_delim:
            self._fail_escape()
        # }} → литерал }
        self._text_parts.append(self.close_delim)
        self._escape_mark = None
        self._advance(1)
        self.state = LexerState.LITERAL

    def _step_expression(self, char: str, tokens: List[Token]) -> None:
        assert self._open_mark is not None
        open_pos, open_line, open_col = self._open_mark

        if char == self.close_delim:
            body_start = open_pos + 1
            source = self.text[body_start:self.position]
            tokens.append(Token(
                TokenType.EXPRESSION,
                source,
                body_start,
                open_line,
                open_col + 1,
                raw=self.text[open_pos:self.position + 1],
            ))
            self._advance(1)
            self._open_mark = None
            self.state = LexerState.LITERAL
            return

        if char == self.open_delim:
            # Разделитель не вкладывается: ошибка указывает на вложенный символ
            self.state = LexerState.ERROR
            raise UnbalancedDelimiter(
                offset=self.position,
                source_text=self.text[open_pos:self.position + 1],
                line=self.line,
                column=self.column,
                delimiter=self.open_delim,
            )

        self._advance(1)

    def _finish(self) -> None:
        """Проверяет, что ввод закончился в состоянии Literal."""
        if self.state is LexerState.IN_EXPRESSION:
            assert self._open_mark is not None
            open_pos, open_line, open_col = self._open_mark
            self.state = LexerState.ERROR
            raise UnbalancedDelimiter(
                offset=open_pos,
                source_text=self.text[open_pos:],
                line=open_line,
                column=open_col,
                delimiter=self.open_delim,
            )
        if self.state is LexerState.IN_ESCAPE:
            self._fail_escape()

    def _fail_escape(self) -> None:
        assert self._escape_mark is not None
        pos, line, col = self._escape_mark
        self.state = LexerState.ERROR
        raise InvalidEscape(
            offset=pos,
            source_text=self.close_delim,
            line=line,
            column=col,
            delimiter=self.close_delim,
        )

    # ---- Вспомогательные методы ----

    def _mark(self) -> _Mark:
        return self.position, self.line, self.column

    def _peek(self, offset: int) -> str:
        idx = self.position + offset
        return self.text[idx] if idx < self.length else ""

    def _start_text(self) -> None:
        if self._text_start is None:
            self._text_start = self._mark()

    def _flush_text(self, tokens: List[Token]) -> None:
        """Выпускает накопленный литеральный текст одним токеном."""
        if self._text_start is None:
            return
        pos, line, col = self._text_start
        tokens.append(Token(
            TokenType.TEXT,
            "".join(self._text_parts),
            pos,
            line,
            col,
            raw=self.text[pos:self.position],
        ))
        self._text_parts = []
        self._text_start = None

    def _advance(self, count: int) -> None:
        """
        Перемещает позицию на указанное количество символов,
        обновляя номера строк и колонок.
        """
        for _ in range(count):
            if self.position < self.length:
                if self.text[self.position] == '\n':
                    self.line += 1
                    self.column = 1
                else:
                    self.column += 1
                self.position += 1


def tokenize_template(text: str, delimiters: Delimiters = DEFAULT_DELIMITERS) -> List[Token]:
    """
    Удобная функция для токенизации шаблона.

    Args:
        text: Исходный текст шаблона
        delimiters: Пара разделителей выражений

    Returns:
        Список токенов

    Raises:
        ParseError: При ошибке лексического анализа
    """
    return TemplateLexer(text, delimiters).tokenize()


__all__ = ["TemplateLexer", "tokenize_template", "validate_delimiters", "DEFAULT_DELIMITERS", "Delimiters"]
