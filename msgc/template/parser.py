"""
Синтаксический анализатор шаблонов.

Превращает поток токенов лексера в Template: TEXT токены становятся
литералами, EXPRESSION токены компилируются в ParsedPath.
"""

from __future__ import annotations

import logging
from typing import List

from .lexer import DEFAULT_DELIMITERS, Delimiters, TemplateLexer
from .nodes import Expression, Literal, Segment, Template
from .path import PathParser
from .tokens import Token, TokenType

logger = logging.getLogger(__name__)


class TemplateParser:
    """
    Парсер шаблонов сообщений.

    Разбор чистый и идемпотентный: повторный разбор той же строки
    даёт равную последовательность сегментов.
    """

    def __init__(self, delimiters: Delimiters = DEFAULT_DELIMITERS):
        self.delimiters = delimiters

    def parse(self, source: str) -> Template:
        """
        Парсит исходный текст шаблона.

        Args:
            source: Текст шаблона

        Returns:
            Разобранный шаблон

        Raises:
            UnbalancedDelimiter, InvalidEscape, InvalidExpression
        """
        tokens = TemplateLexer(source, self.delimiters).tokenize()
        segments = self.parse_tokens(tokens)
        logger.debug("Parsed template with %d segments", len(segments))
        return Template(source=source, segments=tuple(segments))

    def parse_tokens(self, tokens: List[Token]) -> List[Segment]:
        """Строит сегменты из готового списка токенов."""
        segments: List[Segment] = []
        for token in tokens:
            if token.type == TokenType.TEXT:
                segments.append(Literal(text=token.value, offset=token.position))
            elif token.type == TokenType.EXPRESSION:
                segments.append(self._parse_expression(token))
            elif token.type == TokenType.EOF:
                break
        return segments

    def _parse_expression(self, token: Token) -> Expression:
        path = PathParser(token.value, token.position, token.line, token.column).parse()
        return Expression(
            source_text=token.value,
            path=path,
            offset=token.position,
            line=token.line,
            column=token.column,
        )


def parse(source: str, delimiters: Delimiters = DEFAULT_DELIMITERS) -> Template:
    """Удобная функция для разбора шаблона без кэширования."""
    return TemplateParser(delimiters).parse(source)


__all__ = ["TemplateParser", "parse"]
