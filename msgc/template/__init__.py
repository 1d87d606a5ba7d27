"""
Разбор шаблонов сообщений.
"""

from __future__ import annotations

from .cache import TemplateCache, get_template_cache
from .lexer import DEFAULT_DELIMITERS, Delimiters, TemplateLexer, tokenize_template
from .nodes import Expression, Literal, Segment, Template
from .parser import TemplateParser
from .path import FieldAccessor, IndexAccessor, ParsedPath, parse_path


def parse_template(
    source: str,
    *,
    delimiters: Delimiters = DEFAULT_DELIMITERS,
    cached: bool = True,
) -> Template:
    """
    Разбирает шаблон.

    Args:
        source: Текст шаблона
        delimiters: Пара разделителей выражений
        cached: Использовать кэш шаблонов уровня процесса

    Raises:
        ParseError: При синтаксической ошибке
    """
    if cached:
        return get_template_cache().get(source, delimiters)
    return TemplateParser(delimiters).parse(source)


__all__ = [
    "parse_template",
    "Template",
    "Segment",
    "Literal",
    "Expression",
    "ParsedPath",
    "IndexAccessor",
    "FieldAccessor",
    "parse_path",
    "TemplateParser",
    "TemplateLexer",
    "tokenize_template",
    "TemplateCache",
    "get_template_cache",
    "DEFAULT_DELIMITERS",
]
