"""
Парсер выражений-путей с рекурсивным спуском.

Компилирует исходный текст выражения в ParsedPath: базовое имя и
последовательность аксессоров (позиционный индекс или имя поля),
а также необязательный суффикс стиля.

Грамматика:
expression → WS* path style? WS*
path       → IDENT accessor*
accessor   → "[" WS* INTEGER WS* "]" | "." IDENT
style      → ":" WS* IDENT
IDENT      → [A-Za-z_][A-Za-z0-9_]*
INTEGER    → "-"? [0-9]+
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List, NoReturn, Optional, Tuple, Union

from ..errors import InvalidExpression

_IDENT_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_INT_RE = re.compile(r"-?[0-9]+")
_WS_RE = re.compile(r"\s*")


@dataclass(frozen=True)
class IndexAccessor:
    """Позиционный индекс: [n]"""
    index: int
    offset: int  # Позиция "[" в шаблоне

    def __str__(self) -> str:
        return f"[{self.index}]"


@dataclass(frozen=True)
class FieldAccessor:
    """Доступ к полю: .name"""
    name: str
    offset: int  # Позиция "." в шаблоне

    def __str__(self) -> str:
        return f".{self.name}"


Accessor = Union[IndexAccessor, FieldAccessor]


@dataclass(frozen=True)
class ParsedPath:
    """
    Скомпилированное выражение.

    Строится один раз и переиспользуется при рендеринге
    одного шаблона с разными контекстами.
    """
    base: str
    accessors: Tuple[Accessor, ...] = ()
    style: Optional[str] = None

    def __str__(self) -> str:
        text = self.base + "".join(str(a) for a in self.accessors)
        return f"{text}:{self.style}" if self.style else text


class PathParser:
    """
    Парсер текста выражения.

    Позиции ошибок вычисляются относительно всего шаблона:
    offset — абсолютная позиция начала текста выражения,
    line/column — его строка и колонка.
    """

    def __init__(self, source: str, offset: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.offset = offset
        self.line = line
        self.column = column
        self._pos = 0

    def parse(self) -> ParsedPath:
        """
        Парсит текст выражения.

        Raises:
            InvalidExpression: При синтаксической ошибке
        """
        self._skip_ws()
        if self._at_end():
            self._fail("empty expression")

        base = self._consume_identifier("expected identifier")
        accessors: List[Accessor] = []

        while not self._at_end():
            char = self.source[self._pos]
            if char == "[":
                accessors.append(self._parse_index())
            elif char == ".":
                accessors.append(self._parse_field())
            else:
                break

        style = self._parse_style()

        self._skip_ws()
        if not self._at_end():
            self._fail(f"unexpected character {self.source[self._pos]!r}")

        return ParsedPath(base=base, accessors=tuple(accessors), style=style)

    def _parse_index(self) -> IndexAccessor:
        """Парсит позиционный индекс: [n]"""
        start = self._abs(self._pos)
        self._pos += 1  # [
        self._skip_ws()
        match = _INT_RE.match(self.source, self._pos)
        if not match:
            self._fail("expected integer index")
        self._pos = match.end()
        self._skip_ws()
        if self._at_end() or self.source[self._pos] != "]":
            self._fail("expected ']'")
        self._pos += 1
        return IndexAccessor(index=int(match.group(0)), offset=start)

    def _parse_field(self) -> FieldAccessor:
        """Парсит доступ к полю: .name"""
        start = self._abs(self._pos)
        self._pos += 1  # .
        name = self._consume_identifier("expected field name after '.'")
        return FieldAccessor(name=name, offset=start)

    def _parse_style(self) -> Optional[str]:
        """Парсит суффикс стиля: :name"""
        self._skip_ws()
        if self._at_end() or self.source[self._pos] != ":":
            return None
        self._pos += 1
        self._skip_ws()
        return self._consume_identifier("expected style name after ':'")

    # Вспомогательные методы

    def _consume_identifier(self, error_message: str) -> str:
        match = _IDENT_RE.match(self.source, self._pos)
        if not match:
            self._fail(error_message)
        self._pos = match.end()
        return match.group(0)

    def _skip_ws(self) -> None:
        self._pos = _WS_RE.match(self.source, self._pos).end()

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _abs(self, pos: int) -> int:
        return self.offset + pos

    def _fail(self, reason: str) -> NoReturn:
        # Строка и колонка ошибки внутри (возможно многострочного) выражения
        prefix = self.source[:self._pos]
        newlines = prefix.count("\n")
        if newlines:
            line = self.line + newlines
            column = len(prefix) - prefix.rfind("\n")
        else:
            line = self.line
            column = self.column + len(prefix)
        raise InvalidExpression(
            offset=self._abs(self._pos),
            source_text=self.source,
            line=line,
            column=column,
            reason=reason,
        )


def parse_path(source: str, offset: int = 0, line: int = 1, column: int = 1) -> ParsedPath:
    """Удобная функция для разбора текста выражения."""
    return PathParser(source, offset, line, column).parse()


__all__ = [
    "IndexAccessor",
    "FieldAccessor",
    "Accessor",
    "ParsedPath",
    "PathParser",
    "parse_path",
]
