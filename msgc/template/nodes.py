"""
Сегменты шаблона.

Шаблон — неизменяемая упорядоченная последовательность литералов
и выражений в порядке их появления в исходном тексте.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional, Tuple, Union

from .path import ParsedPath


@dataclass(frozen=True)
class Literal:
    """
    Литеральный текст шаблона.

    Экранирования уже раскрыты: "{{" хранится как "{".
    """
    text: str
    offset: int = 0


@dataclass(frozen=True)
class Expression:
    """
    Выражение, подставляемое при рендеринге.

    source_text — исходный текст между разделителями, offset — его позиция
    в шаблоне (сразу после открывающего разделителя).
    """
    source_text: str
    path: ParsedPath
    offset: int = 0
    line: int = 1
    column: int = 1

    @property
    def style(self) -> Optional[str]:
        return self.path.style


Segment = Union[Literal, Expression]


@dataclass(frozen=True)
class Template:
    """Разобранный шаблон: исходный текст и его сегменты."""
    source: str
    segments: Tuple[Segment, ...] = ()

    @property
    def has_expressions(self) -> bool:
        return any(isinstance(s, Expression) for s in self.segments)

    def expressions(self) -> Iterator[Expression]:
        for segment in self.segments:
            if isinstance(segment, Expression):
                yield segment

    def names(self) -> Tuple[str, ...]:
        """Базовые имена, на которые ссылается шаблон (без повторов, в порядке появления)."""
        seen = []
        for expr in self.expressions():
            if expr.path.base not in seen:
                seen.append(expr.path.base)
        return tuple(seen)


__all__ = ["Literal", "Expression", "Segment", "Template"]
