"""
Модель значений контекста.

Value — явное размеченное объединение:
- Scalar: строка, число, булево или отсутствующее значение (None)
- Sequence: упорядоченный список значений
- Mapping: именованные поля

Данные вызывающей стороны преобразуются в Value один раз на границе
(to_value / Context.from_mapping) и дальше не зависят от исходных объектов.
"""

from __future__ import annotations

import datetime
import os
from collections.abc import Mapping as AbcMapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, Iterator, Optional, Tuple, Union

ScalarData = Union[str, int, float, bool, None]


@dataclass(frozen=True)
class Value:
    """Базовый класс для всех значений контекста."""

    @property
    def kind(self) -> str:
        return type(self).__name__.lower()


@dataclass(frozen=True)
class Scalar(Value):
    """
    Скалярное значение с необязательным тегом стиля.

    Тег стиля применяется при рендеринге (например, "code" или "quote").
    """
    value: ScalarData = None
    style: Optional[str] = None

    @property
    def is_absent(self) -> bool:
        return self.value is None


@dataclass(frozen=True)
class Sequence(Value):
    """Упорядоченная последовательность значений."""
    items: Tuple[Value, ...] = ()
    style: Optional[str] = None

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.items)


@dataclass(frozen=True)
class Mapping(Value):
    """Набор именованных полей."""
    fields: AbcMapping = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        if not isinstance(self.fields, MappingProxyType):
            object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))

    def __hash__(self) -> int:
        return hash(tuple(sorted(self.fields.items(), key=lambda kv: kv[0])))

    def get(self, name: str) -> Optional[Value]:
        return self.fields.get(name)


def to_value(data: Any) -> Value:
    """
    Преобразует данные Python в Value.

    Правила:
    - Value → как есть
    - None, str, bool, int, float → Scalar
    - os.PathLike → Scalar с путём в виде строки
    - date, datetime, time → Scalar в формате ISO 8601
    - list, tuple → Sequence
    - Mapping → Mapping (ключи приводятся к строкам)

    Raises:
        TypeError: Для неподдерживаемых типов
    """
    if isinstance(data, Value):
        return data
    if data is None or isinstance(data, (str, bool, int, float)):
        return Scalar(data)
    if isinstance(data, os.PathLike):
        return Scalar(os.fspath(data))
    if isinstance(data, (datetime.date, datetime.time)):
        return Scalar(data.isoformat())
    if isinstance(data, (list, tuple)):
        return Sequence(tuple(to_value(item) for item in data))
    if isinstance(data, AbcMapping):
        return Mapping({str(k): to_value(v) for k, v in data.items()})
    raise TypeError(f"Cannot use value of type {type(data).__name__} in a message context")


def styled(data: Any, style: Optional[str]) -> Value:
    """
    Помечает значение стилем.

    Для Mapping стиль не имеет смысла (отображение нельзя отрендерить напрямую),
    поэтому такой вызов считается ошибкой программиста.
    """
    value = to_value(data)
    if isinstance(value, Scalar):
        return Scalar(value.value, style=style)
    if isinstance(value, Sequence):
        return Sequence(value.items, style=style)
    raise TypeError("Mapping values cannot carry a style")


class Context(AbcMapping):
    """
    Неизменяемое отображение имя → Value для одного рендеринга.
    """

    __slots__ = ("_values",)

    def __init__(self, values: Optional[AbcMapping] = None):
        converted: Dict[str, Value] = {}
        for name, data in (values or {}).items():
            converted[str(name)] = to_value(data)
        self._values = MappingProxyType(converted)

    @classmethod
    def from_mapping(cls, values: Optional[AbcMapping] = None, **extra: Any) -> "Context":
        if isinstance(values, Context) and not extra:
            return values
        merged: Dict[str, Any] = dict(values or {})
        merged.update(extra)
        return cls(merged)

    def __getitem__(self, name: str) -> Value:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"Context({dict(self._values)!r})"


EMPTY_CONTEXT = Context()

__all__ = [
    "Value",
    "Scalar",
    "Sequence",
    "Mapping",
    "Context",
    "EMPTY_CONTEXT",
    "to_value",
    "styled",
]
