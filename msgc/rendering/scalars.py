"""
Правила преобразования скалярных значений в текст.

Каждый вид скаляра (строка, число, булево, отсутствующее значение)
форматируется детерминированно и независимо от локали. Любое правило
можно переопределить через ScalarFormats.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

Number = Union[int, float]


def format_number(value: Number) -> str:
    """
    Минимальная текстовая форма числа.

    - int → десятичная запись
    - float → кратчайшая форма, однозначно восстанавливающая значение;
      целые значения выводятся без ".0"
    - nan / inf / -inf → "nan", "inf", "-inf"
    """
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


@dataclass(frozen=True)
class ScalarFormats:
    """
    Настройки форматирования скаляров.

    Attributes:
        true_word: Текст для True
        false_word: Текст для False
        absent_marker: Текст для отсутствующего значения (None)
        number: Форматтер чисел (по умолчанию format_number)
        string: Форматтер строк (по умолчанию строка выводится как есть)
    """
    true_word: str = "true"
    false_word: str = "false"
    absent_marker: str = "NULL"
    number: Optional[Callable[[Number], str]] = None
    string: Optional[Callable[[str], str]] = None

    def format(self, value: Any) -> str:
        """Форматирует скалярное значение в текст."""
        if value is None:
            return self.absent_marker
        # bool проверяем раньше int: bool является подклассом int
        if isinstance(value, bool):
            return self.true_word if value else self.false_word
        if isinstance(value, (int, float)):
            return (self.number or format_number)(value)
        if isinstance(value, str):
            return self.string(value) if self.string else value
        raise TypeError(f"Unsupported scalar type: {type(value).__name__}")

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScalarFormats":
        """Создание экземпляра из словаря (из YAML)."""
        kwargs: Dict[str, Any] = {}
        for field_name, keys in _FORMAT_KEYS.items():
            for key in keys:
                if key in data:
                    kwargs[field_name] = str(data[key])
                    break
        return cls(**kwargs)


# YAML превращает ключи true/false в булевы, поэтому используем явные имена
_FORMAT_KEYS = {
    "true_word": ("true_word", "trueWord"),
    "false_word": ("false_word", "falseWord"),
    "absent_marker": ("absent_marker", "absentMarker", "absent"),
}


DEFAULT_FORMATS = ScalarFormats()

__all__ = ["ScalarFormats", "DEFAULT_FORMATS", "format_number"]
