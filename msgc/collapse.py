"""
Свёртка упорядоченной последовательности строк в читаемый список.

Правила по убыванию приоритета:
1. Пустая последовательность → пустая строка
2. Один элемент → сам элемент без изменений
3. Больше max_items → первые max_items элементов и сводка "N more"
   в роли последнего элемента
4. Иначе элементы через separator, последний через last_separator;
   при oxford_comma и 3+ элементах separator ставится и перед last_separator
"""

from __future__ import annotations

from typing import Any, List, Optional
from typing import Sequence as SequenceType

from .types import CollapseOptions

DEFAULT_COLLAPSE = CollapseOptions()


def collapse(items: SequenceType[str], options: Optional[CollapseOptions] = None, **overrides: Any) -> str:
    """
    Сворачивает последовательность строк в одну строку.

    Вход не изменяется и не переупорядочивается (сортируется копия,
    только если явно запрошено options.sort).

    Args:
        items: Уже отрендеренные элементы
        options: Правила свёртки
        **overrides: Точечная замена полей options (separator=..., oxford_comma=...)

    Returns:
        Свёрнутый текст
    """
    opts = options or DEFAULT_COLLAPSE
    if overrides:
        opts = opts.replace(**overrides)

    values: List[str] = list(items)
    if opts.sort:
        values.sort()

    if not values:
        return ""
    if len(values) == 1:
        return values[0]

    if opts.max_items is not None and len(values) > opts.max_items:
        omitted = len(values) - opts.max_items
        shown = values[:opts.max_items]
        shown.append(opts.more_format.format(n=omitted))
        return _join(shown, opts)

    return _join(values, opts)


def _join(values: List[str], opts: CollapseOptions) -> str:
    """Склеивает два и более элемента."""
    if len(values) == 2:
        pair = opts.pair_separator if opts.pair_separator is not None else opts.last_separator
        return f"{values[0]}{pair}{values[1]}"

    head = opts.separator.join(values[:-1])
    last_sep = opts.last_separator
    if opts.oxford_comma:
        last_sep = _oxford_separator(opts.separator, opts.last_separator)
    return f"{head}{last_sep}{values[-1]}"


def _oxford_separator(separator: str, last_separator: str) -> str:
    """
    Разделитель перед последним элементом с оксфордской запятой.

    ", " + " and " → ", and " (пробельный хвост separator не дублируется);
    separator из одних пробельных символов (перевод строки) вставляется как есть.
    """
    stripped = separator.rstrip()
    if stripped and last_separator[:1].isspace():
        return stripped + last_separator
    return separator + last_separator


__all__ = ["collapse", "DEFAULT_COLLAPSE"]
