"""
Сборка многострочного сообщения из фрагментов.

Composer — единственное место, где решается, где начинается новая строка:
- inline-фрагмент продолжает текущую строку;
- block-фрагмент начинается с новой строки (кроме самого начала сообщения).

Каждая новая строка получает текущий отступ. Block-фрагмент, который
заканчивается переводом строки и одними пробелами/табами, задаёт отступ
для последующих строк (options.indent + эти пробелы). Хвостовые пустые
строки сворачиваются максимум в один завершающий перевод строки.
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional, Tuple, Union

from .rendering.renderer import RenderedFragment
from .types import ComposeOptions, Placement

Fragment = Union[str, RenderedFragment]
Part = Tuple[Fragment, Union[Placement, str]]

_TRAILING_INDENT_RE = re.compile(r"\n([ \t]+)$")


class _Line:
    """Строка итогового сообщения."""

    __slots__ = ("indent", "content", "soft")

    def __init__(self, indent: str, content: str = "", soft: bool = False):
        self.indent = indent
        self.content = content
        # Открыта переводом строки внутри текста фрагмента и пока пуста
        self.soft = soft

    @property
    def is_blank(self) -> bool:
        return not self.content.strip()

    def render(self) -> str:
        return f"{self.indent}{self.content}" if self.content else ""


def split_trailing_indent(text: str) -> Tuple[str, Optional[str]]:
    """
    Отделяет явный отступ в конце фрагмента.

    "Files:\\n    " → ("Files:", "    "); без такого хвоста → (text, None).
    """
    match = _TRAILING_INDENT_RE.search(text)
    if not match:
        return text, None
    return text[:match.start()], match.group(1)


class Composer:
    """
    Сборщик сообщений.

    Порядок фрагментов сохраняется: порядок входа — порядок в выводе.
    """

    def __init__(self, options: Optional[ComposeOptions] = None):
        self.options = options or ComposeOptions()

    def compose(self, parts: Iterable[Part]) -> str:
        """
        Собирает сообщение.

        Args:
            parts: Пары (фрагмент, размещение)

        Returns:
            Итоговый текст
        """
        base_indent = str(self.options.indent)
        indent = base_indent
        lines: List[_Line] = []

        for fragment, placement in parts:
            text = str(fragment)
            placement = Placement.parse(placement)
            next_indent: Optional[str] = None

            if placement is Placement.BLOCK:
                text, trailing = split_trailing_indent(text)
                if trailing is not None:
                    next_indent = base_indent + trailing
                self._open_block_line(lines, indent)
            elif not lines:
                lines.append(_Line(indent))

            pieces = text.split("\n")
            current = lines[-1]
            current.content += pieces[0]
            if pieces[0]:
                current.soft = False
            for piece in pieces[1:]:
                lines.append(_Line(indent, piece, soft=not piece))

            if next_indent is not None:
                indent = next_indent

        return self._finish(lines)

    @staticmethod
    def _open_block_line(lines: List[_Line], indent: str) -> None:
        """Начинает строку для block-фрагмента."""
        if lines and lines[-1].soft and not lines[-1].content:
            # Фрагмент уже закончился переводом строки: переиспользуем пустую строку
            lines[-1].soft = False
            lines[-1].indent = indent
            return
        lines.append(_Line(indent))

    @staticmethod
    def _finish(lines: List[_Line]) -> str:
        trailing_blank = False
        while len(lines) > 1 and lines[-1].is_blank:
            lines.pop()
            trailing_blank = True
        text = "\n".join(line.render() for line in lines)
        return text + "\n" if trailing_blank else text


def compose(parts: Iterable[Part], options: Optional[ComposeOptions] = None) -> str:
    """Удобная функция для сборки сообщения."""
    return Composer(options).compose(parts)


__all__ = ["Composer", "compose", "split_trailing_indent", "Part", "Fragment"]
