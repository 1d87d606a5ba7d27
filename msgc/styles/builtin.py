"""
Встроенные стили.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Dict

from .registry import StyleTransform

if TYPE_CHECKING:
    from .registry import StyleRegistry


BUILTIN_STYLES: Dict[str, StyleTransform] = {
    # 'value' в кавычках
    "quote": StyleTransform(prefix="'", suffix="'"),
    # `identifier` в обратных апострофах, в терминале ещё и серым
    "code": StyleTransform(prefix="`", suffix="`", sgr=("90", "39"), keep_markers=True),
    # сильное выделение
    "strong": StyleTransform(prefix="*", suffix="*", sgr=("1", "22")),
    # курсив
    "emph": StyleTransform(prefix="_", suffix="_", sgr=("3", "23")),
    # пути к файлам
    "path": StyleTransform(prefix="'", suffix="'", sgr=("36", "39")),
    # значения
    "value": StyleTransform(prefix="'", suffix="'", sgr=("34", "39")),
    # имена полей и аргументов
    "field": StyleTransform(sgr=("32", "39")),
}


def install_builtin_styles(registry: "StyleRegistry") -> None:
    """Регистрирует встроенные стили в реестре."""
    for name, transform in BUILTIN_STYLES.items():
        registry.register(name, transform)


__all__ = ["BUILTIN_STYLES", "install_builtin_styles"]
