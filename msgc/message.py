"""
Построитель сообщений.

Связывает весь конвейер (разбор → вычисление → рендеринг → сборка)
в цепочку вызовов:

    text = (MessageBuilder(options)
            .line("Renaming {n} files:", n=2)
            .bullet("{old:path} -> {new:path}", kind="arrow", old="a", new="b")
            .build())
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from .collapse import collapse
from .compose import Composer, Fragment
from .rendering.renderer import Renderer
from .styles.capability import Capability
from .styles.registry import StyleRegistry
from .template import parse_template
from .types import DEFAULT_OPTIONS, Placement, RenderOptions
from .values import Context

# Маркеры пунктов: (ascii, markup)
BULLETS: Dict[str, Tuple[str, str]] = {
    "bullet": ("*", "•"),
    "info": ("i", "ℹ"),
    "success": ("v", "✔"),
    "warning": ("!", "!"),
    "danger": ("x", "✖"),
    "arrow": (">", "→"),
}


def bullet_mark(kind: str, capability: Capability) -> str:
    """
    Маркер пункта для указанных возможностей вывода.

    При capability none маркер ascii: маркер является частью текста, а не стилем.
    """
    try:
        ascii_mark, markup_mark = BULLETS[kind]
    except KeyError:
        raise ValueError(f"Unknown bullet kind '{kind}'. Expected one of: {', '.join(sorted(BULLETS))}") from None
    return markup_mark if capability is Capability.MARKUP else ascii_mark


class MessageBuilder:
    """
    Последовательная сборка сообщения из шаблонов и списков.
    """

    def __init__(self, options: Optional[RenderOptions] = None, registry: Optional[StyleRegistry] = None):
        self.options = options or DEFAULT_OPTIONS
        self.renderer = Renderer(self.options, registry)
        self._parts: List[Tuple[Fragment, Placement]] = []

    def _render(self, template: str, context: Dict[str, Any]) -> str:
        return self.renderer.render_template(parse_template(template), Context(context)).text

    def line(self, template: str, **context: Any) -> "MessageBuilder":
        """Добавляет шаблон с новой строки."""
        self._parts.append((self._render(template, context), Placement.BLOCK))
        return self

    def inline(self, template: str, **context: Any) -> "MessageBuilder":
        """Продолжает текущую строку шаблоном."""
        self._parts.append((self._render(template, context), Placement.INLINE))
        return self

    def items(self, values: Any, style: Optional[str] = None, **collapse_overrides: Any) -> "MessageBuilder":
        """
        Добавляет свёрнутый список значений с новой строки.

        Args:
            values: Последовательность значений (Python или Value)
            style: Стиль каждого элемента
            **collapse_overrides: Замена полей CollapseOptions
        """
        rendered = [self.renderer.render(v, style) for v in values]
        text = collapse(rendered, self.options.collapse, **collapse_overrides)
        self._parts.append((text, Placement.BLOCK))
        return self

    def bullet(self, template: str, kind: str = "bullet", **context: Any) -> "MessageBuilder":
        """Добавляет пункт с маркером."""
        mark = bullet_mark(kind, self.options.capability)
        self._parts.append((f"{mark} {self._render(template, context)}", Placement.BLOCK))
        return self

    def blank(self) -> "MessageBuilder":
        """Добавляет пустую строку."""
        self._parts.append(("", Placement.BLOCK))
        return self

    def build(self) -> str:
        return Composer(self.options.compose).compose(self._parts)

    def __str__(self) -> str:
        return self.build()


__all__ = ["MessageBuilder", "BULLETS", "bullet_mark"]
