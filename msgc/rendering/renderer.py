"""
Рендерер значений и шаблонов.

Превращает Value в текст: скаляры форматируются по ScalarFormats,
стили применяются через реестр стилей, последовательности рендерятся
поэлементно и сворачиваются Collapser'ом. Отображение (Mapping)
напрямую не рендерится: выражение должно сначала привести его к
скаляру или последовательности.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from ..collapse import collapse
from ..errors import TypeMismatch, UnsupportedStyle
from ..evaluator import PathEvaluator
from ..styles.capability import Capability
from ..styles.registry import StyleRegistry, get_registry
from ..template.nodes import Expression, Literal, Template
from ..types import DEFAULT_OPTIONS, RenderOptions
from ..values import Context, Mapping, Scalar, Sequence, Value, to_value

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Span:
    """
    Отрендеренный фрагмент текста с необязательным тегом стиля
    (до применения преобразования стиля).
    """
    text: str
    style: Optional[str] = None


@dataclass(frozen=True)
class RenderedFragment:
    """Итоговый текст одной логической части сообщения."""
    text: str

    @property
    def length(self) -> int:
        return len(self.text)

    @property
    def multiline(self) -> bool:
        return "\n" in self.text

    def __str__(self) -> str:
        return self.text


class Renderer:
    """
    Рендерер значений с учётом стилей и возможностей вывода.
    """

    def __init__(self, options: Optional[RenderOptions] = None, registry: Optional[StyleRegistry] = None):
        """
        Args:
            options: Настройки рендеринга
            registry: Реестр стилей (по умолчанию — реестр процесса)
        """
        self.options = options or DEFAULT_OPTIONS
        self.registry = registry or get_registry()

    @property
    def capability(self) -> Capability:
        return self.options.capability

    def render(self, value: Any, style: Optional[str] = None, *, source_text: str = "", offset: int = 0) -> str:
        """
        Рендерит значение в текст.

        Args:
            value: Value или данные Python (будут преобразованы через to_value)
            style: Стиль, применяемый поверх собственного стиля значения
            source_text: Текст выражения (для диагностики)
            offset: Позиция выражения в шаблоне (для диагностики)

        Raises:
            TypeMismatch: Попытка отрендерить Mapping
            UnsupportedStyle: Неизвестный стиль в строгом режиме
        """
        value = to_value(value)

        if isinstance(value, Scalar):
            return self._render_scalar(value, style, source_text, offset)
        if isinstance(value, Sequence):
            return self._render_sequence(value, style, source_text, offset)
        if isinstance(value, Mapping):
            raise TypeMismatch(
                offset=offset,
                source_text=source_text,
                expected="scalar or sequence",
                actual="mapping",
            )
        raise TypeError(f"Unknown value type: {type(value).__name__}")

    def span(self, value: Scalar) -> Span:
        """Текст скаляра с его собственным тегом стиля."""
        return Span(self.options.formats.format(value.value), value.style)

    def _render_scalar(self, value: Scalar, style: Optional[str], source_text: str, offset: int) -> str:
        # Сначала собственный стиль значения, затем запрошенный поверх него
        span = self.span(value)
        text = span.text
        if span.style:
            text = self._apply_style(span.style, text, source_text, offset)
        if style and style != span.style:
            text = self._apply_style(style, text, source_text, offset)
        return text

    def _render_sequence(self, value: Sequence, style: Optional[str], source_text: str, offset: int) -> str:
        # Собственный стиль элемента заменяет унаследованный, а не вкладывается в него
        inherited = value.style or style
        rendered: List[str] = []
        for item in value.items:
            item_style = None if getattr(item, "style", None) else inherited
            rendered.append(self.render(item, item_style, source_text=source_text, offset=offset))
        return collapse(rendered, self.options.collapse)

    def _apply_style(self, style: str, text: str, source_text: str, offset: int) -> str:
        try:
            transform = self.registry.resolve(style, self.capability, strict=self.options.strict_styles)
        except UnsupportedStyle as e:
            raise UnsupportedStyle(
                offset=offset,
                source_text=source_text or style,
                style=e.style,
            ) from None
        return transform(text)

    # ---- Шаблоны ----

    def render_template(self, template: Template, context: Optional[Context] = None) -> RenderedFragment:
        """
        Рендерит шаблон в контексте.

        Шаблон без выражений рендерится в свой исходный текст.

        Raises:
            EvalError: При ошибке вычисления выражения
            RenderError: При ошибке рендеринга
        """
        if not template.has_expressions:
            return RenderedFragment(self._join_literals(template))

        ctx = context if context is not None else Context()
        evaluator = PathEvaluator(ctx)
        parts: List[str] = []
        for segment in template.segments:
            if isinstance(segment, Literal):
                parts.append(segment.text)
            elif isinstance(segment, Expression):
                value = evaluator.evaluate_expression(segment)
                parts.append(self.render(
                    value,
                    segment.style,
                    source_text=segment.source_text,
                    offset=segment.offset,
                ))
        return RenderedFragment("".join(parts))

    @staticmethod
    def _join_literals(template: Template) -> str:
        return "".join(s.text for s in template.segments if isinstance(s, Literal))


def render_template(
    template: Template,
    context: Optional[Context] = None,
    options: Optional[RenderOptions] = None,
    registry: Optional[StyleRegistry] = None,
) -> RenderedFragment:
    """Удобная функция для рендеринга шаблона."""
    return Renderer(options, registry).render_template(template, context)


__all__ = ["Renderer", "RenderedFragment", "Span", "render_template"]
