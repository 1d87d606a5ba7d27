"""
Публичный API движка сообщений.

Точки входа:
- parse_template: разбор шаблона (с кэшем процесса)
- render / try_render: рендеринг шаблона в контексте
- render_value: рендеринг отдельного значения
- register_style: регистрация стиля в реестре процесса
- collapse / compose: свёртка списков и сборка сообщений
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from .collapse import collapse
from .compose import compose
from .errors import MsgcError
from .rendering.renderer import RenderedFragment, Renderer
from .styles.registry import StyleRegistry, get_registry, register_style
from .template import Template, parse_template
from .types import RenderOptions
from .values import Context

logger = logging.getLogger(__name__)


def _as_template(template: Union[str, Template]) -> Template:
    if isinstance(template, Template):
        return template
    return parse_template(template)


def render(
    template: Union[str, Template],
    context: Optional[Mapping[str, Any]] = None,
    options: Optional[RenderOptions] = None,
    *,
    registry: Optional[StyleRegistry] = None,
    **values: Any,
) -> RenderedFragment:
    """
    Рендерит шаблон в контексте.

    Args:
        template: Разобранный шаблон или его текст (разбирается через кэш)
        context: Значения для выражений
        options: Настройки рендеринга
        registry: Реестр стилей (по умолчанию — реестр процесса)
        **values: Дополнительные значения контекста

    Returns:
        Отрендеренный фрагмент

    Raises:
        ParseError: Текст шаблона некорректен
        EvalError: Выражение не вычисляется в контексте
        RenderError: Ошибка стиля в строгом режиме
    """
    parsed = _as_template(template)
    ctx = Context.from_mapping(context, **values)
    return Renderer(options, registry).render_template(parsed, ctx)


@dataclass(frozen=True)
class RenderResult:
    """
    Результат рендеринга в виде значения: либо фрагмент, либо ошибка.
    """
    fragment: Optional[RenderedFragment] = None
    error: Optional[MsgcError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def text(self) -> str:
        if self.fragment is None:
            raise ValueError(f"Render failed: {self.error}")
        return self.fragment.text


def try_render(
    template: Union[str, Template],
    context: Optional[Mapping[str, Any]] = None,
    options: Optional[RenderOptions] = None,
    *,
    registry: Optional[StyleRegistry] = None,
    **values: Any,
) -> RenderResult:
    """
    Как render, но ошибки разбора и вычисления возвращаются как значение.

    Вызывающая сторона сама решает, станет ли ошибка сообщением,
    прерыванием или записью в лог.
    """
    try:
        return RenderResult(fragment=render(template, context, options, registry=registry, **values))
    except MsgcError as e:
        logger.debug("Render failed: %s", e)
        return RenderResult(error=e)


def render_value(
    value: Any,
    style: Optional[str] = None,
    options: Optional[RenderOptions] = None,
    *,
    registry: Optional[StyleRegistry] = None,
) -> str:
    """Рендерит одно значение (скаляр или последовательность) с необязательным стилем."""
    return Renderer(options, registry).render(value, style)


__all__ = [
    "parse_template",
    "render",
    "try_render",
    "render_value",
    "RenderResult",
    "register_style",
    "get_registry",
    "collapse",
    "compose",
]
