"""
msgc — движок составления сообщений.

Шаблоны с подстановкой выражений, стилизованные фрагменты,
свёртка списков и сборка многострочных сообщений.
"""

from __future__ import annotations

from .collapse import collapse
from .compose import Composer, compose
from .engine import RenderResult, render, render_value, try_render
from .errors import (
    ConfigError,
    EvalError,
    FieldNotFound,
    IndexOutOfRange,
    InvalidEscape,
    InvalidExpression,
    MsgcError,
    MsgcUserError,
    ParseError,
    RenderError,
    TypeMismatch,
    UnbalancedDelimiter,
    UnresolvedReference,
    UnsupportedStyle,
)
from .message import MessageBuilder
from .rendering.renderer import RenderedFragment, Renderer
from .rendering.scalars import ScalarFormats
from .styles import Capability, StyleRegistry, StyleTransform, detect_capability, get_registry, register_style
from .template import Template, parse_template
from .types import CollapseOptions, ComposeOptions, Placement, RenderOptions
from .values import Context, Mapping, Scalar, Sequence, styled, to_value

__all__ = [
    # API
    "parse_template",
    "render",
    "try_render",
    "render_value",
    "register_style",
    "get_registry",
    "collapse",
    "compose",
    # Типы
    "Template",
    "RenderedFragment",
    "RenderResult",
    "Renderer",
    "Composer",
    "MessageBuilder",
    "Placement",
    "CollapseOptions",
    "ComposeOptions",
    "RenderOptions",
    "ScalarFormats",
    "Capability",
    "detect_capability",
    "StyleRegistry",
    "StyleTransform",
    "Context",
    "Scalar",
    "Sequence",
    "Mapping",
    "styled",
    "to_value",
    # Ошибки
    "MsgcUserError",
    "MsgcError",
    "ParseError",
    "UnbalancedDelimiter",
    "InvalidEscape",
    "InvalidExpression",
    "EvalError",
    "UnresolvedReference",
    "IndexOutOfRange",
    "FieldNotFound",
    "TypeMismatch",
    "RenderError",
    "UnsupportedStyle",
    "ConfigError",
]
