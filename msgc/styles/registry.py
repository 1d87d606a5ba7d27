"""
Реестр стилей для выделения фрагментов текста.

Сопоставляет имени стиля преобразование строки с учётом возможностей
вывода. При Capability.NONE любое преобразование вырождается в
идентичность: стилизованный и нестилизованный рендер побайтно совпадают.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Set, Tuple, Union

from .capability import Capability
from ..errors import UnsupportedStyle

logger = logging.getLogger(__name__)

TextTransform = Callable[[str], str]

_SGR_HEAD_RE = re.compile(r"^\x1b\[([0-9;]*)m")
_SGR_TAIL_RE = re.compile(r"\x1b\[([0-9;]*)m$")


def _identity(text: str) -> str:
    return text


def sgr(params: str) -> str:
    """ANSI SGR последовательность с указанными параметрами."""
    return f"\x1b[{params}m"


@dataclass(frozen=True)
class StyleTransform:
    """
    Декларативное описание стиля.

    Attributes:
        prefix: Маркер перед текстом в режиме ascii
        suffix: Маркер после текста в режиме ascii
        sgr: Пара параметров SGR (включение, выключение) для режима markup;
             None — в markup используется ascii-оформление
        keep_markers: Сохранять prefix/suffix в режиме markup
    """
    prefix: str = ""
    suffix: str = ""
    sgr: Optional[Tuple[str, str]] = None
    keep_markers: bool = False

    def apply(self, text: str, capability: Capability) -> str:
        if capability is Capability.NONE:
            return text
        if capability is Capability.ASCII or self.sgr is None:
            return f"{self.prefix}{text}{self.suffix}"

        body = f"{self.prefix}{text}{self.suffix}" if self.keep_markers else text
        return self._wrap_sgr(body, capability)

    def _wrap_sgr(self, body: str, capability: Capability) -> str:
        assert self.sgr is not None
        on, off = self.sgr
        if not capability.supports_composition:
            return f"{sgr(on)}{body}{sgr(off)}"

        # Сливаем маркеры со стилем, уже применённым к краям текста
        head = _SGR_HEAD_RE.match(body)
        if head and head.end() < len(body):
            body = sgr(f"{on};{head.group(1)}") + body[head.end():]
        else:
            body = sgr(on) + body
        tail = _SGR_TAIL_RE.search(body)
        if tail and tail.start() > 0:
            return body[:tail.start()] + sgr(f"{tail.group(1)};{off}")
        return body + sgr(off)

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {"prefix": self.prefix, "suffix": self.suffix}
        if self.sgr is not None:
            data["sgr"] = list(self.sgr)
            data["keep_markers"] = self.keep_markers
        return data


Transform = Union[StyleTransform, TextTransform]


class StyleRegistry:
    """
    Реестр стилей.

    Заполняется на этапе инициализации и дальше используется только
    на чтение; регистрация во время рендеринга не предполагается.
    """

    def __init__(self, fallback: Optional[TextTransform] = _identity, install_builtins: bool = True):
        """
        Args:
            fallback: Преобразование для незарегистрированных стилей;
                      None — незарегистрированный стиль является ошибкой
            install_builtins: Зарегистрировать встроенные стили
        """
        self._styles: Dict[str, Transform] = {}
        self.fallback = fallback
        self._warned: Set[str] = set()
        self._lock = threading.Lock()
        if install_builtins:
            from .builtin import install_builtin_styles
            install_builtin_styles(self)

    def register(self, name: str, transform: Transform) -> None:
        """
        Регистрирует стиль, перезаписывая существующий с тем же именем.

        Args:
            name: Имя стиля
            transform: StyleTransform или функция str → str

        Raises:
            ValueError: Пустое имя или неподходящее преобразование
        """
        if not name or not name.strip():
            raise ValueError("Style name must be a non-empty string")
        if not isinstance(transform, StyleTransform) and not callable(transform):
            raise ValueError(f"Style '{name}' must be a StyleTransform or a callable")
        if name in self._styles:
            logger.warning(f"Style '{name}' overwrites existing style")
        with self._lock:
            self._styles[name] = transform
            self._warned.discard(name)

    def unregister(self, name: str) -> None:
        self._styles.pop(name, None)

    def resolve(self, name: str, capability: Capability, *, strict: bool = False) -> TextTransform:
        """
        Возвращает преобразование стиля для указанных возможностей вывода.

        Args:
            name: Имя стиля
            capability: Возможности вывода
            strict: Ошибка вместо отката к простому тексту

        Raises:
            UnsupportedStyle: Стиль не зарегистрирован и отката нет (или strict)
        """
        if capability is Capability.NONE:
            return _identity

        transform = self._styles.get(name)
        if transform is None:
            if strict or self.fallback is None:
                raise UnsupportedStyle(offset=0, source_text=name, style=name)
            with self._lock:
                first_use = name not in self._warned
                self._warned.add(name)
            if first_use:
                logger.warning(f"Unknown style '{name}', rendering as plain text")
            return self.fallback

        if isinstance(transform, StyleTransform):
            return lambda text: transform.apply(text, capability)
        return transform

    def apply(self, name: str, text: str, capability: Capability, *, strict: bool = False) -> str:
        return self.resolve(name, capability, strict=strict)(text)

    def names(self) -> List[str]:
        return sorted(self._styles)

    def __contains__(self, name: object) -> bool:
        return name in self._styles


# ---- Реестр уровня процесса ----

_default_registry: Optional[StyleRegistry] = None
_registry_lock = threading.Lock()


def get_registry() -> StyleRegistry:
    """Возвращает реестр стилей процесса, создавая его при первом обращении."""
    global _default_registry
    if _default_registry is None:
        with _registry_lock:
            if _default_registry is None:
                _default_registry = StyleRegistry()
    return _default_registry


def register_style(name: str, transform: Transform) -> None:
    """Регистрирует стиль в реестре процесса."""
    get_registry().register(name, transform)


def reset_registry() -> StyleRegistry:
    """Пересоздаёт реестр процесса со встроенными стилями."""
    global _default_registry
    with _registry_lock:
        _default_registry = StyleRegistry()
    return _default_registry


__all__ = [
    "StyleRegistry",
    "StyleTransform",
    "Transform",
    "TextTransform",
    "get_registry",
    "register_style",
    "reset_registry",
    "sgr",
]
