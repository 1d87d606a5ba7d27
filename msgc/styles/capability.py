"""
Возможности целевого вывода для стилизации.

Определяет, какие стили может отобразить получатель текста:
- none: только простой текст (все стили вырождаются в идентичность)
- ascii: стили обозначаются ASCII-символами (кавычки, обратные апострофы)
- markup: цветной терминал (ANSI SGR последовательности)
"""

from __future__ import annotations

import enum
import os
from typing import Mapping, Optional, TextIO


CAPABILITY_ENV = "MSGC_CAPABILITY"


class Capability(enum.Enum):
    """Уровень поддержки стилей у получателя текста."""
    NONE = "none"
    ASCII = "ascii"
    MARKUP = "markup"

    @property
    def supports_composition(self) -> bool:
        """Умеет ли цель сливать вложенные стили вместо их буквального вложения."""
        return self is Capability.MARKUP

    @classmethod
    def parse(cls, value: "str | Capability | None") -> "Capability":
        """
        Преобразует строку в Capability.

        Принимает также синонимы: "plain" → none, "color"/"colour"/"ansi" → markup.
        None трактуется как none.
        """
        if value is None:
            return cls.NONE
        if isinstance(value, Capability):
            return value
        key = str(value).strip().lower()
        key = _ALIASES.get(key, key)
        for member in cls:
            if member.value == key:
                return member
        allowed = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown style capability '{value}'. Expected one of: {allowed}")


_ALIASES = {
    "plain": "none",
    "off": "none",
    "color": "markup",
    "colour": "markup",
    "ansi": "markup",
}


def detect_capability(stream: Optional[TextIO] = None, environ: Optional[Mapping[str, str]] = None) -> Capability:
    """
    Определяет возможности вывода по окружению.

    Порядок:
    1. MSGC_CAPABILITY, если задана
    2. NO_COLOR → ascii
    3. TTY и TERM != dumb → markup
    4. иначе ascii
    """
    env = os.environ if environ is None else environ

    explicit = env.get(CAPABILITY_ENV)
    if explicit:
        return Capability.parse(explicit)

    if "NO_COLOR" in env:
        return Capability.ASCII

    isatty = getattr(stream, "isatty", None)
    try:
        is_tty = bool(isatty()) if callable(isatty) else False
    except ValueError:
        # закрытый поток
        is_tty = False

    if is_tty and env.get("TERM", "") != "dumb":
        return Capability.MARKUP
    return Capability.ASCII


__all__ = ["Capability", "CAPABILITY_ENV", "detect_capability"]
