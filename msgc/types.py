from __future__ import annotations

import dataclasses
import enum
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Union

from .rendering.scalars import ScalarFormats
from .styles.capability import Capability


# ---- Размещение фрагментов ----

class Placement(enum.Enum):
    """Как фрагмент встаёт в итоговое сообщение."""
    INLINE = "inline"  # продолжает текущую строку
    BLOCK = "block"    # начинается с новой строки

    @classmethod
    def parse(cls, value: "str | Placement") -> "Placement":
        if isinstance(value, Placement):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown placement '{value}'. Expected 'inline' or 'block'") from None


def _pick(data: Mapping[str, Any], *keys: str) -> Any:
    """Возвращает значение первого найденного ключа (snake_case или camelCase)."""
    for key in keys:
        if key in data:
            return data[key]
    return None


# -----------------------------
@dataclass(frozen=True)
class CollapseOptions:
    """
    Правила свёртки последовательности строк в одну строку.

    Attributes:
        separator: Разделитель между элементами (кроме двух последних)
        last_separator: Разделитель перед последним элементом
        oxford_comma: При 3+ элементах вставлять separator перед last_separator
        max_items: Сколько элементов показывать до сводки "N more"
        pair_separator: Разделитель для ровно двух элементов (None → last_separator)
        more_format: Шаблон сводки об опущенных элементах, {n} — их количество
        sort: Сортировать копию входа перед свёрткой
    """
    separator: str = ", "
    last_separator: str = " and "
    oxford_comma: bool = False
    max_items: Optional[int] = None
    pair_separator: Optional[str] = None
    more_format: str = "{n} more"
    sort: bool = False

    def __post_init__(self):
        if self.max_items is not None and self.max_items < 1:
            raise ValueError(f"max_items must be >= 1, got {self.max_items}")

    def replace(self, **changes: Any) -> "CollapseOptions":
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CollapseOptions":
        """Создание экземпляра из словаря (из YAML или CLI)."""
        kwargs: Dict[str, Any] = {}
        for name, keys in _COLLAPSE_KEYS.items():
            value = _pick(data, *keys)
            if value is not None:
                kwargs[name] = value
        if "max_items" in kwargs:
            kwargs["max_items"] = int(kwargs["max_items"])
        for flag in ("oxford_comma", "sort"):
            if flag in kwargs:
                kwargs[flag] = bool(kwargs[flag])
        return cls(**kwargs)


_COLLAPSE_KEYS = {
    "separator": ("separator",),
    "last_separator": ("last_separator", "lastSeparator"),
    "oxford_comma": ("oxford_comma", "oxfordComma"),
    "max_items": ("max_items", "maxItems"),
    "pair_separator": ("pair_separator", "pairSeparator"),
    "more_format": ("more_format", "moreFormat"),
    "sort": ("sort",),
}


@dataclass(frozen=True)
class ComposeOptions:
    """
    Правила сборки сообщения из фрагментов.

    Attributes:
        indent: Отступ для каждой строки блока (строка или число пробелов)
    """
    indent: Union[str, int] = ""

    def __post_init__(self):
        if isinstance(self.indent, bool):
            raise ValueError("indent must be a string or a number of spaces")
        if isinstance(self.indent, int):
            if self.indent < 0:
                raise ValueError(f"indent must be >= 0, got {self.indent}")
            object.__setattr__(self, "indent", " " * self.indent)
        elif self.indent.strip(" \t"):
            raise ValueError(f"indent must contain only spaces and tabs, got {self.indent!r}")

    def replace(self, **changes: Any) -> "ComposeOptions":
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ComposeOptions":
        indent = _pick(data, "indent")
        return cls(indent=indent) if indent is not None else cls()


@dataclass(frozen=True)
class RenderOptions:
    """
    Полный набор настроек одного вызова рендеринга.

    Attributes:
        capability: Возможности вывода для стилей
        collapse: Свёртка значений-последовательностей
        compose: Сборка многострочных сообщений
        formats: Форматирование скаляров
        strict_styles: Ошибка UnsupportedStyle вместо отката к простому тексту
    """
    capability: Capability = Capability.NONE
    collapse: CollapseOptions = field(default_factory=CollapseOptions)
    compose: ComposeOptions = field(default_factory=ComposeOptions)
    formats: ScalarFormats = field(default_factory=ScalarFormats)
    strict_styles: bool = False

    def __post_init__(self):
        if not isinstance(self.capability, Capability):
            object.__setattr__(self, "capability", Capability.parse(self.capability))

    def replace(self, **changes: Any) -> "RenderOptions":
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RenderOptions":
        """
        Создание экземпляра из словаря.

        Ключи: capability (или styleCapability), collapse, compose, formats, strict_styles.
        """
        kwargs: Dict[str, Any] = {}
        capability = _pick(data, "capability", "style_capability", "styleCapability")
        if capability is not None:
            kwargs["capability"] = Capability.parse(capability)
        if isinstance(data.get("collapse"), Mapping):
            kwargs["collapse"] = CollapseOptions.from_dict(data["collapse"])
        if isinstance(data.get("compose"), Mapping):
            kwargs["compose"] = ComposeOptions.from_dict(data["compose"])
        if isinstance(data.get("formats"), Mapping):
            kwargs["formats"] = ScalarFormats.from_dict(data["formats"])
        strict = _pick(data, "strict_styles", "strictStyles")
        if strict is not None:
            kwargs["strict_styles"] = bool(strict)
        return cls(**kwargs)


DEFAULT_OPTIONS = RenderOptions()

__all__ = [
    "Placement",
    "CollapseOptions",
    "ComposeOptions",
    "RenderOptions",
    "DEFAULT_OPTIONS",
]
