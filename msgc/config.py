"""
Загрузчик конфигурации движка из YAML.

Формат msgc.yaml:

    capability: ascii
    collapse:
      separator: ", "
      last_separator: " or "
      oxford_comma: true
      max_items: 5
    compose:
      indent: 2
    formats:
      true_word: "yes"
      false_word: "no"
      absent: "<none>"
    styles:
      guillemets: "«{}»"
      warn:
        prefix: "!"
        suffix: "!"
        sgr: [33, 39]
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError
from .styles.registry import StyleRegistry, StyleTransform
from .types import RenderOptions

logger = logging.getLogger(__name__)

CONFIG_FILE = "msgc.yaml"

_yaml = YAML(typ="safe")


@dataclass
class EngineConfig:
    """
    Конфигурация движка: настройки рендеринга и пользовательские стили.
    """
    options: RenderOptions = field(default_factory=RenderOptions)
    styles: Dict[str, StyleTransform] = field(default_factory=dict)

    def apply(self, registry: StyleRegistry) -> None:
        """Регистрирует пользовательские стили в реестре."""
        for name, transform in self.styles.items():
            registry.register(name, transform)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], origin: str = "<config>") -> "EngineConfig":
        """Создание экземпляра из словаря (из YAML)."""
        unknown = set(data) - _KNOWN_KEYS
        if unknown:
            raise ConfigError(f"{origin}: unknown keys: {', '.join(sorted(str(k) for k in unknown))}")

        for key in ("collapse", "compose", "formats", "styles"):
            if key in data and not isinstance(data[key], Mapping):
                raise ConfigError(f"{origin}: '{key}' must be a mapping")

        try:
            options = RenderOptions.from_dict(data)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"{origin}: {e}") from e

        styles: Dict[str, StyleTransform] = {}
        for name, raw in (data.get("styles") or {}).items():
            styles[str(name)] = _style_from_raw(str(name), raw, origin)

        return cls(options=options, styles=styles)


_KNOWN_KEYS = {
    "capability", "style_capability", "styleCapability",
    "collapse", "compose", "formats", "styles",
    "strict_styles", "strictStyles",
}


def _style_from_raw(name: str, raw: Any, origin: str) -> StyleTransform:
    """
    Разбирает описание стиля.

    Поддерживаются две формы:
    - строка-обёртка, где {} отмечает позицию текста: "«{}»"
    - словарь с ключами prefix, suffix, sgr, keep_markers
    """
    where = f"{origin}: styles.{name}"

    if isinstance(raw, str):
        if raw.count("{}") != 1:
            raise ConfigError(f"{where}: wrapper must contain exactly one '{{}}'")
        prefix, suffix = raw.split("{}")
        return StyleTransform(prefix=prefix, suffix=suffix)

    if not isinstance(raw, Mapping):
        raise ConfigError(f"{where}: expected string or mapping, got {type(raw).__name__}")

    sgr_raw = raw.get("sgr")
    sgr_pair = None
    if sgr_raw is not None:
        if not isinstance(sgr_raw, (list, tuple)) or len(sgr_raw) != 2:
            raise ConfigError(f"{where}: 'sgr' must be a pair [on, off]")
        sgr_pair = (str(sgr_raw[0]), str(sgr_raw[1]))

    return StyleTransform(
        prefix=str(raw.get("prefix", "")),
        suffix=str(raw.get("suffix", "")),
        sgr=sgr_pair,
        keep_markers=bool(raw.get("keep_markers", False)),
    )


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"{path}: invalid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: YAML must be a mapping")
    return raw


def load_config(path: Path) -> EngineConfig:
    """
    Загружает конфигурацию из файла.

    Raises:
        ConfigError: Файл отсутствует или содержит некорректные значения
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")
    config = EngineConfig.from_dict(_read_yaml_map(path), origin=str(path))
    logger.debug("Loaded config from %s (%d custom styles)", path, len(config.styles))
    return config


def find_config(root: Path) -> Optional[Path]:
    """Путь к msgc.yaml в каталоге, если файл существует."""
    candidate = root / CONFIG_FILE
    return candidate if candidate.is_file() else None


__all__ = ["EngineConfig", "load_config", "find_config", "CONFIG_FILE"]
