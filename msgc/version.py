from __future__ import annotations

from importlib import metadata

DIST_NAMES = ("message-composer", "msgc")


def tool_version() -> str:
    """
    Версия установленного дистрибутива.
    Модуль не импортирует остальные части пакета (во избежание циклов).
    """
    for dist in DIST_NAMES:
        try:
            return metadata.version(dist)
        except metadata.PackageNotFoundError:
            continue
    return "0.0.0"


__all__ = ["tool_version"]
