"""
Кэш разобранных шаблонов.

Разбор детерминирован, поэтому шаблон достаточно разобрать один раз
и переиспользовать с разными контекстами.
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Dict, Optional, Tuple

from .lexer import DEFAULT_DELIMITERS, Delimiters, validate_delimiters
from .nodes import Template
from .parser import TemplateParser

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 512


class TemplateCache:
    """
    LRU-кэш шаблонов по ключу (source, delimiters).

    Ошибки разбора не кэшируются: они пробрасываются вызывающему коду.
    """

    def __init__(self, max_size: Optional[int] = DEFAULT_CACHE_SIZE):
        self.max_size = max_size
        self._entries: "OrderedDict[Tuple[str, Delimiters], Template]" = OrderedDict()
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0

    def get(self, source: str, delimiters: Delimiters = DEFAULT_DELIMITERS) -> Template:
        """
        Возвращает разобранный шаблон, разбирая его при первом обращении.

        Raises:
            ParseError: При ошибке разбора
        """
        key = (source, validate_delimiters(delimiters))
        with self._lock:
            cached = self._entries.get(key)
            if cached is not None:
                self._entries.move_to_end(key)
                self._hits += 1
                return cached
            self._misses += 1

        template = TemplateParser(key[1]).parse(source)

        with self._lock:
            self._entries[key] = template
            if self.max_size is not None:
                while len(self._entries) > self.max_size:
                    self._entries.popitem(last=False)
        return template

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._hits = 0
            self._misses = 0
        logger.debug("Template cache cleared")

    def stats(self) -> Dict[str, int]:
        with self._lock:
            return {"size": len(self._entries), "hits": self._hits, "misses": self._misses}

    def __len__(self) -> int:
        return len(self._entries)


_default_cache = TemplateCache()


def get_template_cache() -> TemplateCache:
    """Кэш шаблонов уровня процесса."""
    return _default_cache


__all__ = ["TemplateCache", "get_template_cache", "DEFAULT_CACHE_SIZE"]
