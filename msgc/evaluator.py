"""
Вычислитель выражений-путей.

Разрешает ParsedPath в контексте рендеринга: базовое имя ищется в контексте,
затем по порядку применяются аксессоры (индекс в Sequence, поле в Mapping).
Вычисление — чистый поиск, ошибки структурные и повторов не требуют.
"""

from __future__ import annotations

from typing import Optional

from .errors import FieldNotFound, IndexOutOfRange, TypeMismatch, UnresolvedReference
from .template.nodes import Expression
from .template.path import Accessor, FieldAccessor, IndexAccessor, ParsedPath
from .values import Context, Mapping, Sequence, Value


class PathEvaluator:
    """
    Вычислитель выражений.

    Принимает ParsedPath и возвращает Value из контекста.
    Каждая ошибка несёт исходный текст выражения и его позицию в шаблоне.
    """

    def __init__(self, context: Context):
        """
        Инициализирует вычислитель с контекстом.

        Args:
            context: Неизменяемый контекст рендеринга
        """
        self.context = context

    def evaluate(self, path: ParsedPath, *, source_text: str = "", offset: int = 0) -> Value:
        """
        Вычисляет значение пути.

        Args:
            path: Скомпилированное выражение
            source_text: Исходный текст выражения (для диагностики)
            offset: Позиция выражения в шаблоне (для диагностики)

        Returns:
            Значение из контекста

        Raises:
            UnresolvedReference: Базового имени нет в контексте
            IndexOutOfRange: Индекс за границами последовательности
            FieldNotFound: Поля нет в отображении
            TypeMismatch: Аксессор применён к значению неподходящего вида
        """
        source = source_text or str(path)

        value: Optional[Value] = self.context.get(path.base)
        if value is None:
            raise UnresolvedReference(
                offset=offset,
                source_text=source,
                name=path.base,
                available=sorted(self.context),
            )

        for accessor in path.accessors:
            value = self._apply(value, accessor, source, offset)

        return value

    def evaluate_expression(self, expression: Expression) -> Value:
        """Вычисляет сегмент-выражение шаблона."""
        return self.evaluate(expression.path, source_text=expression.source_text, offset=expression.offset)

    def _apply(self, value: Value, accessor: Accessor, source: str, offset: int) -> Value:
        if isinstance(accessor, IndexAccessor):
            return self._apply_index(value, accessor, source, offset)
        if isinstance(accessor, FieldAccessor):
            return self._apply_field(value, accessor, source, offset)
        raise TypeError(f"Unknown accessor type: {type(accessor).__name__}")

    def _apply_index(self, value: Value, accessor: IndexAccessor, source: str, offset: int) -> Value:
        """
        Позиционный индекс: [n]

        Явная проверка границ: допустимы только 0 <= n < len.
        """
        if not isinstance(value, Sequence):
            raise TypeMismatch(
                offset=offset,
                source_text=source,
                expected="sequence for index " + str(accessor),
                actual=value.kind,
            )
        if accessor.index < 0 or accessor.index >= len(value.items):
            raise IndexOutOfRange(
                offset=offset,
                source_text=source,
                index=accessor.index,
                length=len(value.items),
            )
        return value.items[accessor.index]

    def _apply_field(self, value: Value, accessor: FieldAccessor, source: str, offset: int) -> Value:
        """Доступ к полю: .name"""
        if not isinstance(value, Mapping):
            raise TypeMismatch(
                offset=offset,
                source_text=source,
                expected="mapping for field " + str(accessor),
                actual=value.kind,
            )
        field_value = value.get(accessor.name)
        if field_value is None:
            raise FieldNotFound(
                offset=offset,
                source_text=source,
                field_name=accessor.name,
            )
        return field_value


def evaluate(path: ParsedPath, context: Context, *, source_text: str = "", offset: int = 0) -> Value:
    """
    Удобная функция для вычисления пути.

    Raises:
        EvalError: При ошибке вычисления
    """
    return PathEvaluator(context).evaluate(path, source_text=source_text, offset=offset)


__all__ = ["PathEvaluator", "evaluate"]
