"""
Рендеринг значений и шаблонов в текст.

Модули:
- scalars: форматирование скаляров
- renderer: Renderer и рендеринг шаблонов
"""
