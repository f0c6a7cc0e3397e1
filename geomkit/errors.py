"""Исключения геометрического ядра."""


class GeometryError(ValueError):
    """Базовая ошибка геометрического ядра."""


class DegenerateGeometryError(GeometryError):
    """Вырожденные входные данные: нулевая длина, коллинеарные точки, сингулярная матрица."""
