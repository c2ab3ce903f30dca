"""Exceptions raised by the chart engine."""

from __future__ import annotations


class ChartError(Exception):
    """Base exception for chart rendering errors."""

    pass


class UnknownCategoryError(ChartError, KeyError):
    """Category lookup outside a band scale's configured domain."""

    def __init__(self, category: str, categories: tuple[str, ...] | list[str]):
        self.category = category
        self.categories = tuple(categories)
        super().__init__(f"Unknown category {category!r}; expected one of {list(self.categories)}")

    def __str__(self) -> str:
        return str(self.args[0])


class TooManyFeaturesError(ChartError, ValueError):
    """A chart was requested for no features or more features than there are styles."""

    pass


class InvalidYearRangeError(ChartError, ValueError):
    """Year range bounds are out of order."""

    pass
