from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .errors import InvalidYearRangeError


@dataclass(frozen=True)
class Feature:
    """A selected geographic area and its ``"<metric>-<YY>"`` statistics."""

    name: str
    geoid: str
    properties: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Feature:
        """Build a feature from a GeoJSON-style record or a flat property map."""
        if not isinstance(data, Mapping):
            raise ValueError("Feature record must be a mapping")
        props = data.get("properties", data)
        if not isinstance(props, Mapping):
            raise ValueError("Feature record must be a mapping")
        name = props.get("n") or props.get("name") or data.get("name")
        if not name:
            raise ValueError("Feature record has no display name ('n' or 'name')")
        geoid = props.get("GEOID") or data.get("id") or name
        return cls(name=str(name), geoid=str(geoid), properties=props)


@dataclass(frozen=True)
class YearRange:
    """Inclusive, ascending, contiguous range of calendar years."""

    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise InvalidYearRangeError(
                f"Year range start {self.start} is after end {self.end}"
            )

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.start, self.end + 1))

    def __len__(self) -> int:
        return self.end - self.start + 1

    def __contains__(self, year: object) -> bool:
        return isinstance(year, int) and self.start <= year <= self.end


@dataclass(frozen=True)
class SeriesPoint:
    year: int
    value: float | None

    @property
    def is_missing(self) -> bool:
        return self.value is None
