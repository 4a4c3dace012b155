from __future__ import annotations

import operator
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

import numpy as np


class SurveyFormat(str, Enum):
    """Format discriminator supplied by the caller."""

    CSV = "csv"
    TEXT = "text"
    BINARY = "binary"


@dataclass(frozen=True)
class SurveyPoint:
    """
    One measurement along a survey line.

    position is the zero-based rank of the point inside its line; it is assigned
    by the decoder and always matches the point's offset in SurveyLine.points.
    """
    position: int
    x: float
    y: float
    transmitter: float
    receiver: float


@dataclass(frozen=True)
class SurveyLine:
    line_id: str
    points: Tuple[SurveyPoint, ...] = ()

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[SurveyPoint]:
        return iter(self.points)

    def as_array(self) -> np.ndarray:
        """Return the readings as a float64 array of shape (n_points, 4): x, y, transmitter, receiver."""
        if not self.points:
            return np.empty((0, 4), dtype=np.float64)
        return np.array(
            [(p.x, p.y, p.transmitter, p.receiver) for p in self.points],
            dtype=np.float64,
        )


@dataclass(frozen=True)
class CoordinateBounds:
    """
    Axis-aligned bounding box of every (x, y) in a survey.

    A survey without points yields all-zero bounds with is_empty=True, which is
    how callers tell it apart from a single point at the origin.
    """
    min_x: float
    max_x: float
    min_y: float
    max_y: float
    is_empty: bool = False

    @classmethod
    def empty(cls) -> "CoordinateBounds":
        return cls(0.0, 0.0, 0.0, 0.0, is_empty=True)

    def to_dict(self) -> Dict[str, float]:
        """Return the metadata shape stored next to uploaded datasets."""
        return {"minX": self.min_x, "maxX": self.max_x, "minY": self.min_y, "maxY": self.max_y}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "CoordinateBounds":
        b = cls(float(d["minX"]), float(d["maxX"]), float(d["minY"]), float(d["maxY"]))
        if b == cls(0.0, 0.0, 0.0, 0.0):
            # the stored shape cannot tell the two apart; an all-zero box reads back as empty
            return cls.empty()
        return b


@dataclass(frozen=True)
class Survey:
    """
    Decoded survey: named lines in first-seen order.

    Notes
    - lines is a read-only mapping; iteration order equals the order in which
      each identifier was first seen in the input.
    - warnings records tolerated input problems (skipped records, trailing bytes).
    """
    fmt: SurveyFormat
    lines: Mapping[str, SurveyLine] = field(default_factory=lambda: MappingProxyType({}))
    warnings: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.lines, MappingProxyType):
            object.__setattr__(self, "lines", MappingProxyType(dict(self.lines)))

    @property
    def n_lines(self) -> int:
        return len(self.lines)

    @property
    def n_points(self) -> int:
        return sum(len(line) for line in self.lines.values())

    def line_ids(self) -> List[str]:
        return list(self.lines.keys())

    def get_line(self, line_id: str) -> Optional[SurveyLine]:
        return self.lines.get(line_id)

    def point_at(self, line_id: str, position: Any) -> Optional[SurveyPoint]:
        """Return the point at position on line_id, or None if either is absent."""
        line = self.lines.get(line_id)
        if line is None or isinstance(position, bool):
            return None
        try:
            idx = operator.index(position)
        except TypeError:
            return None
        if idx < 0 or idx >= len(line.points):
            return None
        return line.points[idx]

    def transmitter_at(self, line_id: str, position: Any) -> Optional[float]:
        p = self.point_at(line_id, position)
        return None if p is None else p.transmitter

    def receiver_at(self, line_id: str, position: Any) -> Optional[float]:
        p = self.point_at(line_id, position)
        return None if p is None else p.receiver

    def coordinate_bounds(self) -> CoordinateBounds:
        # Avoid circular import at module level
        from ip_survey.analysis.summary import coordinate_bounds

        return coordinate_bounds(self)
