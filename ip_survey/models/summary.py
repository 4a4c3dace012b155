"""Survey summary -- the metadata record kept alongside a stored dataset.

The ingestion shell stores ``{"lines": [...], "bounds": {...}}`` for every
uploaded file. SurveySummary is that record with a dict/JSON round trip.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Tuple

from .survey import CoordinateBounds


@dataclass(frozen=True)
class SurveySummary:
    lines: Tuple[str, ...]
    bounds: CoordinateBounds

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-friendly dict (tuples become lists)."""
        return {"lines": list(self.lines), "bounds": self.bounds.to_dict()}

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> SurveySummary:
        return cls(
            lines=tuple(str(x) for x in d.get("lines", ())),
            bounds=CoordinateBounds.from_dict(d["bounds"]),
        )

    def to_json(self, **kwargs: Any) -> str:
        # NaN bounds are written as the non-standard NaN token, as json does by default
        return json.dumps(self.to_dict(), **kwargs)

    @classmethod
    def from_json(cls, text: str) -> SurveySummary:
        return cls.from_dict(json.loads(text))
