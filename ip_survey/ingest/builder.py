from __future__ import annotations

from typing import Dict, List

from ip_survey.models.survey import Survey, SurveyFormat, SurveyLine, SurveyPoint


class SurveyBuilder:
    """
    Accumulates points per line id while a decoder runs.

    Lines keep first-seen order (dict insertion order). A repeated line id
    appends to the existing line, and each new point gets position = current
    length of its line, so positions always equal ranks.
    """

    def __init__(self, fmt: SurveyFormat):
        self.fmt = fmt
        self._points: Dict[str, List[SurveyPoint]] = {}
        self.warnings: List[str] = []
        self.n_skipped = 0

    def open_line(self, line_id: str) -> List[SurveyPoint]:
        return self._points.setdefault(line_id, [])

    def add_point(self, line_id: str, x: float, y: float, transmitter: float, receiver: float) -> SurveyPoint:
        pts = self.open_line(line_id)
        p = SurveyPoint(
            position=len(pts),
            x=float(x),
            y=float(y),
            transmitter=float(transmitter),
            receiver=float(receiver),
        )
        pts.append(p)
        return p

    def skip_record(self) -> None:
        self.n_skipped += 1

    @property
    def n_points(self) -> int:
        return sum(len(v) for v in self._points.values())

    def build(self) -> Survey:
        warnings = list(self.warnings)
        if self.n_skipped:
            warnings.insert(0, f"skipped {self.n_skipped} malformed record(s)")
        lines = {lid: SurveyLine(line_id=lid, points=tuple(pts)) for lid, pts in self._points.items()}
        return Survey(fmt=self.fmt, lines=lines, warnings=tuple(warnings))
