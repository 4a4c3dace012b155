"""Survey analysis package.

Design principle:
  - Ingest produces immutable :class:`~ip_survey.models.survey.Survey` objects.
  - Analysis consumes a Survey and produces derived quantities (bounds, summaries, tables).
"""

from .summary import coordinate_bounds, line_statistics, points_frame, summarize_survey

__all__ = [
    "coordinate_bounds",
    "line_statistics",
    "points_frame",
    "summarize_survey",
]
