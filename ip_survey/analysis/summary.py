from __future__ import annotations

import math
from typing import List

import numpy as np
import pandas as pd

from ip_survey.models.summary import SurveySummary
from ip_survey.models.survey import CoordinateBounds, Survey

POINT_COLUMNS = ("line_id", "position", "x", "y", "transmitter", "receiver")


def coordinate_bounds(survey: Survey) -> CoordinateBounds:
    """
    Bounding box of every point's (x, y) over all lines.

    Empty survey -> CoordinateBounds.empty() (all zeros, is_empty=True).
    A NaN coordinate makes the bound of its axis NaN.
    """
    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    nan_x = nan_y = False
    seen = False

    for line in survey.lines.values():
        for p in line.points:
            seen = True
            if math.isnan(p.x):
                nan_x = True
            else:
                min_x = min(min_x, p.x)
                max_x = max(max_x, p.x)
            if math.isnan(p.y):
                nan_y = True
            else:
                min_y = min(min_y, p.y)
                max_y = max(max_y, p.y)

    if not seen:
        return CoordinateBounds.empty()
    if nan_x:
        min_x = max_x = math.nan
    if nan_y:
        min_y = max_y = math.nan
    return CoordinateBounds(min_x=min_x, max_x=max_x, min_y=min_y, max_y=max_y)


def summarize_survey(survey: Survey) -> SurveySummary:
    """Line ids plus bounds, the record the ingestion shell stores per dataset."""
    return SurveySummary(lines=tuple(survey.line_ids()), bounds=coordinate_bounds(survey))


def points_frame(survey: Survey) -> pd.DataFrame:
    """One row per point, in survey order."""
    ids: List[str] = []
    blocks: List[np.ndarray] = []
    positions: List[np.ndarray] = []
    for line_id, line in survey.lines.items():
        n = len(line)
        if n == 0:
            continue
        ids.extend([line_id] * n)
        positions.append(np.fromiter((p.position for p in line.points), dtype=np.int64, count=n))
        blocks.append(line.as_array())

    if blocks:
        mat = np.vstack(blocks)
        pos = np.concatenate(positions)
    else:
        mat = np.empty((0, 4), dtype=np.float64)
        pos = np.empty((0,), dtype=np.int64)

    return pd.DataFrame({
        "line_id": pd.Series(ids, dtype=object),
        "position": pos,
        "x": mat[:, 0],
        "y": mat[:, 1],
        "transmitter": mat[:, 2],
        "receiver": mat[:, 3],
    }, columns=list(POINT_COLUMNS))


def line_statistics(survey: Survey) -> pd.DataFrame:
    """
    Per-line statistics indexed by line id (first-seen order).

    Columns: n_points, min_x, max_x, min_y, max_y, mean_transmitter, mean_receiver.
    Lines without points have n_points=0 and NaN elsewhere.
    """
    rows = []
    for line_id, line in survey.lines.items():
        arr = line.as_array()
        if arr.shape[0] == 0:
            rows.append((line_id, 0) + (np.nan,) * 6)
            continue
        # NaN propagates like in coordinate_bounds
        rows.append((
            line_id,
            int(arr.shape[0]),
            float(np.min(arr[:, 0])),
            float(np.max(arr[:, 0])),
            float(np.min(arr[:, 1])),
            float(np.max(arr[:, 1])),
            float(np.mean(arr[:, 2])),
            float(np.mean(arr[:, 3])),
        ))

    df = pd.DataFrame(
        rows,
        columns=["line_id", "n_points", "min_x", "max_x", "min_y", "max_y", "mean_transmitter", "mean_receiver"],
    )
    return df.set_index("line_id")
