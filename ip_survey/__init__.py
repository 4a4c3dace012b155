"""IP Survey -- decoding of induced-polarization survey files.

This package provides tools for:
- Decoding survey readings from comma-separated, whitespace-delimited and binary files
- Normalizing them into named survey lines of ordered measurement points
- Computing the coordinate bounding box and the per-survey metadata summary
- Point-level lookups of transmitter and receiver readings

Key principles:
- The caller always names the format; nothing is autodetected
- Decoded surveys are immutable
- Binary input is bounds-checked before every read; a short buffer is an error

Main subpackages:
- ingest: format readers, the binary codec and the format dispatcher
- models: data models (Survey, SurveyLine, SurveyPoint, SurveySummary)
- analysis: bounding box, summaries and pandas views
"""

from ip_survey.errors import CorruptBinaryData, SurveyDecodeError, UnsupportedFormat
from ip_survey.ingest.dispatch import SurveyFormat, decode_survey, load_survey
from ip_survey.models.survey import CoordinateBounds, Survey, SurveyLine, SurveyPoint

__all__ = [
    "CoordinateBounds",
    "CorruptBinaryData",
    "Survey",
    "SurveyDecodeError",
    "SurveyFormat",
    "SurveyLine",
    "SurveyPoint",
    "UnsupportedFormat",
    "decode_survey",
    "load_survey",
]
