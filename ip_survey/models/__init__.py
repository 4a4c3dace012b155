from .survey import CoordinateBounds, Survey, SurveyFormat, SurveyLine, SurveyPoint
from .summary import SurveySummary

__all__ = [
    "CoordinateBounds",
    "Survey",
    "SurveyFormat",
    "SurveyLine",
    "SurveyPoint",
    "SurveySummary",
]
