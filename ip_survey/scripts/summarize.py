"""
Print the summary of a survey file.

Examples
--------
    python -m ip_survey.scripts.summarize line_data.csv --format csv
    {"lines": ["L1", "L2"], "bounds": {"minX": 0.0, "maxX": 250.0, "minY": 0.0, "maxY": 100.0}}

    python -m ip_survey.scripts.summarize survey.bin --format binary --points
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from ip_survey.analysis.summary import line_statistics, summarize_survey
from ip_survey.errors import SurveyDecodeError
from ip_survey.ingest.config import ReaderConfig
from ip_survey.ingest.dispatch import load_survey
from ip_survey.models.survey import SurveyFormat

log = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="ip-survey-summarize", description=__doc__.strip().splitlines()[0])
    ap.add_argument("path", help="survey file to decode")
    ap.add_argument("--format", "-f", required=True, dest="fmt", choices=[f.value for f in SurveyFormat])
    ap.add_argument("--encoding", default="utf-8", help="text encoding for csv/text files")
    ap.add_argument("--skip-invalid", action="store_true", help="drop records with non-numeric fields instead of keeping NaN")
    ap.add_argument("--points", action="store_true", help="print per-line statistics instead of the summary JSON")
    ap.add_argument("--verbose", "-v", action="store_true")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    cfg = ReaderConfig(encoding=args.encoding, invalid_number="skip" if args.skip_invalid else "nan")
    try:
        survey = load_survey(args.path, args.fmt, cfg)
    except (SurveyDecodeError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    for w in survey.warnings:
        log.info("%s: %s", args.path, w)

    if args.points:
        print(line_statistics(survey).to_string())
    else:
        print(summarize_survey(survey).to_json())
    return 0


if __name__ == "__main__":
    sys.exit(main())
