"""
Delimited-text survey readers.

Both formats carry one reading per physical line:

    <line id> <x> <y> <transmitter> <receiver> [ignored extra fields...]

- csv:  fields separated by ",", the line id is stripped of surrounding whitespace
- text: the physical line is stripped, then split on runs of whitespace

Records with fewer than 5 fields are dropped without error (noisy field
data is expected). Numeric fields are parsed leniently: the longest numeric
prefix is used ("12.5m" -> 12.5) and a field with no numeric prefix becomes NaN.
"""

from __future__ import annotations

import codecs
import logging
import math
import re
from typing import Callable, List, Optional, Union

from ip_survey.errors import SurveyDecodeError
from ip_survey.ingest.builder import SurveyBuilder
from ip_survey.ingest.config import ReaderConfig
from ip_survey.models.survey import Survey, SurveyFormat

log = logging.getLogger(__name__)

_RE_NUMBER_PREFIX = re.compile(
    r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)",
    re.ASCII,
)

BOM = "\ufeff"

TextLike = Union[str, bytes, bytearray, memoryview]


def parse_number(text: str) -> float:
    """
    Parse the longest numeric prefix of text as a float, NaN if there is none.

    >>> parse_number(" 3.5 ")
    3.5
    >>> parse_number("1e3x")
    1000.0
    >>> math.isnan(parse_number("n/a"))
    True
    """
    m = _RE_NUMBER_PREFIX.match(text.lstrip())
    if m is None:
        return math.nan
    return float(m.group(0))


def _as_text(content: TextLike, cfg: ReaderConfig) -> str:
    if not isinstance(content, str):
        encoding = cfg.encoding
        if codecs.lookup(encoding).name == "utf-8":
            encoding = "utf-8-sig"
        try:
            content = bytes(content).decode(encoding, errors=cfg.text_errors)
        except UnicodeDecodeError as e:
            raise SurveyDecodeError(
                f"Undecodable {cfg.encoding} text at byte {e.start}: {e.reason}"
            ) from e
    # a byte-order mark is not part of the first line id
    return content[1:] if content.startswith(BOM) else content


def _fold_records(
    content: TextLike,
    fmt: SurveyFormat,
    split: Callable[[str], List[str]],
    config: Optional[ReaderConfig],
) -> Survey:
    cfg = config or ReaderConfig()
    builder = SurveyBuilder(fmt)
    n_invalid = 0

    for raw_line in _as_text(content, cfg).split("\n"):
        if not raw_line.strip():
            continue
        fields = split(raw_line)
        if len(fields) < cfg.min_fields:
            builder.skip_record()
            continue

        values = [parse_number(f) for f in fields[1:5]]
        if cfg.invalid_number == "skip" and any(math.isnan(v) for v in values):
            n_invalid += 1
            builder.skip_record()
            continue

        builder.add_point(fields[0].strip(), *values)

    if n_invalid:
        builder.warnings.append(f"dropped {n_invalid} record(s) with non-numeric fields")
    survey = builder.build()
    log.debug(
        "%s reader: %d line(s), %d point(s), %d record(s) skipped",
        fmt.value, survey.n_lines, survey.n_points, builder.n_skipped,
    )
    return survey


def _split_csv(line: str) -> List[str]:
    return line.split(",")


def _split_whitespace(line: str) -> List[str]:
    return line.strip().split()


def parse_csv(content: TextLike, config: Optional[ReaderConfig] = None) -> Survey:
    """Decode comma-separated survey records."""
    return _fold_records(content, SurveyFormat.CSV, _split_csv, config)


def parse_text(content: TextLike, config: Optional[ReaderConfig] = None) -> Survey:
    """Decode whitespace-delimited survey records."""
    return _fold_records(content, SurveyFormat.TEXT, _split_whitespace, config)

