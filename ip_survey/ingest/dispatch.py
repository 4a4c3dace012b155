from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from ip_survey.errors import UnsupportedFormat
from ip_survey.ingest.binary_codec import decode_binary
from ip_survey.ingest.config import ReaderConfig
from ip_survey.ingest.readers_text import parse_csv, parse_text
from ip_survey.models.survey import Survey, SurveyFormat

log = logging.getLogger(__name__)

Decoder = Callable[[Any, Optional[ReaderConfig]], Survey]

_DECODERS: Dict[SurveyFormat, Decoder] = {
    SurveyFormat.CSV: parse_csv,
    SurveyFormat.TEXT: parse_text,
    SurveyFormat.BINARY: decode_binary,
}

_missing = set(SurveyFormat) - set(_DECODERS)
if _missing:
    raise RuntimeError(f"No decoder registered for: {sorted(f.value for f in _missing)}")


def resolve_format(fmt: Union[SurveyFormat, str]) -> SurveyFormat:
    """Map a format tag ('csv', 'text', 'binary') to SurveyFormat; anything else is UnsupportedFormat."""
    if isinstance(fmt, SurveyFormat):
        return fmt
    try:
        return SurveyFormat(fmt)
    except ValueError:
        raise UnsupportedFormat(fmt) from None


def decode_survey(
    data: Any,
    fmt: Union[SurveyFormat, str],
    config: Optional[ReaderConfig] = None,
) -> Survey:
    """
    Decode data with the reader selected by fmt.

    csv/text accept str or bytes (decoded with config.encoding); binary requires bytes.
    """
    f = resolve_format(fmt)
    log.debug("decoding %s survey (%d bytes/chars)", f.value, len(data))
    return _DECODERS[f](data, config)


def load_survey(
    path: Union[str, Path],
    fmt: Union[SurveyFormat, str],
    config: Optional[ReaderConfig] = None,
) -> Survey:
    """Read a survey file from disk and decode it."""
    f = resolve_format(fmt)
    p = Path(path).expanduser().resolve()
    if not p.exists():
        raise FileNotFoundError(str(p))
    return decode_survey(p.read_bytes(), f, config)
