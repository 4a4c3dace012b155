from __future__ import annotations

import codecs
from dataclasses import asdict, dataclass
from typing import Any, Dict, Literal

InvalidNumberPolicy = Literal["nan", "skip"]
Utf8ErrorPolicy = Literal["strict", "replace"]

MIN_RECORD_FIELDS = 5


@dataclass(frozen=True)
class ReaderConfig:
    """
    Reader configuration shared by the csv, text and binary decoders.

    encoding:
      Codec used when csv/text content is handed over as bytes.
    min_fields:
      Records with fewer fields are dropped without error. Cannot go below 5
      (line id, x, y, transmitter, receiver).
    invalid_number:
      - "nan": a numeric field without a numeric prefix becomes NaN and the record is kept.
      - "skip": such a record is dropped and counted like a short record.
    utf8_errors:
      - "strict": an undecodable binary line identifier raises CorruptBinaryData.
      - "replace": undecodable bytes become U+FFFD.
    text_errors:
      - "replace": undecodable bytes in csv/text content become U+FFFD (noisy files still load).
      - "strict": undecodable csv/text content raises SurveyDecodeError.
    """
    encoding: str = "utf-8"
    min_fields: int = MIN_RECORD_FIELDS
    invalid_number: InvalidNumberPolicy = "nan"
    utf8_errors: Utf8ErrorPolicy = "strict"
    text_errors: Utf8ErrorPolicy = "replace"

    def __post_init__(self) -> None:
        if int(self.min_fields) < MIN_RECORD_FIELDS:
            raise ValueError(f"min_fields must be >= {MIN_RECORD_FIELDS}, got {self.min_fields}")
        if self.invalid_number not in ("nan", "skip"):
            raise ValueError(f"invalid_number must be 'nan' or 'skip', got {self.invalid_number!r}")
        if self.utf8_errors not in ("strict", "replace"):
            raise ValueError(f"utf8_errors must be 'strict' or 'replace', got {self.utf8_errors!r}")
        if self.text_errors not in ("strict", "replace"):
            raise ValueError(f"text_errors must be 'strict' or 'replace', got {self.text_errors!r}")
        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"unknown encoding: {self.encoding!r}") from None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> ReaderConfig:
        return cls(**dict(d))
