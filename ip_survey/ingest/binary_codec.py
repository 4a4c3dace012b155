"""
Binary survey codec.

Layout (all little-endian, no padding):

    u32                 number of lines N
    N times:
      u8                length L of the line id
      L bytes           line id, UTF-8
      u32               number of points M
      M times:
        f64 x, f64 y, f64 transmitter, f64 receiver

The decoder walks the buffer with an explicit cursor. Every read checks the
remaining length first and raises CorruptBinaryData instead of reading past the
end; the input buffer is never modified and no partial survey is returned.
"""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional, Tuple, Union

import numpy as np

from ip_survey.errors import CorruptBinaryData
from ip_survey.ingest.builder import SurveyBuilder
from ip_survey.ingest.config import ReaderConfig
from ip_survey.models.survey import Survey, SurveyFormat, SurveyPoint

log = logging.getLogger(__name__)

_U8 = struct.Struct("<B")
_U32 = struct.Struct("<I")
POINT_DTYPE = np.dtype("<f8")
POINT_FIELDS = 4
POINT_SIZE = POINT_FIELDS * POINT_DTYPE.itemsize  # 32 bytes
MAX_LINE_ID_BYTES = 0xFF
MAX_COUNT = 0xFFFFFFFF

BytesLike = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class BinaryCursor:
    """
    Read position over an immutable byte buffer.

    Each read returns (value, advanced_cursor); the cursor itself never moves.
    """
    buf: memoryview
    offset: int = 0

    @classmethod
    def over(cls, data: BytesLike) -> BinaryCursor:
        return cls(buf=memoryview(data).cast("B"), offset=0)

    @property
    def remaining(self) -> int:
        return len(self.buf) - self.offset

    def _require(self, n: int, field: str) -> None:
        if n > self.remaining:
            raise CorruptBinaryData.short_read(
                offset=self.offset, expected=n, available=self.remaining, field=field
            )

    def advance(self, n: int) -> BinaryCursor:
        return BinaryCursor(self.buf, self.offset + n)

    def read_bytes(self, n: int, field: str) -> Tuple[bytes, BinaryCursor]:
        self._require(n, field)
        return bytes(self.buf[self.offset:self.offset + n]), self.advance(n)

    def read_u8(self, field: str) -> Tuple[int, BinaryCursor]:
        self._require(_U8.size, field)
        (v,) = _U8.unpack_from(self.buf, self.offset)
        return int(v), self.advance(_U8.size)

    def read_u32(self, field: str) -> Tuple[int, BinaryCursor]:
        self._require(_U32.size, field)
        (v,) = _U32.unpack_from(self.buf, self.offset)
        return int(v), self.advance(_U32.size)

    def read_points(self, count: int, field: str) -> Tuple[np.ndarray, BinaryCursor]:
        """Read count records of four float64 values as an array of shape (count, 4)."""
        n = count * POINT_SIZE
        self._require(n, field)
        if count == 0:
            return np.empty((0, POINT_FIELDS), dtype=np.float64), self
        arr = np.frombuffer(self.buf, dtype=POINT_DTYPE, count=count * POINT_FIELDS, offset=self.offset)
        return arr.reshape((count, POINT_FIELDS)).astype(np.float64), self.advance(n)


def _decode_line_id(raw: bytes, cur: BinaryCursor, cfg: ReaderConfig, field: str) -> str:
    try:
        return raw.decode("utf-8", errors=cfg.utf8_errors)
    except UnicodeDecodeError as e:
        start = cur.offset - len(raw)
        raise CorruptBinaryData(
            f"Invalid UTF-8 in {field} at offset {start + e.start}: {e.reason}",
            offset=start + e.start,
            expected=len(raw),
            available=len(raw),
            field=field,
        ) from e


def decode_binary(data: BytesLike, config: Optional[ReaderConfig] = None) -> Survey:
    """Decode a binary survey buffer into a Survey."""
    if isinstance(data, str):
        raise TypeError("Binary format requires a bytes-like buffer, got str")
    cfg = config or ReaderConfig()
    builder = SurveyBuilder(SurveyFormat.BINARY)

    cur = BinaryCursor.over(data)
    n_lines, cur = cur.read_u32("line_count")

    for i in range(n_lines):
        id_len, cur = cur.read_u8(f"line[{i}].id_length")
        raw_id, cur = cur.read_bytes(id_len, f"line[{i}].id")
        line_id = _decode_line_id(raw_id, cur, cfg, f"line[{i}].id")
        n_points, cur = cur.read_u32(f"line[{i}].point_count")
        mat, cur = cur.read_points(n_points, f"line[{i}].points")

        builder.open_line(line_id)
        for x, y, tx, rx in mat:
            builder.add_point(line_id, x, y, tx, rx)

    if cur.remaining:
        builder.warnings.append(f"ignored {cur.remaining} trailing byte(s) after offset {cur.offset}")

    survey = builder.build()
    log.debug("binary reader: %d line(s), %d point(s), %d byte(s) consumed", survey.n_lines, survey.n_points, cur.offset)
    return survey


PointLike = Union[SurveyPoint, Tuple[float, float, float, float]]


def _point_values(p: PointLike) -> Tuple[float, float, float, float]:
    if isinstance(p, SurveyPoint):
        return (p.x, p.y, p.transmitter, p.receiver)
    x, y, tx, rx = p
    return (float(x), float(y), float(tx), float(rx))


def encode_binary(survey: Union[Survey, Mapping[str, Iterable[PointLike]]]) -> bytes:
    """
    Encode lines into the binary survey layout.

    Accepts a Survey or a mapping of line id to points, where a point is a
    SurveyPoint or an (x, y, transmitter, receiver) tuple.
    """
    lines = survey.lines if isinstance(survey, Survey) else survey
    if len(lines) > MAX_COUNT:
        raise ValueError(f"too many lines for a u32 count: {len(lines)}")

    chunks = [_U32.pack(len(lines))]
    for line_id, points in lines.items():
        raw_id = str(line_id).encode("utf-8")
        if len(raw_id) > MAX_LINE_ID_BYTES:
            raise ValueError(f"line id {line_id!r} is {len(raw_id)} bytes in UTF-8; limit is {MAX_LINE_ID_BYTES}")
        values = [_point_values(p) for p in points]
        if len(values) > MAX_COUNT:
            raise ValueError(f"too many points on line {line_id!r}: {len(values)}")
        chunks.append(_U8.pack(len(raw_id)))
        chunks.append(raw_id)
        chunks.append(_U32.pack(len(values)))
        if values:
            chunks.append(np.asarray(values, dtype=POINT_DTYPE).tobytes())
    return b"".join(chunks)
