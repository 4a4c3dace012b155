import struct
import tempfile
import unittest
from pathlib import Path

from ip_survey.errors import CorruptBinaryData, UnsupportedFormat
from ip_survey.ingest.binary_codec import encode_binary
from ip_survey.ingest.dispatch import decode_survey, load_survey, resolve_format
from ip_survey.models.survey import SurveyFormat


class TestDecodeSurvey(unittest.TestCase):
    def test_string_and_enum_tags(self):
        s1 = decode_survey("L1,1,2,3,4\n", "csv")
        s2 = decode_survey("L1,1,2,3,4\n", SurveyFormat.CSV)
        self.assertEqual(s1.fmt, SurveyFormat.CSV)
        self.assertEqual(s1.fmt, "csv")
        self.assertEqual(dict(s1.lines), dict(s2.lines))

    def test_each_format_selects_its_reader(self):
        self.assertEqual(decode_survey("L1 1 2 3 4", "text").line_ids(), ["L1"])
        self.assertEqual(decode_survey("L1 1 2 3 4", "csv").line_ids(), [])
        buf = encode_binary({"L9": [(1.0, 2.0, 3.0, 4.0)]})
        self.assertEqual(decode_survey(buf, "binary").line_ids(), ["L9"])

    def test_text_formats_accept_bytes(self):
        s = decode_survey(b"L1,1,2,3,4\n", "csv")
        self.assertEqual(s.transmitter_at("L1", 0), 3.0)

    def test_unsupported_format(self):
        for fmt in ("xml", "CSV", "", None, 3):
            with self.assertRaises(UnsupportedFormat) as ctx:
                decode_survey(b"", fmt)
            self.assertEqual(ctx.exception.fmt, fmt)

    def test_binary_requires_bytes(self):
        with self.assertRaises(TypeError):
            decode_survey("L1,1,2,3,4", "binary")

    def test_corrupt_binary_surfaces(self):
        with self.assertRaises(CorruptBinaryData):
            decode_survey(struct.pack("<I", 1), "binary")

    def test_resolve_format(self):
        self.assertIs(resolve_format("binary"), SurveyFormat.BINARY)
        self.assertIs(resolve_format(SurveyFormat.TEXT), SurveyFormat.TEXT)


class TestLoadSurvey(unittest.TestCase):
    def test_load_binary_file(self):
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "survey.bin"
            p.write_bytes(encode_binary({"L1": [(1.0, 2.0, 10.0, 20.0), (3.0, 4.0, 30.0, 40.0)]}))
            s = load_survey(p, "binary")
            self.assertEqual(s.line_ids(), ["L1"])
            self.assertEqual(s.transmitter_at("L1", 1), 30.0)

    def test_load_text_file(self):
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "survey.txt"
            p.write_text("L1 0 0 1 1\nL2 10 5 2 2\n", encoding="utf-8")
            s = load_survey(str(p), "text")
            self.assertEqual(s.line_ids(), ["L1", "L2"])

    def test_load_file_with_invalid_bytes(self):
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "noisy.csv"
            p.write_bytes(b"L1,1,2,3,4\nL\xe91,5,6,7,8\n")
            s = load_survey(p, "csv")
            self.assertEqual(s.line_ids(), ["L1", "L\ufffd1"])
            self.assertEqual(s.receiver_at("L\ufffd1", 0), 8.0)

    def test_load_excel_csv_with_bom(self):
        with tempfile.TemporaryDirectory() as d:
            p = Path(d) / "export.csv"
            p.write_bytes("\ufeffL1,1,2,3,4\r\n".encode("utf-8"))
            s = load_survey(p, "csv")
            self.assertEqual(s.transmitter_at("L1", 0), 3.0)

    def test_missing_file(self):
        with tempfile.TemporaryDirectory() as d:
            with self.assertRaises(FileNotFoundError):
                load_survey(Path(d) / "nope.csv", "csv")

    def test_unsupported_format_checked_first(self):
        with tempfile.TemporaryDirectory() as d:
            with self.assertRaises(UnsupportedFormat):
                load_survey(Path(d) / "nope.csv", "json")


if __name__ == "__main__":
    unittest.main()
