import tempfile
import unittest
from datetime import datetime
from pathlib import Path

from sheet_gen.domain import MUSICXML_MIME_TYPE, ResultExporter


class TestResultExporter(unittest.TestCase):
    def test_artifact_named_from_timestamp(self):
        artifact = ResultExporter().export_artifact(
            "<score-partwise>é</score-partwise>", created_at=datetime(2024, 3, 9, 14, 5, 7)
        )
        self.assertEqual(artifact.filename, "sheet_music_20240309-140507.musicxml")
        self.assertEqual(artifact.mime_type, MUSICXML_MIME_TYPE)
        self.assertEqual(artifact.content, "<score-partwise>é</score-partwise>".encode("utf-8"))

    def test_empty_document_is_a_no_op(self):
        exporter = ResultExporter()
        self.assertIsNone(exporter.export_artifact(""))
        self.assertIsNone(exporter.export_artifact(None))

    def test_write_artifact(self):
        exporter = ResultExporter(prefix="violin")
        artifact = exporter.export_artifact("<score-partwise/>", created_at=datetime(2024, 1, 1))
        with tempfile.TemporaryDirectory() as tmp:
            path = exporter.write_artifact(artifact, Path(tmp) / "downloads")
            self.assertEqual(path.name, "violin_20240101-000000.musicxml")
            self.assertEqual(path.read_bytes(), b"<score-partwise/>")


if __name__ == "__main__":
    unittest.main()
