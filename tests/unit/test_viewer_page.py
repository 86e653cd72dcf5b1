import re
import unittest

from sheet_gen.bridge import build_viewer_page, decode_payload


class TestViewerPage(unittest.TestCase):
    def test_document_embedded_encoded(self):
        document = "<score-partwise>`${x}`</script><!-- --></score-partwise>"
        page = build_viewer_page(document, attempt_id=7)

        self.assertNotIn("</script><!--", page)
        self.assertNotIn("`${x}`", page)
        self.assertEqual(page.count("</script>"), 2)

        match = re.search(r'decodeURIComponent\("([^"]*)"\)', page)
        self.assertIsNotNone(match)
        self.assertEqual(decode_payload(match.group(1)), document)
        self.assertIn("var attemptId = 7;", page)

    def test_page_reports_both_failure_stages(self):
        page = build_viewer_page("<score-partwise/>")
        self.assertIn('showError("load", err)', page)
        self.assertIn('showError("layout", err)', page)
        self.assertIn('postOutcome({type: "success"})', page)

    def test_empty_document_rejected(self):
        with self.assertRaises(ValueError):
            build_viewer_page("")

    def test_drawing_preset_embedded_verbatim(self):
        page = build_viewer_page("<score-partwise/>", drawing_parameters="leadsheet")
        self.assertIn('drawingParameters: "leadsheet"', page)

    def test_unknown_drawing_preset_rejected(self):
        for preset in ('compact", evil: "1', "compact tight", ""):
            with self.assertRaises(ValueError):
                build_viewer_page("<score-partwise/>", drawing_parameters=preset)


if __name__ == "__main__":
    unittest.main()
