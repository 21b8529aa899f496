"""
Unit tests for text normalization.
"""
import unittest

from bankproof.services.text_normalizer import normalize_text


class TestNormalizeText(unittest.TestCase):
    """Test cases for normalize_text."""

    def test_crlf_and_whitespace_runs_collapse(self):
        """Test CRLF plus indentation collapses to a single space."""
        self.assertEqual(normalize_text("a\r\n  b"), "a b")

    def test_mixed_whitespace(self):
        """Test tabs, newlines and repeated spaces all collapse."""
        raw = "\tCHAVE:\n\n414979709 \t PIN:\r\n86612413\n"
        self.assertEqual(normalize_text(raw), "CHAVE: 414979709 PIN: 86612413")

    def test_trims_ends(self):
        """Test leading and trailing whitespace is removed."""
        self.assertEqual(normalize_text("   hello   "), "hello")

    def test_empty_and_blank(self):
        """Test empty and whitespace-only input yield empty string."""
        self.assertEqual(normalize_text(""), "")
        self.assertEqual(normalize_text(" \r\n\t "), "")

    def test_idempotent(self):
        """Test normalizing twice equals normalizing once."""
        samples = [
            "a\r\n  b",
            "  CHAVE:\t414979709\r\n\r\nPIN: 86612413  ",
            "single",
            "",
            "\n\n\n",
            "x\u00a0\u00a0y",  # non-breaking spaces count as whitespace
        ]
        for sample in samples:
            with self.subTest(sample=sample):
                once = normalize_text(sample)
                self.assertEqual(normalize_text(once), once)

    def test_no_newlines_remain(self):
        """Test output is a single line."""
        result = normalize_text("line1\nline2\r\nline3\rline4")
        self.assertNotIn("\n", result)
        self.assertNotIn("\r", result)
        self.assertEqual(result, "line1 line2 line3 line4")


if __name__ == "__main__":
    unittest.main()
