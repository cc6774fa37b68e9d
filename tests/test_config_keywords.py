"""Unit tests for directive keyword matching."""

import unittest
from mdconf.config import keywords as kw
from mdconf.config.keywords import keyword_match


class TestKeywordMatch(unittest.TestCase):
    """Test keyword_match."""

    def test_full_words(self) -> None:
        """Test every keyword in any case."""
        for zs in kw.DIRECTIVES:
            self.assertEqual(keyword_match(zs), zs)
            self.assertEqual(keyword_match(zs.upper()), zs)

    def test_abbreviations(self) -> None:
        """Test three or more characters are enough."""
        self.assertEqual(keyword_match("DEV"), kw.DEVICES)
        self.assertEqual(keyword_match("DEVICE"), kw.DEVICES)
        self.assertEqual(keyword_match("arr"), kw.ARRAY)
        self.assertEqual(keyword_match("Prog"), kw.PROGRAM)
        self.assertEqual(keyword_match("cre"), kw.CREATE)
        self.assertEqual(keyword_match("home"), kw.HOMEHOST)
        self.assertEqual(keyword_match("aut"), kw.AUTO)

    def test_too_short(self) -> None:
        """Test fewer than three characters never match."""
        self.assertIsNone(keyword_match("de"))
        self.assertIsNone(keyword_match("a"))
        self.assertIsNone(keyword_match(""))

    def test_shared_prefix_takes_first(self) -> None:
        """Test MAI resolves to MAILADDR, which is listed first."""
        self.assertEqual(keyword_match("mai"), kw.MAILADDR)
        self.assertEqual(keyword_match("MAIL"), kw.MAILADDR)
        self.assertEqual(keyword_match("mailf"), kw.MAILFROM)

    def test_unknown(self) -> None:
        """Test unknown and over-long words."""
        self.assertIsNone(keyword_match("foo"))
        self.assertIsNone(keyword_match("devicesx"))
        self.assertIsNone(keyword_match("arrays"))


if __name__ == "__main__":
    unittest.main()
