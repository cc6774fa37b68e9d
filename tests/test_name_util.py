"""Unit tests for device name utilities."""

import unittest
from mdconf.name_util import (
    canonicalize_device_name,
    is_valid_md_devname,
    name_matches,
    path_glob_match,
    pattern_list_matches,
)


class TestCanonicalize(unittest.TestCase):
    """Test canonicalize_device_name and name_matches."""

    def test_md_dir_prefix(self) -> None:
        """Test /dev/md/ is stripped."""
        self.assertEqual(canonicalize_device_name("/dev/md/foo"), "foo")
        self.assertEqual(
            canonicalize_device_name("/dev/md/foo"), canonicalize_device_name("foo")
        )

    def test_numbered(self) -> None:
        """Test mdNN reduces to NN."""
        self.assertEqual(canonicalize_device_name("/dev/md3"), "3")
        self.assertEqual(canonicalize_device_name("md3"), "3")
        self.assertEqual(canonicalize_device_name("3"), "3")

    def test_md_without_digit(self) -> None:
        """Test md followed by a non-digit is kept."""
        self.assertEqual(canonicalize_device_name("/dev/mdx"), "mdx")
        self.assertEqual(canonicalize_device_name("md"), "md")
        self.assertEqual(canonicalize_device_name("/dev/md_d0"), "md_d0")

    def test_dev_prefix_only(self) -> None:
        """Test /dev/ alone is stripped."""
        self.assertEqual(canonicalize_device_name("/dev/sda"), "sda")

    def test_md_dir_numeric(self) -> None:
        """Test /dev/md/0 and /dev/md0 agree."""
        self.assertTrue(name_matches("/dev/md/0", "/dev/md0"))

    def test_name_matches(self) -> None:
        """Test name_matches both ways."""
        self.assertTrue(name_matches("/dev/md0", "0"))
        self.assertTrue(name_matches("0", "/dev/md0"))
        self.assertFalse(name_matches("/dev/md0", "md1"))
        self.assertTrue(name_matches("/dev/md/home", "home"))
        self.assertFalse(name_matches("/dev/md/home", "Home"))


class TestGlob(unittest.TestCase):
    """Test path-aware glob matching."""

    def test_star_stays_in_component(self) -> None:
        """Test * does not match across /."""
        self.assertTrue(path_glob_match("/dev/sd*", "/dev/sdb1"))
        self.assertFalse(path_glob_match("/dev/*", "/dev/disk/by-id/x"))
        self.assertTrue(path_glob_match("/dev/*/*/x", "/dev/disk/by-id/x"))

    def test_question_and_brackets(self) -> None:
        """Test ? and [...]."""
        self.assertTrue(path_glob_match("/dev/sd[a-c]?", "/dev/sdb1"))
        self.assertFalse(path_glob_match("/dev/sd[a-c]?", "/dev/sdd1"))
        self.assertTrue(path_glob_match("/dev/sd[!a]1", "/dev/sdb1"))

    def test_case_sensitive(self) -> None:
        """Test matching is case-sensitive."""
        self.assertFalse(path_glob_match("/dev/SD*", "/dev/sda"))

    def test_pattern_list(self) -> None:
        """Test comma-separated pattern lists."""
        ptns = "/dev/hd*,/dev/sd[ab]1"
        self.assertTrue(pattern_list_matches(ptns, "/dev/sda1"))
        self.assertTrue(pattern_list_matches(ptns, "/dev/hdc"))
        self.assertFalse(pattern_list_matches(ptns, "/dev/sdc1"))

    def test_pattern_list_empty(self) -> None:
        """Test empty or missing lists never match."""
        self.assertFalse(pattern_list_matches(None, "/dev/sda"))
        self.assertFalse(pattern_list_matches("", "/dev/sda"))

    def test_pattern_list_skips_oversized(self) -> None:
        """Test segments of 1024 bytes or more are skipped."""
        big = "/dev/" + "*" * 1100
        self.assertFalse(pattern_list_matches(big, "/dev/sda"))
        self.assertTrue(pattern_list_matches(big + ",/dev/sda", "/dev/sda"))
        ok = "/dev/" + "*" * 1000
        self.assertTrue(pattern_list_matches(ok, "/dev/sda"))


class TestDevname(unittest.TestCase):
    """Test ARRAY device name validation."""

    def test_accepted(self) -> None:
        """Test names an ARRAY line may use."""
        for zs in (
            "/dev/md0",
            "/dev/md127",
            "/dev/md_d2",
            "/dev/md/home",
            "<ignore>",
            "<IGNORE>",
            "home",
            "md0",
        ):
            self.assertTrue(is_valid_md_devname(zs), zs)

    def test_rejected(self) -> None:
        """Test names an ARRAY line may not use."""
        for zs in ("/dev/sda", "/dev/md", "/dev/mdx", "/dev/md_d", "/dev/md1a", "<foo>"):
            self.assertFalse(is_valid_md_devname(zs), zs)


if __name__ == "__main__":
    unittest.main()
