"""
Unit tests for package version comparison.
"""

import unittest

from pkgquery.version import segment_compare, split_evr, vercmp


class TestVercmp(unittest.TestCase):
    """Test cases for vercmp."""

    def assertOlder(self, a, b):
        self.assertEqual(vercmp(a, b), -1, f"{a} should be older than {b}")
        self.assertEqual(vercmp(b, a), 1, f"{b} should be newer than {a}")

    def test_equal(self):
        """Test equal versions."""
        self.assertEqual(vercmp("1.0", "1.0"), 0)
        self.assertEqual(vercmp("1.0-1", "1.0-1"), 0)
        self.assertEqual(vercmp("1.001", "1.1"), 0)

    def test_numeric_segments(self):
        """Test that numeric segments compare numerically."""
        self.assertOlder("1.2", "1.10")
        self.assertOlder("1.0", "1.0.1")
        self.assertOlder("9", "10")

    def test_alpha_segments(self):
        """Test alphabetic segments."""
        self.assertOlder("1.0a", "1.0b")
        self.assertOlder("1.0alpha", "1.0")
        self.assertOlder("1.0a", "1.0.1")
        self.assertOlder("a", "1")

    def test_release(self):
        """Test that the release is compared after the version."""
        self.assertOlder("1.0-1", "1.0-2")
        self.assertOlder("1.0-9", "1.1-1")
        self.assertEqual(vercmp("1.0", "1.0-5"), 0)

    def test_epoch(self):
        """Test that the epoch wins over everything else."""
        self.assertOlder("2.0-1", "1:1.0-1")
        self.assertOlder("1:1.0", "2:0.1")
        self.assertEqual(vercmp("0:1.0", "1.0"), 0)

    def test_separators(self):
        """Test separator handling."""
        self.assertOlder("1.0", "1..0")
        self.assertEqual(vercmp("1_0", "1.0"), 0)

    def test_missing(self):
        """Test missing versions."""
        self.assertEqual(vercmp(None, None), 0)
        self.assertEqual(vercmp(None, "1"), -1)
        self.assertEqual(vercmp("1", None), 1)

    def test_split_evr(self):
        """Test epoch, version and release splitting."""
        self.assertEqual(split_evr("1:2.3-4"), ("1", "2.3", "4"))
        self.assertEqual(split_evr("2.3"), ("0", "2.3", None))
        self.assertEqual(split_evr("2.3-rc1-4"), ("0", "2.3-rc1", "4"))
        self.assertEqual(split_evr(":1.0"), ("0", "1.0", None))

    def test_segment_compare_identity(self):
        """Test that identical parts compare equal."""
        self.assertEqual(segment_compare("abc", "abc"), 0)


if __name__ == '__main__':
    unittest.main()
