import unittest

from hanoi.config import (
    GameConfig,
    DEFAULT_DISK_COUNT,
    DEFAULT_MOVE_INTERVAL,
    MAX_DISKS,
    MIN_DISKS,
    clamp_disk_count,
    parse_disk_count,
)


class TestDiskCountParsing(unittest.TestCase):

    def test_clamp(self):
        self.assertEqual(clamp_disk_count(0), MIN_DISKS)
        self.assertEqual(clamp_disk_count(7), 7)
        self.assertEqual(clamp_disk_count(20), MAX_DISKS)

    def test_parse_accepts_numbers_and_numeric_text(self):
        self.assertEqual(parse_disk_count(5), 5)
        self.assertEqual(parse_disk_count("8"), 8)
        self.assertEqual(parse_disk_count("  4 "), 4)
        self.assertEqual(parse_disk_count("7 disks"), 7)
        self.assertEqual(parse_disk_count(6.9), 6)

    def test_parse_clamps(self):
        self.assertEqual(parse_disk_count("0"), 1)
        self.assertEqual(parse_disk_count("-3"), 1)
        self.assertEqual(parse_disk_count(99), 15)

    def test_parse_falls_back_to_default(self):
        for raw in (None, "", "abc", "   ", True, [], float("nan")):
            with self.subTest(raw=raw):
                self.assertEqual(parse_disk_count(raw), DEFAULT_DISK_COUNT)
        self.assertEqual(parse_disk_count("x", default=5), 5)


class TestGameConfig(unittest.TestCase):

    def test_defaults(self):
        config = GameConfig()
        self.assertEqual(config.disk_count, DEFAULT_DISK_COUNT)
        self.assertEqual(config.move_interval, DEFAULT_MOVE_INTERVAL)

    def test_disk_count_is_normalised(self):
        self.assertEqual(GameConfig(disk_count=40).disk_count, 15)
        self.assertEqual(GameConfig(disk_count="2").disk_count, 2)

    def test_invalid_interval_raises(self):
        for interval in (0, -1, "fast", None):
            with self.subTest(interval=interval):
                with self.assertRaises(ValueError):
                    GameConfig(move_interval=interval)

    def test_from_mapping_ignores_unknown_keys(self):
        config = GameConfig.from_mapping({"disk_count": "9", "move_interval": 0.25, "theme": "dark"})
        self.assertEqual(config.disk_count, 9)
        self.assertEqual(config.move_interval, 0.25)
        self.assertEqual(GameConfig.from_mapping({}), GameConfig())


if __name__ == '__main__':
    unittest.main()
