"""
Command-line entry point
"""
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import tempfile
import unittest

from gesture.types import GestureConfig
from tilt_media_controller import build_config, main, parse_args


class TestController(unittest.TestCase):
    def test_defaults_build_default_config(self):
        self.assertEqual(build_config(parse_args([])), GestureConfig())

    def test_tuning_options(self):
        args = parse_args(["--neutral-zone", "15", "--tilt-threshold", "30", "--cooldown-ms", "500"])
        cfg = build_config(args)
        self.assertEqual(cfg.neutral_zone_deg, 15.0)
        self.assertEqual(cfg.tilt_threshold_deg, 30.0)
        self.assertEqual(cfg.global_cooldown_ms, 500)

    def test_invalid_config_exits_with_2(self):
        self.assertEqual(main(["--neutral-zone", "40", "--tilt-threshold", "30", "--headless"]), 2)

    def test_replay_requires_file(self):
        with self.assertRaises(SystemExit):
            parse_args(["--source", "replay"])

    def test_missing_replay_file(self):
        self.assertEqual(main(["--source", "replay", "--replay", "/nonexistent/rec.csv", "--headless"]), 1)

    def test_headless_replay(self):
        with tempfile.TemporaryDirectory() as d:
            path = os.path.join(d, "rec.csv")
            with open(path, "w", encoding="utf-8") as f:
                f.write("t_ms,roll_deg\n0,0\n10,40\n120,0\n300,40\n310,0\n")
            rc = main(["--source", "replay", "--replay", path, "--headless", "--test-mode"])
        self.assertEqual(rc, 0)


if __name__ == "__main__":
    unittest.main()
