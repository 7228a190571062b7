"""
Roll smoothing and angle conversion helpers
"""
import sys
import os
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import math
import unittest

import numpy as np

from gesture.types import GestureConfig
from gesture.utils import (
    RollSmoother, rotation_vector_to_roll_deg, landmark_roll_deg, side_label, now_ms,
)


def about_y(deg):
    h = math.radians(deg) / 2.0
    return [0.0, math.sin(h), 0.0, math.cos(h)]


class TestRollSmoother(unittest.TestCase):
    def test_exponential_smoothing(self):
        s = RollSmoother(alpha=0.6)
        self.assertAlmostEqual(s.update(10.0), 4.0)
        self.assertAlmostEqual(s.update(10.0), 6.4)

    def test_converges_to_steady_input(self):
        s = RollSmoother()
        for _ in range(100):
            v = s.update(40.0)
        self.assertAlmostEqual(v, 40.0, places=3)

    def test_reset(self):
        s = RollSmoother()
        s.update(50.0)
        s.reset()
        self.assertEqual(s.value, 0.0)


class TestRotationVector(unittest.TestCase):
    def test_identity_is_level(self):
        self.assertAlmostEqual(rotation_vector_to_roll_deg([0.0, 0.0, 0.0, 1.0]), 0.0)

    def test_rotation_about_y_is_roll(self):
        self.assertAlmostEqual(rotation_vector_to_roll_deg(about_y(40.0)), 40.0)
        self.assertAlmostEqual(rotation_vector_to_roll_deg(about_y(-40.0)), -40.0)

    def test_scalar_component_derived_when_missing(self):
        self.assertAlmostEqual(rotation_vector_to_roll_deg(about_y(30.0)[:3]), 30.0)

    def test_pitch_does_not_change_roll(self):
        h = math.radians(30.0) / 2.0
        self.assertAlmostEqual(rotation_vector_to_roll_deg([math.sin(h), 0.0, 0.0, math.cos(h)]), 0.0)

    def test_accepts_numpy_and_extra_components(self):
        v = np.array(about_y(25.0) + [0.5], dtype=np.float32)
        self.assertAlmostEqual(rotation_vector_to_roll_deg(v), 25.0, places=4)

    def test_too_short(self):
        with self.assertRaises(ValueError):
            rotation_vector_to_roll_deg([0.1, 0.2])


class TestLandmarkRoll(unittest.TestCase):
    def test_upright(self):
        self.assertAlmostEqual(landmark_roll_deg((100, 200), (100, 100)), 0.0)

    def test_leaning(self):
        self.assertAlmostEqual(landmark_roll_deg((100, 200), (200, 100)), 45.0)
        self.assertAlmostEqual(landmark_roll_deg((100, 200), (0, 100)), -45.0)

    def test_degenerate(self):
        self.assertEqual(landmark_roll_deg((5, 5), (5, 5)), 0.0)


class TestSideLabel(unittest.TestCase):
    def test_strict_threshold(self):
        cfg = GestureConfig()
        self.assertEqual(side_label(36.0, cfg), "RIGHT")
        self.assertEqual(side_label(35.0, cfg), "NEUTRAL")
        self.assertEqual(side_label(-36.0, cfg), "LEFT")


class TestClock(unittest.TestCase):
    def test_monotonic(self):
        a = now_ms()
        b = now_ms()
        self.assertLessEqual(a, b)


if __name__ == "__main__":
    unittest.main()
