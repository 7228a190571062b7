# gesture/utils.py
import math
import time
from dataclasses import dataclass

import numpy as np

from config import ROLL_ALPHA
from gesture.types import GestureConfig


@dataclass
class RollSmoother:
    alpha: float = ROLL_ALPHA
    value: float = 0.0

    def update(self, raw: float) -> float:
        """Exponential smoothing; larger alpha means heavier smoothing."""
        self.value = self.alpha * self.value + (1.0 - self.alpha) * raw
        return self.value

    def reset(self):
        self.value = 0.0


def rotation_vector_to_roll_deg(values) -> float:
    """
    Rotation vector (x, y, z[, w]) -> roll in degrees.
    w is derived from the unit-quaternion constraint when omitted.
    """
    v = np.asarray(values, dtype=np.float64)
    if v.shape[0] < 3:
        raise ValueError(f"rotation vector needs at least 3 components, got {v.shape[0]}")
    x, y, z = v[0], v[1], v[2]
    if v.shape[0] >= 4:
        w = v[3]
    else:
        w = math.sqrt(max(0.0, 1.0 - x * x - y * y - z * z))

    r = np.array([
        [1 - 2 * y * y - 2 * z * z, 2 * x * y - 2 * z * w, 2 * x * z + 2 * y * w],
        [2 * x * y + 2 * z * w, 1 - 2 * x * x - 2 * z * z, 2 * y * z - 2 * x * w],
        [2 * x * z - 2 * y * w, 2 * y * z + 2 * x * w, 1 - 2 * x * x - 2 * y * y],
    ])
    return math.degrees(math.atan2(-r[2, 0], r[2, 2]))


def lm_xy(lm, w, h):
    return np.array([lm.x * w, lm.y * h], dtype=np.float32)


def landmark_roll_deg(base, tip) -> float:
    """
    Lean of the base->tip axis away from image vertical (pixel coords, y down).
    0 = upright, positive = tip leaning toward image right.
    """
    v = np.asarray(tip, dtype=np.float64) - np.asarray(base, dtype=np.float64)
    dx, dy = float(v[0]), float(v[1])
    if abs(dx) < 1e-9 and abs(dy) < 1e-9:
        return 0.0
    return math.degrees(math.atan2(dx, -dy))


def side_label(roll: float, config: GestureConfig) -> str:
    # instantaneous readout, no hysteresis
    if roll > config.tilt_threshold_deg:
        return "RIGHT"
    if roll < -config.tilt_threshold_deg:
        return "LEFT"
    return "NEUTRAL"


def now_ms() -> int:
    return int(time.monotonic() * 1000)
