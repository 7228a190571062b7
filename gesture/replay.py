# gesture/replay.py
import time
from typing import Iterator, List, Optional, Tuple

import numpy as np


def load_roll_csv(path) -> List[Tuple[int, float]]:
    """
    Load a recording of `t_ms,roll_deg` rows. A header line is allowed.
    Timestamps must be non-decreasing and every value finite.
    """
    with open(path, "r", encoding="utf-8") as f:
        lines = [ln for ln in f.read().splitlines() if ln.strip() and not ln.lstrip().startswith("#")]
    if not lines:
        return []

    skip = 0
    first = lines[0].split(",")[0].strip()
    try:
        float(first)
    except ValueError:
        skip = 1  # header
    if skip >= len(lines):
        return []

    try:
        data = np.loadtxt(lines[skip:], delimiter=",", dtype=np.float64, ndmin=2)
    except ValueError as e:
        raise ValueError(f"{path}: malformed recording ({e})") from e

    if data.shape[1] != 2:
        raise ValueError(f"{path}: expected 2 columns (t_ms, roll_deg), got {data.shape[1]}")
    if not np.isfinite(data).all():
        raise ValueError(f"{path}: recording contains non-finite values")
    if data.shape[0] > 1 and (np.diff(data[:, 0]) < 0).any():
        raise ValueError(f"{path}: timestamps go backwards")

    return [(int(t), float(r)) for t, r in data]


class ReplayRollSource:
    """Feeds recorded (t_ms, roll_deg) samples, optionally at recorded speed."""

    def __init__(self, samples, realtime: bool = False, info: str = "REPLAY"):
        self.samples = list(samples)
        self.realtime = realtime
        self.info = f"{info} ({len(self.samples)} samples)"

    @classmethod
    def from_csv(cls, path, realtime: bool = False):
        return cls(load_roll_csv(path), realtime=realtime, info=f"REPLAY {path}")

    def __iter__(self) -> Iterator[Tuple[int, Optional[float]]]:
        prev_t = None
        for t, roll in self.samples:
            if self.realtime and prev_t is not None and t > prev_t:
                time.sleep((t - prev_t) / 1000.0)
            prev_t = t
            yield t, roll
