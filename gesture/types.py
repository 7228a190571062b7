# gesture/types.py
import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from config import (
    NEUTRAL_ZONE_DEG, TILT_THRESHOLD_DEG,
    TILT_MIN_DURATION_MS, DOUBLE_TILT_WINDOW_MS,
    NEUTRAL_RETURN_MS, GLOBAL_COOLDOWN_MS,
)


class Side(Enum):
    LEFT = "LEFT"
    RIGHT = "RIGHT"
    NEUTRAL = "NEUTRAL"


class Command(Enum):
    NEXT = "NEXT"
    PREVIOUS = "PREVIOUS"


class TiltState(Enum):
    IDLE = "IDLE"
    FIRST_TILT = "FIRST_TILT"
    WAITING_NEUTRAL = "WAITING_NEUTRAL"
    SECOND_TILT = "SECOND_TILT"


class GestureConfigError(ValueError):
    pass


@dataclass(frozen=True)
class GestureConfig:
    """Thresholds and timing of the double-tilt gesture.

    Angles are degrees, durations are milliseconds. The band between
    ``neutral_zone_deg`` and ``tilt_threshold_deg`` is the hysteresis band
    in which the previous side is kept.
    """
    neutral_zone_deg: float = NEUTRAL_ZONE_DEG
    tilt_threshold_deg: float = TILT_THRESHOLD_DEG
    tilt_min_duration_ms: int = TILT_MIN_DURATION_MS
    double_tilt_window_ms: int = DOUBLE_TILT_WINDOW_MS
    neutral_return_ms: int = NEUTRAL_RETURN_MS
    global_cooldown_ms: int = GLOBAL_COOLDOWN_MS

    def __post_init__(self):
        for name in (
            "neutral_zone_deg", "tilt_threshold_deg",
            "tilt_min_duration_ms", "double_tilt_window_ms",
            "neutral_return_ms", "global_cooldown_ms",
        ):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise GestureConfigError(f"{name} must be finite, got {value!r}")

        if self.neutral_zone_deg <= 0:
            raise GestureConfigError(f"neutral_zone_deg must be positive, got {self.neutral_zone_deg}")
        if self.tilt_threshold_deg <= self.neutral_zone_deg:
            raise GestureConfigError(
                f"tilt_threshold_deg ({self.tilt_threshold_deg}) must be greater than "
                f"neutral_zone_deg ({self.neutral_zone_deg})"
            )

        for name in ("tilt_min_duration_ms", "neutral_return_ms", "global_cooldown_ms"):
            if getattr(self, name) < 0:
                raise GestureConfigError(f"{name} must not be negative, got {getattr(self, name)}")
        if self.double_tilt_window_ms <= 0:
            raise GestureConfigError(
                f"double_tilt_window_ms must be positive, got {self.double_tilt_window_ms}"
            )


# Sequence state: one variant per FSM state, each with only the fields it needs

@dataclass(frozen=True)
class Idle:
    tag = TiltState.IDLE


@dataclass(frozen=True)
class FirstTilt:
    target_side: Side
    first_tilt_start_ms: int
    sequence_start_ms: int
    tag = TiltState.FIRST_TILT


@dataclass(frozen=True)
class WaitingNeutral:
    target_side: Side
    sequence_start_ms: int
    neutral_start_ms: int
    tag = TiltState.WAITING_NEUTRAL


@dataclass(frozen=True)
class SecondTilt:
    target_side: Side
    sequence_start_ms: int
    tag = TiltState.SECOND_TILT


Sequence = Union[Idle, FirstTilt, WaitingNeutral, SecondTilt]


@dataclass
class MonitorState:
    roll_deg: float = 0.0
    side: Side = Side.NEUTRAL
    tilt_state: TiltState = TiltState.IDLE
    label: str = "INIT"
    message: str = ""
    command: Optional[Command] = None    # consumed by the monitor
    source_info: str = ""
    test_mode: bool = False
