# gesture/engine.py
import math
from typing import Optional

from gesture.types import (
    Command, GestureConfig, Side, TiltState,
    Sequence, Idle, FirstTilt, WaitingNeutral, SecondTilt,
)


def classify(angle: float, previous_side: Side, config: GestureConfig) -> Side:
    """
    Strict comparisons: an angle exactly on either threshold is in the
    hysteresis band and keeps the previous side.
    """
    if angle > config.tilt_threshold_deg:
        return Side.RIGHT
    if angle < -config.tilt_threshold_deg:
        return Side.LEFT
    if abs(angle) < config.neutral_zone_deg:
        return Side.NEUTRAL
    return previous_side


class GestureEngine:
    """Turns (roll, timestamp) samples into NEXT / PREVIOUS commands.

    Accepted pattern, all within ``double_tilt_window_ms`` of the first
    departure from neutral::

        neutral -> tilt to X (held >= tilt_min_duration_ms)
                -> neutral (held >= neutral_return_ms)
                -> tilt to X -> neutral            => command

    X == RIGHT gives NEXT, X == LEFT gives PREVIOUS. After a command every
    sample is ignored for ``global_cooldown_ms``.

    Calls must be serialized by the caller; timestamps come from the caller
    and must not go backwards.
    """

    def __init__(self, config: Optional[GestureConfig] = None):
        self._config = config or GestureConfig()
        self._side = Side.NEUTRAL
        self._seq: Sequence = Idle()
        self._last_fire_ms: Optional[int] = None
        self._last_sample_ms: Optional[int] = None
        self.rejected_samples = 0

    @property
    def config(self) -> GestureConfig:
        return self._config

    @property
    def side(self) -> Side:
        return self._side

    @property
    def tilt_state(self) -> TiltState:
        return self._seq.tag

    @property
    def target_side(self) -> Optional[Side]:
        return getattr(self._seq, "target_side", None)

    @property
    def last_fire_ms(self) -> Optional[int]:
        return self._last_fire_ms

    def on_sample(self, angle: float, now_ms: int) -> Optional[Command]:
        if not (math.isfinite(angle) and math.isfinite(now_ms)):
            self.rejected_samples += 1
            return None
        if self._last_sample_ms is not None and now_ms < self._last_sample_ms:
            self.rejected_samples += 1
            return None
        self._last_sample_ms = now_ms

        # Cooldown drops the sample entirely: side tracking is frozen too
        if self._last_fire_ms is not None and now_ms - self._last_fire_ms < self._config.global_cooldown_ms:
            return None

        previous_side = self._side
        new_side = classify(angle, previous_side, self._config)
        self._side = new_side

        seq = self._seq
        if isinstance(seq, Idle):
            return self._on_idle(new_side, previous_side, now_ms)
        if isinstance(seq, FirstTilt):
            return self._on_first_tilt(seq, new_side, previous_side, now_ms)
        if isinstance(seq, WaitingNeutral):
            return self._on_waiting_neutral(seq, new_side, previous_side, now_ms)
        return self._on_second_tilt(seq, new_side, previous_side, now_ms)

    # Guards inside each handler are first-match-wins, in this order

    def _on_idle(self, new_side, previous_side, now_ms):
        if new_side != Side.NEUTRAL and previous_side == Side.NEUTRAL:
            self._seq = FirstTilt(
                target_side=new_side,
                first_tilt_start_ms=now_ms,
                sequence_start_ms=now_ms,
            )
        return None

    def _on_first_tilt(self, seq: FirstTilt, new_side, previous_side, now_ms):
        if new_side == Side.NEUTRAL and previous_side == seq.target_side:
            if now_ms - seq.first_tilt_start_ms >= self._config.tilt_min_duration_ms:
                self._seq = WaitingNeutral(
                    target_side=seq.target_side,
                    sequence_start_ms=seq.sequence_start_ms,
                    neutral_start_ms=now_ms,
                )
            else:
                self._abort()
        elif new_side != seq.target_side and new_side != Side.NEUTRAL:
            self._abort()
        elif self._expired(seq, now_ms):
            self._abort()
        return None

    def _on_waiting_neutral(self, seq: WaitingNeutral, new_side, previous_side, now_ms):
        if new_side == seq.target_side and previous_side == Side.NEUTRAL:
            if (now_ms - seq.neutral_start_ms >= self._config.neutral_return_ms
                    and not self._expired(seq, now_ms)):
                self._seq = SecondTilt(
                    target_side=seq.target_side,
                    sequence_start_ms=seq.sequence_start_ms,
                )
            else:
                self._abort()
        elif new_side != Side.NEUTRAL and new_side != seq.target_side:
            self._abort()
        elif self._expired(seq, now_ms):
            self._abort()
        return None

    def _on_second_tilt(self, seq: SecondTilt, new_side, previous_side, now_ms):
        if new_side == Side.NEUTRAL and previous_side == seq.target_side:
            cmd = Command.NEXT if seq.target_side == Side.RIGHT else Command.PREVIOUS
            self._last_fire_ms = now_ms
            self._abort()
            return cmd
        if self._expired(seq, now_ms):
            self._abort()
        return None

    def _expired(self, seq, now_ms) -> bool:
        return now_ms - seq.sequence_start_ms > self._config.double_tilt_window_ms

    def _abort(self):
        self._seq = Idle()
