# gesture/worker.py
import threading
import traceback
from typing import Optional

from gesture.engine import GestureEngine
from gesture.types import Command, GestureConfig, MonitorState
from gesture.utils import RollSmoother, side_label

COMMAND_NAMES = {Command.NEXT: "Next", Command.PREVIOUS: "Previous"}
TRACK_MESSAGES = {Command.NEXT: "Next track", Command.PREVIOUS: "Previous track"}
NO_MEDIA_MESSAGE = "No active media (start playback first)"
FAILED_MESSAGE = "Command failed"


class TiltWorker(threading.Thread):
    """
    One monitoring session: pulls (t_ms, roll) samples from a source, smooths
    them and feeds a GestureEngine owned by this thread only. Commands go to the
    commander (or are only reported in test mode).
    """

    def __init__(self, state: MonitorState, source, commander,
                 config: Optional[GestureConfig] = None, test_mode: bool = False):
        super().__init__(daemon=True)
        self.state = state
        self.source = source
        self.commander = commander
        self.test_mode = test_mode
        self._stop_event = threading.Event()
        self.lock = threading.Lock()            # guards state
        self.command_lock = threading.Lock()    # serializes commander calls

        self.engine = GestureEngine(config)
        self.smoother = RollSmoother()

        with self.lock:
            self.state.test_mode = test_mode

    def stop(self):
        self._stop_event.set()

    @property
    def stopped(self) -> bool:
        return self._stop_event.is_set()

    def process(self, raw_roll: Optional[float], t_ms: int) -> Optional[Command]:
        if raw_roll is None:
            with self.lock:
                self.state.label = "NO_HAND"
            return None

        roll = self.smoother.update(raw_roll)
        cmd = self.engine.on_sample(roll, t_ms)

        with self.lock:
            self.state.roll_deg = roll
            self.state.side = self.engine.side
            self.state.tilt_state = self.engine.tilt_state
            self.state.label = f"{side_label(roll, self.engine.config)} | {self.engine.tilt_state.value}"

        if cmd is not None:
            self.execute(cmd, roll)
        return cmd

    def execute(self, cmd: Command, roll: float) -> bool:
        if self.test_mode:
            ok = True
            msg = f"DETECTED: {COMMAND_NAMES[cmd]} ({round(roll)}°)"
        else:
            try:
                with self.command_lock:
                    ok = self.commander.execute(cmd)
            except Exception as e:
                print("[TiltWorker] Command failed:", e)
                ok = False
                msg = f"{FAILED_MESSAGE}: {e}"
            else:
                if ok:
                    msg = f"{TRACK_MESSAGES[cmd]} (roll={round(roll)}°)"
                else:
                    msg = NO_MEDIA_MESSAGE

        print("[TiltWorker]", msg)
        with self.lock:
            self.state.message = msg
            self.state.command = cmd
        return ok

    def manual(self, action) -> bool:
        """Run a keyboard-triggered player/commander call; failures become a message."""
        try:
            with self.command_lock:
                return bool(action())
        except Exception as e:
            print("[TiltWorker] Manual command failed:", e)
            with self.lock:
                self.state.message = f"{FAILED_MESSAGE}: {e}"
            return False

    def run(self):
        try:
            with self.lock:
                self.state.source_info = getattr(self.source, "info", "")
            print("[TiltWorker] Source:", self.state.source_info)

            for t_ms, roll in self.source:
                if self._stop_event.is_set():
                    break
                self.process(roll, t_ms)

            if not self._stop_event.is_set():
                with self.lock:
                    self.state.label = "SOURCE_ENDED"
                print("[TiltWorker] Source ended.")

        except Exception as e:
            with self.lock:
                self.state.label = "WORKER_EXCEPTION"
            print("[TiltWorker] Exception:", e)
            traceback.print_exc()

        finally:
            close = getattr(self.source, "close", None)
            if close is not None:
                close()
