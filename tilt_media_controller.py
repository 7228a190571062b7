# tilt_media_controller.py
import argparse
import sys
import time

from config import (
    NEUTRAL_ZONE_DEG, TILT_THRESHOLD_DEG,
    TILT_MIN_DURATION_MS, DOUBLE_TILT_WINDOW_MS,
    NEUTRAL_RETURN_MS, GLOBAL_COOLDOWN_MS,
)
from gesture.types import GestureConfig, GestureConfigError, MonitorState
from gesture.worker import TiltWorker
from media.player import MediaCommander, PlaylistPlayer


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Skip media tracks with a double tilt gesture.")
    p.add_argument("--source", choices=["camera", "replay"], default="camera",
                   help="where roll angles come from (default: camera)")
    p.add_argument("--replay", metavar="FILE", help="CSV recording of t_ms,roll_deg for --source replay")
    p.add_argument("--realtime", action="store_true", help="replay at the recorded speed")
    p.add_argument("--show-camera", action="store_true", help="show the camera preview window")
    p.add_argument("--music-dir", metavar="DIR", help="directory of audio files to control")
    p.add_argument("--test-mode", action="store_true", help="detect and report gestures without sending commands")
    p.add_argument("--headless", action="store_true", help="no monitor window, print commands only")

    g = p.add_argument_group("gesture tuning")
    g.add_argument("--neutral-zone", type=float, default=NEUTRAL_ZONE_DEG, metavar="DEG")
    g.add_argument("--tilt-threshold", type=float, default=TILT_THRESHOLD_DEG, metavar="DEG")
    g.add_argument("--tilt-min-ms", type=int, default=TILT_MIN_DURATION_MS)
    g.add_argument("--window-ms", type=int, default=DOUBLE_TILT_WINDOW_MS)
    g.add_argument("--neutral-return-ms", type=int, default=NEUTRAL_RETURN_MS)
    g.add_argument("--cooldown-ms", type=int, default=GLOBAL_COOLDOWN_MS)

    args = p.parse_args(argv)
    if args.source == "replay" and not args.replay:
        p.error("--source replay needs --replay FILE")
    return args


def build_config(args) -> GestureConfig:
    return GestureConfig(
        neutral_zone_deg=args.neutral_zone,
        tilt_threshold_deg=args.tilt_threshold,
        tilt_min_duration_ms=args.tilt_min_ms,
        double_tilt_window_ms=args.window_ms,
        neutral_return_ms=args.neutral_return_ms,
        global_cooldown_ms=args.cooldown_ms,
    )


def build_source(args):
    if args.source == "replay":
        from gesture.replay import ReplayRollSource
        return ReplayRollSource.from_csv(args.replay, realtime=args.realtime)

    from gesture.camera import CameraRollSource
    return CameraRollSource(show_camera=args.show_camera).open()


def run_headless(worker: TiltWorker, player=None):
    if player is not None:
        player.play()
    worker.start()
    print("[Main] TiltWorker started:", worker.is_alive())
    try:
        while worker.is_alive():
            time.sleep(0.1)
    except KeyboardInterrupt:
        print("[Main] Interrupted.")
    finally:
        worker.stop()
        worker.join(timeout=1.0)
        if player is not None:
            player.stop()


def main(argv=None) -> int:
    args = parse_args(argv)

    try:
        config = build_config(args)
    except GestureConfigError as e:
        print("[Main] Invalid gesture configuration:", e)
        return 2

    try:
        player = PlaylistPlayer.from_directory(args.music_dir) if args.music_dir else None
    except OSError as e:
        print("[Main] Cannot read music directory:", e)
        return 1
    commander = MediaCommander(player)

    try:
        source = build_source(args)
    except (OSError, ValueError, RuntimeError) as e:
        print("[Main] Cannot open roll source:", e)
        return 1

    state = MonitorState()
    worker = TiltWorker(state, source, commander, config=config, test_mode=args.test_mode)

    if args.headless:
        run_headless(worker, player)
    else:
        from media.monitor import run_monitor
        run_monitor(worker, state, player)
    return 0


if __name__ == "__main__":
    sys.exit(main())
