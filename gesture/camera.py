# gesture/camera.py
from typing import Iterator, Optional, Tuple

import cv2
import mediapipe as mp

from config import CAM_INDEX_CANDIDATES, CAM_W, CAM_H, MIRROR, SHOW_CAMERA
from gesture.utils import lm_xy, landmark_roll_deg, now_ms

# Camera backends: tried in order
CAP_BACKENDS = [
    ("DSHOW", cv2.CAP_DSHOW),
    ("MSMF", cv2.CAP_MSMF),
    ("DEFAULT", None),
]

PREVIEW_WINDOW = "Camera (press Q to close this window)"


def try_open_camera() -> Tuple[Optional[cv2.VideoCapture], str]:
    """
    Try each index with each backend; return the capture and a description.
    """
    for idx in CAM_INDEX_CANDIDATES:
        for name, backend in CAP_BACKENDS:
            if backend is None:
                cap = cv2.VideoCapture(idx)
            else:
                cap = cv2.VideoCapture(idx, backend)

            if cap is not None and cap.isOpened():
                cap.set(cv2.CAP_PROP_FRAME_WIDTH, CAM_W)
                cap.set(cv2.CAP_PROP_FRAME_HEIGHT, CAM_H)
                return cap, f"CAM idx={idx}, backend={name}"

            if cap is not None:
                cap.release()

    return None, "CAMERA_OPEN_FAILED"


class CameraRollSource:
    """
    Roll angle of the tracked hand (wrist -> middle finger MCP) per camera frame.
    Yields (t_ms, roll_deg); roll_deg is None when no hand is seen.
    """

    def __init__(self, show_camera: bool = SHOW_CAMERA):
        self.show_camera = show_camera
        self.info = ""
        self._cap = None
        self._hands = None

    def open(self):
        self._cap, self.info = try_open_camera()
        if self._cap is None:
            raise RuntimeError("CAMERA_OPEN_FAILED. Close apps using the camera or try another index.")
        self._hands = mp.solutions.hands.Hands(
            static_image_mode=False,
            max_num_hands=1,
            model_complexity=1,
            min_detection_confidence=0.5,
            min_tracking_confidence=0.5,
        )
        return self

    def close(self):
        if self._hands is not None:
            self._hands.close()
            self._hands = None
        if self._cap is not None:
            self._cap.release()
            self._cap = None
        if self.show_camera:
            cv2.destroyAllWindows()

    def __enter__(self):
        return self.open()

    def __exit__(self, *exc):
        self.close()

    def __iter__(self) -> Iterator[Tuple[int, Optional[float]]]:
        if self._cap is None:
            self.open()
        lm = mp.solutions.hands.HandLandmark
        while self._cap is not None:
            ok, frame = self._cap.read()
            if not ok:
                yield now_ms(), None
                continue

            if MIRROR:
                frame = cv2.flip(frame, 1)

            h, w = frame.shape[:2]
            result = self._hands.process(cv2.cvtColor(frame, cv2.COLOR_BGR2RGB))
            t = now_ms()

            roll = None
            if result.multi_hand_landmarks:
                hand = result.multi_hand_landmarks[0].landmark
                roll = landmark_roll_deg(
                    lm_xy(hand[lm.WRIST], w, h),
                    lm_xy(hand[lm.MIDDLE_FINGER_MCP], w, h),
                )

            if self.show_camera:
                self._preview(frame, result, roll)

            yield t, roll

    def _preview(self, frame, result, roll):
        if result.multi_hand_landmarks:
            mp.solutions.drawing_utils.draw_landmarks(
                frame, result.multi_hand_landmarks[0], mp.solutions.hands.HAND_CONNECTIONS)
        text = "NO_HAND" if roll is None else f"roll={roll:+.1f}"
        cv2.putText(frame, self.info, (10, 24), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (0, 255, 0), 2)
        cv2.putText(frame, text, (10, 52), cv2.FONT_HERSHEY_SIMPLEX, 0.9, (0, 255, 0), 2)
        cv2.imshow(PREVIEW_WINDOW, frame)
        k = cv2.waitKey(1) & 0xFF
        if k in (ord('q'), ord('Q')):
            cv2.destroyWindow(PREVIEW_WINDOW)
            self.show_camera = False
