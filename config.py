# config.py

# Camera: these indices are tried in order
CAM_INDEX_CANDIDATES = [0, 1, 2]

CAM_W, CAM_H = 640, 360
MIRROR = True

SHOW_CAMERA = False  # True: show the camera preview (Q closes the preview, tracking keeps running)

# Tilt classification (degrees). TILT_THRESHOLD_DEG must stay above NEUTRAL_ZONE_DEG
NEUTRAL_ZONE_DEG = 20.0
TILT_THRESHOLD_DEG = 35.0

# Double-tilt timing (ms)
TILT_MIN_DURATION_MS = 100
DOUBLE_TILT_WINDOW_MS = 2000
NEUTRAL_RETURN_MS = 150
GLOBAL_COOLDOWN_MS = 300

# Roll smoothing: smoothed = ALPHA * smoothed + (1 - ALPHA) * raw
ROLL_ALPHA = 0.6

# Monitor window
WIN_W, WIN_H = 560, 300
FPS = 30

AUDIO_EXTENSIONS = (".mp3", ".ogg", ".wav", ".flac")
