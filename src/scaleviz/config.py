"""Global constants and default settings."""

WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
FPS = 60
WINDOW_TITLE = "Scale Visualizer"

# On-screen keyboard spans two octaves (C3..B4)
KEYBOARD_FIRST_OCTAVE = 3
KEYBOARD_OCTAVES = 2

# Live input timing (milliseconds)
CHORD_DEBOUNCE_MS = 100
PRACTICE_TIMEOUT_MS = 2000

# Audio
TONE_DURATION_S = 0.5
TONE_VELOCITY = 90
SCALE_STEP_S = 0.3  # gap between notes of melodic scale playback
SYNTH_GAIN = 0.8
