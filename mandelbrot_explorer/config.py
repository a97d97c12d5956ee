import sys

# --- CONFIGURATION ---
WIDTH, HEIGHT = 1280, 720
TARGET_FPS = 60
N_WORKERS = 4

# --- CAMERA ---
# SPEED scales both panning (world units per second at zoom 1) and the
# exponential zoom rate.
SPEED = 0.2
BASE_DEPTH = 40
# Zoom steps needed to add one iteration to the depth budget.
THRESHOLD = 2
MIN_ZOOM = 1e-3

# --- KERNEL ---
ESCAPE_RADIUS_SQ = 4.0

# --- PRESENTATION ---
HUD_FONT_SIZE = 28
HUD_POSITION = (10, 10)
BLOCK_OUTLINE_MIN = 4

VERBOSE = False


def log(message, *args, **kwargs):
    if VERBOSE:
        print(message, *args, **kwargs)


def warn(message):
    print(message, file=sys.stderr)
