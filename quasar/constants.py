"""Sketch-wide constants for Going to Quasar."""

# --- Display ---
SCREEN_WIDTH = 1280
SCREEN_HEIGHT = 720
FPS = 60
TITLE = "Going to Quasar"

# --- Colors (RGB) ---
BLACK = (0, 0, 0)

# --- Scene generation ---
NUM_ARCS = 2000
NUM_STARS = 1000
MIN_CIRCLES = 70
MAX_CIRCLES = 120  # Exclusive
MIN_PLANETS = 2
MAX_PLANETS = 7  # Exclusive
SCENE_RADIUS_FACTOR = 0.45  # Of the shorter canvas side

# --- Arcs ---
SLIVER_CHANCE = 0.2
MAX_ARC_SPEED = 0.3
ARC_SPEED_SCALE = 0.02
ARC_ALPHA = 0.5

# --- Planets ---
PLANET_STEP = 2.0  # Shading ring spacing in pixels
PLANET_HUE_SPREAD = 0.15
PLANET_DISTANCE_FADE = 0.4  # Shading lost at the scene rim

# --- Stars ---
STAR_HUE_SPREAD = 0.2
STAR_MAX_SATURATION = 0.7
STAR_BRIGHTNESS = 0.7
STAR_PHASE_RANGE = 1e7

# --- Background rings ---
RING_PROGRESS_SCALE = 0.9

# --- Interaction ---
ZOOM_SCALE = 3.0
ZOOM_BUTTONS = (1, 2)  # Left and middle; right regenerates
