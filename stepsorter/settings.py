import json
import logging
import os

logger = logging.getLogger(__name__)

# ============================================================
# ===================== USER SETTINGS ========================
# ============================================================

WINDOW_WIDTH  = 1280
WINDOW_HEIGHT = 720
PANEL_HEIGHT  = 72
BOTTOM_PAD    = 16
BAR_SPACING   = 1
FPS           = 60

SIZE_CHOICES  = (25, 50, 75, 100, 150, 200)
DEFAULT_SIZE  = 100

SPEED_MIN     = 1
SPEED_MAX     = 10
DEFAULT_SPEED = 5

# Steps applied per pulse = round(SPEED_BASE ** ((speed - 1) / SPEED_SCALE)).
# Level 1 applies one Step, level 10 about twenty-two.
SPEED_BASE    = 2.8
SPEED_SCALE   = 3.0

# One pulse per frame at the default frame rate. tick(dt) never runs more
# than MAX_PULSES_PER_TICK pulses, however long the frame took.
TICK_INTERVAL       = 1.0 / 60
MAX_PULSES_PER_TICK = 4

ALGORITHMS = [
    ("Bubble Sort",    "bubble"),
    ("Selection Sort", "selection"),
    ("Insertion Sort", "insertion"),
    ("Merge Sort",     "merge"),
    ("Quick Sort",     "quick"),
    ("Heap Sort",      "heap"),
]
DEFAULT_ALGORITHM = "bubble"

COMPLEXITY = {
    "bubble":    "O(n²)",
    "selection": "O(n²)",
    "insertion": "O(n²)",
    "merge":     "O(n log n)",
    "quick":     "O(n log n)",
    "heap":      "O(n log n)",
}

# JSON file next to the launcher for overriding the defaults above
_SCRIPT_DIR   = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
SETTINGS_JSON = os.path.join(_SCRIPT_DIR, "stepsorter_settings.json")

# ============================================================
# ========================= PALETTE ==========================
# ============================================================

BACKGROUND_COLOR = (10,  12,  20)
PANEL_COLOR      = (18,  20,  34)
PANEL_LINE_COLOR = (40,  44,  70)
TEXT_COLOR       = (220, 224, 240)
SUBTEXT_COLOR    = (120, 128, 160)

# indexed by Mark: idle, comparing, mutating, settled
MARK_COLORS = (
    (70,  130, 210),
    (255, 210,  60),
    (255,  90,  90),
    (80,  230, 130),
)

# ============================================================
# ===================== SETTINGS JSON ========================
# ============================================================

def algorithm_keys() -> list:
    return [key for _, key in ALGORITHMS]


def algorithm_name(key):
    for name, k in ALGORITHMS:
        if k == key:
            return name
    return key


def clamp_speed(level):
    return max(SPEED_MIN, min(SPEED_MAX, int(level)))


def default_settings() -> dict:
    return dict(
        algorithm=DEFAULT_ALGORITHM,
        element_count=DEFAULT_SIZE,
        speed_level=DEFAULT_SPEED,
        seed=None,
        fps=FPS,
    )


def load_settings(path=SETTINGS_JSON) -> dict:
    """
    Read overrides from a JSON object on disk and merge them over the defaults.

    Missing files are silently ignored. Unreadable files, unknown algorithms
    and values of the wrong type are logged and fall back to the default.
    Speed levels are clamped into range, element counts must be positive.
    """
    cfg = default_settings()
    if not path or not os.path.exists(path):
        return cfg
    try:
        with open(path) as f:
            raw = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not read settings from %s: %s", path, e)
        return cfg
    if not isinstance(raw, dict):
        logger.warning("Settings file %s must hold a JSON object", path)
        return cfg

    algo = raw.get("algorithm")
    if algo is not None:
        if algo in algorithm_keys(): cfg["algorithm"] = algo
        else: logger.warning("Unknown algorithm %r in %s", algo, path)

    count = raw.get("element_count")
    if count is not None:
        if isinstance(count, int) and count > 0: cfg["element_count"] = count
        else: logger.warning("Ignoring element_count %r: must be a positive integer", count)

    speed = raw.get("speed_level")
    if speed is not None:
        if isinstance(speed, int): cfg["speed_level"] = clamp_speed(speed)
        else: logger.warning("Ignoring speed_level %r: must be an integer", speed)

    seed = raw.get("seed")
    if seed is not None:
        if isinstance(seed, int) and seed >= 0: cfg["seed"] = seed
        else: logger.warning("Ignoring seed %r: must be a non-negative integer", seed)

    fps = raw.get("fps")
    if fps is not None:
        if isinstance(fps, int) and fps > 0: cfg["fps"] = fps
        else: logger.warning("Ignoring fps %r: must be a positive integer", fps)

    return cfg
