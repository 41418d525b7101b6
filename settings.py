# settings.py

# Window / display
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
FPS = 60
TITLE = "Tides"

# Colors
COLOR_BG = (0, 0, 0)
COLOR_PLAYER = (230, 120, 60)

# World
TILE_SIZE = 64
MAP_WIDTH = 50
MAP_HEIGHT = 50

# Island generation (radii in tiles from the map centre)
GRASS_RADIUS = 10
SAND_RADIUS = 15
SHALLOW_RADIUS = 22
TREE_CHANCE = 0.20

# Time
MS_PER_GAME_MINUTE = 1000  # 1 real second = 1 game minute
MINUTES_PER_DAY = 24 * 60
NOON_MINUTES = 12 * 60
START_TIME_OF_DAY = 8 * 60
REST_TIME_MULTIPLIER = 20
WORLD_EVENT_INTERVAL_MINUTES = 20
MAX_DARKNESS = 0.8

# Tide bands: [low, high) -> item kind. Gaps mean "nothing washes up".
TIDE_BANDS = (
    (0.00, 0.15, "driftwood"),
    (0.15, 0.88, None),
    (0.88, 0.98, "metal"),
    (0.98, 1.00, "crate"),
)

# Regrowth
REGROWTH_MINUTES = 24 * 60

# Player stats
STAT_MAX = 100.0
PLAYER_BASE_SPEED = 0.0018  # tiles per millisecond
SHALLOW_WATER_SPEED_FACTOR = 0.5
EXHAUSTED_SPEED_FACTOR = 0.5
MOVE_ENERGY_COST = 0.1
HUNGER_DECAY_PER_EVENT = 1.0

REGEN_INTERVAL_MS = 100
REST_ENERGY_GAIN = 1.0
REST_HUNGER_DRAIN = 0.05
IDLE_ENERGY_GAIN = 0.05
IDLE_REGEN_MIN_HUNGER = 50.0

# Harvesting
CHOP_TOOL = "axe"
CHOP_ENERGY_COST = 10.0
CHOP_WOOD_YIELD = 3
CHOP_COCONUT_YIELD = 1
PICKUP_ENERGY_COST = 5.0

# Persistence
AUTOSAVE_INTERVAL_MS = 5000
HOTBAR_SIZE = 9
