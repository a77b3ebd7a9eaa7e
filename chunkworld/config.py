# chunkworld/config.py

"""
================================================================================
INTERNAL DEFAULT CONFIGURATION
================================================================================
This module contains the default, fallback internal constants for the chunk
generator and its runtime. These values are used if they are not explicitly
provided by the user's configuration.

DO NOT MODIFY THIS FILE FOR A SPECIFIC WORLD.
Instead, pass a configuration dictionary to the ChunkGenerator instance.
================================================================================
"""
import math

# --- Chunk Geometry ---
# Chunks are square and measured in world units. A chunk's origin is the
# CENTER of its footprint, so objects live in [-CHUNK_SIZE/2, +CHUNK_SIZE/2].
CHUNK_SIZE = 20

# --- Seed Derivation ---
# seed_base = cx * SEED_ROW_STRIDE + cz. The stride must exceed any |cz| the
# world will realistically reach for the mapping to stay collision-free.
SEED_ROW_STRIDE = 10000

# Named offsets added to seed_base for the "independent" draws of a chunk.
RUINS_SEED_OFFSET = 888
CLOUD_SEED_OFFSET = 99
CLOUD_X_SEED_OFFSET = 100
CLOUD_Y_SEED_OFFSET = 101
CLOUD_Z_SEED_OFFSET = 102

# The pseudo-random source is frac(sin(seed) * PRNG_SCALE).
PRNG_SCALE = 10000.0

# --- Terrain Noise Field ---
# noise = sin(cx * A) + cos(cz * A) * B + sin((cx + cz) * C) * D
# These are hand-tuned for visual variety. Preserve them bit-for-bit.
TERRAIN_NOISE_PRIMARY_FREQUENCY = 0.05
TERRAIN_NOISE_SECONDARY_WEIGHT = 0.8
TERRAIN_NOISE_DIAGONAL_FREQUENCY = 0.1
TERRAIN_NOISE_DIAGONAL_WEIGHT = 0.5

# --- Biome Thresholds ---
# Checked top-down; the first match wins. Buckets are half-open on the low end
# (noise >= threshold), so a value exactly on a boundary falls into the higher
# bucket. Volcanic is the catch-all and therefore has no entry here.
BIOME_THRESHOLDS = {
    "snow": 1.5,
    "magical": 1.0,
    "forest": 0.6,
    "plains": 0.2,
    "swamp": -0.2,
    "beach": -0.6,
    "desert": -1.3,
}

BIOME_GROUND_COLORS = {
    "snow": "#e0fbfc",      # light cyan
    "magical": "#240046",   # deep violet
    "forest": "#2d6a4f",    # dark green
    "plains": "#74c69d",    # light green
    "swamp": "#4a5d23",     # olive green
    "beach": "#f4a261",     # sandy orange
    "desert": "#e9c46a",    # tan
    "volcanic": "#370617",  # dark red
}

WATER_BIOMES = ("swamp", "beach")

# --- Object Population Density ---
# object_count = floor(prng(seed_base) * density) + minimum
BIOME_OBJECT_DENSITY = {
    "forest": 12,
    "magical": 10,
    "plains": 10,
    "snow": 8,
    "swamp": 8,
    "volcanic": 6,
    "desert": 4,
    "beach": 4,
}
MIN_OBJECTS_PER_CHUNK = 3

# --- Rare Global Features ---
RUINS_THRESHOLD = 0.95
CLOUD_THRESHOLD = 0.6

RUINS_BASE_HEIGHT = 4.0
RUINS_HEIGHT_JITTER = 4.0
RUINS_COLOR = "#5c5c5c"
RUINS_SNOW_COLOR = "#adb5bd"

CLOUD_BASE_ALTITUDE = 12.0
CLOUD_ALTITUDE_JITTER = 4.0
CLOUD_COLOR = "#ffffff"

# The water sheet sits just above the ground plane and spans the chunk.
WATER_LEVEL = 0.05
WATER_THICKNESS = 0.1
WATER_COLOR = "#4cc9f0"
SWAMP_WATER_COLOR = "#4f6d3a"

# --- Viewer Streaming ---
# The caller keeps a (2r+1) x (2r+1) neighbourhood of chunks around the viewer.
DEFAULT_VIEW_RADIUS = 2
# None means the cache grows for the whole session.
DEFAULT_MAX_CACHED_CHUNKS = None

# --- Calendar, Seasons & Weather ---
SEASON_ORDER = ("spring", "summer", "autumn", "winter")
DAYS_PER_SEASON = 12
# Real seconds per in-game day at time scale 1.0.
SECONDS_PER_DAY = 600.0
INITIAL_TIME_SCALE = 1.0
INITIAL_SEASON = "summer"

WEATHER_SEED_OFFSET = 4243
WEATHER_SEED_STRIDE = 7919

# Cumulative weather probabilities per season, checked in order. A day's draw
# below the first value is clear, below the second is rain and so on. The
# last value must be 1.0.
WEATHER_PROBABILITIES = {
    "spring": {"clear": 0.55, "rain": 0.85, "fog": 1.0},
    "summer": {"clear": 0.8, "rain": 0.95, "fog": 1.0},
    "autumn": {"clear": 0.45, "rain": 0.8, "fog": 1.0},
    "winter": {"clear": 0.4, "snow": 0.85, "fog": 1.0},
}

# Season tint targets (RGB) and blend strengths per colour category.
SEASON_TINT_COLORS = {
    "spring": (150, 230, 120),
    "summer": (0, 0, 0),
    "autumn": (214, 104, 41),
    "winter": (240, 248, 255),
}
AUTUMN_GROUND_COLOR = (150, 110, 60)
SEASON_TINT_STRENGTH = {
    "spring": {"foliage": 0.15, "ground": 0.0},
    "summer": {"foliage": 0.0, "ground": 0.0},
    "autumn": {"foliage": 0.55, "ground": 0.15},
    "winter": {"foliage": 0.85, "ground": 0.6},
}

# Biomes whose colours never change with the season.
SEASON_IMMUNE_BIOMES = ("magical", "volcanic")
# Biomes that never collect snow on the ground.
SNOWLESS_GROUND_BIOMES = ("desert", "beach")

RAIN_BRIGHTNESS = 0.8
SNOWFALL_GROUND_STRENGTH = 0.35
SNOWFALL_COLOR = (255, 255, 255)
FOG_STRENGTH = 0.3
FOG_COLOR = (200, 200, 210)

# --- Overview Baking ---
DEFAULT_OVERVIEW_PIXELS_PER_CHUNK = 4
DEFAULT_OVERVIEW_WIDTH_CHUNKS = 64
DEFAULT_OVERVIEW_HEIGHT_CHUNKS = 64

TWO_PI = 2.0 * math.pi
