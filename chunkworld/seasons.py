# chunkworld/seasons.py

"""
================================================================================
SEASONAL & WEATHER COLOUR MODULATION
================================================================================
Presentation-time colour transforms for generated chunks.

Data Contract:
---------------
- Inputs:
    - A stored base colour string, its ColorCategory, the chunk's biome, the
      current Season and Weather.
- Outputs:
    - A new '#rrggbb' display colour. ChunkPalette bundles the display colours
      of a whole chunk.
- Side Effects: None. Stored ChunkData is never touched; the same inputs
  always yield the same colour.
- Order: the season tint is applied first, then the weather effect.
================================================================================
"""
from enum import Enum
from typing import NamedTuple, Tuple

from . import config as DEFAULTS
from . import color_maps
from .biomes import BiomeType
from .chunk import ChunkData
from .objects import ColorCategory


class Season(Enum):
    SPRING = "spring"
    SUMMER = "summer"
    AUTUMN = "autumn"
    WINTER = "winter"


class Weather(Enum):
    CLEAR = "clear"
    RAIN = "rain"
    SNOW = "snow"
    FOG = "fog"


class ChunkPalette(NamedTuple):
    """Display colours for one chunk, objects in the chunk's order."""
    ground_color: str
    object_colors: Tuple[str, ...]


def _season_strength(season: Season, category: ColorCategory, biome: BiomeType) -> float:
    if category is ColorCategory.FIXED:
        return 0.0
    if biome.value in DEFAULTS.SEASON_IMMUNE_BIOMES:
        return 0.0
    if (season is Season.WINTER and category is ColorCategory.GROUND
            and biome.value in DEFAULTS.SNOWLESS_GROUND_BIOMES):
        return 0.0
    return DEFAULTS.SEASON_TINT_STRENGTH[season.value][category.value]


def _season_target(season: Season, category: ColorCategory):
    if season is Season.AUTUMN and category is ColorCategory.GROUND:
        return DEFAULTS.AUTUMN_GROUND_COLOR
    return DEFAULTS.SEASON_TINT_COLORS[season.value]


def apply_season(rgb, category: ColorCategory, season: Season, biome: BiomeType):
    strength = _season_strength(season, category, biome)
    if strength <= 0.0:
        return tuple(rgb)
    return color_maps.lerp_color(rgb, _season_target(season, category), strength)


def apply_weather(rgb, category: ColorCategory, weather: Weather, biome: BiomeType):
    if weather is Weather.RAIN:
        return color_maps.scale_brightness(rgb, DEFAULTS.RAIN_BRIGHTNESS)
    if weather is Weather.FOG:
        return color_maps.lerp_color(rgb, DEFAULTS.FOG_COLOR, DEFAULTS.FOG_STRENGTH)
    if (weather is Weather.SNOW and category is ColorCategory.GROUND
            and biome.value not in DEFAULTS.SNOWLESS_GROUND_BIOMES):
        return color_maps.lerp_color(rgb, DEFAULTS.SNOWFALL_COLOR, DEFAULTS.SNOWFALL_GROUND_STRENGTH)
    return tuple(rgb)


def display_color(base_color: str, category: ColorCategory, season: Season, biome: BiomeType,
                  weather: Weather = Weather.CLEAR) -> str:
    """
    Derives the colour to draw for a stored base colour.

    Foliage under Winter renders near-white and Autumn shifts it toward
    orange-red. Fixed objects (rocks, crystals, water, ...) only react to
    weather.
    """
    rgb = color_maps.parse_color(base_color)
    rgb = apply_season(rgb, category, season, biome)
    rgb = apply_weather(rgb, category, weather, biome)
    return color_maps.to_hex(rgb)


def chunk_palette(chunk: ChunkData, season: Season, weather: Weather = Weather.CLEAR) -> ChunkPalette:
    """Display colours for a chunk's ground and every object, in order."""
    ground = display_color(chunk.ground_color, ColorCategory.GROUND, season, chunk.biome, weather)
    objects = tuple(
        display_color(obj.color, obj.color_category, season, chunk.biome, weather)
        for obj in chunk.objects
    )
    return ChunkPalette(ground, objects)
