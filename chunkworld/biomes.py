# chunkworld/biomes.py

"""
================================================================================
BIOME CLASSIFICATION
================================================================================
This module buckets the terrain noise field into one of eight biomes.

Data Contract:
---------------
- Inputs:
    - A terrain noise value, or integer chunk coordinates plus the noise
      coefficients used to compute it.
    - An ordered biome table (highest threshold first).
- Outputs:
    - A BiomeEntry: biome type, base ground colour and water flag.
- Side Effects: None.
- Invariants:
    - The table is checked top-down and the first match wins. Each bucket
      is half-open on its low end (value >= threshold), so a value exactly
      on a boundary lands in the higher bucket.
    - The final entry is a catch-all, so every finite value is classified.
================================================================================
"""
import math
from enum import Enum
from typing import NamedTuple, Sequence

from . import config as DEFAULTS
from . import noise


class BiomeType(Enum):
    FOREST = "forest"
    DESERT = "desert"
    SNOW = "snow"
    VOLCANIC = "volcanic"
    MAGICAL = "magical"
    PLAINS = "plains"
    SWAMP = "swamp"
    BEACH = "beach"


class BiomeEntry(NamedTuple):
    """One row of the classification table."""
    threshold: float
    biome: BiomeType
    ground_color: str
    has_water: bool


# Classification order, highest noise first. Volcanic is the catch-all.
BIOME_ORDER = (
    BiomeType.SNOW,
    BiomeType.MAGICAL,
    BiomeType.FOREST,
    BiomeType.PLAINS,
    BiomeType.SWAMP,
    BiomeType.BEACH,
    BiomeType.DESERT,
    BiomeType.VOLCANIC,
)


def build_biome_table(thresholds: dict = None, ground_colors: dict = None, water_biomes: Sequence[str] = None) -> tuple:
    """
    Builds the ordered classification table from (optionally overridden)
    threshold and colour dictionaries keyed by biome name.
    """
    thresholds = thresholds if thresholds is not None else DEFAULTS.BIOME_THRESHOLDS
    ground_colors = ground_colors if ground_colors is not None else DEFAULTS.BIOME_GROUND_COLORS
    water_biomes = water_biomes if water_biomes is not None else DEFAULTS.WATER_BIOMES

    table = []
    previous = math.inf
    for biome in BIOME_ORDER[:-1]:
        threshold = float(thresholds[biome.value])
        if threshold > previous:
            raise ValueError(
                f"Biome threshold for '{biome.value}' ({threshold}) is above the "
                f"threshold of the biome checked before it ({previous})."
            )
        previous = threshold
        table.append(BiomeEntry(threshold, biome, ground_colors[biome.value], biome.value in water_biomes))

    catch_all = BIOME_ORDER[-1]
    table.append(BiomeEntry(-math.inf, catch_all, ground_colors[catch_all.value], catch_all.value in water_biomes))
    return tuple(table)


BIOME_TABLE = build_biome_table()


def classify_noise(value: float, table: Sequence[BiomeEntry] = BIOME_TABLE) -> BiomeEntry:
    """Returns the first table entry whose lower bound the value reaches."""
    for entry in table:
        if value >= entry.threshold:
            return entry
    # Only reachable for NaN or a table without a catch-all.
    return table[-1]


def chunk_noise(cx: int, cz: int, settings: dict = None) -> float:
    """Evaluates the terrain noise field for one chunk."""
    settings = settings or {}
    return float(noise.terrain_noise(
        float(cx), float(cz),
        settings.get('terrain_noise_primary_frequency', DEFAULTS.TERRAIN_NOISE_PRIMARY_FREQUENCY),
        settings.get('terrain_noise_secondary_weight', DEFAULTS.TERRAIN_NOISE_SECONDARY_WEIGHT),
        settings.get('terrain_noise_diagonal_frequency', DEFAULTS.TERRAIN_NOISE_DIAGONAL_FREQUENCY),
        settings.get('terrain_noise_diagonal_weight', DEFAULTS.TERRAIN_NOISE_DIAGONAL_WEIGHT),
    ))


def classify_chunk(cx: int, cz: int, settings: dict = None, table: Sequence[BiomeEntry] = BIOME_TABLE) -> BiomeEntry:
    """Classifies a chunk purely from its coordinates."""
    return classify_noise(chunk_noise(cx, cz, settings), table)


def is_water_biome(biome: BiomeType, table: Sequence[BiomeEntry] = BIOME_TABLE) -> bool:
    for entry in table:
        if entry.biome is biome:
            return entry.has_water
    return False
