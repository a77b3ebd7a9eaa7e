# chunkworld/color_maps.py

"""
================================================================================
SHARED COLOR UTILITIES
================================================================================
This module converts between the colour strings stored on chunks ('#rrggbb'
or 'hsl(h, s%, l%)') and RGB tuples, and maps classified chunks onto the
biome overview palette used by minimaps and the overview baker.

It uses pygame only for its Color type, so it works without a display and
can be shared by the runtime and offline scripts alike.
================================================================================
"""
import os
import re
from typing import Tuple

import numpy as np

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")
import pygame

from . import biomes
from .biomes import BiomeType

RGB = Tuple[int, int, int]

# A float as repr() writes it, exponent included.
_NUMBER = r"-?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?"
_HSL_PATTERN = re.compile(
    rf"^hsl\(\s*({_NUMBER})\s*,\s*({_NUMBER})%\s*,\s*({_NUMBER})%\s*\)$"
)

# --- Biome ID Constants (Rule 1) ---
# An integer id for each biome, in classification order.
BIOME_IDS = {biome: index for index, biome in enumerate(biomes.BIOME_ORDER)}

# Overview colours are brighter than the ground colours so small maps stay legible.
COLOR_MAP_BIOME_OVERVIEW = {
    BiomeType.SNOW: "#e0fbfc",
    BiomeType.MAGICAL: "#560bad",
    BiomeType.FOREST: "#2d6a4f",
    BiomeType.PLAINS: "#95d5b2",
    BiomeType.SWAMP: "#606c38",
    BiomeType.BEACH: "#f4a261",
    BiomeType.DESERT: "#e9c46a",
    BiomeType.VOLCANIC: "#6a040f",
}


# --- String <-> RGB ---
def parse_color(color: str) -> RGB:
    """
    Parses a '#rrggbb' / named colour or an 'hsl(h, s%, l%)' string.
    Raises ValueError for anything else.
    """
    text = color.strip()
    match = _HSL_PATTERN.match(text)
    if match:
        hue, saturation, lightness = (float(group) for group in match.groups())
        parsed = pygame.Color(0, 0, 0)
        parsed.hsla = (
            hue % 360.0,
            min(100.0, max(0.0, saturation)),
            min(100.0, max(0.0, lightness)),
            100.0,
        )
        return (parsed.r, parsed.g, parsed.b)

    try:
        parsed = pygame.Color(text)
    except ValueError as e:
        raise ValueError(f"Unrecognised colour string: {color!r}") from e
    return (parsed.r, parsed.g, parsed.b)


def to_hex(rgb) -> str:
    r, g, b = (int(np.clip(c, 0, 255)) for c in rgb)
    return f"#{r:02x}{g:02x}{b:02x}"


def lerp_color(color1, color2, t: float) -> RGB:
    """Linearly interpolates between two RGB colours, rounding to integers."""
    t = float(np.clip(t, 0.0, 1.0))
    c1 = np.array(color1, dtype=float)
    c2 = np.array(color2, dtype=float)
    interpolated_color = c1 * (1 - t) + c2 * t
    return tuple(int(c) for c in np.rint(interpolated_color))


def scale_brightness(color, factor: float) -> RGB:
    """Multiplies each channel by factor, clamped to [0, 255]."""
    scaled = np.clip(np.rint(np.array(color, dtype=float) * factor), 0, 255)
    return tuple(int(c) for c in scaled)


# --- Biome Overview Arrays ---
def create_biome_color_lut() -> np.ndarray:
    """Creates a LUT where the index is the biome id and the value is the RGB colour."""
    return np.array(
        [parse_color(COLOR_MAP_BIOME_OVERVIEW[biome]) for biome in biomes.BIOME_ORDER],
        dtype=np.uint8,
    )


def calculate_biome_id_map(noise_values: np.ndarray, table=biomes.BIOME_TABLE) -> np.ndarray:
    """
    Vectorised classification of a terrain noise field into biome ids.
    np.select takes the first true condition, matching classify_noise.
    """
    conditions = [noise_values >= entry.threshold for entry in table[:-1]]
    choices = [BIOME_IDS[entry.biome] for entry in table[:-1]]
    return np.select(conditions, choices, default=BIOME_IDS[table[-1].biome]).astype(np.uint8)


def get_biome_color_array(biome_id_map: np.ndarray, biome_lut: np.ndarray) -> np.ndarray:
    """Converts a biome id map (rows = cz) into an RGB image array."""
    return biome_lut[biome_id_map]
