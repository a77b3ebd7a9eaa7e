# chunkworld/objects.py

"""
================================================================================
WORLD OBJECTS & PER-BIOME POPULATION RULES
================================================================================
This module defines the WorldObject record and the data tables that decide
which object a single random draw produces in each biome.

Data Contract:
---------------
- Each biome owns an ordered tuple of ObjectRule entries. A rule matches when
  the selection draw (r3) is strictly greater than its threshold; the first
  match wins. The last rule of every table is a catch-all (-inf).
- A rule's `shape` callable maps the three draws (r1, r2, r3) to the
  object's height, scale and colour. It must be a pure function.
- Side Effects: None.
================================================================================
"""
import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, NamedTuple, Sequence, Tuple

from .biomes import BiomeType

Scale = Tuple[float, float, float]


class ObjectType(Enum):
    TREE = "tree"
    PALM = "palm"
    ROCK = "rock"
    CACTUS = "cactus"
    GRASS = "grass"
    CLOUD = "cloud"
    CRYSTAL = "crystal"
    FLOWER = "flower"
    RUINS = "ruins"
    BUSH = "bush"
    MUSHROOM = "mushroom"
    REED = "reed"
    DEADBUSH = "deadbush"
    WATER = "water"


class ColorCategory(Enum):
    """How an object's colour reacts to seasons and weather."""
    GROUND = "ground"
    FOLIAGE = "foliage"
    FIXED = "fixed"


OBJECT_COLOR_CATEGORY = {
    ObjectType.TREE: ColorCategory.FOLIAGE,
    ObjectType.PALM: ColorCategory.FOLIAGE,
    ObjectType.BUSH: ColorCategory.FOLIAGE,
    ObjectType.GRASS: ColorCategory.FOLIAGE,
    ObjectType.FLOWER: ColorCategory.FOLIAGE,
    ObjectType.REED: ColorCategory.FOLIAGE,
    ObjectType.DEADBUSH: ColorCategory.FOLIAGE,
    ObjectType.ROCK: ColorCategory.FIXED,
    ObjectType.CACTUS: ColorCategory.FIXED,
    ObjectType.CRYSTAL: ColorCategory.FIXED,
    ObjectType.MUSHROOM: ColorCategory.FIXED,
    ObjectType.RUINS: ColorCategory.FIXED,
    ObjectType.WATER: ColorCategory.FIXED,
    ObjectType.CLOUD: ColorCategory.FIXED,
}


@dataclass(frozen=True)
class WorldObject:
    """A single placed item. Position is relative to the chunk centre."""
    type: ObjectType
    x: float
    y: float
    z: float
    scale: Scale
    color: str
    rotation: float

    @property
    def color_category(self) -> ColorCategory:
        return OBJECT_COLOR_CATEGORY[self.type]


class ObjectShape(NamedTuple):
    height: float
    scale: Scale
    color: str


class ObjectRule(NamedTuple):
    threshold: float
    object_type: ObjectType
    shape: Callable[[float, float, float], ObjectShape]


def hsl(hue: float, saturation: float, lightness: float) -> str:
    """
    Formats an HSL colour string. Saturation and lightness are percentages.
    Components keep their full float precision.
    """
    return f"hsl({float(hue)!r}, {float(saturation)!r}%, {float(lightness)!r}%)"


def select_rule(rules: Sequence[ObjectRule], draw: float) -> ObjectRule:
    """First rule whose threshold the draw strictly exceeds."""
    for rule in rules:
        if draw > rule.threshold:
            return rule
    return rules[-1]


# --- Shape Generators ---

def _column(width: float, height: float, color: str) -> ObjectShape:
    return ObjectShape(height, (width, height, width), color)


def _forest_tree(r1, r2, r3):
    return _column(0.8, 2 + r3 * 4, hsl(130, 40 + r1 * 20, 30 + r2 * 20))

def _forest_bush(r1, r2, r3):
    height = 0.6 + r2 * 0.6
    return ObjectShape(height, (0.8 + r1 * 0.6, height, 0.8 + r2 * 0.6), hsl(110, 35 + r1 * 20, 25 + r2 * 15))

def _forest_grass(r1, r2, r3):
    return _column(0.1, 0.2 + r1 * 0.5, hsl(100, 60 + r1 * 20, 40 + r2 * 10))

def _desert_cactus(r1, r2, r3):
    return _column(0.4, 1.5 + r3 * 2, "#556b2f")

def _desert_deadbush(r1, r2, r3):
    height = 0.4 + r1 * 0.4
    return ObjectShape(height, (0.6 + r2 * 0.4, height, 0.6 + r1 * 0.4), hsl(30, 30 + r1 * 20, 30 + r2 * 15))

def _desert_rock(r1, r2, r3):
    height = 0.3 + r1 * 0.5
    return ObjectShape(height, (0.5 + r2, height, 0.5 + r1), "#8d99ae")

def _magical_crystal(r1, r2, r3):
    return _column(0.3, 2 + r1 * 4, hsl(250 + r1 * 60, 80, 70))

def _magical_mushroom(r1, r2, r3):
    return _column(0.5 + r1 * 0.5, 0.6 + r2 * 1.2, hsl(280 + r2 * 40, 70, 60))

def _magical_flower(r1, r2, r3):
    return ObjectShape(0.5, (0.2, 0.2, 0.2), hsl(300 + r1 * 60, 100, 60))

def _snow_tree(r1, r2, r3):
    return _column(1.0, 3 + r3 * 3, "#caf0f8")

def _snow_rock(r1, r2, r3):
    height = 0.4 + r1 * 1.0
    return ObjectShape(height, (0.8 + r2, height, 0.8 + r1), "#adb5bd")

def _plains_tree(r1, r2, r3):
    return _column(1.0, 2.5 + r3 * 3, hsl(120, 45 + r1 * 20, 32 + r2 * 15))

def _plains_flower(r1, r2, r3):
    return ObjectShape(0.3, (0.2, 0.2, 0.2), hsl(r1 * 60, 90, 65))

def _plains_grass(r1, r2, r3):
    return _column(0.1, 0.3 + r1 * 0.4, hsl(90, 55 + r1 * 20, 45 + r2 * 10))

def _swamp_tree(r1, r2, r3):
    return _column(0.9, 2 + r3 * 2, hsl(90, 25 + r1 * 15, 20 + r2 * 10))

def _swamp_reed(r1, r2, r3):
    return _column(0.08, 0.8 + r1 * 1.2, hsl(75, 40 + r1 * 20, 35 + r2 * 10))

def _swamp_mushroom(r1, r2, r3):
    return _column(0.3, 0.3 + r2 * 0.4, "#b08968")

def _swamp_grass(r1, r2, r3):
    return _column(0.1, 0.2 + r1 * 0.4, hsl(85, 40 + r1 * 20, 30 + r2 * 10))

def _beach_palm(r1, r2, r3):
    return _column(0.5, 3 + r3 * 3, hsl(110, 50 + r1 * 20, 35 + r2 * 15))

def _beach_rock(r1, r2, r3):
    height = 0.2 + r1 * 0.4
    return ObjectShape(height, (0.4 + r2 * 0.8, height, 0.4 + r1 * 0.8), "#d4a373")

def _beach_grass(r1, r2, r3):
    return _column(0.1, 0.3 + r1 * 0.3, hsl(70, 45 + r1 * 20, 50 + r2 * 10))

def _volcanic_deadbush(r1, r2, r3):
    return _column(0.6, 0.5 + r2 * 0.5, "#2b2d42")

def _volcanic_rock(r1, r2, r3):
    height = 0.5 + r1 * 2
    return ObjectShape(height, (1 + r2, height, 1 + r3), "#3e1f47")


CATCH_ALL = -math.inf

# Ordered (threshold, type, shape) rules per biome. Hand-tuned; keep as is.
OBJECT_RULES = {
    BiomeType.FOREST: (
        ObjectRule(0.6, ObjectType.TREE, _forest_tree),
        ObjectRule(0.3, ObjectType.BUSH, _forest_bush),
        ObjectRule(CATCH_ALL, ObjectType.GRASS, _forest_grass),
    ),
    BiomeType.DESERT: (
        ObjectRule(0.6, ObjectType.CACTUS, _desert_cactus),
        ObjectRule(0.4, ObjectType.DEADBUSH, _desert_deadbush),
        ObjectRule(CATCH_ALL, ObjectType.ROCK, _desert_rock),
    ),
    BiomeType.MAGICAL: (
        ObjectRule(0.8, ObjectType.CRYSTAL, _magical_crystal),
        ObjectRule(0.5, ObjectType.MUSHROOM, _magical_mushroom),
        ObjectRule(CATCH_ALL, ObjectType.FLOWER, _magical_flower),
    ),
    BiomeType.SNOW: (
        ObjectRule(0.3, ObjectType.TREE, _snow_tree),
        ObjectRule(CATCH_ALL, ObjectType.ROCK, _snow_rock),
    ),
    BiomeType.PLAINS: (
        ObjectRule(0.85, ObjectType.TREE, _plains_tree),
        ObjectRule(0.6, ObjectType.FLOWER, _plains_flower),
        ObjectRule(CATCH_ALL, ObjectType.GRASS, _plains_grass),
    ),
    BiomeType.SWAMP: (
        ObjectRule(0.7, ObjectType.TREE, _swamp_tree),
        ObjectRule(0.4, ObjectType.REED, _swamp_reed),
        ObjectRule(0.25, ObjectType.MUSHROOM, _swamp_mushroom),
        ObjectRule(CATCH_ALL, ObjectType.GRASS, _swamp_grass),
    ),
    BiomeType.BEACH: (
        ObjectRule(0.7, ObjectType.PALM, _beach_palm),
        ObjectRule(0.4, ObjectType.ROCK, _beach_rock),
        ObjectRule(CATCH_ALL, ObjectType.GRASS, _beach_grass),
    ),
    BiomeType.VOLCANIC: (
        ObjectRule(0.8, ObjectType.DEADBUSH, _volcanic_deadbush),
        ObjectRule(CATCH_ALL, ObjectType.ROCK, _volcanic_rock),
    ),
}

# Used for any biome missing from OBJECT_RULES.
DEFAULT_OBJECT_RULES = OBJECT_RULES[BiomeType.VOLCANIC]
