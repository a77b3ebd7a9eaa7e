# chunkworld/__init__.py

"""Deterministic, stateless chunk generation for an infinite biome world."""

from .biomes import BiomeType, classify_noise
from .chunk import ChunkCoordinate, ChunkData
from .config import CHUNK_SIZE
from .generator import ChunkGenerator, generate_chunk
from .noise import seeded_random
from .objects import ColorCategory, ObjectType, WorldObject
from .seasons import ChunkPalette, Season, Weather, chunk_palette, display_color

__version__ = "0.1.0"

__all__ = [
    "BiomeType",
    "CHUNK_SIZE",
    "ChunkCoordinate",
    "ChunkData",
    "ChunkGenerator",
    "ChunkPalette",
    "ColorCategory",
    "ObjectType",
    "Season",
    "Weather",
    "WorldObject",
    "chunk_palette",
    "classify_noise",
    "display_color",
    "generate_chunk",
    "seeded_random",
]
