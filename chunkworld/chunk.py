# chunkworld/chunk.py

"""
================================================================================
CHUNK RECORDS
================================================================================
Value types shared by the generator, the cache and the runtime.

- ChunkCoordinate: a structural (cx, cz) key on the infinite chunk grid.
- ChunkData: the generator's sole output unit. It is frozen and holds its
  objects in a tuple, so a stored chunk can never be rewritten in place.
================================================================================
"""
import math
from dataclasses import dataclass
from typing import NamedTuple, Tuple

from . import config as DEFAULTS
from .biomes import BiomeType
from .objects import ObjectType, WorldObject


class ChunkCoordinate(NamedTuple):
    cx: int
    cz: int

    @classmethod
    def from_world(cls, world_x: float, world_z: float, chunk_size: float = DEFAULTS.CHUNK_SIZE) -> "ChunkCoordinate":
        """The chunk index containing a world-space position."""
        return cls(math.floor(world_x / chunk_size), math.floor(world_z / chunk_size))

    def origin(self, chunk_size: float = DEFAULTS.CHUNK_SIZE) -> Tuple[float, float]:
        """World-space centre of the chunk's footprint."""
        return (self.cx * chunk_size, self.cz * chunk_size)

    def neighbourhood(self, radius: int):
        """All coordinates within a square radius, row-major (cz outer)."""
        return [
            ChunkCoordinate(self.cx + dx, self.cz + dz)
            for dz in range(-radius, radius + 1)
            for dx in range(-radius, radius + 1)
        ]


@dataclass(frozen=True)
class ChunkData:
    id: str
    x: int
    z: int
    biome: BiomeType
    ground_color: str
    has_water: bool
    objects: Tuple[WorldObject, ...]

    @property
    def coordinate(self) -> ChunkCoordinate:
        return ChunkCoordinate(self.x, self.z)

    def objects_of_type(self, object_type: ObjectType) -> Tuple[WorldObject, ...]:
        return tuple(obj for obj in self.objects if obj.type is object_type)
