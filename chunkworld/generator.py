# chunkworld/generator.py

"""
================================================================================
CORE CHUNK GENERATOR
================================================================================
This module contains the ChunkGenerator class, responsible for turning integer
chunk coordinates into a fully populated, immutable ChunkData record.

Data Contract:
---------------
- Inputs (on initialization):
    - config (dict): A dictionary of generation parameters which can override
      the internal defaults. Expected keys include 'chunk_size',
      'biome_thresholds', 'biome_object_density', etc.
    - logger: A configured Python logging object for runtime messages.
- Inputs (per call):
    - cx, cz: any pair of integers, including zero and negative values.
- Outputs (from methods):
    - A ChunkData with biome, ground colour, water flag and ordered objects.
- Side Effects: Logs messages using the provided logger.
- Invariants: Given the same configuration, the output is a pure function of
  (cx, cz). Objects are always appended in the order water, ruins, main
  objects, cloud, so index-based render keys stay stable.
================================================================================
"""

import logging
import math
import numbers

from . import config as DEFAULTS
from . import biomes
from . import noise
from .biomes import BiomeEntry, BiomeType
from .chunk import ChunkData
from .objects import DEFAULT_OBJECT_RULES, OBJECT_RULES, ObjectType, WorldObject, select_rule


def _as_chunk_index(value, name: str) -> int:
    """Accepts Python and NumPy integers; rejects bools and floats."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"Chunk coordinate '{name}' must be an integer, got {type(value).__name__}: {value!r}")
    return int(value)


class ChunkGenerator:
    """
    Generates chunk records on demand. Holds configuration only; no call
    reads or writes any state, so one instance may be shared across threads.
    """
    def __init__(self, config: dict = None, logger: logging.Logger = None):
        """
        Initializes the chunk generator.

        Args:
            config (dict, optional): User-defined parameters to override defaults.
            logger (logging.Logger, optional): The logger instance for all output.
        """
        self.logger = logger or logging.getLogger(__name__)
        self.user_config = config or {}
        self.logger.info("ChunkGenerator initializing...")

        # --- Consolidate Configuration ---
        self.settings = {
            'chunk_size': self.user_config.get('chunk_size', DEFAULTS.CHUNK_SIZE),
            'seed_row_stride': self.user_config.get('seed_row_stride', DEFAULTS.SEED_ROW_STRIDE),
            'ruins_seed_offset': self.user_config.get('ruins_seed_offset', DEFAULTS.RUINS_SEED_OFFSET),
            'cloud_seed_offset': self.user_config.get('cloud_seed_offset', DEFAULTS.CLOUD_SEED_OFFSET),
            'cloud_x_seed_offset': self.user_config.get('cloud_x_seed_offset', DEFAULTS.CLOUD_X_SEED_OFFSET),
            'cloud_y_seed_offset': self.user_config.get('cloud_y_seed_offset', DEFAULTS.CLOUD_Y_SEED_OFFSET),
            'cloud_z_seed_offset': self.user_config.get('cloud_z_seed_offset', DEFAULTS.CLOUD_Z_SEED_OFFSET),

            'terrain_noise_primary_frequency': self.user_config.get('terrain_noise_primary_frequency', DEFAULTS.TERRAIN_NOISE_PRIMARY_FREQUENCY),
            'terrain_noise_secondary_weight': self.user_config.get('terrain_noise_secondary_weight', DEFAULTS.TERRAIN_NOISE_SECONDARY_WEIGHT),
            'terrain_noise_diagonal_frequency': self.user_config.get('terrain_noise_diagonal_frequency', DEFAULTS.TERRAIN_NOISE_DIAGONAL_FREQUENCY),
            'terrain_noise_diagonal_weight': self.user_config.get('terrain_noise_diagonal_weight', DEFAULTS.TERRAIN_NOISE_DIAGONAL_WEIGHT),

            'biome_thresholds': self.user_config.get('biome_thresholds', DEFAULTS.BIOME_THRESHOLDS),
            'biome_ground_colors': self.user_config.get('biome_ground_colors', DEFAULTS.BIOME_GROUND_COLORS),
            'water_biomes': self.user_config.get('water_biomes', DEFAULTS.WATER_BIOMES),
            'biome_object_density': self.user_config.get('biome_object_density', DEFAULTS.BIOME_OBJECT_DENSITY),
            'min_objects_per_chunk': self.user_config.get('min_objects_per_chunk', DEFAULTS.MIN_OBJECTS_PER_CHUNK),

            'ruins_threshold': self.user_config.get('ruins_threshold', DEFAULTS.RUINS_THRESHOLD),
            'cloud_threshold': self.user_config.get('cloud_threshold', DEFAULTS.CLOUD_THRESHOLD),
        }

        # --- Build the classification table once (Rule 11) ---
        self.biome_table = biomes.build_biome_table(
            self.settings['biome_thresholds'],
            self.settings['biome_ground_colors'],
            self.settings['water_biomes'],
        )
        self.chunk_size = self.settings['chunk_size']

        self.logger.info(f"ChunkGenerator initialized with chunk size: {self.chunk_size} world units")
        self.logger.debug(
            "Biome thresholds: " + ", ".join(
                f"{entry.biome.value}>={entry.threshold}" for entry in self.biome_table
            )
        )

    # --- Public API ---
    def generate_chunk(self, cx: int, cz: int) -> ChunkData:
        """
        Generates the chunk at integer coordinates (cx, cz).
        Never fails for integers whose seed base (cx * seed_row_stride + cz)
        fits in a float, i.e. |cx| up to about 1e304 with the default stride.
        Larger integers raise OverflowError when converted for the PRNG.
        """
        cx = _as_chunk_index(cx, 'cx')
        cz = _as_chunk_index(cz, 'cz')

        entry = self.classify(cx, cz)
        objects = self.populate(cx, cz, entry)

        chunk = ChunkData(
            id=f"{cx},{cz}",
            x=cx,
            z=cz,
            biome=entry.biome,
            ground_color=entry.ground_color,
            has_water=entry.has_water,
            objects=tuple(objects),
        )
        self.logger.debug(f"Generated chunk ({cx}, {cz}): {entry.biome.value} with {len(objects)} objects.")
        return chunk

    def classify(self, cx: int, cz: int) -> BiomeEntry:
        """Biome, ground colour and water flag for a chunk."""
        return biomes.classify_chunk(cx, cz, self.settings, self.biome_table)

    def seed_base(self, cx: int, cz: int) -> int:
        """Coordinate-to-seed hash. Collision-free while |cz| < the row stride."""
        return cx * self.settings['seed_row_stride'] + cz

    def populate(self, cx: int, cz: int, entry: BiomeEntry) -> list:
        """
        Builds the ordered object list for a classified chunk:
        water, ruins, main objects, cloud.
        """
        seed_base = self.seed_base(cx, cz)
        objects = []

        # 1. Water sheet for wet biomes.
        if entry.has_water:
            objects.append(self._water_object(entry.biome))

        # 2. Rare ruins at the chunk centre.
        ruins = self._ruins_object(seed_base, entry.biome)
        if ruins is not None:
            objects.append(ruins)

        # 3. The biome's main population.
        objects.extend(self._main_objects(seed_base, entry.biome))

        # 4. An independent cloud roll.
        cloud = self._cloud_object(seed_base)
        if cloud is not None:
            objects.append(cloud)

        return objects

    def object_count(self, seed_base: int, biome: BiomeType) -> int:
        """floor(prng(seed_base) * density) + minimum."""
        density = self.settings['biome_object_density'].get(biome.value, 0)
        return int(math.floor(self._draw(seed_base) * density)) + self.settings['min_objects_per_chunk']

    # --- Internal Helpers ---
    @staticmethod
    def _draw(seed: int) -> float:
        # float() keeps arbitrarily large seeds out of the compiled int64 path.
        return float(noise.seeded_random(float(seed)))

    def _water_object(self, biome: BiomeType) -> WorldObject:
        color = DEFAULTS.SWAMP_WATER_COLOR if biome is BiomeType.SWAMP else DEFAULTS.WATER_COLOR
        return WorldObject(
            type=ObjectType.WATER,
            x=0.0,
            y=DEFAULTS.WATER_LEVEL,
            z=0.0,
            scale=(float(self.chunk_size), DEFAULTS.WATER_THICKNESS, float(self.chunk_size)),
            color=color,
            rotation=0.0,
        )

    def _ruins_object(self, seed_base: int, biome: BiomeType):
        if self._draw(seed_base + self.settings['ruins_seed_offset']) <= self.settings['ruins_threshold']:
            return None

        r = self._draw(seed_base)
        return WorldObject(
            type=ObjectType.RUINS,
            x=0.0,
            y=1.0,
            z=0.0,
            scale=(2.0, DEFAULTS.RUINS_BASE_HEIGHT + r * DEFAULTS.RUINS_HEIGHT_JITTER, 2.0),
            color=DEFAULTS.RUINS_SNOW_COLOR if biome is BiomeType.SNOW else DEFAULTS.RUINS_COLOR,
            rotation=r * math.pi,
        )

    def _main_objects(self, seed_base: int, biome: BiomeType) -> list:
        rules = OBJECT_RULES.get(biome, DEFAULT_OBJECT_RULES)
        count = self.object_count(seed_base, biome)
        size = self.chunk_size

        objects = []
        for i in range(count):
            seed = seed_base + i
            r1 = self._draw(seed)
            r2 = self._draw(seed + 1)
            r3 = self._draw(seed + 2)

            rule = select_rule(rules, r3)
            shape = rule.shape(r1, r2, r3)
            objects.append(WorldObject(
                type=rule.object_type,
                x=(r1 - 0.5) * size,
                y=shape.height / 2,
                z=(r2 - 0.5) * size,
                scale=shape.scale,
                color=shape.color,
                rotation=r1 * DEFAULTS.TWO_PI,
            ))
        return objects

    def _cloud_object(self, seed_base: int):
        if self._draw(seed_base + self.settings['cloud_seed_offset']) <= self.settings['cloud_threshold']:
            return None

        size = self.chunk_size
        return WorldObject(
            type=ObjectType.CLOUD,
            x=(self._draw(seed_base + self.settings['cloud_x_seed_offset']) - 0.5) * size,
            y=DEFAULTS.CLOUD_BASE_ALTITUDE + self._draw(seed_base + self.settings['cloud_y_seed_offset']) * DEFAULTS.CLOUD_ALTITUDE_JITTER,
            z=(self._draw(seed_base + self.settings['cloud_z_seed_offset']) - 0.5) * size,
            scale=(3 + self._draw(seed_base) * 2, 0.8, 2 + self._draw(seed_base + 1)),
            color=DEFAULTS.CLOUD_COLOR,
            rotation=0.0,
        )


# --- Module-Level Convenience ---
_default_generator = None


def get_default_generator() -> ChunkGenerator:
    """Shared generator built from the internal defaults."""
    global _default_generator
    if _default_generator is None:
        _default_generator = ChunkGenerator()
    return _default_generator


def generate_chunk(cx: int, cz: int) -> ChunkData:
    """Generates a chunk with the default configuration."""
    return get_default_generator().generate_chunk(cx, cz)
