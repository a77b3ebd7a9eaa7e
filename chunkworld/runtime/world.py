# chunkworld/runtime/world.py

"""
================================================================================
WORLD RUNTIME
================================================================================
This module provides the user-facing `World` class, the controller that sits
between a viewer and the generator. It streams the chunk neighbourhood around
the viewer into the cache, tracks the in-game calendar and hands renderers
the season/weather display palette for any cached chunk.

Rendering itself is left to the caller: the World only produces records.
================================================================================
"""
import logging
from typing import Optional

from .. import config as DEFAULTS
from ..chunk import ChunkCoordinate, ChunkData
from ..generator import ChunkGenerator
from ..seasons import ChunkPalette, Season, Weather, chunk_palette
from .cache import ChunkCache
from .calendar import GameCalendar


class World:
    """
    The main runtime class. Handles chunk streaming, caching and time.
    """
    def __init__(self, config: dict = None, generator: ChunkGenerator = None, logger: logging.Logger = None):
        """
        Initializes the World.

        Args:
            config (dict, optional): Overrides for generation, streaming and
                calendar settings. Generation keys are forwarded to the
                ChunkGenerator when one is not supplied.
            generator (ChunkGenerator, optional): A pre-built generator.
            logger (logging.Logger, optional): The logger instance for all output.
        """
        self.config = config or {}
        self.logger = logger or logging.getLogger(__name__)

        # --- 1. Streaming Settings ---
        self.view_radius = self.config.get('view_radius', DEFAULTS.DEFAULT_VIEW_RADIUS)
        if self.view_radius < 0:
            raise ValueError(f"view_radius must be non-negative, got {self.view_radius}")
        max_chunks = self.config.get('max_cached_chunks', DEFAULTS.DEFAULT_MAX_CACHED_CHUNKS)

        # --- 2. Initialize Core Components (Rule 7 - Composition) ---
        self.generator = generator or ChunkGenerator(self.config, self.logger)
        self.chunk_size = self.generator.chunk_size
        self.cache = ChunkCache(max_chunks=max_chunks, logger=self.logger)
        self.calendar = GameCalendar(self.config)

        # --- 3. Viewer State ---
        self.center: Optional[ChunkCoordinate] = None
        self.active_coordinates = []

        self.logger.info(
            f"World initialized (view radius {self.view_radius}, "
            f"cache limit {'none' if max_chunks is None else max_chunks})."
        )

    # --- Streaming ---
    def update_viewer(self, world_x: float, world_z: float) -> list:
        """
        Moves the viewer and ensures every chunk within the view radius is
        cached. Chunks already in the cache are never regenerated.

        Returns the active coordinates, row-major around the viewer's chunk.
        """
        center = ChunkCoordinate.from_world(world_x, world_z, self.chunk_size)
        if center == self.center and self.active_coordinates:
            return self.active_coordinates

        wanted = center.neighbourhood(self.view_radius)
        missing = [coord for coord in wanted if coord not in self.cache]
        for coord in missing:
            self.cache.get_or_generate(coord, self.generator.generate_chunk, pinned=wanted)

        if self.center is not None and center != self.center:
            self.logger.debug(f"Viewer crossed into chunk ({center.cx}, {center.cz}).")
        if missing:
            self.logger.debug(f"Generated {len(missing)} chunk(s); {len(self.cache)} cached.")

        self.center = center
        self.active_coordinates = wanted
        return self.active_coordinates

    def get_chunk(self, cx: int, cz: int) -> ChunkData:
        """Returns a chunk, generating and caching it if it is not yet known."""
        return self.cache.get_or_generate(
            ChunkCoordinate(cx, cz), self.generator.generate_chunk, pinned=self.active_coordinates
        )

    def active_chunks(self) -> list:
        chunks = []
        for coord in self.active_coordinates:
            chunk = self.cache.get(coord)
            if chunk is not None:
                chunks.append(chunk)
        return chunks

    # --- Time & Presentation ---
    def update(self, real_delta_time: float):
        """
        Updates the world's internal state. Should be called once per frame.

        Args:
            real_delta_time (float): The real-world time elapsed since the last frame, in seconds.
        """
        previous = (self.calendar.season, self.calendar.weather)
        self.calendar.update(real_delta_time)
        current = (self.calendar.season, self.calendar.weather)
        if current != previous:
            self.logger.info(f"Conditions changed: {self.calendar.get_date_string()}")

    @property
    def season(self) -> Season:
        return self.calendar.season

    @property
    def weather(self) -> Weather:
        return self.calendar.weather

    def display_palette(self, cx: int, cz: int) -> ChunkPalette:
        """Season/weather display colours for a chunk. The stored chunk is not modified."""
        return chunk_palette(self.get_chunk(cx, cz), self.calendar.season, self.calendar.weather)

    # --- Public API for User Control ---
    def set_game_speed(self, new_scale: float):
        """
        Sets the speed of the in-game time.
        0 = paused, 1 = real-time, > 1 = fast-forward.
        """
        self.calendar.set_speed(new_scale)
        self.logger.info(f"Game speed set to {new_scale}x.")

    def get_date_string(self) -> str:
        return self.calendar.get_date_string()
