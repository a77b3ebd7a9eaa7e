# chunkworld/runtime/__init__.py

# This file makes the 'runtime' directory a Python package.
# It also defines the public API of the package.

from .cache import ChunkCache
from .calendar import GameCalendar
from .world import World

__all__ = ["ChunkCache", "GameCalendar", "World"]
