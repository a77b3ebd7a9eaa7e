# chunkworld/runtime/cache.py

"""
================================================================================
CHUNK CACHE
================================================================================
A session-lifetime mapping from ChunkCoordinate to ChunkData.

Data Contract:
---------------
- Keys are structural ChunkCoordinate values, never formatted strings.
- insert() under a key that is already present is a no-op and returns the
  chunk already stored there. It is never an error.
- get_or_generate() runs the factory at most once per coordinate, even when
  several threads ask for the same missing chunk at the same time.
- With max_chunks=None (the default) nothing is ever evicted. With a bound,
  the oldest inserted chunks are evicted first, skipping pinned coordinates.
================================================================================
"""
import logging
import threading
from collections import OrderedDict
from typing import Callable, Iterable, Optional

from ..chunk import ChunkCoordinate, ChunkData


class ChunkCache:
    """Thread-safe chunk store with optional insertion-order eviction."""

    def __init__(self, max_chunks: Optional[int] = None, logger: logging.Logger = None):
        if max_chunks is not None and max_chunks < 1:
            raise ValueError(f"max_chunks must be a positive integer or None, got {max_chunks}")
        self.max_chunks = max_chunks
        self.logger = logger or logging.getLogger(__name__)

        self._chunks: "OrderedDict[ChunkCoordinate, ChunkData]" = OrderedDict()
        self._in_flight = {}
        self._lock = threading.Lock()
        self.generated_count = 0
        self.evicted_count = 0

    def __contains__(self, coord) -> bool:
        with self._lock:
            return ChunkCoordinate(*coord) in self._chunks

    def __len__(self) -> int:
        with self._lock:
            return len(self._chunks)

    def get(self, coord) -> Optional[ChunkData]:
        with self._lock:
            return self._chunks.get(ChunkCoordinate(*coord))

    def coordinates(self) -> list:
        with self._lock:
            return list(self._chunks.keys())

    def insert(self, coord, chunk: ChunkData, pinned: Iterable = ()) -> ChunkData:
        """Stores a chunk unless the key is taken; returns the stored chunk."""
        key = ChunkCoordinate(*coord)
        with self._lock:
            existing = self._chunks.get(key)
            if existing is not None:
                return existing
            self._chunks[key] = chunk
            self._evict_locked(pinned, newest=key)
            return chunk

    def get_or_generate(self, coord, factory: Callable[[int, int], ChunkData], pinned: Iterable = ()) -> ChunkData:
        """
        Returns the cached chunk, generating it with factory(cx, cz) if missing.
        Concurrent callers for the same coordinate wait for the first one.
        """
        key = ChunkCoordinate(*coord)
        while True:
            with self._lock:
                existing = self._chunks.get(key)
                if existing is not None:
                    return existing
                pending = self._in_flight.get(key)
                if pending is None:
                    pending = threading.Event()
                    self._in_flight[key] = pending
                    break
            # Another thread is generating this chunk.
            pending.wait()

        try:
            chunk = factory(key.cx, key.cz)
            with self._lock:
                self.generated_count += 1
            return self.insert(key, chunk, pinned)
        finally:
            with self._lock:
                del self._in_flight[key]
            pending.set()

    def clear(self):
        with self._lock:
            self._chunks.clear()

    def _evict_locked(self, pinned: Iterable, newest: ChunkCoordinate = None):
        if self.max_chunks is None or len(self._chunks) <= self.max_chunks:
            return

        # The chunk just inserted is never evicted, even if that leaves the cache over its bound.
        keep = {ChunkCoordinate(*c) for c in pinned}
        if newest is not None:
            keep.add(newest)
        for key in list(self._chunks.keys()):
            if len(self._chunks) <= self.max_chunks:
                break
            if key in keep:
                continue
            del self._chunks[key]
            self.evicted_count += 1
            self.logger.debug(f"Evicted chunk ({key.cx}, {key.cz}) from cache.")
