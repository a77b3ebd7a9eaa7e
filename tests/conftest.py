import logging

import pytest

from chunkworld.biomes import BiomeType
from chunkworld.generator import ChunkGenerator


@pytest.fixture(scope="session")
def generator() -> ChunkGenerator:
    return ChunkGenerator(logger=logging.getLogger("test.generator"))


@pytest.fixture(scope="session")
def chunks_by_biome(generator):
    """Every chunk in a 120x120 block, grouped by biome."""
    grouped = {biome: [] for biome in BiomeType}
    for cx in range(-60, 60):
        for cz in range(-60, 60):
            chunk = generator.generate_chunk(cx, cz)
            grouped[chunk.biome].append(chunk)
    return grouped
