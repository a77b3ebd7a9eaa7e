import logging
import math

import numpy as np
import pytest

from chunkworld import generate_chunk
from chunkworld.biomes import BiomeType
from chunkworld.generator import ChunkGenerator
from chunkworld.objects import ObjectType

FEATURE_TYPES = (ObjectType.WATER, ObjectType.RUINS, ObjectType.CLOUD)


def _main_objects(chunk):
    return [obj for obj in chunk.objects if obj.type not in FEATURE_TYPES]


@pytest.mark.parametrize("cx, cz", [(0, 0), (7, -3), (-42, 17), (123, 456), (-5, -5)])
def test_generation_is_deterministic_across_instances(cx, cz) -> None:
    first = ChunkGenerator().generate_chunk(cx, cz)
    second = ChunkGenerator().generate_chunk(cx, cz)
    assert first == second
    assert [obj.color for obj in first.objects] == [obj.color for obj in second.objects]


def test_module_level_generate_chunk_matches_an_instance(generator) -> None:
    assert generate_chunk(11, -9) == generator.generate_chunk(11, -9)


def test_chunk_identity_fields(generator) -> None:
    chunk = generator.generate_chunk(-3, 8)
    assert chunk.id == "-3,8"
    assert (chunk.x, chunk.z) == (-3, 8)
    assert chunk.coordinate == (-3, 8)
    assert isinstance(chunk.objects, tuple)


def test_water_flag_and_first_object(chunks_by_biome) -> None:
    for biome, chunks in chunks_by_biome.items():
        wet = biome in (BiomeType.SWAMP, BiomeType.BEACH)
        for chunk in chunks:
            assert chunk.has_water == wet
            water = chunk.objects_of_type(ObjectType.WATER)
            if wet:
                assert chunk.objects[0].type is ObjectType.WATER
                assert len(water) == 1
                assert water[0].scale == (20.0, 0.1, 20.0)
                assert (water[0].x, water[0].z) == (0.0, 0.0)
            else:
                assert water == ()


def test_swamp_water_has_its_own_colour(chunks_by_biome) -> None:
    swamp = chunks_by_biome[BiomeType.SWAMP][0]
    beach = chunks_by_biome[BiomeType.BEACH][0]
    assert swamp.objects[0].color != beach.objects[0].color


@pytest.mark.parametrize("biome, density", [
    (BiomeType.FOREST, 12),
    (BiomeType.DESERT, 4),
])
def test_main_object_count_bounds(chunks_by_biome, biome, density) -> None:
    chunks = chunks_by_biome[biome]
    assert chunks
    counts = {len(_main_objects(chunk)) for chunk in chunks}
    assert min(counts) >= 3
    assert max(counts) < 3 + density
    assert len(counts) > 1


def test_main_objects_use_the_biome_palette(chunks_by_biome) -> None:
    allowed = {
        BiomeType.FOREST: {ObjectType.TREE, ObjectType.BUSH, ObjectType.GRASS},
        BiomeType.DESERT: {ObjectType.CACTUS, ObjectType.DEADBUSH, ObjectType.ROCK},
        BiomeType.SNOW: {ObjectType.TREE, ObjectType.ROCK},
        BiomeType.VOLCANIC: {ObjectType.DEADBUSH, ObjectType.ROCK},
    }
    for biome, types in allowed.items():
        for chunk in chunks_by_biome[biome]:
            assert {obj.type for obj in _main_objects(chunk)} <= types


@pytest.mark.parametrize("cx, cz", [(-5, -5), (5, 5), (-1, 0), (0, -1), (-999, -999)])
def test_negative_coordinates_are_well_formed(generator, cx, cz) -> None:
    chunk = generator.generate_chunk(cx, cz)
    assert isinstance(chunk.biome, BiomeType)
    assert len(_main_objects(chunk)) >= 3
    for obj in chunk.objects:
        values = (obj.x, obj.y, obj.z, obj.rotation) + tuple(obj.scale)
        assert all(math.isfinite(v) for v in values)


def test_object_positions_stay_inside_the_footprint(chunks_by_biome) -> None:
    for chunks in chunks_by_biome.values():
        for chunk in chunks[:50]:
            for obj in chunk.objects:
                assert -10.0 <= obj.x <= 10.0
                assert -10.0 <= obj.z <= 10.0


def test_main_objects_sit_on_the_ground_and_rotate_a_full_turn(chunks_by_biome) -> None:
    for chunk in chunks_by_biome[BiomeType.FOREST][:50]:
        for obj in _main_objects(chunk):
            assert obj.y == pytest.approx(obj.scale[1] / 2)
            assert 0.0 <= obj.rotation < 2 * math.pi


def test_append_order_is_water_ruins_main_cloud(chunks_by_biome) -> None:
    rank = {ObjectType.WATER: 0, ObjectType.RUINS: 1, ObjectType.CLOUD: 3}
    for chunks in chunks_by_biome.values():
        for chunk in chunks:
            ranks = [rank.get(obj.type, 2) for obj in chunk.objects]
            assert ranks == sorted(ranks)


def test_rare_feature_frequencies(generator) -> None:
    ruins = clouds = 0
    total = 0
    for cx in range(-50, 50):
        for cz in range(-50, 50):
            chunk = generator.generate_chunk(cx, cz)
            ruins += bool(chunk.objects_of_type(ObjectType.RUINS))
            clouds += bool(chunk.objects_of_type(ObjectType.CLOUD))
            total += 1
    assert total == 10_000
    assert 0.035 <= ruins / total <= 0.065
    assert 0.35 <= clouds / total <= 0.45


def test_ruins_and_clouds_are_placed_as_described(chunks_by_biome) -> None:
    for chunks in chunks_by_biome.values():
        for chunk in chunks:
            for ruins in chunk.objects_of_type(ObjectType.RUINS):
                assert (ruins.x, ruins.z) == (0.0, 0.0)
                assert 4.0 <= ruins.scale[1] < 8.0
            for cloud in chunk.objects_of_type(ObjectType.CLOUD):
                assert 12.0 <= cloud.y < 16.0
                assert cloud.color == "#ffffff"


@pytest.mark.parametrize("cx, cz", [(1.0, 0), (0, 2.5), (True, 0), (0, False), ("1", 0), (None, 0)])
def test_non_integer_coordinates_are_rejected(generator, cx, cz) -> None:
    with pytest.raises(TypeError):
        generator.generate_chunk(cx, cz)


def test_numpy_integers_are_accepted(generator) -> None:
    assert generator.generate_chunk(np.int64(3), np.int32(-4)) == generator.generate_chunk(3, -4)


def test_extreme_coordinates_do_not_fail(generator) -> None:
    chunk = generator.generate_chunk(10**9, -10**9)
    assert isinstance(chunk.biome, BiomeType)
    assert isinstance(generator.generate_chunk(10**300, -10**300).biome, BiomeType)


def test_seed_base_beyond_float_range_overflows(generator) -> None:
    with pytest.raises(OverflowError):
        generator.generate_chunk(10**305, 0)


def test_config_overrides_are_honoured() -> None:
    always = ChunkGenerator(config={'ruins_threshold': -1.0, 'cloud_threshold': -1.0})
    never = ChunkGenerator(config={'ruins_threshold': 1.0, 'cloud_threshold': 1.0})
    for cx, cz in [(0, 0), (3, -8), (-20, 14)]:
        assert len(always.generate_chunk(cx, cz).objects_of_type(ObjectType.RUINS)) == 1
        assert len(always.generate_chunk(cx, cz).objects_of_type(ObjectType.CLOUD)) == 1
        assert never.generate_chunk(cx, cz).objects_of_type(ObjectType.RUINS) == ()
        assert never.generate_chunk(cx, cz).objects_of_type(ObjectType.CLOUD) == ()


def test_minimum_object_count_override() -> None:
    dense = ChunkGenerator(config={'min_objects_per_chunk': 20})
    assert len(_main_objects(dense.generate_chunk(0, 0))) >= 20


def test_seed_base_layout(generator) -> None:
    assert generator.seed_base(0, 0) == 0
    assert generator.seed_base(1, 0) == 10000
    assert generator.seed_base(-2, 7) == -19993


def test_initialization_is_logged(caplog) -> None:
    with caplog.at_level(logging.INFO):
        ChunkGenerator(logger=logging.getLogger("test.generator.init"))
    assert any("ChunkGenerator initialized" in message for message in caplog.messages)
