import threading
import time

import pytest

from chunkworld.chunk import ChunkCoordinate
from chunkworld.runtime.cache import ChunkCache


def test_keys_are_structural(generator) -> None:
    cache = ChunkCache()
    chunk = generator.generate_chunk(2, -3)
    cache.insert((2, -3), chunk)

    assert ChunkCoordinate(2, -3) in cache
    assert (2, -3) in cache
    assert cache.get(ChunkCoordinate(2, -3)) is chunk
    assert cache.coordinates() == [ChunkCoordinate(2, -3)]


def test_double_insert_is_a_no_op(generator) -> None:
    cache = ChunkCache()
    first = generator.generate_chunk(0, 0)
    second = generator.generate_chunk(0, 0)

    assert cache.insert((0, 0), first) is first
    assert cache.insert((0, 0), second) is first
    assert len(cache) == 1
    assert cache.get((0, 0)) is first


def test_get_or_generate_only_generates_missing_chunks(generator) -> None:
    cache = ChunkCache()
    calls = []

    def factory(cx, cz):
        calls.append((cx, cz))
        return generator.generate_chunk(cx, cz)

    first = cache.get_or_generate((4, 5), factory)
    second = cache.get_or_generate(ChunkCoordinate(4, 5), factory)

    assert first is second
    assert calls == [(4, 5)]
    assert cache.generated_count == 1


def test_concurrent_requests_generate_once(generator) -> None:
    cache = ChunkCache()
    calls = []
    barrier = threading.Barrier(8)
    results = []

    def factory(cx, cz):
        calls.append((cx, cz))
        time.sleep(0.05)
        return generator.generate_chunk(cx, cz)

    def worker():
        barrier.wait()
        results.append(cache.get_or_generate((9, -9), factory))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert calls == [(9, -9)]
    assert len(results) == 8
    assert all(chunk is results[0] for chunk in results)


def test_failed_generation_can_be_retried(generator) -> None:
    cache = ChunkCache()

    def broken(cx, cz):
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        cache.get_or_generate((1, 1), broken)
    assert (1, 1) not in cache
    assert cache.get_or_generate((1, 1), generator.generate_chunk) == generator.generate_chunk(1, 1)


def test_unbounded_cache_never_evicts(generator) -> None:
    cache = ChunkCache()
    for cx in range(30):
        cache.get_or_generate((cx, 0), generator.generate_chunk)
    assert len(cache) == 30
    assert cache.evicted_count == 0


def test_bounded_cache_keeps_the_chunk_it_just_generated(generator) -> None:
    cache = ChunkCache(max_chunks=1)
    cache.get_or_generate((0, 0), generator.generate_chunk)
    calls = []

    def factory(cx, cz):
        calls.append((cx, cz))
        return generator.generate_chunk(cx, cz)

    first = cache.get_or_generate((1, 0), factory, pinned=[(0, 0)])
    second = cache.get_or_generate((1, 0), factory, pinned=[(0, 0)])

    assert calls == [(1, 0)]
    assert first is second
    assert (0, 0) in cache and (1, 0) in cache


def test_bounded_cache_evicts_oldest_but_keeps_pinned(generator) -> None:
    cache = ChunkCache(max_chunks=3)
    pinned = [ChunkCoordinate(0, 0)]
    for cx in range(6):
        cache.get_or_generate((cx, 0), generator.generate_chunk, pinned=pinned)

    assert len(cache) == 3
    assert (0, 0) in cache
    assert cache.coordinates() == [ChunkCoordinate(0, 0), ChunkCoordinate(4, 0), ChunkCoordinate(5, 0)]
    assert cache.evicted_count == 3


@pytest.mark.parametrize("max_chunks", [0, -1])
def test_invalid_bound_is_rejected(max_chunks) -> None:
    with pytest.raises(ValueError):
        ChunkCache(max_chunks=max_chunks)


def test_clear_empties_the_cache(generator) -> None:
    cache = ChunkCache()
    cache.get_or_generate((0, 0), generator.generate_chunk)
    cache.clear()
    assert len(cache) == 0
