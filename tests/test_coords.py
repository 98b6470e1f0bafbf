import itertools

import pytest

from ferrite.coords import CHUNK_SIZE, CHUNK_VOLUME, ChunkPos, LocalPos, WorldPos


def test_world_to_chunk_positive():
    chunk, local = WorldPos(33, 0, 31).to_chunk_and_local()
    assert chunk == ChunkPos(1, 0, 0)
    assert local == LocalPos(1, 0, 31)


def test_world_to_chunk_negative():
    chunk, local = WorldPos(-1, -32, -33).to_chunk_and_local()
    assert chunk == ChunkPos(-1, -1, -2)
    assert local == LocalPos(31, 0, 31)


def test_chunk_origin_roundtrip():
    cp = ChunkPos(3, -2, 1)
    origin = cp.world_origin()
    back, local = origin.to_chunk_and_local()
    assert back == cp
    assert local == LocalPos(0, 0, 0)


def test_chunk_origin_value():
    assert ChunkPos(3, -2, 1).world_origin() == WorldPos(96, -64, 32)


def test_local_index_roundtrip():
    for z, y, x in itertools.product(range(CHUNK_SIZE), repeat=3):
        lp = LocalPos(x, y, z)
        assert LocalPos.from_index(lp.to_index()) == lp


def test_local_index_layout():
    assert LocalPos(1, 0, 0).to_index() == 1
    assert LocalPos(0, 1, 0).to_index() == 32
    assert LocalPos(0, 0, 1).to_index() == 1024
    assert LocalPos(31, 31, 31).to_index() == CHUNK_VOLUME - 1


@pytest.mark.parametrize("args", [(32, 0, 0), (0, 32, 0), (0, 0, 32), (-1, 0, 0)])
def test_local_pos_out_of_range(args):
    with pytest.raises(ValueError):
        LocalPos(*args)


@pytest.mark.parametrize("index", [-1, CHUNK_VOLUME])
def test_from_index_out_of_range(index):
    with pytest.raises(ValueError):
        LocalPos.from_index(index)