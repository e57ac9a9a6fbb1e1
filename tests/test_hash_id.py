import pytest

from tradelab.hash_id import extract_hash_id, make_hash_id


def test_hash_id_conversion():
    hash_id = make_hash_id(3, 100, 12000)
    assert extract_hash_id(hash_id) == (3, 100, 12000)


@pytest.mark.parametrize(
    "ids", [(0, 0, 0), (0xFFFF, 0xFFFF, 0xFFFFFFFF), (1, 1, 1), (65535, 0, 7)]
)
def test_round_trip(ids):
    assert extract_hash_id(make_hash_id(*ids)) == ids


def test_distinct_ids_give_distinct_hashes():
    assert make_hash_id(1, 2, 3) != make_hash_id(2, 1, 3)
    assert make_hash_id(1, 2, 3) != make_hash_id(1, 2, 4)


@pytest.mark.parametrize("ids", [(-1, 0, 0), (0x10000, 0, 0), (0, 0x10000, 0), (0, 0, 1 << 32)])
def test_out_of_range(ids):
    with pytest.raises(ValueError):
        make_hash_id(*ids)