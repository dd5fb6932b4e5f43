import numpy as np
import pytest

from pocketcube.enums import Move
from pocketcube.error import CorruptTableException
from pocketcube.cube import GODS_NUMBER, SOLVED_CUBE, apply_move
from pocketcube.state_table import (
    NUMBER_OF_RECORDS, RECORD_DTYPE, SIZE_OF_RECORD, StateTable,
    read_state_table, write_state_table
)

def small_table() -> StateTable:
    return StateTable.from_pairs([300, 0x01020304, 7], [Move.TOP_CW, Move.LEFT_CCW, Move.FRONT_CW], expected_size=None)

def test_record_layout():
    assert SIZE_OF_RECORD == 5
    assert RECORD_DTYPE.itemsize == 5

def test_from_pairs_sorts_records():
    table = small_table()
    assert table.records["cube"].tolist() == [7, 300, 0x01020304]
    assert table.first == (7, Move.FRONT_CW)
    assert table.last == (0x01020304, Move.LEFT_CCW)

def test_bytes_are_big_endian_records():
    data = small_table().to_bytes()
    assert data == (
        b"\x00\x00\x00\x07\x01"
        b"\x00\x00\x01\x2c\x05"
        b"\x01\x02\x03\x04\x04"
    )
    assert StateTable.from_bytes(data, expected_size=None) == small_table()

def test_lookup():
    table = small_table()
    assert table.lookup(300) == Move.TOP_CW
    assert table.lookup(0x01020304) == Move.LEFT_CCW
    for missing in [0, 8, 299, 301, 0x01020305]:
        assert table.lookup(missing) is None
    assert 7 in table
    assert 8 not in table

def test_lookup_many():
    table = small_table()
    assert table.lookup_many([7, 8, 0x01020304, 0x7fffffff, 0]).tolist() == [1, 0, 4, 0, 0]

def test_empty_table():
    table = StateTable.from_pairs([], [], expected_size=None)
    assert table.lookup(SOLVED_CUBE) is None
    assert table.lookup_many([1, 2]).tolist() == [0, 0]

def test_records_are_read_only():
    with pytest.raises(ValueError):
        small_table().records["turn"][0] = 2

@pytest.mark.parametrize("cubes, turns, message", [
    ([1, 1], [1, 2], "strictly ascending"),
    ([1, 2], [1, 0], "outside 1-6"),
    ([1, 2], [7, 1], "outside 1-6"),
    ([1, SOLVED_CUBE], [1, 1], "solved cube"),
])
def test_rejects_inconsistent_records(cubes, turns, message):
    with pytest.raises(CorruptTableException) as e:
        StateTable.from_pairs(cubes, turns, expected_size=None)
    assert message in e.value.message

def test_rejects_unsorted_bytes():
    data = small_table().to_bytes()
    with pytest.raises(CorruptTableException):
        StateTable.from_bytes(data[5:] + data[:5], expected_size=None)

def test_rejects_partial_records():
    with pytest.raises(CorruptTableException):
        StateTable.from_bytes(small_table().to_bytes()[:-1], expected_size=None)

def test_rejects_wrong_record_count():
    with pytest.raises(CorruptTableException):
        StateTable.from_bytes(small_table().to_bytes())

def test_missing_file_is_reported(tmp_path):
    with pytest.raises(OSError):
        read_state_table(tmp_path / "missing.bin")

def test_full_table_is_complete(table):
    assert len(table) == NUMBER_OF_RECORDS == 3674159
    cubes = table.records["cube"].astype(np.int64)
    assert np.all(np.diff(cubes) > 0)
    assert set(np.unique(table.records["turn"]).tolist()) == {1, 2, 3, 4, 5, 6}
    assert SOLVED_CUBE not in table
    assert table.lookup(SOLVED_CUBE) is None

def test_full_table_neighbours_of_solved(table):
    for move in Move:
        assert table.lookup(apply_move(SOLVED_CUBE, move)) == move

def test_full_table_verifies(table):
    assert table.verify() == GODS_NUMBER

def test_full_table_persistence(table, tmp_path):
    path = tmp_path / "state_table.bin"
    write_state_table(table, path)
    assert path.stat().st_size == NUMBER_OF_RECORDS * 5 == 18370795
    assert read_state_table(path) == table

def test_truncated_file_is_rejected(table, tmp_path):
    path = tmp_path / "state_table.bin"
    path.write_bytes(table.to_bytes()[:-SIZE_OF_RECORD])
    with pytest.raises(CorruptTableException):
        read_state_table(path)

def test_verify_detects_missing_parent(table):
    # drop every neighbour of solved, so nothing at distance 2 can reach solved
    neighbours = {apply_move(SOLVED_CUBE, move) for move in Move}
    keep = ~np.isin(table.records["cube"].astype(np.int64), list(neighbours))
    broken = StateTable(table.records[keep], expected_size=None)
    with pytest.raises(CorruptTableException):
        broken.verify()
