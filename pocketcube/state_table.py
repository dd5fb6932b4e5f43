"""
The state table holds, for every cube reachable from solved except the
solved cube itself, the turn that first discovered it in a breadth-first
search from solved. Undoing that turn brings the cube one move closer to
solved.

The pocket cube has 3,674,160 possible states.
https://en.wikipedia.org/wiki/Pocket_Cube#Permutations

Each record is the cube as a 4 byte big-endian integer followed by a 1 byte
turn code (see Move), so the whole table takes 5 * 3,674,159 = 18,370,795
bytes. Records are sorted by cube, and a file holds them back to back with
no header.
"""

from __future__ import annotations
from pathlib import Path
from time import perf_counter
from typing import Optional, Union

import numpy as np

from pocketcube.enums import Move
from pocketcube.error import CorruptTableException
from pocketcube.cube import (
    GODS_NUMBER, NUMBER_OF_STATES, SOLVED_CUBE, apply_move_many
)

RECORD_DTYPE = np.dtype([("cube", ">u4"), ("turn", "u1")])
SIZE_OF_RECORD = RECORD_DTYPE.itemsize
NUMBER_OF_RECORDS = NUMBER_OF_STATES - 1
SOLVED_MARKER = 0  # reserved, never stored
DEFAULT_TABLE_PATH = "state_table.bin"

class StateTable:
    """
    A read-only, sorted array of (cube, turn) records.
    Instances hold no mutable state and can be shared between threads.
    """

    def __init__(self, records: np.ndarray, expected_size: Optional[int] = NUMBER_OF_RECORDS):
        records = np.array(records, dtype=RECORD_DTYPE)
        validate_records(records, expected_size)
        records.flags.writeable = False
        self.__records = records
        self.__cubes = records["cube"].astype(np.int64)

    @staticmethod
    def from_pairs(cubes: np.ndarray, turns: np.ndarray, expected_size: Optional[int] = NUMBER_OF_RECORDS) -> StateTable:
        """ Sorts the given cubes and turns by cube and builds a table from them """
        cubes = np.asarray(cubes, dtype=np.int64)
        order = np.argsort(cubes, kind="stable")
        records = np.empty(len(cubes), dtype=RECORD_DTYPE)
        records["cube"] = cubes[order]
        records["turn"] = np.asarray(turns)[order]
        return StateTable(records, expected_size)

    @staticmethod
    def from_bytes(data: bytes, expected_size: Optional[int] = NUMBER_OF_RECORDS) -> StateTable:
        if len(data) % SIZE_OF_RECORD:
            raise CorruptTableException(
                f"A state table is a whole number of {SIZE_OF_RECORD} byte records, got {len(data)} bytes"
            )
        return StateTable(np.frombuffer(data, dtype=RECORD_DTYPE), expected_size)

    def to_bytes(self) -> bytes:
        return self.__records.tobytes()

    @property
    def records(self) -> np.ndarray:
        return self.__records

    @property
    def first(self) -> tuple[int, Move]:
        return int(self.__records[0]["cube"]), Move(int(self.__records[0]["turn"]))

    @property
    def last(self) -> tuple[int, Move]:
        return int(self.__records[-1]["cube"]), Move(int(self.__records[-1]["turn"]))

    def __len__(self) -> int:
        return len(self.__records)

    def __contains__(self, cube: int) -> bool:
        return self.lookup(cube) is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StateTable):
            return NotImplemented
        return np.array_equal(self.__records, other.records)

    def lookup(self, cube: int) -> Optional[Move]:
        """
        Binary searches the table for a cube and returns the turn that
        discovered it, None if the cube is not in the table. The solved
        cube is never in the table.
        """
        index = int(np.searchsorted(self.__cubes, cube))
        if index < len(self.__cubes) and self.__cubes[index] == cube:
            return Move(int(self.__records["turn"][index]))
        return None

    def lookup_many(self, cubes: np.ndarray) -> np.ndarray:
        """
        Vectorized lookup. Returns the turn code of each cube,
        SOLVED_MARKER (0) where a cube is not in the table.
        """
        cubes = np.asarray(cubes, dtype=np.int64)
        if not len(self.__cubes):
            return np.zeros(cubes.shape, dtype=np.uint8)
        indices = np.searchsorted(self.__cubes, cubes)
        clipped = np.minimum(indices, len(self.__cubes) - 1)
        found = (indices < len(self.__cubes)) & (self.__cubes[clipped] == cubes)
        return np.where(found, self.__records["turn"][clipped], SOLVED_MARKER).astype(np.uint8)

    def verify(self, debug: bool = False) -> int:
        """
        Solves every cube in the table at once by undoing turns until each
        one reaches the solved cube. Returns the length of the longest
        solution. Throws a CorruptTableException if any cube falls out of
        the table or is still unsolved after GODS_NUMBER turns.
        """
        start = perf_counter()
        current = self.__cubes.copy()
        distance = 0
        while len(current):
            if distance == GODS_NUMBER:
                raise CorruptTableException(
                    f"{len(current)} cubes are still unsolved after {GODS_NUMBER} turns, e.g. {current[0]}"
                )
            turns = self.lookup_many(current)
            if np.any(turns == SOLVED_MARKER):
                raise CorruptTableException(
                    f"Cube {current[turns == SOLVED_MARKER][0]} leads to a cube missing from the table"
                )
            current = _undo_turns(current, turns)
            distance += 1
            current = current[current != SOLVED_CUBE]
            if debug:
                print(f"{distance} turns: {len(current)} cubes left to solve")
        if debug:
            print(f"Verified {len(self)} cubes in {perf_counter() - start:.2f}s")
        return distance

def _undo_turns(cubes: np.ndarray, turns: np.ndarray) -> np.ndarray:
    """ Applies the inverse of turns[i] to cubes[i] """
    output = np.empty_like(cubes)
    for code in range(1, 7):
        mask = turns == code
        output[mask] = apply_move_many(cubes[mask], Move(code).inverse)
    return output

def validate_records(records: np.ndarray, expected_size: Optional[int] = NUMBER_OF_RECORDS) -> None:
    """
    Throws a CorruptTableException if the records are not a complete table:
    the wrong number of records, cubes out of order or repeated, or a turn
    code outside 1-6.
    """
    if expected_size is not None and len(records) != expected_size:
        raise CorruptTableException(
            f"Expected {expected_size} records ({expected_size * SIZE_OF_RECORD} bytes), got {len(records)}"
        )
    cubes = records["cube"].astype(np.int64)
    if np.any(cubes[1:] <= cubes[:-1]):
        raise CorruptTableException("State table records are not strictly ascending")
    turns = records["turn"]
    if np.any((turns < 1) | (turns > 6)):
        raise CorruptTableException("State table holds a turn code outside 1-6")
    if np.any(cubes == SOLVED_CUBE):
        raise CorruptTableException("The solved cube must not have a record")

def write_state_table(table: StateTable, path: Union[str, Path] = DEFAULT_TABLE_PATH) -> None:
    """ Writes a table to a binary file, OSErrors are left to the caller """
    with open(path, "wb") as f:
        f.write(table.to_bytes())

def read_state_table(path: Union[str, Path] = DEFAULT_TABLE_PATH, expected_size: Optional[int] = NUMBER_OF_RECORDS) -> StateTable:
    """
    Reads a table from a binary file. Throws a CorruptTableException
    for a truncated or inconsistent file, OSErrors are left to the caller.
    """
    with open(path, "rb") as f:
        data = f.read()
    return StateTable.from_bytes(data, expected_size)
