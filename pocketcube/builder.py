"""
Fills a state table with a breadth-first search from the solved cube.

Every cube reachable from solved is discovered exactly once, and the turn
that first discovered it is the one stored. Since a breadth-first search
visits cubes in order of distance from solved, undoing the stored turns
always gives a shortest solution.

The solved cube seeds the search but never gets a record of its own,
even though turning any of its neighbours back rediscovers it.
"""

from __future__ import annotations
from time import perf_counter
from typing import Optional

import numpy as np

from pocketcube.enums import Move
from pocketcube.queue import CircularQueue
from pocketcube.state_table import NUMBER_OF_RECORDS, StateTable
from pocketcube.error import QueueOverflowException
from pocketcube.cube import NUMBER_OF_STATES, SOLVED_CUBE, apply_move, apply_move_many

# states at each distance from solved, quarter-turn metric
LEVEL_SIZES = [
    1, 6, 27, 120, 534, 2256, 8969, 33058,
    114149, 360508, 930588, 1350852, 782536, 90280, 276
]

def build_table(debug: bool = False, level_sizes: Optional[list[int]] = None) -> StateTable:
    """
    Builds the state table one level of the search at a time.

    Each level is taken off the queue whole, and the six turns are applied
    to all of it at once. The resulting cubes are ordered as a one-at-a-time
    search would meet them (queue order, then turn order), so keeping the
    first occurrence of each new cube gives the same records and the same
    queue order as build_table_sequential.

    Arguments:
        debug: print the size of every level as it is found
        level_sizes: if given, the number of cubes at each distance is appended to it
    """
    start = perf_counter()
    queue = CircularQueue(NUMBER_OF_STATES)
    queue.enqueue(SOLVED_CUBE)
    visited = np.array([SOLVED_CUBE], dtype=np.int64)  # kept sorted
    found_cubes, found_turns = [], []
    if level_sizes is not None:
        level_sizes.append(1)

    depth = 0
    while not queue.is_empty():
        level = queue.dequeue_many(len(queue))
        candidates = np.stack([apply_move_many(level, move) for move in Move], axis=1).ravel()
        turns = np.tile(np.array(list(Move), dtype=np.uint8), len(level))

        unique, first_index = np.unique(candidates, return_index=True)
        first_index = np.sort(first_index[~_contains_sorted(visited, unique)])
        new_cubes, new_turns = candidates[first_index], turns[first_index]
        if not len(new_cubes):
            break

        if not queue.enqueue_many(new_cubes):
            raise QueueOverflowException(
                f"{len(new_cubes)} new cubes do not fit in a queue of {queue.max_cells} holding {len(queue)}"
            )
        visited = np.union1d(visited, new_cubes)
        found_cubes.append(new_cubes)
        found_turns.append(new_turns)
        depth += 1
        if level_sizes is not None:
            level_sizes.append(len(new_cubes))
        if debug:
            print(f"Depth {depth}: {len(new_cubes)} cubes ({len(visited)} total, {perf_counter() - start:.2f}s)")

    assert len(visited) == NUMBER_OF_STATES, f"Found {len(visited)} cubes, expected {NUMBER_OF_STATES}"
    table = StateTable.from_pairs(np.concatenate(found_cubes), np.concatenate(found_turns))
    if debug:
        print(f"Built a table of {len(table)} records in {perf_counter() - start:.2f}s")
    return table

def build_table_sequential(debug: bool = False, level_sizes: Optional[list[int]] = None) -> StateTable:
    """
    Builds the state table one cube at a time: dequeue a cube, turn it
    six ways, and record and enqueue every cube not seen before.
    Much slower than build_table, kept as the reference it is checked against.
    """
    start = perf_counter()
    queue = CircularQueue(NUMBER_OF_STATES)
    queue.enqueue(SOLVED_CUBE)
    discovered: dict[int, Move] = {}
    count = 0

    # cubes left in the level being expanded, and found for the next one
    left_in_level, next_level = 1, 0
    if level_sizes is not None:
        level_sizes.append(1)

    while queue.peek() is not None:
        this_cube = queue.dequeue()
        for move in Move:
            new_cube = apply_move(this_cube, move)
            if new_cube == SOLVED_CUBE or new_cube in discovered:
                continue
            discovered[new_cube] = move
            if not queue.enqueue(new_cube):
                raise QueueOverflowException(f"Queue of {queue.max_cells} cubes overflowed after {count} cubes")
            count += 1
            next_level += 1
            if debug and count % 100000 == 0:
                print(f"{count} cubes found ({perf_counter() - start:.2f}s)")

        left_in_level -= 1
        if left_in_level == 0:
            if level_sizes is not None and next_level:
                level_sizes.append(next_level)
            left_in_level, next_level = next_level, 0

    assert count == NUMBER_OF_RECORDS, f"Found {count} cubes, expected {NUMBER_OF_RECORDS}"
    table = StateTable.from_pairs(
        np.fromiter(discovered.keys(), dtype=np.int64, count=count),
        np.fromiter(discovered.values(), dtype=np.uint8, count=count)
    )
    if debug:
        print(f"Built a table of {len(table)} records in {perf_counter() - start:.2f}s")
    return table

def _contains_sorted(haystack: np.ndarray, needles: np.ndarray) -> np.ndarray:
    """ Binary searches a sorted array for each needle """
    indices = np.searchsorted(haystack, needles)
    clipped = np.minimum(indices, len(haystack) - 1)
    return (indices < len(haystack)) & (haystack[clipped] == needles)
