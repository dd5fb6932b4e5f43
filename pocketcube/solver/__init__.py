from __future__ import annotations

from pocketcube.enums import Move
from pocketcube.cube import Cube, GODS_NUMBER, SOLVED_CUBE, apply_move, encode
from pocketcube.state_table import StateTable
from pocketcube.error import SolutionTooLongException, UnsolvableCubeException

def solve(cube: int, table: StateTable) -> list[Move]:
    """
    Returns the shortest list of turns that solves the cube.

    The solved cube has no record in the table, so it is checked before
    every lookup. Any other cube missing from the table cannot be reached
    from solved, and an UnsolvableCubeException is raised.
    """
    moves = []
    while cube != SOLVED_CUBE:
        turn = table.lookup(cube)
        if turn is None:
            raise UnsolvableCubeException(f"Cube {cube} cannot be reached from the solved cube")
        if len(moves) == GODS_NUMBER:
            raise SolutionTooLongException(
                f"Solution passed {GODS_NUMBER} turns, the state table is inconsistent"
            )
        moves.append(turn.inverse)
        cube = apply_move(cube, turn.inverse)
    return moves

def solve_cube(cube: Cube, table: StateTable) -> list[Move]:
    """ Solves a sticker layout, see solve """
    return solve(encode(cube), table)
