import pytest

from pocketcube.enums import Move
from pocketcube.cube import Cube, GODS_NUMBER, SOLVED_CUBE, apply_move, apply_moves, from_piece_states
from pocketcube.error import InvalidCubeException, SolutionTooLongException, UnsolvableCubeException
from pocketcube.solver import solve, solve_cube
from pocketcube.state_table import StateTable
from pocketcube.utils import reverse_moves

def distances_from_solved(max_depth: int) -> dict[int, int]:
    distances = {SOLVED_CUBE: 0}
    frontier = [SOLVED_CUBE]
    for depth in range(1, max_depth + 1):
        next_frontier = []
        for cube in frontier:
            for move in Move:
                new_cube = apply_move(cube, move)
                if new_cube not in distances:
                    distances[new_cube] = depth
                    next_frontier.append(new_cube)
        frontier = next_frontier
    return distances

def test_solved_cube_needs_no_moves(table):
    assert solve(SOLVED_CUBE, table) == []
    assert solve_cube(Cube(), table) == []

def test_two_move_scramble(table):
    cube = apply_moves(SOLVED_CUBE, [Move.FRONT_CW, Move.TOP_CW])
    moves = solve(cube, table)
    assert moves == [Move.TOP_CCW, Move.FRONT_CCW]
    assert moves == reverse_moves([Move.FRONT_CW, Move.TOP_CW])
    assert apply_moves(cube, moves) == SOLVED_CUBE

@pytest.mark.parametrize("move", list(Move))
def test_single_turn_is_undone(move, table):
    assert solve(apply_move(SOLVED_CUBE, move), table) == [move.inverse]

def test_solutions_are_shortest(table):
    for cube, distance in distances_from_solved(5).items():
        moves = solve(cube, table)
        assert len(moves) == distance
        assert apply_moves(cube, moves) == SOLVED_CUBE

def test_every_sampled_cube_solves(table, sample_cubes):
    for cube in sample_cubes:
        moves = solve(cube, table)
        assert 1 <= len(moves) <= GODS_NUMBER
        assert apply_moves(cube, moves) == SOLVED_CUBE

def test_random_scrambles(table, rng):
    for _ in range(200):
        scramble = [rng.choice(list(Move)) for _ in range(rng.randint(0, 20))]
        cube = apply_moves(SOLVED_CUBE, scramble)
        moves = solve(cube, table)
        assert len(moves) <= len(scramble)
        assert apply_moves(cube, moves) == SOLVED_CUBE

def test_solve_cube_from_colors(table):
    cube = Cube()
    cube.parse("L U' F")
    moves = solve_cube(Cube.from_simple_string(cube.to_simple_string()), table)
    assert moves == [Move.FRONT_CCW, Move.TOP_CW, Move.LEFT_CCW]

def test_twisted_corner_is_unsolvable(table):
    twisted = from_piece_states([1, 5, 6, 9, 13, 15, 18])
    with pytest.raises(UnsolvableCubeException):
        solve(twisted, table)
    with pytest.raises(UnsolvableCubeException):
        solve(apply_move(twisted, Move.LEFT_CW), table)

def test_invalid_layout_is_rejected_before_solving(table):
    with pytest.raises(InvalidCubeException):
        solve_cube(Cube.from_simple_string("oooo gggg wwww bbbb yyyy rrro"), table)

def test_cycle_in_table_is_caught():
    # four cubes that each point at the next by a front turn, never reaching solved
    start = apply_move(SOLVED_CUBE, Move.TOP_CW)
    cycle = [apply_moves(start, [Move.FRONT_CW] * i) for i in range(4)]
    table = StateTable.from_pairs(cycle, [Move.FRONT_CCW] * 4, expected_size=None)
    with pytest.raises(SolutionTooLongException):
        solve(start, table)
