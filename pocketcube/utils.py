from __future__ import annotations
import re
from typing import Iterable

from pocketcube.enums import Move

MOVE_PATTERN = re.compile(r"^([FLU])(2|')?$")

def get_root_move(move: str) -> str:
    """
    Gets the "root move" from a given move
    >>> get_root_move("U'")
    'U'
    """
    if (match := MOVE_PATTERN.match(move)) is None:
        raise ValueError(f"'{move}' is not a front, left or top turn")
    return match.group(1)

def get_dist(move: str) -> int:
    """
    Returns the clockwise distance of a move
    """
    return 3 if move[-1] == "'" else 2 if move[-1] == '2' else 1

def get_final_move(move: str, dist: int) -> str:
    """
    Gets the final representation of the move given root and distance
    """
    addon = ['', '', '2', "'"][dist % 4]
    return f"{move}{addon}"

def parse_moves(moves: str) -> list[Move]:
    """
    Parses a string of moves seperated by spaces into quarter turns.
    Half turns become two clockwise quarter turns.
    >>> parse_moves("F U' L2")
    [<Move.FRONT_CW: 1>, <Move.TOP_CCW: 6>, <Move.LEFT_CW: 3>, <Move.LEFT_CW: 3>]
    """
    output = []
    for m in filter(lambda x: bool(x.strip()), moves.split()):
        root, dist = get_root_move(m), get_dist(m)
        if dist == 3:
            output.append(Move.from_notation(f"{root}'"))
        else:
            output.extend([Move.from_notation(root)] * dist)
    return output

def clean_moves(moves: Iterable[Move | str]) -> list[str]:
    """
    Replaces groups of moves (2, 3, 4) with the appropriate move.
    >>> clean_moves(['F', 'F', 'F'])
    ["F'"]
    >>> clean_moves([Move.TOP_CW, Move.TOP_CW])
    ['U2']
    >>> clean_moves(['L', 'L', 'L', 'L'])
    []
    """

    new_moves = []
    prev_root = None
    prev_move_dist = 0
    for move in moves:
        move = str(move)
        root = get_root_move(move)
        if root == prev_root:
            prev_move_dist += get_dist(move)
        else:
            if prev_root is not None and prev_move_dist % 4 != 0:
                new_moves.append(get_final_move(prev_root, prev_move_dist))
            prev_move_dist = get_dist(move)
            prev_root = root
    if prev_root is None or prev_move_dist % 4 == 0:
        return new_moves
    return [*new_moves, get_final_move(prev_root, prev_move_dist)]

def reverse_moves(moves: Iterable[Move]) -> list[Move]:
    """
    Reverses a list of moves and outputs the moves to get 
    back to the original position.

    >>> reverse_moves([Move.FRONT_CW, Move.TOP_CW])
    [<Move.TOP_CCW: 6>, <Move.FRONT_CCW: 2>]
    """

    return [move.inverse for move in reversed(list(moves))]

def moves_to_string(moves: Iterable[Move], compact: bool = False) -> str:
    """
    >>> moves_to_string([Move.LEFT_CCW, Move.TOP_CW, Move.TOP_CW])
    "L' U U"
    >>> moves_to_string([Move.LEFT_CCW, Move.TOP_CW, Move.TOP_CW], compact=True)
    "L' U2"
    """
    if compact:
        return " ".join(clean_moves(moves))
    return " ".join(m.notation for m in moves)
