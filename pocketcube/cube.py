"""
A cube is stored as a single integer. Both the pieces and the positions
are labelled so that, on the solved cube, piece n sits in position n:

    piece                      position
    0: orange_white_green      top_front_left
    1: red_white_green         bottom_front_left
    2: orange_white_blue       top_front_right
    3: red_white_blue          bottom_front_right
    4: orange_yellow_green     top_back_left
    5: red_yellow_green        bottom_back_left
    6: orange_yellow_blue      top_back_right
    7: red_yellow_blue         bottom_back_right (fixed, never stored)

Each of the movable pieces 0-6 has a state in [0, 21): position * 3 + orientation.
The cube is the sum of state[p] * 21**p, so it always fits in 31 bits.
"""

from __future__ import annotations
import re
import random
from typing import Iterable, Optional, Union

import numpy as np
from pynterface import Background

from pocketcube.enums import Color, Face, Move
from pocketcube.error import InvalidCubeException
from pocketcube.utils import parse_moves

NUMBER_OF_PIECES = 7
STATES_PER_PIECE = 21
NUMBER_OF_CUBES = STATES_PER_PIECE ** NUMBER_OF_PIECES  # size of the encoding, not of the puzzle
NUMBER_OF_STATES = 3674160                               # cubes reachable from solved, solved included
GODS_NUMBER = 14                                         # quarter-turn metric
SOLVED_CUBE = 0x5FD3097E

POWERS = np.array([STATES_PER_PIECE ** p for p in range(NUMBER_OF_PIECES)], dtype=np.int64)
_POWERS_DESCENDING = POWERS.tolist()[::-1]

# rows are indexed by Move - 1, columns by piece state
TURN_TABLE = np.array([
    [8, 6, 7, 2, 0, 1, 10, 11, 9, 4, 5, 3, 12, 13, 14, 15, 16, 17, 18, 19, 20],   # F
    [4, 5, 3, 11, 9, 10, 1, 2, 0, 8, 6, 7, 12, 13, 14, 15, 16, 17, 18, 19, 20],   # F'
    [5, 3, 4, 16, 17, 15, 6, 7, 8, 9, 10, 11, 2, 0, 1, 13, 14, 12, 18, 19, 20],   # L
    [13, 14, 12, 1, 2, 0, 6, 7, 8, 9, 10, 11, 17, 15, 16, 5, 3, 4, 18, 19, 20],   # L'
    [14, 12, 13, 3, 4, 5, 2, 0, 1, 9, 10, 11, 19, 20, 18, 15, 16, 17, 7, 8, 6],   # U
    [7, 8, 6, 3, 4, 5, 20, 18, 19, 9, 10, 11, 1, 2, 0, 15, 16, 17, 14, 12, 13],   # U'
], dtype=np.int64)
TURN_TABLE.flags.writeable = False
_TURN_LISTS = [row.tolist() for row in TURN_TABLE]

# Orientation tables. A row, indexed by piece state, gives the color class
# shown on the (top/bottom, front/back, left/right) faces of that piece:
# class 0 is red/orange, class 1 is white/yellow and class 2 is green/blue.
#
# Pieces an even number of moves apart share a table, pieces an odd number
# apart do not, so there are two: one for pieces 0, 3, 5 and 6 and one for
# pieces 1, 2 and 4 (and the fixed 7). Using one table for both gives wrong
# colors on half the pieces.
ORIENTATION_TABLE_0356 = np.array([
    [0, 1, 2], [2, 0, 1], [1, 2, 0],
    [0, 2, 1], [2, 1, 0], [1, 0, 2],
    [1, 0, 2], [0, 2, 1], [2, 1, 0],
    [0, 1, 2], [2, 0, 1], [1, 2, 0],
    [2, 1, 0], [1, 0, 2], [0, 2, 1],
    [0, 1, 2], [2, 0, 1], [1, 2, 0],
    [0, 1, 2], [2, 0, 1], [1, 2, 0],
], dtype=np.int8)

ORIENTATION_TABLE_1247 = np.array([
    [1, 0, 2], [2, 1, 0], [0, 2, 1],
    [1, 2, 0], [2, 0, 1], [0, 1, 2],
    [0, 1, 2], [1, 2, 0], [2, 0, 1],
    [1, 0, 2], [2, 1, 0], [0, 2, 1],
    [2, 1, 0], [0, 1, 2], [1, 0, 2],
    [1, 0, 2], [2, 1, 0], [0, 2, 1],
    [2, 1, 0], [1, 0, 2], [0, 2, 1],
], dtype=np.int8)

# colors of each piece, indexed by color class
PIECE_COLORS = [
    (Color.ORANGE, Color.WHITE, Color.GREEN),
    (Color.RED, Color.WHITE, Color.GREEN),
    (Color.ORANGE, Color.WHITE, Color.BLUE),
    (Color.RED, Color.WHITE, Color.BLUE),
    (Color.ORANGE, Color.YELLOW, Color.GREEN),
    (Color.RED, Color.YELLOW, Color.GREEN),
    (Color.ORANGE, Color.YELLOW, Color.BLUE),
    (Color.RED, Color.YELLOW, Color.BLUE),
]

COLOR_CLASS = {
    Color.ORANGE: 0, Color.RED: 0,
    Color.WHITE: 1, Color.YELLOW: 1,
    Color.GREEN: 2, Color.BLUE: 2,
}

# the (top/bottom, front/back, left/right) stickers of each position, as (face, row, col)
POSITION_CELLS = [
    ((Face.TOP, 1, 0), (Face.FRONT, 0, 0), (Face.LEFT, 0, 1)),
    ((Face.BOTTOM, 0, 0), (Face.FRONT, 1, 0), (Face.LEFT, 1, 1)),
    ((Face.TOP, 1, 1), (Face.FRONT, 0, 1), (Face.RIGHT, 0, 0)),
    ((Face.BOTTOM, 0, 1), (Face.FRONT, 1, 1), (Face.RIGHT, 1, 0)),
    ((Face.TOP, 0, 0), (Face.BACK, 0, 1), (Face.LEFT, 0, 0)),
    ((Face.BOTTOM, 1, 0), (Face.BACK, 1, 1), (Face.LEFT, 1, 0)),
    ((Face.TOP, 0, 1), (Face.BACK, 0, 0), (Face.RIGHT, 0, 1)),
    ((Face.BOTTOM, 1, 1), (Face.BACK, 1, 0), (Face.RIGHT, 1, 1)),
]

SOLVED_FACE_COLORS = {
    Face.TOP: Color.ORANGE,
    Face.LEFT: Color.GREEN,
    Face.FRONT: Color.WHITE,
    Face.RIGHT: Color.BLUE,
    Face.BACK: Color.YELLOW,
    Face.BOTTOM: Color.RED,
}

FIXED_PIECE = 7

def _orientation_table(piece: int) -> np.ndarray:
    return ORIENTATION_TABLE_0356 if piece in (0, 3, 5, 6) else ORIENTATION_TABLE_1247

def _check_range(cube: int) -> int:
    cube = int(cube)
    if not 0 <= cube < NUMBER_OF_CUBES:
        raise ValueError(f"{cube} is outside the cube encoding [0, 21**7)")
    return cube

def get_piece_states(cube: int) -> list[int]:
    """
    Splits a cube into the states of pieces 0-6.
    >>> get_piece_states(SOLVED_CUBE)
    [0, 5, 6, 9, 13, 15, 18]
    """
    cube = _check_range(cube)
    states = []
    for _ in range(NUMBER_OF_PIECES):
        cube, state = divmod(cube, STATES_PER_PIECE)
        states.append(state)
    return states

def from_piece_states(states: Iterable[int]) -> int:
    return sum(int(state) * int(power) for state, power in zip(states, POWERS))

def apply_move(cube: int, move: Union[Move, int]) -> int:
    """
    Performs a single quarter turn on a cube and returns the turned cube.
    Every piece state is remapped through the move's row of TURN_TABLE.

    The turn is only meaningful on cubes reachable from SOLVED_CUBE. Any
    other integer inside the encoding is remapped digit by digit all the
    same, giving an equally meaningless result; integers outside the
    encoding raise a ValueError.
    """
    cube = _check_range(cube)
    table = _TURN_LISTS[Move(move) - 1]
    output = 0
    for power in _POWERS_DESCENDING:
        state, cube = divmod(cube, power)
        output += table[state] * power
    return output

def apply_moves(cube: int, moves: Iterable[Union[Move, int]]) -> int:
    for move in moves:
        cube = apply_move(cube, move)
    return cube

def apply_move_many(cubes: np.ndarray, move: Union[Move, int]) -> np.ndarray:
    """ Vectorized apply_move over an array of cubes """
    cubes = np.asarray(cubes, dtype=np.int64)
    states = (cubes[..., np.newaxis] // POWERS) % STATES_PER_PIECE
    return (TURN_TABLE[Move(move) - 1][states] * POWERS).sum(axis=-1)

def decode(cube: int) -> Cube:
    """
    Converts the integer form of a cube into its sticker layout.
    """
    output = Cube(scramble=[np.full((2, 2), Color.WHITE) for _ in range(6)])
    matrix = output.get_matrix()
    for piece, state in enumerate(get_piece_states(cube)):
        color_classes = _orientation_table(piece)[state]
        for (face, row, col), color_class in zip(POSITION_CELLS[state // 3], color_classes):
            matrix[face.value][row, col] = PIECE_COLORS[piece][color_class]

    # the fixed piece never moves: red bottom, yellow back, blue right
    for (face, row, col), color in zip(POSITION_CELLS[FIXED_PIECE], PIECE_COLORS[FIXED_PIECE]):
        matrix[face.value][row, col] = color
    return output

def encode(cube: Cube) -> int:
    """
    Converts a sticker layout into the integer form of the cube.
    Throws an InvalidCubeException if:
        the fixed corner is not in place
        a corner is not one of the eight real pieces
        a piece appears more than once
        a piece's colors are in an order no turn can produce
    Does not check that the cube is reachable from solved, the state
    table does that.
    """
    matrix = cube.get_matrix()

    def colors_at(position: int) -> tuple[Color, Color, Color]:
        return tuple(matrix[face.value][row, col] for face, row, col in POSITION_CELLS[position])

    if colors_at(FIXED_PIECE) != PIECE_COLORS[FIXED_PIECE]:
        raise InvalidCubeException("The red-yellow-blue corner must be in the bottom-back-right.")

    states = [None] * NUMBER_OF_PIECES
    for position in range(NUMBER_OF_PIECES):
        colors = colors_at(position)
        piece = which_piece(colors)
        if piece is None or piece == FIXED_PIECE:
            raise InvalidCubeException(
                f"The corner in position {position} ({'-'.join(c.name.lower() for c in colors)}) is not a real piece."
            )
        if states[piece] is not None:
            raise InvalidCubeException(f"The {'-'.join(c.name.lower() for c in PIECE_COLORS[piece])} corner appears twice.")
        states[piece] = get_piece_state(piece, position, colors)
    return from_piece_states(states)

def which_piece(colors: Iterable[Color]) -> Optional[int]:
    """ Determines which piece has the given colors, None if no piece does """
    colors = set(colors)
    for piece, piece_colors in enumerate(PIECE_COLORS):
        if colors == set(piece_colors):
            return piece
    return None

def get_piece_state(piece: int, position: int, colors: Iterable[Color]) -> int:
    color_classes = [COLOR_CLASS[c] for c in colors]
    table = _orientation_table(piece)
    for state in range(position * 3, position * 3 + 3):
        if table[state].tolist() == color_classes:
            return state
    raise InvalidCubeException(f"The corner in position {position} is twisted into an impossible orientation.")

class Cube():

    """
    Stores the sticker layout of a 2x2 cube as a list of six 2x2 arrays,
    indexed by Face. It is laid out as the following net, with the
    red-yellow-blue corner held in the bottom-back-right:

                |00|01|
                |02|03|

        |04|05| |08|09| |12|13| |16|17|
        |06|07| |10|11| |14|15| |18|19|

                |20|21|
                |22|23|

    Top, left, front, right, back and bottom, each read row by row.
    The numbers are the indices used by the simple string format.
    Stickers 15, 18 and 23 always belong to the fixed corner.
    """

    COLOR_TO_STRING = {
        Color.YELLOW: 'y',
        Color.GREEN: 'g',
        Color.RED: 'r',
        Color.BLUE: 'b',
        Color.WHITE: 'w',
        Color.ORANGE: 'o'
    }

    STRING_TO_COLOR = {
        v: k for k, v in COLOR_TO_STRING.items()
    }

    @staticmethod
    def from_simple_string(cube_string: str) -> Cube:
        """
        Returns the cube represented in the following format,
        spaces are ignored:

        "oooo gggg wwww bbbb yyyy rrrr"

        Throws an InvalidCubeException describing the first problem found.
        """

        cube_string = cube_string.replace(" ", "")
        if (bad := re.search(r"[^orwygb]", cube_string)):
            raise InvalidCubeException(f"'{bad.group()}' is not a valid character.")
        if len(cube_string) > 24:
            raise InvalidCubeException("You entered too many colors!")
        if len(cube_string) < 24:
            raise InvalidCubeException("You did not completely enter the state of the cube!")
        if any(cube_string.count(c) != 4 for c in Cube.STRING_TO_COLOR):
            raise InvalidCubeException("You do not have the right amount of each color.")
        if (cube_string[15], cube_string[18], cube_string[23]) != ('b', 'y', 'r'):
            raise InvalidCubeException(
                "Your cube is not properly oriented. "
                "Remember to put the red-yellow-blue corner in the bottom-back-right."
            )

        c = 0
        cube_matrix = [np.full((2, 2), Color.WHITE) for _ in range(6)]
        for face in list(Face):
            for i in range(2):
                for j in range(2):
                    cube_matrix[face.value][i][j] = Cube.STRING_TO_COLOR[cube_string[c]]
                    c += 1

        output = Cube(scramble=cube_matrix)
        encode(output)  # throws if the corners are not real pieces
        return output

    @staticmethod
    def from_int(cube: int) -> Cube:
        return decode(cube)

    def __init__(self, scramble: Optional[list[np.ndarray]] = None):
        if scramble is None:
            self._cube = [
                np.full((2, 2), SOLVED_FACE_COLORS[face])
                for face in list(Face)
            ]
        else:
            self._cube = scramble

    def __str__(self):

        def get_ansii(color: Color) -> str:
            match color:
                case Color.ORANGE:
                    return Background.RGB((255, 165, 0))
                case other:
                    return getattr(Background, f"{other.name}_BRIGHT")

        output = "\n "
        for i in range(2):
            output += '  ' * 2
            for j in range(2):
                output += get_ansii(self._cube[Face.TOP.value][i, j]) + '  '
            output += f"{Background.RESET_BACKGROUND}\n "

        for i in range(2):
            for face in [Face.LEFT, Face.FRONT, Face.RIGHT, Face.BACK]:
                for j in range(2):
                    output += get_ansii(self._cube[face.value][i][j]) + '  '
            output += f"{Background.RESET_BACKGROUND}\n "

        for i in range(2):
            output += '  ' * 2
            for j in range(2):
                output += get_ansii(self._cube[Face.BOTTOM.value][i, j]) + '  '
            output += f"{Background.RESET_BACKGROUND}\n "

        return output

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cube):
            return NotImplemented
        return all(np.array_equal(a, b) for a, b in zip(self._cube, other._cube))

    def to_simple_string(self) -> str:
        output = ""
        for face in list(Face):
            for i in range(2):
                for j in range(2):
                    output += Cube.COLOR_TO_STRING[self._cube[face.value][i][j]]
        return output

    def to_int(self) -> int:
        return encode(self)

    def get_matrix(self):
        """ Returns the mutable array of the cube """
        return self._cube

    def is_solved(self) -> bool:
        return all(np.unique(face).shape == (1,) for face in self._cube)

    def parse(self, moves: str, output_movelist: Optional[list[Move]] = None):
        """
        Parses a list of moves given as a string with each move seperated by a space,
        such as "F U' L2", and turns the cube accordingly.
        """
        move_list = parse_moves(moves)
        self._cube = decode(apply_moves(encode(self), move_list)).get_matrix()
        if output_movelist is not None:
            output_movelist.extend(move_list)

    def scramble(self, print_scramble: bool = False, length: int = 25):
        moves = [random.choice(list(Move)) for _ in range(length)]
        if print_scramble:
            print(" ".join(m.notation for m in moves))
        self._cube = decode(apply_moves(encode(self), moves)).get_matrix()
        return moves
