from __future__ import annotations
from enum import Enum, IntEnum

class Face(Enum):
    """ 
    Enums for faces, representing the different sides of the cube.
    These numbers must be as they are, the simple string format and
    the net printed by Cube.__str__ both depend on the order.
    """
    TOP = 0
    LEFT = 1
    FRONT = 2
    RIGHT = 3
    BACK = 4
    BOTTOM = 5

    def __lt__(self, other: Face):
        return self.value < other.value

class Color(Enum):
    """ 
    Enums for colors. The solved cube, held with the red-yellow-blue
    corner in the bottom-back-right, has orange on top, green on the
    left, white in front, blue on the right, yellow in back and red
    on the bottom.
    """
    ORANGE = 0
    GREEN = 1
    WHITE = 2
    BLUE = 3
    YELLOW = 4
    RED = 5

    def __lt__(self, other: Color):
        return self.value < other.value

class Move(IntEnum):
    """
    The six quarter turns that leave the bottom-back-right corner in place.
    The values are the codes written to the state table, so they must
    not change. Code 0 is reserved and never names a move.
    """
    FRONT_CW = 1
    FRONT_CCW = 2
    LEFT_CW = 3
    LEFT_CCW = 4
    TOP_CW = 5
    TOP_CCW = 6

    @property
    def inverse(self) -> Move:
        """ The move that undoes this one (F <-> F', L <-> L', U <-> U') """
        return Move(((self.value - 1) ^ 1) + 1)

    @property
    def notation(self) -> str:
        letter = "FLU"[(self.value - 1) // 2]
        return letter if self.value % 2 else f"{letter}'"

    @staticmethod
    def from_notation(move: str) -> Move:
        """
        >>> Move.from_notation("U'")
        <Move.TOP_CCW: 6>
        """
        for m in Move:
            if m.notation == move:
                return m
        raise ValueError(f"'{move}' is not one of the six quarter turns")

    def __str__(self) -> str:
        return self.notation
