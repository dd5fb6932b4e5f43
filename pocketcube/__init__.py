__version__ = "1.0.0"
__author__ = "Vivaan Singhvi"

from pocketcube.enums import Color, Face, Move
from pocketcube.cube import Cube, SOLVED_CUBE, apply_move, apply_moves, decode, encode
from pocketcube.state_table import StateTable, read_state_table, write_state_table
from pocketcube.builder import build_table
from pocketcube.solver import solve, solve_cube
