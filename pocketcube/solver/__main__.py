import sys
import argparse
from time import perf_counter

from pocketcube.cube import Cube
from pocketcube.solver import solve_cube
from pocketcube.builder import build_table, build_table_sequential
from pocketcube.state_table import DEFAULT_TABLE_PATH, read_state_table, write_state_table
from pocketcube.utils import moves_to_string
from pocketcube.error import (
    CorruptTableException, InvalidCubeException, QueueOverflowException,
    SolutionTooLongException, UnsolvableCubeException
)

INTRO = """\
To enter the state of your cube, orient it so that the red-yellow-blue
corner is in the bottom-back-right, then type its colors
(o, r, w, y, g, b) in the order below. Spaces are optional.

             |00|01|
             |02|03|

     |04|05| |08|09| |12|13| |16|17|
     |06|07| |10|11| |14|15| |18|19|

             |20|21|
             |22|23|

  EXAMPLE: solved cube = "oooo gggg wwww bbbb yyyy rrrr"
  15, 18 and 23 are always b, y and r.
"""

REENTER_PROMPT = """\
Please re-enter the state of your cube.
  ____ ____ ____ ____ ____ ____"""

def parse_args(args=None):
    parser = argparse.ArgumentParser(prog="python -m pocketcube.solver", description="Optimal 2x2 cube solver")
    parser.add_argument("-t", "--table", help="path of the state table", default=DEFAULT_TABLE_PATH)
    parser.add_argument("-g", "--generate", help="build a new state table and write it to --table", action="store_true")
    parser.add_argument("--sequential", help="build the table one cube at a time (slow)", action="store_true")
    parser.add_argument("--verify", help="check that every cube in the table solves", action="store_true")
    parser.add_argument("-s", "--state", help="the colors of the cube to solve, as 24 letters", type=str)
    parser.add_argument("-c", "--custom-scramble", help="solve the cube left by your own scramble", type=str)
    parser.add_argument("-r", "--random-scramble", help="solve a randomly scrambled cube", action="store_true")
    parser.add_argument("-p", "--print-scramble", help="print the random scramble", action="store_true")
    parser.add_argument("--compact", help="merge repeated turns into half turns", action="store_true")
    parser.add_argument("-d", "--debug", help="print progress", action="store_true")
    return parser.parse_args(args)

def get_cube(args) -> Cube:
    if args.state:
        return Cube.from_simple_string(args.state)
    cube = Cube()
    if args.custom_scramble:
        cube.parse(args.custom_scramble)
    elif args.random_scramble:
        cube.scramble(args.print_scramble)
    else:
        print(INTRO)
        cube = read_cube()
    return cube

def read_cube() -> Cube:
    """ Asks for the colors of a cube until they describe a real one """
    while True:
        try:
            return Cube.from_simple_string(input("> "))
        except InvalidCubeException as e:
            print(e.message)
            print(REENTER_PROMPT)

def describe(e: OSError) -> str:
    return e.strerror or str(e)

def main(args=None) -> int:
    args = parse_args(args)
    try:
        if args.generate:
            table = (build_table_sequential if args.sequential else build_table)(debug=args.debug)
            try:
                write_state_table(table, args.table)
            except OSError as e:
                print(f"Could not write the state table to {args.table}: {describe(e)}", file=sys.stderr)
                return 1
            print(f"Wrote {len(table)} records to {args.table}")
            if not (args.verify or args.state or args.custom_scramble or args.random_scramble):
                return 0
        else:
            try:
                table = read_state_table(args.table)
            except OSError as e:
                print(f"Could not read the state table at {args.table}: {describe(e)}. Build one with --generate.", file=sys.stderr)
                return 1

        if args.verify:
            print(f"All cubes solve in at most {table.verify(debug=args.debug)} turns")
            if not (args.state or args.custom_scramble or args.random_scramble):
                return 0

        cube = get_cube(args)
        print(cube)
        start = perf_counter()
        moves = solve_cube(cube, table)
        if args.debug:
            print(f"Solved in {perf_counter() - start:.4f}s")
    except EOFError:
        print("No cube was entered.", file=sys.stderr)
        return 1
    except (InvalidCubeException, UnsolvableCubeException, CorruptTableException,
            SolutionTooLongException, QueueOverflowException) as e:
        print(e.message, file=sys.stderr)
        return 1
    except ValueError as e:
        print(e, file=sys.stderr)
        return 1

    if not moves:
        print("The cube is already solved.")
    else:
        print(f"{len(moves)} turns: {moves_to_string(moves, compact=args.compact)}")
    return 0

if __name__ == "__main__":
    sys.exit(main())
