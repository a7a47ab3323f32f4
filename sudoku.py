#!/usr/bin/env python3
# sudoku.py
# Command-line front end: read a puzzle, solve it via SAT, print the grid.

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from sudoku_cnf import ENCODINGS, sudoku_cnf, write_dimacs
from sudoku_decode import Grid, NoSolution
from sudoku_errors import InvalidGrid, SudokuSatError
from sudoku_solve import SolveConfig, check_config, load_config, solve_with_config
from sudoku_vars import BOX, SIZE

log = logging.getLogger(__name__)

# 0/ . = blank
DEMO_PUZZLE = [
    "530070000",
    "600195000",
    "098000060",
    "800060003",
    "400803001",
    "700020006",
    "060000280",
    "000419005",
    "000080079",
]


# ---------- parsing/printing ----------
def parse_puzzle(lines: List[str]) -> Grid:
    """
    Accepts 9 rows of 9 symbols (digits, 0/. for blanks, spaces and
    '|' / '-' separators ignored) or a single 81-symbol line.
    """
    cells: List[int] = []
    for line in lines:
        for ch in line.strip():
            if ch in "0.":
                cells.append(0)
            elif ch.isdigit():
                cells.append(int(ch))
            elif ch in " |-+":
                continue
            else:
                raise InvalidGrid(f"Unexpected symbol {ch!r} in puzzle")
    if len(cells) != SIZE * SIZE:
        raise InvalidGrid(f"Expected {SIZE * SIZE} cells, got {len(cells)}")
    return [cells[r * SIZE:(r + 1) * SIZE] for r in range(SIZE)]


def format_grid(grid: Grid) -> str:
    lines = []
    for r in range(SIZE):
        if r % BOX == 0 and r != 0:
            lines.append("------+-------+------")
        row = []
        for c in range(SIZE):
            if c % BOX == 0 and c != 0:
                row.append("|")
            row.append(str(grid[r][c]) if grid[r][c] else ".")
        lines.append(" ".join(row))
    return "\n".join(lines)


def print_grid(grid: Grid) -> None:
    print(format_grid(grid))
    print()


# ---------- cli ----------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Solve a 9x9 Sudoku by reduction to SAT.")
    parser.add_argument("puzzle", nargs="?", type=Path,
                        help="puzzle file: 9 lines of 9 digits (0 or . = blank); demo puzzle if omitted")
    parser.add_argument("--config", type=Path, help="JSON file with solve options")
    parser.add_argument("--engine", help="pysat | z3 | dpll | a PySAT solver name (g3, cd15, m22, ...)")
    parser.add_argument("--encoding", choices=ENCODINGS, help="at-most-one encoding")
    parser.add_argument("--minimal", action="store_true", default=None,
                        help="cell ALO + row/column/box AMO only")
    parser.add_argument("--all", dest="all_solutions", action="store_true", default=None,
                        help="enumerate solutions instead of finding one")
    parser.add_argument("--max", dest="max_solutions", type=int, help="cap for --all")
    parser.add_argument("--dimacs", type=Path, help="write the CNF to this file ('-' = stdout) and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def _merge_config(args: argparse.Namespace) -> SolveConfig:
    config = load_config(args.config) if args.config else SolveConfig()
    for name in ("engine", "encoding", "minimal", "all_solutions", "max_solutions"):
        value = getattr(args, name)
        if value is not None:
            setattr(config, name, value)
    return check_config(config)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = _merge_config(args)
        if args.puzzle:
            log.info("Reading %s", args.puzzle)
            grid = parse_puzzle(args.puzzle.read_text().splitlines())
        else:
            grid = parse_puzzle(DEMO_PUZZLE)
    except (OSError, ValueError) as e:
        log.error("%s", e)
        return 2

    if args.dimacs:
        cnf = sudoku_cnf(grid, encoding=config.encoding, minimal=config.minimal)
        if str(args.dimacs) == "-":
            write_dimacs(cnf, sys.stdout)
            return 0
        try:
            with args.dimacs.open("w") as f:
                write_dimacs(cnf, f)
        except OSError as e:
            log.error("%s", e)
            return 2
        log.info("Wrote %d clauses to %s", len(cnf.clauses), args.dimacs)
        return 0

    print("Puzzle:")
    print_grid(grid)
    try:
        result = solve_with_config(grid, config)
    except SudokuSatError as e:
        log.error("%s", e)
        return 2

    if isinstance(result, NoSolution) or not result:
        print("UNSAT (no solution)")
        return 1
    if config.all_solutions:
        print("Num solutions:", len(result))
        for g in result:
            print_grid(g)
    else:
        print("Solved:")
        print_grid(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
