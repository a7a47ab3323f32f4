# sudoku_vars.py
# Variable mapping x_{r,c,d} <-> SAT variable id in 1..729.
# Rows and columns are 0-based (0..8), digits are 1..9.

from typing import List, Tuple

from sudoku_errors import InvalidCoordinate, InvalidSymbol, OutOfRange

SIZE = 9
BOX = 3
DIGITS = range(1, SIZE + 1)
NUM_VARS = SIZE * SIZE * SIZE  # 729


def encode(row: int, col: int, value: int) -> int:
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        raise InvalidCoordinate(f"Cell ({row},{col}) outside the 9x9 grid")
    if not (1 <= value <= SIZE):
        raise InvalidSymbol(f"Symbol {value} out of range 1..{SIZE}")
    return row * SIZE * SIZE + col * SIZE + value


def decode(var_id: int) -> Tuple[int, int, int]:
    if not (1 <= var_id <= NUM_VARS):
        raise OutOfRange(f"Variable id {var_id} out of range 1..{NUM_VARS}")
    v = var_id - 1
    return v // (SIZE * SIZE), (v % (SIZE * SIZE)) // SIZE, v % SIZE + 1


def cell_vars(row: int, col: int) -> List[int]:
    """The 9 ids saying 'cell (row,col) holds d', d = 1..9."""
    return [encode(row, col, d) for d in DIGITS]


def box_cells(box_row: int, box_col: int) -> List[Tuple[int, int]]:
    rows = range(BOX * box_row, BOX * box_row + BOX)
    cols = range(BOX * box_col, BOX * box_col + BOX)
    return [(r, c) for r in rows for c in cols]
