# sudoku_cnf.py
# Sudoku -> CNF. Four constraint families (cell, row, column, box) plus
# unit clauses for the givens, built on PySAT's CNF container.

import logging
from typing import IO, List, Optional

from pysat.card import CardEnc, EncType
from pysat.formula import CNF, IDPool

from sudoku_errors import InvalidGrid
from sudoku_vars import BOX, DIGITS, NUM_VARS, SIZE, box_cells, cell_vars, encode

log = logging.getLogger(__name__)

# ---------- encoding helpers ----------
_ENC_MAP = {
    "pairwise": EncType.pairwise,     # O(k^2) AMO, no aux vars
    "seq": EncType.seqcounter,        # sequential/ladder AMO, linear + aux vars
    "cardnet": EncType.cardnetwrk,    # sorting/cardinality networks, aux vars
}

ENCODINGS = tuple(_ENC_MAP)


def _at_most_one(cnf: CNF, lits: List[int], enc: int, pool: IDPool) -> None:
    if enc == EncType.pairwise:
        for i in range(len(lits)):
            for j in range(i + 1, len(lits)):
                cnf.append([-lits[i], -lits[j]])
    else:
        # aux ids come from the shared pool so they never reuse 1..729
        amo = CardEnc.atmost(lits=lits, bound=1, vpool=pool, encoding=enc)
        cnf.extend(amo.clauses)


def _exactly_one(cnf: CNF, lits: List[int], enc: int, pool: IDPool, minimal: bool) -> None:
    """sum(lits) == 1, or only sum(lits) <= 1 in the minimal profile."""
    if not minimal:
        cnf.append(lits[:])  # ALO
    _at_most_one(cnf, lits, enc, pool)


def validate_grid(grid: List[List[int]]) -> None:
    if not isinstance(grid, (list, tuple)) or len(grid) != SIZE:
        raise InvalidGrid(f"Expected {SIZE} rows")
    for r, row in enumerate(grid):
        if not isinstance(row, (list, tuple)) or len(row) != SIZE:
            raise InvalidGrid(f"Row {r} must have {SIZE} cells")
        for c, d in enumerate(row):
            if isinstance(d, bool) or not isinstance(d, int):
                raise InvalidGrid(f"Cell ({r},{c}) is not an integer: {d!r}")
            if not (0 <= d <= SIZE):
                raise InvalidGrid(f"Clue out of range at ({r},{c}): {d} (must be 1..{SIZE})")


def sudoku_cnf(grid: List[List[int]], encoding: str = "pairwise", minimal: bool = False) -> CNF:
    """
    Build the CNF for a 9x9 Sudoku plus its givens.
    grid: 9x9 ints, 0=blank, 1..9=clue
    encoding: 'pairwise' | 'seq' | 'cardnet' (at-most-one encoding)
    minimal: cell ALO + row/column/box AMO only (8829 clauses with
             'pairwise'); still sound and complete
    """
    if encoding not in _ENC_MAP:
        raise ValueError(f"Unknown encoding {encoding!r}; choose from {', '.join(ENCODINGS)}")
    validate_grid(grid)
    enc = _ENC_MAP[encoding]
    pool = IDPool(start_from=NUM_VARS + 1)

    cnf = CNF()

    # 1) each cell: exactly one digit (only ALO when minimal; the row AMO
    #    clauses then rule out a second digit by counting)
    for r in range(SIZE):
        for c in range(SIZE):
            lits = cell_vars(r, c)
            cnf.append(lits[:])
            if not minimal:
                _at_most_one(cnf, lits, enc, pool)

    # 2) for each row r and digit d, exactly one column c
    for r in range(SIZE):
        for d in DIGITS:
            lits = [encode(r, c, d) for c in range(SIZE)]
            _exactly_one(cnf, lits, enc, pool, minimal)

    # 3) for each column c and digit d, exactly one row r
    for c in range(SIZE):
        for d in DIGITS:
            lits = [encode(r, c, d) for r in range(SIZE)]
            _exactly_one(cnf, lits, enc, pool, minimal)

    # 4) for each 3x3 box and digit d, exactly one cell
    for br in range(BOX):
        for bc in range(BOX):
            cells = box_cells(br, bc)
            for d in DIGITS:
                lits = [encode(r, c, d) for r, c in cells]
                _exactly_one(cnf, lits, enc, pool, minimal)

    structural = len(cnf.clauses)

    # 5) givens
    for r in range(SIZE):
        for c in range(SIZE):
            d = grid[r][c]
            if d:
                cnf.append([encode(r, c, d)])

    # the formula always spans every primary variable
    cnf.nv = max(cnf.nv, NUM_VARS)
    log.debug("CNF (%s%s): %d vars, %d structural clauses, %d givens",
              encoding, ", minimal" if minimal else "", cnf.nv, structural,
              len(cnf.clauses) - structural)
    return cnf


def write_dimacs(cnf: CNF, fp: IO[str], comments: Optional[List[str]] = None) -> None:
    """Write the formula as DIMACS CNF ('p cnf <vars> <clauses>')."""
    cnf.to_fp(fp, comments=[f"c {line}" for line in (comments or [])])
