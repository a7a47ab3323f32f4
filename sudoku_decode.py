# sudoku_decode.py
# Satisfying assignment -> solved 9x9 grid, with defensive checks on the engine's output.

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional, Union

from sudoku_errors import IncompleteAssignment, MalformedAssignment
from sudoku_vars import BOX, NUM_VARS, SIZE, box_cells, cell_vars, decode

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoSolution:
    """The puzzle as given is unsatisfiable. A result, not an error."""
    reason: str = "unsatisfiable"

    def __bool__(self) -> bool:
        return False


Grid = List[List[int]]


def assignment_from_model(model: Iterable[int]) -> Dict[int, bool]:
    """DIMACS/PySAT model (signed ints) -> {var_id: bool}."""
    return {abs(l): l > 0 for l in model if l != 0}


def decode_solution(assignment: Optional[Mapping[int, bool]]) -> Union[Grid, NoSolution]:
    """
    Turn a satisfying assignment into a 9x9 grid.
    assignment=None means the engine reported UNSAT.
    Ids above 729 (auxiliary variables of compact encodings) are ignored.
    """
    if assignment is None:
        return NoSolution()

    missing = [v for v in range(1, NUM_VARS + 1) if v not in assignment]
    if missing:
        raise IncompleteAssignment(
            f"{len(missing)} of {NUM_VARS} variables unassigned (first: {missing[0]})")

    out = [[0] * SIZE for _ in range(SIZE)]
    for r in range(SIZE):
        for c in range(SIZE):
            true_vars = [v for v in cell_vars(r, c) if assignment[v]]
            if len(true_vars) != 1:
                digits = [decode(v)[2] for v in true_vars]
                raise MalformedAssignment(
                    f"Cell ({r},{c}) has {len(true_vars)} true digits: {digits}")
            out[r][c] = decode(true_vars[0])[2]
    return out


def _is_permutation(values: List[int]) -> bool:
    return sorted(values) == list(range(1, SIZE + 1))


def is_valid_solution(solution: Grid, grid: Optional[Grid] = None) -> bool:
    """Every row, column and box is a permutation of 1..9; givens (if any) are kept."""
    if len(solution) != SIZE or any(len(row) != SIZE for row in solution):
        return False
    for r in range(SIZE):
        if not _is_permutation(solution[r]):
            return False
    for c in range(SIZE):
        if not _is_permutation([solution[r][c] for r in range(SIZE)]):
            return False
    for br in range(BOX):
        for bc in range(BOX):
            if not _is_permutation([solution[r][c] for r, c in box_cells(br, bc)]):
                return False
    if grid is not None:
        for r in range(SIZE):
            for c in range(SIZE):
                if grid[r][c] and grid[r][c] != solution[r][c]:
                    log.debug("Given at (%d,%d) changed: %d -> %d",
                              r, c, grid[r][c], solution[r][c])
                    return False
    return True
