# sudoku_solve.py
# grid -> CNF -> SAT engine -> grid, plus solution enumeration with blocking clauses.

import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import List, Optional, Union

from pysat.solvers import Solver

from sudoku_cnf import ENCODINGS, sudoku_cnf
from sudoku_decode import Grid, NoSolution, assignment_from_model, decode_solution
from sudoku_engines import SatEngine, make_engine
from sudoku_vars import NUM_VARS

log = logging.getLogger(__name__)


@dataclass
class SolveConfig:
    engine: str = "pysat"
    encoding: str = "pairwise"
    minimal: bool = False
    all_solutions: bool = False
    max_solutions: Optional[int] = None


_FIELD_TYPES = {
    "engine": str,
    "encoding": str,
    "minimal": bool,
    "all_solutions": bool,
    "max_solutions": int,
}


def _check_max_solutions(max_solutions: Optional[int]) -> None:
    if max_solutions is not None and max_solutions < 1:
        raise ValueError("max_solutions must be >= 1")


def check_config(config: SolveConfig) -> SolveConfig:
    """Validate field types and values; raises ValueError."""
    for name, typ in _FIELD_TYPES.items():
        value = getattr(config, name)
        if name == "max_solutions" and value is None:
            continue
        # bool is an int subclass and never a valid max_solutions
        if not isinstance(value, typ) or (typ is int and isinstance(value, bool)):
            raise ValueError(f"Config field {name!r} must be {typ.__name__}, got {value!r}")
    if config.encoding not in ENCODINGS:
        raise ValueError(f"Unknown encoding {config.encoding!r}")
    _check_max_solutions(config.max_solutions)
    make_engine(config.engine)
    return config


def load_config(config_path: Path) -> SolveConfig:
    """Load a SolveConfig from a JSON file; absent keys keep their defaults."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with config_path.open() as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Config must be a JSON object, got {type(data).__name__}")
    known = {f.name for f in fields(SolveConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise ValueError(f"Unknown config field(s): {', '.join(unknown)}")
    return check_config(SolveConfig(**data))


def solve_sudoku(
    grid: Grid,
    engine: Optional[SatEngine] = None,
    *,
    encoding: str = "pairwise",
    minimal: bool = False,
) -> Union[Grid, NoSolution]:
    """
    Solve a 9x9 Sudoku via SAT.
    - grid: 9x9 ints, 0=blank, 1..9=clue
    - engine: any SatEngine (default: PySAT Glucose 3)
    Returns the solved grid, or NoSolution if the givens are contradictory.
    """
    if engine is None:
        engine = make_engine("pysat")
    cnf = sudoku_cnf(grid, encoding=encoding, minimal=minimal)
    result = engine.solve(cnf)
    return decode_solution(result.assignment if result.satisfiable else None)


def enumerate_solutions(
    grid: Grid,
    *,
    max_solutions: Optional[int] = None,
    encoding: str = "pairwise",
    solver_name: str = "g3",
) -> List[Grid]:
    """
    All solutions (or up to max_solutions) of a puzzle, using an incremental
    PySAT solver. Returns an empty list if the puzzle is unsatisfiable.
    """
    _check_max_solutions(max_solutions)
    cnf = sudoku_cnf(grid, encoding=encoding)
    solutions: List[Grid] = []
    with Solver(name=solver_name, bootstrap_with=cnf.clauses) as s:
        while s.solve():
            assignment = assignment_from_model(s.get_model())
            solutions.append(decode_solution(assignment))

            # block only the primary true literals; aux vars may differ
            # between models of the same grid
            model_pos = [v for v in range(1, NUM_VARS + 1) if assignment[v]]
            s.add_clause([-v for v in model_pos])

            if max_solutions is not None and len(solutions) >= max_solutions:
                break
    log.info("Found %d solution(s)", len(solutions))
    return solutions


def solve_with_config(grid: Grid, config: SolveConfig) -> Union[Grid, NoSolution, List[Grid]]:
    if config.all_solutions:
        return enumerate_solutions(grid, max_solutions=config.max_solutions, encoding=config.encoding)
    return solve_sudoku(grid, make_engine(config.engine), encoding=config.encoding, minimal=config.minimal)
