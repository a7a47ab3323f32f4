# sudoku_engines.py
# SAT engines behind one small interface: formula in, SAT/UNSAT + assignment out.
# PySAT (default), Z3, and a minimal pure-Python DPLL (unit propagation + backtracking).

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, List, Literal, Optional, Set, Tuple

from pysat.formula import CNF
from pysat.solvers import Solver as PySatSolver, SolverNames
from z3 import Bool, Not, Or, Solver as Z3Solver, is_true, sat

from sudoku_vars import NUM_VARS

log = logging.getLogger(__name__)

Assignment = Dict[int, bool]


@dataclass
class EngineResult:
    status: Literal["SAT", "UNSAT"]
    assignment: Optional[Assignment] = None
    elapsed: float = 0.0

    @property
    def satisfiable(self) -> bool:
        return self.status == "SAT"


class SatEngine(ABC):
    """
    The external SAT engine. Takes a formula, never mutates it, and returns
    either UNSAT or a complete assignment of every variable 1..cnf.nv.
    """

    name = "engine"

    def solve(self, cnf: CNF) -> EngineResult:
        start = time.perf_counter()
        assignment = self._solve(cnf)
        elapsed = time.perf_counter() - start
        status = "SAT" if assignment is not None else "UNSAT"
        log.info("%s: %s in %.1f ms (%d vars, %d clauses)",
                 self.name, status, elapsed * 1000, cnf.nv, len(cnf.clauses))
        return EngineResult(status=status, assignment=assignment, elapsed=elapsed)

    @abstractmethod
    def _solve(self, cnf: CNF) -> Optional[Assignment]:
        pass


def _num_vars(cnf: CNF) -> int:
    return max(cnf.nv, NUM_VARS)


# ----- PySAT
class PySatEngine(SatEngine):
    def __init__(self, solver_name: str = "g3") -> None:
        # any PySAT name: g3, g4, cd15, m22, lgl, ...
        self.solver_name = solver_name
        self.name = f"pysat:{solver_name}"

    def _solve(self, cnf: CNF) -> Optional[Assignment]:
        with PySatSolver(name=self.solver_name, bootstrap_with=cnf.clauses) as s:
            if not s.solve():
                return None
            model = s.get_model()
        assignment = {v: False for v in range(1, _num_vars(cnf) + 1)}
        for lit in model:
            assignment[abs(lit)] = lit > 0
        return assignment


# ----- Z3
class Z3Engine(SatEngine):
    name = "z3"

    def _solve(self, cnf: CNF) -> Optional[Assignment]:
        n = _num_vars(cnf)
        X = {v: Bool(f"x_{v}") for v in range(1, n + 1)}
        s = Z3Solver()
        for clause in cnf.clauses:
            lits = [X[l] if l > 0 else Not(X[-l]) for l in clause]
            s.add(lits[0] if len(lits) == 1 else Or(lits))
        if s.check() != sat:
            return None
        m = s.model()
        return {v: is_true(m.eval(X[v], model_completion=True)) for v in X}


# ----- Minimal DPLL
def _reduce(clauses: List[List[int]], lits: Set[int]) -> Optional[List[List[int]]]:
    new_clauses: List[List[int]] = []
    for clause in clauses:
        if any(l in lits for l in clause):
            continue
        new_clause = [l for l in clause if -l not in lits]
        if not new_clause:
            return None  # conflict
        new_clauses.append(new_clause)
    return new_clauses


def simplify(clauses: List[List[int]], lit: int) -> Optional[List[List[int]]]:
    """Assign literal 'lit' = True; return simplified clauses or None on conflict."""
    return _reduce(clauses, {lit})


def unit_propagate(clauses: List[List[int]], assignment: Assignment) -> Optional[Tuple[List[List[int]], Assignment]]:
    """Repeatedly apply unit propagation; return (simplified_clauses, assignment) or None on conflict."""
    while True:
        units = {cl[0] for cl in clauses if len(cl) == 1}
        if not units:
            return clauses, assignment
        for lit in units:
            if -lit in units:
                return None
            var, val = abs(lit), lit > 0
            if assignment.get(var, val) != val:
                return None
            assignment[var] = val
        # all units of one round are applied in a single pass
        clauses = _reduce(clauses, units)
        if clauses is None:
            return None


def choose_literal(clauses: List[List[int]]) -> int:
    """Branch on a positive literal of the shortest clause that has one (fewest candidates)."""
    positive = [cl for cl in clauses if any(l > 0 for l in cl)]
    clause = min(positive or clauses, key=len)
    return next((l for l in clause if l > 0), clause[0])


def dpll(clauses: List[List[int]], assignment: Assignment) -> Optional[Assignment]:
    up = unit_propagate(clauses, assignment)
    if up is None:
        return None
    clauses, assignment = up
    if not clauses:
        return assignment  # SAT

    lit = choose_literal(clauses)
    for lit_try in (lit, -lit):
        new_clauses = simplify(clauses, lit_try)
        if new_clauses is None:
            continue
        new_assignment = assignment.copy()
        new_assignment[abs(lit_try)] = lit_try > 0
        res = dpll(new_clauses, new_assignment)
        if res is not None:
            return res
    return None  # UNSAT


class DpllEngine(SatEngine):
    name = "dpll"

    def _solve(self, cnf: CNF) -> Optional[Assignment]:
        sol = dpll([list(cl) for cl in cnf.clauses], {})
        if sol is None:
            return None
        # variables left free by the search can take any value
        return {v: sol.get(v, False) for v in range(1, _num_vars(cnf) + 1)}


def pysat_solver_names() -> Set[str]:
    """Every name pysat.solvers.Solver accepts (g3, glucose3, cd15, m22, ...)."""
    return {n for names in vars(SolverNames).values()
            if isinstance(names, (tuple, list)) for n in names}


def make_engine(name: str = "pysat") -> SatEngine:
    """'pysat' | 'z3' | 'dpll' | any PySAT solver name ('g3', 'cd15', 'm22', ...)."""
    if name == "pysat":
        return PySatEngine()
    if name == "z3":
        return Z3Engine()
    if name == "dpll":
        return DpllEngine()
    if name not in pysat_solver_names():
        raise ValueError(f"Unknown engine {name!r}; use pysat, z3, dpll or a PySAT solver name")
    return PySatEngine(solver_name=name)
