import io
import os
import sys
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sudoku_cnf import sudoku_cnf, validate_grid, write_dimacs
from sudoku_errors import InvalidGrid
from sudoku_vars import NUM_VARS, encode
from puzzles import PUZZLE, empty_grid, to_grid

STRUCTURAL = 4 * (81 + 2916)
MINIMAL = 81 + 3 * 2916


class TestSudokuCNF(unittest.TestCase):

    def setUp(self):
        self.grid = to_grid(PUZZLE)
        self.givens = sum(1 for row in self.grid for d in row if d)

    def test_empty_grid_size(self):
        cnf = sudoku_cnf(empty_grid())
        self.assertEqual(len(cnf.clauses), STRUCTURAL)
        self.assertEqual(cnf.nv, NUM_VARS)

    def test_clause_widths(self):
        cnf = sudoku_cnf(empty_grid())
        widths = [len(cl) for cl in cnf.clauses]
        self.assertEqual(widths.count(9), 4 * 81)
        self.assertEqual(widths.count(2), 4 * 2916)

    def test_givens_add_unit_clauses(self):
        cnf = sudoku_cnf(self.grid)
        self.assertEqual(self.givens, 30)
        self.assertEqual(len(cnf.clauses), STRUCTURAL + self.givens)
        units = [cl for cl in cnf.clauses if len(cl) == 1]
        self.assertEqual(len(units), self.givens)

    def test_clue_preservation(self):
        cnf = sudoku_cnf(self.grid)
        units = {cl[0] for cl in cnf.clauses if len(cl) == 1}
        self.assertIn(encode(0, 0, 5), units)
        for v in range(1, 10):
            if v != 5:
                self.assertNotIn(encode(0, 0, v), units)
        # empty cell (0,2) gets no unit clause
        for v in range(1, 10):
            self.assertNotIn(encode(0, 2, v), units)

    def test_deterministic(self):
        self.assertEqual(sudoku_cnf(self.grid).clauses, sudoku_cnf(self.grid).clauses)

    def test_row_amo_clause_present(self):
        clauses = {tuple(cl) for cl in sudoku_cnf(empty_grid()).clauses}
        self.assertIn((-encode(4, 0, 7), -encode(4, 8, 7)), clauses)
        self.assertIn((-encode(0, 3, 2), -encode(8, 3, 2)), clauses)
        self.assertIn((-encode(3, 3, 1), -encode(5, 5, 1)), clauses)

    def test_minimal_profile(self):
        cnf = sudoku_cnf(empty_grid(), minimal=True)
        self.assertEqual(len(cnf.clauses), MINIMAL)
        widths = [len(cl) for cl in cnf.clauses]
        self.assertEqual(widths.count(9), 81)

    def test_duplicate_clues_not_rejected(self):
        grid = empty_grid()
        grid[0][0] = 5
        grid[0][1] = 5
        cnf = sudoku_cnf(grid)
        self.assertEqual(len(cnf.clauses), STRUCTURAL + 2)

    def test_compact_encodings_use_fresh_aux_vars(self):
        for encoding in ("seq", "cardnet"):
            cnf = sudoku_cnf(self.grid, encoding=encoding)
            self.assertGreater(cnf.nv, NUM_VARS)
            # the only clauses touching nothing but primaries with width 9 are ALO clauses
            alo = [cl for cl in cnf.clauses if len(cl) == 9 and all(0 < l <= NUM_VARS for l in cl)]
            self.assertEqual(len(alo), 4 * 81)

    def test_unknown_encoding(self):
        with self.assertRaises(ValueError):
            sudoku_cnf(self.grid, encoding="ladder")

    def test_invalid_grids(self):
        bad = [
            [[0] * 9 for _ in range(8)],
            [[0] * 8 for _ in range(9)],
            [[0] * 9 for _ in range(8)] + [[0] * 8 + [10]],
            [[0] * 9 for _ in range(8)] + [[0] * 8 + [-1]],
            [[0] * 9 for _ in range(8)] + [[0] * 8 + ["5"]],
            "not a grid",
        ]
        for grid in bad:
            with self.assertRaises(InvalidGrid):
                sudoku_cnf(grid)

    def test_validate_grid_accepts_puzzle(self):
        validate_grid(self.grid)

    def test_write_dimacs(self):
        cnf = sudoku_cnf(self.grid)
        out = io.StringIO()
        write_dimacs(cnf, out, comments=["sudoku"])
        lines = out.getvalue().splitlines()
        self.assertEqual(lines[0], "c sudoku")
        self.assertEqual(lines[1], f"p cnf 729 {STRUCTURAL + self.givens}")
        self.assertTrue(all(line.endswith(" 0") for line in lines[2:]))
        self.assertEqual(len(lines), 2 + STRUCTURAL + self.givens)


if __name__ == "__main__":
    unittest.main()
