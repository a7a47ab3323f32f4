import os
import sys
import unittest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from sudoku_errors import InvalidCoordinate, InvalidSymbol, OutOfRange
from sudoku_vars import NUM_VARS, box_cells, cell_vars, decode, encode


class TestVariableMapping(unittest.TestCase):

    def test_corners(self):
        self.assertEqual(encode(0, 0, 1), 1)
        self.assertEqual(encode(8, 8, 9), 729)
        self.assertEqual(encode(1, 2, 3), 81 + 18 + 3)

    def test_round_trip_all_triples(self):
        for r in range(9):
            for c in range(9):
                for v in range(1, 10):
                    self.assertEqual(decode(encode(r, c, v)), (r, c, v))

    def test_round_trip_all_ids(self):
        for var_id in range(1, NUM_VARS + 1):
            self.assertEqual(encode(*decode(var_id)), var_id)

    def test_bijection_onto_range(self):
        ids = {encode(r, c, v) for r in range(9) for c in range(9) for v in range(1, 10)}
        self.assertEqual(ids, set(range(1, 730)))

    def test_invalid_coordinate(self):
        for r, c in [(-1, 0), (0, -1), (9, 0), (0, 9)]:
            with self.assertRaises(InvalidCoordinate):
                encode(r, c, 1)

    def test_invalid_symbol(self):
        for v in (0, 10, -3):
            with self.assertRaises(InvalidSymbol):
                encode(0, 0, v)

    def test_out_of_range(self):
        for var_id in (0, -1, 730):
            with self.assertRaises(OutOfRange):
                decode(var_id)

    def test_errors_are_value_errors(self):
        with self.assertRaises(ValueError):
            encode(0, 0, 11)

    def test_cell_vars(self):
        self.assertEqual(cell_vars(0, 1), list(range(10, 19)))

    def test_box_cells(self):
        cells = box_cells(1, 2)
        self.assertEqual(len(cells), 9)
        self.assertEqual(cells[0], (3, 6))
        self.assertEqual(cells[-1], (5, 8))


if __name__ == "__main__":
    unittest.main()
