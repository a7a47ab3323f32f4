# sudoku_errors.py
# Exceptions raised by the Sudoku <-> SAT encoding layer.


class SudokuSatError(Exception):
    """Base class for every error raised by this package."""


# ----- Variable mapper
class InvalidCoordinate(SudokuSatError, ValueError):
    pass


class InvalidSymbol(SudokuSatError, ValueError):
    pass


class OutOfRange(SudokuSatError, ValueError):
    pass


# ----- Clause generator
class InvalidGrid(SudokuSatError, ValueError):
    """Grid has the wrong shape, a non-integer entry, or a clue outside 1..9."""


# ----- Solution decoder
class AssignmentError(SudokuSatError):
    pass


class IncompleteAssignment(AssignmentError):
    """Some primary variable in 1..729 has no truth value."""


class MalformedAssignment(AssignmentError):
    """Some cell has zero or several true variables."""
