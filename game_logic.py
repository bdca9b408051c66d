import logging
from collections import namedtuple
from enum import Enum

import numpy as np

from config import MIN_BOARD_SIZE, MAX_BOARD_SIZE

logger = logging.getLogger(__name__)

EMPTY = 0
S = 1
O = 2

LETTER_CODES = {'S': S, 'O': O}
CODE_LETTERS = {S: 'S', O: 'O'}

# One direction per line through a cell: horizontal, vertical, both diagonals
AXES = [(0, 1), (1, 0), (1, 1), (1, -1)]


class SOSError(Exception):
    """Base class for errors raised by the SOS game."""


class InvalidBoardSize(SOSError, ValueError):
    def __init__(self, size):
        super().__init__(
            f"Board size must be between {MIN_BOARD_SIZE} and {MAX_BOARD_SIZE}, got {size!r}")
        self.size = size


class IllegalModeChange(SOSError):
    """Raised when the variant is changed on a finished match."""


class Color(Enum):
    BLUE = 'Blue'
    RED = 'Red'

    def opposite(self):
        return Color.RED if self is Color.BLUE else Color.BLUE

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().title())


class Variant(Enum):
    SIMPLE = 'simple'
    GENERAL = 'general'

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


Move = namedtuple('Move', ['row', 'col', 'letter'])
MoveResult = namedtuple('MoveResult', ['accepted', 'sequences'])


def validate_board_size(size):
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise InvalidBoardSize(size)
    if not MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE:
        raise InvalidBoardSize(size)
    return int(size)


class Board:
    """
    Fixed-size square grid of cells holding EMPTY, S or O.
    A filled cell is never overwritten.
    """

    def __init__(self, size):
        self.size = size
        self.cells = np.zeros((size, size), dtype=int)

    def in_bounds(self, row, col):
        return 0 <= row < self.size and 0 <= col < self.size

    def code_at(self, row, col):
        """Returns the numeric cell code, or None outside the board."""
        if not self.in_bounds(row, col):
            return None
        return int(self.cells[row, col])

    def get(self, row, col):
        """Returns 'S', 'O' or None for an empty (or out-of-range) cell."""
        return CODE_LETTERS.get(self.code_at(row, col))

    def is_empty(self, row, col):
        return self.code_at(row, col) == EMPTY

    def place(self, row, col, letter):
        """
        Writes a letter into an empty cell.
        Returns False (and leaves the board alone) for out-of-range or
        occupied cells and for anything that is not 'S' or 'O'.
        """
        code = LETTER_CODES.get(letter)
        if code is None or not self.is_empty(row, col):
            return False
        self.cells[row, col] = code
        return True

    def empty_cells(self):
        """Empty cells in row-major order."""
        return [(int(r), int(c)) for r, c in np.argwhere(self.cells == EMPTY)]

    def is_full(self):
        return bool(np.all(self.cells != EMPTY))

    def copy(self):
        board = Board(self.size)
        board.cells = np.copy(self.cells)
        return board

    def to_lists(self):
        return [[CODE_LETTERS.get(int(code), '') for code in row] for row in self.cells]

    def __repr__(self):
        rows = ['|'.join(cell or ' ' for cell in row) for row in self.to_lists()]
        return 'Board(\n  ' + '\n  '.join(rows) + '\n)'


def find_sequences(board, row, col, letter):
    """
    Returns the S-O-S lines completed by `letter` at (row, col).

    The cell itself is treated as holding `letter` and is never read, so the
    same call works for a letter that was just placed and for a hypothetical
    placement. Each line is an ordered triple of (row, col) coordinates.
    """
    sequences = []
    center = (row, col)

    if letter == 'O':
        # The new O is the middle of the line: one test per axis
        for dr, dc in AXES:
            before = (row - dr, col - dc)
            after = (row + dr, col + dc)
            if board.code_at(*before) == S and board.code_at(*after) == S:
                sequences.append((before, center, after))

    elif letter == 'S':
        # The new S is an end of the line, either orientation along each axis
        for dr, dc in AXES:
            middle = (row + dr, col + dc)
            far = (row + 2 * dr, col + 2 * dc)
            if board.code_at(*middle) == O and board.code_at(*far) == S:
                sequences.append((center, middle, far))

            middle = (row - dr, col - dc)
            far = (row - 2 * dr, col - 2 * dc)
            if board.code_at(*middle) == O and board.code_at(*far) == S:
                sequences.append((far, middle, center))

    return sequences


class SOSGame:
    def __init__(self, board_size=3, variant=Variant.SIMPLE):
        """
        Sets up an empty board, Blue to move, 0-0 scores, the terminal flag and the variant.
        Raises InvalidBoardSize for sizes outside the supported range.
        """
        self.board_size = validate_board_size(board_size)
        self.variant = Variant.parse(variant)
        self.reset()

    def reset(self):
        """
        Resets the game to its initial state: empty board, Blue to move, 0-0.
        """
        self._board = Board(self.board_size)
        self.turn = Color.BLUE
        self.scores = {Color.BLUE: 0, Color.RED: 0}
        self.terminal = False
        self.last_sequences = []

    @property
    def size(self):
        return self.board_size

    @property
    def board(self):
        """A copy of the board; the game keeps the only mutable one."""
        return self._board.copy()

    def cell(self, row, col):
        return self._board.get(row, col)

    def is_empty(self, row, col):
        return self._board.is_empty(row, col)

    def empty_cells(self):
        return self._board.empty_cells()

    def score(self, color):
        return self.scores[color]

    def set_variant(self, variant):
        if self.terminal:
            raise IllegalModeChange("Cannot change the game mode after the match has ended")
        self.variant = Variant.parse(variant)

    def apply(self, row, col, letter):
        """
        Places `letter` at (row, col) for the player whose turn it is.

        Returns a MoveResult. A rejected move (finished match, occupied or
        out-of-range cell, unknown letter) changes nothing.
        """
        if self.terminal:
            logger.debug("Rejected %s at (%s, %s): match is over", letter, row, col)
            return MoveResult(False, [])

        if not self._board.place(row, col, letter):
            logger.debug("Rejected %s at (%s, %s): cell unavailable", letter, row, col)
            return MoveResult(False, [])

        mover = self.turn
        sequences = find_sequences(self._board, row, col, letter)
        self.last_sequences = sequences

        if sequences:
            self.scores[mover] += len(sequences)
            if self.variant is Variant.SIMPLE:
                self.terminal = True
            # General mode: the scoring player keeps the turn
        else:
            self.turn = mover.opposite()

        if self._board.is_full():
            self.terminal = True

        logger.debug("%s placed %s at (%s, %s), %d sequence(s)",
                     mover.value, letter, row, col, len(sequences))
        return MoveResult(True, list(sequences))

    def would_form_sequence(self, row, col, letter):
        """
        True if placing `letter` at the empty cell (row, col) would complete
        at least one S-O-S. Never modifies the game.
        """
        if letter not in LETTER_CODES or not self._board.is_empty(row, col):
            return False
        return bool(find_sequences(self._board, row, col, letter))

    def toggle_turn(self):
        self.turn = self.turn.opposite()

    def copy(self):
        """Independent deep copy, used as a snapshot for lookahead."""
        game = SOSGame.__new__(SOSGame)
        game.board_size = self.board_size
        game.variant = self.variant
        game._board = self._board.copy()
        game.turn = self.turn
        game.scores = dict(self.scores)
        game.terminal = self.terminal
        game.last_sequences = list(self.last_sequences)
        return game

    def winner(self):
        """
        The color with the higher score once the match is over.
        None while in progress or on a draw.
        """
        if not self.terminal:
            return None
        blue, red = self.scores[Color.BLUE], self.scores[Color.RED]
        if blue == red:
            return None
        return Color.BLUE if blue > red else Color.RED

    def is_draw(self):
        return self.terminal and self.scores[Color.BLUE] == self.scores[Color.RED]

    def result_text(self):
        if not self.terminal:
            return "Game in progress"
        winner = self.winner()
        if winner is None:
            return "Draw"
        return f"{winner.value} wins"
