import logging
import random
from enum import Enum

from game_logic import Move

logger = logging.getLogger(__name__)

LETTERS = ['S', 'O']

# Every compass direction; opposite directions are tested separately
DIRECTIONS = [(-1, -1), (-1, 0), (-1, 1),
              (0, -1),           (0, 1),
              (1, -1),  (1, 0),  (1, 1)]

COMPLETION_BONUS = 10


class PlayerKind(Enum):
    HUMAN = 'human'
    EASY = 'easy'
    MEDIUM = 'medium'
    HARD = 'hard'

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        return cls(str(value).strip().lower())


class HumanPlayer:
    """Moves come from outside (mouse, keyboard, console)."""
    kind = PlayerKind.HUMAN
    autonomous = False

    def choose_move(self, game):
        return None


class SOSBot:
    """
    Base class for the computer players.
    `game` is always a snapshot: bots read it and copy it, never change it.
    """
    kind = None
    autonomous = True

    def __init__(self, rng=None):
        self.rng = rng or random.Random()

    def choose_move(self, game):
        raise NotImplementedError

    def find_scoring_move(self, game):
        """First (cell, letter) in row-major order that completes an SOS."""
        for r, c in game.empty_cells():
            for letter in LETTERS:
                if game.would_form_sequence(r, c, letter):
                    return Move(r, c, letter)
        return None

    def find_random_move(self, game):
        empty_cells = game.empty_cells()
        if not empty_cells:
            return None
        r, c = self.rng.choice(empty_cells)
        letter = self.rng.choice(LETTERS)
        return Move(r, c, letter)


class EasyBot(SOSBot):
    kind = PlayerKind.EASY

    def choose_move(self, game):
        move = self.find_scoring_move(game)
        if move is not None:
            logger.debug("Easy: scoring move %s", move)
            return move
        return self.find_random_move(game)


class MediumBot(SOSBot):
    """
    Scores when it can, otherwise takes the cell the opponent would score
    with next turn. The block is attempted on every move.
    """
    kind = PlayerKind.MEDIUM

    def choose_move(self, game):
        move = self.find_scoring_move(game)
        if move is not None:
            logger.debug("%s: scoring move %s", self.kind.name.title(), move)
            return move

        move = self.find_blocking_move(game)
        if move is not None:
            logger.debug("%s: blocking move %s", self.kind.name.title(), move)
            return move

        return self.fallback_move(game)

    def find_blocking_move(self, game):
        opponent_view = game.copy()
        opponent_view.toggle_turn()
        return self.find_scoring_move(opponent_view)

    def fallback_move(self, game):
        return self.find_random_move(game)


class HardBot(MediumBot):
    """
    Like MediumBot, but instead of a random fallback every empty cell and
    letter is scored on a private copy of the game:
    COMPLETION_BONUS if the placement scores, plus one per direction whose
    cell and its opposite are both on the board with at least one still empty.
    """
    kind = PlayerKind.HARD

    def fallback_move(self, game):
        best_move = None
        best_score = None
        for r, c in game.empty_cells():
            for letter in LETTERS:
                score = self.evaluate_move(game, r, c, letter)
                if best_score is None or score > best_score:
                    best_score = score
                    best_move = Move(r, c, letter)
        if best_move is not None:
            logger.debug("Hard: strategic move %s (score %d)", best_move, best_score)
        return best_move

    def evaluate_move(self, game, row, col, letter):
        trial = game.copy()
        result = trial.apply(row, col, letter)
        score = COMPLETION_BONUS if result.sequences else 0
        return score + self.count_open_pairs(trial, row, col)

    @staticmethod
    def count_open_pairs(game, row, col):
        opportunities = 0
        board = game.board
        for dr, dc in DIRECTIONS:
            ahead = (row + dr, col + dc)
            behind = (row - dr, col - dc)
            if board.in_bounds(*ahead) and board.in_bounds(*behind):
                if board.is_empty(*ahead) or board.is_empty(*behind):
                    opportunities += 1
        return opportunities


PLAYER_CLASSES = {
    PlayerKind.HUMAN: HumanPlayer,
    PlayerKind.EASY: EasyBot,
    PlayerKind.MEDIUM: MediumBot,
    PlayerKind.HARD: HardBot,
}


def make_player(kind, rng=None):
    kind = PlayerKind.parse(kind)
    if kind is PlayerKind.HUMAN:
        return HumanPlayer()
    return PLAYER_CLASSES[kind](rng=rng)
