import logging

from config import DEFAULT_BOARD_SIZE
from game_logic import SOSGame, Color, Variant, MoveResult, validate_board_size
from bots import PlayerKind, make_player
from move_log import MoveRecorder

logger = logging.getLogger(__name__)


class Match:
    """
    Drives one match: owns the game and a player per color, asks computer
    players for their moves and commits every move through SOSGame.apply.

    Callers only ever see copies of the game state.
    """

    def __init__(self, board_size=DEFAULT_BOARD_SIZE, variant=Variant.SIMPLE, rng=None):
        self.rng = rng
        self.recorder = MoveRecorder()
        self.game = None
        self.players = {}
        self.start_match(board_size, variant)

    def start_match(self, board_size, variant):
        """
        Starts a fresh match with both colors human.
        An invalid size raises InvalidBoardSize and leaves the current match as it was.
        """
        board_size = validate_board_size(board_size)
        self.game = SOSGame(board_size, variant)
        self.players = {Color.BLUE: make_player(PlayerKind.HUMAN),
                        Color.RED: make_player(PlayerKind.HUMAN)}
        self.recorder.clear()
        logger.info("New %s match on a %dx%d board", self.game.variant.value, board_size, board_size)
        return self.game.copy()

    def reset(self):
        """Same size, mode and players, empty board."""
        self.game.reset()
        self.recorder.clear()

    def set_strategy(self, color, kind):
        """Raises ValueError for an unknown color or kind; nothing changes then."""
        color = Color.parse(color)
        player = make_player(kind, rng=self.rng)
        self.players[color] = player
        logger.info("%s is now played by %s", color.value, player.kind.value)

    def strategy_kind(self, color):
        return self.players[Color.parse(color)].kind

    def set_variant(self, variant):
        self.game.set_variant(variant)

    def is_autonomous_turn(self):
        return not self.game.terminal and self.players[self.game.turn].autonomous

    def submit(self, row, col, letter):
        """A move from a human player for the color to move."""
        if self.players[self.game.turn].autonomous:
            logger.debug("Ignoring submitted move: %s is a computer player", self.game.turn.value)
            return MoveResult(False, [])
        return self._commit(row, col, letter, is_ai=False)

    def step(self):
        """
        Lets the computer play one move if it is its turn.
        Returns the MoveResult, or None while waiting for a human or after the end.
        """
        if self.game.terminal:
            return None
        player = self.players[self.game.turn]
        if not player.autonomous:
            return None

        move = player.choose_move(self.game.copy())
        if move is None:
            return None
        return self._commit(move.row, move.col, move.letter, is_ai=True)

    def play_autonomous(self, max_moves=None):
        """Runs step() until a human is to move or the match is over."""
        results = []
        while self.is_autonomous_turn():
            if max_moves is not None and len(results) >= max_moves:
                break
            result = self.step()
            if result is None or not result.accepted:
                break
            results.append(result)
        return results

    def _commit(self, row, col, letter, is_ai):
        mover = self.game.turn
        result = self.game.apply(row, col, letter)
        if result.accepted:
            self.recorder.record(row, col, mover, letter, is_ai)
            if self.game.terminal:
                logger.info("Match over: %s (Blue %d - Red %d)", self.game.result_text(),
                            self.game.scores[Color.BLUE], self.game.scores[Color.RED])
        return result

    def save_moves(self, path):
        self.recorder.save(path)

    def replay_moves(self, path):
        """
        Resets the match and re-plays a saved move log in order.
        Returns the log entries that were applied.
        """
        entries = MoveRecorder.load(path)
        self.reset()
        replayed = []
        for entry in entries:
            if entry.color is not self.game.turn:
                logger.warning("Move log has %s moving on %s's turn", entry.color.value, self.game.turn.value)
            result = self._commit(entry.row, entry.col, entry.letter, is_ai=entry.mover == 'AI')
            if not result.accepted:
                logger.warning("Skipping rejected move from log: %s", entry)
                continue
            replayed.append(entry)
        return replayed

    # Read-only views for the presentation layer

    @property
    def board_size(self):
        return self.game.size

    @property
    def board(self):
        return self.game.board.to_lists()

    @property
    def scores(self):
        return dict(self.game.scores)

    @property
    def turn(self):
        return self.game.turn

    @property
    def variant(self):
        return self.game.variant

    @property
    def terminal(self):
        return self.game.terminal

    @property
    def last_sequences(self):
        return list(self.game.last_sequences)

    @property
    def moves(self):
        return list(self.recorder.entries)

    def winner(self):
        return self.game.winner()

    def result_text(self):
        return self.game.result_text()
