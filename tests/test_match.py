import random

import pytest

from bots import PlayerKind
from game_logic import Color, IllegalModeChange, InvalidBoardSize, Variant
from match import Match


@pytest.fixture
def match():
    return Match(3, Variant.GENERAL, rng=random.Random(42))


def test_start_match_defaults_to_humans(match):
    assert match.strategy_kind(Color.BLUE) is PlayerKind.HUMAN
    assert match.strategy_kind(Color.RED) is PlayerKind.HUMAN
    assert match.board == [[''] * 3 for _ in range(3)]
    assert match.scores == {Color.BLUE: 0, Color.RED: 0}
    assert match.turn is Color.BLUE
    assert not match.terminal


@pytest.mark.parametrize("size", [2, 13])
def test_start_match_rejects_bad_size_and_keeps_current_game(match, size):
    match.submit(0, 0, 'S')

    with pytest.raises(InvalidBoardSize):
        match.start_match(size, Variant.SIMPLE)

    assert match.board_size == 3
    assert match.board[0][0] == 'S'


def test_start_match_resets_players(match):
    match.set_strategy(Color.RED, PlayerKind.HARD)
    match.start_match(6, Variant.SIMPLE)
    assert match.board_size == 6
    assert match.variant is Variant.SIMPLE
    assert match.strategy_kind(Color.RED) is PlayerKind.HUMAN


def test_step_idles_for_human(match):
    assert match.step() is None
    assert match.board == [[''] * 3 for _ in range(3)]


def test_step_plays_computer_move(match):
    match.set_strategy(Color.BLUE, "hard")

    result = match.step()

    assert result.accepted
    assert match.board[1][1] == 'S'
    assert match.turn is Color.RED
    assert match.step() is None


def test_set_strategy_keeps_board(match):
    match.submit(0, 0, 'S')
    match.set_strategy(Color.RED, PlayerKind.EASY)
    assert match.board[0][0] == 'S'
    assert match.is_autonomous_turn()


def test_submit_rejected_on_computer_turn(match):
    match.set_strategy(Color.BLUE, PlayerKind.MEDIUM)
    result = match.submit(0, 0, 'S')
    assert not result.accepted
    assert match.board[0][0] == ''


def test_submit_rejects_occupied_cell(match):
    assert match.submit(1, 1, 'S').accepted
    assert not match.submit(1, 1, 'O').accepted
    assert match.turn is Color.RED
    assert len(match.moves) == 1


@pytest.mark.parametrize("variant", [Variant.SIMPLE, Variant.GENERAL])
@pytest.mark.parametrize("blue, red", [
    (PlayerKind.EASY, PlayerKind.EASY),
    (PlayerKind.MEDIUM, PlayerKind.EASY),
    (PlayerKind.HARD, PlayerKind.MEDIUM),
    (PlayerKind.HARD, PlayerKind.HARD),
])
@pytest.mark.parametrize("size", [3, 5])
def test_computer_vs_computer_finishes(variant, blue, red, size):
    match = Match(size, variant, rng=random.Random(size))
    match.set_strategy(Color.BLUE, blue)
    match.set_strategy(Color.RED, red)

    results = match.play_autonomous()

    assert match.terminal
    assert all(result.accepted for result in results)
    if variant is Variant.GENERAL:
        assert all(cell for row in match.board for cell in row)
    else:
        full = all(cell for row in match.board for cell in row)
        assert full or results[-1].sequences


def test_play_autonomous_stops_for_human(match):
    match.set_strategy(Color.BLUE, PlayerKind.EASY)
    results = match.play_autonomous()
    assert len(results) >= 1
    assert match.turn is Color.RED
    assert not match.is_autonomous_turn()


def test_play_autonomous_max_moves(match):
    match.set_strategy(Color.BLUE, PlayerKind.EASY)
    match.set_strategy(Color.RED, PlayerKind.EASY)
    assert len(match.play_autonomous(max_moves=2)) == 2
    assert len(match.moves) == 2


def test_set_variant_after_terminal_rejected():
    match = Match(3, Variant.SIMPLE)
    for move in [(0, 0, 'S'), (1, 0, 'O'), (2, 0, 'S')]:
        match.submit(*move)
    assert match.terminal
    assert match.last_sequences == [((0, 0), (1, 0), (2, 0))]
    assert match.winner() is Color.BLUE

    with pytest.raises(IllegalModeChange):
        match.set_variant(Variant.GENERAL)
    assert match.step() is None


def test_snapshots_are_copies(match):
    match.submit(0, 0, 'S')
    board = match.board
    board[1][1] = 'O'
    scores = match.scores
    scores[Color.BLUE] = 99

    assert match.board[1][1] == ''
    assert match.scores[Color.BLUE] == 0


def test_reset_keeps_players(match):
    match.set_strategy(Color.RED, PlayerKind.EASY)
    match.submit(0, 0, 'S')
    match.step()

    match.reset()

    assert match.moves == []
    assert match.board == [[''] * 3 for _ in range(3)]
    assert match.strategy_kind(Color.RED) is PlayerKind.EASY


def test_moves_are_recorded(match):
    match.set_strategy(Color.RED, PlayerKind.HARD)
    match.submit(0, 0, 'S')
    match.step()

    first, second = match.moves
    assert (first.row, first.col, first.color, first.letter, first.mover) == (0, 0, Color.BLUE, 'S', 'Player')
    assert second.color is Color.RED
    assert second.mover == 'AI'


def test_save_and_replay(tmp_path):
    path = tmp_path / "moves.txt"
    match = Match(5, Variant.GENERAL, rng=random.Random(3))
    match.set_strategy(Color.BLUE, PlayerKind.EASY)
    match.set_strategy(Color.RED, PlayerKind.MEDIUM)
    match.play_autonomous()
    match.save_moves(path)

    replay = Match(5, Variant.GENERAL)
    replayed = replay.replay_moves(path)

    assert len(replayed) == 25
    assert replay.board == match.board
    assert replay.scores == match.scores
    assert replay.terminal
    assert replay.result_text() == match.result_text()
    assert replay.moves == match.moves


def test_replay_resets_first(tmp_path):
    path = tmp_path / "moves.txt"
    path.write_text("0,0,Blue,S,Player\n1,0,Red,O,Player\n")
    match = Match(3, Variant.SIMPLE)
    match.submit(2, 2, 'O')

    match.replay_moves(path)

    assert match.board == [['S', '', ''], ['O', '', ''], ['', '', '']]
    assert match.turn is Color.BLUE


@pytest.mark.parametrize("color", ["blue", " Blue ", Color.BLUE])
def test_set_strategy_accepts_color_names(match, color):
    match.set_strategy(color, "easy")
    assert match.strategy_kind(Color.BLUE) is PlayerKind.EASY
    assert set(match.players) == {Color.BLUE, Color.RED}


@pytest.mark.parametrize("color, kind", [("green", "easy"), (5, "easy"), (Color.RED, "expert")])
def test_set_strategy_rejects_bad_input_without_changes(match, color, kind):
    with pytest.raises(ValueError):
        match.set_strategy(color, kind)
    assert set(match.players) == {Color.BLUE, Color.RED}
    assert match.strategy_kind(Color.RED) is PlayerKind.HUMAN


def test_step_after_end_commits_nothing():
    match = Match(3, Variant.SIMPLE)
    match.set_strategy(Color.RED, PlayerKind.HARD)
    match.submit(0, 0, 'S')
    match.step()
    match.submit(0, 1, 'O')
    match.step()
    assert match.terminal
    assert match.winner() is Color.RED
    assert match.last_sequences == [((0, 0), (0, 1), (0, 2))]
    moves = match.moves

    assert match.step() is None
    assert match.last_sequences == [((0, 0), (0, 1), (0, 2))]
    assert match.moves == moves
