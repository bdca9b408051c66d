import argparse
import logging
import random
import sys
import time

from config import DEFAULTS, MIN_BOARD_SIZE, MAX_BOARD_SIZE
from game_logic import Color, InvalidBoardSize
from bots import PlayerKind
from match import Match
from move_log import MoveLogError

KINDS = [kind.value for kind in PlayerKind]


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description='SOS game')
    parser.add_argument('--size', type=int, default=DEFAULTS['board_size'],
                        help=f'Board size ({MIN_BOARD_SIZE}-{MAX_BOARD_SIZE})')
    parser.add_argument('--mode', choices=['simple', 'general'], default=DEFAULTS['mode'])
    parser.add_argument('--blue', choices=KINDS, default=DEFAULTS['blue'])
    parser.add_argument('--red', choices=KINDS, default=DEFAULTS['red'])
    parser.add_argument('--console', action='store_true', help='Play in the terminal instead of a window')
    parser.add_argument('--save', metavar='PATH', help='Write the move log here when the game ends')
    parser.add_argument('--replay', metavar='PATH', help='Replay a saved move log and print the result')
    parser.add_argument('--seed', type=int, help='Seed for the computer players')
    parser.add_argument('--delay', type=float, default=DEFAULTS['bot_delay'],
                        help='Seconds before a computer move is played')
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser.parse_args(argv)


def print_board(match):
    board = match.board
    n = len(board)
    print('\n   ' + ' '.join(f'{c:>2}' for c in range(n)))
    for r, row in enumerate(board):
        print(f'{r:>2} ' + ' '.join(f'{cell or ".":>2}' for cell in row))
    scores = match.scores
    print(f"Blue: {scores[Color.BLUE]} | Red: {scores[Color.RED]}")


def read_move(match):
    """Reads 'row col letter' from stdin until a legal move is given."""
    while True:
        try:
            text = input(f"{match.turn.value} move (row col S/O): ")
        except EOFError:
            return None
        parts = text.split()
        if len(parts) == 3 and parts[0].isdigit() and parts[1].isdigit():
            result = match.submit(int(parts[0]), int(parts[1]), parts[2].upper())
            if result.accepted:
                return result
        print("Invalid move, try again.")


def play_console(match, delay):
    print_board(match)
    while not match.terminal:
        if match.is_autonomous_turn():
            if delay:
                time.sleep(delay)
            result = match.step()
            if result is None:
                break
            move = match.moves[-1]
            print(f"{move.color.value} ({match.strategy_kind(move.color).value}) "
                  f"plays {move.letter} at ({move.row}, {move.col})")
        else:
            result = read_move(match)
            if result is None:
                print("\nInput closed, stopping.")
                return
        if result.sequences:
            print("SOS!", ', '.join(str(list(seq)) for seq in result.sequences))
        print_board(match)
    print("Game Over!", match.result_text())


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s %(name)s: %(message)s')

    rng = random.Random(args.seed) if args.seed is not None else None
    try:
        match = Match(args.size, args.mode, rng=rng)
    except InvalidBoardSize as e:
        print(e, file=sys.stderr)
        return 2

    if args.replay:
        try:
            replayed = match.replay_moves(args.replay)
        except (OSError, MoveLogError) as e:
            print(f"Cannot replay {args.replay}: {e}", file=sys.stderr)
            return 2
        print(f"Replayed {len(replayed)} moves from {args.replay}")
        print_board(match)
        print(match.result_text())
        return 0

    match.set_strategy(Color.BLUE, args.blue)
    match.set_strategy(Color.RED, args.red)

    if args.console:
        play_console(match, args.delay)
        if args.save and match.terminal:
            match.save_moves(args.save)
    else:
        import sos
        sos.run(match, bot_delay=args.delay, save_path=args.save)
    return 0


if __name__ == "__main__":
    sys.exit(main())
