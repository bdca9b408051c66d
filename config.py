"""
Default settings for the SOS game.

Everything here can be overridden from the command line (see main.py).
"""

MIN_BOARD_SIZE = 3
MAX_BOARD_SIZE = 12
DEFAULT_BOARD_SIZE = 3

DEFAULTS = {
    'board_size': DEFAULT_BOARD_SIZE,
    'mode': 'simple',         # 'simple' or 'general'
    'blue': 'human',          # human / easy / medium / hard
    'red': 'human',
    'bot_delay': 1.0,         # seconds before a computer move is shown
    'move_log': 'sos_moves.txt',
}

# Presentation
GAME_TITLE = 'SOS Game'
WINDOW_SIZE = 800
MARGIN = 60
LINE_THICKNESS = 3
PLAYER_COLORS = {
    'blue': (0, 183, 239),
    'red': (237, 28, 36),
}
GRID_COLOR = (200, 200, 200)
BACKGROUND_COLOR = (30, 30, 30)
