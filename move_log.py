"""
Plain-text move log.

One line per move: ``row,col,color,letter,mover`` where color is Blue/Red and
mover is AI or Player. Saving overwrites the file.
"""

import logging
from collections import namedtuple

from game_logic import SOSError, Color, LETTER_CODES

logger = logging.getLogger(__name__)

LogEntry = namedtuple('LogEntry', ['row', 'col', 'color', 'letter', 'mover'])

MOVERS = ('AI', 'Player')


class MoveLogError(SOSError, ValueError):
    """A line of the move log could not be parsed."""


def format_entry(entry):
    return f"{entry.row},{entry.col},{entry.color.value},{entry.letter},{entry.mover}"


def parse_line(line):
    fields = [field.strip() for field in line.strip().split(',')]
    if len(fields) != 5:
        raise MoveLogError(f"Expected 5 fields, got {len(fields)}: {line!r}")

    row, col, color, letter, mover = fields
    try:
        row, col = int(row), int(col)
        color = Color(color)
    except ValueError as e:
        raise MoveLogError(f"Malformed move {line!r}: {e}") from e
    if letter not in LETTER_CODES:
        raise MoveLogError(f"Unknown letter {letter!r} in {line!r}")
    if mover not in MOVERS:
        raise MoveLogError(f"Unknown mover {mover!r} in {line!r}")
    return LogEntry(row, col, color, letter, mover)


class MoveRecorder:
    def __init__(self):
        self.entries = []

    def record(self, row, col, color, letter, is_ai):
        entry = LogEntry(row, col, color, letter, 'AI' if is_ai else 'Player')
        self.entries.append(entry)
        return entry

    def clear(self):
        self.entries = []

    def save(self, path):
        with open(path, 'w') as f:
            for entry in self.entries:
                f.write(format_entry(entry) + '\n')
        logger.info("Saved %d moves to %s", len(self.entries), path)

    @staticmethod
    def load(path):
        entries = []
        with open(path, 'r') as f:
            for line in f:
                if not line.strip():
                    continue
                entries.append(parse_line(line))
        logger.info("Loaded %d moves from %s", len(entries), path)
        return entries
