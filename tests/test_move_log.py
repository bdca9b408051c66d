import pytest

from game_logic import Color
from move_log import LogEntry, MoveLogError, MoveRecorder, format_entry, parse_line


def test_format_entry():
    entry = LogEntry(2, 11, Color.RED, 'O', 'AI')
    assert format_entry(entry) == "2,11,Red,O,AI"


def test_parse_line():
    assert parse_line("3,4,Blue,S,Player\n") == LogEntry(3, 4, Color.BLUE, 'S', 'Player')
    assert parse_line(" 0, 1 ,Red,O,AI") == LogEntry(0, 1, Color.RED, 'O', 'AI')


@pytest.mark.parametrize("line", [
    "",
    "1,2,Blue,S",
    "1,2,Blue,S,Player,extra",
    "a,2,Blue,S,Player",
    "1,2,Green,S,Player",
    "1,2,Blue,X,Player",
    "1,2,Blue,S,Robot",
])
def test_parse_line_rejects_malformed(line):
    with pytest.raises(MoveLogError):
        parse_line(line)


def test_record_and_save_overwrites(tmp_path):
    path = tmp_path / "log.txt"
    path.write_text("old contents\n")

    recorder = MoveRecorder()
    recorder.record(0, 0, Color.BLUE, 'S', is_ai=False)
    recorder.record(1, 1, Color.RED, 'O', is_ai=True)
    recorder.save(path)

    assert path.read_text() == "0,0,Blue,S,Player\n1,1,Red,O,AI\n"
    assert MoveRecorder.load(path) == recorder.entries


def test_load_skips_blank_lines(tmp_path):
    path = tmp_path / "log.txt"
    path.write_text("0,0,Blue,S,Player\n\n   \n0,1,Red,O,AI\n")
    entries = MoveRecorder.load(path)
    assert [(e.row, e.col) for e in entries] == [(0, 0), (0, 1)]


def test_clear():
    recorder = MoveRecorder()
    recorder.record(0, 0, Color.BLUE, 'S', is_ai=False)
    recorder.clear()
    assert recorder.entries == []
