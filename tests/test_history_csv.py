"""Tests for CSV replay files and loader selection."""

import io
import sys

import pytest

from game.chips import Chip, ChipName, Species, Team
from game.errors import NotationError
from game.hex_coords import DoubleHeight
from game.history import Event
from game.loaders import AutoSelectLoader, HistoryCsvLoader, HistoryStringLoader
from game.writers import HistoryCsvWriter

W = Team.WHITE
B = Team.BLACK

CSV_TEXT = """turn,team,name,row,col
0,White,q1,0,0
1,Black,q1,-2,0
2,White,m1,2,0
4,White,mq,1,1
"""


@pytest.fixture
def rows():
    return [
        Event(0, Chip(ChipName.Q1, W), DoubleHeight(0, 0)),
        Event(1, Chip(ChipName.Q1, B), DoubleHeight(0, -2)),
        Event(2, Chip(ChipName.M1, W), DoubleHeight(0, 2)),
        None,
        Event(4, Chip(ChipName.M1, W), DoubleHeight(1, 1), Species.QUEEN),
    ]


@pytest.fixture
def messages():
    return []


def write_file(tmp_path, name, text):
    path = tmp_path / name
    path.write_text(text)
    return path


class TestHistoryCsvWriter:
    def test_skips_are_gaps(self, rows):
        """Test that skipped turns leave a gap in the turn column."""
        output = io.StringIO()
        HistoryCsvWriter(output).write_rows(rows, W)
        assert output.getvalue() == CSV_TEXT

    def test_close_keeps_stdout_open(self):
        """Test that closing a writer on stdout leaves it open."""
        writer = HistoryCsvWriter(sys.stdout)
        writer.close()
        assert not sys.stdout.closed

    def test_close(self):
        """Test that closing a writer closes its file."""
        output = io.StringIO()
        writer = HistoryCsvWriter(output)
        writer.close()
        assert output.closed


class TestHistoryCsvLoader:
    def test_load(self, tmp_path, rows, messages):
        """Test loading a CSV replay file."""
        path = write_file(tmp_path, "game.csv", CSV_TEXT)
        assert HistoryCsvLoader(path, messages.append).load() == rows
        assert any("1 skipped" in message for message in messages)

    def test_blank_lines_are_ignored(self, tmp_path, rows, messages):
        """Test that blank lines in a CSV file are skipped."""
        path = write_file(tmp_path, "game.csv", CSV_TEXT.replace("\n2,", "\n\n2,"))
        assert HistoryCsvLoader(path, messages.append).load() == rows

    def test_empty_file(self, tmp_path, messages):
        """Test that an empty file loads no rows."""
        path = write_file(tmp_path, "game.csv", "")
        assert HistoryCsvLoader(path, messages.append).load() == []

    def test_prints_without_reporter(self, tmp_path, capsys):
        """Test that status messages are printed without a reporter."""
        path = write_file(tmp_path, "game.csv", CSV_TEXT)
        HistoryCsvLoader(path).load()
        assert "Loading history" in capsys.readouterr().out

    @pytest.mark.parametrize(
        "text,line",
        [
            ("turn,team,name,col,row\n", 1),
            ("turn,team,name,row,col\n0,White,q1,1,0\n", 2),
            ("turn,team,name,row,col\n0,White,q1,0,0\nx,Black,q1,-2,0\n", 3),
            ("turn,team,name,row,col\n0,Green,q1,0,0\n", 2),
            ("turn,team,name,row,col\n0,White,z1,0,0\n", 2),
            ("turn,team,name,row,col\n0,White,q1,0\n", 2),
            ("turn,team,name,row,col\n-1,White,q1,0,0\n", 2),
            ("turn,team,name,row,col\n1,White,q1,0,0\n0,Black,q1,-2,0\n", 3),
        ],
    )
    def test_errors_carry_line_number(self, tmp_path, messages, text, line):
        """Test that CSV errors name the offending line."""
        path = write_file(tmp_path, "bad.csv", text)
        with pytest.raises(NotationError) as exc_info:
            HistoryCsvLoader(path, messages.append).load()
        assert exc_info.value.line == line
        assert str(exc_info.value).startswith(f"line {line}:")


class TestAutoSelectLoader:
    def test_detect_by_suffix(self, tmp_path):
        """Test that a .csv suffix selects the CSV loader."""
        path = write_file(tmp_path, "game.csv", CSV_TEXT)
        assert AutoSelectLoader.detect_file_format(path) == "csv"

    def test_detect_by_header(self, tmp_path, rows, messages):
        """Test that a CSV header selects the CSV loader."""
        path = write_file(tmp_path, "game.txt", CSV_TEXT)
        assert AutoSelectLoader.detect_file_format(path) == "csv"
        assert AutoSelectLoader(path, messages.append).load() == rows

    def test_history_string(self, tmp_path, rows, messages):
        """Test that other files load as history strings."""
        path = write_file(tmp_path, "game.txt", "q1.0,0/Q1.0,-2/m1.0,2/w.0,0/mq.1,1/\n")
        assert AutoSelectLoader.detect_file_format(path) == "history"
        assert AutoSelectLoader(path, messages.append).load() == rows

    def test_status_reporter_reaches_delegate(self, tmp_path):
        """Test that the status reporter is passed to the chosen loader."""
        path = write_file(tmp_path, "game.txt", "q1.0,0/")
        first, second = [], []
        loader = AutoSelectLoader(path, first.append)
        loader.load()
        loader.set_status_reporter(second.append)
        loader.load()
        assert first and second

    def test_history_string_loader(self, tmp_path, messages):
        """Test loading a history string file directly."""
        path = write_file(tmp_path, "game.txt", "q1.0,0/Q1.0,-2/")
        assert len(HistoryStringLoader(path, messages.append).load()) == 2
