"""
Tests for the command-line interface.
"""

import pytest

from trajectory_reader.cli import COLUMNS, format_record, main, summarize
from trajectory_reader.records import Accuracy, Position, Record


@pytest.fixture
def pof_pair(tmp_path, pack):
    pof = tmp_path / "flight.pof"
    pof.write_bytes(pack([[float(t), 47.0, 8.0, 500.0, 1.0, 2.0, 90.0] for t in range(5)]))
    (tmp_path / "flight.poq").write_bytes(pack([
        [0.0, 1.0, 1.0, 2.0, 0.1, 0.1, 0.1],
        [4.0, 5.0, 5.0, 6.0, 0.1, 0.1, 0.1],
    ]))
    return pof


class TestFormatting:
    """Tests for record output helpers."""

    def test_format_record(self):
        record = Record(
            Position(1.5, 46.0, 7.0, 800.0, 1.0, 2.0, 3.0),
            Accuracy(1.5, 0.1, 0.2, 0.3),
        )
        assert format_record(record) == "1.5,46.0,7.0,800.0,1.0,2.0,3.0,0.1,0.2,0.3"

    def test_format_record_without_optional_values(self):
        record = Record(Position(1.5, 46.0, 7.0, 800.0))
        line = format_record(record)

        assert line == "1.5,46.0,7.0,800.0,,,,,,"
        assert len(line.split(",")) == len(COLUMNS)

    def test_summarize(self):
        records = [
            Record(Position(1.0, 0, 0, 0)),
            Record(Position(2.0, 0, 0, 0), Accuracy(2.0, 1, 1, 1)),
        ]
        assert summarize(records) == {
            'records': 2,
            'time_start': 1.0,
            'time_end': 2.0,
            'with_accuracy': 1,
        }

    def test_summarize_empty(self):
        assert summarize([])['records'] == 0


class TestMain:
    """Tests for the CLI entry point."""

    def test_print_records(self, pof_pair, capsys):
        assert main([str(pof_pair)]) == 0

        lines = capsys.readouterr().out.strip().splitlines()
        assert lines[0] == ",".join(COLUMNS)
        assert len(lines) == 6
        assert lines[3].startswith("2.0,47.0,8.0,500.0")
        assert lines[3].endswith(",3.0,3.0,4.0")

    def test_limit(self, pof_pair, capsys):
        assert main([str(pof_pair), "--limit", "2"]) == 0
        assert len(capsys.readouterr().out.strip().splitlines()) == 3

    def test_summary(self, pof_pair, capsys):
        assert main([str(pof_pair), "--summary"]) == 0

        out = capsys.readouterr().out
        assert "Records:          5" in out
        assert "0.000 to 4.000" in out
        assert "(100.0%)" in out

    def test_config_supplies_trajectory(self, pof_pair, tmp_path, capsys):
        config = tmp_path / "reader.yaml"
        config.write_text("trajectory: flight.pof\nfind_companion: false\n")

        assert main(["--config", str(config), "--summary"]) == 0
        assert "(0.0%)" in capsys.readouterr().out

    def test_no_trajectory(self):
        assert main([]) == 1

    def test_missing_file(self, tmp_path):
        assert main([str(tmp_path / "missing.pof")]) == 1

    def test_decode_error(self, tmp_path, pack):
        path = tmp_path / "broken.sbet"
        path.write_bytes(pack([[0.0] * 17]) + b"\x00\x00")

        assert main([str(path)]) == 1

    def test_unknown_extension(self, tmp_path):
        path = tmp_path / "flight.las"
        path.write_bytes(b"")

        assert main([str(path)]) == 1

    def test_header_lines(self, tmp_path, capsys):
        path = tmp_path / "flight.pos"
        path.write_text("GPSTime Lat Lon H Roll Pitch Heading\n1 46 7 800 0 0 0\n")

        assert main([str(path)]) == 1
        capsys.readouterr()

        assert main([str(path), "--header-lines", "1", "--summary"]) == 0
        assert "Records:          1" in capsys.readouterr().out

    def test_invalid_encoding(self, tmp_path, caplog):
        path = tmp_path / "flight.pos"
        path.write_bytes(b"1 46 7 800 0 0 0\n2 46 \xff 800 0 0 0\n")

        assert main([str(path)]) == 1
        assert "Decode error" in caplog.text
        assert "flight.pos:2" in caplog.text

    def test_limit_zero_closes_files(self, pof_pair, monkeypatch):
        opened = []
        real_open = open

        def tracking_open(*args, **kwargs):
            f = real_open(*args, **kwargs)
            opened.append(f)
            return f

        monkeypatch.setattr("builtins.open", tracking_open)

        assert main([str(pof_pair), "--limit", "0"]) == 0
        assert len(opened) == 2
        assert all(f.closed for f in opened)
