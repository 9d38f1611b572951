"""
Tests for CSV bracket export.
"""

import csv

from engine.advancement import record_winner
from engine.bracket import Entrant
from engine.bracket_generator import generate_bracket
from services.export import BracketExporter


class TestBracketExporter:

    def setup_method(self):
        self.exporter = BracketExporter()
        self.bracket = generate_bracket([Entrant(x, f"Player {x}") for x in "ABC"])

    def test_rows_follow_bracket_order(self):
        rows = self.exporter.rows(self.bracket)

        assert [row[1] for row in rows] == ["R1M1", "R1M2", "R2M1"]
        assert rows[1] == [1, "R1M2", "Player C", 1, "BYE", 0, "Player C", "completed"]
        assert rows[2][2] == "Winner of R1M1"
        assert rows[2][6] == ""

    def test_rows_show_recorded_winner(self):
        record_winner(self.bracket, "R1M1", "B")
        rows = self.exporter.rows(self.bracket)

        assert rows[0][6] == "Player B"
        assert rows[2][2] == "Player B"
        assert rows[2][7] == "active"

    def test_export_csv(self, tmp_path):
        path = tmp_path / "out" / "bracket.csv"

        assert self.exporter.export_csv(self.bracket, str(path), title="Spring Open")

        with open(path, newline="", encoding="utf-8") as f:
            lines = list(csv.reader(f))

        assert lines[0] == ["Spring Open"]
        assert lines[1] == ["Bracket Size", "4"]
        assert lines[3] == BracketExporter.COLUMNS
        assert len(lines) == 4 + len(self.bracket)

    def test_export_without_title(self, tmp_path):
        path = tmp_path / "bracket.csv"
        self.exporter.export_csv(self.bracket, str(path))

        with open(path, newline="", encoding="utf-8") as f:
            assert next(csv.reader(f)) == BracketExporter.COLUMNS

    def test_export_failure_returns_false(self, tmp_path):
        blocker = tmp_path / "file"
        blocker.write_text("not a directory")

        assert not self.exporter.export_csv(self.bracket, str(blocker / "bracket.csv"))
