"""
Bracket Export

Writes a bracket to CSV, one row per matchup, for spreadsheets and
printed draw sheets.
"""

import csv
import logging
from pathlib import Path
from typing import Optional

from engine.bracket import Bracket

logger = logging.getLogger(__name__)


class BracketExporter:
    """
    Export brackets in tabular form.

    Usage:
        exporter = BracketExporter()
        exporter.export_csv(tournament.bracket, "spring_open.csv", title="Spring Open")
    """

    COLUMNS = [
        "Round", "Matchup", "Entrant A", "Score A", "Entrant B", "Score B",
        "Winner", "Status",
    ]

    def rows(self, bracket: Bracket) -> list[list]:
        """Matchup rows in bracket order."""
        names = {
            slot.entrant_id: slot.display_name
            for m in bracket for slot in m.slots if slot.is_filled
        }
        return [
            [
                m.round_number,
                m.matchup_id,
                m.slot_a.display_name,
                m.slot_a.score,
                m.slot_b.display_name,
                m.slot_b.score,
                names.get(m.winner_entrant_id, "") if m.winner_entrant_id else "",
                m.status.value,
            ]
            for m in bracket
        ]

    def export_csv(self, bracket: Bracket, filepath: str, title: Optional[str] = None) -> bool:
        """
        Export bracket data to CSV.

        Args:
            bracket: Bracket to export
            filepath: Output file path
            title: Optional heading written above the table

        Returns:
            True if successful
        """
        try:
            Path(filepath).parent.mkdir(parents=True, exist_ok=True)
            with open(filepath, "w", newline="", encoding="utf-8") as f:
                writer = csv.writer(f)

                if title:
                    writer.writerow([title])
                    writer.writerow(["Bracket Size", bracket.bracket_size])
                    writer.writerow([])

                writer.writerow(self.COLUMNS)
                writer.writerows(self.rows(bracket))

            return True

        except OSError:
            logger.exception("CSV export to %s failed", filepath)
            return False
