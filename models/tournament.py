"""
Tournament model for bracket persistence.

Stores the tournament lifecycle state, its entrants and its generated
bracket. The version column is the mapper's version counter: an UPDATE
that races another writer fails with StaleDataError instead of silently
overwriting the bracket.
"""

import json
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import String, Integer, DateTime, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Tournament(Base):
    """
    A single-elimination tournament.

    Entrants and the bracket are persisted as JSON fields for full
    recovery on reload.
    """
    __tablename__ = "tournaments"

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)

    # Only the owner may begin the tournament or record results
    owner_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)

    # Registration cap (None = unlimited)
    max_entrants: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    # Lifecycle
    status: Mapped[str] = mapped_column(String(20), default="not_started", index=True)
    bracket_size: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    champion_entrant_id: Mapped[Optional[str]] = mapped_column(String(64), nullable=True)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        default=lambda: datetime.now(timezone.utc)
    )
    started_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    # State persistence (JSON)
    # Stores entrants: [{entrant_id, display_name}, ...]
    entrants_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Stores the bracket: {bracket_size, matchups: [{matchup_id, slot_a, slot_b, ...}]}
    bracket_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # Optimistic concurrency counter
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<Tournament(id={self.id}, name='{self.name}', status={self.status})>"

    # JSON property helpers
    @property
    def entrants(self) -> list[dict]:
        """Get registered entrants."""
        if self.entrants_json:
            return json.loads(self.entrants_json)
        return []

    @entrants.setter
    def entrants(self, value: list[dict]) -> None:
        """Set registered entrants."""
        self.entrants_json = json.dumps(value)

    @property
    def bracket(self) -> Optional[dict]:
        """Get the generated bracket."""
        if self.bracket_json:
            return json.loads(self.bracket_json)
        return None

    @bracket.setter
    def bracket(self, value: Optional[dict]) -> None:
        """Set the generated bracket."""
        self.bracket_json = json.dumps(value) if value is not None else None

    def to_tournament_state(self) -> dict:
        """
        Export state for the Tournament engine.

        Returns dict that can be used with engine.tournament.Tournament.from_state().
        """
        return {
            "tournament_id": self.id,
            "name": self.name,
            "max_entrants": self.max_entrants,
            "status": self.status,
            "entrants": self.entrants,
            "bracket": self.bracket,
        }

    def update_from_tournament(self, tournament) -> None:
        """
        Update the row from a Tournament engine instance.

        Args:
            tournament: engine.tournament.Tournament with current state
        """
        state = tournament.export_state()
        now = datetime.now(timezone.utc)

        if state["status"] != "not_started" and self.started_at is None:
            self.started_at = now

        if state["status"] == "completed" and self.status != "completed":
            self.completed_at = now
            champion = tournament.champion
            self.champion_entrant_id = champion.entrant_id if champion else None

        self.status = state["status"]
        self.max_entrants = state["max_entrants"]
        self.entrants = state["entrants"]
        self.bracket = state["bracket"]
        self.bracket_size = state["bracket"]["bracket_size"] if state["bracket"] else None
