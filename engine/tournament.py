"""
Tournament Lifecycle

not_started -> in_progress -> completed

Entrants register while the tournament is not started. Beginning it
shuffles the field and generates the bracket exactly once; recording the
final's winner completes it. A tournament with a single entrant skips
straight to completed with one bye matchup.
"""

import enum
import logging
import random
import threading
from typing import Optional

from PySide6.QtCore import QObject, Signal

from config import BRACKET_SETTINGS
from engine.advancement import AdvancementResult, record_winner as advance_winner
from engine.bracket import Bracket, Entrant, Matchup, MatchupStatus
from engine.bracket_generator import generate_bracket, single_entrant_bracket
from engine.errors import (
    DuplicateEntrant,
    InsufficientEntrants,
    InvalidLifecycleTransition,
    TournamentFull,
)
from engine.shuffle import shuffle_entrants

logger = logging.getLogger(__name__)


class TournamentStatus(enum.Enum):
    """Tournament lifecycle states."""
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class Tournament(QObject):
    """
    A single-elimination tournament and its bracket.

    All mutations run under a per-tournament lock: concurrent begin()
    calls generate the bracket once, and concurrent results for the same
    matchup are applied one at a time.

    Usage:
        tournament = Tournament(name="Spring Open")
        tournament.add_entrant(Entrant("u1", "alice"))
        tournament.add_entrant(Entrant("u2", "bob"))
        tournament.begin()
        tournament.record_winner("R1M1", "u1")
    """

    # Signals
    status_changed = Signal(str)        # new status value
    bracket_generated = Signal(dict)    # exported bracket
    matchup_decided = Signal(dict)      # exported matchup
    tournament_completed = Signal(dict) # champion details

    def __init__(
        self,
        tournament_id: Optional[int] = None,
        name: str = "",
        max_entrants: Optional[int] = BRACKET_SETTINGS.max_entrants,
        rng: Optional[random.Random] = None
    ):
        super().__init__()
        self.tournament_id = tournament_id
        self.name = name
        self.max_entrants = max_entrants
        self.status = TournamentStatus.NOT_STARTED
        self.entrants: list[Entrant] = []
        self.bracket: Optional[Bracket] = None

        self._rng = rng
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return (
            f"<Tournament(id={self.tournament_id}, name='{self.name}', "
            f"status={self.status.value}, entrants={len(self.entrants)})>"
        )

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def add_entrant(self, entrant: Entrant) -> None:
        """
        Register an entrant.

        Raises:
            InvalidLifecycleTransition: the tournament has already begun
            DuplicateEntrant: the entrant id is already registered
            TournamentFull: max_entrants has been reached
        """
        with self._lock:
            if self.status != TournamentStatus.NOT_STARTED:
                raise InvalidLifecycleTransition(
                    f"Cannot register entrants while {self.status.value}"
                )
            if any(e.entrant_id == entrant.entrant_id for e in self.entrants):
                raise DuplicateEntrant(f"Entrant already registered: {entrant.entrant_id}")
            if self.max_entrants is not None and len(self.entrants) >= self.max_entrants:
                raise TournamentFull(f"Tournament is full ({self.max_entrants} entrants)")

            self.entrants.append(entrant)
            logger.info("Entrant %s joined tournament %s", entrant.entrant_id, self.tournament_id)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def begin(self) -> Bracket:
        """
        Start the tournament and generate its bracket.

        Raises:
            InvalidLifecycleTransition: the tournament is not in not_started
            InsufficientEntrants: no entrants are registered
        """
        with self._lock:
            if self.status != TournamentStatus.NOT_STARTED:
                raise InvalidLifecycleTransition(
                    f"Tournament {self.tournament_id} cannot begin from {self.status.value}"
                )
            if not self.entrants:
                raise InsufficientEntrants("Cannot begin a tournament with no entrants")

            if len(self.entrants) == 1:
                self.bracket = single_entrant_bracket(self.entrants[0])
                self._set_status(TournamentStatus.COMPLETED)
            else:
                self.bracket = generate_bracket(shuffle_entrants(self.entrants, self._rng))
                self._set_status(TournamentStatus.IN_PROGRESS)

            self.bracket_generated.emit(self.bracket.to_dict())
            if self.status == TournamentStatus.COMPLETED:
                self._emit_completed()
            return self.bracket

    def record_winner(self, matchup_id: str, winner_entrant_id: str) -> AdvancementResult:
        """
        Record a matchup result and advance the winner.

        Raises:
            InvalidLifecycleTransition: the tournament is not in progress
            InvalidMatchupId, AlreadyDecided, InvalidWinnerSelection: see
                engine.advancement.record_winner
        """
        with self._lock:
            if self.status != TournamentStatus.IN_PROGRESS:
                raise InvalidLifecycleTransition(
                    f"Cannot record a winner while {self.status.value}"
                )

            result = advance_winner(self.bracket, matchup_id, winner_entrant_id)

            for decided_id in result.decided:
                self.matchup_decided.emit(self.bracket.get(decided_id).to_dict())

            if result.completed:
                self._set_status(TournamentStatus.COMPLETED)
                self._emit_completed()
            return result

    def is_complete(self) -> bool:
        return self.status == TournamentStatus.COMPLETED

    def _set_status(self, status: TournamentStatus) -> None:
        logger.info(
            "Tournament %s: %s -> %s", self.tournament_id, self.status.value, status.value
        )
        self.status = status
        self.status_changed.emit(status.value)

    def _emit_completed(self) -> None:
        champion = self.champion
        self.tournament_completed.emit({
            "tournament_id": self.tournament_id,
            "champion_entrant_id": champion.entrant_id if champion else None,
            "champion_name": champion.display_name if champion else None,
        })

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def champion(self) -> Optional[Entrant]:
        """The winning entrant, once the tournament is completed."""
        if self.bracket is None or not self.is_complete():
            return None
        champion_id = self.bracket.champion_id
        return next((e for e in self.entrants if e.entrant_id == champion_id), None)

    def get_matchup(self, matchup_id: str) -> Optional[Matchup]:
        if self.bracket is None:
            return None
        return self.bracket.get(matchup_id)

    def get_playable_matchups(self) -> list[Matchup]:
        """Matchups with both entrants known and no result yet."""
        if self.bracket is None:
            return []
        return [m for m in self.bracket if m.status == MatchupStatus.ACTIVE]

    # -------------------------------------------------------------------------
    # State export
    # -------------------------------------------------------------------------

    def export_state(self) -> dict:
        """
        Export full tournament state as a dictionary.

        Returns:
            JSON-safe state dict that can be used with from_state()
        """
        with self._lock:
            return {
                "tournament_id": self.tournament_id,
                "name": self.name,
                "max_entrants": self.max_entrants,
                "status": self.status.value,
                "entrants": [
                    {"entrant_id": e.entrant_id, "display_name": e.display_name}
                    for e in self.entrants
                ],
                "bracket": self.bracket.to_dict() if self.bracket else None,
            }

    @classmethod
    def from_state(cls, state: dict, rng: Optional[random.Random] = None) -> "Tournament":
        """Reconstruct a Tournament from export_state() output."""
        tournament = cls(
            tournament_id=state.get("tournament_id"),
            name=state.get("name", ""),
            max_entrants=state.get("max_entrants"),
            rng=rng,
        )
        tournament.status = TournamentStatus(state.get("status", "not_started"))
        tournament.entrants = [
            Entrant(e["entrant_id"], e["display_name"]) for e in state.get("entrants", [])
        ]
        if state.get("bracket"):
            tournament.bracket = Bracket.from_dict(state["bracket"])
        return tournament


def begin_tournament(tournament: Tournament) -> Bracket:
    return tournament.begin()


def record_winner(bracket: Bracket, matchup_id: str, winner_entrant_id: str) -> Bracket:
    """
    Record a result and return the updated bracket.

    Use engine.advancement.record_winner for the AdvancementResult with the
    decided matchup ids and completion flag.
    """
    return advance_winner(bracket, matchup_id, winner_entrant_id).bracket


def is_complete(tournament: Tournament) -> bool:
    return tournament.is_complete()
