"""
Tournament Service

Application-level operations over persisted tournaments. This is the
layer that enforces tournament ownership; the engine itself never looks
at who is calling.
"""

import logging
import random
from typing import Callable, Optional, TypeVar

from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.orm.exc import StaleDataError

from engine.bracket import Entrant
from engine.tournament import Tournament, TournamentStatus
from models.base import SessionLocal, get_session, init_db
from models.schemas import EntrantCreate, TournamentCreate, TournamentResponse
from models.tournament import Tournament as TournamentModel
from services.event_bus import EventBus

logger = logging.getLogger(__name__)

T = TypeVar("T")


class TournamentNotFound(LookupError):
    """No tournament with the requested id."""


class NotTournamentOwner(PermissionError):
    """The acting user does not own the tournament."""


class TournamentService:
    """
    Create, join, begin and score tournaments stored in the database.

    Every mutation loads the row, replays the engine operation on its
    state and writes the result back. If another writer committed first,
    the version check fails and the operation is retried once against
    the fresh row, where the engine rejects it for the right reason
    (AlreadyDecided, InvalidLifecycleTransition, ...).
    """

    MAX_ATTEMPTS = 2

    def __init__(
        self,
        session_factory: sessionmaker = SessionLocal,
        event_bus: Optional[EventBus] = None,
        rng: Optional[random.Random] = None
    ):
        if session_factory is SessionLocal:
            init_db()
        self._session_factory = session_factory
        self.event_bus = event_bus or EventBus()
        self._rng = rng

    def create_tournament(self, request: TournamentCreate) -> int:
        """Create a tournament and return its id."""
        with get_session(self._session_factory) as session:
            row = TournamentModel(
                name=request.name,
                owner_id=request.owner_id,
                max_entrants=request.max_entrants,
                status=TournamentStatus.NOT_STARTED.value,
            )
            row.entrants = []
            session.add(row)
            session.flush()
            tournament_id = row.id

        logger.info("Created tournament %d '%s'", tournament_id, request.name)
        self.event_bus.tournament_created.emit({
            "tournament_id": tournament_id,
            "name": request.name,
            "owner_id": request.owner_id,
        })
        return tournament_id

    def get_tournament(self, tournament_id: int) -> TournamentResponse:
        with get_session(self._session_factory) as session:
            return TournamentResponse.model_validate(self._load(session, tournament_id))

    def join(self, tournament_id: int, request: EntrantCreate) -> TournamentResponse:
        """Register an entrant while the tournament has not started."""
        entrant = Entrant(request.entrant_id, request.display_name)
        response = self._mutate(tournament_id, lambda t: t.add_entrant(entrant))

        self.event_bus.entrant_joined.emit({
            "tournament_id": tournament_id,
            "entrant_id": entrant.entrant_id,
            "display_name": entrant.display_name,
        })
        return response

    def begin(self, tournament_id: int, acting_user_id: str) -> TournamentResponse:
        """Start the tournament and generate its bracket (owner only)."""
        response = self._mutate(tournament_id, lambda t: t.begin(), owner_id=acting_user_id)

        self.event_bus.tournament_started.emit({
            "tournament_id": tournament_id,
            "bracket_size": response.bracket_size,
            "status": response.status,
        })
        self._emit_if_completed(response)
        return response

    def select_winner(
        self,
        tournament_id: int,
        acting_user_id: str,
        matchup_id: str,
        winner_entrant_id: str
    ) -> TournamentResponse:
        """Record a matchup result and advance the winner (owner only)."""
        decided: list[str] = []

        def apply(tournament: Tournament) -> None:
            result = tournament.record_winner(matchup_id, winner_entrant_id)
            decided[:] = result.decided

        response = self._mutate(tournament_id, apply, owner_id=acting_user_id)

        matchups = {m.matchup_id: m for m in response.bracket.matchups}
        for decided_id in decided:
            payload = matchups[decided_id].model_dump()
            payload["tournament_id"] = tournament_id
            self.event_bus.matchup_decided.emit(payload)
        self._emit_if_completed(response)
        return response

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _load(self, session: Session, tournament_id: int) -> TournamentModel:
        row = session.get(TournamentModel, tournament_id)
        if row is None:
            raise TournamentNotFound(f"Tournament {tournament_id} not found")
        return row

    def _mutate(
        self,
        tournament_id: int,
        operation: Callable[[Tournament], T],
        owner_id: Optional[str] = None
    ) -> TournamentResponse:
        for attempt in range(1, self.MAX_ATTEMPTS + 1):
            try:
                with get_session(self._session_factory) as session:
                    row = self._load(session, tournament_id)
                    if owner_id is not None and row.owner_id != owner_id:
                        raise NotTournamentOwner(
                            f"User {owner_id} does not own tournament {tournament_id}"
                        )

                    tournament = Tournament.from_state(row.to_tournament_state(), rng=self._rng)
                    operation(tournament)
                    row.update_from_tournament(tournament)
                    session.flush()
                    return TournamentResponse.model_validate(row)
            except StaleDataError:
                if attempt == self.MAX_ATTEMPTS:
                    raise
                logger.warning(
                    "Tournament %d changed concurrently, retrying against fresh state",
                    tournament_id,
                )
                self.event_bus.emit_message(
                    "warning", f"Tournament {tournament_id} changed concurrently"
                )

    def _emit_if_completed(self, response: TournamentResponse) -> None:
        if response.status == TournamentStatus.COMPLETED.value:
            self.event_bus.tournament_completed.emit({
                "tournament_id": response.id,
                "champion_entrant_id": response.champion_entrant_id,
            })
