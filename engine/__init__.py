"""
Bracketeer Bracket Engine

Bracket generation, winner advancement and the tournament lifecycle.
This module contains no persistence or transport dependencies.

record_winner(bracket, matchup_id, winner_entrant_id) returns the updated
Bracket. advance_winner takes the same arguments and returns an
AdvancementResult listing every matchup it decided.
"""

from engine.bracket import Bracket, Entrant, Matchup, MatchupStatus, PlayerSlot
from engine.bracket_generator import build_regular_rounds, generate_bracket, validate_bracket
from engine.advancement import AdvancementResult, record_winner as advance_winner
from engine.errors import (
    AlreadyDecided,
    BracketError,
    BracketIntegrityError,
    DuplicateEntrant,
    InsufficientEntrants,
    InvalidLifecycleTransition,
    InvalidMatchupId,
    InvalidWinnerSelection,
    TournamentFull,
)
from engine.shuffle import shuffle_entrants
from engine.tournament import (
    Tournament,
    TournamentStatus,
    begin_tournament,
    is_complete,
    record_winner,
)

__all__ = [
    "Bracket",
    "Entrant",
    "Matchup",
    "MatchupStatus",
    "PlayerSlot",
    "build_regular_rounds",
    "generate_bracket",
    "validate_bracket",
    "AdvancementResult",
    "advance_winner",
    "AlreadyDecided",
    "BracketError",
    "BracketIntegrityError",
    "DuplicateEntrant",
    "InsufficientEntrants",
    "InvalidLifecycleTransition",
    "InvalidMatchupId",
    "InvalidWinnerSelection",
    "TournamentFull",
    "shuffle_entrants",
    "Tournament",
    "TournamentStatus",
    "begin_tournament",
    "is_complete",
    "record_winner",
]
