"""
Bracketeer Services

Application services for persistence-backed tournaments, events and export.
"""

from services.event_bus import EventBus
from services.export import BracketExporter
from services.tournament_service import NotTournamentOwner, TournamentNotFound, TournamentService

__all__ = [
    "EventBus",
    "BracketExporter",
    "NotTournamentOwner",
    "TournamentNotFound",
    "TournamentService",
]
