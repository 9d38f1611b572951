"""
Event Bus - Central signal hub for inter-module communication.

Observers (notification senders, dashboards, audit logs) connect to this
single object rather than to individual tournaments.
"""

from PySide6.QtCore import QObject, Signal


class EventBus(QObject):
    """
    Central signal hub for Bracketeer.

    The TournamentService emits here after every committed change:
    - registration and lifecycle transitions
    - decided matchups, including byes resolved automatically
    - tournament completion with the champion

    Usage:
        bus = EventBus()
        bus.tournament_completed.connect(on_completed)
    """

    # ============ Tournament Lifecycle ============
    tournament_created = Signal(dict)   # {tournament_id, name, owner_id}
    entrant_joined = Signal(dict)       # {tournament_id, entrant_id, display_name}
    tournament_started = Signal(dict)   # {tournament_id, bracket_size, status}
    tournament_completed = Signal(dict) # {tournament_id, champion_entrant_id}

    # ============ Bracket Events ============
    matchup_decided = Signal(dict)      # exported matchup plus tournament_id

    # ============ System Events ============
    system_message = Signal(str, str)   # (level, message) - e.g., ("warning", "Retrying")

    def __init__(self):
        super().__init__()

    def emit_message(self, level: str, message: str) -> None:
        """Emit a system message (info, warning, error)."""
        self.system_message.emit(level, message)
