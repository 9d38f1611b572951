"""
Bracket engine errors.

Every error is raised before the bracket is touched, so a rejected call
leaves the tournament exactly as it was.
"""


class BracketError(Exception):
    """Base class for all bracket engine errors."""


class InsufficientEntrants(BracketError, ValueError):
    """Too few entrants to generate a bracket or begin a tournament."""


class DuplicateEntrant(BracketError, ValueError):
    """An entrant id was registered twice."""


class TournamentFull(BracketError, ValueError):
    """Registration would exceed the tournament's entrant cap."""


class InvalidMatchupId(BracketError, ValueError):
    """A matchup id is malformed or names no matchup in the bracket."""


class InvalidWinnerSelection(BracketError, ValueError):
    """The selected winner cannot win this matchup."""


class AlreadyDecided(BracketError, RuntimeError):
    """The matchup already has a winner."""


class InvalidLifecycleTransition(BracketError, RuntimeError):
    """The operation is not allowed in the tournament's current status."""


class BracketIntegrityError(BracketError, RuntimeError):
    """
    A generated bracket broke one of its structural guarantees.

    This is a generator defect, never a user input problem.
    """
