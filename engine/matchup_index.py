"""
Matchup addressing.

Matchups are named R{round}M{position}, both 1-based. The winner of
R{r}M{m} always plays in R{r+1}M{ceil(m/2)}: odd positions feed slot A,
even positions feed slot B.
"""

import re

from engine.errors import InvalidMatchupId

_MATCHUP_ID = re.compile(r"R(\d+)M(\d+)")

SLOT_A = "a"
SLOT_B = "b"


def format_matchup_id(round_number: int, position: int) -> str:
    """Build a matchup id from its round and 1-based position."""
    if round_number < 1 or position < 1:
        raise InvalidMatchupId(
            f"Round and position must be >= 1, got round={round_number}, position={position}"
        )
    return f"R{round_number}M{position}"


def parse_matchup_id(matchup_id: str) -> tuple[int, int]:
    """
    Split a matchup id into (round, position).

    Raises:
        InvalidMatchupId: if the id does not follow the R{round}M{position} form
    """
    match = _MATCHUP_ID.fullmatch(matchup_id) if isinstance(matchup_id, str) else None
    if not match:
        raise InvalidMatchupId(f"Malformed matchup id: {matchup_id!r}")

    round_number, position = int(match.group(1)), int(match.group(2))
    if round_number < 1 or position < 1:
        raise InvalidMatchupId(f"Malformed matchup id: {matchup_id!r}")
    return round_number, position


def successor_id(matchup_id: str) -> str:
    """Id of the matchup the winner of matchup_id advances to."""
    round_number, position = parse_matchup_id(matchup_id)
    return format_matchup_id(round_number + 1, (position + 1) // 2)


def successor_slot(matchup_id: str) -> str:
    """Which side of the successor matchup the winner fills."""
    _, position = parse_matchup_id(matchup_id)
    return SLOT_A if position % 2 == 1 else SLOT_B
