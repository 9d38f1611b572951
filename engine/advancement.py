"""
Winner Advancement

Records a matchup result and moves the winner into the next round.

If the winner lands opposite a BYE, that matchup is decided on the spot
and the winner keeps moving. Chains are followed with a worklist, so the
depth is bounded by the number of rounds.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from engine.bracket import Bracket, Matchup, PlayerSlot
from engine.errors import AlreadyDecided, InvalidMatchupId, InvalidWinnerSelection
from engine.matchup_index import SLOT_A, parse_matchup_id, successor_slot

logger = logging.getLogger(__name__)


@dataclass
class AdvancementResult:
    """Outcome of a recorded winner."""
    bracket: Bracket
    decided: list[str] = field(default_factory=list)  # matchup ids, in decision order
    completed: bool = False  # True once the final has a winner

    @property
    def champion_id(self) -> Optional[str]:
        return self.bracket.champion_id if self.completed else None


def record_winner(bracket: Bracket, matchup_id: str, winner_entrant_id: str) -> AdvancementResult:
    """
    Record winner_entrant_id as the winner of matchup_id and advance it.

    The bracket is validated first and only mutated when every check
    passes, so a rejected call leaves it untouched.

    Raises:
        InvalidMatchupId: malformed id, or no such matchup in the bracket
        AlreadyDecided: the matchup already has a winner
        InvalidWinnerSelection: the winner does not occupy a slot, or the
            matchup is still waiting on an undecided feeder
    """
    matchup = _find_matchup(bracket, matchup_id)

    if matchup.is_decided:
        raise AlreadyDecided(
            f"Matchup {matchup_id} already decided for {matchup.winner_entrant_id}"
        )

    if winner_entrant_id is None or matchup.slot_for(winner_entrant_id) is None:
        raise InvalidWinnerSelection(
            f"{winner_entrant_id!r} is not an entrant in matchup {matchup_id}"
        )

    if any(slot.is_pending for slot in matchup.slots):
        raise InvalidWinnerSelection(
            f"Matchup {matchup_id} is still waiting on an undecided matchup"
        )

    result = AdvancementResult(bracket=bracket)
    worklist = [(matchup, winner_entrant_id, False)]

    while worklist:
        source, winner_id, via_bye = worklist.pop()
        _decide(source, winner_id)
        result.decided.append(source.matchup_id)
        logger.info(
            "Matchup %s decided: %s%s",
            source.matchup_id, winner_id, " (bye)" if via_bye else "",
        )

        target = bracket.get(source.successor_id)
        if target is None:
            result.completed = True
            logger.info("Final %s decided, champion %s", source.matchup_id, winner_id)
            continue

        winner_slot = source.slot_for(winner_id)
        advanced = PlayerSlot(winner_id, winner_slot.display_name, 0)
        if successor_slot(source.matchup_id) == SLOT_A:
            target.slot_a = advanced
        else:
            target.slot_b = advanced

        bye_winner = _refresh_flags(target)
        if bye_winner is not None:
            logger.debug("%s advances through bye %s", bye_winner, target.matchup_id)
            worklist.append((target, bye_winner, True))

    return result


def _find_matchup(bracket: Bracket, matchup_id: str) -> Matchup:
    parse_matchup_id(matchup_id)
    matchup = bracket.get(matchup_id)
    if matchup is None:
        raise InvalidMatchupId(f"Matchup not found: {matchup_id}")
    return matchup


def _decide(matchup: Matchup, winner_id: str) -> None:
    matchup.winner_entrant_id = winner_id
    matchup.is_placeholder = False
    matchup.is_bye = False
    for slot in matchup.slots:
        slot.score = 1 if slot.is_filled and slot.entrant_id == winner_id else 0


def _refresh_flags(target: Matchup) -> Optional[str]:
    """
    Update the flags of a matchup that just received a winner.

    Returns the entrant id to auto-advance when the matchup became a real
    entrant against a BYE, otherwise None.
    """
    slot_a, slot_b = target.slots

    if slot_a.is_filled and slot_b.is_filled:
        target.is_placeholder = False
        target.is_bye = False
        return None

    if (slot_a.is_filled and slot_b.is_bye) or (slot_b.is_filled and slot_a.is_bye):
        target.is_placeholder = False
        target.is_bye = True
        if target.is_decided:
            return None
        return slot_a.entrant_id if slot_a.is_filled else slot_b.entrant_id

    target.is_placeholder = True
    return None
