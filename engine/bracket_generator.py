"""
Bracket Generator

Builds a complete single-elimination bracket for any number of entrants.

When the entrant count N is not a power of two, a preliminary round
reduces the field to the largest power of two p <= N:

- the first 2 * (N - p) entrants play N - p real matchups
- every remaining entrant gets a pre-decided bye matchup

The next round is then seeded with one "Winner of" placeholder per
preliminary matchup followed by the auto-advanced entrants, and regular
rounds pair consecutive seeds until a single matchup (the final) remains.

Example with 5 entrants [A, B, C, D, E]:
    R1M1 A v B    R1M2 C v BYE    R1M3 D v BYE    R1M4 E v BYE
    R2M1 Winner of R1M1 v C       R2M2 D v E
    R3M1 Winner of R2M1 v Winner of R2M2
"""

import logging
from collections import Counter
from dataclasses import replace
from typing import Iterable, Sequence

from config import BRACKET_SETTINGS
from engine.bracket import Bracket, Entrant, Matchup, PlayerSlot
from engine.errors import BracketIntegrityError, DuplicateEntrant, InsufficientEntrants
from engine.matchup_index import format_matchup_id

logger = logging.getLogger(__name__)


def previous_power_of_two(n: int) -> int:
    """Largest power of two <= n (n >= 1)."""
    return 1 << (n.bit_length() - 1)


def next_power_of_two(n: int) -> int:
    """Smallest power of two >= n (n >= 1)."""
    return 1 << (n - 1).bit_length()


def generate_bracket(entrants: Sequence[Entrant]) -> Bracket:
    """
    Generate the full bracket for an already shuffled entrant list.

    Args:
        entrants: Entrants in seeding order (at least two, unique ids)

    Returns:
        The generated Bracket

    Raises:
        InsufficientEntrants: fewer than two entrants
        DuplicateEntrant: an entrant id appears twice
        BracketIntegrityError: the generated bracket failed validation
    """
    entrants = list(entrants)
    _check_entrants(entrants)

    count = len(entrants)
    bracket = Bracket(bracket_size=next_power_of_two(count))
    seeds = [PlayerSlot.for_entrant(e) for e in entrants]

    excess = count - previous_power_of_two(count)
    first_round = 1
    if excess:
        seeds = _add_preliminary_round(bracket, seeds, excess)
        first_round = 2

    _add_regular_rounds(bracket, seeds, first_round)
    validate_bracket(bracket, entrants)

    logger.info(
        "Generated bracket for %d entrants: size=%d, preliminary=%d, matchups=%d, rounds=%d",
        count, bracket.bracket_size, excess, len(bracket), bracket.round_count,
    )
    return bracket


def build_regular_rounds(entrants: Sequence[Entrant], first_round: int = 1) -> Bracket:
    """
    Pair entrants round by round without a preliminary reduction.

    An odd-sized round gives its last seed a bye matchup; that seed is
    carried into the next round. For odd fields this produces byes in
    later rounds whose occupant is still a "Winner of" placeholder.
    """
    entrants = list(entrants)
    _check_entrants(entrants)

    bracket = Bracket(bracket_size=next_power_of_two(len(entrants)))
    _add_regular_rounds(bracket, [PlayerSlot.for_entrant(e) for e in entrants], first_round)
    validate_bracket(bracket, entrants, first_round=first_round)
    return bracket


def single_entrant_bracket(entrant: Entrant) -> Bracket:
    """The one-matchup bracket of a tournament with a single entrant."""
    bracket = Bracket(bracket_size=2)
    _add_bye(bracket, 1, 1, PlayerSlot.for_entrant(entrant))
    return bracket


def _check_entrants(entrants: list[Entrant]) -> None:
    if len(entrants) < BRACKET_SETTINGS.min_entrants:
        raise InsufficientEntrants(
            f"At least {BRACKET_SETTINGS.min_entrants} entrants are required, got {len(entrants)}"
        )

    duplicates = [eid for eid, n in Counter(e.entrant_id for e in entrants).items() if n > 1]
    if duplicates:
        raise DuplicateEntrant(f"Duplicate entrant ids: {duplicates}")


def _add_preliminary_round(
    bracket: Bracket,
    seeds: list[PlayerSlot],
    excess: int
) -> list[PlayerSlot]:
    """Emit round 1 and return the seed list for round 2."""
    contenders = seeds[:excess * 2]
    auto_advanced = seeds[excess * 2:]

    next_seeds = []
    for i in range(excess):
        matchup = _add_pairing(bracket, 1, i + 1, contenders[i * 2], contenders[i * 2 + 1])
        next_seeds.append(PlayerSlot.placeholder(matchup.matchup_id))

    for i, seed in enumerate(auto_advanced):
        _add_bye(bracket, 1, excess + i + 1, seed)

    return next_seeds + auto_advanced


def _add_regular_rounds(bracket: Bracket, seeds: list[PlayerSlot], round_number: int) -> None:
    while len(seeds) > 1:
        # The final feeds nothing, so it produces no placeholder
        feeds_next_round = len(seeds) > 2
        next_seeds = []
        pairings = len(seeds) // 2

        for i in range(pairings):
            matchup = _add_pairing(bracket, round_number, i + 1, seeds[i * 2], seeds[i * 2 + 1])
            if feeds_next_round:
                next_seeds.append(PlayerSlot.placeholder(matchup.matchup_id))

        if len(seeds) % 2 == 1:
            odd_one_out = seeds[-1]
            _add_bye(bracket, round_number, pairings + 1, odd_one_out)
            logger.debug("%s gets a bye in round %d", odd_one_out.display_name, round_number)
            next_seeds.append(odd_one_out)

        seeds = next_seeds
        round_number += 1


def _add_pairing(
    bracket: Bracket,
    round_number: int,
    position: int,
    seed_a: PlayerSlot,
    seed_b: PlayerSlot
) -> Matchup:
    matchup = Matchup(
        matchup_id=format_matchup_id(round_number, position),
        round_number=round_number,
        slot_a=replace(seed_a, score=0),
        slot_b=replace(seed_b, score=0),
        is_placeholder=seed_a.is_pending or seed_b.is_pending,
    )
    bracket.matchups[matchup.matchup_id] = matchup
    return matchup


def _add_bye(bracket: Bracket, round_number: int, position: int, seed: PlayerSlot) -> Matchup:
    """
    Give seed a bye. A real entrant wins it immediately; a placeholder's bye
    is resolved once the feeding matchup is decided.
    """
    matchup = Matchup(
        matchup_id=format_matchup_id(round_number, position),
        round_number=round_number,
        slot_a=replace(seed, score=1 if seed.is_filled else 0),
        slot_b=PlayerSlot.bye(),
        winner_entrant_id=seed.entrant_id,
        is_bye=True,
        is_placeholder=seed.is_pending,
    )
    bracket.matchups[matchup.matchup_id] = matchup
    return matchup


def validate_bracket(
    bracket: Bracket,
    entrants: Iterable[Entrant],
    first_round: int = 1
) -> None:
    """
    Check the structural guarantees of a freshly generated bracket.

    - exactly one matchup (the final) has no successor
    - no matchup has two BYE slots
    - every entrant occupies a real slot in exactly one first-round matchup
    - BYE slots appear only in bye matchups, one per matchup

    Raises:
        BracketIntegrityError: on the first violated guarantee
    """
    problems = []

    finals = [m.matchup_id for m in bracket if m.successor_id not in bracket]
    if len(finals) != 1:
        problems.append(f"expected exactly one final, found {finals}")

    double_byes = [m.matchup_id for m in bracket if m.slot_a.is_bye and m.slot_b.is_bye]
    if double_byes:
        problems.append(f"matchups with two BYEs: {double_byes}")

    expected = Counter(e.entrant_id for e in entrants)
    seated = Counter(
        slot.entrant_id
        for m in bracket if m.round_number == first_round
        for slot in m.slots if slot.is_filled
    )
    if seated != expected:
        missing = sorted(map(str, (expected - seated).keys()))
        extra = sorted(map(str, (seated - expected).keys()))
        problems.append(f"first-round seating mismatch: missing={missing}, extra={extra}")

    bye_slots = sum(slot.is_bye for m in bracket for slot in m.slots)
    bye_matchups = [m for m in bracket if m.slot_a.is_bye != m.slot_b.is_bye]
    if bye_slots != len(bye_matchups) or not all(m.is_bye for m in bye_matchups):
        problems.append(
            f"BYE slot count {bye_slots} does not match {len(bye_matchups)} bye matchups"
        )

    if problems:
        message = "Bracket integrity check failed: " + "; ".join(problems)
        logger.error(message)
        raise BracketIntegrityError(message)
