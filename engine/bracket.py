"""
Bracket data structures.

A Bracket is a flat, ordered mapping of matchup id -> Matchup. Successors
are found by computing their id (see engine.matchup_index), never by
following references between matchups.
"""

import enum
from dataclasses import dataclass, field
from typing import Iterator, Optional

from config import BRACKET_SETTINGS
from engine.matchup_index import parse_matchup_id, successor_id


class MatchupStatus(enum.Enum):
    """Play status of a single matchup."""
    UPCOMING = "upcoming"    # Waiting on an undecided feeder matchup
    ACTIVE = "active"        # Both entrants known, no winner yet
    BYE = "bye"              # One entrant against a BYE, not yet advanced
    COMPLETED = "completed"  # Winner recorded


@dataclass(frozen=True)
class Entrant:
    """A participant eligible to be seeded into the bracket."""
    entrant_id: str
    display_name: str


@dataclass
class PlayerSlot:
    """
    One side of a matchup.

    BYE and "Winner of" slots carry no entrant; build them with bye() and
    placeholder().
    """
    entrant_id: Optional[str]
    display_name: str
    score: int = 0

    @classmethod
    def for_entrant(cls, entrant: Entrant, score: int = 0) -> "PlayerSlot":
        return cls(entrant.entrant_id, entrant.display_name, score)

    @classmethod
    def bye(cls) -> "PlayerSlot":
        return cls(None, BRACKET_SETTINGS.bye_label, 0)

    @classmethod
    def placeholder(cls, matchup_id: str) -> "PlayerSlot":
        """Slot standing in for the winner of an undecided matchup."""
        return cls(None, BRACKET_SETTINGS.placeholder_template.format(matchup_id=matchup_id), 0)

    @property
    def is_filled(self) -> bool:
        return self.entrant_id is not None

    @property
    def is_bye(self) -> bool:
        return self.entrant_id is None and self.display_name == BRACKET_SETTINGS.bye_label

    @property
    def is_pending(self) -> bool:
        return self.entrant_id is None and not self.is_bye

    def to_dict(self) -> dict:
        return {
            "entrant_id": self.entrant_id,
            "display_name": self.display_name,
            "score": self.score,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PlayerSlot":
        return cls(data.get("entrant_id"), data["display_name"], data.get("score", 0))


@dataclass
class Matchup:
    """A matchup in the bracket."""
    matchup_id: str
    round_number: int
    slot_a: PlayerSlot
    slot_b: PlayerSlot
    winner_entrant_id: Optional[str] = None
    is_bye: bool = False
    is_placeholder: bool = False

    @property
    def position(self) -> int:
        """1-based order within the round."""
        return parse_matchup_id(self.matchup_id)[1]

    @property
    def successor_id(self) -> str:
        return successor_id(self.matchup_id)

    @property
    def slots(self) -> tuple[PlayerSlot, PlayerSlot]:
        return self.slot_a, self.slot_b

    @property
    def is_decided(self) -> bool:
        return self.winner_entrant_id is not None

    @property
    def is_ready(self) -> bool:
        """Both sides hold real entrants and the result can be recorded."""
        return self.slot_a.is_filled and self.slot_b.is_filled and not self.is_decided

    @property
    def status(self) -> MatchupStatus:
        if self.is_decided:
            return MatchupStatus.COMPLETED
        if self.is_bye:
            return MatchupStatus.BYE
        if self.slot_a.is_filled and self.slot_b.is_filled:
            return MatchupStatus.ACTIVE
        return MatchupStatus.UPCOMING

    def slot_for(self, entrant_id: str) -> Optional[PlayerSlot]:
        """The slot occupied by entrant_id, if any."""
        for slot in self.slots:
            if slot.is_filled and slot.entrant_id == entrant_id:
                return slot
        return None

    def to_dict(self) -> dict:
        return {
            "matchup_id": self.matchup_id,
            "round_number": self.round_number,
            "slot_a": self.slot_a.to_dict(),
            "slot_b": self.slot_b.to_dict(),
            "winner_entrant_id": self.winner_entrant_id,
            "is_bye": self.is_bye,
            "is_placeholder": self.is_placeholder,
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Matchup":
        return cls(
            matchup_id=data["matchup_id"],
            round_number=data["round_number"],
            slot_a=PlayerSlot.from_dict(data["slot_a"]),
            slot_b=PlayerSlot.from_dict(data["slot_b"]),
            winner_entrant_id=data.get("winner_entrant_id"),
            is_bye=data.get("is_bye", False),
            is_placeholder=data.get("is_placeholder", False),
        )


@dataclass
class Bracket:
    """
    All matchups of one tournament run.

    Matchups keep their generation order. Only slot contents, winners and
    the two flags change after generation.
    """
    bracket_size: int
    matchups: dict[str, Matchup] = field(default_factory=dict)

    def __iter__(self) -> Iterator[Matchup]:
        return iter(self.matchups.values())

    def __len__(self) -> int:
        return len(self.matchups)

    def __contains__(self, matchup_id: object) -> bool:
        return matchup_id in self.matchups

    def get(self, matchup_id: str) -> Optional[Matchup]:
        return self.matchups.get(matchup_id)

    def rounds(self) -> dict[int, list[Matchup]]:
        """Matchups grouped by round number, in position order."""
        grouped: dict[int, list[Matchup]] = {}
        for matchup in self:
            grouped.setdefault(matchup.round_number, []).append(matchup)
        return grouped

    @property
    def round_count(self) -> int:
        return max((m.round_number for m in self), default=0)

    @property
    def final(self) -> Optional[Matchup]:
        """The one matchup without a successor."""
        for matchup in self:
            if matchup.successor_id not in self.matchups:
                return matchup
        return None

    @property
    def champion_id(self) -> Optional[str]:
        final = self.final
        return final.winner_entrant_id if final else None

    def to_dict(self) -> dict:
        return {
            "bracket_size": self.bracket_size,
            "matchups": [m.to_dict() for m in self],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Bracket":
        bracket = cls(bracket_size=data["bracket_size"])
        for m in data.get("matchups", []):
            matchup = Matchup.from_dict(m)
            bracket.matchups[matchup.matchup_id] = matchup
        return bracket
