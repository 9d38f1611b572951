"""
Tests for Winner Advancement

Tests result recording, slot routing into the next round, bye
auto-resolution and the rejection paths that must leave the bracket
untouched.
"""

import pytest
from engine.advancement import record_winner
from engine.bracket import Entrant, MatchupStatus
from engine.bracket_generator import build_regular_rounds, generate_bracket
from engine.errors import AlreadyDecided, InvalidMatchupId, InvalidWinnerSelection


def make_entrants(names: str) -> list[Entrant]:
    return [Entrant(name, f"Player {name}") for name in names]


class TestRecordWinner:
    """Tests for recording results in a four-entrant bracket."""

    def setup_method(self):
        self.bracket = generate_bracket(make_entrants("ABCD"))

    def test_winner_fills_slot_a_of_successor(self):
        result = record_winner(self.bracket, "R1M1", "A")

        r1m1 = self.bracket.get("R1M1")
        assert r1m1.winner_entrant_id == "A"
        assert r1m1.slot_a.score == 1
        assert r1m1.slot_b.score == 0
        assert r1m1.status == MatchupStatus.COMPLETED

        final = self.bracket.get("R2M1")
        assert final.slot_a.entrant_id == "A"
        assert final.slot_a.display_name == "Player A"
        assert final.slot_a.score == 0
        # The other side is still waiting on R1M2
        assert final.is_placeholder
        assert final.slot_b.display_name == "Winner of R1M2"

        assert result.decided == ["R1M1"]
        assert not result.completed
        assert result.champion_id is None

    def test_even_position_fills_slot_b(self):
        record_winner(self.bracket, "R1M2", "D")

        final = self.bracket.get("R2M1")
        assert final.slot_b.entrant_id == "D"
        assert final.slot_a.entrant_id is None

    def test_both_feeders_make_final_playable(self):
        record_winner(self.bracket, "R1M1", "B")
        record_winner(self.bracket, "R1M2", "C")

        final = self.bracket.get("R2M1")
        assert not final.is_placeholder
        assert final.is_ready
        assert final.status == MatchupStatus.ACTIVE

    def test_final_completes_bracket(self):
        record_winner(self.bracket, "R1M1", "A")
        record_winner(self.bracket, "R1M2", "C")
        result = record_winner(self.bracket, "R2M1", "C")

        assert result.completed
        assert result.champion_id == "C"
        assert self.bracket.champion_id == "C"

    def test_same_bracket_is_returned(self):
        result = record_winner(self.bracket, "R1M1", "A")
        assert result.bracket is self.bracket


class TestRejectedResults:
    """Rejected results must not change the bracket."""

    def setup_method(self):
        self.bracket = generate_bracket(make_entrants("ABCD"))

    def test_already_decided(self):
        record_winner(self.bracket, "R1M1", "A")
        before = self.bracket.to_dict()

        with pytest.raises(AlreadyDecided):
            record_winner(self.bracket, "R1M1", "B")

        assert self.bracket.to_dict() == before

    def test_already_decided_even_for_same_winner(self):
        record_winner(self.bracket, "R1M1", "A")

        with pytest.raises(AlreadyDecided):
            record_winner(self.bracket, "R1M1", "A")

    def test_winner_not_in_matchup(self):
        before = self.bracket.to_dict()

        with pytest.raises(InvalidWinnerSelection):
            record_winner(self.bracket, "R1M1", "C")

        assert self.bracket.to_dict() == before

    def test_unknown_entrant(self):
        with pytest.raises(InvalidWinnerSelection):
            record_winner(self.bracket, "R1M1", "nobody")

    def test_none_winner(self):
        with pytest.raises(InvalidWinnerSelection):
            record_winner(self.bracket, "R1M1", None)

    def test_matchup_waiting_on_feeder(self):
        """A winner cannot be recorded while the other side is a placeholder."""
        record_winner(self.bracket, "R1M1", "A")
        before = self.bracket.to_dict()

        with pytest.raises(InvalidWinnerSelection):
            record_winner(self.bracket, "R2M1", "A")

        assert self.bracket.to_dict() == before

    def test_missing_matchup(self):
        with pytest.raises(InvalidMatchupId):
            record_winner(self.bracket, "R5M1", "A")

    def test_malformed_matchup_id(self):
        with pytest.raises(InvalidMatchupId):
            record_winner(self.bracket, "final", "A")

    def test_preset_bye_is_already_decided(self):
        bracket = generate_bracket(make_entrants("ABC"))

        with pytest.raises(AlreadyDecided):
            record_winner(bracket, "R1M2", "C")


class TestPreliminaryRound:
    """Tests for advancement out of a preliminary round."""

    def test_three_entrants(self):
        bracket = generate_bracket(make_entrants("ABC"))

        record_winner(bracket, "R1M1", "B")
        final = bracket.get("R2M1")
        assert final.slot_a.entrant_id == "B"
        assert final.slot_b.entrant_id == "C"
        assert not final.is_placeholder

        result = record_winner(bracket, "R2M1", "C")
        assert result.completed
        assert bracket.champion_id == "C"

    def test_five_entrants(self):
        bracket = generate_bracket(make_entrants("ABCDE"))

        record_winner(bracket, "R1M1", "A")
        record_winner(bracket, "R2M1", "C")
        record_winner(bracket, "R2M2", "E")

        final = bracket.get("R3M1")
        assert (final.slot_a.entrant_id, final.slot_b.entrant_id) == ("C", "E")
        assert record_winner(bracket, "R3M1", "E").champion_id == "E"


class TestByeChaining:
    """Tests for winners passing through unresolved byes."""

    def setup_method(self):
        # R1M1 p1-p2, R1M2 p3-p4, R1M3 p5-p6
        # R2M1 (W R1M1, W R1M2), R2M2 (W R1M3, BYE)
        # R3M1 (W R2M1, W R1M3)
        self.bracket = build_regular_rounds(make_entrants(["p1", "p2", "p3", "p4", "p5", "p6"]))

    def test_winner_passes_through_bye(self):
        result = record_winner(self.bracket, "R1M3", "p5")

        bye = self.bracket.get("R2M2")
        assert bye.winner_entrant_id == "p5"
        assert not bye.is_bye
        assert not bye.is_placeholder
        assert bye.slot_a.entrant_id == "p5"
        assert bye.slot_a.score == 1
        assert bye.slot_b.is_bye

        final = self.bracket.get("R3M1")
        assert final.slot_b.entrant_id == "p5"
        assert final.slot_b.score == 0

        assert result.decided == ["R1M3", "R2M2"]
        assert not result.completed

    def test_bye_resolution_is_single_step_for_caller(self):
        record_winner(self.bracket, "R1M3", "p6")

        with pytest.raises(AlreadyDecided):
            record_winner(self.bracket, "R2M2", "p6")

    def test_unresolved_bye_rejects_manual_result(self):
        with pytest.raises(InvalidWinnerSelection):
            record_winner(self.bracket, "R2M2", "p5")

    def test_full_run(self):
        record_winner(self.bracket, "R1M1", "p1")
        record_winner(self.bracket, "R1M2", "p4")
        record_winner(self.bracket, "R1M3", "p6")
        record_winner(self.bracket, "R2M1", "p4")

        final = self.bracket.get("R3M1")
        assert (final.slot_a.entrant_id, final.slot_b.entrant_id) == ("p4", "p6")

        result = record_winner(self.bracket, "R3M1", "p6")
        assert result.completed
        assert result.champion_id == "p6"


class TestAnnotations:
    """Winner lookups are typed as optional entrant ids."""

    def test_optional_return_types(self):
        from typing import Optional, get_type_hints

        from engine.advancement import AdvancementResult, _refresh_flags

        assert get_type_hints(AdvancementResult.champion_id.fget)["return"] == Optional[str]
        assert get_type_hints(_refresh_flags)["return"] == Optional[str]
