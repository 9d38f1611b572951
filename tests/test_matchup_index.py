"""
Tests for matchup addressing and entrant shuffling.
"""

import random

import pytest
from engine.errors import InvalidMatchupId
from engine.matchup_index import (
    SLOT_A,
    SLOT_B,
    format_matchup_id,
    parse_matchup_id,
    successor_id,
    successor_slot,
)
from engine.shuffle import shuffle_entrants


class TestMatchupIds:
    """Tests for formatting and parsing R{round}M{position} ids."""

    def test_format(self):
        assert format_matchup_id(1, 1) == "R1M1"
        assert format_matchup_id(3, 12) == "R3M12"

    def test_parse_inverts_format(self):
        assert parse_matchup_id("R2M7") == (2, 7)
        assert parse_matchup_id(format_matchup_id(10, 33)) == (10, 33)

    @pytest.mark.parametrize("bad_id", ["", "R1", "M1", "r1m1", "R1M", "RxM1", "R0M1", "R1M0", "R1M1 ", None])
    def test_malformed_ids_rejected(self, bad_id):
        with pytest.raises(InvalidMatchupId):
            parse_matchup_id(bad_id)

    def test_format_rejects_zero(self):
        with pytest.raises(InvalidMatchupId):
            format_matchup_id(0, 1)

    def test_invalid_id_is_a_value_error(self):
        """Callers catching ValueError also catch malformed ids."""
        with pytest.raises(ValueError):
            parse_matchup_id("final")


class TestSuccessors:
    """Tests for winner routing into the next round."""

    def test_successor_halves_position(self):
        assert successor_id("R1M1") == "R2M1"
        assert successor_id("R1M2") == "R2M1"
        assert successor_id("R1M3") == "R2M2"
        assert successor_id("R3M8") == "R4M4"

    def test_odd_positions_fill_slot_a(self):
        assert successor_slot("R1M1") == SLOT_A
        assert successor_slot("R2M5") == SLOT_A

    def test_even_positions_fill_slot_b(self):
        assert successor_slot("R1M2") == SLOT_B
        assert successor_slot("R2M6") == SLOT_B


class TestShuffle:
    """Tests for the Fisher-Yates entrant shuffle."""

    def test_empty(self):
        assert shuffle_entrants([]) == []

    def test_returns_permutation(self):
        items = list(range(20))
        shuffled = shuffle_entrants(items)
        assert sorted(shuffled) == items

    def test_input_untouched(self):
        items = ["a", "b", "c", "d"]
        shuffle_entrants(items, random.Random(1))
        assert items == ["a", "b", "c", "d"]

    def test_seeded_rng_is_reproducible(self):
        items = list(range(16))
        assert shuffle_entrants(items, random.Random(42)) == shuffle_entrants(items, random.Random(42))

    def test_every_position_reachable(self):
        """Over many draws, every entrant lands first at least once."""
        rng = random.Random(3)
        firsts = {shuffle_entrants(["a", "b", "c"], rng)[0] for _ in range(200)}
        assert firsts == {"a", "b", "c"}
