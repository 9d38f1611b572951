"""
Bracketeer - Single-elimination bracket preview

Builds a tournament from the names given on the command line, plays it
out with random winners and prints every round and the champion.

    python main.py alice bob carol dave erin --seed 7
"""

import argparse
import random
import sys
from typing import Optional

from config import init_config, APP_NAME, APP_VERSION


def play_out(tournament, rng: random.Random) -> None:
    """Record a random winner for every playable matchup until the final is decided."""
    while not tournament.is_complete():
        for matchup in tournament.get_playable_matchups():
            winner = rng.choice(matchup.slots)
            tournament.record_winner(matchup.matchup_id, winner.entrant_id)


def format_bracket(bracket) -> list[str]:
    lines = []
    for round_number, matchups in bracket.rounds().items():
        lines.append(f"Round {round_number}")
        for m in matchups:
            marker_a = "*" if m.winner_entrant_id == m.slot_a.entrant_id else " "
            marker_b = "*" if m.winner_entrant_id == m.slot_b.entrant_id else " "
            lines.append(
                f"  {m.matchup_id:<6} {marker_a}{m.slot_a.display_name} vs "
                f"{marker_b}{m.slot_b.display_name}"
            )
    return lines


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the bracket preview."""
    parser = argparse.ArgumentParser(prog=APP_NAME.lower(), description=__doc__.splitlines()[1])
    parser.add_argument("names", nargs="+", help="entrant display names")
    parser.add_argument("--seed", type=int, default=None, help="random seed for draw and results")
    parser.add_argument("--version", action="version", version=f"{APP_NAME} {APP_VERSION}")
    args = parser.parse_args(argv)

    # Initialize configuration, directories and logging
    init_config()

    from engine.bracket import Entrant
    from engine.tournament import Tournament

    rng = random.Random(args.seed)
    tournament = Tournament(name="Preview", rng=rng)
    for i, name in enumerate(args.names, start=1):
        tournament.add_entrant(Entrant(f"e{i}", name))

    tournament.begin()
    play_out(tournament, rng)

    for line in format_bracket(tournament.bracket):
        print(line)
    print(f"Champion: {tournament.champion.display_name}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
