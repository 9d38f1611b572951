"""
Entrant shuffling before seeding.
"""

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar("T")


def shuffle_entrants(entrants: Sequence[T], rng: Optional[random.Random] = None) -> list[T]:
    """
    Return a uniformly random permutation of entrants (Fisher-Yates).

    The input sequence is not modified. Pass a seeded random.Random
    to make the draw reproducible.
    """
    rng = rng or random
    shuffled = list(entrants)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
