# heuristics/base.py

"""
The capability shared by all SAT heuristics.

A heuristic is stateless with respect to the problem: it only keeps the
random source it was built with, and every call acts on one memory slot
of the problem it is given.
"""

import random
from typing import Protocol

from problems.sat import CURRENT_SOLUTION_INDEX, SATProblem


class SATHeuristic(Protocol):
    """Anything that can modify a solution slot of a `SATProblem`."""

    name: str

    def apply(self, problem: SATProblem, slot: int = CURRENT_SOLUTION_INDEX) -> None:
        ...


def shuffled_indices(n: int, rng: random.Random) -> list:
    """Returns a uniformly random permutation of range(n)."""
    order = list(range(n))
    rng.shuffle(order)
    return order
