# heuristics/hill_climbing.py

"""
Single-flip hill climbing operators for MAX-SAT.

Both operators perform exactly one pass over the variables per call and
accept moves that keep the objective equal (plateau walking), so they
never make the solution in the slot worse.

Budget expiry is checked before every evaluation. When it is observed
the pass stops early and the slot is left without any pending tentative
flip, so the solution is always well-formed.
"""

import logging
import random
from typing import Optional

from heuristics.base import shuffled_indices
from problems.sat import CURRENT_SOLUTION_INDEX, SATProblem

logger = logging.getLogger(__name__)


class SingleBitHillClimbing:
    """
    First-improvement hill climbing in a random variable order
    (Davis's bit hill climbing).

    A random permutation of the variable indices is drawn for each pass.
    Each bit is flipped and kept if the new objective value is no worse
    than the best value seen so far in the pass; otherwise it is flipped
    back immediately.
    """

    name = "SBHC"

    def __init__(self, rng: random.Random):
        self.rng = rng

    def apply(self, problem: SATProblem, slot: int = CURRENT_SOLUTION_INDEX) -> None:
        if problem.has_budget_expired():
            return
        best = problem.objective_value(slot)

        for index in shuffled_indices(problem.number_of_variables, self.rng):
            if problem.has_budget_expired():
                break

            problem.bit_flip(index, slot)
            value = problem.objective_value(slot)

            if value <= best:
                best = value
            else:
                problem.bit_flip(index, slot)

    def __repr__(self) -> str:
        return "SingleBitHillClimbing()"


class SteepestDescentHillClimbing:
    """
    Best-improvement hill climbing.

    Every single-bit neighbour is tried from the same baseline, in natural
    variable order: flip, evaluate, flip back. After the scan the best
    neighbour is applied if it is no worse than the baseline. Among equally
    good neighbours the first one seen (lowest index) is chosen.

    The random source is unused, but kept so every heuristic is built
    the same way.
    """

    name = "SDHC"

    def __init__(self, rng: random.Random):
        self.rng = rng

    def apply(self, problem: SATProblem, slot: int = CURRENT_SOLUTION_INDEX) -> None:
        if problem.has_budget_expired():
            return
        best = problem.objective_value(slot)
        best_index: Optional[int] = None

        for index in range(problem.number_of_variables):
            if problem.has_budget_expired():
                break

            problem.bit_flip(index, slot)
            value = problem.objective_value(slot)
            problem.bit_flip(index, slot)

            # ties with the baseline are accepted once, later ties are not
            if value < best or (best_index is None and value == best):
                best = value
                best_index = index

        if best_index is not None:
            problem.bit_flip(best_index, slot)
            logger.debug("SDHC flipped variable %d (objective %d)", best_index, best)

    def __repr__(self) -> str:
        return "SteepestDescentHillClimbing()"
