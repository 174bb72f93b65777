# heuristics/random_bit_flip.py

import random

from problems.sat import CURRENT_SOLUTION_INDEX, SATProblem


class RandomBitFlip:
    """
    Perturbation operator: flips one uniformly chosen variable.

    There is no acceptance test and no evaluation; the flip is always kept.
    """

    name = "RBF"

    def __init__(self, rng: random.Random):
        self.rng = rng

    def apply(self, problem: SATProblem, slot: int = CURRENT_SOLUTION_INDEX) -> None:
        n = problem.number_of_variables
        if n == 0:
            return
        problem.bit_flip(self.rng.randrange(n), slot)

    def __repr__(self) -> str:
        return "RandomBitFlip()"
