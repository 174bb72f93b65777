# baselines/random_walk.py

"""
Implements a Random Walk over MAX-SAT assignments.

This module provides a `RandomWalk` class that serves as an
independent baseline search method. It has no acceptance test at all,
so any search method worth using should beat it.
"""

import random
import time
from typing import List, Optional

from heuristics.random_bit_flip import RandomBitFlip
from problems.sat import CURRENT_SOLUTION_INDEX, SATProblem


class RandomWalk:
    """
    Implements a random walk with the random bit flip heuristic.

    Each step flips one random bit of the solution in hand and evaluates
    the result. The evaluation is not used to decide anything; it only
    drives the problem's best-found tracking and the budget.
    The backup memory slot is never used.
    """

    name = "Random Walk"

    def __init__(self, rng: random.Random):
        """
        Initializes the random walk.

        Args:
            rng (random.Random): The trial's random source. It drives
                the random bit flip heuristic.
        """
        self.rng = rng
        self.random_bit_flip = RandomBitFlip(rng)

        # Wall-clock seconds of the last call to run()
        self.time_taken: Optional[float] = None

    def initialise(self, problem: SATProblem) -> None:
        problem.create_random_solution(CURRENT_SOLUTION_INDEX)

    def step(self, problem: SATProblem) -> int:
        """Flips one random bit and evaluates the solution in hand."""
        self.random_bit_flip.apply(problem, CURRENT_SOLUTION_INDEX)
        return problem.objective_value(CURRENT_SOLUTION_INDEX)

    def run(self, problem: SATProblem) -> List[int]:
        """
        Executes the random walk until the problem's budget expires.

        The initial random solution is evaluated first, so with an
        evaluation limit of 1 the walk never moves.

        Args:
            problem (SATProblem): A freshly created problem.

        Returns:
            List[int]: The fitness trace, i.e. the objective value of the
                initial solution followed by one value per step.
        """
        start = time.perf_counter()

        self.initialise(problem)
        trace = [problem.objective_value(CURRENT_SOLUTION_INDEX)]

        # Apply the search method until the budget is spent
        while not problem.has_budget_expired():
            trace.append(self.step(problem))

        self.time_taken = time.perf_counter() - start
        return trace

    def __str__(self) -> str:
        return self.name
