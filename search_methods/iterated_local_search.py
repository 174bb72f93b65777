# search_methods/iterated_local_search.py

"""
Iterated Local Search (ILS) over two memory slots.

The solution in hand lives in the CURRENT slot and the last accepted
solution in the BACKUP slot. Both slots hold the same solution at the
start and at the end of every step. A step perturbs CURRENT, refines it
with local search, and then either commits it to BACKUP (accept) or
restores it from BACKUP (reject).
"""

import logging
from enum import Enum

from heuristics.base import SATHeuristic
from problems.exceptions import ConfigurationError
from problems.sat import BACKUP_SOLUTION_INDEX, CURRENT_SOLUTION_INDEX, SATProblem

logger = logging.getLogger(__name__)


class IterationState(Enum):
    """Where the search is within the current step."""
    IDLE = "idle"
    PERTURBING = "perturbing"
    INTENSIFYING = "intensifying"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


class IteratedLocalSearch:
    """
    Perturb, intensify, then accept if no worse, else revert.

    Pseudo-code of one step:

        best <- f(s)
        repeat intensity_of_mutation times: s' <- mutation(s')
        repeat depth_of_search times:       s' <- local_search(s')
        if f(s') <= best: accept (BACKUP <- CURRENT)
        else:             reject (CURRENT <- BACKUP)

    An intensity of 0 gives a pure local search, a depth of 0 gives a
    perturbation-only search; both 0 never changes the solution.
    """

    name = "Iterated Local Search"

    def __init__(
        self,
        mutation: SATHeuristic,
        local_search: SATHeuristic,
        intensity_of_mutation: int = 1,
        depth_of_search: int = 1
    ):
        """
        Args:
            mutation (SATHeuristic): The perturbation heuristic.
            local_search (SATHeuristic): The intensification heuristic.
            intensity_of_mutation (int): Applications of `mutation` per step.
            depth_of_search (int): Applications of `local_search` per step.

        Raises:
            ConfigurationError: If either parameter is negative.
        """
        if intensity_of_mutation < 0:
            raise ConfigurationError(
                f"Intensity of mutation must be >= 0, got {intensity_of_mutation}."
            )
        if depth_of_search < 0:
            raise ConfigurationError(
                f"Depth of search must be >= 0, got {depth_of_search}."
            )

        self.mutation = mutation
        self.local_search = local_search
        self.intensity_of_mutation = intensity_of_mutation
        self.depth_of_search = depth_of_search
        self.state = IterationState.IDLE

    def initialise(self, problem: SATProblem) -> None:
        problem.create_random_solution(CURRENT_SOLUTION_INDEX)
        problem.copy_solution(CURRENT_SOLUTION_INDEX, BACKUP_SOLUTION_INDEX)
        self.state = IterationState.IDLE

    def step(self, problem: SATProblem) -> int:
        """
        Runs one perturb -> intensify -> accept/reject iteration.

        Must only be called while the budget has not expired. If the
        budget runs out before the acceptance test can evaluate the
        candidate, the candidate is rejected.

        Returns:
            int: The objective value of CURRENT after the step.
        """
        best = problem.objective_value(CURRENT_SOLUTION_INDEX)

        self.state = IterationState.PERTURBING
        for _ in range(self.intensity_of_mutation):
            self.mutation.apply(problem, CURRENT_SOLUTION_INDEX)

        self.state = IterationState.INTENSIFYING
        for _ in range(self.depth_of_search):
            self.local_search.apply(problem, CURRENT_SOLUTION_INDEX)

        if problem.has_budget_expired():
            return self._reject(problem, best)

        candidate = problem.objective_value(CURRENT_SOLUTION_INDEX)
        if candidate <= best:
            problem.copy_solution(CURRENT_SOLUTION_INDEX, BACKUP_SOLUTION_INDEX)
            self.state = IterationState.ACCEPTED
            logger.debug("Accepted candidate %d (previous %d)", candidate, best)
            return candidate

        return self._reject(problem, best)

    def _reject(self, problem: SATProblem, best: int) -> int:
        problem.copy_solution(BACKUP_SOLUTION_INDEX, CURRENT_SOLUTION_INDEX)
        self.state = IterationState.REJECTED
        return best

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return (f"IteratedLocalSearch(mutation={self.mutation.name}, "
                f"local_search={self.local_search.name}, "
                f"intensity_of_mutation={self.intensity_of_mutation}, "
                f"depth_of_search={self.depth_of_search})")
