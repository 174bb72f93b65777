# problems/sat.py

"""
The MAX-SAT problem abstraction used by every heuristic and search method.

A `SATProblem` owns the solutions of one trial. Solutions are boolean
vectors stored in numbered memory slots (slot 0 holds the solution in
hand, slot 1 its backup). The problem evaluates them, remembers the best
solution it has ever evaluated, and enforces the trial's budget.

Objective values count violated clauses, so lower is better.
"""

import logging
import random
import time
from typing import Callable, Dict, Optional, Sequence

import numpy as np

from problems.budget import Budget
from problems.exceptions import BudgetExpiredError
from problems.instances import SATInstance

logger = logging.getLogger(__name__)

# Memory slot conventions shared by heuristics and search methods
CURRENT_SOLUTION_INDEX = 0
BACKUP_SOLUTION_INDEX = 1


class SATProblem:
    """
    Solution memory, objective evaluation and budget for one trial.

    The instance structure is converted once into a padded literal matrix
    so that a full evaluation is a handful of vectorised numpy operations.
    Each slot also caches its last computed objective value; flipping a
    bit invalidates the cache, copying a solution carries it along.
    """

    def __init__(
        self,
        instance: SATInstance,
        budget: Budget,
        rng: random.Random,
        clock: Callable[[], float] = time.perf_counter
    ):
        """
        Initializes the problem for a single trial.

        Args:
            instance (SATInstance): The (immutable) instance to solve.
            budget (Budget): Evaluation and/or runtime limit of the trial.
            rng (random.Random): The trial's random source, used to
                create random solutions.
            clock (Callable[[], float], optional): Monotonic clock in
                seconds. The budget clock starts now.
        """
        self.instance = instance
        self.budget = budget
        self._rng = rng
        self._clock = clock
        self._start_time = clock()

        self._solutions: Dict[int, np.ndarray] = {}
        self._cached_values: Dict[int, Optional[int]] = {}

        self._evaluations = 0
        # Set once a budget check observes the deadline; never cleared
        self._expired = False
        self._best_value: Optional[int] = None
        self._best_solution: Optional[np.ndarray] = None

        # Padded literal matrix: row = clause, column = literal position
        num_clauses = instance.num_clauses
        width = max((len(clause) for clause in instance.clauses), default=0)
        self._literal_vars = np.zeros((num_clauses, width), dtype=np.intp)
        self._literal_negated = np.zeros((num_clauses, width), dtype=bool)
        self._literal_mask = np.zeros((num_clauses, width), dtype=bool)

        for row, clause in enumerate(instance.clauses):
            for col, literal in enumerate(clause):
                self._literal_vars[row, col] = abs(literal) - 1
                self._literal_negated[row, col] = literal < 0
                self._literal_mask[row, col] = True

    # Instance information

    @property
    def number_of_variables(self) -> int:
        return self.instance.num_variables

    @property
    def number_of_clauses(self) -> int:
        return self.instance.num_clauses

    @property
    def evaluation_count(self) -> int:
        """Number of objective evaluations consumed so far."""
        return self._evaluations

    # Solution memory

    def _solution(self, slot: int) -> np.ndarray:
        try:
            return self._solutions[slot]
        except KeyError:
            raise ValueError(f"Memory slot {slot} does not hold a solution.") from None

    def create_random_solution(self, slot: int) -> None:
        """
        Fills `slot` with an unbiased random assignment.

        Does not consume any evaluation budget.
        """
        self._solutions[slot] = np.array(
            [self._rng.random() < 0.5 for _ in range(self.number_of_variables)],
            dtype=bool
        )
        self._cached_values[slot] = None

    def load_solution(self, slot: int, values: Sequence[bool]) -> None:
        """
        Stores an explicit assignment in `slot`.

        Raises:
            ValueError: If the assignment has the wrong length.
        """
        solution = np.array(values, dtype=bool)
        if solution.shape != (self.number_of_variables,):
            raise ValueError(
                f"Expected a solution of {self.number_of_variables} variables, "
                f"got shape {solution.shape}."
            )
        self._solutions[slot] = solution
        self._cached_values[slot] = None

    def get_solution(self, slot: int) -> np.ndarray:
        """Returns a copy of the solution in `slot`."""
        return self._solution(slot).copy()

    def bit_flip(self, variable_index: int, slot: int) -> None:
        """Toggles one variable of the solution in `slot`. Does not evaluate."""
        solution = self._solution(slot)
        if not 0 <= variable_index < solution.size:
            raise IndexError(
                f"Variable index {variable_index} is out of range "
                f"for {solution.size} variables."
            )
        solution[variable_index] = not solution[variable_index]
        self._cached_values[slot] = None

    def copy_solution(self, from_slot: int, to_slot: int) -> None:
        """Deep-copies the solution (and its cached value) over another slot."""
        self._solutions[to_slot] = self._solution(from_slot).copy()
        self._cached_values[to_slot] = self._cached_values.get(from_slot)

    def solution_as_string(self, slot: int) -> str:
        return _encode(self._solution(slot))

    # Evaluation

    def _count_unsatisfied(self, solution: np.ndarray) -> int:
        values = solution[self._literal_vars] != self._literal_negated
        satisfied = np.any(values & self._literal_mask, axis=1)
        return int(self.number_of_clauses - np.count_nonzero(satisfied))

    def objective_value(self, slot: int) -> int:
        """
        Returns the number of violated clauses of the solution in `slot`.

        Every call consumes one evaluation, even when the cached value of
        an unchanged slot is returned, and updates best-found tracking.

        Raises:
            BudgetExpiredError: If the evaluation limit has been reached, or
                `has_budget_expired()` has already reported expiry.
                Callers must check `has_budget_expired()` first.
        """
        if self._expired or self.budget.evaluations_exhausted(self._evaluations):
            raise BudgetExpiredError(
                f"Objective evaluation requested after the budget of "
                f"{self.budget.describe()} expired "
                f"({self._evaluations} evaluations, "
                f"{self.nominal_elapsed_time():.3f} nominal seconds)."
            )

        solution = self._solution(slot)
        value = self._cached_values.get(slot)
        if value is None:
            value = self._count_unsatisfied(solution)
            self._cached_values[slot] = value

        self._evaluations += 1

        if self._best_value is None or value < self._best_value:
            self._best_value = value
            self._best_solution = solution.copy()
            logger.debug("New best %d after %d evaluations", value, self._evaluations)

        return value

    # Budget

    def elapsed_time(self) -> float:
        """Wall-clock seconds since the problem was created."""
        return self._clock() - self._start_time

    def nominal_elapsed_time(self) -> float:
        return self.budget.to_nominal(self.elapsed_time())

    def has_budget_expired(self) -> bool:
        """
        Checks both limits and latches the result.

        Once this returns True it keeps returning True. A runtime deadline
        only counts as expired after a call here has observed it, so an
        evaluation that follows a False answer is always allowed.
        """
        if not self._expired:
            self._expired = self.budget.is_exhausted(self._evaluations, self.elapsed_time())
        return self._expired

    # Best-found snapshot

    def best_value(self) -> Optional[int]:
        """Lowest objective value evaluated so far, or None before any evaluation."""
        return self._best_value

    def best_solution_as_string(self) -> str:
        if self._best_solution is None:
            return ""
        return _encode(self._best_solution)

    def __str__(self) -> str:
        return self.instance.domain

    def __repr__(self) -> str:
        return (f"SATProblem(instance='{self.instance.name}', "
                f"variables={self.number_of_variables}, "
                f"clauses={self.number_of_clauses})")


def _encode(solution: np.ndarray) -> str:
    """Encodes a boolean vector as a string of '0'/'1' in variable order."""
    return "".join('1' if bit else '0' for bit in solution)
