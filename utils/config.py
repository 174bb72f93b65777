# utils/config.py

"""
Immutable experiment configuration.

A configuration is built once by a lab script from its module-level
constants and passed explicitly to everything that needs it.
"""

import random
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from problems.budget import Budget
from problems.exceptions import ConfigurationError


def experimental_seeds(seeds: Sequence[int], total_runs: int) -> List[int]:
    """
    Produces one seed per trial.

    Explicit seeds are used first, in order. If there are fewer seeds
    than trials, the rest are drawn from a generator seeded with the
    first explicit seed, so the full list is always reproducible.

    Args:
        seeds (Sequence[int]): Explicit seeds (at least one).
        total_runs (int): Number of trials.

    Returns:
        List[int]: Exactly `total_runs` seeds.

    Raises:
        ConfigurationError: If no seed was supplied.
    """
    if not seeds:
        raise ConfigurationError("At least one experimental seed is required.")

    trial_seeds = list(seeds[:total_runs])
    if len(trial_seeds) < total_runs:
        generator = random.Random(seeds[0])
        trial_seeds.extend(
            generator.getrandbits(63) for _ in range(total_runs - len(trial_seeds))
        )
    return trial_seeds


@dataclass(frozen=True)
class ExperimentConfig:
    """
    Settings of one experiment: which instance, how many trials, which
    seeds, and the per-trial budget.

    Attributes:
        instance_id (int): ID of the SAT instance to load.
        total_runs (int): Number of trials per search method.
        seeds (Tuple[int, ...]): Explicit experimental seeds.
        run_time (Optional[float]): Nominal seconds per trial.
        evaluation_limit (Optional[int]): Evaluations per trial.
        benchmark_factor (float): Wall-clock seconds per nominal second.
        parallel (bool): Run the trials on a thread pool. Only allowed
            with an evaluation-limited budget.
        max_workers (Optional[int]): Thread pool size (None = default).
        method_name (str): Label used in titles and logs.
    """
    instance_id: int
    total_runs: int
    seeds: Tuple[int, ...]
    run_time: Optional[float] = None
    evaluation_limit: Optional[int] = None
    benchmark_factor: float = 1.0
    parallel: bool = False
    max_workers: Optional[int] = None
    method_name: str = ""

    def __post_init__(self):
        if self.total_runs < 1:
            raise ConfigurationError(f"total_runs must be >= 1, got {self.total_runs}.")
        if not self.seeds:
            raise ConfigurationError("At least one experimental seed is required.")
        if self.max_workers is not None and self.max_workers < 1:
            raise ConfigurationError(f"max_workers must be >= 1, got {self.max_workers}.")
        if self.parallel and self.run_time is not None:
            raise ConfigurationError(
                "Parallel trials need an evaluation limit only; a run_time "
                "budget makes results depend on the number of threads."
            )
        # Fail at startup rather than on the first trial
        self.budget()

    def budget(self) -> Budget:
        return Budget(
            evaluation_limit=self.evaluation_limit,
            run_time=self.run_time,
            benchmark_factor=self.benchmark_factor,
        )

    def experimental_seeds(self) -> List[int]:
        return experimental_seeds(self.seeds, self.total_runs)

    def describe(self) -> str:
        return (f"SAT instance #{self.instance_id} with a budget of "
                f"{self.budget().describe()} over {self.total_runs} trials.")


@dataclass(frozen=True)
class IteratedLocalSearchConfig:
    """
    Parameters of an iterated local search.

    Attributes:
        intensity_of_mutation (int): Mutation applications per step.
        depth_of_search (int): Local search applications per step.
        mutation (str): Name of the perturbation heuristic.
        local_search (str): Name of the intensification heuristic.
    """
    intensity_of_mutation: int = 1
    depth_of_search: int = 1
    mutation: str = "RBF"
    local_search: str = "SBHC"

    def __post_init__(self):
        if self.intensity_of_mutation < 0:
            raise ConfigurationError(
                f"intensity_of_mutation must be >= 0, got {self.intensity_of_mutation}."
            )
        if self.depth_of_search < 0:
            raise ConfigurationError(
                f"depth_of_search must be >= 0, got {self.depth_of_search}."
            )

    def describe(self) -> str:
        return (f"intensityOfMutation = {self.intensity_of_mutation} and "
                f"depthOfSearch = {self.depth_of_search}")
