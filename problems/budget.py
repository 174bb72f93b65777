# problems/budget.py

"""
Termination budget for a single trial.

A trial stops either after a fixed number of objective evaluations or
after a nominal runtime. Nominal seconds are measured against a reference
benchmark machine: `benchmark_factor` is the number of wall-clock seconds
this machine needs to do one nominal second of work.
"""

from dataclasses import dataclass
from typing import Optional

from problems.exceptions import ConfigurationError


@dataclass(frozen=True)
class Budget:
    """
    Evaluation and/or runtime limit shared by every operator of a trial.

    Attributes:
        evaluation_limit (Optional[int]): Maximum number of objective
            evaluations, or None for no evaluation limit.
        run_time (Optional[float]): Runtime limit in nominal seconds,
            or None for no time limit.
        benchmark_factor (float): Wall-clock seconds per nominal second.
    """
    evaluation_limit: Optional[int] = None
    run_time: Optional[float] = None
    benchmark_factor: float = 1.0

    def __post_init__(self):
        if self.evaluation_limit is None and self.run_time is None:
            raise ConfigurationError(
                "A budget needs an evaluation limit, a run time, or both."
            )
        if self.evaluation_limit is not None and self.evaluation_limit < 1:
            raise ConfigurationError(
                f"Evaluation limit must be at least 1, got {self.evaluation_limit}."
            )
        if self.run_time is not None and self.run_time <= 0:
            raise ConfigurationError(
                f"Run time must be a positive number of nominal seconds, got {self.run_time}."
            )
        if self.benchmark_factor <= 0:
            raise ConfigurationError(
                f"Benchmark factor must be positive, got {self.benchmark_factor}."
            )

    @property
    def wall_clock_limit(self) -> Optional[float]:
        """The runtime limit converted to seconds on this machine."""
        if self.run_time is None:
            return None
        return self.run_time * self.benchmark_factor

    def to_nominal(self, seconds: float) -> float:
        """Converts wall-clock seconds on this machine to nominal seconds."""
        return seconds / self.benchmark_factor

    def evaluations_exhausted(self, evaluations: int) -> bool:
        return self.evaluation_limit is not None and evaluations >= self.evaluation_limit

    def is_exhausted(self, evaluations: int, elapsed_seconds: float) -> bool:
        """
        Checks both configured limits.

        Args:
            evaluations (int): Objective evaluations performed so far.
            elapsed_seconds (float): Wall-clock seconds since the trial started.

        Returns:
            bool: True once either configured limit has been reached.
        """
        if self.evaluations_exhausted(evaluations):
            return True
        if self.run_time is not None and self.to_nominal(elapsed_seconds) >= self.run_time:
            return True
        return False

    def describe(self) -> str:
        parts = []
        if self.evaluation_limit is not None:
            parts.append(f"{self.evaluation_limit} evaluations")
        if self.run_time is not None:
            parts.append(f"{self.run_time:g} nominal seconds")
        return " or ".join(parts)
