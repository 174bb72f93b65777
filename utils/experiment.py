# utils/experiment.py

"""
Runs trials of search methods and collects their results.

Each trial owns its own random source and its own `SATProblem`, so
trials never share mutable state and may run on a thread pool. Results
are always returned in trial order, which makes an experiment
reproducible regardless of how threads interleave.
"""

import concurrent.futures
import logging
import random
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Callable, Dict, List, Sequence

from tqdm import tqdm

from problems.instances import SATInstance
from problems.sat import CURRENT_SOLUTION_INDEX, SATProblem
from search_methods.base import SearchMethod
from utils.config import ExperimentConfig

logger = logging.getLogger(__name__)

# Builds a fresh search method around a trial's random source
MethodFactory = Callable[[random.Random], SearchMethod]


@dataclass(frozen=True)
class TrialResult:
    """
    Everything recorded about one trial.

    `fitness_trace` holds the objective value of the initial solution
    followed by one value per step of the search method.
    """
    domain: str
    instance_id: int
    trial_id: int
    seed: int
    method_name: str
    heuristic_id: int
    best_value: int
    best_solution: str
    elapsed_seconds: float
    nominal_elapsed_seconds: float
    nominal_time_budget: float
    evaluations: int
    fitness_trace: List[int] = field(default_factory=list)

    def to_record(self) -> Dict[str, Any]:
        """Flat record without the fitness trace, e.g. for a CSV row."""
        record = asdict(self)
        del record["fitness_trace"]
        return record


def run_trial(
    instance: SATInstance,
    config: ExperimentConfig,
    method_factory: MethodFactory,
    trial_id: int,
    seed: int,
    heuristic_id: int = 0,
    clock: Callable[[], float] = time.perf_counter
) -> TrialResult:
    """
    Runs one search method on a fresh problem until the budget expires.

    Args:
        instance (SATInstance): The instance to solve.
        config (ExperimentConfig): Supplies the budget.
        method_factory (MethodFactory): Builds the search method from
            the trial's random source.
        trial_id (int): Index of the trial.
        seed (int): Seed of the trial's random source.
        heuristic_id (int, optional): Index of the method in the experiment.
        clock (Callable[[], float], optional): Clock of the trial's budget.

    Returns:
        TrialResult: The trial's record and fitness trace.
    """
    rng = random.Random(seed)
    budget = config.budget()
    problem = SATProblem(instance, budget, rng, clock=clock)
    method = method_factory(rng)

    method.initialise(problem)
    trace = [problem.objective_value(CURRENT_SOLUTION_INDEX)]

    while not problem.has_budget_expired():
        value = method.step(problem)
        if value is not None:
            trace.append(value)

    result = TrialResult(
        domain=str(problem),
        instance_id=instance.instance_id,
        trial_id=trial_id,
        seed=seed,
        method_name=method.name,
        heuristic_id=heuristic_id,
        best_value=problem.best_value(),
        best_solution=problem.best_solution_as_string(),
        elapsed_seconds=problem.elapsed_time(),
        nominal_elapsed_seconds=problem.nominal_elapsed_time(),
        nominal_time_budget=budget.run_time if budget.run_time is not None else 0.0,
        evaluations=problem.evaluation_count,
        fitness_trace=trace,
    )
    logger.info(
        "Heuristic: %s | Run ID: %d | Best Solution Value: %d | Best Solution: %s",
        result.method_name, trial_id, result.best_value, result.best_solution
    )
    return result


def run_trials(
    instance: SATInstance,
    config: ExperimentConfig,
    method_factory: MethodFactory,
    heuristic_id: int = 0,
    show_progress: bool = False
) -> List[TrialResult]:
    """
    Runs `config.total_runs` trials of one search method.

    Trials run sequentially, or on a thread pool when `config.parallel`
    is set. Either way the returned list is ordered by trial ID.
    """
    seeds = config.experimental_seeds()

    def _run(trial_id: int) -> TrialResult:
        return run_trial(instance, config, method_factory, trial_id,
                         seeds[trial_id], heuristic_id)

    trial_ids = range(config.total_runs)

    if config.parallel:
        with concurrent.futures.ThreadPoolExecutor(max_workers=config.max_workers) as executor:
            results = executor.map(_run, trial_ids)
            return list(tqdm(results, total=config.total_runs,
                             desc=f"Trials (heuristic {heuristic_id})",
                             disable=not show_progress))

    return [_run(trial_id) for trial_id in tqdm(trial_ids,
                                                 desc=f"Trials (heuristic {heuristic_id})",
                                                 disable=not show_progress)]


def run_experiments(
    instance: SATInstance,
    config: ExperimentConfig,
    method_factories: Sequence[MethodFactory],
    show_progress: bool = False
) -> List[List[TrialResult]]:
    """
    Runs every search method for all trials.

    Returns:
        List[List[TrialResult]]: One inner list per method (indexed by
            heuristic ID), each ordered by trial ID.
    """
    return [
        run_trials(instance, config, factory, heuristic_id, show_progress)
        for heuristic_id, factory in enumerate(method_factories)
    ]
