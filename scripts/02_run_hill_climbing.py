# scripts/02_run_hill_climbing.py

"""
Compares Davis's bit hill climbing (SBHC) with steepest descent (SDHC).

Each heuristic is applied repeatedly to a random initial solution until
the budget expires, over N trials that share the same seeds. The script
prints the best objective value of every trial, saves all results to
'experiments/hill_climbing_results.json' and draws a box plot of the best
values plus one fitness trace plot per heuristic.
"""

import json
import logging
import os
import sys
import time
from typing import Callable, List

# Path Setup
script_dir = os.path.dirname(__file__)
project_root = os.path.abspath(os.path.join(script_dir, '..'))
sys.path.append(project_root)

from problems.instances import load_instance
from search_methods.heuristic_search import HeuristicSearch
from utils.config import ExperimentConfig
from utils.experiment import run_experiments
from utils.plotting import PlotType, plot_best_values, plot_fitness_traces, results_to_frame
from utils.strategy_builder import get_sat_heuristic

# Experiment Configuration
INSTANCE_ID = 2

# Runtime of each trial in nominal seconds
RUN_TIME = 5

TRIALS_PER_TEST = 11

# Heuristics under test, in heuristic ID order
HEURISTICS_TO_TEST = ("SBHC", "SDHC")

SEEDS = (20251013,)
BENCHMARK_FACTOR = 1.0

# Thread pool execution is only allowed with an evaluation limit
ENABLE_PARALLEL_EXECUTION = False

# Which trials appear in the fitness trace plots
TRACE_PLOT_TYPE = PlotType.BEST_AND_WORST

# I/O Configuration
INSTANCE_DIR = os.path.join(project_root, "data/sat_instances")
RESULTS_DIR = os.path.join(project_root, "experiments")
OUTPUT_FILE = os.path.join(RESULTS_DIR, "hill_climbing_results.json")


def heuristic_search_factory(heuristic_id: int) -> Callable:
    """Builds a HeuristicSearch around the heuristic with the given ID."""
    def build(rng):
        return HeuristicSearch(get_sat_heuristic(heuristic_id, rng, HEURISTICS_TO_TEST))
    return build


def run_hill_climbing():
    """
    Orchestrates the comparison:
    1. Loads the instance.
    2. Runs all trials for every heuristic.
    3. Prints and saves the results.
    4. Plots the results.
    """
    config = ExperimentConfig(
        instance_id=INSTANCE_ID,
        total_runs=TRIALS_PER_TEST,
        seeds=SEEDS,
        run_time=RUN_TIME,
        benchmark_factor=BENCHMARK_FACTOR,
        parallel=ENABLE_PARALLEL_EXECUTION,
        method_name=" and ".join(HEURISTICS_TO_TEST),
    )
    print(config.describe())

    try:
        instance = load_instance(config.instance_id, INSTANCE_DIR)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        return

    factories = [heuristic_search_factory(i) for i in range(len(HEURISTICS_TO_TEST))]

    start_time = time.time()
    all_results = run_experiments(instance, config, factories, show_progress=True)

    for heuristic_results in all_results:
        print(f"\nTrialId\t{heuristic_results[0].method_name}")
        for r in heuristic_results:
            print(f"{r.trial_id}\t{r.best_value}")

    # Save Results
    os.makedirs(RESULTS_DIR, exist_ok=True)
    payload: List[dict] = []
    for heuristic_results in all_results:
        for r in heuristic_results:
            record = r.to_record()
            record["fitness_trace"] = r.fitness_trace
            payload.append(record)
    with open(OUTPUT_FILE, 'w') as f:
        json.dump(payload, f)

    print(f"\nResults saved to: {OUTPUT_FILE}")
    print(f"Total time taken: {time.time() - start_time:.2f} seconds")

    # Plots
    df = results_to_frame([r for heuristic_results in all_results for r in heuristic_results])
    title = (f"Comparison of {' to '.join(HEURISTICS_TO_TEST)} for MAX-SAT instance "
             f"{INSTANCE_ID} given a nominal runtime of {RUN_TIME} seconds over "
             f"{TRIALS_PER_TEST} trials.")
    plot_best_values(df, title=title,
                     save_path=os.path.join(RESULTS_DIR, "hill_climbing_boxplot.png"))

    for heuristic_results in all_results:
        name = heuristic_results[0].method_name
        plot_fitness_traces(
            heuristic_results, TRACE_PLOT_TYPE,
            save_path=os.path.join(RESULTS_DIR, f"hill_climbing_trace_{name}.png")
        )


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s | %(message)s")
    run_hill_climbing()
