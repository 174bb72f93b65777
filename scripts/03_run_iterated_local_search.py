# scripts/03_run_iterated_local_search.py

"""
Runs a grid of Iterated Local Search configurations on one instance.

Every (mutation, local search, intensity of mutation, depth of search)
combination is run for N trials with the same seeds. One JSON file is
saved per configuration in 'experiments/ils_results/' so a crash does not
lose finished work, and a box plot compares all configurations.
"""

import json
import logging
import os
import sys
import time
from dataclasses import replace
from typing import List

from tqdm import tqdm

# Path Setup
script_dir = os.path.dirname(__file__)
project_root = os.path.abspath(os.path.join(script_dir, '..'))
sys.path.append(project_root)

from problems.instances import load_instance
from utils.config import ExperimentConfig
from utils.experiment import TrialResult, run_trials
from utils.plotting import PlotType, plot_best_values, plot_fitness_traces, results_to_frame
from utils.strategy_builder import StrategyGridBuilder

# Experiment Configuration
INSTANCE_ID = 1
RUN_TIME = 10
TOTAL_RUNS = 31
SEEDS = (20251020,)
BENCHMARK_FACTOR = 1.0

# Thread pool execution is only allowed with an evaluation limit
ENABLE_PARALLEL_EXECUTION = False

# Strategy Component Definition
# This is the "control panel" for the experiment.
MUTATION_OPS = ["RBF"]
LOCAL_SEARCH_OPS = ["SBHC", "SDHC"]

# permitted values = 0, 1, 2, 3
INTENSITIES_OF_MUTATION = [0, 1, 2, 3]
DEPTHS_OF_SEARCH = [0, 1, 2, 3]

# I/O Configuration
INSTANCE_DIR = os.path.join(project_root, "data/sat_instances")
RESULTS_DIR = os.path.join(project_root, "experiments/ils_results")


def run_iterated_local_search():
    """
    Orchestrates the ILS experiment:
    1. Builds the strategy grid.
    2. Runs every configuration for all trials.
    3. Saves one result file per configuration.
    4. Plots the comparison.
    """
    config = ExperimentConfig(
        instance_id=INSTANCE_ID,
        total_runs=TOTAL_RUNS,
        seeds=SEEDS,
        run_time=RUN_TIME,
        benchmark_factor=BENCHMARK_FACTOR,
        parallel=ENABLE_PARALLEL_EXECUTION,
        method_name="Iterated Local Search",
    )

    # Build Strategy Grid
    print("Building strategy grid...")
    builder = StrategyGridBuilder(mutation_ops=MUTATION_OPS, local_search_ops=LOCAL_SEARCH_OPS)
    strategy_grid = builder.build_grid(INTENSITIES_OF_MUTATION, DEPTHS_OF_SEARCH)
    print(f"Grid built. Total strategies to test: {len(strategy_grid)}")

    try:
        instance = load_instance(config.instance_id, INSTANCE_DIR)
    except FileNotFoundError as e:
        print(f"Error: {e}")
        return

    os.makedirs(RESULTS_DIR, exist_ok=True)

    print(f"\n--- Starting ILS Experiment ---")
    print(f"  {config.describe()}")
    print(f"  Strategies to test: {len(strategy_grid)}")

    start_time = time.time()
    all_results: List[TrialResult] = []

    for heuristic_id, setup in enumerate(tqdm(strategy_grid, desc="Strategies")):
        results = run_trials(instance, config, setup["factory"], heuristic_id)

        # Label the trials with the recipe name, not the generic method name
        results = [replace(r, method_name=setup["name"]) for r in results]
        all_results.extend(results)

        results_path = os.path.join(RESULTS_DIR, f"{setup['name']}.json")
        with open(results_path, 'w') as f:
            json.dump({
                "configuration": setup["config"].describe(),
                "trials": [{**r.to_record(), "fitness_trace": r.fitness_trace} for r in results],
            }, f)

        print(f"\nTrialId\t{setup['name']}")
        for r in results:
            print(f"{r.trial_id}\t{r.best_value}")

    print(f"\n--- ILS Experiment Complete ---")
    print(f"Raw results saved to: {RESULTS_DIR}")
    print(f"Total time taken: {time.time() - start_time:.2f} seconds")

    # Plots
    df = results_to_frame(all_results)
    title = (f"Results produced by Iterated Local Search for solving SAT instance "
             f"{INSTANCE_ID} given {RUN_TIME} seconds over {TOTAL_RUNS} runs")
    plot_best_values(df, title=title, save_path=os.path.join(RESULTS_DIR, "ils_boxplot.png"))

    best_setup = df.groupby("method_name")["best_value"].mean().idxmin()
    plot_fitness_traces(
        [r for r in all_results if r.method_name == best_setup],
        PlotType.ALL,
        save_path=os.path.join(RESULTS_DIR, f"ils_trace_{best_setup}.png")
    )


if __name__ == "__main__":
    logging.basicConfig(level=logging.WARNING, format="%(asctime)s | %(message)s")
    run_iterated_local_search()
