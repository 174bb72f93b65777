# utils/plotting.py

import pandas as pd
from enum import Enum
from typing import List, Optional, Sequence

from utils.experiment import TrialResult

# Optional Dependency Handling
try:
    import matplotlib.pyplot as plt
    import seaborn as sns
    _MATPLOTLIB_AVAILABLE = True
except ImportError:
    _MATPLOTLIB_AVAILABLE = False


class PlotType(Enum):
    """Which trials of a method a fitness trace plot shows."""
    ALL = "all"
    BEST = "best"
    WORST = "worst"
    BEST_AND_WORST = "best_and_worst"


def _check_deps():
    """Private helper to raise a clear error if plotting libs are missing."""
    if not _MATPLOTLIB_AVAILABLE:
        raise ImportError(
            "Plotting requires 'matplotlib' and 'seaborn'.\n"
            "Please install them by running: pip install \".[analysis]\""
        )


def results_to_frame(results: Sequence[TrialResult]) -> pd.DataFrame:
    """
    One row per trial with the flat result record (no fitness trace).
    """
    if not results:
        raise ValueError("No trial results to convert.")
    return pd.DataFrame([r.to_record() for r in results])


def traces_to_frame(results: Sequence[TrialResult]) -> pd.DataFrame:
    """
    Long-form DataFrame of fitness traces: one row per (trial, iteration).
    """
    rows = []
    for r in results:
        for iteration, value in enumerate(r.fitness_trace):
            rows.append({
                "method_name": r.method_name,
                "heuristic_id": r.heuristic_id,
                "trial_id": r.trial_id,
                "iteration": iteration,
                "objective_value": value,
            })
    return pd.DataFrame(rows, columns=["method_name", "heuristic_id", "trial_id",
                                       "iteration", "objective_value"])


def select_trials(results: Sequence[TrialResult], plot_type: PlotType) -> List[TrialResult]:
    """
    Picks the trials a plot of type `plot_type` should show.

    BEST and WORST rank trials by best objective value (lower is better);
    ties go to the lowest trial ID.
    """
    if plot_type is PlotType.ALL or not results:
        return list(results)

    best = min(results, key=lambda r: (r.best_value, r.trial_id))
    worst = max(results, key=lambda r: (r.best_value, -r.trial_id))

    if plot_type is PlotType.BEST:
        return [best]
    if plot_type is PlotType.WORST:
        return [worst]
    return [best] if best is worst else [best, worst]


def plot_best_values(
    data: pd.DataFrame,
    title: str = "Best objective values per method",
    save_path: Optional[str] = None,
    show: bool = True
):
    """
    Generates a Box Plot comparing the distribution of the best objective
    value found by each method over its trials.

    Args:
        data (pd.DataFrame): Output of `results_to_frame`.
        title (str, optional): The title for the plot.
        save_path (str, optional): File path to save the plot.
        show (bool): Whether to display the plot.
    """
    _check_deps()

    plt.figure(figsize=(12, 8))
    sns.set_theme(style="whitegrid")

    sns.boxplot(data=data, x="method_name", y="best_value")

    plt.title(title, fontsize=14)
    plt.xlabel("Heuristic", fontsize=12)
    plt.ylabel("Objective Value", fontsize=12)
    plt.tight_layout()

    if save_path:
        plt.savefig(save_path, dpi=300)
    if show:
        plt.show()
    plt.close()


def plot_fitness_traces(
    results: Sequence[TrialResult],
    plot_type: PlotType = PlotType.ALL,
    title: Optional[str] = None,
    save_path: Optional[str] = None,
    show: bool = True
):
    """
    Plots the fitness traces (objective value vs. iteration) of one
    method's trials, one line per trial.

    Args:
        results: Trials of a single method.
        plot_type (PlotType): Which trials to include.
        title (str, optional): Defaults to a title naming the method.
        save_path (str, optional): The file path to save the plot image.
        show (bool): Whether to display the plot interactively.
    """
    _check_deps()

    selected = select_trials(results, plot_type)
    df = traces_to_frame(selected)
    if df.empty:
        raise ValueError("No fitness traces to plot.")

    df["trial"] = df["trial_id"].map(lambda t: f"Trial #{t}")
    method_name = df["method_name"].iloc[0]

    sns.set_theme(style="whitegrid")
    fig, ax = plt.subplots(figsize=(14, 8))

    sns.lineplot(data=df, x="iteration", y="objective_value", hue="trial", ax=ax)

    ax.set_title(title or f"Comparison of the fitness traces of {method_name}", fontsize=14)
    ax.set_xlabel("Iteration", fontsize=12)
    ax.set_ylabel("Objective value", fontsize=12)
    # Use bbox_to_anchor so many trials don't hide the curves
    ax.legend(title="Trial", loc='center left', bbox_to_anchor=(1, 0.5))

    if save_path:
        fig.savefig(save_path, dpi=300, bbox_inches='tight')
    if show:
        plt.show()
    plt.close(fig)
