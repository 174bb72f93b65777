import pytest

from utils.experiment import TrialResult
from utils.plotting import PlotType, results_to_frame, select_trials, traces_to_frame


def make_result(trial_id, best_value, trace=None, method_name="SBHC"):
    trace = trace if trace is not None else [best_value + 2, best_value]
    return TrialResult(
        domain="SAT", instance_id=0, trial_id=trial_id, seed=trial_id,
        method_name=method_name, heuristic_id=0, best_value=best_value,
        best_solution="0101", elapsed_seconds=0.1, nominal_elapsed_seconds=0.1,
        nominal_time_budget=1.0, evaluations=len(trace), fitness_trace=trace,
    )


@pytest.fixture
def results():
    return [make_result(0, 5), make_result(1, 2), make_result(2, 7), make_result(3, 2)]


def test_results_frame_has_one_row_per_trial(results):
    df = results_to_frame(results)

    assert len(df) == 4
    assert "fitness_trace" not in df.columns
    assert df["best_value"].tolist() == [5, 2, 7, 2]


def test_results_frame_rejects_empty_input():
    with pytest.raises(ValueError):
        results_to_frame([])


def test_traces_frame_is_long_form():
    df = traces_to_frame([make_result(0, 1, trace=[4, 3, 1]), make_result(1, 2, trace=[2])])

    assert len(df) == 4
    assert df["iteration"].tolist() == [0, 1, 2, 0]
    assert df["objective_value"].tolist() == [4, 3, 1, 2]


@pytest.mark.parametrize("plot_type,expected", [
    (PlotType.ALL, [0, 1, 2, 3]),
    (PlotType.BEST, [1]),
    (PlotType.WORST, [2]),
    (PlotType.BEST_AND_WORST, [1, 2]),
])
def test_select_trials(results, plot_type, expected):
    assert [r.trial_id for r in select_trials(results, plot_type)] == expected


def test_best_and_worst_of_a_single_trial():
    only = [make_result(0, 3)]

    assert len(select_trials(only, PlotType.BEST_AND_WORST)) == 1


def test_plots_are_saved(results, tmp_path):
    matplotlib = pytest.importorskip("matplotlib")
    pytest.importorskip("seaborn")
    matplotlib.use("Agg")
    from utils.plotting import plot_best_values, plot_fitness_traces

    box_path = tmp_path / "box.png"
    trace_path = tmp_path / "trace.png"
    plot_best_values(results_to_frame(results), save_path=str(box_path), show=False)
    plot_fitness_traces(results, PlotType.BEST_AND_WORST, save_path=str(trace_path), show=False)

    assert box_path.exists()
    assert trace_path.exists()
