import importlib.util
import os
import random

import pytest

from baselines.random_walk import RandomWalk
from problems.budget import Budget
from problems.sat import SATProblem

SCRIPTS_DIR = os.path.join(os.path.dirname(__file__), '..', 'scripts')


@pytest.fixture
def random_walk_script():
    path = os.path.join(SCRIPTS_DIR, "01_run_random_walk.py")
    module_spec = importlib.util.spec_from_file_location("run_random_walk", path)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


def test_random_walk_record_reports_measured_nominal_time(random_walk_script, random_instance,
                                                         stepping_clock):
    budget = Budget(run_time=3.0, benchmark_factor=2.0)
    problem = SATProblem(random_instance, budget, random.Random(4), clock=stepping_clock(0.25))
    walk = RandomWalk(random.Random(4))
    walk.run(problem)

    record = random_walk_script.trial_record(1, 4, problem, walk)

    assert record["nominal_time_budget"] == 3.0
    assert record["nominal_time_taken"] >= 3.0
    assert record["nominal_time_taken"] != record["nominal_time_budget"]
    assert record["best_value"] == problem.best_value()
    assert record["evaluations"] == problem.evaluation_count
    assert record["trial_id"] == 1 and record["seed"] == 4
