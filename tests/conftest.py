import random

import pytest

from problems.budget import Budget
from problems.instances import SATInstance, generate_random_instance
from problems.sat import SATProblem


class FakeClock:
    """Manually advanced clock for runtime budget tests."""

    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def four_variable_instance():
    # (x1 v x2) (-x1 v x3) (x3 v x4) (-x2 v -x4) (x4)
    return SATInstance(
        num_variables=4,
        clauses=((1, 2), (-1, 3), (3, 4), (-2, -4), (4,)),
        instance_id=0,
        name="four-variables",
    )


@pytest.fixture
def random_instance():
    return generate_random_instance(30, 130, random.Random(7), instance_id=0)


@pytest.fixture
def make_problem():
    def _make(instance, evaluation_limit=10_000, seed=1, **kwargs):
        budget = Budget(evaluation_limit=evaluation_limit)
        return SATProblem(instance, budget, random.Random(seed), **kwargs)
    return _make


class SteppingClock(FakeClock):
    """Clock that moves forward by a fixed amount on every read."""

    def __init__(self, tick: float, now: float = 0.0):
        super().__init__(now)
        self.tick = tick

    def __call__(self) -> float:
        self.now += self.tick
        return self.now


@pytest.fixture
def stepping_clock():
    """Builds a clock that advances by `tick` seconds per read."""
    return SteppingClock
