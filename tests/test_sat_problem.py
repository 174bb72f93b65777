import random

import numpy as np
import pytest

from problems.budget import Budget
from problems.exceptions import BudgetExpiredError, ConfigurationError
from problems.instances import SATInstance
from problems.sat import BACKUP_SOLUTION_INDEX, CURRENT_SOLUTION_INDEX, SATProblem


def test_objective_counts_unsatisfied_clauses(four_variable_instance, make_problem):
    problem = make_problem(four_variable_instance)

    problem.load_solution(CURRENT_SOLUTION_INDEX, [False, False, False, False])
    assert problem.objective_value(CURRENT_SOLUTION_INDEX) == 3

    problem.load_solution(CURRENT_SOLUTION_INDEX, [True, False, True, True])
    assert problem.objective_value(CURRENT_SOLUTION_INDEX) == 0


def test_bit_flip_is_its_own_inverse(random_instance, make_problem):
    problem = make_problem(random_instance)
    problem.create_random_solution(CURRENT_SOLUTION_INDEX)
    before = problem.get_solution(CURRENT_SOLUTION_INDEX)
    value_before = problem.objective_value(CURRENT_SOLUTION_INDEX)

    for index in range(problem.number_of_variables):
        problem.bit_flip(index, CURRENT_SOLUTION_INDEX)
        assert problem.get_solution(CURRENT_SOLUTION_INDEX)[index] != before[index]
        problem.bit_flip(index, CURRENT_SOLUTION_INDEX)
        assert np.array_equal(problem.get_solution(CURRENT_SOLUTION_INDEX), before)
        assert problem.objective_value(CURRENT_SOLUTION_INDEX) == value_before


def test_flip_and_copy_do_not_evaluate(random_instance, make_problem):
    problem = make_problem(random_instance)
    problem.create_random_solution(CURRENT_SOLUTION_INDEX)
    problem.bit_flip(3, CURRENT_SOLUTION_INDEX)
    problem.copy_solution(CURRENT_SOLUTION_INDEX, BACKUP_SOLUTION_INDEX)

    assert problem.evaluation_count == 0


def test_every_evaluation_is_counted_even_when_cached(random_instance, make_problem):
    problem = make_problem(random_instance)
    problem.create_random_solution(CURRENT_SOLUTION_INDEX)

    values = [problem.objective_value(CURRENT_SOLUTION_INDEX) for _ in range(7)]

    assert problem.evaluation_count == 7
    assert len(set(values)) == 1


def test_copy_is_deep(random_instance, make_problem):
    problem = make_problem(random_instance)
    problem.create_random_solution(CURRENT_SOLUTION_INDEX)
    problem.copy_solution(CURRENT_SOLUTION_INDEX, BACKUP_SOLUTION_INDEX)

    problem.bit_flip(0, CURRENT_SOLUTION_INDEX)

    assert (problem.get_solution(CURRENT_SOLUTION_INDEX)[0]
            != problem.get_solution(BACKUP_SOLUTION_INDEX)[0])


def test_copied_slot_keeps_correct_value(random_instance, make_problem):
    problem = make_problem(random_instance)
    problem.create_random_solution(CURRENT_SOLUTION_INDEX)
    original = problem.objective_value(CURRENT_SOLUTION_INDEX)
    problem.copy_solution(CURRENT_SOLUTION_INDEX, BACKUP_SOLUTION_INDEX)

    for index in range(5):
        problem.bit_flip(index, CURRENT_SOLUTION_INDEX)
    problem.objective_value(CURRENT_SOLUTION_INDEX)

    assert problem.objective_value(BACKUP_SOLUTION_INDEX) == original
    problem.copy_solution(BACKUP_SOLUTION_INDEX, CURRENT_SOLUTION_INDEX)
    assert problem.objective_value(CURRENT_SOLUTION_INDEX) == original


def test_evaluation_limit_is_a_hard_precondition(random_instance, make_problem):
    problem = make_problem(random_instance, evaluation_limit=3)
    problem.create_random_solution(CURRENT_SOLUTION_INDEX)

    for _ in range(3):
        assert not problem.has_budget_expired()
        problem.objective_value(CURRENT_SOLUTION_INDEX)

    assert problem.has_budget_expired()
    with pytest.raises(BudgetExpiredError, match="3 evaluations"):
        problem.objective_value(CURRENT_SOLUTION_INDEX)
    assert problem.evaluation_count == 3


def test_single_evaluation_budget(random_instance, make_problem):
    problem = make_problem(random_instance, evaluation_limit=1)
    problem.create_random_solution(CURRENT_SOLUTION_INDEX)

    assert not problem.has_budget_expired()
    problem.objective_value(CURRENT_SOLUTION_INDEX)
    assert problem.has_budget_expired()


def test_runtime_budget_uses_benchmark_factor(random_instance, fake_clock):
    budget = Budget(run_time=2.0, benchmark_factor=1.5)
    problem = SATProblem(random_instance, budget, random.Random(0), clock=fake_clock)
    problem.create_random_solution(CURRENT_SOLUTION_INDEX)

    fake_clock.advance(2.9)
    assert not problem.has_budget_expired()
    problem.objective_value(CURRENT_SOLUTION_INDEX)

    fake_clock.advance(0.6)
    assert problem.nominal_elapsed_time() == pytest.approx(3.5 / 1.5)
    assert problem.has_budget_expired()
    with pytest.raises(BudgetExpiredError):
        problem.objective_value(CURRENT_SOLUTION_INDEX)


def test_either_limit_ends_the_budget(random_instance, fake_clock):
    budget = Budget(evaluation_limit=100, run_time=1.0)
    problem = SATProblem(random_instance, budget, random.Random(0), clock=fake_clock)
    problem.create_random_solution(CURRENT_SOLUTION_INDEX)
    problem.objective_value(CURRENT_SOLUTION_INDEX)

    fake_clock.advance(1.0)
    assert problem.has_budget_expired()


def test_best_value_is_running_minimum(random_instance, make_problem):
    problem = make_problem(random_instance)
    assert problem.best_value() is None
    assert problem.best_solution_as_string() == ""

    problem.create_random_solution(CURRENT_SOLUTION_INDEX)
    rng = random.Random(3)
    seen = []
    for _ in range(200):
        problem.bit_flip(rng.randrange(problem.number_of_variables), CURRENT_SOLUTION_INDEX)
        seen.append(problem.objective_value(CURRENT_SOLUTION_INDEX))
        assert problem.best_value() == min(seen)


def test_best_solution_string_matches_best_value(random_instance, make_problem):
    problem = make_problem(random_instance)
    problem.create_random_solution(CURRENT_SOLUTION_INDEX)
    rng = random.Random(5)
    for _ in range(100):
        problem.bit_flip(rng.randrange(problem.number_of_variables), CURRENT_SOLUTION_INDEX)
        problem.objective_value(CURRENT_SOLUTION_INDEX)

    best = problem.best_solution_as_string()
    assert len(best) == problem.number_of_variables
    assert set(best) <= {"0", "1"}

    check = SATProblem(random_instance, Budget(evaluation_limit=1), random.Random(0))
    check.load_solution(CURRENT_SOLUTION_INDEX, [c == "1" for c in best])
    assert check.objective_value(CURRENT_SOLUTION_INDEX) == problem.best_value()


def test_solution_string_encoding(four_variable_instance, make_problem):
    problem = make_problem(four_variable_instance)
    problem.load_solution(CURRENT_SOLUTION_INDEX, [True, False, True, True])

    assert problem.solution_as_string(CURRENT_SOLUTION_INDEX) == "1011"


def test_random_solution_is_seeded(random_instance):
    budget = Budget(evaluation_limit=10)
    first = SATProblem(random_instance, budget, random.Random(42))
    second = SATProblem(random_instance, budget, random.Random(42))
    first.create_random_solution(CURRENT_SOLUTION_INDEX)
    second.create_random_solution(CURRENT_SOLUTION_INDEX)

    assert np.array_equal(first.get_solution(CURRENT_SOLUTION_INDEX),
                          second.get_solution(CURRENT_SOLUTION_INDEX))


def test_instance_without_clauses_scores_zero(make_problem):
    problem = make_problem(SATInstance(num_variables=6, clauses=()))
    problem.create_random_solution(CURRENT_SOLUTION_INDEX)

    assert problem.objective_value(CURRENT_SOLUTION_INDEX) == 0


def test_empty_clause_is_never_satisfied(make_problem):
    problem = make_problem(SATInstance(num_variables=2, clauses=((), (1,))))
    problem.load_solution(CURRENT_SOLUTION_INDEX, [True, True])

    assert problem.objective_value(CURRENT_SOLUTION_INDEX) == 1


def test_slot_errors(four_variable_instance, make_problem):
    problem = make_problem(four_variable_instance)

    with pytest.raises(ValueError, match="slot 0"):
        problem.objective_value(CURRENT_SOLUTION_INDEX)
    with pytest.raises(ValueError):
        problem.load_solution(CURRENT_SOLUTION_INDEX, [True, False])

    problem.create_random_solution(CURRENT_SOLUTION_INDEX)
    with pytest.raises(IndexError):
        problem.bit_flip(4, CURRENT_SOLUTION_INDEX)


def test_budget_validation():
    with pytest.raises(ConfigurationError):
        Budget()
    with pytest.raises(ConfigurationError):
        Budget(evaluation_limit=0)
    with pytest.raises(ConfigurationError):
        Budget(run_time=-1)
    with pytest.raises(ConfigurationError):
        Budget(run_time=1, benchmark_factor=0)


def test_deadline_passing_after_a_budget_check_does_not_fail_evaluation(random_instance, fake_clock):
    problem = SATProblem(random_instance, Budget(run_time=1.0), random.Random(0), clock=fake_clock)
    problem.create_random_solution(CURRENT_SOLUTION_INDEX)

    fake_clock.advance(0.9)
    assert not problem.has_budget_expired()
    fake_clock.advance(0.5)

    # the last check said there was budget left, so this evaluation is allowed
    problem.objective_value(CURRENT_SOLUTION_INDEX)

    assert problem.has_budget_expired()
    with pytest.raises(BudgetExpiredError, match="1 nominal seconds"):
        problem.objective_value(CURRENT_SOLUTION_INDEX)


def test_expiry_is_permanent_once_observed(random_instance, fake_clock):
    problem = SATProblem(random_instance, Budget(run_time=1.0), random.Random(0), clock=fake_clock)
    problem.create_random_solution(CURRENT_SOLUTION_INDEX)

    fake_clock.advance(1.0)
    assert problem.has_budget_expired()
    fake_clock.now = 0.0

    assert problem.has_budget_expired()
    with pytest.raises(BudgetExpiredError):
        problem.objective_value(CURRENT_SOLUTION_INDEX)
