# search_methods/heuristic_search.py

from typing import Optional

from heuristics.base import SATHeuristic
from problems.sat import CURRENT_SOLUTION_INDEX, SATProblem


class HeuristicSearch:
    """
    Applies a single heuristic to the solution in hand, over and over.

    This is how a hill climber is run on its own: each step is one pass
    of the heuristic followed by an evaluation of the result.
    """

    def __init__(self, heuristic: SATHeuristic):
        self.heuristic = heuristic
        self.name = heuristic.name

    def initialise(self, problem: SATProblem) -> None:
        problem.create_random_solution(CURRENT_SOLUTION_INDEX)

    def step(self, problem: SATProblem) -> Optional[int]:
        self.heuristic.apply(problem, CURRENT_SOLUTION_INDEX)
        if problem.has_budget_expired():
            return None
        return problem.objective_value(CURRENT_SOLUTION_INDEX)

    def __str__(self) -> str:
        return self.name
