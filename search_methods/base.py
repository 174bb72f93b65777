# search_methods/base.py

"""
The capability shared by all search methods.

A driver calls `initialise` once, then `step` repeatedly until the
problem's budget has expired. A search method has no iteration limit of
its own.
"""

from typing import Optional, Protocol

from problems.sat import SATProblem


class SearchMethod(Protocol):

    name: str

    def initialise(self, problem: SATProblem) -> None:
        """Prepares the problem's memory slots for the first step."""
        ...

    def step(self, problem: SATProblem) -> Optional[int]:
        """
        Runs one iteration.

        Returns:
            Optional[int]: The objective value of the current solution
            after the iteration, or None if it could not be observed
            before the budget expired.
        """
        ...
