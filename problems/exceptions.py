# problems/exceptions.py

"""
Error types raised by the SAT problem domain and its collaborators.

There are no recoverable errors inside a trial: every error here is
either a broken calling contract or a bad configuration, and both
should stop the run with a message that says what was violated.
"""


class ConfigurationError(ValueError):
    """Raised when an experiment, budget or search method is misconfigured."""


class BudgetExpiredError(RuntimeError):
    """Raised when an objective evaluation is requested after the budget expired."""


class InstanceFormatError(ValueError):
    """Raised when a DIMACS CNF file cannot be parsed."""
