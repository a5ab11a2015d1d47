"""Exceptions raised by the model analyzer."""

from __future__ import annotations

from typing import Optional


class ModelAnalyzerError(Exception):
    """Base class for every error raised by ``model_analyzer``."""


class InvalidModelError(ModelAnalyzerError):
    """Raised when a model references unknown variables or is otherwise malformed."""


class SolverUnavailableError(ModelAnalyzerError):
    """Raised for an unknown solver name or a solver whose package is not installed."""


class NumericalInstabilityError(ModelAnalyzerError):
    """Raised when the IIS search reaches a state it cannot reason about.

    Two slacks of the same row active at once, or a solve returning a status
    that is neither (almost) optimal nor (almost) infeasible, both mean the
    elastic program stopped behaving like one. No partial IIS is returned.
    """

    def __init__(self, message: str, status: Optional[str] = None):
        super().__init__(message)
        self.status = status
