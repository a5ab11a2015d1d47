"""Model Analyzer: explains why linear and mixed-integer models are infeasible."""

from .exceptions import (
    InvalidModelError,
    ModelAnalyzerError,
    NumericalInstabilityError,
    SolverUnavailableError,
)
from .infeasibility import DiagnosisCascade, DiagnosisResult, analyze, summarize
from .schemas import (
    AnalyzerOptions,
    Constraint,
    LinearExpr,
    LinearTerm,
    LPModel,
    LPSolution,
    SolveOptions,
    Variable,
)
from .solvers import HighsSolver, OrToolsSolver, get_solver

__all__ = [
    "AnalyzerOptions",
    "Constraint",
    "DiagnosisCascade",
    "DiagnosisResult",
    "HighsSolver",
    "InvalidModelError",
    "LPModel",
    "LPSolution",
    "LinearExpr",
    "LinearTerm",
    "ModelAnalyzerError",
    "NumericalInstabilityError",
    "OrToolsSolver",
    "SolveOptions",
    "SolverUnavailableError",
    "Variable",
    "analyze",
    "get_solver",
    "summarize",
]
