"""Generalized linear regression problems and their scikit-learn engine.

This package contains:
- penalties.py: the closed penalty set and its parser
- problem.py: problem descriptors and their constructors
- solvers.py: solver descriptors and capability checks
- engine.py: fitting descriptors with scikit-learn
"""

from .engine import GLRSolution, fit_glr, predict_proba_glr, sklearn_params
from .errors import InvalidConfigurationError
from .penalties import Penalty, parse_penalty
from .problem import (
    GeneralizedLinearRegression,
    Loss,
    PenaltyTerm,
    logistic_regression,
    multinomial_regression,
)
from .solvers import (
    SOLVER_BY_PENALTY,
    SUPPORTED_PENALTIES,
    Solver,
    check_compatible,
    default_solver,
    solver_from_dict,
)

__all__ = [
    # Errors
    'InvalidConfigurationError',
    # Penalties
    'Penalty',
    'parse_penalty',
    # Problems
    'GeneralizedLinearRegression',
    'Loss',
    'PenaltyTerm',
    'logistic_regression',
    'multinomial_regression',
    # Solvers
    'SOLVER_BY_PENALTY',
    'SUPPORTED_PENALTIES',
    'Solver',
    'check_compatible',
    'default_solver',
    'solver_from_dict',
    # Engine
    'GLRSolution',
    'fit_glr',
    'predict_proba_glr',
    'sklearn_params',
]
