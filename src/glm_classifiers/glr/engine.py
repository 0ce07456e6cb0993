"""
scikit-learn backed engine for generalized linear regression problems.

Translates a ``GeneralizedLinearRegression`` descriptor into scikit-learn
estimator parameters, fits it and returns the coefficients.

scikit-learn minimises ``C·ΣL + (1-ρ)/2|w|² + ρ|w|₁`` while descriptors
use ``ΣL + λ|w|²/2 + γ|w|₁``, hence ``1/C = λ + γ`` and ``ρ = γ/(λ+γ)``.

On two classes scikit-learn fits a single row ``d`` even for the multinomial
loss. The softmax objective over rows ``w₁, w₂`` only sees ``d = w₂ - w₁`` in
the loss, and its penalty is smallest at ``w₂ = -w₁ = d/2``. There the L2 term
is ``λ/2·|d|²/2`` and the L1 term is ``γ|d|``, so the binary fit uses ``λ/2``
and reports the two rows ``±d/2``.
"""

from __future__ import annotations

import time
import warnings
from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd
from scipy import sparse
from sklearn.exceptions import ConvergenceWarning
from sklearn.linear_model import LogisticRegression
from sklearn.multiclass import OneVsRestClassifier

from ..utils.logging import get_logger, json_log
from .errors import InvalidConfigurationError
from .problem import GeneralizedLinearRegression, Loss
from .solvers import Solver, check_compatible, default_solver

log = get_logger(__name__)


@dataclass(frozen=True)
class GLRSolution:
    """Fitted coefficients of a problem and the estimator that produced them."""

    problem: GeneralizedLinearRegression
    solver: Solver
    estimator: Any
    classes: np.ndarray
    coef: np.ndarray  # (n_rows, n_features); one row for binary logistic loss
    intercept: np.ndarray  # (n_rows,)
    intercept_as_feature: bool
    converged: bool
    retried: bool
    n_iter: int


def sklearn_params(
    problem: GeneralizedLinearRegression,
    solver: Solver,
    n_classes: int | None = None,
) -> dict[str, Any]:
    """
    Map a descriptor and solver onto ``LogisticRegression`` keyword arguments.

    Terms with zero strength are dropped, so an elastic net with ``gamma=0``
    becomes a plain L2 fit and a zero-strength penalty becomes no penalty.

    ``n_classes`` is the number of observed classes (``problem.nclasses`` when
    omitted). A multinomial loss on two classes halves the L2 strength.
    """
    if n_classes is None:
        n_classes = problem.nclasses
    strengths = {term.kind: term.strength for term in problem.penalty_terms() if term.strength > 0}
    l1 = strengths.get('l1', 0.0)
    l2 = strengths.get('l2', 0.0)
    if _binary_softmax(problem, n_classes):
        l2 = l2 / 2.0

    params: dict[str, Any] = {
        'solver': solver.algorithm,
        'max_iter': solver.max_iter,
        'tol': solver.tol,
        'random_state': solver.random_state,
        'fit_intercept': problem.fit_intercept and not problem.penalize_intercept,
    }
    if l1 and l2:
        total = l1 + l2
        params.update(penalty='elasticnet', C=1.0 / total, l1_ratio=l1 / total)
    elif l1:
        params.update(penalty='l1', C=1.0 / l1)
    elif l2:
        params.update(penalty='l2', C=1.0 / l2)
    else:
        params.update(penalty=None, C=1.0)

    if params['penalty'] is None and solver.algorithm == 'liblinear':
        raise InvalidConfigurationError('liblinear requires a penalty with positive strength')
    return params


def design_matrix(X: Any, intercept_as_feature: bool) -> Any:
    """Return a float design matrix, with a trailing constant column if requested."""
    if sparse.issparse(X):
        matrix = sparse.csr_matrix(X, dtype=float)
    elif isinstance(X, pd.DataFrame):
        matrix = X.to_numpy(dtype=float)
    else:
        matrix = np.asarray(X, dtype=float)

    if matrix.ndim != 2:
        raise ValueError(f'X must be two-dimensional, got shape {matrix.shape}')

    if not intercept_as_feature:
        return matrix
    ones = np.ones((matrix.shape[0], 1))
    if sparse.issparse(matrix):
        return sparse.hstack([matrix, sparse.csr_matrix(ones)], format='csr')
    return np.hstack([matrix, ones])


def fit_glr(
    problem: GeneralizedLinearRegression,
    X: Any,
    y: Any,
    solver: Solver | None = None,
) -> GLRSolution:
    """
    Fit a problem descriptor on data.

    Args:
        problem: Loss, penalty and structural parameters.
        X: Design matrix (array-like, DataFrame or scipy sparse).
        y: Target labels, one per row of ``X``.
        solver: Algorithm to use; defaults to ``default_solver(problem.penalty)``.

    Returns:
        GLRSolution with coefficients, intercepts and convergence info.

    Raises:
        InvalidConfigurationError: If the targets do not match ``nclasses`` or
            the solver cannot handle the problem.
    """
    if solver is None:
        solver = default_solver(problem.penalty)

    y_arr = np.asarray(y).ravel()
    classes = np.unique(y_arr)
    if len(classes) < 2:
        raise InvalidConfigurationError(
            f'At least two classes are required, found {len(classes)}'
        )
    if len(classes) > problem.nclasses:
        raise InvalidConfigurationError(
            f'Found {len(classes)} classes but the problem declares nclasses={problem.nclasses}'
        )
    check_compatible(solver, problem, len(classes))

    intercept_as_feature = problem.fit_intercept and problem.penalize_intercept
    matrix = design_matrix(X, intercept_as_feature)
    if matrix.shape[0] != y_arr.shape[0]:
        raise ValueError(
            f'X has {matrix.shape[0]} rows but y has {y_arr.shape[0]} labels'
        )

    params = sklearn_params(problem, solver, len(classes))
    one_vs_rest = problem.loss is Loss.LOGISTIC and len(classes) > 2

    log.info(
        json_log(
            'fit.start',
            component='engine',
            loss=problem.loss.value,
            penalty=problem.penalty.value,
            solver=solver.algorithm,
            one_vs_rest=one_vs_rest,
            n_samples=int(matrix.shape[0]),
            n_features=int(matrix.shape[1]),
            n_classes=len(classes),
        )
    )
    start_time = time.perf_counter()

    estimator = _build_estimator(params, one_vs_rest)
    converged = _fit_recording_convergence(estimator, matrix, y_arr)
    retried = False
    if not converged:
        log.warning(
            json_log(
                'fit.convergence_retry',
                component='engine',
                max_iter=solver.max_iter,
                new_max_iter=solver.max_iter_retry,
            )
        )
        retried = True
        estimator = _build_estimator({**params, 'max_iter': solver.max_iter_retry}, one_vs_rest)
        converged = _fit_recording_convergence(estimator, matrix, y_arr)

    coef, intercept = _extract_coefficients(estimator, one_vs_rest)
    if intercept_as_feature:
        intercept = coef[:, -1].copy()
        coef = coef[:, :-1].copy()
    if _binary_softmax(problem, len(classes)):
        # row 0 belongs to classes[0]; scikit-learn's single row scores classes[1]
        coef = np.vstack([-coef[0] / 2.0, coef[0] / 2.0])
        intercept = np.array([-intercept[0] / 2.0, intercept[0] / 2.0])

    n_iter = _n_iter(estimator, one_vs_rest)
    log.info(
        json_log(
            'fit.completed',
            component='engine',
            converged=converged,
            retried=retried,
            n_iter=n_iter,
            fit_time_seconds=round(time.perf_counter() - start_time, 4),
        )
    )

    return GLRSolution(
        problem=problem,
        solver=solver,
        estimator=estimator,
        classes=classes,
        coef=coef,
        intercept=intercept,
        intercept_as_feature=intercept_as_feature,
        converged=converged,
        retried=retried,
        n_iter=n_iter,
    )


def predict_proba_glr(solution: GLRSolution, X: Any) -> np.ndarray:
    """Return class probabilities with columns ordered as ``solution.classes``."""
    matrix = design_matrix(X, solution.intercept_as_feature)
    expected = solution.coef.shape[1] + (1 if solution.intercept_as_feature else 0)
    if matrix.shape[1] != expected:
        raise ValueError(
            f'X has {matrix.shape[1]} features, the model was fitted on {solution.coef.shape[1]}'
        )
    return solution.estimator.predict_proba(matrix)


def _binary_softmax(problem: GeneralizedLinearRegression, n_classes: int) -> bool:
    return problem.loss is Loss.MULTINOMIAL and n_classes == 2


def _build_estimator(params: dict[str, Any], one_vs_rest: bool) -> Any:
    base = LogisticRegression(**params)
    if one_vs_rest:
        return OneVsRestClassifier(base)
    return base


def _fit_recording_convergence(estimator: Any, X: Any, y: np.ndarray) -> bool:
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter('always', ConvergenceWarning)
        estimator.fit(X, y)
    return not any(issubclass(w.category, ConvergenceWarning) for w in caught)


def _extract_coefficients(estimator: Any, one_vs_rest: bool) -> tuple[np.ndarray, np.ndarray]:
    if one_vs_rest:
        coef = np.vstack([est.coef_ for est in estimator.estimators_])
        intercept = np.concatenate([np.ravel(est.intercept_) for est in estimator.estimators_])
        return coef, intercept
    return np.array(estimator.coef_), np.ravel(estimator.intercept_).copy()


def _n_iter(estimator: Any, one_vs_rest: bool) -> int:
    if one_vs_rest:
        return int(max(np.max(est.n_iter_) for est in estimator.estimators_))
    return int(np.max(estimator.n_iter_))
