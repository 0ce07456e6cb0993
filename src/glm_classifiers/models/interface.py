"""
Fit and predict entry points shared by all classifier configurations.

``fit`` adapts the configuration to the observed targets (number of classes,
multiclass switch), translates it with ``glr`` and hands the problem to the
engine. Prediction returns per-class probabilities.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
import pandas as pd

from ..common.protocols import ProbabilisticClassifier
from ..glr import GLRSolution, InvalidConfigurationError, fit_glr, predict_proba_glr
from ..utils.logging import get_logger, json_log

log = get_logger(__name__)


@dataclass(frozen=True)
class FitResult:
    """A fitted classifier: the configuration used and the engine solution."""

    model: ProbabilisticClassifier
    solution: GLRSolution
    feature_names: tuple[str, ...]

    @property
    def classes(self) -> np.ndarray:
        return self.solution.classes

    @property
    def report(self) -> dict[str, Any]:
        return {
            'converged': self.solution.converged,
            'retried': self.solution.retried,
            'n_iter': self.solution.n_iter,
            'solver': self.solution.solver.algorithm,
            'loss': self.solution.problem.loss.value,
        }


def fit(model: ProbabilisticClassifier, X: Any, y: Any) -> FitResult:
    """
    Fit a classifier configuration on data.

    Args:
        model: Classifier configuration; not modified.
        X: Features as DataFrame, array-like or scipy sparse matrix.
        y: Labels, one per row of ``X``.

    Returns:
        FitResult holding the adapted configuration and coefficients.

    Raises:
        InvalidConfigurationError: If ``y`` has fewer than two classes or the
            configuration is invalid for the data.
    """
    labels = np.asarray(y).ravel()
    nclasses = len(np.unique(labels))
    if nclasses < 2:
        raise InvalidConfigurationError(
            f'At least two classes are required, found {nclasses}'
        )

    adapted = model.for_targets(nclasses)
    problem = adapted.glr()
    log.info(
        json_log(
            'classifier.fit',
            component='models',
            model=type(model).__name__,
            nclasses=nclasses,
            multi_class=problem.multi_class,
        )
    )
    solution = fit_glr(problem, X, labels, solver=adapted.solver)

    return FitResult(
        model=adapted,
        solution=solution,
        feature_names=_feature_names(X),
    )


def predict_proba(result: FitResult, X: Any) -> pd.DataFrame:
    """Return a DataFrame of class probabilities, one column per class."""
    index = None
    if isinstance(X, pd.DataFrame):
        X = X.rename(columns=str)
        missing = [name for name in result.feature_names if name not in X.columns]
        if missing:
            raise ValueError(f'Missing feature columns: {missing}')
        index = X.index
        X = X[list(result.feature_names)]

    proba = predict_proba_glr(result.solution, X)
    return pd.DataFrame(proba, columns=list(result.classes), index=index)


def predict(result: FitResult, X: Any) -> np.ndarray:
    """Return the most probable class for each row."""
    proba = predict_proba(result, X)
    return result.classes[np.argmax(proba.to_numpy(), axis=1)]


def fitted_params(result: FitResult) -> dict[str, Any]:
    """Return learned parameters in a plain, inspectable form."""
    return {
        'classes': result.classes.tolist(),
        'coef': result.solution.coef,
        'intercept': result.solution.intercept,
        'feature_names': list(result.feature_names),
    }


def _feature_names(X: Any) -> tuple[str, ...]:
    if isinstance(X, pd.DataFrame):
        return tuple(str(col) for col in X.columns)
    n_features = np.shape(X)[1]
    return tuple(f'x{i}' for i in range(n_features))
