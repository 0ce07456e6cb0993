"""
Logistic and multinomial classifier configurations.

Both classifiers minimise

    L(y, Xθ) + λ|θ|₂²/2 + γ|θ|₁

where ``L`` is the logistic loss (binary) or the multinomial (softmax) loss,
and ``λ``/``γ`` are the strengths of the L2 and L1 components.
"""

from __future__ import annotations

from dataclasses import MISSING, dataclass, fields, replace
from typing import Any, ClassVar

from ..glr import (
    GeneralizedLinearRegression,
    InvalidConfigurationError,
    Penalty,
    Solver,
    logistic_regression,
    multinomial_regression,
    parse_penalty,
    solver_from_dict,
)

OBJECTIVE = 'L(y, Xθ) + λ|θ|₂²/2 + γ|θ|₁'

HYPERPARAMETER_DOCS: dict[str, str] = {
    'lambda_': 'Strength of the regulariser if penalty is l2 or l1; strength of the L2 '
    'regulariser if penalty is en.',
    'gamma': 'Strength of the L1 regulariser if penalty is en.',
    'penalty': 'Penalty to use: l2, l1, en (elastic net) or none.',
    'fit_intercept': 'Whether to fit an intercept.',
    'penalize_intercept': 'Whether to penalize the intercept.',
    'solver': 'Solver to use; the default for the penalty if unset.',
    'multi_class': 'Whether the problem is binary or multiclass. Usually set automatically.',
    'nclasses': 'Number of target classes. Set by the fitting pipeline.',
}


@dataclass(frozen=True)
class LogisticClassifier:
    """
    Logistic classifier (typically called "logistic regression").

    A standard classifier for both binary and multiclass classification. In
    the binary case it uses the logistic loss, in the multiclass case the
    multinomial (softmax) loss.

    Args:
        lambda_: Strength of the regulariser if ``penalty`` is l2 or l1, of the
            L2 regulariser if ``penalty`` is en.
        gamma: Strength of the L1 regulariser if ``penalty`` is en.
        penalty: ``Penalty`` member or its name. Unknown values raise
            ``InvalidConfigurationError``.
        fit_intercept: Whether to fit an intercept.
        penalize_intercept: Whether to penalize the intercept.
        solver: Solver to use, engine default if ``None``.
        multi_class: Whether it is a binary or multiclass problem. Set
            automatically when fitting on more than two classes.
        nclasses: Number of classes, set by the fitting pipeline.
    """

    DESCRIPTION: ClassVar[str] = (
        f'Classifier corresponding to the loss function {OBJECTIVE} '
        'where L is the logistic loss.'
    )

    lambda_: float = 1.0
    gamma: float = 0.0
    penalty: Penalty | str = Penalty.L2
    fit_intercept: bool = True
    penalize_intercept: bool = False
    solver: Solver | None = None
    multi_class: bool = False
    nclasses: int = 2

    def __post_init__(self) -> None:
        object.__setattr__(self, 'penalty', parse_penalty(self.penalty))

    def glr(self) -> GeneralizedLinearRegression:
        return logistic_regression(
            self.lambda_,
            self.gamma,
            penalty=self.penalty,
            multi_class=self.multi_class,
            fit_intercept=self.fit_intercept,
            penalize_intercept=self.penalize_intercept,
            nclasses=self.nclasses,
        )

    def for_targets(self, nclasses: int) -> LogisticClassifier:
        return replace(self, nclasses=nclasses, multi_class=self.multi_class or nclasses > 2)


@dataclass(frozen=True)
class MultinomialClassifier:
    """
    Multinomial (softmax) classifier.

    Same hyperparameters as ``LogisticClassifier`` except that there is no
    ``multi_class`` flag: the loss is always multinomial.
    """

    DESCRIPTION: ClassVar[str] = (
        f'Classifier corresponding to the loss function {OBJECTIVE} '
        'where L is the multinomial loss.'
    )

    lambda_: float = 1.0
    gamma: float = 0.0
    penalty: Penalty | str = Penalty.L2
    fit_intercept: bool = True
    penalize_intercept: bool = False
    solver: Solver | None = None
    nclasses: int = 2

    def __post_init__(self) -> None:
        object.__setattr__(self, 'penalty', parse_penalty(self.penalty))

    def glr(self) -> GeneralizedLinearRegression:
        return multinomial_regression(
            self.lambda_,
            self.gamma,
            penalty=self.penalty,
            fit_intercept=self.fit_intercept,
            penalize_intercept=self.penalize_intercept,
            nclasses=self.nclasses,
        )

    def for_targets(self, nclasses: int) -> MultinomialClassifier:
        return replace(self, nclasses=nclasses)


Classifier = LogisticClassifier | MultinomialClassifier

MODEL_TYPES: dict[str, type[LogisticClassifier] | type[MultinomialClassifier]] = {
    'logistic': LogisticClassifier,
    'multinomial': MultinomialClassifier,
}


def glr(model: Classifier) -> GeneralizedLinearRegression:
    """Translate a classifier configuration into a regression problem."""
    return model.glr()


def describe(model: Classifier | type) -> str:
    """Return the description of a classifier class or instance."""
    cls = model if isinstance(model, type) else type(model)
    try:
        return cls.DESCRIPTION
    except AttributeError as exc:
        raise TypeError(f'{cls.__name__} is not a classifier configuration') from exc


def hyperparameters(model: Classifier | type) -> list[tuple[str, Any, str]]:
    """Return ``(name, default, doc)`` rows for each hyperparameter."""
    cls = model if isinstance(model, type) else type(model)
    rows = []
    for f in fields(cls):
        default = None if f.default is MISSING else f.default
        name = 'lambda' if f.name == 'lambda_' else f.name
        rows.append((name, default, HYPERPARAMETER_DOCS.get(f.name, '')))
    return rows


def get_model_class(key: str) -> type[LogisticClassifier] | type[MultinomialClassifier]:
    """Return the classifier class registered under ``key``."""
    try:
        return MODEL_TYPES[key]
    except KeyError as exc:
        raise ValueError(
            f'Unknown model type: {key!r}. Available types: {list(MODEL_TYPES)}'
        ) from exc


def build_classifier(
    model_type: str,
    params: dict[str, Any] | None = None,
    solver: dict[str, Any] | Solver | None = None,
) -> Classifier:
    """
    Build a classifier from plain config values.

    ``params`` uses the public names, so ``lambda`` maps to ``lambda_``.

    Raises:
        ValueError: If ``model_type`` is not registered.
        InvalidConfigurationError: On unknown hyperparameters or penalty.
    """
    cls = get_model_class(model_type)
    kwargs = dict(params or {})
    if 'lambda' in kwargs:
        kwargs['lambda_'] = kwargs.pop('lambda')

    allowed = {f.name for f in fields(cls)} - {'solver'}
    unknown = set(kwargs) - allowed
    if unknown:
        raise InvalidConfigurationError(
            f'Unknown hyperparameters for {model_type!r}: {sorted(unknown)}'
        )

    if not isinstance(solver, Solver):
        solver = solver_from_dict(solver)
    return cls(**kwargs, solver=solver)
