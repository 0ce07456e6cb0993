"""
Generalized linear regression problem descriptors.

A descriptor fully specifies what the engine has to minimise:

    L(y, Xθ) + λ|θ|₂²/2 + γ|θ|₁

where ``L`` is the logistic or multinomial loss. It carries no data and
performs no numerical work.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import InvalidConfigurationError
from .penalties import Penalty, parse_penalty


class Loss(str, Enum):
    LOGISTIC = 'logistic'
    MULTINOMIAL = 'multinomial'

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class PenaltyTerm:
    kind: str  # 'l1' or 'l2'
    strength: float


@dataclass(frozen=True)
class GeneralizedLinearRegression:
    """Loss, penalty and structural parameters of a classification problem."""

    loss: Loss
    penalty: Penalty
    lambda_: float
    gamma: float
    fit_intercept: bool
    penalize_intercept: bool
    nclasses: int

    @property
    def multi_class(self) -> bool:
        return self.loss is Loss.MULTINOMIAL

    def penalty_terms(self) -> tuple[PenaltyTerm, ...]:
        """Return the active penalty terms with their strengths."""
        if self.penalty is Penalty.NONE:
            return ()
        if self.penalty is Penalty.L2:
            return (PenaltyTerm('l2', self.lambda_),)
        if self.penalty is Penalty.L1:
            return (PenaltyTerm('l1', self.lambda_),)
        return (PenaltyTerm('l2', self.lambda_), PenaltyTerm('l1', self.gamma))

    def as_dict(self) -> dict[str, object]:
        return {
            'loss': self.loss.value,
            'penalty': self.penalty.value,
            'lambda': self.lambda_,
            'gamma': self.gamma,
            'fit_intercept': self.fit_intercept,
            'penalize_intercept': self.penalize_intercept,
            'nclasses': self.nclasses,
        }


def logistic_regression(
    lambda_: float = 1.0,
    gamma: float = 0.0,
    *,
    penalty: Penalty | str | None = Penalty.L2,
    multi_class: bool = False,
    fit_intercept: bool = True,
    penalize_intercept: bool = False,
    nclasses: int = 2,
) -> GeneralizedLinearRegression:
    """
    Build a logistic regression problem.

    The loss is the binary logistic loss, or the multinomial (softmax) loss
    when ``multi_class`` is set.

    Raises:
        InvalidConfigurationError: On an unknown penalty, a negative strength
            or fewer than two classes.
    """
    return _build(
        Loss.MULTINOMIAL if multi_class else Loss.LOGISTIC,
        lambda_,
        gamma,
        penalty=penalty,
        fit_intercept=fit_intercept,
        penalize_intercept=penalize_intercept,
        nclasses=nclasses,
    )


def multinomial_regression(
    lambda_: float = 1.0,
    gamma: float = 0.0,
    *,
    penalty: Penalty | str | None = Penalty.L2,
    fit_intercept: bool = True,
    penalize_intercept: bool = False,
    nclasses: int = 2,
) -> GeneralizedLinearRegression:
    """Build a multinomial (softmax) regression problem. See ``logistic_regression``."""
    return _build(
        Loss.MULTINOMIAL,
        lambda_,
        gamma,
        penalty=penalty,
        fit_intercept=fit_intercept,
        penalize_intercept=penalize_intercept,
        nclasses=nclasses,
    )


def _build(
    loss: Loss,
    lambda_: float,
    gamma: float,
    *,
    penalty: Penalty | str | None,
    fit_intercept: bool,
    penalize_intercept: bool,
    nclasses: int,
) -> GeneralizedLinearRegression:
    parsed = parse_penalty(penalty)
    if lambda_ < 0:
        raise InvalidConfigurationError(f'lambda must be non-negative, got {lambda_}')
    if gamma < 0:
        raise InvalidConfigurationError(f'gamma must be non-negative, got {gamma}')
    if int(nclasses) != nclasses or nclasses < 2:
        raise InvalidConfigurationError(f'nclasses must be an integer >= 2, got {nclasses}')

    return GeneralizedLinearRegression(
        loss=loss,
        penalty=parsed,
        lambda_=float(lambda_),
        gamma=float(gamma),
        fit_intercept=bool(fit_intercept),
        penalize_intercept=bool(penalize_intercept),
        nclasses=int(nclasses),
    )
