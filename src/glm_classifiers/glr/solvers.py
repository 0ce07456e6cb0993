"""
Solver descriptors for the scikit-learn engine.

A solver names the scikit-learn algorithm and its iteration budget. When a
classifier leaves ``solver`` unset the engine picks one from the penalty.
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidConfigurationError
from .penalties import Penalty
from .problem import GeneralizedLinearRegression, Loss

# =============================================================================
# Algorithm capabilities
# =============================================================================

SUPPORTED_PENALTIES: dict[str, frozenset[Penalty]] = {
    'lbfgs': frozenset({Penalty.NONE, Penalty.L2}),
    'newton-cg': frozenset({Penalty.NONE, Penalty.L2}),
    'newton-cholesky': frozenset({Penalty.NONE, Penalty.L2}),
    'sag': frozenset({Penalty.NONE, Penalty.L2}),
    'saga': frozenset({Penalty.NONE, Penalty.L1, Penalty.L2, Penalty.ELASTIC_NET}),
    'liblinear': frozenset({Penalty.L1, Penalty.L2}),
}

# liblinear only fits one-vs-rest
MULTINOMIAL_CAPABLE: frozenset[str] = frozenset(SUPPORTED_PENALTIES) - {'liblinear'}

# L2/none → lbfgs, anything with an L1 term → saga
SOLVER_BY_PENALTY: dict[Penalty, str] = {
    Penalty.NONE: 'lbfgs',
    Penalty.L2: 'lbfgs',
    Penalty.L1: 'saga',
    Penalty.ELASTIC_NET: 'saga',
}


@dataclass(frozen=True)
class Solver:
    """Algorithm and iteration budget handed to scikit-learn."""

    algorithm: str = 'lbfgs'
    max_iter: int = 1000
    max_iter_retry: int = 5000  # used once if the first fit does not converge
    tol: float = 1e-4
    random_state: int | None = 42

    def __post_init__(self) -> None:
        if self.algorithm not in SUPPORTED_PENALTIES:
            raise InvalidConfigurationError(
                f'Unknown solver algorithm: {self.algorithm!r}. '
                f'Valid algorithms: {sorted(SUPPORTED_PENALTIES)}'
            )
        if self.max_iter < 1 or self.max_iter_retry < 1:
            raise InvalidConfigurationError('max_iter and max_iter_retry must be positive')


def default_solver(penalty: Penalty) -> Solver:
    """Return the engine default for a penalty."""
    return Solver(algorithm=SOLVER_BY_PENALTY[penalty])


def check_compatible(
    solver: Solver,
    problem: GeneralizedLinearRegression,
    n_observed_classes: int,
) -> None:
    """
    Check that a solver can handle the problem.

    Raises:
        InvalidConfigurationError: If the penalty is unsupported, or the loss is
            multinomial over more than two classes and the solver is
            one-vs-rest only.
    """
    if problem.penalty not in SUPPORTED_PENALTIES[solver.algorithm]:
        raise InvalidConfigurationError(
            f'Solver {solver.algorithm!r} does not support penalty {problem.penalty.value!r}'
        )
    if (
        problem.loss is Loss.MULTINOMIAL
        and n_observed_classes > 2
        and solver.algorithm not in MULTINOMIAL_CAPABLE
    ):
        raise InvalidConfigurationError(
            f'Solver {solver.algorithm!r} cannot fit the multinomial loss'
        )


def solver_from_dict(data: dict | None) -> Solver | None:
    """Build a solver from a config mapping; ``None`` or empty means default."""
    if not data:
        return None
    known = {'algorithm', 'max_iter', 'max_iter_retry', 'tol', 'random_state'}
    unknown = set(data) - known
    if unknown:
        raise InvalidConfigurationError(f'Unknown solver options: {sorted(unknown)}')
    kwargs: dict = {}
    if 'algorithm' in data:
        kwargs['algorithm'] = str(data['algorithm'])
    if 'max_iter' in data:
        kwargs['max_iter'] = int(data['max_iter'])
    if 'max_iter_retry' in data:
        kwargs['max_iter_retry'] = int(data['max_iter_retry'])
    if 'tol' in data:
        kwargs['tol'] = float(data['tol'])
    if 'random_state' in data:
        seed = data['random_state']
        kwargs['random_state'] = None if seed is None else int(seed)
    return Solver(**kwargs)
