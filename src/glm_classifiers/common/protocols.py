"""Model protocols defining standard interfaces."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..glr import GeneralizedLinearRegression, Solver


@runtime_checkable
class ProbabilisticClassifier(Protocol):
    """Protocol for classifier configurations that predict class probabilities.

    All classifier configurations (logistic, multinomial) implement this
    interface so the fitting pipeline can treat them uniformly.
    """

    @property
    def solver(self) -> Solver | None: ...

    @property
    def nclasses(self) -> int: ...

    def glr(self) -> GeneralizedLinearRegression:
        """Translate the configuration into a regression problem."""
        ...

    def for_targets(self, nclasses: int) -> ProbabilisticClassifier:
        """Return the configuration adjusted to the observed number of classes."""
        ...
