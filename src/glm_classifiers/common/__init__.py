"""Interfaces shared across classifier implementations."""

from .protocols import ProbabilisticClassifier

__all__ = ['ProbabilisticClassifier']
