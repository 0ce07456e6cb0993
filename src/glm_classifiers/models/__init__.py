"""Classifier configurations and the fit/predict interface.

This package contains:
- classifiers.py: LogisticClassifier, MultinomialClassifier and their registry
- interface.py: fit, predict_proba, predict and fitted_params
"""

from .classifiers import (
    HYPERPARAMETER_DOCS,
    MODEL_TYPES,
    Classifier,
    LogisticClassifier,
    MultinomialClassifier,
    build_classifier,
    describe,
    get_model_class,
    glr,
    hyperparameters,
)
from .interface import FitResult, fit, fitted_params, predict, predict_proba

__all__ = [
    # Classifiers
    'HYPERPARAMETER_DOCS',
    'MODEL_TYPES',
    'Classifier',
    'LogisticClassifier',
    'MultinomialClassifier',
    'build_classifier',
    'describe',
    'get_model_class',
    'glr',
    'hyperparameters',
    # Interface
    'FitResult',
    'fit',
    'fitted_params',
    'predict',
    'predict_proba',
]
