"""Logistic and multinomial classifier configurations backed by scikit-learn."""

from .glr import (
    GeneralizedLinearRegression,
    InvalidConfigurationError,
    Loss,
    Penalty,
    Solver,
    logistic_regression,
    multinomial_regression,
)
from .models import (
    LogisticClassifier,
    MultinomialClassifier,
    describe,
    fit,
    fitted_params,
    glr,
    predict,
    predict_proba,
)

__version__ = '0.1.0'

__all__ = [
    'GeneralizedLinearRegression',
    'InvalidConfigurationError',
    'Loss',
    'Penalty',
    'Solver',
    'logistic_regression',
    'multinomial_regression',
    'LogisticClassifier',
    'MultinomialClassifier',
    'describe',
    'fit',
    'fitted_params',
    'glr',
    'predict',
    'predict_proba',
]
