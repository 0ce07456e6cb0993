"""Unit tests for the fit/predict interface."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest
from sklearn.datasets import load_iris

from glm_classifiers.glr import InvalidConfigurationError, Loss
from glm_classifiers.models import (
    FitResult,
    LogisticClassifier,
    MultinomialClassifier,
    fit,
    fitted_params,
    predict,
    predict_proba,
)


@pytest.fixture
def iris_frame() -> tuple[pd.DataFrame, pd.Series]:
    data = load_iris(as_frame=True)
    species = data.target.map(dict(enumerate(data.target_names)))
    return data.data, species


class TestFit:
    """Tests for fit."""

    def test_logistic_on_three_classes_becomes_multinomial(self, iris_frame) -> None:
        X, y = iris_frame
        model = LogisticClassifier(lambda_=0.1)

        result = fit(model, X, y)

        assert isinstance(result, FitResult)
        assert result.model.multi_class is True
        assert result.model.nclasses == 3
        assert result.solution.problem.loss is Loss.MULTINOMIAL
        assert model.multi_class is False
        assert model.nclasses == 2

    def test_logistic_on_two_classes_stays_logistic(self, iris_frame) -> None:
        X, y = iris_frame
        mask = y != 'setosa'

        result = fit(LogisticClassifier(), X[mask], y[mask])

        assert result.model.multi_class is False
        assert result.solution.problem.loss is Loss.LOGISTIC
        assert result.classes.tolist() == ['versicolor', 'virginica']

    def test_multinomial_sets_nclasses(self, iris_frame) -> None:
        X, y = iris_frame

        result = fit(MultinomialClassifier(), X, y)

        assert result.model.nclasses == 3
        assert result.solution.problem.loss is Loss.MULTINOMIAL

    def test_feature_names_from_dataframe(self, iris_frame) -> None:
        X, y = iris_frame
        result = fit(MultinomialClassifier(), X, y)
        assert result.feature_names == tuple(X.columns)

    def test_feature_names_for_arrays(self) -> None:
        X = np.array([[0.0, 1.0], [1.0, 0.0], [0.2, 0.9], [0.9, 0.1]])
        result = fit(LogisticClassifier(), X, [0, 1, 0, 1])
        assert result.feature_names == ('x0', 'x1')

    def test_single_class_is_rejected(self) -> None:
        with pytest.raises(InvalidConfigurationError, match='two classes'):
            fit(LogisticClassifier(), np.ones((3, 2)), ['a', 'a', 'a'])

    def test_report(self, iris_frame) -> None:
        X, y = iris_frame
        report = fit(MultinomialClassifier(), X, y).report

        assert report['solver'] == 'lbfgs'
        assert report['loss'] == 'multinomial'
        assert report['converged'] is True


class TestPredict:
    """Tests for predict_proba and predict."""

    def test_predict_proba_frame(self, iris_frame) -> None:
        X, y = iris_frame
        result = fit(MultinomialClassifier(lambda_=0.01), X, y)

        proba = predict_proba(result, X)

        assert list(proba.columns) == ['setosa', 'versicolor', 'virginica']
        assert proba.index.equals(X.index)
        np.testing.assert_allclose(proba.sum(axis=1), 1.0)

    def test_predict_labels(self, iris_frame) -> None:
        X, y = iris_frame
        result = fit(MultinomialClassifier(lambda_=0.01), X, y)

        y_pred = predict(result, X)

        assert set(y_pred) <= {'setosa', 'versicolor', 'virginica'}
        assert (y_pred == y.to_numpy()).mean() > 0.9

    def test_column_order_does_not_matter(self, iris_frame) -> None:
        X, y = iris_frame
        result = fit(MultinomialClassifier(), X, y)

        shuffled = X[list(reversed(X.columns))]

        pd.testing.assert_frame_equal(predict_proba(result, shuffled), predict_proba(result, X))

    def test_missing_column(self, iris_frame) -> None:
        X, y = iris_frame
        result = fit(MultinomialClassifier(), X, y)

        with pytest.raises(ValueError, match='Missing feature columns'):
            predict_proba(result, X.drop(columns=X.columns[0]))

    def test_predict_proba_accepts_arrays(self, iris_frame) -> None:
        X, y = iris_frame
        result = fit(MultinomialClassifier(), X, y)
        proba = predict_proba(result, X.to_numpy())

        assert proba.shape == (150, 3)


def test_fitted_params(iris_frame) -> None:
    X, y = iris_frame
    result = fit(MultinomialClassifier(), X, y)

    params = fitted_params(result)

    assert params['classes'] == ['setosa', 'versicolor', 'virginica']
    assert params['coef'].shape == (3, 4)
    assert params['intercept'].shape == (3,)
    assert params['feature_names'] == list(X.columns)


def test_fitted_params_multinomial_on_two_classes(iris_frame) -> None:
    X, y = iris_frame
    mask = y != 'setosa'
    result = fit(MultinomialClassifier(lambda_=5.0), X[mask], y[mask])

    params = fitted_params(result)

    assert params['classes'] == ['versicolor', 'virginica']
    assert params['coef'].shape == (2, 4)
    np.testing.assert_allclose(params['coef'][0], -params['coef'][1])
    assert result.solution.estimator.C == pytest.approx(0.4)
