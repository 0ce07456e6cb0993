"""Integration tests for the training pipeline."""

from __future__ import annotations

import json
import shutil
from pathlib import Path

import numpy as np
import pandas as pd

from glm_classifiers.config import load_training_config
from glm_classifiers.io import load_model
from glm_classifiers.models import LogisticClassifier, predict
from glm_classifiers.training import load_dataset, train_from_config

REPO_ROOT = Path(__file__).resolve().parents[2]


def test_train_from_config_end_to_end(training_config: Path, iris_csvs) -> None:
    _, test_path = iris_csvs

    result = train_from_config(training_config)

    out_dir = Path(result['artifact_dir'])
    assert out_dir.name.startswith('model.')
    assert (out_dir / 'model.joblib').exists()
    assert result['report']['accuracy'] > 0.85
    assert result['report']['log_loss'] > 0

    metadata = json.loads((out_dir / 'metadata.json').read_text(encoding='utf-8'))
    assert metadata['model_name'] == 'iris_test'
    assert metadata['problem']['loss'] == 'multinomial'
    assert metadata['problem']['nclasses'] == 3
    assert metadata['problem']['lambda'] == 0.1
    assert metadata['solver']['algorithm'] == 'lbfgs'
    assert metadata['classes'] == ['setosa', 'versicolor', 'virginica']

    metrics = json.loads((out_dir / 'metrics_test.json').read_text(encoding='utf-8'))
    assert metrics['accuracy'] == result['report']['accuracy']

    artifact = load_model(out_dir)
    assert isinstance(artifact.result.model, LogisticClassifier)
    assert artifact.result.model.multi_class is True

    X_test, y_test = load_dataset(test_path, 'species')
    accuracy = float(np.mean(predict(artifact.result, X_test) == y_test.to_numpy()))
    assert accuracy == metrics['accuracy']


def test_second_run_gets_new_directory(training_config: Path) -> None:
    first = train_from_config(training_config)
    second = train_from_config(training_config)

    assert first['artifact_dir'] != second['artifact_dir']
    assert first['artifact_dir'].endswith('_001')
    assert second['artifact_dir'].endswith('_002')


def test_load_dataset_selects_columns(iris_csvs) -> None:
    train_path, _ = iris_csvs

    X, y = load_dataset(train_path, 'species', ('petal length (cm)',))

    assert list(X.columns) == ['petal length (cm)']
    assert len(X) == len(y) == len(pd.read_csv(train_path))


def test_shipped_config_points_at_shipped_data() -> None:
    cfg = load_training_config(REPO_ROOT / 'configs' / 'training.yaml')

    assert cfg.data.train_path.is_file()
    assert cfg.data.test_path is not None
    assert cfg.data.test_path.is_file()


def test_shipped_config_trains(tmp_path: Path) -> None:
    shutil.copytree(REPO_ROOT / 'configs', tmp_path / 'configs')
    shutil.copytree(REPO_ROOT / 'data', tmp_path / 'data')

    result = train_from_config(tmp_path / 'configs' / 'training.yaml')

    assert Path(result['artifact_dir']).parent == (tmp_path / 'artifacts' / 'models').resolve()
    assert result['report']['accuracy'] > 0.8
