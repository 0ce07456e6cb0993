"""Unit tests for model persistence."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path

import joblib
import numpy as np
import pytest

from glm_classifiers.io import (
    ModelArtifact,
    ModelLoadError,
    generate_run_id,
    load_model,
    save_model,
)
from glm_classifiers.models import LogisticClassifier, fit, predict_proba


@pytest.fixture
def fitted():
    X = np.array([[0.0, 1.0], [1.0, 0.0], [0.1, 0.8], [0.9, 0.2], [0.2, 0.7], [0.8, 0.1]])
    y = np.array([0, 1, 0, 1, 0, 1])
    return fit(LogisticClassifier(), X, y), X


@pytest.fixture
def model_dir(tmp_path: Path, fitted) -> Path:
    result, _ = fitted
    out = tmp_path / 'model'
    save_model(result, out, {'model_name': 'unit', 'version': '2025-01-01_001'})
    return out


def test_save_creates_files(model_dir: Path) -> None:
    assert (model_dir / 'model.joblib').exists()
    metadata = json.loads((model_dir / 'metadata.json').read_text(encoding='utf-8'))
    assert metadata['model_name'] == 'unit'


def test_save_refuses_existing_dir(model_dir: Path, fitted) -> None:
    result, _ = fitted
    with pytest.raises(FileExistsError):
        save_model(result, model_dir, {})


def test_load_model_success(model_dir: Path, fitted) -> None:
    result, X = fitted

    artifact = load_model(model_dir)

    assert isinstance(artifact, ModelArtifact)
    assert artifact.version == '2025-01-01_001'
    assert artifact.model_name == 'unit'
    np.testing.assert_allclose(
        predict_proba(artifact.result, X).to_numpy(),
        predict_proba(result, X).to_numpy(),
    )


def test_load_model_missing_dir(tmp_path: Path) -> None:
    with pytest.raises(ModelLoadError, match='directory not found'):
        load_model(tmp_path / 'nope')


def test_load_model_missing_metadata(model_dir: Path) -> None:
    (model_dir / 'metadata.json').unlink()
    with pytest.raises(ModelLoadError, match='Metadata file not found'):
        load_model(model_dir)


def test_load_model_corrupt_metadata(model_dir: Path) -> None:
    (model_dir / 'metadata.json').write_text('{not json', encoding='utf-8')
    with pytest.raises(ModelLoadError, match='Failed to load metadata'):
        load_model(model_dir)


def test_load_model_wrong_object(model_dir: Path) -> None:
    joblib.dump({'not': 'a model'}, model_dir / 'model.joblib')
    with pytest.raises(ModelLoadError, match='fitted classifier'):
        load_model(model_dir)


def test_generate_run_id_increments(tmp_path: Path) -> None:
    today = datetime.now(UTC).strftime('%Y-%m-%d')

    assert generate_run_id(tmp_path / 'missing') == f'model.{today}_001'

    (tmp_path / f'model.{today}_001').mkdir()
    (tmp_path / f'model.{today}_002').mkdir()
    assert generate_run_id(tmp_path) == f'model.{today}_003'


def test_generate_run_id_orders_numerically(tmp_path: Path) -> None:
    today = datetime.now(UTC).strftime('%Y-%m-%d')
    (tmp_path / f'model.{today}_999').mkdir()
    (tmp_path / f'model.{today}_1000').mkdir()
    (tmp_path / f'model.{today}_notes').mkdir()

    assert generate_run_id(tmp_path) == f'model.{today}_1001'
