"""Config models and loaders for training."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from ..models import MODEL_TYPES, Classifier, build_classifier


@dataclass(frozen=True)
class ModelSpecConfig:
    name: str
    type: str = 'logistic'
    params: dict[str, Any] = field(default_factory=dict)
    solver: dict[str, Any] | None = None


@dataclass(frozen=True)
class DataConfig:
    train_path: Path
    label_column: str
    test_path: Path | None = None
    feature_columns: tuple[str, ...] | None = None


@dataclass(frozen=True)
class ArtifactsConfig:
    output_dir: Path


@dataclass(frozen=True)
class TrainingConfig:
    model: ModelSpecConfig
    data: DataConfig
    artifacts: ArtifactsConfig


def load_training_config(config_path: str | Path) -> TrainingConfig:
    """Load a training config YAML file."""
    cfg_path = Path(config_path).expanduser().resolve()
    if not cfg_path.exists():
        raise FileNotFoundError(f'Config file not found: {cfg_path}')

    with cfg_path.open('r', encoding='utf-8') as fh:
        data = yaml.safe_load(fh) or {}

    base_dir = cfg_path.parent

    model_section = data.get('model') or {}
    data_section = data.get('data') or {}
    artifacts_section = data.get('artifacts') or {}

    model_type = str(model_section.get('type', 'logistic'))
    if model_type not in MODEL_TYPES:
        raise ValueError(
            f'model.type must be one of {list(MODEL_TYPES)}, got {model_type!r}'
        )

    model = ModelSpecConfig(
        name=str(model_section.get('name', model_type)),
        type=model_type,
        params=dict(model_section.get('params') or {}),
        solver=model_section.get('solver') or None,
    )

    train_path = data_section.get('train')
    if not train_path:
        raise ValueError('data.train must be set in training config')
    label_column = data_section.get('label_column')
    if not label_column:
        raise ValueError('data.label_column must be set in training config')

    feature_columns = data_section.get('feature_columns')
    data_cfg = DataConfig(
        train_path=_resolve_path(base_dir, train_path),
        label_column=str(label_column),
        test_path=_resolve_optional_path(base_dir, data_section.get('test')),
        feature_columns=_ensure_tuple(feature_columns) if feature_columns else None,
    )

    artifacts = ArtifactsConfig(
        output_dir=_resolve_path(
            base_dir,
            artifacts_section.get('output_dir', 'artifacts/models'),
        ),
    )

    return TrainingConfig(model=model, data=data_cfg, artifacts=artifacts)


def classifier_from_config(config: ModelSpecConfig) -> Classifier:
    """Build the classifier configuration described by a model section."""
    return build_classifier(config.type, config.params, config.solver)


def _resolve_path(base: Path, value: str | Path) -> Path:
    path = Path(value)
    if not path.is_absolute():
        path = (base / path).resolve()
    return path


def _resolve_optional_path(base: Path, value: str | Path | None) -> Path | None:
    if value is None:
        return None
    return _resolve_path(base, value)


def _ensure_tuple(items: Iterable[str] | None) -> tuple[str, ...]:
    if not items:
        return tuple()
    return tuple(str(item) for item in items)
