from __future__ import annotations

import json
from dataclasses import asdict
from pathlib import Path
from typing import Any

import pandas as pd
from sklearn.metrics import accuracy_score, classification_report, log_loss

from ..config import classifier_from_config, load_training_config
from ..io import generate_run_id, get_environment_info, save_model
from ..models import FitResult, fit, predict, predict_proba
from ..utils.logging import get_logger, json_log

log = get_logger(__name__)


def load_dataset(
    csv_path: str | Path,
    label_column: str,
    feature_columns: tuple[str, ...] | None = None,
) -> tuple[pd.DataFrame, pd.Series]:
    """Read a CSV and split it into features and labels."""
    df = pd.read_csv(csv_path)
    if label_column not in df.columns:
        raise ValueError(f"Label column '{label_column}' not found in {csv_path}")

    if feature_columns is None:
        feature_columns = tuple(col for col in df.columns if col != label_column)
    missing = [col for col in feature_columns if col not in df.columns]
    if missing:
        raise ValueError(f'Feature columns {missing} not found in {csv_path}')

    return df[list(feature_columns)], df[label_column]


def evaluate(result: FitResult, X: pd.DataFrame, y: pd.Series) -> dict[str, Any]:
    proba = predict_proba(result, X)
    y_pred = predict(result, X)
    return {
        'accuracy': float(accuracy_score(y, y_pred)),
        'log_loss': float(log_loss(y, proba.to_numpy(), labels=list(result.classes))),
        'classification_report': classification_report(
            y.astype(str), pd.Series(y_pred).astype(str), output_dict=True, zero_division=0
        ),
    }


def train_from_config(config_path: str | Path) -> dict:
    cfg = load_training_config(config_path)
    classifier = classifier_from_config(cfg.model)

    X_train, y_train = load_dataset(
        cfg.data.train_path, cfg.data.label_column, cfg.data.feature_columns
    )

    log.info(
        json_log(
            'train.start',
            component='training',
            config=str(config_path),
            model_type=cfg.model.type,
            n_samples=len(X_train),
        )
    )
    result = fit(classifier, X_train, y_train)
    log.info(json_log('train.completed', component='training', **result.report))

    test_metrics = None
    if cfg.data.test_path is not None:
        X_test, y_test = load_dataset(
            cfg.data.test_path, cfg.data.label_column, result.feature_names
        )
        test_metrics = evaluate(result, X_test, y_test)
        log.info(
            json_log(
                'train.evaluated',
                component='training',
                accuracy=test_metrics['accuracy'],
                log_loss=test_metrics['log_loss'],
            )
        )

    base_dir = cfg.artifacts.output_dir
    run_id = generate_run_id(base_dir, prefix='model')
    out_dir = base_dir / run_id

    problem = result.solution.problem
    metadata = {
        'model_name': cfg.model.name,
        'model_type': cfg.model.type,
        'version': run_id.split('.', 1)[1],
        **get_environment_info(),
        'problem': problem.as_dict(),
        'solver': asdict(result.solution.solver),
        'fit': result.report,
        'classes': result.classes.tolist(),
        'feature_names': list(result.feature_names),
        'artifacts': {
            'format': 'joblib',
            'run_id': run_id,
        },
    }
    model_path = save_model(result, out_dir, metadata)

    if test_metrics is not None:
        (out_dir / 'metrics_test.json').write_text(
            json.dumps(test_metrics, indent=2), encoding='utf-8'
        )

    return {
        'report': test_metrics,
        'artifact_dir': str(out_dir),
        'model_path': str(model_path),
    }
