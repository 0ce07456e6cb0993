"""Persistence of fitted classifiers."""

from __future__ import annotations

import json
import platform
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import joblib

from ..models import FitResult
from ..utils.logging import get_logger, json_log

log = get_logger(__name__)

MODEL_FILENAME = 'model.joblib'
METADATA_FILENAME = 'metadata.json'


@dataclass(frozen=True)
class ModelArtifact:
    """Container for a loaded model and its metadata."""

    result: FitResult
    metadata: dict[str, Any]
    version: str
    model_name: str


class ModelLoadError(RuntimeError):
    """Raised when model loading fails."""


def get_environment_info() -> dict[str, str]:
    """Get Python and sklearn versions."""
    import sklearn

    return {
        'python_version': platform.python_version(),
        'sklearn_version': sklearn.__version__,
    }


def generate_run_id(base_dir: Path, prefix: str = 'model') -> str:
    """Generate unique run ID based on date and sequence number."""
    today = datetime.now(UTC).strftime('%Y-%m-%d')
    run_prefix = f'{prefix}.{today}_'
    existing = (
        [
            int(p.name.rsplit('_', 1)[-1])
            for p in base_dir.iterdir()
            if p.is_dir()
            and p.name.startswith(run_prefix)
            and p.name[len(run_prefix):].isdigit()
        ]
        if base_dir.exists()
        else []
    )

    # numeric order, so _1000 follows _999
    last_idx = max(existing, default=0)
    return f'{prefix}.{today}_{last_idx + 1:03d}'


def save_model(result: FitResult, out_dir: str | Path, metadata: dict[str, Any]) -> Path:
    """
    Persist a fitted classifier and its metadata.

    Args:
        result: Fitted classifier.
        out_dir: Directory to create; must not exist yet.
        metadata: JSON-serialisable metadata written next to the model.

    Returns:
        Path to the saved model file.
    """
    out_path = Path(out_dir)
    out_path.mkdir(parents=True, exist_ok=False)

    model_path = out_path / MODEL_FILENAME
    joblib.dump(result, model_path, compress=3)
    (out_path / METADATA_FILENAME).write_text(
        json.dumps(metadata, indent=2, default=str), encoding='utf-8'
    )

    log.info(json_log('model.saved', component='io.artifacts', path=str(model_path)))
    return model_path


def load_model(model_dir: str | Path) -> ModelArtifact:
    """
    Load a fitted classifier and its metadata from a directory.

    Args:
        model_dir: Directory containing model.joblib and metadata.json.

    Returns:
        ModelArtifact with the fitted classifier.

    Raises:
        ModelLoadError: If files are missing, corrupted, or hold something
            other than a fitted classifier.
    """
    model_path = Path(model_dir)

    if not model_path.exists():
        raise ModelLoadError(f'Model directory not found: {model_path}')

    joblib_path = model_path / MODEL_FILENAME
    metadata_path = model_path / METADATA_FILENAME

    if not joblib_path.exists():
        raise ModelLoadError(f'Model file not found: {joblib_path}')

    if not metadata_path.exists():
        raise ModelLoadError(f'Metadata file not found: {metadata_path}')

    try:
        result = joblib.load(joblib_path)
    except Exception as exc:
        raise ModelLoadError(f'Failed to load model: {exc}') from exc

    if not isinstance(result, FitResult):
        raise ModelLoadError(f'{joblib_path} does not contain a fitted classifier')

    try:
        metadata = json.loads(metadata_path.read_text(encoding='utf-8'))
    except (json.JSONDecodeError, OSError) as exc:
        raise ModelLoadError(f'Failed to load metadata: {exc}') from exc

    version = metadata.get('version', 'unknown')
    log.info(
        json_log(
            'model.loaded',
            component='io.artifacts',
            model_dir=str(model_path),
            version=version,
        )
    )

    return ModelArtifact(
        result=result,
        metadata=metadata,
        version=version,
        model_name=metadata.get('model_name', 'unknown'),
    )
