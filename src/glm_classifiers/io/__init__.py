"""Input/output helpers."""

from .artifacts import (
    ModelArtifact,
    ModelLoadError,
    generate_run_id,
    get_environment_info,
    load_model,
    save_model,
)

__all__ = [
    'ModelArtifact',
    'ModelLoadError',
    'generate_run_id',
    'get_environment_info',
    'load_model',
    'save_model',
]
