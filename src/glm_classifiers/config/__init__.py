"""Configuration utilities for glm_classifiers."""

from .training import (
    ArtifactsConfig,
    DataConfig,
    ModelSpecConfig,
    TrainingConfig,
    classifier_from_config,
    load_training_config,
)

__all__ = [
    'ArtifactsConfig',
    'DataConfig',
    'ModelSpecConfig',
    'TrainingConfig',
    'classifier_from_config',
    'load_training_config',
]
