"""Training pipeline.

Fits a classifier configuration described by a YAML file on CSV data and
persists the fitted model.
"""

from .train import evaluate, load_dataset, train_from_config

__all__ = ['evaluate', 'load_dataset', 'train_from_config']
