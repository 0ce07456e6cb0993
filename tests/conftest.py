from __future__ import annotations

from pathlib import Path

import pandas as pd
import pytest
from sklearn.datasets import load_iris
from sklearn.model_selection import train_test_split


@pytest.fixture
def iris_csvs(tmp_path: Path) -> tuple[Path, Path]:
    """Write stratified iris train/test splits with a string label column."""
    data = load_iris(as_frame=True)
    df = data.data.copy()
    df['species'] = data.target.map(dict(enumerate(data.target_names)))
    train_df, test_df = train_test_split(
        df, test_size=0.3, stratify=df['species'], random_state=42
    )

    data_dir = tmp_path / 'data'
    data_dir.mkdir()
    train_path = data_dir / 'train.csv'
    test_path = data_dir / 'test.csv'
    train_df.to_csv(train_path, index=False)
    test_df.to_csv(test_path, index=False)
    return train_path, test_path


@pytest.fixture
def training_config(tmp_path: Path, iris_csvs: tuple[Path, Path]) -> Path:
    config_path = tmp_path / 'training.yaml'
    config_path.write_text(
        """
model:
  name: iris_test
  type: logistic
  params:
    lambda: 0.1
data:
  train: data/train.csv
  test: data/test.csv
  label_column: species
artifacts:
  output_dir: artifacts
""",
        encoding='utf-8',
    )
    return config_path
