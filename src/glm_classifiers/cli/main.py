"""Command-line interface for glm_classifiers."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import pandas as pd
import typer

from ..io import load_model
from ..models import MODEL_TYPES, describe, get_model_class, hyperparameters, predict_proba
from ..training import train_from_config
from ..utils import get_logger, json_log, set_level

app = typer.Typer(help='GLM classifiers CLI', no_args_is_help=True)

log = get_logger(__name__)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option('--verbose', '-v', help='Log debug events.'),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option('--quiet', '-q', help='Only log warnings and errors.'),
    ] = False,
) -> None:
    """Fit and apply logistic and multinomial classifiers."""
    if verbose:
        set_level('DEBUG')
    elif quiet:
        set_level('WARNING')


@app.command('describe')
def describe_model(
    model_type: Annotated[
        str | None,
        typer.Argument(help=f'Model type to describe ({", ".join(MODEL_TYPES)}). All if omitted.'),
    ] = None,
) -> None:
    """Print the description and hyperparameters of a classifier."""
    if model_type is None:
        keys = list(MODEL_TYPES)
    elif model_type in MODEL_TYPES:
        keys = [model_type]
    else:
        typer.echo(
            f'Unknown model type: {model_type!r}. Available types: {list(MODEL_TYPES)}',
            err=True,
        )
        raise typer.Exit(code=1)

    for key in keys:
        cls = get_model_class(key)
        typer.echo(f'{cls.__name__} ({key})')
        typer.echo(f'  {describe(cls)}')
        for name, default, doc in hyperparameters(cls):
            typer.echo(f'  - {name} = {default}: {doc}')


@app.command('train')
def train_model(
    config: Annotated[
        Path,
        typer.Option(
            '--config',
            '-c',
            exists=True,
            readable=True,
            help='Path to training config YAML.',
        ),
    ] = Path('configs/training.yaml'),
) -> None:
    """Fit a classifier from a config file and save the artifacts."""
    log.info(json_log('cli.train.start', component='cli', config=str(config)))
    result = train_from_config(config)
    log.info(json_log('cli.train.completed', component='cli', artifact_dir=result['artifact_dir']))

    if result['report'] is not None:
        typer.echo(f'Test accuracy: {result["report"]["accuracy"]:.4f}')
    typer.echo(f'Model trained. Artifacts in {result["artifact_dir"]}')


@app.command('predict')
def predict_csv(
    model_dir: Annotated[
        Path,
        typer.Option(
            '--model-dir',
            '-m',
            exists=True,
            file_okay=False,
            help='Directory holding model.joblib and metadata.json.',
        ),
    ],
    input_csv: Annotated[
        Path,
        typer.Option(
            '--input',
            '-i',
            exists=True,
            readable=True,
            help='CSV with the feature columns used in training.',
        ),
    ],
    output: Annotated[
        Path,
        typer.Option(
            '--output',
            '-o',
            help='Where to write per-class probabilities and predicted labels.',
        ),
    ],
) -> None:
    """Predict class probabilities for a CSV file."""
    artifact = load_model(model_dir)
    df = pd.read_csv(input_csv)

    proba = predict_proba(artifact.result, df)
    out = proba.add_prefix('p_')
    out['prediction'] = proba.idxmax(axis=1)

    output.parent.mkdir(parents=True, exist_ok=True)
    out.to_csv(output, index=False)

    log.info(
        json_log(
            'cli.predict.completed',
            component='cli',
            model_version=artifact.version,
            rows=len(out),
            output=str(output),
        )
    )
    typer.echo(f'Predictions written to: {output}')


if __name__ == '__main__':
    app()
