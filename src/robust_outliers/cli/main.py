"""Main CLI entry point for robust-outliers"""

import click
import json
import logging
import warnings
from pathlib import Path
from typing import List, Optional, Tuple

from ..data import SampleLoader, SyntheticDataGenerator
from ..models import CriterionWarning, DetectionResult
from ..outliers import detect, SensitivityAnalyzer
from ..utils.config import load_config, get_default_config


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger('robust-outliers-cli')

MISSING_TOKENS = {'', 'NA', 'NAN', 'NULL', 'NONE'}


def _parse_values(text: str) -> list:
    """Split a comma separated list; non-numeric tokens are kept as text"""
    values = []
    for token in text.split(','):
        token = token.strip()
        if token.upper() in MISSING_TOKENS:
            values.append(None)
            continue
        try:
            values.append(float(token))
        except ValueError:
            values.append(token)
    return values


def _load_input(input_path: Optional[str], column: str, values: Optional[str]):
    if (input_path is None) == (values is None):
        raise click.UsageError("Provide exactly one of --input or --values")

    if values is not None:
        return _parse_values(values)

    try:
        return SampleLoader().load_sample(input_path, column=column)
    except (KeyError, ValueError) as e:
        raise click.ClickException(str(e.args[0]) if e.args else str(e))


def _format_result_text(result: DetectionResult, n_observations: int) -> str:
    lines = [
        "Robust Outlier Detection",
        f"Observations: {n_observations}",
        f"Center (median): {result.center:.6g}",
        f"Spread (scaled MAD): {result.spread:.6g}",
        f"Criterion: {result.criterion:g}",
        f"Outliers: {result.n_outliers}",
    ]
    for index, value in zip(result.indices, result.values):
        lines.append(f"  [{index}] {value:.6g}")
    return "\n".join(lines)


def _emit(text: str, output: Optional[str]) -> None:
    if output:
        Path(output).write_text(text + "\n")
        logger.info(f"Report saved to {output}")
    else:
        click.echo(text)


@click.group()
@click.option('--config', '-c', type=click.Path(exists=True, dir_okay=False), help='Configuration file path')
@click.option('--debug/--no-debug', default=False, help='Enable debug mode')
@click.pass_context
def cli(ctx, config: Optional[str], debug: bool):
    """Robust outlier detection command line interface"""
    ctx.ensure_object(dict)

    # Load configuration
    try:
        ctx.obj['config'] = load_config(config) if config else get_default_config()
        level = ctx.obj['config']['logging']['level']
        logging.getLogger().setLevel(level.upper() if isinstance(level, str) else level)
    except (TypeError, ValueError) as e:
        raise click.ClickException(f"Invalid configuration: {e}")

    # Set debug mode
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        ctx.obj['debug'] = True


@cli.command(name='detect')
@click.option('--input', '-i', 'input_path', type=click.Path(exists=True, dir_okay=False), help='Input CSV or JSON file')
@click.option('--column', default='value', show_default=True, help='Column holding the sample')
@click.option('--values', '-v', help='Comma separated sample, NA for missing')
@click.option('--criterion', '-k', type=float, multiple=True, help='Threshold in scaled MADs')
@click.option('--skipna/--no-skipna', default=None, help='Drop missing values before computing median/MAD')
@click.option('--format', '-f', 'output_format', type=click.Choice(['text', 'json']), default='text')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Output report file')
@click.pass_context
def detect_command(ctx, input_path: Optional[str], column: str, values: Optional[str],
                   criterion: Tuple[float, ...], skipna: Optional[bool],
                   output_format: str, output: Optional[str]):
    """Flag robust outliers in a numeric sample"""
    settings = ctx.obj['config']['detection']
    sample = _load_input(input_path, column, values)

    crit = list(criterion) if criterion else settings['criterion']
    if skipna is None:
        skipna = settings['skipna']

    try:
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', CriterionWarning)
            result = detect(sample, criterion=crit, skipna=skipna)
    except (TypeError, ValueError) as e:
        raise click.ClickException(str(e))

    for message in result.warnings:
        click.echo(f"Warning: {message}", err=True)

    if output_format == 'json':
        text = json.dumps(result.to_dict(), indent=2, allow_nan=False)
    else:
        text = _format_result_text(result, len(sample))

    _emit(text, output)


@cli.command()
@click.option('--input', '-i', 'input_path', type=click.Path(exists=True, dir_okay=False), help='Input CSV or JSON file')
@click.option('--column', default='value', show_default=True, help='Column holding the sample')
@click.option('--values', '-v', help='Comma separated sample, NA for missing')
@click.option('--criteria', help='Comma separated criteria to test')
@click.option('--skipna/--no-skipna', default=None, help='Drop missing values before computing median/MAD')
@click.option('--parallel/--sequential', default=None, help='Run criteria on a thread pool')
@click.option('--output', '-o', type=click.Path(dir_okay=False), help='Output report file')
@click.pass_context
def sensitivity(ctx, input_path: Optional[str], column: str, values: Optional[str],
                criteria: Optional[str], skipna: Optional[bool], parallel: Optional[bool],
                output: Optional[str]):
    """Compare detections across a grid of criteria"""
    config = ctx.obj['config']
    sample = _load_input(input_path, column, values)

    if criteria:
        try:
            grid: List[float] = [float(c) for c in criteria.split(',')]
        except ValueError:
            raise click.BadParameter(f"Invalid criteria list: {criteria}", param_hint='--criteria')
    else:
        grid = config['sensitivity']['criteria']

    analyzer = SensitivityAnalyzer(
        parallel=config['sensitivity']['parallel'] if parallel is None else parallel,
        skipna=config['detection']['skipna'] if skipna is None else skipna
    )

    try:
        with warnings.catch_warnings():
            warnings.simplefilter('ignore', CriterionWarning)
            result = analyzer.analyze(sample, criteria=grid)
    except (TypeError, ValueError) as e:
        raise click.ClickException(str(e))

    _emit(analyzer.create_report(result), output)


@cli.command()
@click.option('--output', '-o', type=click.Path(dir_okay=False), required=True, help='Output CSV file')
@click.option('--seed', default=42, type=int, show_default=True)
@click.option('--n-inliers', default=98, type=int, show_default=True)
@click.option('--n-outliers', default=2, type=int, show_default=True)
@click.option('--missing-fraction', default=0.0, type=float, show_default=True)
def generate(output: str, seed: int, n_inliers: int, n_outliers: int, missing_fraction: float):
    """Write a synthetic contaminated sample to CSV"""
    generator = SyntheticDataGenerator(seed=seed)
    try:
        df = generator.generate_dataframe(
            missing_fraction=missing_fraction,
            n_inliers=n_inliers,
            n_outliers=n_outliers
        )
    except ValueError as e:
        raise click.ClickException(str(e))

    df.to_csv(output, index=False)
    logger.info(f"Generated {len(df)} observations")
    click.echo(f"Wrote {len(df)} observations to {output}")


def main():
    cli(obj={})


if __name__ == '__main__':
    main()
