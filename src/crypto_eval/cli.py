"""Command-line interface for the evaluation framework."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from . import __version__
from .golden import run_validation
from .interfaces import AvalancheConfig
from .metrics import run_avalanche
from .reporting import (
    export_to_json,
    export_to_markdown,
    export_trials_to_csv,
    format_validation_table,
    print_avalanche_summary,
)


@click.group()
@click.version_option(version=__version__, prog_name="crypto-eval")
def main() -> None:
    """Validation and avalanche measurement for stepped AES-128 / SHA-256.

    Checks the step machines against PyCryptodome and measures how well
    SHA-256 diffuses single-bit input changes.
    """
    pass


@main.command()
@click.option(
    "--n",
    "num_tests",
    type=int,
    default=20,
    help="Number of random vectors per primitive (default: 20)",
)
@click.option(
    "--seed",
    type=int,
    default=None,
    help="Random seed for reproducibility",
)
@click.option(
    "--verbose", "-v",
    is_flag=True,
    help="Show every vector",
)
def validate(num_tests: int, seed: int | None, verbose: bool) -> None:
    """Validate stepped and batch engines against known answers and PyCryptodome."""
    click.echo("Running FIPS-197 / SHA-256 KAT tests and random vectors...")
    summary = run_validation(num_random=num_tests, seed=seed)

    if verbose:
        click.echo("")
        click.echo(format_validation_table(summary))

    for r in summary.results:
        if not r.correct:
            click.echo(f"  {r.primitive} {r.label}: FAIL - {r.error_detail}")

    click.echo("")
    total = len(summary.results)
    if summary.all_passed:
        click.echo(f"VALIDATION PASSED: All {total} tests passed")
        sys.exit(0)
    else:
        click.echo(f"VALIDATION FAILED: {summary.failed} failures")
        sys.exit(1)


@main.command()
@click.option(
    "--trials",
    type=int,
    default=200,
    help="Number of single-bit-flip trials (default: 200)",
)
@click.option(
    "--length",
    "message_bytes",
    type=int,
    default=32,
    help="Random message length in bytes (default: 32)",
)
@click.option(
    "--seed",
    type=int,
    default=42,
    help="Random seed for reproducibility (default: 42)",
)
@click.option(
    "--out",
    "output_dir",
    type=click.Path(),
    default=None,
    help="Write CSV/JSON/Markdown reports to this directory",
)
def avalanche(trials: int, message_bytes: int, seed: int, output_dir: str | None) -> None:
    """Measure SHA-256 avalanche over random single-bit flips."""
    try:
        config = AvalancheConfig(trials=trials, message_bytes=message_bytes, seed=seed)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    stats = run_avalanche(config)
    print_avalanche_summary(stats)

    if output_dir:
        out = Path(output_dir)
        csv_path = export_trials_to_csv(stats, out / "avalanche_trials.csv")
        json_path = export_to_json(stats, out / "avalanche.json")
        md_path = export_to_markdown(stats, out / "avalanche.md")
        click.echo("")
        click.echo(f"Reports written to {out}:")
        for path in (csv_path, json_path, md_path):
            click.echo(f"  {path.name}")


if __name__ == "__main__":
    main()
