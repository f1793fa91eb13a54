"""Reporting functionality for validation and avalanche runs.

Generates CSV, JSON, and Markdown reports.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path

from .interfaces import ValidationSummary
from .metrics import AvalancheStats, distance_histogram


def export_trials_to_csv(
    stats: AvalancheStats,
    output_path: str | Path,
) -> Path:
    """Export per-trial avalanche results to a CSV file.

    Args:
        stats: Avalanche statistics with their trials
        output_path: Path to output CSV file

    Returns:
        Path to written file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fieldnames = ["trial", "message_hex", "bit_index", "distance"]
    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=fieldnames)
        writer.writeheader()
        for i, trial in enumerate(stats.trials):
            writer.writerow({"trial": i, **trial.to_dict()})

    return output_path


def export_to_json(
    stats: AvalancheStats,
    output_path: str | Path,
    indent: int = 2,
) -> Path:
    """Export avalanche summary and trials to a JSON file."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    data = {
        "version": "1.0",
        "summary": stats.to_dict(),
        "histogram": distance_histogram(stats),
        "trials": [t.to_dict() for t in stats.trials],
    }

    with open(output_path, "w") as f:
        json.dump(data, f, indent=indent, default=str)

    return output_path


def export_to_markdown(
    stats: AvalancheStats,
    output_path: str | Path,
    title: str = "SHA-256 Avalanche Report",
) -> Path:
    """Export an avalanche summary to a Markdown report."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    lines: list[str] = []
    lines.append(f"# {title}")
    lines.append("")
    lines.append(f"Trials: {len(stats.trials)} "
                 f"(message length {stats.config.message_bytes} bytes, one bit flipped)")
    lines.append("")

    if not stats.trials:
        lines.append("No results to report.")
        with open(output_path, "w") as f:
            f.write("\n".join(lines))
        return output_path

    lines.append("## Summary")
    lines.append("")
    lines.append("| Metric | Value |")
    lines.append("| --- | --- |")
    lines.append(f"| Mean distance | {stats.mean:.2f} |")
    lines.append(f"| Expected | {stats.config.expected_distance:.0f} |")
    lines.append(f"| Std. dev. | {stats.stdev:.2f} |")
    lines.append(f"| Min | {stats.minimum} |")
    lines.append(f"| Max | {stats.maximum} |")
    lines.append(f"| Mean flipped | {stats.mean_percent:.1f}% |")
    lines.append("")

    lines.append("## Distance Histogram")
    lines.append("")
    hist = distance_histogram(stats)
    peak = max(hist.values())
    for lo, count in hist.items():
        bar = "#" * max(1, round(40 * count / peak))
        lines.append(f"- `{lo:3d}-{lo + 7:3d}` {bar} ({count})")
    lines.append("")

    with open(output_path, "w") as f:
        f.write("\n".join(lines))

    return output_path


def format_validation_table(summary: ValidationSummary) -> str:
    """Format validation results as an aligned text table."""
    headers = ["Primitive", "Vector", "Steps", "Result"]
    rows = [
        [r.primitive, r.label, str(r.steps), "PASS" if r.correct else "FAIL"]
        for r in summary.results
    ]
    widths = [len(h) for h in headers]
    for row in rows:
        for i, v in enumerate(row):
            widths[i] = max(widths[i], len(v))

    lines = ["  ".join(h.ljust(widths[i]) for i, h in enumerate(headers))]
    lines.append("  ".join("-" * w for w in widths))
    for row in rows:
        lines.append("  ".join(v.ljust(widths[i]) for i, v in enumerate(row)))
    return "\n".join(lines)


def print_avalanche_summary(stats: AvalancheStats) -> None:
    """Print a short avalanche summary to stdout."""
    print(f"Trials:        {len(stats.trials)}")
    print(f"Mean distance: {stats.mean:.2f} / {stats.config.digest_bits} "
          f"({stats.mean_percent:.1f}%)")
    print(f"Std. dev.:     {stats.stdev:.2f}")
    print(f"Range:         {stats.minimum}..{stats.maximum}")
