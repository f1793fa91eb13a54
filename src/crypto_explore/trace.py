"""
Trace recording and pretty printing for stepped AES / SHA-256 runs.

Contains:
- TraceRecorder: in-memory records + JSON Lines file + compact verbose stdout
- print_header / print_result: shared formatting helpers
"""

from __future__ import annotations

import json
from typing import Any, Sequence, TextIO

from .utils import format_state_line

REGISTER_NAMES = ("a", "b", "c", "d", "e", "f", "g", "h")


# ------------------------------------------------------------------
# Formatting helpers
# ------------------------------------------------------------------

def compute_state_delta(
    old_state: Sequence[Sequence[int]] | None,
    new_state: Sequence[Sequence[int]],
    max_show: int = 8,
) -> str:
    """Compute byte-wise delta between two AES states."""
    if old_state is None:
        return "(initial)"

    changes: list[str] = []
    for col in range(4):
        for row in range(4):
            idx = col * 4 + row
            ov = old_state[row][col]
            nv = new_state[row][col]
            if ov != nv:
                changes.append(f"b[{idx:d}]={ov:02x}→{nv:02x}")

    if not changes:
        return "(no change)"
    if len(changes) <= max_show:
        return " ".join(changes)
    return " ".join(changes[:max_show]) + f" +{len(changes) - max_show} more"


def compute_register_delta(
    old_regs: Sequence[int] | None,
    new_regs: Sequence[int],
) -> str:
    """Compute register-wise delta between two SHA-256 register sets."""
    if old_regs is None:
        return "(initial)"

    changes = [
        f"{name}={ov:08x}→{nv:08x}"
        for name, ov, nv in zip(REGISTER_NAMES, old_regs, new_regs)
        if ov != nv
    ]
    if not changes:
        return "(no change)"
    return " ".join(changes)


# ------------------------------------------------------------------
# TraceRecorder
# ------------------------------------------------------------------

class TraceRecorder:
    """
    Records and outputs traces of stepped executions.

    Supports:
    - JSON Lines file output  (always, when trace_file is set)
    - Compact verbose stdout  (one line per step)
    """

    def __init__(self, verbose: bool = False, trace_file: TextIO | None = None):
        self.verbose = verbose
        self.trace_file = trace_file
        self._records: list[dict[str, Any]] = []

    def record(self, **kwargs) -> None:
        """
        Record a trace entry.

        Entries carrying a ``state`` (AES) or ``registers`` (SHA-256) field
        also produce a verbose stdout line when verbose is active.
        """
        self._records.append(kwargs)

        if self.trace_file:
            self._write_jsonl(kwargs)

        if self.verbose:
            self._print_verbose(kwargs)

    def _write_jsonl(self, record: dict[str, Any]) -> None:
        serializable = self._make_serializable(record)
        self.trace_file.write(json.dumps(serializable) + "\n")
        self.trace_file.flush()

    def _make_serializable(self, obj: Any) -> Any:
        if isinstance(obj, dict):
            return {k: self._make_serializable(v) for k, v in obj.items()}
        elif isinstance(obj, (list, tuple)):
            return [self._make_serializable(item) for item in obj]
        elif isinstance(obj, bytes):
            return obj.hex()
        else:
            return obj

    def _print_verbose(self, record: dict[str, Any]) -> None:
        step = record.get("step", 0)
        operation = record.get("operation", "unknown")

        if "state" in record:
            round_num = record.get("round", "?")
            state_hex = format_state_line(record["state"])
            delta = compute_state_delta(record.get("prev_state"), record["state"])
            print(f"S{step:04d} R{round_num:<2}  {operation:12s} STATE:{state_hex}  Δ:{delta}")
        elif "registers" in record:
            block = record.get("block", 0)
            round_num = record.get("round", 0)
            regs = " ".join(f"{r:08x}" for r in record["registers"])
            print(f"S{step:04d} B{block} R{round_num:02d}  {operation:12s} REGS:{regs}")
            if record.get("prev_registers") is not None:
                delta = compute_register_delta(record["prev_registers"], record["registers"])
                print(f"  Δ:{delta}")

    def get_records(self) -> list[dict[str, Any]]:
        return list(self._records)

    def clear(self) -> None:
        self._records.clear()


# ------------------------------------------------------------------
# Shared formatting functions
# ------------------------------------------------------------------

def print_header(title: str) -> None:
    """Print a section header."""
    print(f"\n{'#'*70}")
    print(f"# {title}")
    print(f"{'#'*70}")


def print_subheader(title: str) -> None:
    """Print a subsection header."""
    print(f"\n{'-'*50}")
    print(f"  {title}")
    print(f"{'-'*50}")


def print_result(label: str, result_hex: str, steps: int, passed: bool = True) -> None:
    """Print final result of a stepped run."""
    print(f"\n{'='*70}")
    print("RESULT")
    print(f"{'='*70}")
    print(f"{label}: {result_hex}")
    print(f"Steps: {steps}")

    status = "PASS" if passed else "FAIL"
    marker = "[OK]" if passed else "[ERROR]"
    print(f"Verification: {marker} {status}")
    print(f"{'='*70}")
