"""
Counters for step tracking.
"""


class StepCounter:
    """
    Tracks how many steps a step machine has executed.

    Keeps a breakdown by operation name (SubBytes, compress, ...) next to
    the total so a walkthrough can summarise where the work went.
    """

    def __init__(self):
        self._count = 0
        self._by_operation: dict[str, int] = {}

    def increment(self, operation: str = "", amount: int = 1) -> None:
        """Add steps to the counter."""
        self._count += amount
        if operation:
            self._by_operation[operation] = self._by_operation.get(operation, 0) + amount

    def reset(self) -> None:
        """Reset counter to zero."""
        self._count = 0
        self._by_operation.clear()

    @property
    def count(self) -> int:
        """Get current step count."""
        return self._count

    @property
    def by_operation(self) -> dict[str, int]:
        """Get steps broken down by operation."""
        return dict(self._by_operation)

    def summary(self) -> str:
        """Return a summary string of executed steps."""
        lines = [f"Total steps: {self._count}"]
        if self._by_operation:
            lines.append("By operation:")
            for op in sorted(self._by_operation.keys()):
                lines.append(f"  {op}: {self._by_operation[op]}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"StepCounter(count={self._count})"
