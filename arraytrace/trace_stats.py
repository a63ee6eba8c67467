"""Pure functions for computing statistics over traces."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from .operations import OperationType, Trace


def count_operation_types(trace: Trace) -> dict[str, int]:
    """Return a frequency map of operation type names in *trace*.

    Args:
        trace: A synthesized or generated trace.

    Returns:
        A dict mapping type names (``"compare"``, ``"swap"`` …) to their
        occurrence counts.  Empty dict for an empty trace.
    """
    return dict(Counter(op.type for op in trace))


@dataclass
class TraceStats:
    """Summary counts for one trace."""

    length: int = 0
    array_length: int = 0
    compares: int = 0
    swaps: int = 0
    sets: int = 0
    sorted_markers: int = 0

    @classmethod
    def of(cls, trace: Trace) -> "TraceStats":
        counts = count_operation_types(trace)
        return cls(
            length=len(trace),
            array_length=len(trace.initial_array),
            compares=counts.get(OperationType.COMPARE.value, 0),
            swaps=counts.get(OperationType.SWAP.value, 0),
            sets=counts.get(OperationType.SET.value, 0),
            sorted_markers=counts.get(OperationType.SORTED.value, 0),
        )

    def report(self) -> str:
        lines = [
            "═══ Trace Statistics ═══",
            f"  {'Operations':<16} {self.length:>6}",
            f"  {'Array length':<16} {self.array_length:>6}",
            f"  {'Compares':<16} {self.compares:>6}",
            f"  {'Swaps':<16} {self.swaps:>6}",
            f"  {'Sets':<16} {self.sets:>6}",
            f"  {'Sorted markers':<16} {self.sorted_markers:>6}",
        ]
        return "\n".join(lines)
