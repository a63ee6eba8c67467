"""Owns the shadow array and the event log built against it."""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from . import constants
from .operations import (
    CommentOperation,
    CompareOperation,
    CompleteOperation,
    HighlightOperation,
    InitOperation,
    Number,
    Operation,
    SetOperation,
    SortedOperation,
    SwapOperation,
    Trace,
)

logger = logging.getLogger(__name__)


class TraceRecorder:
    """Emits operations while mutating a private copy of the array.

    Every emitting method reads values from the shadow array *before*
    applying its own mutation, so recorded values are always pre-operation
    state.  Events that would name an index outside the array are dropped
    and reported as ``False``.
    """

    def __init__(self, values: Sequence[Number]):
        self.shadow: list[Number] = list(values)
        self._operations: list[Operation] = [InitOperation(array=list(values))]
        self._completed = False

    def __len__(self) -> int:
        return len(self._operations)

    @property
    def operations(self) -> list[Operation]:
        return list(self._operations)

    def _in_range(self, kind: str, indices: Iterable[int]) -> bool:
        indices = list(indices)
        if all(0 <= idx < len(self.shadow) for idx in indices):
            return True
        logger.debug(
            "Rejected %s with out-of-range indices %s (length %d)",
            kind,
            indices,
            len(self.shadow),
        )
        return False

    def _append(self, op: Operation) -> None:
        if self._completed:
            raise RuntimeError("Trace already completed")
        self._operations.append(op)

    def compare(self, i: int, j: int) -> bool:
        if not self._in_range("compare", (i, j)):
            return False
        self._append(
            CompareOperation(indices=(i, j), values=(self.shadow[i], self.shadow[j]))
        )
        return True

    def swap(self, i: int, j: int) -> bool:
        if not self._in_range("swap", (i, j)):
            return False
        self._append(
            SwapOperation(indices=(i, j), values=(self.shadow[i], self.shadow[j]))
        )
        self.shadow[i], self.shadow[j] = self.shadow[j], self.shadow[i]
        return True

    def set(self, index: int, value: Number) -> bool:
        if not self._in_range("set", (index,)):
            return False
        self._append(
            SetOperation(index=index, value=value, previous=self.shadow[index])
        )
        self.shadow[index] = value
        return True

    def highlight(
        self, indices: Sequence[int], color: int = constants.PIVOT_HIGHLIGHT_COLOR
    ) -> bool:
        if not self._in_range("highlight", indices):
            return False
        self._append(HighlightOperation(indices=list(indices), color=color))
        return True

    def sorted(self, indices: Sequence[int]) -> bool:
        if not self._in_range("sorted", indices):
            return False
        self._append(SortedOperation(indices=list(indices)))
        return True

    def comment(self, message: str) -> None:
        self._append(CommentOperation(message=message))

    def complete(self) -> Trace:
        """Append the terminal ``complete`` and freeze the trace."""
        self._append(CompleteOperation())
        self._completed = True
        logger.info("Generated %d operations", len(self._operations))
        return Trace(operations=tuple(self._operations))
