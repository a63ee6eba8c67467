"""Rebuild array state from a trace at any step, forward or backward."""

from __future__ import annotations

from typing import Optional

from .errors import TraceIntegrityError
from .operations import (
    CompareOperation,
    CompleteOperation,
    InitOperation,
    Number,
    Operation,
    SetOperation,
    SwapOperation,
    Trace,
)


def apply_operation(state: list[Number], op: Operation) -> None:
    """Apply *op* to *state* in place (markers leave it untouched)."""
    if isinstance(op, SwapOperation):
        i, j = op.indices
        state[i], state[j] = state[j], state[i]
    elif isinstance(op, SetOperation):
        state[op.index] = op.value
    elif isinstance(op, InitOperation):
        state[:] = list(op.array)


def revert_operation(state: list[Number], op: Operation) -> None:
    """Undo *op* on *state* in place; the inverse of ``apply_operation``."""
    if isinstance(op, SwapOperation):
        i, j = op.indices
        state[i], state[j] = state[j], state[i]
    elif isinstance(op, SetOperation):
        state[op.index] = op.previous
    elif isinstance(op, InitOperation):
        state.clear()


def replay(trace: Trace, upto: Optional[int] = None) -> list[Number]:
    """Array state after applying operations ``0..upto`` (all by default)."""
    state: list[Number] = []
    last = len(trace) - 1 if upto is None else upto
    for op in trace.operations[: last + 1]:
        apply_operation(state, op)
    return state


def snapshots(trace: Trace) -> list[list[Number]]:
    """Array state after each operation, one entry per operation."""
    state: list[Number] = []
    result = []
    for op in trace:
        apply_operation(state, op)
        result.append(list(state))
    return result


class TracePlayer:
    """Step cursor over a trace.

    ``position`` is the number of operations applied so far: 0 means nothing
    has been applied, ``len(trace)`` means the whole trace has.
    """

    def __init__(self, trace: Trace):
        self._trace = trace
        self._state: list[Number] = []
        self._position = 0

    @property
    def position(self) -> int:
        return self._position

    @property
    def state(self) -> list[Number]:
        return list(self._state)

    @property
    def at_end(self) -> bool:
        return self._position >= len(self._trace)

    @property
    def current(self) -> Optional[Operation]:
        """The operation most recently applied."""
        if self._position == 0:
            return None
        return self._trace[self._position - 1]

    def step_forward(self) -> Optional[Operation]:
        if self.at_end:
            return None
        op = self._trace[self._position]
        apply_operation(self._state, op)
        self._position += 1
        return op

    def step_backward(self) -> Optional[Operation]:
        if self._position == 0:
            return None
        self._position -= 1
        op = self._trace[self._position]
        revert_operation(self._state, op)
        return op

    def seek(self, position: int) -> None:
        position = max(0, min(position, len(self._trace)))
        while self._position < position:
            self.step_forward()
        while self._position > position:
            self.step_backward()

    def reset(self) -> None:
        self.seek(0)


def validate_trace(trace: Trace) -> None:
    """Check ordering, index range and recorded values by replaying.

    Raises:
        TraceIntegrityError: On the first violated invariant.
    """
    ops = trace.operations
    if not ops or not isinstance(ops[0], InitOperation):
        raise TraceIntegrityError("Trace must start with an init operation")
    if not isinstance(ops[-1], CompleteOperation):
        raise TraceIntegrityError("Trace must end with a complete operation")
    inits = sum(isinstance(op, InitOperation) for op in ops)
    completes = sum(isinstance(op, CompleteOperation) for op in ops)
    if inits != 1 or completes != 1:
        raise TraceIntegrityError(
            f"Expected one init and one complete, got {inits} and {completes}"
        )

    state = list(ops[0].array)
    for step, op in enumerate(ops[1:], start=1):
        bad = [idx for idx in op.touched_indices() if not 0 <= idx < len(state)]
        if bad:
            raise TraceIntegrityError(
                f"Step {step} ({op.type}) has out-of-range indices {bad}"
            )
        if isinstance(op, (CompareOperation, SwapOperation)):
            i, j = op.indices
            if tuple(op.values) != (state[i], state[j]):
                raise TraceIntegrityError(
                    f"Step {step} ({op.type}) records {list(op.values)}, "
                    f"replayed state has {[state[i], state[j]]}"
                )
        elif isinstance(op, SetOperation) and op.previous != state[op.index]:
            raise TraceIntegrityError(
                f"Step {step} (set) records previous {op.previous}, "
                f"replayed state has {state[op.index]}"
            )
        apply_operation(state, op)
