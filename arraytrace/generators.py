"""Canonical Trace Generators — value-driven reference traces.

Textbook bubble, selection and insertion sort, each run over a private
copy of the input and emitting the same schema as the synthesizer.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Sequence, Union

from .operations import Number, Trace
from .recorder import TraceRecorder

logger = logging.getLogger(__name__)


class Algorithm(str, Enum):
    BUBBLE_SORT = "bubbleSort"
    SELECTION_SORT = "selectionSort"
    INSERTION_SORT = "insertionSort"


def generate_bubble_sort(array: Sequence[Number]) -> Trace:
    rec = TraceRecorder(array)
    arr = rec.shadow
    n = len(arr)
    for i in range(n):
        for j in range(n - i - 1):
            rec.compare(j, j + 1)
            if arr[j] > arr[j + 1]:
                rec.swap(j, j + 1)
        rec.sorted([n - i - 1])
    return rec.complete()


def generate_selection_sort(array: Sequence[Number]) -> Trace:
    rec = TraceRecorder(array)
    arr = rec.shadow
    n = len(arr)
    for i in range(n - 1):
        min_idx = i
        rec.highlight([i])
        for j in range(i + 1, n):
            rec.compare(min_idx, j)
            if arr[j] < arr[min_idx]:
                min_idx = j
        if min_idx != i:
            rec.swap(i, min_idx)
        rec.sorted([i])
    if n:
        rec.sorted([n - 1])
    return rec.complete()


def generate_insertion_sort(array: Sequence[Number]) -> Trace:
    """Insertion sort expressed as adjacent exchanges.

    The key sinks one position per swap, so replaying the trace reproduces
    the shifts exactly.  Every evaluated comparison is recorded, including
    the one that stops the key.
    """
    rec = TraceRecorder(array)
    arr = rec.shadow
    for i in range(1, len(arr)):
        rec.highlight([i])
        j = i - 1
        while j >= 0:
            rec.compare(j, j + 1)
            if not arr[j] > arr[j + 1]:
                break
            rec.swap(j, j + 1)
            j -= 1
        rec.sorted([j + 1])
    return rec.complete()


_GENERATORS: dict[Algorithm, Callable[[Sequence[Number]], Trace]] = {
    Algorithm.BUBBLE_SORT: generate_bubble_sort,
    Algorithm.SELECTION_SORT: generate_selection_sort,
    Algorithm.INSERTION_SORT: generate_insertion_sort,
}


def generate(kind: Union[Algorithm, str], array: Sequence[Number]) -> Trace:
    """Generate the canonical trace of *kind* over *array*.

    Raises ``ValueError`` if *kind* names no known algorithm.
    """
    try:
        algorithm = Algorithm(kind)
    except ValueError:
        raise ValueError(
            f"Unknown algorithm: {kind} "
            f"(expected one of {', '.join(a.value for a in Algorithm)})"
        ) from None
    logger.info("Generating %s trace for %d values", algorithm.value, len(array))
    return _GENERATORS[algorithm](array)
