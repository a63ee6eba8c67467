"""Trace event schema — the operations a renderer replays."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Annotated, Any, Iterator, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

Number = Union[int, float]


class OperationType(str, Enum):
    INIT = "init"
    COMPARE = "compare"
    SWAP = "swap"
    SET = "set"
    HIGHLIGHT = "highlight"
    SORTED = "sorted"
    COMPLETE = "complete"
    COMMENT = "comment"


class _OperationBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    def touched_indices(self) -> list[int]:
        """Array positions this operation refers to (empty for markers)."""
        return []


class InitOperation(_OperationBase):
    type: Literal["init"] = "init"
    array: list[Number]

    def __str__(self) -> str:
        return f"init {self.array}"


class CompareOperation(_OperationBase):
    type: Literal["compare"] = "compare"
    indices: tuple[int, int]
    values: tuple[Number, Number]

    def touched_indices(self) -> list[int]:
        return list(self.indices)

    def __str__(self) -> str:
        (i, j), (a, b) = self.indices, self.values
        return f"compare [{i}]={a} <> [{j}]={b}"


class SwapOperation(_OperationBase):
    type: Literal["swap"] = "swap"
    indices: tuple[int, int]
    values: tuple[Number, Number]

    def touched_indices(self) -> list[int]:
        return list(self.indices)

    def __str__(self) -> str:
        (i, j), (a, b) = self.indices, self.values
        return f"swap [{i}]={a} <-> [{j}]={b}"


class SetOperation(_OperationBase):
    type: Literal["set"] = "set"
    index: int
    value: Number
    previous: Number

    def touched_indices(self) -> list[int]:
        return [self.index]

    def __str__(self) -> str:
        return f"set [{self.index}] {self.previous} -> {self.value}"


class HighlightOperation(_OperationBase):
    type: Literal["highlight"] = "highlight"
    indices: list[int]
    color: int

    def touched_indices(self) -> list[int]:
        return list(self.indices)

    def __str__(self) -> str:
        return f"highlight {self.indices} #{self.color:06x}"


class SortedOperation(_OperationBase):
    type: Literal["sorted"] = "sorted"
    indices: list[int]

    def touched_indices(self) -> list[int]:
        return list(self.indices)

    def __str__(self) -> str:
        return f"sorted {self.indices}"


class CompleteOperation(_OperationBase):
    type: Literal["complete"] = "complete"

    def __str__(self) -> str:
        return "complete"


class CommentOperation(_OperationBase):
    type: Literal["comment"] = "comment"
    message: str

    def __str__(self) -> str:
        return f"# {self.message}"


Operation = Annotated[
    Union[
        InitOperation,
        CompareOperation,
        SwapOperation,
        SetOperation,
        HighlightOperation,
        SortedOperation,
        CompleteOperation,
        CommentOperation,
    ],
    Field(discriminator="type"),
]

_OPERATION_LIST_ADAPTER: TypeAdapter[list[Operation]] = TypeAdapter(list[Operation])


@dataclass(frozen=True)
class Trace:
    """Ordered, immutable sequence of operations.

    Index 0 is always an ``init`` and the last element is always a
    ``complete``; every ``values`` / ``previous`` field is recorded so that
    consumers can rebuild the array at any step without re-synthesizing.
    """

    operations: tuple[Operation, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.operations)

    def __iter__(self) -> Iterator[Operation]:
        return iter(self.operations)

    def __getitem__(self, index):
        return self.operations[index]

    @property
    def initial_array(self) -> list[Number]:
        first = self.operations[0] if self.operations else None
        if not isinstance(first, InitOperation):
            return []
        return list(first.array)

    def of_type(self, op_type: OperationType) -> list[Operation]:
        return [op for op in self.operations if op.type == op_type.value]

    def to_payload(self) -> list[dict[str, Any]]:
        """Wire dictionaries, one per operation, in order."""
        return [op.model_dump(mode="json") for op in self.operations]

    @classmethod
    def from_payload(cls, payload: list[dict[str, Any]]) -> "Trace":
        return cls(operations=tuple(_OPERATION_LIST_ADAPTER.validate_python(payload)))
