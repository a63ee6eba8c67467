"""Payload shapes the transport layer pushes to a renderer.

The core never delivers anything; these helpers only shape traces into the
two messages a renderer listens for: a single-event ``operation`` push and
a whole-trace ``operations`` push.
"""

from __future__ import annotations

import json
from typing import Any, Iterator

from . import constants
from .operations import Operation, Trace


def operation_message(op: Operation) -> dict[str, Any]:
    return {"event": constants.EVENT_OPERATION, "data": op.model_dump(mode="json")}


def operations_message(trace: Trace) -> dict[str, Any]:
    return {"event": constants.EVENT_OPERATIONS, "data": trace.to_payload()}


def iter_operation_messages(trace: Trace) -> Iterator[dict[str, Any]]:
    """One ``operation`` message per event, in trace order."""
    for op in trace:
        yield operation_message(op)


def to_json(message: dict[str, Any], indent: int | None = None) -> str:
    return json.dumps(message, indent=indent)
