"""Tests for the composable API functions in arraytrace.api."""

from __future__ import annotations

import json

import pytest

from arraytrace.api import (
    dump_trace,
    generate_trace,
    parse_source,
    synthesize_trace,
    trace_to_json,
)
from arraytrace.errors import SourceSyntaxError
from arraytrace.operations import Trace

SWAP_SOURCE = "let arr = [5, 3, 1];\n[arr[0], arr[1]] = [arr[1], arr[0]];\n"

SINGLE_LOOP_SOURCE = """\
let arr = [2, 1];
for (let i = 0; i < 1; i++) {
    [arr[0], arr[1]] = [arr[1], arr[0]];
}
"""


class TestParseSource:
    def test_returns_tree(self):
        tree = parse_source(SWAP_SOURCE)
        assert tree.root_node.type == "program"

    def test_rejects_broken_source(self):
        with pytest.raises(SourceSyntaxError, match="line 1"):
            parse_source("let arr = [1, 2;")

    def test_unsupported_language(self):
        with pytest.raises(ValueError):
            parse_source("x = 1", language="python")


class TestSynthesizeTrace:
    def test_returns_trace(self):
        assert isinstance(synthesize_trace(SWAP_SOURCE), Trace)

    def test_comments_can_be_disabled(self):
        with_comments = synthesize_trace(SINGLE_LOOP_SOURCE)
        without = synthesize_trace(SINGLE_LOOP_SOURCE, emit_comments=False)
        assert len(with_comments) == len(without) + 1

    def test_reject_unresolved(self):
        source = "let arr = [2, 1]; let k = 0; if (arr[k] > arr[1]) {}"
        assert len(synthesize_trace(source)) == 3
        assert len(synthesize_trace(source, reject_unresolved=True)) == 2


class TestGenerateTrace:
    def test_named_algorithm(self):
        trace = generate_trace("insertionSort", [2, 1])
        assert trace.initial_array == [2, 1]


class TestDumpTrace:
    def test_one_line_per_operation(self):
        trace = synthesize_trace(SWAP_SOURCE)
        lines = dump_trace(trace).splitlines()
        assert len(lines) == len(trace)
        assert "init [5, 3, 1]" in lines[0]
        assert "swap [0]=5 <-> [1]=3" in lines[1]
        assert lines[-1].strip().endswith("complete")


class TestTraceToJson:
    def test_operations_message(self):
        payload = json.loads(trace_to_json(synthesize_trace(SWAP_SOURCE)))
        assert payload["event"] == "operations"
        assert payload["data"][1] == {"type": "swap", "indices": [0, 1], "values": [5, 3]}
