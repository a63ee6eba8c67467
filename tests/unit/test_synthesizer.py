"""End-to-end tests for synthesize()."""

from __future__ import annotations

import pytest

from arraytrace.errors import NoArrayFound, SourceSyntaxError
from arraytrace.generators import Algorithm, generate
from arraytrace.operations import (
    CommentOperation,
    CompareOperation,
    CompleteOperation,
    InitOperation,
    OperationType,
    SetOperation,
    SortedOperation,
    SwapOperation,
)
from arraytrace.replay import replay, validate_trace
from arraytrace.synth_types import SynthesisConfig, UnresolvedIndexPolicy
from arraytrace.synthesizer import synthesize

NO_COMMENTS = SynthesisConfig(emit_comments=False)

BUBBLE_SOURCE = """\
let arr = [5, 3, 8, 1];
for (let i = 0; i < arr.length; i++) {
    for (let j = 0; j < arr.length - i - 1; j++) {
        if (arr[j] > arr[j + 1]) {
            [arr[j], arr[j + 1]] = [arr[j + 1], arr[j]];
        }
    }
}
"""


def _without_comments(trace):
    return [op for op in trace if not isinstance(op, CommentOperation)]


class TestDirectStatements:
    def test_single_literal_swap(self):
        trace = synthesize("let arr=[5,3,1]; [arr[0],arr[1]]=[arr[1],arr[0]];")
        assert list(trace) == [
            InitOperation(array=[5, 3, 1]),
            SwapOperation(indices=(0, 1), values=(5, 3)),
            CompleteOperation(),
        ]
        assert replay(trace) == [3, 5, 1]

    def test_infinite_literal_index_is_unrecognized(self):
        trace = synthesize("let arr = [1, 2]; arr[1e400] = 3; arr[1] = 1e400;")
        assert list(trace) == [InitOperation(array=[1, 2]), CompleteOperation()]

    def test_swaps_replayed_in_document_order(self):
        source = """\
let arr = [1, 2, 3];
[arr[0], arr[2]] = [arr[2], arr[0]];
[arr[0], arr[1]] = [arr[1], arr[0]];
"""
        trace = synthesize(source)
        swaps = trace.of_type(OperationType.SWAP)
        assert swaps == [
            SwapOperation(indices=(0, 2), values=(1, 3)),
            SwapOperation(indices=(0, 1), values=(3, 2)),
        ]
        assert replay(trace) == [2, 3, 1]

    def test_bare_comparison_yields_compare_without_swap(self):
        trace = synthesize("let arr = [2, 1]; if (arr[0] > arr[1]) {}")
        assert list(trace) == [
            InitOperation(array=[2, 1]),
            CompareOperation(indices=(0, 1), values=(2, 1)),
            CompleteOperation(),
        ]

    def test_guarded_swap_ignores_branch_outcome(self):
        source = """\
let arr = [1, 2];
if (arr[0] > arr[1]) {
    [arr[0], arr[1]] = [arr[1], arr[0]];
}
"""
        trace = synthesize(source)
        assert [op.type for op in trace] == ["init", "compare", "swap", "complete"]

    def test_literal_set(self):
        trace = synthesize("let arr = [1, 2, 3]; arr[1] = 7;")
        assert trace[1] == SetOperation(index=1, value=7, previous=2)
        assert replay(trace) == [1, 7, 3]

    def test_out_of_range_set_is_rejected(self):
        trace = synthesize("let arr = [1, 2]; arr[5] = 1;")
        assert [op.type for op in trace] == ["init", "complete"]

    def test_out_of_range_swap_is_rejected(self):
        trace = synthesize("let arr = [1, 2]; [arr[0], arr[9]] = [arr[9], arr[0]];")
        assert [op.type for op in trace] == ["init", "complete"]

    def test_variable_index_swap_is_skipped(self):
        source = "let arr = [1, 2]; let k = 0; [arr[k], arr[1]] = [arr[1], arr[k]];"
        assert [op.type for op in synthesize(source)] == ["init", "complete"]

    def test_placeholder_comparison(self):
        trace = synthesize("let arr = [3, 1, 2]; let k = 1; if (arr[k] < arr[2]) {}")
        assert trace[1] == CompareOperation(indices=(0, 2), values=(3, 2))

    def test_reject_policy_drops_placeholder_comparison(self):
        config = SynthesisConfig(unresolved_index_policy=UnresolvedIndexPolicy.REJECT)
        trace = synthesize(
            "let arr = [3, 1, 2]; let k = 1; if (arr[k] < arr[2]) {}", config
        )
        assert [op.type for op in trace] == ["init", "complete"]

    def test_placeholder_out_of_range_is_rejected(self):
        trace = synthesize("let arr = [7]; let k = 0; if (arr[0] > arr[k]) {}")
        assert [op.type for op in trace] == ["init", "complete"]

    def test_function_bodies_are_not_entered(self):
        source = """\
let arr = [2, 1];
function sort() {
    [arr[0], arr[1]] = [arr[1], arr[0]];
    for (let i = 0; i < 2; i++) {}
}
"""
        assert [op.type for op in synthesize(source)] == ["init", "complete"]

    def test_swap_on_later_array_is_ignored(self):
        source = """\
let a = [1, 2];
let b = [9, 8, 7];
[b[0], b[1]] = [b[1], b[0]];
"""
        trace = synthesize(source)
        assert trace.initial_array == [1, 2]
        assert [op.type for op in trace] == ["init", "complete"]


class TestSingleLoop:
    def test_body_replayed_once_per_index(self):
        source = """\
let arr = [4, 3, 2, 1];
for (let i = 0; i < 2; i++) {
    [arr[0], arr[3]] = [arr[3], arr[0]];
}
"""
        trace = synthesize(source)
        assert trace[1] == CommentOperation(message="Single loop: 0 to 2")
        assert trace.of_type(OperationType.SWAP) == [
            SwapOperation(indices=(0, 3), values=(4, 1)),
            SwapOperation(indices=(0, 3), values=(1, 4)),
        ]
        assert replay(trace) == [4, 3, 2, 1]

    def test_comparisons_are_not_searched(self):
        source = """\
let arr = [2, 1];
for (let i = 0; i < arr.length; i++) {
    if (arr[0] > arr[1]) {}
}
"""
        trace = synthesize(source, NO_COMMENTS)
        assert [op.type for op in trace] == ["init", "complete"]

    def test_set_inside_loop(self):
        source = """\
let arr = [1, 2, 3];
for (let i = 1; i < arr.length - 1; i++) {
    arr[0] = 9;
}
"""
        trace = synthesize(source, NO_COMMENTS)
        assert list(trace)[1:-1] == [SetOperation(index=0, value=9, previous=1)]

    def test_statement_body_without_block(self):
        source = "let arr = [1, 2]; for (let i = 0; i < 1; i++) [arr[0], arr[1]] = [arr[1], arr[0]];"
        assert replay(synthesize(source)) == [2, 1]

    def test_empty_body_is_not_iterated(self):
        source = "let arr = [1, 2]; for (let i = 0; i < 1000000000; i++) {}"
        trace = synthesize(source)
        assert list(trace) == [
            InitOperation(array=[1, 2]),
            CommentOperation(message="Single loop: 0 to 1000000000"),
            CompleteOperation(),
        ]

    def test_infinite_literal_bound_uses_array_length(self):
        source = """\
let arr = [1, 2];
for (let i = 0; i < 1e400; i++) {
    [arr[0], arr[1]] = [arr[1], arr[0]];
}
"""
        trace = synthesize(source, NO_COMMENTS)
        assert len(trace.of_type(OperationType.SWAP)) == 2
        assert replay(trace) == [1, 2]


class TestNestedLoops:
    def test_matches_canonical_bubble_sort(self):
        trace = synthesize(BUBBLE_SOURCE)
        expected = generate(Algorithm.BUBBLE_SORT, [5, 3, 8, 1])
        assert _without_comments(trace) == list(expected)
        assert replay(trace) == [1, 3, 5, 8]

    def test_counts_match_canonical_bubble_sort(self):
        trace = synthesize(BUBBLE_SOURCE)
        expected = generate(Algorithm.BUBBLE_SORT, [5, 3, 8, 1])
        for op_type in (OperationType.COMPARE, OperationType.SWAP, OperationType.SORTED):
            assert len(trace.of_type(op_type)) == len(expected.of_type(op_type))

    def test_loop_entry_comment(self):
        trace = synthesize(BUBBLE_SOURCE)
        assert trace[1] == CommentOperation(
            message="Nested loops: outer(0-4), inner depends on outer: true"
        )

    def test_descending_guard(self):
        source = BUBBLE_SOURCE.replace("arr[j] > arr[j + 1]", "arr[j] < arr[j + 1]")
        assert replay(synthesize(source)) == [8, 5, 3, 1]

    def test_unconditional_swap_has_no_sorted_markers(self):
        source = """\
let arr = [1, 2, 3];
for (let i = 0; i < 2; i++) {
    for (let j = 0; j < arr.length - 1; j++) {
        [arr[j], arr[j + 1]] = [arr[j + 1], arr[j]];
    }
}
"""
        trace = synthesize(source, NO_COMMENTS)
        assert len(trace.of_type(OperationType.SWAP)) == 4
        assert trace.of_type(OperationType.SORTED) == []
        assert replay(trace) == [3, 1, 2]

    def test_compares_without_swap(self):
        source = """\
let arr = [3, 1, 2];
for (let i = 0; i < arr.length; i++) {
    for (let j = 0; j < arr.length - i - 1; j++) {}
}
"""
        trace = synthesize(source, NO_COMMENTS)
        assert len(trace.of_type(OperationType.COMPARE)) == 3
        assert trace.of_type(OperationType.SWAP) == []
        assert trace.of_type(OperationType.SORTED) == [
            SortedOperation(indices=[2]),
            SortedOperation(indices=[1]),
            SortedOperation(indices=[0]),
        ]

    def test_literal_outer_bound_beyond_array(self):
        source = BUBBLE_SOURCE.replace("i < arr.length;", "i < 10;")
        trace = synthesize(source, NO_COMMENTS)
        validate_trace(trace)
        assert replay(trace) == [1, 3, 5, 8]

    def test_set_in_inner_body(self):
        source = """\
let arr = [3, 1, 2];
for (let i = 0; i < arr.length; i++) {
    for (let j = 0; j < arr.length - 1; j++) {
        arr[0] = 9;
    }
}
"""
        trace = synthesize(source, NO_COMMENTS)
        validate_trace(trace)
        sets = trace.of_type(OperationType.SET)
        assert len(sets) == 6
        assert sets[0] == SetOperation(index=0, value=9, previous=3)
        assert trace[1] == sets[0]
        assert trace[2] == CompareOperation(indices=(0, 1), values=(9, 1))
        assert replay(trace) == [9, 1, 2]

    def test_set_after_guarded_swap(self):
        source = """\
let arr = [2, 1];
for (let i = 0; i < 1; i++) {
    for (let j = 0; j < 1; j++) {
        if (arr[j] > arr[j + 1]) {
            [arr[j], arr[j + 1]] = [arr[j + 1], arr[j]];
        }
        arr[0] = 7;
    }
}
"""
        assert list(synthesize(source, NO_COMMENTS)) == [
            InitOperation(array=[2, 1]),
            CompareOperation(indices=(0, 1), values=(2, 1)),
            SwapOperation(indices=(0, 1), values=(2, 1)),
            SetOperation(index=0, value=7, previous=1),
            CompleteOperation(),
        ]


class TestTraceShape:
    @pytest.mark.parametrize(
        "source",
        [
            BUBBLE_SOURCE,
            "let arr=[5,3,1]; [arr[0],arr[1]]=[arr[1],arr[0]];",
            "let arr = [1]; for (let i = 0; i < 3; i++) { arr[0] = 2; }",
        ],
    )
    def test_traces_are_valid(self, source):
        trace = synthesize(source)
        validate_trace(trace)
        assert isinstance(trace[0], InitOperation)
        assert isinstance(trace[-1], CompleteOperation)

    def test_calls_do_not_share_state(self):
        first = synthesize(BUBBLE_SOURCE)
        second = synthesize(BUBBLE_SOURCE)
        assert list(first) == list(second)

    def test_typescript(self):
        source = "let arr: number[] = [2, 1]; [arr[0], arr[1]] = [arr[1], arr[0]];"
        trace = synthesize(source, SynthesisConfig(language="typescript"))
        assert replay(trace) == [1, 2]


class TestFailures:
    def test_no_array(self):
        with pytest.raises(NoArrayFound):
            synthesize("let x = 1; x = x + 1;")

    def test_syntax_error(self):
        with pytest.raises(SourceSyntaxError):
            synthesize("let arr = [1, 2;")

    def test_unsupported_language(self):
        with pytest.raises(ValueError):
            SynthesisConfig(language="cobol")
