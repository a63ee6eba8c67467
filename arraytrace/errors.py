"""Exception taxonomy for trace synthesis and trace checking."""

from __future__ import annotations


class ArrayTraceError(Exception):
    """Base class for every error raised by arraytrace."""


class SynthesisError(ArrayTraceError):
    """A synthesis call could not reach its controlled end; no trace exists."""


class NoArrayFound(SynthesisError):
    """No declaration initialises an array literal of numbers."""


class SourceSyntaxError(SynthesisError):
    """The source text did not parse cleanly."""


class ExtractionError(ArrayTraceError):
    """A matched node turned out to have an unexpected shape.

    Only raised inside the narrow extraction helpers; the classifier catches
    it and reports the node as unrecognized.
    """


class TraceIntegrityError(ArrayTraceError):
    """A trace breaks one of the ordering, range or replay invariants."""
