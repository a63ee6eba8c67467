"""Static array-operation trace synthesizer."""

from .synthesizer import synthesize  # noqa: F401
from .generators import Algorithm, generate  # noqa: F401
from .operations import Operation, Trace  # noqa: F401
from .errors import (  # noqa: F401
    ArrayTraceError,
    NoArrayFound,
    SourceSyntaxError,
    SynthesisError,
)
from .api import (  # noqa: F401
    synthesize_trace,
    generate_trace,
    dump_trace,
    trace_to_json,
)
