"""rewire: literal FROM:TO substitution across a Python tree, followed by import sorting."""

__version__ = "0.1.0"

from rewire.errors import ErrorKind, RewireError
from rewire.walker.replacements import Replacement, ReplacementSet, parse_pattern
from rewire.workflow.pipeline import Pipeline, PipelineResult, PipelineState

__all__ = [
    "ErrorKind",
    "Pipeline",
    "PipelineResult",
    "PipelineState",
    "Replacement",
    "ReplacementSet",
    "RewireError",
    "parse_pattern",
]
