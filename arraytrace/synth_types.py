"""Synthesis pipeline data types (pure data, no business logic)."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from . import constants


class UnresolvedIndexPolicy(Enum):
    """What a comparison with a variable (non-literal) index resolves to."""

    PLACEHOLDER = "placeholder"
    REJECT = "reject"


class LoopShape(Enum):
    """Top-level loop structure recognised by the analyzer."""

    NONE = "none"
    SINGLE = "single"
    NESTED = "nested"


@dataclass(frozen=True)
class SynthesisConfig:
    """Groups synthesis configuration."""

    language: str = constants.DEFAULT_LANGUAGE
    emit_comments: bool = True
    unresolved_index_policy: UnresolvedIndexPolicy = UnresolvedIndexPolicy.PLACEHOLDER

    def __post_init__(self):
        if self.language not in constants.SUPPORTED_LANGUAGES:
            raise ValueError(
                f"Unsupported language: {self.language} "
                f"(expected one of {', '.join(constants.SUPPORTED_LANGUAGES)})"
            )
