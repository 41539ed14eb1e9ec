"""Prompt validation."""

from furnishot.validation.prompt_validation import (
    REQUIRED_MARKERS,
    VERBOSITY_SUGGESTION,
    validate_prompt,
)
from furnishot.validation.report import ValidationCheck, ValidationReport

__all__ = [
    "REQUIRED_MARKERS",
    "VERBOSITY_SUGGESTION",
    "ValidationCheck",
    "ValidationReport",
    "validate_prompt",
]
