"""Prompt composition: section builders and the Constraint Composer."""

from furnishot.compose.composer import compose_prompt
from furnishot.compose.sections import (
    DROP_ORDER,
    SECTION_ORDER,
    SECTION_SPECS,
    CompositionInputs,
    SectionSpec,
)

__all__ = [
    "DROP_ORDER",
    "SECTION_ORDER",
    "SECTION_SPECS",
    "CompositionInputs",
    "SectionSpec",
    "compose_prompt",
]
