"""Enum-keyed rule tables driving prompt composition."""

from furnishot.rules.context import (
    BASELINE_PRESET,
    CONTEXT_RULES,
    ContextRule,
    get_context_rule,
    parse_context_preset,
)
from furnishot.rules.materials import MATERIAL_RULES, primary_guidance, secondary_guidance
from furnishot.rules.negatives import (
    BASELINE_KEYS,
    NegativeCategory,
    NegativeConstraintSet,
    baseline_constraints,
    build_negative_constraints,
)
from furnishot.rules.placement import (
    PLACEMENT_RULES,
    PlacementRule,
    find_contradictions,
    get_placement_rule,
)

__all__ = [
    "BASELINE_KEYS",
    "BASELINE_PRESET",
    "CONTEXT_RULES",
    "MATERIAL_RULES",
    "PLACEMENT_RULES",
    "ContextRule",
    "NegativeCategory",
    "NegativeConstraintSet",
    "PlacementRule",
    "baseline_constraints",
    "build_negative_constraints",
    "find_contradictions",
    "get_context_rule",
    "get_placement_rule",
    "parse_context_preset",
    "primary_guidance",
    "secondary_guidance",
]
