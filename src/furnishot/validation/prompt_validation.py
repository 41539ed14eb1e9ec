"""Validator for composed prompt text.

Checks the text against the length ceiling and for the marker phrases that
prove critical sections survived composition. Problems are reported, never
raised: callers decide whether to regenerate or proceed.
"""

from __future__ import annotations

from furnishot.models.product import PlacementType
from furnishot.models.prompt import DEFAULT_MAX_PROMPT_LENGTH, ContextPreset
from furnishot.observability.logging import get_logger
from furnishot.rules.context import CONTEXT_RULES, get_context_rule
from furnishot.rules.placement import find_contradictions, get_placement_rule
from furnishot.validation.report import ValidationReport

log = get_logger(__name__)

# check name -> (marker, issue when missing)
REQUIRED_MARKERS: dict[str, tuple[str, str]] = {
    "human_exclusion": ("NO humans", "Missing human exclusion constraint (NO humans)"),
    "placement_type": ("PLACEMENT TYPE", "Missing placement type specification"),
    "product_preservation": (
        "PRODUCT PRESERVATION",
        "Missing product preservation instructions",
    ),
    "format_enforcement": ("ASPECT RATIO", "Missing aspect ratio enforcement"),
}

ZERO_TOLERANCE_MARKER = "ZERO TOLERANCE"

VERBOSITY_SUGGESTION = (
    "Reduce verbosity: shorten product details and custom instructions, "
    "or drop optional sections such as the quality checklist"
)


def validate_prompt(
    text: str,
    *,
    max_length: int = DEFAULT_MAX_PROMPT_LENGTH,
    placement_type: PlacementType | str | None = None,
    context_preset: ContextPreset | str | None = None,
) -> ValidationReport:
    """Validate composed prompt text.

    Args:
        text: The composed prompt.
        max_length: Length ceiling.
        placement_type: When given, affirmative wording contradicting this
            placement is reported.
        context_preset: When given, the preset's defining markers must be
            present; markers of other presets produce warnings.

    Returns:
        The report. ``is_valid`` is False whenever any issue was recorded.
    """
    report = ValidationReport(length=len(text), max_length=max_length)

    if report.length > max_length:
        report.fail(
            "length",
            f"Prompt length {report.length} exceeds maximum {max_length} "
            f"by {report.length - max_length} characters",
        )
        report.suggestions.append(VERBOSITY_SUGGESTION)
    else:
        report.ok("length", f"{report.length}/{max_length} characters")

    for name, (marker, issue) in REQUIRED_MARKERS.items():
        if marker in text:
            report.ok(name, f"Found '{marker}'")
        else:
            report.fail(name, issue)

    if ZERO_TOLERANCE_MARKER in text:
        report.ok("zero_tolerance")
    else:
        report.warn(
            "zero_tolerance",
            "No zero-tolerance wording",
            "Add ZERO TOLERANCE wording to strengthen the corrective constraints",
        )

    if placement_type is not None:
        _check_placement(report, text, placement_type)
    if context_preset is not None:
        _check_context(report, text, context_preset)

    log.debug(
        "prompt_validated",
        valid=report.is_valid,
        length=report.length,
        max_length=max_length,
        issues=len(report.issues),
    )
    return report


def _check_placement(report: ValidationReport, text: str, placement: PlacementType | str) -> None:
    rule = get_placement_rule(placement)
    contradictions = find_contradictions(text, rule.placement)
    for phrase in contradictions:
        report.fail(
            "placement_consistency",
            f"Contradictory wording for {rule.placement.value} placement: '{phrase}'",
        )
    if not contradictions:
        report.ok("placement_consistency")


def _check_context(report: ValidationReport, text: str, preset: ContextPreset | str) -> None:
    rule = get_context_rule(preset)
    lowered = text.lower()
    missing = [m for m in rule.markers if m.lower() not in lowered]
    for marker in missing:
        report.fail(
            "context_markers",
            f"Missing {rule.preset.value} context marker: '{marker}'",
        )
    if not missing:
        report.ok("context_markers")

    for other, other_rule in CONTEXT_RULES.items():
        if other is rule.preset:
            continue
        for marker in other_rule.markers:
            if marker.lower() in lowered:
                report.warn(
                    "context_disjointness",
                    f"Found {other.value} marker '{marker}' in a {rule.preset.value} prompt",
                    f"Remove '{marker}': it belongs to the {other.value} context",
                )
