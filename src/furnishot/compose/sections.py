"""Section builders for the Constraint Composer.

Each builder is a pure ``(CompositionInputs) -> str`` function producing one
labeled block of the composed prompt. Absent optional inputs omit the
dependent line; a builder never fails.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from furnishot.models.product import ProductIntelligence, ProductSpecification
from furnishot.models.prompt import QualityLevel
from furnishot.models.settings import GenerationSettings
from furnishot.rules.context import ContextRule
from furnishot.rules.materials import primary_guidance, secondary_guidance
from furnishot.rules.negatives import NegativeConstraintSet
from furnishot.rules.placement import get_placement_rule
from furnishot.rules.styling import angle_profile, lighting_profile, output_formats, style_profile


@dataclass(frozen=True)
class CompositionInputs:
    """Everything a section builder may read."""

    spec: ProductSpecification
    intelligence: ProductIntelligence
    settings: GenerationSettings
    context_rule: ContextRule
    negatives: NegativeConstraintSet
    quality_level: QualityLevel = QualityLevel.ENTERPRISE


def _bullets(title: str, lines: list[str]) -> str:
    return "\n".join([title, *(f"• {line}" for line in lines)])


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def build_preservation(inputs: CompositionInputs) -> str:
    return _bullets(
        "CRITICAL - PRODUCT PRESERVATION",
        [
            f"Reproduce the {inputs.spec.product_name} exactly as in the reference image",
            "Preserve exact proportions, colours, materials and hardware",
            "NO redesign, restyling or added features",
            "Only background, lighting and surroundings may change",
        ],
    )


def build_format(inputs: CompositionInputs) -> str:
    rule = inputs.context_rule
    lines = [
        f"ASPECT RATIO: {rule.aspect_ratio} ({rule.pixel_dimensions}), mandatory",
        *rule.format_notes,
    ]
    # Formats with another ratio need their own composition.
    formats = [
        f for f in output_formats(inputs.settings.output_formats)
        if f.aspect_ratio == rule.aspect_ratio
    ]
    if formats:
        lines.append(
            "Delivery formats: "
            + "; ".join(f"{f.key} {f.dimensions} ({f.optimization})" for f in formats)
        )
    return _bullets(f"FORMAT REQUIREMENTS - {rule.format_description.upper()}", lines)


_QUALITY_STANDARDS: dict[QualityLevel, tuple[str, ...]] = {
    QualityLevel.ENTERPRISE: (
        "Photorealistic result indistinguishable from a professional shoot",
        "85mm lens look, f/8, ISO 100, tack-sharp focus across the product",
        "Accurate colour, natural shadows and true-to-life surfaces",
    ),
    QualityLevel.COMMERCIAL: (
        "High-quality commercial photograph",
        "Sharp focus, accurate colour and clean shadows",
    ),
    QualityLevel.STANDARD: ("Clean, realistic product photograph",),
}


def build_photography_core(inputs: CompositionInputs) -> str:
    profile = inputs.intelligence.material_profile
    lines = [
        f"Style of {inputs.context_rule.photography_context}",
        *_QUALITY_STANDARDS[inputs.quality_level],
        f"Light shaping: {profile.required_lighting} to suit the {profile.primary.value} surfaces",
    ]
    style = style_profile(inputs.settings.style)
    if style is not None:
        lines.append(f"Finish focus ({style.aesthetic}): {style.materials_focus}")
    return _bullets(f"PHOTOGRAPHY STANDARDS - {inputs.quality_level.value.upper()}", lines)


def build_product_definition(inputs: CompositionInputs) -> str:
    spec = inputs.spec
    scale = inputs.intelligence.scale_guidance
    lines = [f"Product: {spec.product_name}"]
    if spec.product_type:
        lines.append(f"Type: {spec.product_type}")
    lines.append(f"Category: {inputs.intelligence.category.value}")
    if spec.materials_description:
        lines.append(f"Materials: {spec.materials_description}")
    if spec.dimensions is not None and not spec.dimensions.is_empty:
        lines.append(f"Dimensions: {spec.dimensions.describe()}")
    if spec.additional_specs_text:
        lines.append(f"Details: {spec.additional_specs_text}")
    scale_line = f"Scale: true-to-life proportions at {scale.viewing_distance} viewing distance"
    if scale.proportional_elements:
        scale_line += f", checked against {', '.join(scale.proportional_elements)}"
    lines.append(scale_line)
    return _bullets("PRODUCT DEFINITION", lines)


def build_context_requirements(inputs: CompositionInputs) -> str:
    settings = inputs.settings
    rule = inputs.context_rule
    lines: list[str] = []
    angle = angle_profile(settings.camera_angle)
    if angle is not None:
        lines.append(f"Camera angle: {angle.position}, {angle.technical}")
    lighting = lighting_profile(settings.lighting)
    if lighting is not None and rule.scene_lighting:
        lines.append(f"Lighting: {lighting.setup}, {lighting.technical}, {lighting.mood}")
    if settings.custom_instructions and settings.custom_instructions.strip():
        lines.append(f"Additional direction: {settings.custom_instructions.strip()}")
    narrative = rule.narrative(settings)
    if not lines:
        return narrative
    return "\n".join([narrative, *(f"• {line}" for line in lines)])


def build_placement(inputs: CompositionInputs) -> str:
    placement = inputs.intelligence.placement_type
    rule = get_placement_rule(placement)
    return "\n".join(
        [
            f"DETECTED PLACEMENT TYPE: {placement.label}",
            _bullets(f"{rule.title}:", list(rule.mandatory)),
        ]
    )


def build_material(inputs: CompositionInputs) -> str:
    profile = inputs.intelligence.material_profile
    lines = primary_guidance(profile) + secondary_guidance(profile)
    return _bullets(f"MATERIAL AUTHENTICITY - {profile.primary.value.upper()}", lines)


def build_corrective_constraints(inputs: CompositionInputs) -> str:
    return "\n".join(
        [
            "CORRECTIVE CONSTRAINTS - ZERO TOLERANCE",
            "Absolutely prohibited, any occurrence is a generation failure:",
            inputs.negatives.render(),
        ]
    )


def build_quality_checklist(inputs: CompositionInputs) -> str:
    profile = inputs.intelligence.material_profile
    return _bullets(
        "QUALITY CHECKLIST",
        [
            "Product identical to the reference in every detail",
            f"{inputs.context_rule.aspect_ratio} framing respected",
            f"Placement physics correct for {inputs.intelligence.placement_type.label.lower()}",
            f"Surfaces read as real {profile.primary.value}",
            "Every prohibition above respected",
        ],
    )


def build_final_validation(inputs: CompositionInputs) -> str:
    return "\n".join(
        [
            "FINAL VALIDATION",
            "Before output confirm exact product reproduction, correct placement, "
            f"{inputs.context_rule.aspect_ratio} framing and zero prohibited elements. "
            "Regenerate if any check fails.",
        ]
    )


# ---------------------------------------------------------------------------
# Section order
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SectionSpec:
    """A named section, its builder and whether length management may drop it."""

    name: str
    build: Callable[[CompositionInputs], str]
    droppable: bool = False


SECTION_SPECS: tuple[SectionSpec, ...] = (
    SectionSpec("preservation", build_preservation),
    SectionSpec("format", build_format),
    SectionSpec("photography_core", build_photography_core, droppable=True),
    SectionSpec("product_definition", build_product_definition),
    SectionSpec("context_requirements", build_context_requirements),
    SectionSpec("placement", build_placement),
    SectionSpec("material", build_material),
    SectionSpec("corrective_constraints", build_corrective_constraints),
    SectionSpec("quality_checklist", build_quality_checklist, droppable=True),
    SectionSpec("final_validation", build_final_validation, droppable=True),
)

SECTION_ORDER: tuple[str, ...] = tuple(s.name for s in SECTION_SPECS)

# Least valuable first.
DROP_ORDER: tuple[str, ...] = ("final_validation", "quality_checklist", "photography_core")
