"""Constraint Composer.

Assembles the ten labeled sections into one ``ComposedPrompt``. Composition
is deterministic and never fails: the same inputs always produce the same
text, and absent optional inputs only omit the dependent clauses.

When the joined text exceeds ``max_length``, droppable sections are removed
in ``DROP_ORDER`` until it fits. Sections carrying validator markers are
never dropped; if they alone overflow, the prompt is returned as-is and the
overflow is left to the validator.
"""

from __future__ import annotations

from furnishot.compose.sections import DROP_ORDER, SECTION_SPECS, CompositionInputs
from furnishot.models.product import ProductIntelligence, ProductSpecification
from furnishot.models.prompt import (
    DEFAULT_MAX_PROMPT_LENGTH,
    ComposedPrompt,
    ContextPreset,
    PromptSection,
    QualityLevel,
)
from furnishot.models.settings import GenerationSettings
from furnishot.observability.logging import get_logger
from furnishot.rules.context import get_context_rule
from furnishot.rules.negatives import build_negative_constraints

log = get_logger(__name__)


def compose_prompt(
    spec: ProductSpecification,
    context_preset: ContextPreset | str | None,
    settings: GenerationSettings,
    intelligence: ProductIntelligence,
    *,
    max_length: int = DEFAULT_MAX_PROMPT_LENGTH,
    quality_level: QualityLevel = QualityLevel.ENTERPRISE,
) -> ComposedPrompt:
    """Compose the prompt for one product and context.

    Args:
        spec: Product specification.
        context_preset: Target preset; unknown values use the baseline preset.
        settings: Generation settings. Unset fields omit their clauses, so
            callers normally resolve them first.
        intelligence: Classification derived from ``spec``.
        max_length: Length ceiling driving optional-section removal.
        quality_level: Production tier for photography standards and
            negative constraints.

    Returns:
        The composed prompt with its sections in fixed order.
    """
    rule = get_context_rule(context_preset)
    negatives = build_negative_constraints(
        rule.preset,
        placement=intelligence.placement_type,
        quality_level=quality_level,
        approved_props=settings.approved_props,
    )
    inputs = CompositionInputs(
        spec=spec,
        intelligence=intelligence,
        settings=settings,
        context_rule=rule,
        negatives=negatives,
        quality_level=quality_level,
    )

    sections = [PromptSection(name=s.name, text=s.build(inputs)) for s in SECTION_SPECS]
    prompt = ComposedPrompt(rule.preset, tuple(sections), max_length=max_length)

    dropped: list[str] = []
    for name in DROP_ORDER:
        if len(prompt) <= max_length:
            break
        sections = [s for s in sections if s.name != name]
        dropped.append(name)
        prompt = ComposedPrompt(
            rule.preset, tuple(sections), dropped=tuple(dropped), max_length=max_length
        )

    if len(prompt) > max_length:
        log.warning(
            "prompt_exceeds_max_length",
            length=len(prompt),
            max_length=max_length,
            context=rule.preset.value,
        )

    log.debug(
        "prompt_composed",
        context=rule.preset.value,
        placement=intelligence.placement_type.value,
        length=len(prompt),
        dropped=dropped,
    )
    return prompt
