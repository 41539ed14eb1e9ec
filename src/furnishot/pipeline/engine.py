"""End-to-end prompt generation.

Chains classification, settings resolution, composition and validation for
one product and context, and scores the result for production use. Pure and
synchronous; logging is the only side effect.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from furnishot.compose.composer import compose_prompt
from furnishot.intelligence.classifier import classify_product
from furnishot.models.product import ProductIntelligence, ProductSpecification
from furnishot.models.prompt import ComposedPrompt, ContextPreset
from furnishot.models.settings import GenerationSettings
from furnishot.observability.logging import get_logger, request_context
from furnishot.pipeline.config import EngineConfig
from furnishot.pipeline.fallbacks import AppliedFallback, assess_settings, resolve_settings
from furnishot.rules.context import parse_context_preset
from furnishot.rules.styling import output_formats, preset_for_formats
from furnishot.validation.prompt_validation import validate_prompt
from furnishot.validation.report import ValidationReport

log = get_logger(__name__)

PRODUCTION_MIN_SCORE = 70
PRODUCTION_MAX_WARNINGS = 3


@dataclass
class PromptResult:
    """Everything produced for one generation request.

    Attributes:
        prompt: Final prompt text handed to the image service.
        composed: The composed prompt with its sections.
        intelligence: Classification of the product.
        settings: Settings after fallback resolution.
        fallbacks: Fallbacks applied while resolving settings.
        report: Validation report for ``prompt``.
        settings_completeness: Completeness of the caller's settings (0-100).
        warnings: Validation warnings.
        recommendations: Settings advice and validation suggestions.
        quality_score: 0-100 score of the prompt.
        production_ready: Whether the prompt may be submitted as-is.
    """

    prompt: str
    composed: ComposedPrompt
    intelligence: ProductIntelligence
    settings: GenerationSettings
    fallbacks: list[AppliedFallback]
    report: ValidationReport
    settings_completeness: int = 100
    warnings: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)
    quality_score: int = 100
    production_ready: bool = False

    @property
    def context_preset(self) -> ContextPreset:
        return self.composed.context_preset


def quality_score(report: ValidationReport, warnings: int, dropped: int) -> int:
    """Score a prompt: 100, minus 25 when invalid, minus 5 per warning and dropped section."""
    score = 100
    if not report.is_valid:
        score -= 25
    score -= 5 * warnings
    score -= 5 * dropped
    return max(0, min(100, score))


def generate_prompt(
    spec: ProductSpecification,
    context_preset: ContextPreset | str | None = None,
    settings: GenerationSettings | None = None,
    config: EngineConfig | None = None,
) -> PromptResult:
    """Generate and validate the prompt for one product.

    Args:
        spec: Product specification.
        context_preset: Target preset. When None, the preset implied by the
            first resolved output format is used.
        settings: Caller's settings, possibly partial.
        config: Engine configuration; built-in defaults when None.

    Returns:
        The prompt, its report and the scoring.
    """
    preset = None if context_preset is None else parse_context_preset(context_preset)
    return _generate(spec, preset, settings or GenerationSettings(), config or EngineConfig())


def generate_prompts_per_format(
    spec: ProductSpecification,
    settings: GenerationSettings | None = None,
    config: EngineConfig | None = None,
) -> dict[str, PromptResult]:
    """Generate one prompt per requested output format.

    Each known format is composed with its own context preset and carries
    only its own delivery size, so no prompt mixes aspect ratios. Formats
    come from ``settings`` or, when unset, from the configured defaults.

    Returns:
        Results keyed by format, in request order; empty when no format is known.
    """
    config = config or EngineConfig()
    requested = settings or GenerationSettings()
    tokens = requested.output_formats or config.settings_defaults.output_formats

    results: dict[str, PromptResult] = {}
    for fmt in output_formats(tokens):
        results[fmt.key] = _generate(spec, fmt.preset, requested, config, output_format=fmt.key)

    log.info("prompts_per_format", product=spec.product_name, formats=list(results))
    return results


def _generate(
    spec: ProductSpecification,
    preset: ContextPreset | None,
    requested: GenerationSettings,
    config: EngineConfig,
    output_format: str | None = None,
) -> PromptResult:
    intelligence = classify_product(spec, strict_mode=config.strict_mode)
    assessment = assess_settings(requested, intelligence.category)
    resolved, fallbacks = resolve_settings(
        requested, intelligence.category, config.settings_defaults
    )
    if output_format is not None:
        resolved = resolved.model_copy(update={"output_formats": (output_format,)})
    if preset is None:
        preset = preset_for_formats(resolved.output_formats)

    with request_context(product=spec.product_name, context=preset.value):
        if not assessment.is_complete:
            log.info(
                "settings_incomplete",
                completeness=assessment.completeness,
                missing=requested.missing_fields,
            )

        composed = compose_prompt(
            spec,
            preset,
            resolved,
            intelligence,
            max_length=config.max_prompt_length,
            quality_level=config.quality_level,
        )
        report = validate_prompt(
            composed.text,
            max_length=config.max_prompt_length,
            placement_type=intelligence.placement_type if config.strict_mode else None,
            context_preset=preset if config.strict_mode else None,
        )

        warnings = [c.message for c in report.checks if c.severity == "warn"]
        recommendations = list(
            dict.fromkeys(
                [
                    *intelligence.placement_analysis.recommendations,
                    *assess_settings(resolved, intelligence.category).recommendations,
                    *report.suggestions,
                ]
            )
        )
        score = quality_score(report, len(warnings), len(composed.dropped))
        production_ready = (
            report.is_valid
            and score >= PRODUCTION_MIN_SCORE
            and len(warnings) <= PRODUCTION_MAX_WARNINGS
        )

        log.info(
            "prompt_generated",
            length=len(composed),
            valid=report.is_valid,
            score=score,
            fallbacks=[f.field for f in fallbacks],
        )
        if not report.is_valid:
            log.warning("prompt_invalid", issues=report.issues)

    return PromptResult(
        prompt=composed.text,
        composed=composed,
        intelligence=intelligence,
        settings=resolved,
        fallbacks=fallbacks,
        report=report,
        settings_completeness=assessment.completeness,
        warnings=warnings,
        recommendations=recommendations,
        quality_score=score,
        production_ready=production_ready,
    )
