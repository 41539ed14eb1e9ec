"""Settings Fallback Resolver.

Fills unset generation settings with defaults derived from the product
category and from fields already resolved. Fields resolve in a fixed order
(style, environment, lighting, camera angle, output formats) and each step
reads only fields resolved before it.

Resolving already-complete settings returns them unchanged with no applied
fallbacks.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from furnishot.intelligence.classifier import parse_category
from furnishot.models.product import ProductCategory
from furnishot.observability.logging import get_logger
from furnishot.pipeline.config import DEFAULT_SETTINGS_DEFAULTS, SettingsDefaults

if TYPE_CHECKING:
    from furnishot.models.settings import GenerationSettings

log = get_logger(__name__)

_FIELD_LABELS: dict[str, str] = {
    "style": "Style",
    "environment": "Environment",
    "lighting": "Lighting",
    "camera_angle": "Camera angle",
    "output_formats": "Output formats",
}


@dataclass(frozen=True)
class AppliedFallback:
    """One field filled by the resolver."""

    field: str
    value: str
    reason: str

    def __str__(self) -> str:
        return f'{_FIELD_LABELS.get(self.field, self.field)} defaulted to "{self.value}" {self.reason}'


@dataclass
class SettingsAssessment:
    """Completeness of user-chosen settings plus pairing advice.

    Attributes:
        completeness: Percentage of resolvable fields set, in steps of 20.
        warnings: One entry per unset field.
        recommendations: Advice on unusual setting combinations.
    """

    completeness: int
    warnings: list[str] = field(default_factory=list)
    recommendations: list[str] = field(default_factory=list)

    @property
    def is_complete(self) -> bool:
        return self.completeness == 100 and not self.warnings


def resolve_settings(
    partial: GenerationSettings,
    category: ProductCategory | str | None,
    defaults: SettingsDefaults = DEFAULT_SETTINGS_DEFAULTS,
) -> tuple[GenerationSettings, list[AppliedFallback]]:
    """Complete ``partial`` with category- and environment-derived defaults.

    Args:
        partial: Settings as chosen by the user; any field may be unset.
        category: Product category driving style and environment defaults.
        defaults: Lookup tables, normally from the engine config.

    Returns:
        The completed settings and the fallbacks applied, in resolution order.
    """
    resolved_category = parse_category(category)
    updates: dict[str, object] = {}
    applied: list[AppliedFallback] = []

    style = partial.style
    if not style:
        style = defaults.style_for(resolved_category)
        updates["style"] = style
        applied.append(AppliedFallback("style", style, "based on product category"))

    environment = partial.environment
    if not environment:
        environment = defaults.environment_for(resolved_category)
        updates["environment"] = environment
        applied.append(AppliedFallback("environment", environment, "based on product category"))

    if not partial.lighting:
        lighting = defaults.lighting_for(environment)
        updates["lighting"] = lighting
        applied.append(AppliedFallback("lighting", lighting, "based on environment choice"))

    if not partial.camera_angle:
        updates["camera_angle"] = defaults.camera_angle
        applied.append(
            AppliedFallback("camera_angle", defaults.camera_angle, "for optimal composition")
        )

    if not partial.output_formats:
        updates["output_formats"] = defaults.output_formats
        applied.append(
            AppliedFallback(
                "output_formats",
                ", ".join(defaults.output_formats),
                "for commercial presentation",
            )
        )

    if not updates:
        return partial, []

    log.debug(
        "settings_fallbacks_applied",
        category=resolved_category.value,
        fields=[f.field for f in applied],
    )
    return partial.model_copy(update=updates), applied


_MISSING_WARNINGS: dict[str, str] = {
    "style": "Style selection is missing",
    "environment": "Environment selection is missing",
    "lighting": "Lighting preference is missing",
    "camera_angle": "Camera angle selection is missing",
    "output_formats": "No output format selected",
}

MAX_RECOMMENDED_FORMATS = 3


def assess_settings(
    settings: GenerationSettings,
    category: ProductCategory | str | None = None,
) -> SettingsAssessment:
    """Rate how complete ``settings`` are and flag awkward combinations."""
    missing = settings.missing_fields
    completeness = 20 * (len(_MISSING_WARNINGS) - len(missing))
    assessment = SettingsAssessment(
        completeness=completeness,
        warnings=[_MISSING_WARNINGS[name] for name in missing],
    )

    environment = (settings.environment or "").lower()
    lighting = (settings.lighting or "").lower()
    style = (settings.style or "").lower()

    if environment == "studio" and lighting == "naturelle":
        assessment.recommendations.append(
            'Consider "professionnelle" lighting for a studio environment'
        )
    if style == "moderne" and lighting == "chaleureuse":
        assessment.recommendations.append(
            'Modern style usually pairs with "naturelle" or "professionnelle" lighting'
        )
    if parse_category(category) is ProductCategory.WORKSTATIONS and environment == "chambre":
        assessment.recommendations.append(
            'Office furniture reads more naturally in a "bureau" or "salon" environment'
        )
    if len(settings.output_formats) > MAX_RECOMMENDED_FORMATS:
        assessment.recommendations.append(
            f"Consider at most {MAX_RECOMMENDED_FORMATS} output formats per generation"
        )
    return assessment
