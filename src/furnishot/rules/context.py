"""Context Rule Table.

Maps each ``ContextPreset`` to its format specification and to a handler
producing the context-differentiating narrative block. Every preset owns a
set of defining markers that must appear only in its own output; the
narratives are written so that no defining phrase is shared between
presets.

Unknown preset values resolve to the packshot row, the safe baseline.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from furnishot.models.prompt import ContextPreset
from furnishot.observability.logging import get_logger
from furnishot.rules.styling import ENVIRONMENT_PROFILES, environment_profile, style_profile

if TYPE_CHECKING:
    from collections.abc import Callable

    from furnishot.models.settings import GenerationSettings, TextZone

log = get_logger(__name__)

BASELINE_PRESET = ContextPreset.PACKSHOT

PRESET_ALIASES: dict[str, ContextPreset] = {
    "social-square": ContextPreset.SOCIAL_MEDIA_SQUARE,
    "social_square": ContextPreset.SOCIAL_MEDIA_SQUARE,
    "instagram": ContextPreset.SOCIAL_MEDIA_SQUARE,
    "social-story": ContextPreset.SOCIAL_MEDIA_STORY,
    "social_story": ContextPreset.SOCIAL_MEDIA_STORY,
    "story": ContextPreset.SOCIAL_MEDIA_STORY,
    "hero-banner": ContextPreset.HERO,
    "hero_banner": ContextPreset.HERO,
    "banner": ContextPreset.HERO,
    "studio": ContextPreset.PACKSHOT,
}


@dataclass(frozen=True)
class ContextRule:
    """One row of the context table.

    Attributes:
        preset: The preset this row describes.
        aspect_ratio: Target aspect ratio, e.g. ``16:9``.
        pixel_dimensions: Target resolution, e.g. ``1920×1080px``.
        format_description: Short description of the delivery format.
        format_notes: Context-specific format validation bullets.
        photography_context: One-line photographic framing.
        narrative: Pure handler producing the differentiating block.
        markers: Defining phrases that appear only in this preset's output.
        scene_lighting: Whether the user's lighting choice applies; isolated
            presets always use controlled studio light.
    """

    preset: ContextPreset
    aspect_ratio: str
    pixel_dimensions: str
    format_description: str
    format_notes: tuple[str, ...]
    photography_context: str
    narrative: Callable[[GenerationSettings], str]
    markers: tuple[str, ...]
    scene_lighting: bool

    @property
    def label(self) -> str:
        return self.preset.value.replace("_", " ").upper()


def _zone_phrase(zone: TextZone) -> str:
    if zone in ("left", "right"):
        return f"on the {zone} side"
    return f"along the {zone} edge"


# Product area facing each reserved text zone.
PRODUCT_AREA: dict[str, str] = {
    "left": "right-hand two-thirds",
    "right": "left-hand two-thirds",
    "top": "lower two-thirds",
    "bottom": "upper two-thirds",
}


# ---------------------------------------------------------------------------
# Narrative handlers
# ---------------------------------------------------------------------------


def _packshot(_settings: GenerationSettings) -> str:
    return "\n".join(
        [
            "PACKSHOT CONTEXT - STUDIO ISOLATION",
            "• Pure white seamless background (RGB 255,255,255), soft grounding shadow only",
            "• Product fully isolated from any room, architecture or staging",
            "• Even studio illumination with edge-to-edge sharpness",
            "• Catalog presentation, product centered with 10-15% padding",
        ]
    )


def _lifestyle(settings: GenerationSettings) -> str:
    env = environment_profile(settings.environment)
    if env is None or not env.staged:
        env = ENVIRONMENT_PROFILES["salon"]
    style = style_profile(settings.style)
    props = ", ".join(settings.approved_props) if settings.approved_props else env.props
    lines = [
        "LIFESTYLE CONTEXT - REAL-WORLD LIVING SPACE",
        f"• Lived-in setting: {env.setting}, {env.description.lower()}",
        f"• Atmosphere: {env.atmosphere}",
    ]
    if style is not None:
        lines.append(f"• Styling: {style.aesthetic} ({style.description.lower()})")
    lines.extend(
        [
            f"• Architectural context ({env.architecture}) framing the product",
            f"• Supporting elements: {props}",
            "• The product stays the clear focal point of the scene",
        ]
    )
    return "\n".join(lines)


def _social_square(settings: GenerationSettings) -> str:
    style = style_profile(settings.style)
    backdrop = f"{style.aesthetic} colour backdrop" if style else "soft colour backdrop"
    return "\n".join(
        [
            "SOCIAL SQUARE CONTEXT - FEED-OPTIMIZED SQUARE",
            "• Bright, vibrant styling with a thumb-stopping focal point",
            "• Bold, uncluttered framing that reads on small screens",
            f"• Background: {backdrop} complementing the product",
            "• Contemporary, shareable aesthetic",
        ]
    )


def _social_story(settings: GenerationSettings) -> str:
    zone = settings.text_zone or "bottom"
    return "\n".join(
        [
            "STORY CONTEXT - VERTICAL STORY FRAMING",
            f"• Calm band kept {_zone_phrase(zone)} for interface elements",
            f"• Product placed in the {PRODUCT_AREA[zone]} of the frame, clear of that band",
            "• High-contrast, quick-read composition for full-screen mobile viewing",
            "• Vertical orientation is mandatory",
        ]
    )


def _hero(settings: GenerationSettings) -> str:
    zone = settings.text_zone or "right"
    return "\n".join(
        [
            "HERO CONTEXT - HERO BANNER COMPOSITION",
            f"• Product positioned in the {PRODUCT_AREA[zone]} of the frame, premium and bold",
            f"• Negative space for headline copy kept {_zone_phrase(zone)}",
            "• Marketing-grade light with depth and gentle gradient falloff",
            "• Refined background that never competes with overlay copy",
        ]
    )


def _detail(_settings: GenerationSettings) -> str:
    return "\n".join(
        [
            "DETAIL CONTEXT - MATERIAL DETAIL STUDY",
            "• Macro close-up on joinery, hardware and surface finish",
            "• Shallow depth of field isolating one defining feature",
            "• Raking light revealing texture at fine scale",
            "• Enough of the form visible to identify the product",
        ]
    )


CONTEXT_RULES: dict[ContextPreset, ContextRule] = {
    ContextPreset.PACKSHOT: ContextRule(
        preset=ContextPreset.PACKSHOT,
        aspect_ratio="1:1",
        pixel_dimensions="1024×1024px",
        format_description="square catalog format",
        format_notes=("Centered product composition", "E-commerce listing ready"),
        photography_context="commercial catalog photography on a seamless backdrop",
        narrative=_packshot,
        markers=("pure white seamless background", "STUDIO ISOLATION"),
        scene_lighting=False,
    ),
    ContextPreset.LIFESTYLE: ContextRule(
        preset=ContextPreset.LIFESTYLE,
        aspect_ratio="3:2",
        pixel_dimensions="1536×1024px",
        format_description="landscape editorial format",
        format_notes=("Horizontal composition with room for surroundings",),
        photography_context="lifestyle photography with natural integration into the space",
        narrative=_lifestyle,
        markers=("lived-in setting", "REAL-WORLD LIVING SPACE"),
        scene_lighting=True,
    ),
    ContextPreset.SOCIAL_MEDIA_SQUARE: ContextRule(
        preset=ContextPreset.SOCIAL_MEDIA_SQUARE,
        aspect_ratio="1:1",
        pixel_dimensions="1080×1080px",
        format_description="square feed post format",
        format_notes=("Composition reads at thumbnail size",),
        photography_context="social content composed for a square feed tile",
        narrative=_social_square,
        markers=("thumb-stopping", "FEED-OPTIMIZED SQUARE"),
        scene_lighting=True,
    ),
    ContextPreset.SOCIAL_MEDIA_STORY: ContextRule(
        preset=ContextPreset.SOCIAL_MEDIA_STORY,
        aspect_ratio="9:16",
        pixel_dimensions="1080×1920px",
        format_description="full-screen vertical mobile format",
        format_notes=("Portrait orientation only", "No horizontal layouts"),
        photography_context="vertical mobile content with immediate visual impact",
        narrative=_social_story,
        markers=("for interface elements", "VERTICAL STORY FRAMING"),
        scene_lighting=True,
    ),
    ContextPreset.HERO: ContextRule(
        preset=ContextPreset.HERO,
        aspect_ratio="16:9",
        pixel_dimensions="1920×1080px",
        format_description="wide website header format",
        format_notes=("Horizontal layout with overlay space",),
        photography_context="premium website header imagery with dramatic presentation",
        narrative=_hero,
        markers=("negative space for headline copy", "HERO BANNER COMPOSITION"),
        scene_lighting=True,
    ),
    ContextPreset.DETAIL: ContextRule(
        preset=ContextPreset.DETAIL,
        aspect_ratio="4:5",
        pixel_dimensions="1024×1280px",
        format_description="portrait close-range format",
        format_notes=("Tight crop on the featured detail",),
        photography_context="close-range craftsmanship photography",
        narrative=_detail,
        markers=("macro close-up", "MATERIAL DETAIL STUDY"),
        scene_lighting=False,
    ),
}


def parse_context_preset(value: str | ContextPreset | None) -> ContextPreset:
    """Parse a preset identifier, accepting aliases.

    Unknown or empty values resolve to the baseline preset and never raise.
    """
    if isinstance(value, ContextPreset):
        return value
    token = (value or "").strip().lower()
    if token in PRESET_ALIASES:
        return PRESET_ALIASES[token]
    try:
        return ContextPreset(token.replace("-", "_"))
    except ValueError:
        log.info("context_preset_defaulted", requested=value, preset=BASELINE_PRESET.value)
        return BASELINE_PRESET


def get_context_rule(preset: str | ContextPreset | None) -> ContextRule:
    """Return the rule row for ``preset``, defaulting to the baseline row."""
    return CONTEXT_RULES[parse_context_preset(preset)]
