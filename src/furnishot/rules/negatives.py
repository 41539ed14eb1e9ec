"""Negative-Constraint Library.

A fixed baseline of categorical prohibitions applies to every composition.
Context, placement and quality deltas are appended after the baseline and
are strictly additive: a delta never removes or rewrites a baseline line.
"""

from __future__ import annotations

from dataclasses import dataclass

from furnishot.models.product import PlacementType
from furnishot.models.prompt import ContextPreset, QualityLevel
from furnishot.rules.placement import get_placement_rule


@dataclass(frozen=True)
class NegativeCategory:
    """A titled group of prohibition lines."""

    key: str
    title: str
    lines: tuple[str, ...]


@dataclass(frozen=True)
class NegativeConstraintSet:
    """Baseline categories followed by the additive deltas."""

    baseline: tuple[NegativeCategory, ...]
    additions: tuple[NegativeCategory, ...] = ()

    @property
    def categories(self) -> tuple[NegativeCategory, ...]:
        return self.baseline + self.additions

    @property
    def lines(self) -> list[str]:
        return [line for category in self.categories for line in category.lines]

    @property
    def keys(self) -> list[str]:
        return [category.key for category in self.categories]

    def render(self) -> str:
        blocks = [
            "\n".join([f"{c.title}:", *(f"• {line}" for line in c.lines)])
            for c in self.categories
            if c.lines
        ]
        return "\n".join(blocks)


# Prop families that may be approved by name in the generation settings.
PROP_FAMILIES: dict[str, str] = {
    "plant": "plants or flowers",
    "lamp": "extra lamps",
    "rug": "rugs",
    "artwork": "artwork or wall decorations",
    "cushion": "pillows or throws",
    "book": "books or magazines",
}

BASELINE_KEYS: tuple[str, ...] = (
    "human_figures",
    "irrelevant_props",
    "text_and_labels",
    "photographic_artifacts",
    "duplication",
)


def _prop_lines(approved_props: tuple[str, ...]) -> tuple[str, ...]:
    approved = {p.strip().lower().rstrip("s") for p in approved_props}
    unapproved = [label for key, label in PROP_FAMILIES.items() if key not in approved]
    lines = []
    if unapproved:
        lines.append(f"NO {', '.join(unapproved)}")
    lines.append("NO cups, food, electronics or clutter")
    lines.append("NO additional furniture beyond the specified product")
    if approved_props:
        lines.append(f"Only approved props may appear: {', '.join(approved_props)}")
    return tuple(lines)


def baseline_constraints(approved_props: tuple[str, ...] = ()) -> tuple[NegativeCategory, ...]:
    """The baseline prohibitions shared by every composition."""
    return (
        NegativeCategory(
            key="human_figures",
            title="HUMAN ELEMENTS",
            lines=(
                "NO humans, people or body parts (hands, arms, feet, faces)",
                "NO human shadows, silhouettes or mannequins",
            ),
        ),
        NegativeCategory(
            key="irrelevant_props",
            title="IRRELEVANT OBJECTS",
            lines=_prop_lines(approved_props),
        ),
        NegativeCategory(
            key="text_and_labels",
            title="TEXT & LABELS",
            lines=(
                "NO text, labels, logos, watermarks or price tags",
                "NO measurement callouts, arrows or annotations",
            ),
        ),
        NegativeCategory(
            key="photographic_artifacts",
            title="PHOTOGRAPHIC ARTIFACTS",
            lines=(
                "NO lens flare, harsh glare, motion blur or noise",
                "NO distortion, banding or unrealistic colour shifts",
            ),
        ),
        NegativeCategory(
            key="duplication",
            title="DUPLICATION",
            lines=("NO duplicate or mirrored copies of the product",),
        ),
    )


CONTEXT_DELTAS: dict[ContextPreset, tuple[str, ...]] = {
    ContextPreset.PACKSHOT: (
        "NO environmental elements, room context or props",
        "NO coloured or textured backdrop",
    ),
    ContextPreset.LIFESTYLE: (
        "NO over-staged or cluttered scenes",
        "NO décor overshadowing the product",
    ),
    ContextPreset.SOCIAL_MEDIA_SQUARE: ("NO busy backgrounds competing at small sizes",),
    ContextPreset.SOCIAL_MEDIA_STORY: ("NO product parts inside the interface-reserved band",),
    ContextPreset.HERO: (
        "NO text or graphics inside the text-overlay reserved zone",
        "NO busy detail behind the overlay area",
    ),
    ContextPreset.DETAIL: ("NO full-room context or wide establishing views",),
}

QUALITY_DELTAS: dict[QualityLevel, tuple[str, ...]] = {
    QualityLevel.ENTERPRISE: (
        "NO cartoon, CGI-render or illustrated look",
        "NO amateur or smartphone-snapshot aesthetics",
    ),
    QualityLevel.COMMERCIAL: ("NO cartoon, CGI-render or illustrated look",),
    QualityLevel.STANDARD: (),
}


def build_negative_constraints(
    context_preset: ContextPreset,
    placement: PlacementType = PlacementType.OTHER,
    quality_level: QualityLevel = QualityLevel.ENTERPRISE,
    approved_props: tuple[str, ...] = (),
) -> NegativeConstraintSet:
    """Baseline prohibitions plus context, placement and quality deltas."""
    additions: list[NegativeCategory] = []

    placement_rule = get_placement_rule(placement)
    if placement_rule.prohibitions:
        additions.append(
            NegativeCategory(
                key=f"placement_{placement_rule.placement.value}",
                title="PLACEMENT VIOLATIONS",
                lines=placement_rule.prohibitions,
            )
        )

    context_lines = CONTEXT_DELTAS.get(context_preset, ())
    if context_lines:
        additions.append(
            NegativeCategory(
                key=f"context_{context_preset.value}",
                title=f"{context_preset.value.replace('_', ' ').upper()} PROHIBITIONS",
                lines=context_lines,
            )
        )

    quality_lines = QUALITY_DELTAS.get(quality_level, ())
    if quality_lines:
        additions.append(
            NegativeCategory(
                key=f"quality_{quality_level.value}",
                title="QUALITY PROHIBITIONS",
                lines=quality_lines,
            )
        )

    return NegativeConstraintSet(
        baseline=baseline_constraints(approved_props),
        additions=tuple(additions),
    )
