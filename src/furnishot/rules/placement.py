"""Placement Rule Table.

Maps each ``PlacementType`` to the physical-placement phrasing of the
composed prompt:

- ``mandatory``: requirements rendered in the placement section.
- ``prohibitions``: negative directives rendered into the corrective
  constraints.
- ``prohibited_phrases``: affirmative wording that contradicts the
  placement and must never appear anywhere in a prompt for it. Negative
  directives are worded so that they never contain these phrases.

The table is exhaustive over the enum. Every variant except the explicit
``OTHER`` default carries a non-empty rule set.
"""

from __future__ import annotations

from dataclasses import dataclass

from furnishot.models.product import PlacementType


@dataclass(frozen=True)
class PlacementRule:
    placement: PlacementType
    title: str
    mandatory: tuple[str, ...]
    prohibitions: tuple[str, ...] = ()
    prohibited_phrases: tuple[str, ...] = ()

    @property
    def is_general(self) -> bool:
        """True for the default row, which carries general phrasing only."""
        return not self.prohibitions and not self.prohibited_phrases


PLACEMENT_RULES: dict[PlacementType, PlacementRule] = {
    PlacementType.WALL_MOUNTED: PlacementRule(
        placement=PlacementType.WALL_MOUNTED,
        title="WALL-MOUNTED REQUIREMENTS",
        mandatory=(
            "Product fixed to the wall surface with visible mounting hardware (brackets or cleats)",
            "Minimum 5-10cm clearance beneath the product",
            "Zero floor contact: the product visibly floats on the wall",
            "Realistic mounting height for the product type",
        ),
        prohibitions=(
            "NO floor contact of any kind",
            "NO legs, feet, pedestals or stands under the product",
            "NO floor-based support systems",
        ),
        prohibited_phrases=(
            "standing on the floor",
            "resting on its legs",
            "supported by a pedestal",
            "freestanding placement",
        ),
    ),
    PlacementType.FLOOR_STANDING: PlacementRule(
        placement=PlacementType.FLOOR_STANDING,
        title="FLOOR-STANDING REQUIREMENTS",
        mandatory=(
            "All support points contacting the floor, stable and level",
            "Realistic wall clearance of 5-15cm where a wall is visible",
            "Believable weight distribution for the product",
        ),
        prohibitions=(
            "NO hovering or gaps between supports and floor",
            "NO wall brackets holding the product",
        ),
        prohibited_phrases=(
            "floats on the wall",
            "fixed to the wall surface",
            "hangs from the ceiling",
        ),
    ),
    PlacementType.CEILING_MOUNTED: PlacementRule(
        placement=PlacementType.CEILING_MOUNTED,
        title="CEILING-MOUNTED REQUIREMENTS",
        mandatory=(
            "Product hangs from the ceiling with a visible suspension point",
            "Appropriate ceiling canopy or mounting hardware",
            "Zero floor or wall contact: suspended appearance only",
            "Realistic hanging height and clearances",
        ),
        prohibitions=(
            "NO floor stand, base or legs",
            "NO wall brackets or wall contact",
        ),
        prohibited_phrases=(
            "standing on the floor",
            "fixed to the wall surface",
            "all support points contacting the floor",
        ),
    ),
    PlacementType.TABLETOP: PlacementRule(
        placement=PlacementType.TABLETOP,
        title="TABLETOP REQUIREMENTS",
        mandatory=(
            "Product sits on a proportionate surface with full base contact",
            "Surface material and finish rendered realistically",
            "No overhang beyond the supporting surface edge",
        ),
        prohibitions=(
            "NO placement directly on the floor",
            "NO oversized scale relative to the supporting surface",
        ),
        prohibited_phrases=(
            "standing on the floor",
            "hangs from the ceiling",
        ),
    ),
    PlacementType.BUILT_IN: PlacementRule(
        placement=PlacementType.BUILT_IN,
        title="BUILT-IN REQUIREMENTS",
        mandatory=(
            "Product integrated flush with the surrounding walls or cabinetry",
            "Clean, even shadow gaps at every junction",
            "Installation reads as permanent and professionally fitted",
        ),
        prohibitions=(
            "NO visible gaps suggesting a loose piece",
            "NO freestanding presentation away from the wall",
        ),
        prohibited_phrases=(
            "freestanding placement",
            "hangs from the ceiling",
        ),
    ),
    PlacementType.OTHER: PlacementRule(
        placement=PlacementType.OTHER,
        title="GENERAL PLACEMENT REQUIREMENTS",
        mandatory=(
            "Position the product according to its intended function",
            "Maintain realistic spatial relationships and clearances",
        ),
    ),
}


def get_placement_rule(placement: PlacementType | str | None) -> PlacementRule:
    """Return the rule row for ``placement``; unknown values use ``OTHER``."""
    if not isinstance(placement, PlacementType):
        try:
            placement = PlacementType((placement or "").strip().lower())
        except ValueError:
            placement = PlacementType.OTHER
    return PLACEMENT_RULES[placement]


def find_contradictions(text: str, placement: PlacementType | str | None) -> list[str]:
    """Prohibited phrases for ``placement`` that occur in ``text``."""
    lowered = text.lower()
    rule = get_placement_rule(placement)
    return [phrase for phrase in rule.prohibited_phrases if phrase.lower() in lowered]
