"""Material Rule Table.

Maps a primary ``MaterialType`` to authenticity-rendering guidance. Every
row names the surface traits that make the material read as real and
closes with an explicit rejection of artificial, plastic-looking renders.
Secondary materials get a shorter generic clause plus the statement that
the primary material stays visually dominant.
"""

from __future__ import annotations

from collections.abc import Callable

from furnishot.models.product import MaterialProfile, MaterialType

MaterialHandler = Callable[[MaterialProfile], list[str]]


def _wood(profile: MaterialProfile) -> list[str]:
    return [
        "Authentic wood grain with natural directional flow",
        "Natural variation: subtle knots, ray flecks and colour shifts",
        f"Finish rendered accurately ({profile.reflectance_level} sheen)",
    ]


def _metal(profile: MaterialProfile) -> list[str]:
    return [
        "Accurate surface treatment (brushed, polished or powder-coated)",
        "Controlled reflectance without distracting hotspots",
        "Crisp edges and true metallic colour",
    ]


def _fabric(_profile: MaterialProfile) -> list[str]:
    return [
        "Visible weave and textile structure",
        "Natural draping, seams and tension",
        "Soft matte light interaction with fibre depth",
    ]


def _leather(_profile: MaterialProfile) -> list[str]:
    return [
        "Authentic leather grain and natural creasing",
        "Sheen appropriate to the finish",
        "Stitching and edge finishing clearly resolved",
    ]


def _glass(_profile: MaterialProfile) -> list[str]:
    return [
        "Balanced transparency and reflection",
        "Clean edges showing true glass thickness",
        "Subtle reflections that never hide the product structure",
    ]


def _plastic(profile: MaterialProfile) -> list[str]:
    return [
        "Moulded surfaces with consistent colour and subtle mould lines",
        f"Finish rendered as specified ({profile.reflectance_level}) without toy-like gloss",
    ]


def _stone(_profile: MaterialProfile) -> list[str]:
    return [
        "Natural veining and mineral texture with real depth",
        "Honest weight and edge profile of cut stone",
    ]


def _ceramic(_profile: MaterialProfile) -> list[str]:
    return [
        "Glaze depth and slight handmade irregularity",
        "Soft highlights following the glazed curvature",
    ]


def _composite(_profile: MaterialProfile) -> list[str]:
    return [
        "Surface finish and texture rendered authentically",
        "Material depth and light interaction true to the described finish",
    ]


MATERIAL_RULES: dict[MaterialType, MaterialHandler] = {
    MaterialType.WOOD: _wood,
    MaterialType.METAL: _metal,
    MaterialType.FABRIC: _fabric,
    MaterialType.LEATHER: _leather,
    MaterialType.GLASS: _glass,
    MaterialType.PLASTIC: _plastic,
    MaterialType.STONE: _stone,
    MaterialType.CERAMIC: _ceramic,
    MaterialType.COMPOSITE: _composite,
}

AUTHENTICITY_REJECTION = "NO artificial or plastic-looking rendering of the {material}"
DOMINANCE_STATEMENT = "The primary {material} remains visually dominant"


def primary_guidance(profile: MaterialProfile) -> list[str]:
    """Guidance lines for the primary material, rejection clause last."""
    handler = MATERIAL_RULES.get(profile.primary, _composite)
    material = profile.primary.value
    if profile.primary is MaterialType.PLASTIC:
        rejection = "NO artificial or toy-like rendering of the plastic"
    else:
        rejection = AUTHENTICITY_REJECTION.format(material=material)
    return [*handler(profile), rejection]


def secondary_guidance(profile: MaterialProfile) -> list[str]:
    """Short clause for secondary materials; empty when there are none."""
    if not profile.secondary:
        return []
    names = ", ".join(m.value for m in profile.secondary)
    return [
        f"Secondary materials ({names}) rendered with equal authenticity",
        "Realistic transitions where materials meet",
        DOMINANCE_STATEMENT.format(material=profile.primary.value),
    ]
