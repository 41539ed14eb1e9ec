"""Product Intelligence Classifier.

Infers category, placement type, material profile and scale guidance from a
free-form ``ProductSpecification`` by keyword matching. Classification is
best-effort and never fails: unmatched input degrades to a floor-standing,
composite-material profile so generation is never blocked.

Keywords match at word starts (``\\bshelf`` matches "shelves" but "pine"
does not match "spine").
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from furnishot.models.product import (
    EnforcementLevel,
    MaterialProfile,
    MaterialType,
    PlacementAnalysis,
    PlacementType,
    ProductCategory,
    ProductIntelligence,
    ProductSpecification,
    ReflectanceLevel,
    RequiredLighting,
    ScaleGuidance,
    TextureComplexity,
    ViewingDistance,
)
from furnishot.observability.logging import get_logger

log = get_logger(__name__)

# ---------------------------------------------------------------------------
# Keyword tables (checked in declaration order; first match wins)
# ---------------------------------------------------------------------------

CATEGORY_KEYWORDS: dict[ProductCategory, tuple[str, ...]] = {
    # Outdoor first: a garden bench belongs outside whatever its furniture type.
    ProductCategory.OUTDOOR: ("outdoor", "patio", "garden", "terrace"),
    ProductCategory.SEATING: (
        "chair", "sofa", "couch", "armchair", "stool", "bench", "seat", "ottoman", "pouf",
    ),
    ProductCategory.WORKSTATIONS: ("workstation", "cubicle", "office pod"),
    ProductCategory.TABLES: ("desk", "table", "console", "counter"),
    ProductCategory.STORAGE: (
        "cabinet", "shel", "bookcase", "drawer", "dresser", "sideboard", "wardrobe",
        "closet", "armoire", "storage", "cupboard", "credenza",
    ),
    ProductCategory.BEDS: ("bed", "headboard", "mattress", "daybed"),
    ProductCategory.LIGHTING: ("lamp", "light", "chandelier", "sconce", "pendant", "luminaire"),
    ProductCategory.TEXTILES: ("rug", "carpet", "curtain", "pillow", "cushion", "throw", "textile"),
    ProductCategory.DECOR: ("vase", "mirror", "frame", "sculpture", "decor", "ornament", "clock"),
}


@dataclass(frozen=True)
class PlacementKeywords:
    """Evidence for one placement: strong, supporting and contradicting words."""

    primary: tuple[str, ...]
    secondary: tuple[str, ...] = ()
    negative: tuple[str, ...] = ()


# Declaration order breaks score ties: "ceiling mounted" is a ceiling fixture
# even though "mounted" is also wall evidence.
PLACEMENT_KEYWORDS: dict[PlacementType, PlacementKeywords] = {
    PlacementType.CEILING_MOUNTED: PlacementKeywords(
        primary=("ceiling", "pendant", "suspended", "chandelier"),
        secondary=("hanging", "overhead", "drop-down", "canopy"),
        negative=("floor", "legs", "feet", "base"),
    ),
    PlacementType.WALL_MOUNTED: PlacementKeywords(
        primary=("wall", "mounted", "floating", "sconce", "bracket"),
        secondary=("hanging", "cantilever", "cleat", "legless", "no legs", "space-saving"),
        negative=(
            "legs", "feet", "pedestal", "freestanding", "free-standing", "floor standing",
            "floor-standing",
        ),
    ),
    PlacementType.TABLETOP: PlacementKeywords(
        primary=("tabletop", "table top", "desktop", "countertop", "table lamp", "desk lamp"),
        secondary=("portable", "surface-mounted"),
        negative=("floor standing", "floor-standing", "wall", "large"),
    ),
    PlacementType.BUILT_IN: PlacementKeywords(
        primary=("built-in", "built in", "integrated", "fitted", "bespoke"),
        secondary=("custom", "permanent", "architectural", "recessed"),
        negative=("freestanding", "free-standing", "portable", "removable"),
    ),
    PlacementType.FLOOR_STANDING: PlacementKeywords(
        primary=(
            "floor standing", "floor-standing", "freestanding", "free-standing", "floor lamp",
            "legs", "pedestal", "castor", "caster",
        ),
        secondary=("feet", "base", "standing", "stable"),
        negative=("wall", "mounted", "floating", "hanging", "legless", "suspended", "ceiling"),
    ),
}

PRIMARY_WEIGHT = 3.0
SECONDARY_WEIGHT = 1.5
NEGATIVE_WEIGHT = -2.0
CONFIDENCE_THRESHOLD = 0.7

CATEGORY_PLACEMENTS: dict[ProductCategory, frozenset[PlacementType]] = {
    ProductCategory.SEATING: frozenset({PlacementType.FLOOR_STANDING, PlacementType.WALL_MOUNTED}),
    ProductCategory.TABLES: frozenset(
        {PlacementType.FLOOR_STANDING, PlacementType.WALL_MOUNTED, PlacementType.TABLETOP}
    ),
    ProductCategory.STORAGE: frozenset(
        {
            PlacementType.FLOOR_STANDING,
            PlacementType.WALL_MOUNTED,
            PlacementType.BUILT_IN,
            PlacementType.CEILING_MOUNTED,
        }
    ),
    ProductCategory.WORKSTATIONS: frozenset(
        {PlacementType.FLOOR_STANDING, PlacementType.WALL_MOUNTED, PlacementType.BUILT_IN}
    ),
    ProductCategory.LIGHTING: frozenset(
        {
            PlacementType.CEILING_MOUNTED,
            PlacementType.WALL_MOUNTED,
            PlacementType.FLOOR_STANDING,
            PlacementType.TABLETOP,
        }
    ),
    ProductCategory.DECOR: frozenset(
        {PlacementType.TABLETOP, PlacementType.WALL_MOUNTED, PlacementType.FLOOR_STANDING}
    ),
    ProductCategory.TEXTILES: frozenset(
        {PlacementType.FLOOR_STANDING, PlacementType.WALL_MOUNTED}
    ),
    ProductCategory.BEDS: frozenset({PlacementType.FLOOR_STANDING, PlacementType.BUILT_IN}),
    ProductCategory.OUTDOOR: frozenset({PlacementType.FLOOR_STANDING, PlacementType.BUILT_IN}),
}

MATERIAL_KEYWORDS: dict[MaterialType, tuple[str, ...]] = {
    MaterialType.WOOD: (
        "wood", "oak", "walnut", "pine", "maple", "cherry", "teak", "beech", "ash",
        "birch", "plywood", "bamboo", "veneer",
    ),
    MaterialType.METAL: (
        "metal", "steel", "aluminium", "aluminum", "brass", "iron", "chrome", "copper", "bronze",
    ),
    MaterialType.FABRIC: (
        "fabric", "cotton", "linen", "wool", "polyester", "velvet", "boucle", "textile", "upholster",
    ),
    MaterialType.LEATHER: ("leather", "hide", "suede"),
    MaterialType.GLASS: ("glass", "crystal"),
    MaterialType.PLASTIC: ("plastic", "acrylic", "polymer", "polypropylene", "resin"),
    MaterialType.STONE: ("stone", "marble", "granite", "concrete", "travertine", "terrazzo"),
    MaterialType.CERAMIC: ("ceramic", "porcelain", "terracotta", "stoneware"),
}

CATEGORY_ALIASES: dict[str, ProductCategory] = {
    "canape": ProductCategory.SEATING,
    "chaise": ProductCategory.SEATING,
    "table": ProductCategory.TABLES,
    "lit": ProductCategory.BEDS,
    "armoire": ProductCategory.STORAGE,
    "decoration": ProductCategory.DECOR,
    "bureau": ProductCategory.WORKSTATIONS,
    "autre": ProductCategory.UNKNOWN,
}

_COMPLEX_SURFACES = frozenset(
    {MaterialType.WOOD, MaterialType.FABRIC, MaterialType.LEATHER, MaterialType.STONE}
)

_HUMAN_SCALE_CATEGORIES = frozenset(
    {
        ProductCategory.SEATING,
        ProductCategory.TABLES,
        ProductCategory.WORKSTATIONS,
        ProductCategory.BEDS,
    }
)

PROPORTIONAL_ELEMENTS: dict[ProductCategory, tuple[str, ...]] = {
    ProductCategory.SEATING: ("seat height 45-50cm", "backrest proportion"),
    ProductCategory.TABLES: ("surface height 70-75cm", "leg spacing"),
    ProductCategory.WORKSTATIONS: ("working height 72-76cm", "ergonomic proportions"),
    ProductCategory.STORAGE: ("human reach zones", "door and drawer proportions"),
    ProductCategory.BEDS: ("mattress height 50-60cm", "headboard proportion"),
    ProductCategory.LIGHTING: ("mounting height", "shade proportions"),
}


def _find(keyword: str, text: str) -> int:
    """Position of ``keyword`` at a word start in ``text``, or -1."""
    match = re.search(rf"\b{re.escape(keyword)}", text)
    return match.start() if match else -1


def _matches_any(keywords: tuple[str, ...], text: str) -> bool:
    return any(_find(kw, text) >= 0 for kw in keywords)


# ---------------------------------------------------------------------------
# Classification steps
# ---------------------------------------------------------------------------


def categorize(product_type: str, product_name: str = "") -> ProductCategory:
    """Infer the furniture category from the product type, then the name."""
    for text in (product_type.lower(), product_name.lower()):
        if not text:
            continue
        for category, keywords in CATEGORY_KEYWORDS.items():
            if _matches_any(keywords, text):
                return category
    return ProductCategory.UNKNOWN


def parse_category(value: str | ProductCategory | None) -> ProductCategory:
    """Parse a category value, accepting dashboard category tokens.

    Unknown values resolve to ``ProductCategory.UNKNOWN``.
    """
    if isinstance(value, ProductCategory):
        return value
    if not value:
        return ProductCategory.UNKNOWN
    token = value.strip().lower()
    if token in CATEGORY_ALIASES:
        return CATEGORY_ALIASES[token]
    try:
        return ProductCategory(token)
    except ValueError:
        return ProductCategory.UNKNOWN


@dataclass(frozen=True)
class PlacementScore:
    score: float
    supporting: tuple[str, ...] = ()
    conflicting: tuple[str, ...] = ()


def score_placements(text: str) -> dict[PlacementType, PlacementScore]:
    """Weighted keyword score per placement, in ``PLACEMENT_KEYWORDS`` order.

    Primary words count 3, secondary 1.5 and contradicting words -2.
    """
    text = text.lower()
    scores: dict[PlacementType, PlacementScore] = {}
    for placement, keywords in PLACEMENT_KEYWORDS.items():
        primary = [kw for kw in keywords.primary if _find(kw, text) >= 0]
        secondary = [kw for kw in keywords.secondary if _find(kw, text) >= 0]
        negative = [kw for kw in keywords.negative if _find(kw, text) >= 0]
        score = (
            PRIMARY_WEIGHT * len(primary)
            + SECONDARY_WEIGHT * len(secondary)
            + NEGATIVE_WEIGHT * len(negative)
        )
        scores[placement] = PlacementScore(score, (*primary, *secondary), tuple(negative))
    return scores


def is_placement_compatible(placement: PlacementType, category: ProductCategory) -> bool:
    """Whether ``placement`` is plausible for ``category``; unknown accepts all."""
    allowed = CATEGORY_PLACEMENTS.get(category)
    return allowed is None or placement in allowed


def enforcement_level_for(
    placement: PlacementType, confidence: float, compatible: bool, strict_mode: bool = True
) -> EnforcementLevel:
    if placement is PlacementType.WALL_MOUNTED and strict_mode:
        return "absolute"
    if confidence >= 0.8 and compatible:
        return "high"
    if confidence >= 0.5 or not compatible:
        return "medium"
    return "low"


def analyze_placement(
    product_type: str,
    additional_specs: str = "",
    category: ProductCategory = ProductCategory.UNKNOWN,
    *,
    strict_mode: bool = True,
) -> PlacementAnalysis:
    """Detect the placement type with confidence and category validation.

    The best positive score wins; without any positive evidence the product
    is treated as floor-standing with zero confidence.
    """
    scores = score_placements(f"{product_type} {additional_specs}")
    best, best_score = max(scores.items(), key=lambda item: item[1].score)
    positive_total = sum(s.score for s in scores.values() if s.score > 0)

    if best_score.score > 0:
        placement = best
        confidence = round(best_score.score / positive_total, 2)
        evidence = best_score
    else:
        placement = PlacementType.FLOOR_STANDING
        confidence = 0.0
        evidence = scores[PlacementType.FLOOR_STANDING]

    compatible = is_placement_compatible(placement, category)
    recommendations: list[str] = []
    if confidence < CONFIDENCE_THRESHOLD:
        recommendations.append(
            f"Low confidence in placement detection ({confidence:.0%}), "
            "consider manual verification"
        )
    if not compatible:
        recommendations.append(
            f"Placement {placement.label.lower()} is unusual for {category.value} products, "
            "verify the product type"
        )
    if evidence.conflicting:
        recommendations.append(
            f"Conflicting placement indicators found: {', '.join(evidence.conflicting)}"
        )

    return PlacementAnalysis(
        placement=placement,
        confidence=confidence,
        supporting_keywords=evidence.supporting,
        conflicting_keywords=evidence.conflicting,
        category_compatible=compatible,
        enforcement_level=enforcement_level_for(placement, confidence, compatible, strict_mode),
        recommendations=tuple(recommendations),
    )


def determine_placement(product_type: str, additional_specs: str = "") -> PlacementType:
    """Infer how the product is installed; defaults to floor-standing."""
    return analyze_placement(product_type, additional_specs).placement


def detect_materials(materials_description: str) -> list[MaterialType]:
    """Detected materials ordered by first mention in the description."""
    text = materials_description.lower()
    positions: list[tuple[int, MaterialType]] = []
    for material, keywords in MATERIAL_KEYWORDS.items():
        found = [pos for pos in (_find(kw, text) for kw in keywords) if pos >= 0]
        if found:
            positions.append((min(found), material))
    return [material for _, material in sorted(positions, key=lambda p: p[0])]


def determine_reflectance(primary: MaterialType, description: str) -> ReflectanceLevel:
    text = description.lower()
    if _matches_any(("mirror", "reflective"), text):
        return "mirror"
    if primary is MaterialType.GLASS or _matches_any(
        ("gloss", "high-gloss", "polished", "lacquer", "shiny", "varnish"), text
    ):
        return "gloss"
    if primary is MaterialType.METAL or _matches_any(("satin", "brushed", "semi"), text):
        return "satin"
    return "matte"


def determine_texture(primary: MaterialType, secondary: list[MaterialType]) -> TextureComplexity:
    if primary in _COMPLEX_SURFACES or len(secondary) > 1:
        return "complex"
    if len(secondary) == 1:
        return "moderate"
    return "simple"


def determine_lighting(primary: MaterialType, reflectance: ReflectanceLevel) -> RequiredLighting:
    if primary is MaterialType.GLASS or reflectance == "mirror":
        return "technical"
    if primary is MaterialType.METAL or reflectance == "gloss":
        return "dramatic"
    if primary is MaterialType.WOOD:
        return "directional"
    if primary in (MaterialType.FABRIC, MaterialType.LEATHER):
        return "soft"
    return "balanced"


def analyze_materials(materials_description: str) -> MaterialProfile:
    """Build the material profile; no detected material yields ``composite``."""
    detected = detect_materials(materials_description)
    primary = detected[0] if detected else MaterialType.COMPOSITE
    secondary = detected[1:]
    reflectance = determine_reflectance(primary, materials_description)
    return MaterialProfile(
        primary=primary,
        secondary=tuple(secondary),
        reflectance_level=reflectance,
        texture_complexity=determine_texture(primary, secondary),
        required_lighting=determine_lighting(primary, reflectance),
    )


def scale_guidance_for(category: ProductCategory) -> ScaleGuidance:
    distance: ViewingDistance = "medium"
    if category in (ProductCategory.LIGHTING, ProductCategory.DECOR):
        distance = "close"
    elif category is ProductCategory.OUTDOOR:
        distance = "distant"
    return ScaleGuidance(
        human_reference_needed=category in _HUMAN_SCALE_CATEGORIES,
        viewing_distance=distance,
        proportional_elements=PROPORTIONAL_ELEMENTS.get(
            category, ("realistic scale", "appropriate proportions")
        ),
    )


def classify_product(
    spec: ProductSpecification, *, strict_mode: bool = True
) -> ProductIntelligence:
    """Derive ``ProductIntelligence`` from a product specification.

    Never raises for a structurally valid specification. ``strict_mode``
    raises wall-mounted placements to absolute enforcement.
    """
    category = categorize(spec.product_type, spec.product_name)
    analysis = analyze_placement(
        spec.product_type, spec.additional_specs_text, category, strict_mode=strict_mode
    )
    placement = analysis.placement
    profile = analyze_materials(spec.materials_description)

    if category is ProductCategory.UNKNOWN or profile.primary is MaterialType.COMPOSITE:
        log.debug(
            "classification_defaulted",
            product=spec.product_name,
            category=category.value,
            material=profile.primary.value,
        )

    intelligence = ProductIntelligence(
        category=category,
        placement_type=placement,
        material_profile=profile,
        scale_guidance=scale_guidance_for(category),
        placement_analysis=analysis,
    )
    log.debug(
        "product_classified",
        product=spec.product_name,
        category=category.value,
        placement=placement.value,
        placement_confidence=analysis.confidence,
        enforcement=analysis.enforcement_level,
        primary_material=profile.primary.value,
        secondary_materials=[m.value for m in profile.secondary],
    )
    return intelligence
