"""Product models.

``ProductSpecification`` is the request-scoped input supplied by the upload
and profile-extraction workflow. ``ProductIntelligence`` is derived from it by
the classifier on every request and is never persisted.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ReflectanceLevel = Literal["matte", "satin", "gloss", "mirror"]
TextureComplexity = Literal["simple", "moderate", "complex"]
RequiredLighting = Literal["soft", "balanced", "directional", "dramatic", "technical"]
ViewingDistance = Literal["close", "medium", "distant"]
EnforcementLevel = Literal["absolute", "high", "medium", "low"]


class ProductCategory(StrEnum):
    """Furniture category inferred from the product type."""

    SEATING = "seating"
    TABLES = "tables"
    STORAGE = "storage"
    BEDS = "beds"
    WORKSTATIONS = "workstations"
    LIGHTING = "lighting"
    DECOR = "decor"
    TEXTILES = "textiles"
    OUTDOOR = "outdoor"
    UNKNOWN = "unknown"


class PlacementType(StrEnum):
    """Physical installation category of a furniture product.

    ``OTHER`` is the explicit default and carries general phrasing only.
    """

    FLOOR_STANDING = "floor_standing"
    WALL_MOUNTED = "wall_mounted"
    CEILING_MOUNTED = "ceiling_mounted"
    TABLETOP = "tabletop"
    BUILT_IN = "built_in"
    OTHER = "other"

    @property
    def label(self) -> str:
        """Upper-case display label, e.g. ``WALL MOUNTED``."""
        return self.value.replace("_", " ").upper()


class MaterialType(StrEnum):
    """Construction material families with dedicated rendering guidance."""

    WOOD = "wood"
    METAL = "metal"
    FABRIC = "fabric"
    LEATHER = "leather"
    GLASS = "glass"
    PLASTIC = "plastic"
    STONE = "stone"
    CERAMIC = "ceramic"
    COMPOSITE = "composite"


class Dimensions(BaseModel):
    """Physical product dimensions. Any axis may be unknown."""

    model_config = ConfigDict(frozen=True)

    width: float | None = Field(default=None, gt=0)
    height: float | None = Field(default=None, gt=0)
    depth: float | None = Field(default=None, gt=0)
    unit: Literal["cm", "in"] = "cm"

    @property
    def is_empty(self) -> bool:
        return self.width is None and self.height is None and self.depth is None

    def describe(self) -> str:
        """Render known axes as ``120cm W × 75cm H × 60cm D``."""
        parts = [
            f"{_fmt(value)}{self.unit} {axis}"
            for axis, value in (("W", self.width), ("H", self.height), ("D", self.depth))
            if value is not None
        ]
        return " × ".join(parts)


def _fmt(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


class ProductSpecification(BaseModel):
    """Free-form description of the product to photograph.

    Only ``product_name`` is structurally required; everything else degrades
    to defaults during classification and composition.
    """

    model_config = ConfigDict(frozen=True)

    product_name: str = Field(min_length=1, description="Commercial product name")
    product_type: str = Field(default="", description="Free-form type, e.g. 'wall shelf'")
    materials_description: str = Field(default="", description="Materials and finishes")
    additional_specs_text: str = Field(default="", description="Any further details")
    dimensions: Dimensions | None = None


class MaterialProfile(BaseModel):
    """Inferred construction materials and surface-rendering characteristics."""

    model_config = ConfigDict(frozen=True)

    primary: MaterialType = MaterialType.COMPOSITE
    secondary: tuple[MaterialType, ...] = ()
    reflectance_level: ReflectanceLevel = "matte"
    texture_complexity: TextureComplexity = "simple"
    required_lighting: RequiredLighting = "balanced"


class ScaleGuidance(BaseModel):
    """How scale should be conveyed in the generated image."""

    model_config = ConfigDict(frozen=True)

    human_reference_needed: bool = False
    viewing_distance: ViewingDistance = "medium"
    proportional_elements: tuple[str, ...] = ()


class PlacementAnalysis(BaseModel):
    """Scored placement detection.

    ``confidence`` is the winning placement's share of all positive keyword
    evidence; 0 when no placement keyword matched and the default was used.
    """

    model_config = ConfigDict(frozen=True)

    placement: PlacementType = PlacementType.FLOOR_STANDING
    confidence: float = Field(default=0.0, ge=0, le=1)
    supporting_keywords: tuple[str, ...] = ()
    conflicting_keywords: tuple[str, ...] = ()
    category_compatible: bool = True
    enforcement_level: EnforcementLevel = "low"
    recommendations: tuple[str, ...] = ()


class ProductIntelligence(BaseModel):
    """Classification derived from a ``ProductSpecification``."""

    model_config = ConfigDict(frozen=True)

    category: ProductCategory = ProductCategory.UNKNOWN
    placement_type: PlacementType = PlacementType.FLOOR_STANDING
    material_profile: MaterialProfile = Field(default_factory=MaterialProfile)
    scale_guidance: ScaleGuidance = Field(default_factory=ScaleGuidance)
    placement_analysis: PlacementAnalysis = Field(default_factory=PlacementAnalysis)
