"""Data models for prompt composition.

Pydantic models describe caller-supplied inputs and derived
classifications; frozen dataclasses describe composed output.
"""

from furnishot.models.product import (
    Dimensions,
    MaterialProfile,
    MaterialType,
    PlacementAnalysis,
    PlacementType,
    ProductCategory,
    ProductIntelligence,
    ProductSpecification,
    ScaleGuidance,
)
from furnishot.models.prompt import (
    ComposedPrompt,
    ContextPreset,
    PromptSection,
    QualityLevel,
)
from furnishot.models.settings import GenerationSettings

__all__ = [
    "ComposedPrompt",
    "ContextPreset",
    "Dimensions",
    "GenerationSettings",
    "MaterialProfile",
    "MaterialType",
    "PlacementAnalysis",
    "PlacementType",
    "ProductCategory",
    "ProductIntelligence",
    "ProductSpecification",
    "PromptSection",
    "QualityLevel",
    "ScaleGuidance",
]
