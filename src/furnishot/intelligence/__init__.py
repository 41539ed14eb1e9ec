"""Product intelligence: best-effort classification of product specifications."""

from furnishot.intelligence.classifier import (
    analyze_materials,
    categorize,
    classify_product,
    determine_placement,
    parse_category,
)

__all__ = [
    "analyze_materials",
    "categorize",
    "classify_product",
    "determine_placement",
    "parse_category",
]
