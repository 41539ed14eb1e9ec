"""Pytest configuration and shared fixtures."""

import pytest

from furnishot.intelligence import classify_product
from furnishot.models import GenerationSettings, ProductIntelligence, ProductSpecification


@pytest.fixture(autouse=True)
def clear_engine_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep FURNISHOT_* overrides from the developer's shell out of tests."""
    monkeypatch.delenv("FURNISHOT_MAX_PROMPT_LENGTH", raising=False)
    monkeypatch.delenv("FURNISHOT_QUALITY_LEVEL", raising=False)
    monkeypatch.delenv("FURNISHOT_LOG_DIR", raising=False)


@pytest.fixture
def oak_desk() -> ProductSpecification:
    return ProductSpecification(
        product_name="Oak Desk",
        product_type="desk",
        materials_description="oak wood",
    )


@pytest.fixture
def wall_shelf() -> ProductSpecification:
    return ProductSpecification(
        product_name="Floating Shelf",
        product_type="wall shelf",
        materials_description="walnut veneer with brass brackets",
    )


@pytest.fixture
def oak_desk_intelligence(oak_desk: ProductSpecification) -> ProductIntelligence:
    return classify_product(oak_desk)


@pytest.fixture
def complete_settings() -> GenerationSettings:
    return GenerationSettings(
        style="scandinave",
        environment="salon",
        lighting="naturelle",
        camera_angle="trois-quarts",
        output_formats=("ecommerce",),
    )
