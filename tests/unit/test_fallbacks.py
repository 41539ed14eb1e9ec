"""Tests for the settings fallback resolver."""

from __future__ import annotations

import pytest

from furnishot.models import GenerationSettings, ProductCategory
from furnishot.pipeline.config import SettingsDefaults
from furnishot.pipeline.fallbacks import AppliedFallback, assess_settings, resolve_settings


class TestResolveSettings:
    def test_lighting_from_environment(self) -> None:
        """Salon without lighting defaults to natural light."""
        partial = GenerationSettings(
            style="moderne",
            environment="salon",
            camera_angle="face",
            output_formats=("ecommerce",),
        )
        resolved, applied = resolve_settings(partial, ProductCategory.SEATING)

        assert resolved.lighting == "naturelle"
        assert [f.field for f in applied] == ["lighting"]
        assert str(applied[0]) == 'Lighting defaulted to "naturelle" based on environment choice'

    def test_complete_settings_unchanged(self, complete_settings: GenerationSettings) -> None:
        resolved, applied = resolve_settings(complete_settings, ProductCategory.TABLES)

        assert resolved is complete_settings
        assert applied == []

    @pytest.mark.parametrize("category", list(ProductCategory))
    def test_idempotent(self, category: ProductCategory) -> None:
        once, _ = resolve_settings(GenerationSettings(), category)
        twice, applied = resolve_settings(once, category)

        assert twice == once
        assert applied == []

    def test_resolution_order(self) -> None:
        _, applied = resolve_settings(GenerationSettings(), ProductCategory.BEDS)
        assert [f.field for f in applied] == [
            "style",
            "environment",
            "lighting",
            "camera_angle",
            "output_formats",
        ]

    @pytest.mark.parametrize(
        ("category", "style", "environment", "lighting"),
        [
            (ProductCategory.WORKSTATIONS, "moderne", "bureau", "professionnelle"),
            (ProductCategory.DECOR, "boheme", "salon", "naturelle"),
            (ProductCategory.BEDS, "moderne", "chambre", "chaleureuse"),
            (ProductCategory.OUTDOOR, "moderne", "terrasse", "naturelle"),
            (ProductCategory.UNKNOWN, "moderne", "studio", "professionnelle"),
        ],
    )
    def test_category_defaults(
        self, category: ProductCategory, style: str, environment: str, lighting: str
    ) -> None:
        resolved, _ = resolve_settings(GenerationSettings(), category)

        assert resolved.style == style
        assert resolved.environment == environment
        assert resolved.lighting == lighting
        assert resolved.camera_angle == "trois-quarts"
        assert resolved.output_formats == ("ecommerce",)

    def test_lighting_uses_user_environment(self) -> None:
        resolved, _ = resolve_settings(
            GenerationSettings(environment="bureau"), ProductCategory.SEATING
        )
        assert resolved.lighting == "professionnelle"

    def test_unknown_environment_gets_default_lighting(self) -> None:
        resolved, _ = resolve_settings(
            GenerationSettings(environment="garage"), ProductCategory.SEATING
        )
        assert resolved.lighting == "naturelle"

    def test_category_tokens_accepted(self) -> None:
        resolved, _ = resolve_settings(GenerationSettings(), "bureau")
        assert resolved.environment == "bureau"

    def test_custom_defaults(self) -> None:
        defaults = SettingsDefaults.from_dict(
            {"camera_angle": "face", "output_formats": ["print"]}
        )
        resolved, applied = resolve_settings(GenerationSettings(), ProductCategory.TABLES, defaults)

        assert resolved.camera_angle == "face"
        assert resolved.output_formats == ("print",)
        assert AppliedFallback("output_formats", "print", "for commercial presentation") in applied

    def test_user_fields_preserved(self) -> None:
        partial = GenerationSettings(custom_instructions="keep it calm", approved_props=("rug",))
        resolved, _ = resolve_settings(partial, ProductCategory.SEATING)

        assert resolved.custom_instructions == "keep it calm"
        assert resolved.approved_props == ("rug",)


class TestAssessSettings:
    def test_empty_settings(self) -> None:
        assessment = assess_settings(GenerationSettings())

        assert assessment.completeness == 0
        assert len(assessment.warnings) == 5
        assert not assessment.is_complete

    def test_complete_settings(self, complete_settings: GenerationSettings) -> None:
        assessment = assess_settings(complete_settings, ProductCategory.SEATING)

        assert assessment.completeness == 100
        assert assessment.warnings == []
        assert assessment.recommendations == []
        assert assessment.is_complete

    def test_steps_of_twenty(self) -> None:
        assessment = assess_settings(GenerationSettings(style="moderne", lighting="naturelle"))
        assert assessment.completeness == 40

    def test_pairing_recommendations(self) -> None:
        settings = GenerationSettings(
            style="moderne",
            environment="chambre",
            lighting="chaleureuse",
            output_formats=("instagram-post", "instagram-story", "facebook", "print"),
        )
        assessment = assess_settings(settings, "bureau")

        assert len(assessment.recommendations) == 3

    def test_studio_with_natural_light(self) -> None:
        settings = GenerationSettings(environment="studio", lighting="naturelle")
        assessment = assess_settings(settings)

        assert any("professionnelle" in r for r in assessment.recommendations)
