"""Tests for the context, placement, material and styling rule tables."""

from __future__ import annotations

import itertools

import pytest

from furnishot.models import (
    ContextPreset,
    GenerationSettings,
    MaterialProfile,
    MaterialType,
    PlacementType,
)
from furnishot.models.settings import TextZone
from furnishot.rules.context import (
    BASELINE_PRESET,
    CONTEXT_RULES,
    PRODUCT_AREA,
    get_context_rule,
    parse_context_preset,
)
from furnishot.rules.materials import MATERIAL_RULES, primary_guidance, secondary_guidance
from furnishot.rules.placement import PLACEMENT_RULES, find_contradictions, get_placement_rule
from furnishot.rules.styling import (
    OUTPUT_FORMATS,
    environment_profile,
    output_formats,
    preset_for_formats,
    style_profile,
)

# --- Context rules ---


class TestContextRules:
    def test_table_is_exhaustive(self) -> None:
        assert set(CONTEXT_RULES) == set(ContextPreset)

    @pytest.mark.parametrize(
        ("preset", "ratio", "pixels"),
        [
            (ContextPreset.PACKSHOT, "1:1", "1024×1024px"),
            (ContextPreset.SOCIAL_MEDIA_SQUARE, "1:1", "1080×1080px"),
            (ContextPreset.SOCIAL_MEDIA_STORY, "9:16", "1080×1920px"),
            (ContextPreset.LIFESTYLE, "3:2", "1536×1024px"),
            (ContextPreset.HERO, "16:9", "1920×1080px"),
            (ContextPreset.DETAIL, "4:5", "1024×1280px"),
        ],
    )
    def test_format_specs(self, preset: ContextPreset, ratio: str, pixels: str) -> None:
        rule = CONTEXT_RULES[preset]
        assert rule.aspect_ratio == ratio
        assert rule.pixel_dimensions == pixels

    @pytest.mark.parametrize("preset", list(ContextPreset))
    def test_narrative_carries_own_markers(self, preset: ContextPreset) -> None:
        rule = CONTEXT_RULES[preset]
        narrative = rule.narrative(GenerationSettings()).lower()
        for marker in rule.markers:
            assert marker.lower() in narrative

    def test_markers_are_disjoint_between_narratives(self) -> None:
        settings = GenerationSettings(style="moderne", environment="salon")
        for a, b in itertools.permutations(ContextPreset, 2):
            narrative_b = CONTEXT_RULES[b].narrative(settings).lower()
            for marker in CONTEXT_RULES[a].markers:
                assert marker.lower() not in narrative_b, (a, b, marker)

    def test_pure_white_only_in_packshot(self) -> None:
        for preset, rule in CONTEXT_RULES.items():
            narrative = rule.narrative(GenerationSettings()).lower()
            assert ("pure white" in narrative) is (preset is ContextPreset.PACKSHOT)


class TestParseContextPreset:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("packshot", ContextPreset.PACKSHOT),
            ("LIFESTYLE", ContextPreset.LIFESTYLE),
            ("social-square", ContextPreset.SOCIAL_MEDIA_SQUARE),
            ("instagram", ContextPreset.SOCIAL_MEDIA_SQUARE),
            ("story", ContextPreset.SOCIAL_MEDIA_STORY),
            ("social-media-story", ContextPreset.SOCIAL_MEDIA_STORY),
            ("hero-banner", ContextPreset.HERO),
            (ContextPreset.DETAIL, ContextPreset.DETAIL),
        ],
    )
    def test_known_values_and_aliases(self, value: str, expected: ContextPreset) -> None:
        assert parse_context_preset(value) is expected

    @pytest.mark.parametrize("value", ["billboard", "", None])
    def test_unknown_falls_back_to_baseline(self, value: str | None) -> None:
        assert parse_context_preset(value) is BASELINE_PRESET
        assert get_context_rule(value).preset is ContextPreset.PACKSHOT


class TestContextNarratives:
    def test_lifestyle_uses_environment_and_style(self) -> None:
        settings = GenerationSettings(style="rustique", environment="cuisine")
        narrative = CONTEXT_RULES[ContextPreset.LIFESTYLE].narrative(settings)

        assert "Designer Kitchen" in narrative
        assert "Rustic Farmhouse" in narrative

    def test_lifestyle_never_uses_studio_environment(self) -> None:
        settings = GenerationSettings(environment="studio")
        narrative = CONTEXT_RULES[ContextPreset.LIFESTYLE].narrative(settings)

        assert "Photo Studio" not in narrative
        assert "Contemporary Living Room" in narrative

    def test_lifestyle_lists_approved_props(self) -> None:
        settings = GenerationSettings(approved_props=("plant", "rug"))
        narrative = CONTEXT_RULES[ContextPreset.LIFESTYLE].narrative(settings)

        assert "Supporting elements: plant, rug" in narrative

    def test_hero_product_opposite_text_zone(self) -> None:
        narrative = CONTEXT_RULES[ContextPreset.HERO].narrative(
            GenerationSettings(text_zone="left")
        )

        assert "right-hand two-thirds" in narrative
        assert "on the left side" in narrative

    def test_story_default_band_is_bottom(self) -> None:
        narrative = CONTEXT_RULES[ContextPreset.SOCIAL_MEDIA_STORY].narrative(GenerationSettings())

        assert "along the bottom edge" in narrative

    @pytest.mark.parametrize("preset", [ContextPreset.SOCIAL_MEDIA_STORY, ContextPreset.HERO])
    @pytest.mark.parametrize(
        ("zone", "area"),
        [
            ("left", "right-hand two-thirds"),
            ("right", "left-hand two-thirds"),
            ("top", "lower two-thirds"),
            ("bottom", "upper two-thirds"),
        ],
    )
    def test_product_area_faces_text_zone(
        self, preset: ContextPreset, zone: TextZone, area: str
    ) -> None:
        rule = CONTEXT_RULES[preset]
        narrative = rule.narrative(GenerationSettings(text_zone=zone))

        assert area in narrative
        assert [a for a in PRODUCT_AREA.values() if a in narrative] == [area]
        for marker in rule.markers:
            assert marker.lower() in narrative.lower()


# --- Placement rules ---


class TestPlacementRules:
    def test_table_is_exhaustive(self) -> None:
        assert set(PLACEMENT_RULES) == set(PlacementType)

    @pytest.mark.parametrize(
        "placement", [p for p in PlacementType if p is not PlacementType.OTHER]
    )
    def test_known_variants_have_rule_sets(self, placement: PlacementType) -> None:
        rule = PLACEMENT_RULES[placement]
        assert rule.mandatory
        assert rule.prohibitions
        assert rule.prohibited_phrases
        assert not rule.is_general

    def test_other_is_general_only(self) -> None:
        rule = PLACEMENT_RULES[PlacementType.OTHER]
        assert rule.is_general
        assert rule.mandatory

    @pytest.mark.parametrize("placement", list(PlacementType))
    def test_own_phrasing_never_contradicts_itself(self, placement: PlacementType) -> None:
        rule = PLACEMENT_RULES[placement]
        text = "\n".join(rule.mandatory + rule.prohibitions)
        assert find_contradictions(text, placement) == []

    def test_wall_mounted_requirements(self) -> None:
        rule = PLACEMENT_RULES[PlacementType.WALL_MOUNTED]
        text = " ".join(rule.mandatory).lower()

        assert "mounting hardware" in text
        assert "clearance" in text
        assert "zero floor contact" in text
        assert "NO floor contact of any kind" in rule.prohibitions

    def test_unknown_placement_uses_other(self) -> None:
        assert get_placement_rule("levitating").placement is PlacementType.OTHER
        assert get_placement_rule("wall_mounted").placement is PlacementType.WALL_MOUNTED

    def test_find_contradictions_is_case_insensitive(self) -> None:
        text = "The shelf is Standing On The Floor next to a sofa."
        assert find_contradictions(text, PlacementType.WALL_MOUNTED) == ["standing on the floor"]


# --- Material rules ---


class TestMaterialRules:
    def test_table_is_exhaustive(self) -> None:
        assert set(MATERIAL_RULES) == set(MaterialType)

    @pytest.mark.parametrize("material", list(MaterialType))
    def test_every_material_rejects_artificial_renders(self, material: MaterialType) -> None:
        lines = primary_guidance(MaterialProfile(primary=material))

        assert len(lines) >= 2
        assert lines[-1].startswith("NO artificial")

    def test_wood_emphasises_grain(self) -> None:
        lines = primary_guidance(MaterialProfile(primary=MaterialType.WOOD))
        assert any("grain" in line for line in lines)

    def test_glass_balances_transparency(self) -> None:
        lines = primary_guidance(MaterialProfile(primary=MaterialType.GLASS))
        assert any("transparency" in line.lower() for line in lines)

    def test_no_secondary_guidance_without_secondary(self) -> None:
        assert secondary_guidance(MaterialProfile(primary=MaterialType.WOOD)) == []

    def test_secondary_guidance_states_dominance(self) -> None:
        profile = MaterialProfile(
            primary=MaterialType.WOOD, secondary=(MaterialType.METAL, MaterialType.GLASS)
        )
        lines = secondary_guidance(profile)

        assert "metal, glass" in lines[0]
        assert lines[-1] == "The primary wood remains visually dominant"


# --- Styling vocabulary ---


class TestStyling:
    def test_unknown_tokens_resolve_to_none(self) -> None:
        assert style_profile("baroque") is None
        assert environment_profile(None) is None

    def test_lookups_ignore_case(self) -> None:
        profile = style_profile("Moderne")
        assert profile is not None
        assert profile.aesthetic == "Modern Contemporary"

    def test_output_formats_skip_unknown_and_duplicates(self) -> None:
        formats = output_formats(("print", "fax", "print", "ecommerce"))
        assert [f.key for f in formats] == ["print", "ecommerce"]

    def test_every_format_maps_to_a_preset(self) -> None:
        for fmt in OUTPUT_FORMATS.values():
            assert fmt.preset in set(ContextPreset)

    def test_preset_for_formats(self) -> None:
        assert preset_for_formats(("instagram-story",)) is ContextPreset.SOCIAL_MEDIA_STORY
        assert preset_for_formats(("web-banner", "print")) is ContextPreset.HERO
        assert preset_for_formats(()) is ContextPreset.PACKSHOT
