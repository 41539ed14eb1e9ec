"""Tests for the Constraint Composer."""

from __future__ import annotations

import itertools

import pytest

from furnishot.compose import DROP_ORDER, SECTION_ORDER, compose_prompt
from furnishot.intelligence import classify_product
from furnishot.models import (
    ComposedPrompt,
    ContextPreset,
    GenerationSettings,
    PlacementType,
    ProductIntelligence,
    ProductSpecification,
)
from furnishot.rules.context import CONTEXT_RULES
from furnishot.rules.placement import PLACEMENT_RULES, find_contradictions

# Large enough that no optional section is ever dropped.
UNBOUNDED = 100_000

SETTINGS_VARIANTS = [
    GenerationSettings(),
    GenerationSettings(
        style="moderne",
        environment="salon",
        lighting="naturelle",
        camera_angle="face",
        output_formats=("instagram-post", "web-banner"),
    ),
    GenerationSettings(
        style="boheme",
        environment="studio",
        lighting="chaleureuse",
        camera_angle="plongee",
        approved_props=("plant",),
        text_zone="left",
    ),
]


def _compose(
    spec: ProductSpecification,
    preset: ContextPreset | str,
    settings: GenerationSettings | None = None,
    intelligence: ProductIntelligence | None = None,
    max_length: int = UNBOUNDED,
) -> ComposedPrompt:
    return compose_prompt(
        spec,
        preset,
        settings or GenerationSettings(),
        intelligence or classify_product(spec),
        max_length=max_length,
    )


class TestDeterminism:
    @pytest.mark.parametrize("preset", list(ContextPreset))
    def test_identical_inputs_identical_text(
        self,
        preset: ContextPreset,
        wall_shelf: ProductSpecification,
        complete_settings: GenerationSettings,
    ) -> None:
        first = _compose(wall_shelf, preset, complete_settings)
        second = _compose(wall_shelf, preset, complete_settings)

        assert first.text == second.text
        assert first == second


class TestStructure:
    def test_all_sections_in_fixed_order(self, oak_desk: ProductSpecification) -> None:
        prompt = _compose(oak_desk, ContextPreset.LIFESTYLE)

        assert prompt.section_names == list(SECTION_ORDER)
        assert prompt.dropped == ()

    def test_sections_joined_by_blank_line(self, oak_desk: ProductSpecification) -> None:
        prompt = _compose(oak_desk, ContextPreset.PACKSHOT)
        assert prompt.text == "\n\n".join(s.text for s in prompt.sections)

    def test_unknown_preset_uses_packshot(self, oak_desk: ProductSpecification) -> None:
        prompt = _compose(oak_desk, "billboard")

        assert prompt.context_preset is ContextPreset.PACKSHOT
        assert "STUDIO ISOLATION" in prompt.text

    def test_default_ceiling_holds_for_typical_input(
        self, oak_desk: ProductSpecification, complete_settings: GenerationSettings
    ) -> None:
        prompt = compose_prompt(
            oak_desk, ContextPreset.LIFESTYLE, complete_settings, classify_product(oak_desk)
        )
        assert len(prompt) <= 4000


class TestLengthManagement:
    def test_drops_least_valuable_first(self, oak_desk: ProductSpecification) -> None:
        full = _compose(oak_desk, ContextPreset.HERO)
        trimmed = _compose(oak_desk, ContextPreset.HERO, max_length=len(full) - 1)

        assert trimmed.dropped == ("final_validation",)
        assert trimmed.section_names == [n for n in SECTION_ORDER if n != "final_validation"]
        assert len(trimmed) <= len(full) - 1

    def test_required_sections_never_dropped(self, oak_desk: ProductSpecification) -> None:
        prompt = _compose(oak_desk, ContextPreset.HERO, max_length=1)

        assert prompt.dropped == DROP_ORDER
        assert prompt.section_names == [n for n in SECTION_ORDER if n not in DROP_ORDER]
        assert len(prompt) > 1

    def test_remaining_order_is_preserved(self, oak_desk: ProductSpecification) -> None:
        prompt = _compose(oak_desk, ContextPreset.DETAIL, max_length=1)
        positions = [SECTION_ORDER.index(name) for name in prompt.section_names]
        assert positions == sorted(positions)


class TestDisjointness:
    @pytest.mark.parametrize("settings", SETTINGS_VARIANTS)
    def test_markers_never_leak_between_presets(
        self,
        settings: GenerationSettings,
        oak_desk: ProductSpecification,
        wall_shelf: ProductSpecification,
    ) -> None:
        for spec in (oak_desk, wall_shelf):
            outputs = {p: _compose(spec, p, settings).text.lower() for p in ContextPreset}
            for a, b in itertools.permutations(ContextPreset, 2):
                for marker in CONTEXT_RULES[a].markers:
                    assert marker.lower() not in outputs[b], (a, b, marker)

    @pytest.mark.parametrize("preset", list(ContextPreset))
    def test_own_markers_present(
        self, preset: ContextPreset, oak_desk: ProductSpecification
    ) -> None:
        text = _compose(oak_desk, preset).text.lower()
        for marker in CONTEXT_RULES[preset].markers:
            assert marker.lower() in text


class TestPlacementExhaustiveness:
    @pytest.mark.parametrize(
        ("placement", "preset"), list(itertools.product(PlacementType, ContextPreset))
    )
    def test_mandatory_present_and_no_contradictions(
        self,
        placement: PlacementType,
        preset: ContextPreset,
        oak_desk: ProductSpecification,
        oak_desk_intelligence: ProductIntelligence,
        complete_settings: GenerationSettings,
    ) -> None:
        intelligence = oak_desk_intelligence.model_copy(update={"placement_type": placement})
        text = _compose(oak_desk, preset, complete_settings, intelligence).text

        assert any(phrase in text for phrase in PLACEMENT_RULES[placement].mandatory)
        assert find_contradictions(text, placement) == []


class TestScenarios:
    def test_oak_desk_packshot(
        self, oak_desk: ProductSpecification, complete_settings: GenerationSettings
    ) -> None:
        prompt = compose_prompt(
            oak_desk, ContextPreset.PACKSHOT, complete_settings, classify_product(oak_desk)
        )
        text = prompt.text.lower()

        assert "pure white" in text
        assert "no environmental elements" in text
        assert "lived-in setting" not in text
        assert "contemporary living room" not in text

    def test_wall_shelf_placement(self, wall_shelf: ProductSpecification) -> None:
        intelligence = classify_product(wall_shelf)
        prompt = compose_prompt(
            wall_shelf, ContextPreset.LIFESTYLE, GenerationSettings(), intelligence
        )
        text = prompt.text.lower()

        assert intelligence.placement_type is PlacementType.WALL_MOUNTED
        assert "clearance" in text
        assert "no floor contact" in text
