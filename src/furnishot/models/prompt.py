"""Composed prompt types.

A ``ComposedPrompt`` is an ordered tuple of named ``PromptSection`` values.
Its text is the sections joined by a blank line; the section order is fixed
by :data:`furnishot.compose.sections.SECTION_ORDER`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum


class ContextPreset(StrEnum):
    """Target use-case of the generated image."""

    PACKSHOT = "packshot"
    LIFESTYLE = "lifestyle"
    SOCIAL_MEDIA_SQUARE = "social_media_square"
    SOCIAL_MEDIA_STORY = "social_media_story"
    HERO = "hero"
    DETAIL = "detail"


class QualityLevel(StrEnum):
    """Production quality tier; higher tiers add constraints."""

    ENTERPRISE = "enterprise"
    COMMERCIAL = "commercial"
    STANDARD = "standard"


SECTION_SEPARATOR = "\n\n"
DEFAULT_MAX_PROMPT_LENGTH = 4000


@dataclass(frozen=True)
class PromptSection:
    """One labeled block of the composed prompt."""

    name: str
    text: str


@dataclass(frozen=True)
class ComposedPrompt:
    """Ordered prompt sections for one composition request.

    Attributes:
        context_preset: Preset the prompt was composed for.
        sections: Sections kept in the final text, in fixed order.
        dropped: Names of optional sections removed to respect the length
            ceiling.
        max_length: Ceiling the composition was built against.
    """

    context_preset: ContextPreset
    sections: tuple[PromptSection, ...]
    dropped: tuple[str, ...] = ()
    max_length: int = DEFAULT_MAX_PROMPT_LENGTH
    _text: str = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        joined = SECTION_SEPARATOR.join(s.text.strip() for s in self.sections if s.text.strip())
        object.__setattr__(self, "_text", joined)

    @property
    def text(self) -> str:
        return self._text

    @property
    def section_names(self) -> list[str]:
        return [s.name for s in self.sections]

    def section(self, name: str) -> PromptSection | None:
        """Return the section called ``name`` or None if absent."""
        return next((s for s in self.sections if s.name == name), None)

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text
