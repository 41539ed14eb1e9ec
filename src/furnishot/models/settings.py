"""Generation settings chosen in the dashboard.

Settings may arrive partial. Unset fields are ``None`` (or an empty tuple
for ``output_formats``) and are completed by
:func:`furnishot.pipeline.fallbacks.resolve_settings`.

Token values (``salon``, ``trois-quarts``, ``instagram-post`` ...) are the
dashboard vocabulary; see :mod:`furnishot.rules.styling` for their
photography translations.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

TextZone = Literal["left", "right", "top", "bottom"]

RESOLVABLE_FIELDS: tuple[str, ...] = (
    "style",
    "environment",
    "lighting",
    "camera_angle",
    "output_formats",
)


class GenerationSettings(BaseModel):
    """User-selected generation settings."""

    model_config = ConfigDict(frozen=True)

    style: str | None = Field(default=None, description="moderne, rustique, industriel, ...")
    environment: str | None = Field(default=None, description="salon, bureau, cuisine, ...")
    lighting: str | None = Field(default=None, description="naturelle, chaleureuse, ...")
    camera_angle: str | None = Field(default=None, description="face, trois-quarts, ...")
    output_formats: tuple[str, ...] = Field(default=(), description="instagram-post, ...")
    custom_instructions: str | None = None
    approved_props: tuple[str, ...] = Field(
        default=(),
        description="Props explicitly allowed in the scene (plant, lamp, rug ...)",
    )
    text_zone: TextZone | None = Field(
        default=None,
        description="Area kept free for text overlay (hero and story contexts)",
    )

    @property
    def missing_fields(self) -> list[str]:
        """Resolvable fields that are still unset, in resolution order."""
        return [name for name in RESOLVABLE_FIELDS if not getattr(self, name)]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields
