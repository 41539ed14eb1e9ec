"""Engine configuration loading.

The configuration is an immutable value built once and passed down to the
resolver and composer; nothing here is process-wide mutable state.

Resolution order for each setting:
1. Environment variable (``FURNISHOT_MAX_PROMPT_LENGTH``,
   ``FURNISHOT_QUALITY_LEVEL``)
2. YAML config file
3. Built-in default
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path  # noqa: TC003 - used at runtime
from types import MappingProxyType
from typing import Any

from ruamel.yaml import YAML

from furnishot.models.product import ProductCategory
from furnishot.models.prompt import DEFAULT_MAX_PROMPT_LENGTH, QualityLevel

ENV_MAX_PROMPT_LENGTH = "FURNISHOT_MAX_PROMPT_LENGTH"
ENV_QUALITY_LEVEL = "FURNISHOT_QUALITY_LEVEL"


def _frozen(mapping: dict[str, str]) -> MappingProxyType[str, str]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class SettingsDefaults:
    """Lookup tables used to fill unset generation settings.

    Attributes:
        style_by_category: Style token per product category value.
        environment_by_category: Environment token per product category value.
        lighting_by_environment: Lighting token per environment token.
        style: Style when the category has no entry.
        environment: Environment when the category has no entry.
        lighting: Lighting when the environment has no entry.
        camera_angle: Default camera angle token.
        output_formats: Default output format tokens.
    """

    style_by_category: MappingProxyType[str, str] = field(
        default_factory=lambda: _frozen(
            {
                ProductCategory.WORKSTATIONS.value: "moderne",
                ProductCategory.DECOR.value: "boheme",
            }
        )
    )
    environment_by_category: MappingProxyType[str, str] = field(
        default_factory=lambda: _frozen(
            {
                ProductCategory.SEATING.value: "salon",
                ProductCategory.TABLES.value: "salon",
                ProductCategory.DECOR.value: "salon",
                ProductCategory.LIGHTING.value: "salon",
                ProductCategory.BEDS.value: "chambre",
                ProductCategory.STORAGE.value: "chambre",
                ProductCategory.TEXTILES.value: "chambre",
                ProductCategory.WORKSTATIONS.value: "bureau",
                ProductCategory.OUTDOOR.value: "terrasse",
                ProductCategory.UNKNOWN.value: "studio",
            }
        )
    )
    lighting_by_environment: MappingProxyType[str, str] = field(
        default_factory=lambda: _frozen(
            {
                "studio": "professionnelle",
                "bureau": "professionnelle",
                "salon": "naturelle",
                "cuisine": "naturelle",
                "chambre": "chaleureuse",
                "terrasse": "naturelle",
            }
        )
    )
    style: str = "moderne"
    environment: str = "studio"
    lighting: str = "naturelle"
    camera_angle: str = "trois-quarts"
    output_formats: tuple[str, ...] = ("ecommerce",)

    def style_for(self, category: ProductCategory) -> str:
        return self.style_by_category.get(category.value, self.style)

    def environment_for(self, category: ProductCategory) -> str:
        return self.environment_by_category.get(category.value, self.environment)

    def lighting_for(self, environment: str) -> str:
        return self.lighting_by_environment.get(environment.lower(), self.lighting)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SettingsDefaults:
        """Create defaults from a dictionary, merging tables over the built-ins.

        Args:
            data: Dictionary with any of the attribute names as keys.

        Returns:
            SettingsDefaults instance.
        """
        base = cls()
        formats = data.get("output_formats", base.output_formats)
        if isinstance(formats, str):
            formats = (formats,)
        return cls(
            style_by_category=_frozen(
                {**base.style_by_category, **dict(data.get("style_by_category", {}))}
            ),
            environment_by_category=_frozen(
                {**base.environment_by_category, **dict(data.get("environment_by_category", {}))}
            ),
            lighting_by_environment=_frozen(
                {**base.lighting_by_environment, **dict(data.get("lighting_by_environment", {}))}
            ),
            style=str(data.get("style", base.style)),
            environment=str(data.get("environment", base.environment)),
            lighting=str(data.get("lighting", base.lighting)),
            camera_angle=str(data.get("camera_angle", base.camera_angle)),
            output_formats=tuple(str(f) for f in formats),
        )


DEFAULT_SETTINGS_DEFAULTS = SettingsDefaults()


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for prompt generation.

    Attributes:
        max_prompt_length: Length ceiling for composed prompts.
        quality_level: Production tier.
        strict_mode: Enables placement-consistency and context-marker checks
            in validation.
        settings_defaults: Tables for the settings fallback resolver.
    """

    max_prompt_length: int = DEFAULT_MAX_PROMPT_LENGTH
    quality_level: QualityLevel = QualityLevel.ENTERPRISE
    strict_mode: bool = True
    settings_defaults: SettingsDefaults = DEFAULT_SETTINGS_DEFAULTS

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> EngineConfig:
        """Create config from dictionary.

        Raises:
            ValueError: If a value is out of range or not recognised.
        """
        max_length = _parse_max_length(data.get("max_prompt_length", DEFAULT_MAX_PROMPT_LENGTH))
        quality = _parse_quality(data.get("quality_level", QualityLevel.ENTERPRISE.value))
        return cls(
            max_prompt_length=max_length,
            quality_level=quality,
            strict_mode=_parse_strict_mode(data.get("strict_mode", True)),
            settings_defaults=SettingsDefaults.from_dict(dict(data.get("defaults", {}))),
        )

    def with_env_overrides(self) -> EngineConfig:
        """Apply ``FURNISHOT_*`` environment variables.

        Raises:
            ValueError: If an environment value is invalid.
        """
        config = self
        raw_length = os.getenv(ENV_MAX_PROMPT_LENGTH)
        if raw_length:
            config = replace(config, max_prompt_length=_parse_max_length(raw_length))
        raw_quality = os.getenv(ENV_QUALITY_LEVEL)
        if raw_quality:
            config = replace(config, quality_level=_parse_quality(raw_quality))
        return config


def _parse_max_length(value: Any) -> int:
    try:
        length = int(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"max_prompt_length must be an integer, got {value!r}") from e
    if length <= 0:
        raise ValueError(f"max_prompt_length must be positive, got {length}")
    return length


def _parse_strict_mode(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"strict_mode must be true or false, got {value!r}")
    return value


def _parse_quality(value: Any) -> QualityLevel:
    try:
        return QualityLevel(str(value).strip().lower())
    except ValueError as e:
        choices = ", ".join(q.value for q in QualityLevel)
        raise ValueError(f"quality_level must be one of {choices}, got {value!r}") from e


class EngineConfigError(Exception):
    """Raised when engine configuration cannot be loaded."""

    def __init__(self, path: Path | None, reason: str) -> None:
        self.path = path
        self.reason = reason
        where = f" at {path}" if path is not None else ""
        super().__init__(f"Failed to load engine config{where}: {reason}")


def load_engine_config(config_path: Path | None = None) -> EngineConfig:
    """Load engine configuration from a YAML file and the environment.

    Args:
        config_path: Optional YAML file. Without it only the built-in
            defaults and environment overrides apply.

    Returns:
        EngineConfig instance.

    Raises:
        EngineConfigError: If the file or an override is invalid.
    """
    config = EngineConfig()
    if config_path is not None:
        if not config_path.exists():
            raise EngineConfigError(config_path, "File not found")

        yaml = YAML()
        try:
            with config_path.open("r", encoding="utf-8") as f:
                data = yaml.load(f)

            if data is None:
                raise EngineConfigError(config_path, "Empty file")

            config = EngineConfig.from_dict(dict(data))
        except Exception as e:
            if isinstance(e, EngineConfigError):
                raise
            raise EngineConfigError(config_path, str(e)) from e

    try:
        return config.with_env_overrides()
    except ValueError as e:
        raise EngineConfigError(config_path, str(e)) from e
