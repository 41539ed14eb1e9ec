"""Generation pipeline: configuration, settings resolution and the engine."""

from furnishot.pipeline.config import (
    DEFAULT_SETTINGS_DEFAULTS,
    EngineConfig,
    EngineConfigError,
    SettingsDefaults,
    load_engine_config,
)
from furnishot.pipeline.engine import (
    PromptResult,
    generate_prompt,
    generate_prompts_per_format,
    quality_score,
)
from furnishot.pipeline.fallbacks import (
    AppliedFallback,
    SettingsAssessment,
    assess_settings,
    resolve_settings,
)

__all__ = [
    "DEFAULT_SETTINGS_DEFAULTS",
    "AppliedFallback",
    "EngineConfig",
    "EngineConfigError",
    "PromptResult",
    "SettingsAssessment",
    "SettingsDefaults",
    "assess_settings",
    "generate_prompt",
    "generate_prompts_per_format",
    "load_engine_config",
    "quality_score",
    "resolve_settings",
]
