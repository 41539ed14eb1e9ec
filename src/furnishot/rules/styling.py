"""Dashboard styling vocabulary.

Translates the dashboard's setting tokens (``moderne``, ``salon``,
``naturelle``, ``trois-quarts``, ``instagram-post`` ...) into photography
language. Lookups are total: unknown tokens return None and the dependent
clause is omitted by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass

from furnishot.models.prompt import ContextPreset


@dataclass(frozen=True)
class StyleProfile:
    aesthetic: str
    description: str
    materials_focus: str


@dataclass(frozen=True)
class EnvironmentProfile:
    setting: str
    description: str
    props: str
    atmosphere: str
    architecture: str = "walls, flooring and windows"
    staged: bool = True


@dataclass(frozen=True)
class LightingProfile:
    setup: str
    technical: str
    mood: str


@dataclass(frozen=True)
class AngleProfile:
    position: str
    technical: str


@dataclass(frozen=True)
class OutputFormat:
    """Delivery format and the context preset that suits it best."""

    key: str
    dimensions: str
    aspect_ratio: str
    optimization: str
    preset: ContextPreset


STYLE_PROFILES: dict[str, StyleProfile] = {
    "moderne": StyleProfile(
        aesthetic="Modern Contemporary",
        description="Clean lines, geometric forms, sophisticated neutral palette",
        materials_focus="sleek surfaces, crisp edges and precise joinery",
    ),
    "rustique": StyleProfile(
        aesthetic="Rustic Farmhouse",
        description="Natural textures, weathered finishes, warm earth tones",
        materials_focus="wood grain, natural imperfections and authentic patina",
    ),
    "industriel": StyleProfile(
        aesthetic="Industrial Loft",
        description="Raw materials, urban edge, concrete and metal fusion",
        materials_focus="metal patina, concrete textures and industrial hardware",
    ),
    "scandinave": StyleProfile(
        aesthetic="Scandinavian Minimalism",
        description="Nordic simplicity, light woods, functional design",
        materials_focus="light wood tones, natural textiles and simple forms",
    ),
    "boheme": StyleProfile(
        aesthetic="Bohemian Eclectic",
        description="Artistic layering, rich textures, global influences",
        materials_focus="rich fabrics, carved details and artisanal quality",
    ),
}

ENVIRONMENT_PROFILES: dict[str, EnvironmentProfile] = {
    "salon": EnvironmentProfile(
        setting="Contemporary Living Room",
        description="Sophisticated residential living space with a considered furniture layout",
        props="a few neutral accents kept secondary to the product",
        atmosphere="welcoming yet refined",
    ),
    "bureau": EnvironmentProfile(
        setting="Professional Office",
        description="Modern workspace designed around ergonomic principles",
        props="clean architectural lines kept secondary to the product",
        atmosphere="productive, clean and focused",
    ),
    "cuisine": EnvironmentProfile(
        setting="Designer Kitchen",
        description="High-end residential kitchen with premium finishes",
        props="counter surfaces and window light kept secondary to the product",
        atmosphere="clean, functional luxury",
    ),
    "chambre": EnvironmentProfile(
        setting="Calm Bedroom Suite",
        description="Serene bedroom with premium bedding and intimate lighting",
        props="soft neutral tones kept secondary to the product",
        atmosphere="restful and intimate",
    ),
    "terrasse": EnvironmentProfile(
        setting="Garden Terrace",
        description="Landscaped outdoor terrace in open daylight",
        props="stone paving and open sky kept secondary to the product",
        atmosphere="relaxed, airy and sunlit",
        architecture="paving, low garden walls and open sky",
    ),
    "studio": EnvironmentProfile(
        setting="Photo Studio",
        description="Commercial photography environment with a neutral backdrop",
        props="no environmental props",
        atmosphere="catalog quality with zero distractions",
        staged=False,
    ),
}

LIGHTING_PROFILES: dict[str, LightingProfile] = {
    "naturelle": LightingProfile(
        setup="Natural Daylight",
        technical="soft window light, 5000K-5500K, gentle natural shadow patterns",
        mood="fresh and true to life",
    ),
    "chaleureuse": LightingProfile(
        setup="Warm Ambient",
        technical="2700K-3000K warm white from several soft sources",
        mood="inviting warm glow with intimate shadow detail",
    ),
    "professionnelle": LightingProfile(
        setup="Commercial Studio",
        technical="three-point setup, 5600K daylight balance, controlled shadows",
        mood="clean and commercial",
    ),
}

ANGLE_PROFILES: dict[str, AngleProfile] = {
    "face": AngleProfile(
        position="Frontal View",
        technical="head-on perspective at eye level, symmetrical composition",
    ),
    "trois-quarts": AngleProfile(
        position="Three-Quarter Angle",
        technical="45-degree offset showing depth and dimensionality",
    ),
    "profile": AngleProfile(
        position="Side Profile",
        technical="90-degree side angle emphasizing silhouette and proportions",
    ),
    "plongee": AngleProfile(
        position="Elevated Top-Down View",
        technical="overhead angle showing surface details and layout",
    ),
}

OUTPUT_FORMATS: dict[str, OutputFormat] = {
    "instagram-post": OutputFormat(
        key="instagram-post",
        dimensions="1080x1080px",
        aspect_ratio="1:1",
        optimization="square feed post",
        preset=ContextPreset.SOCIAL_MEDIA_SQUARE,
    ),
    "instagram-story": OutputFormat(
        key="instagram-story",
        dimensions="1080x1920px",
        aspect_ratio="9:16",
        optimization="full-screen vertical post",
        preset=ContextPreset.SOCIAL_MEDIA_STORY,
    ),
    "facebook": OutputFormat(
        key="facebook",
        dimensions="1200x630px",
        aspect_ratio="1.91:1",
        optimization="link preview and ad placement",
        preset=ContextPreset.SOCIAL_MEDIA_SQUARE,
    ),
    "ecommerce": OutputFormat(
        key="ecommerce",
        dimensions="1000x1000px",
        aspect_ratio="1:1",
        optimization="online product listing",
        preset=ContextPreset.PACKSHOT,
    ),
    "print": OutputFormat(
        key="print",
        dimensions="2480x3508px",
        aspect_ratio="A4",
        optimization="brochure and catalog print at 300dpi",
        preset=ContextPreset.LIFESTYLE,
    ),
    "web-banner": OutputFormat(
        key="web-banner",
        dimensions="728x90px",
        aspect_ratio="728:90",
        optimization="website header strip",
        preset=ContextPreset.HERO,
    ),
}


def style_profile(token: str | None) -> StyleProfile | None:
    return STYLE_PROFILES.get(token.lower()) if token else None


def environment_profile(token: str | None) -> EnvironmentProfile | None:
    return ENVIRONMENT_PROFILES.get(token.lower()) if token else None


def lighting_profile(token: str | None) -> LightingProfile | None:
    return LIGHTING_PROFILES.get(token.lower()) if token else None


def angle_profile(token: str | None) -> AngleProfile | None:
    return ANGLE_PROFILES.get(token.lower()) if token else None


def output_formats(tokens: tuple[str, ...]) -> list[OutputFormat]:
    """Known formats among ``tokens``, in the given order, without duplicates."""
    seen: dict[str, OutputFormat] = {}
    for token in tokens:
        fmt = OUTPUT_FORMATS.get(token.lower())
        if fmt is not None and fmt.key not in seen:
            seen[fmt.key] = fmt
    return list(seen.values())


def preset_for_formats(tokens: tuple[str, ...]) -> ContextPreset:
    """Context preset implied by the first known output format.

    Falls back to ``packshot`` when no format is recognised.
    """
    formats = output_formats(tokens)
    return formats[0].preset if formats else ContextPreset.PACKSHOT
