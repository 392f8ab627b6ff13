"""Save gate for homepage sections.

The store performs no schema validation, so every section is checked here
before it is written. Rules run in a fixed order and the first failure is
reported; items are numbered from 1 in messages.
"""

from typing import Callable, Optional

from catalog_admin.models import (
    AboutData,
    BilingualText,
    FeaturesData,
    HeroSliderData,
    HomeSection,
    SectionData,
    StatsData,
)

LANGUAGE_NAMES = {"de": "German", "en": "English"}


def _missing_language(text: BilingualText) -> Optional[str]:
    """Return the name of the first empty language, if any."""
    for lang in ("de", "en"):
        if not text.get(lang):
            return LANGUAGE_NAMES[lang]
    return None


def _check_bilingual(prefix: str, label: str, text: BilingualText) -> Optional[str]:
    missing = _missing_language(text)
    if missing:
        return f"{prefix} is missing the {missing} {label}"
    return None


def _validate_hero_slider(data: HeroSliderData) -> Optional[str]:
    if not data.slides:
        return "Hero slider needs at least one slide"

    for idx, slide in enumerate(data.slides, start=1):
        if not slide.image:
            return f"Slide #{idx} is missing an image"
    return None


def _validate_features(data: FeaturesData) -> Optional[str]:
    if not data.features:
        return "Features section needs at least one feature"

    for idx, feature in enumerate(data.features, start=1):
        prefix = f"Feature #{idx}"
        error = _check_bilingual(prefix, "title", feature.title) or _check_bilingual(
            prefix, "content", feature.content
        )
        if error:
            return error
    return None


def _validate_stats(data: StatsData) -> Optional[str]:
    if not data.stats:
        return "Stats section needs at least one stat"

    for idx, stat in enumerate(data.stats, start=1):
        prefix = f"Stat #{idx}"
        if not stat.number:
            return f"{prefix} is missing a number"
        error = _check_bilingual(prefix, "label", stat.label)
        if error:
            return error
    return None


def _validate_about(data: AboutData) -> Optional[str]:
    about = data.about
    error = _check_bilingual("About section", "title", about.title) or _check_bilingual(
        "About section", "content", about.content
    )
    if error:
        return error
    if not about.image:
        return "About section is missing an image"
    return None


VALIDATORS: dict[type, Callable[..., Optional[str]]] = {
    HeroSliderData: _validate_hero_slider,
    FeaturesData: _validate_features,
    StatsData: _validate_stats,
    AboutData: _validate_about,
}


def validate_section_data(data: SectionData) -> Optional[str]:
    validator = VALIDATORS.get(type(data))
    if validator is None:
        # Unknown section types have no rules
        return None
    return validator(data)


def validate_home_section(section: HomeSection) -> Optional[str]:
    """Check a section's payload before saving.

    Args:
        section: Normalized home section

    Returns:
        None if the section may be saved, otherwise a human-readable reason
    """
    return validate_section_data(section.data)


def is_valid(section: HomeSection) -> bool:
    return validate_home_section(section) is None
