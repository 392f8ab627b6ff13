"""Homepage section type registry.

Maps a section ``type`` tag to the factory for its empty payload. Only used
when a new section is created client-side; loaded sections carry their own
data. Adding a section type only requires adding an entry here and a rule set
in the validator.
"""

from typing import Any, Callable

from catalog_admin.models import (
    AboutData,
    FeaturesData,
    HeroSliderData,
    SectionData,
    StatsData,
)

SECTION_REGISTRY: dict[str, Callable[[], SectionData]] = {
    "hero-slider": HeroSliderData,
    "features": FeaturesData,
    "stats": StatsData,
    "about": AboutData,
}


def get_default_data(section_type: str) -> dict[str, Any]:
    """Get the default empty ``data`` payload for a section type.

    Args:
        section_type: Section type tag (e.g., 'hero-slider')

    Returns:
        Default payload as a wire mapping, or an empty dict for unknown types
    """
    factory = SECTION_REGISTRY.get(section_type)
    if factory is None:
        return {}

    return factory().to_dict()


def create_default_payload(section_type: str) -> SectionData | None:
    """Typed counterpart of ``get_default_data``; None for unknown types."""
    factory = SECTION_REGISTRY.get(section_type)
    return factory() if factory else None


def get_available_section_types() -> list[str]:
    """Get list of section types that can be created."""
    return list(SECTION_REGISTRY.keys())
