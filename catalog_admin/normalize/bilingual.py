"""Read-time migration of stored records into the current content schema.

Schema versions:
    v1 (legacy): bilingual fields may be stored as a plain string; hero
        slides carry bilingual ``title``/``subtitle``.
    v2 (current): every bilingual field is a ``{"de", "en"}`` mapping; hero
        slides carry only ``image``, ``link`` and ``order``.

Every function here accepts v1 or v2 input and returns a new v2 object. The
stored record is never touched; it is rewritten only by the next save.
"""

import copy
from typing import Any, Mapping

from loguru import logger

from catalog_admin.models import (
    CATALOG_BILINGUAL_FIELDS,
    PAGE_BILINGUAL_FIELDS,
    About,
    AboutData,
    Article,
    BilingualText,
    CatalogId,
    CatalogSection,
    Feature,
    FeaturesData,
    HeroSliderData,
    HomeSection,
    ImageUrl,
    OpaqueData,
    SectionData,
    SectionId,
    Slide,
    Stat,
    StatsData,
    StaticPage,
    Variant,
)
from catalog_admin.parsers.lengths import parse_lengths

CURRENT_SCHEMA_VERSION = 2

# Slide keys present only in v1 records
LEGACY_SLIDE_KEYS = ("title", "subtitle")


def to_bilingual(value: Any) -> BilingualText:
    """Coerce one stored value into BilingualText.

    Args:
        value: Plain string (v1), ``{"de", "en"}`` mapping (v2), or None

    Returns:
        BilingualText; a plain string is copied into both languages and a
        missing value becomes two empty strings
    """
    if isinstance(value, BilingualText):
        return BilingualText(de=value.de, en=value.en)
    if isinstance(value, str):
        return BilingualText(de=value, en=value)
    if isinstance(value, Mapping):
        return BilingualText(
            de=_as_str(value.get("de")),
            en=_as_str(value.get("en")),
        )
    return BilingualText()


def normalize_bilingual_fields(
    record: Mapping[str, Any], fields: tuple[str, ...]
) -> dict[str, Any]:
    """Return a copy of ``record`` with each named field as a ``{de, en}`` dict.

    Used on raw mappings before they are mapped to model objects; safe to call
    repeatedly on already-normalized data.
    """
    normalized = copy.deepcopy(dict(record))

    for name in fields:
        value = record.get(name)
        if isinstance(value, str):
            logger.debug(f"Migrating legacy string field '{name}' to bilingual")
        normalized[name] = to_bilingual(value).to_dict()

    return normalized


def normalize_catalog_section(raw: Mapping[str, Any]) -> CatalogSection:
    """Build a CatalogSection from a stored catalog record."""
    record = normalize_bilingual_fields(raw, CATALOG_BILINGUAL_FIELDS)

    stored_images = record.get("images")
    if isinstance(stored_images, str) and stored_images:
        logger.warning("Catalog images stored as a plain string, using it as the hero image")
        stored_images = {"hero": stored_images}
    images = dict(_mapping(stored_images, "catalog images"))
    hero = images.pop("hero", "")

    known = set(CATALOG_BILINGUAL_FIELDS) | {"id", "type", "images", "variants", "articles"}
    extra = {k: v for k, v in record.items() if k not in known}
    if images:
        extra["images"] = images

    catalog_id = record.get("id")

    return CatalogSection(
        id=CatalogId(str(catalog_id)) if catalog_id is not None else None,
        name=to_bilingual(record["name"]),
        title=to_bilingual(record["title"]),
        description=to_bilingual(record["description"]),
        sub_description=to_bilingual(record["subDescription"]),
        benefit_bar=to_bilingual(record["benefitBar"]),
        application_area=to_bilingual(record["applicationArea"]),
        type="info" if record.get("type") == "info" else "product",
        hero_image=ImageUrl(_as_str(hero)),
        variants=[normalize_variant(v) for v in _mapping_items(record.get("variants"), "variant")],
        articles=[normalize_article(a) for a in _mapping_items(record.get("articles"), "article")],
        extra=extra,
    )


def normalize_variant(raw: Mapping[str, Any]) -> Variant:
    lengths = raw.get("lengths")
    if isinstance(lengths, str):
        logger.debug("Migrating legacy comma-separated variant lengths")
        lengths = parse_lengths(lengths)
    elif lengths is not None and not isinstance(lengths, list):
        logger.warning(f"Ignoring variant lengths of type {type(lengths).__name__}")
        lengths = []

    return Variant(
        diameter=_as_str(raw.get("diameter")),
        color=_as_str(raw.get("color")),
        hex=_as_str(raw.get("hex")) or "#000000",
        lengths=[_as_str(length) for length in lengths or []],
        box_image=ImageUrl(_as_str(raw.get("boxImage"))),
        implant_image=ImageUrl(_as_str(raw.get("implantImage"))),
    )


def normalize_article(raw: Mapping[str, Any]) -> Article:
    return Article(
        art_nr=_as_str(raw.get("artNr")),
        description=to_bilingual(raw.get("description")),
        category=to_bilingual(raw.get("category")),
        image=ImageUrl(_as_str(raw.get("image"))),
    )


def normalize_home_section(raw: Mapping[str, Any]) -> HomeSection:
    """Build a HomeSection, mapping ``data`` onto the payload for its ``type``."""
    section_type = _as_str(raw.get("type"))
    known = {"section", "type", "isActive", "order", "data"}

    return HomeSection(
        section=SectionId(_as_str(raw.get("section"))),
        type=section_type,
        data=normalize_section_data(section_type, _mapping(raw.get("data"), "section data")),
        is_active=bool(raw.get("isActive", True)),
        order=_as_int(raw.get("order")),
        extra={k: copy.deepcopy(v) for k, v in raw.items() if k not in known},
    )


def normalize_section_data(section_type: str, data: Mapping[str, Any]) -> SectionData:
    """Map a raw ``data`` payload onto the tagged payload class."""
    if section_type == "hero-slider":
        return HeroSliderData(
            slides=[
                normalize_slide(slide, idx)
                for idx, slide in enumerate(_mapping_items(data.get("slides"), "slide"))
            ]
        )
    if section_type == "features":
        return FeaturesData(
            features=[
                Feature(
                    icon=_as_str(item.get("icon")) or "Zap",
                    title=to_bilingual(item.get("title")),
                    content=to_bilingual(item.get("content")),
                )
                for item in _mapping_items(data.get("features"), "feature")
            ]
        )
    if section_type == "stats":
        return StatsData(
            stats=[
                Stat(
                    number=_as_str(item.get("number")),
                    label=to_bilingual(item.get("label")),
                )
                for item in _mapping_items(data.get("stats"), "stat")
            ]
        )
    if section_type == "about":
        about = _mapping(data.get("about"), "about block")
        return AboutData(
            about=About(
                title=to_bilingual(about.get("title")),
                content=to_bilingual(about.get("content")),
                image=ImageUrl(_as_str(about.get("image"))),
                link=_as_str(about.get("link")),
            )
        )

    logger.warning(f"Unknown section type '{section_type}', keeping payload as-is")
    return OpaqueData(raw=copy.deepcopy(dict(data)))


def normalize_slide(raw: Mapping[str, Any], index: int = 0) -> Slide:
    """Migrate one hero slide to the v2 shape (``title``/``subtitle`` dropped)."""
    dropped = [key for key in LEGACY_SLIDE_KEYS if key in raw]
    if dropped:
        logger.debug(f"Dropping legacy slide fields {dropped} from slide #{index + 1}")

    return Slide(
        image=ImageUrl(_as_str(raw.get("image"))),
        link=_as_str(raw.get("link")),
        order=_as_int(raw.get("order"), default=index + 1),
    )


def normalize_static_page(raw: Mapping[str, Any]) -> StaticPage:
    """Build a StaticPage from a stored page record."""
    record = normalize_bilingual_fields(raw, PAGE_BILINGUAL_FIELDS)
    known = set(PAGE_BILINGUAL_FIELDS) | {"page", "data"}

    return StaticPage(
        page=_as_str(record.get("page")),
        title=to_bilingual(record["title"]),
        subtitle=to_bilingual(record["subtitle"]),
        content=to_bilingual(record["content"]),
        data=dict(_mapping(record.get("data"), "page data")),
        extra={k: v for k, v in record.items() if k not in known},
    )


def _mapping(value: Any, what: str) -> Mapping[str, Any]:
    """Return ``value`` if it is a mapping, else an empty one (with a warning)."""
    if isinstance(value, Mapping):
        return value
    if value:
        logger.warning(f"Ignoring {what}: expected an object, got {type(value).__name__}")
    return {}


def _mapping_items(value: Any, what: str) -> list[Mapping[str, Any]]:
    """Keep the mapping items of a stored list, skipping anything else."""
    if not value:
        return []
    if not isinstance(value, list):
        logger.warning(f"Ignoring {what} list: expected a list, got {type(value).__name__}")
        return []

    items = []
    for idx, item in enumerate(value, start=1):
        if isinstance(item, Mapping):
            items.append(item)
        else:
            logger.warning(f"Skipping {what} #{idx}: expected an object, got {type(item).__name__}")
    return items


def _as_str(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
