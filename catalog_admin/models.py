"""Data model for catalog sections, homepage sections and static pages.

Records arrive from the store as plain JSON mappings. The classes here are the
normalized, in-memory shape that the editor works on; ``to_dict`` turns them
back into the wire document that is written on save.
"""

from dataclasses import dataclass, field
from typing import Any, Literal, NewType, Union

# Branded types for ids and URLs
CatalogId = NewType("CatalogId", str)
SectionId = NewType("SectionId", str)
ImageUrl = NewType("ImageUrl", str)

Language = Literal["de", "en"]
LANGUAGES: tuple[Language, ...] = ("de", "en")

CatalogType = Literal["product", "info"]
SectionType = Literal["hero-slider", "features", "stats", "about"]
PageSlug = Literal["about", "contact", "impressum", "datenschutz", "agb"]

SECTION_TYPES: tuple[str, ...] = ("hero-slider", "features", "stats", "about")
PAGE_SLUGS: tuple[str, ...] = ("about", "contact", "impressum", "datenschutz", "agb")

CATALOG_BILINGUAL_FIELDS: tuple[str, ...] = (
    "name",
    "title",
    "description",
    "subDescription",
    "benefitBar",
    "applicationArea",
)
PAGE_BILINGUAL_FIELDS: tuple[str, ...] = ("title", "subtitle", "content")


@dataclass
class BilingualText:
    """Parallel German/English text."""

    de: str = ""
    en: str = ""

    def get(self, lang: Language) -> str:
        if lang not in LANGUAGES:
            raise ValueError(f"Unsupported language: {lang}")
        return getattr(self, lang)

    def set(self, lang: Language, value: str) -> None:
        if lang not in LANGUAGES:
            raise ValueError(f"Unsupported language: {lang}")
        setattr(self, lang, value)

    def display(self) -> str:
        """German text, falling back to English."""
        return self.de or self.en

    def to_dict(self) -> dict[str, str]:
        return {"de": self.de, "en": self.en}


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


@dataclass
class Variant:
    """One purchasable configuration of a catalog product."""

    diameter: str = ""
    color: str = ""
    hex: str = "#000000"
    lengths: list[str] = field(default_factory=list)
    box_image: ImageUrl = ImageUrl("")
    implant_image: ImageUrl = ImageUrl("")

    def to_dict(self) -> dict[str, Any]:
        return {
            "diameter": self.diameter,
            "color": self.color,
            "hex": self.hex,
            "lengths": list(self.lengths),
            "boxImage": self.box_image,
            "implantImage": self.implant_image,
        }


@dataclass
class Article:
    """Orderable article listed under a catalog section."""

    art_nr: str = ""
    description: BilingualText = field(default_factory=BilingualText)
    category: BilingualText = field(default_factory=BilingualText)
    image: ImageUrl = ImageUrl("")

    def to_dict(self) -> dict[str, Any]:
        return {
            "artNr": self.art_nr,
            "description": self.description.to_dict(),
            "category": self.category.to_dict(),
            "image": self.image,
        }


@dataclass
class CatalogSection:
    """One product-catalog entry.

    ``extra`` holds keys the store sent that this model does not edit, so a
    full-document overwrite writes them back unchanged.
    """

    id: CatalogId | None = None
    name: BilingualText = field(default_factory=BilingualText)
    title: BilingualText = field(default_factory=BilingualText)
    description: BilingualText = field(default_factory=BilingualText)
    sub_description: BilingualText = field(default_factory=BilingualText)
    benefit_bar: BilingualText = field(default_factory=BilingualText)
    application_area: BilingualText = field(default_factory=BilingualText)
    type: CatalogType = "product"
    hero_image: ImageUrl = ImageUrl("")
    variants: list[Variant] = field(default_factory=list)
    articles: list[Article] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.name.display()

    def to_dict(self) -> dict[str, Any]:
        doc: dict[str, Any] = dict(self.extra)
        if self.id is not None:
            doc["id"] = self.id
        doc.update(
            {
                "name": self.name.to_dict(),
                "title": self.title.to_dict(),
                "description": self.description.to_dict(),
                "subDescription": self.sub_description.to_dict(),
                "benefitBar": self.benefit_bar.to_dict(),
                "applicationArea": self.application_area.to_dict(),
                "type": self.type,
                "images": {**doc.get("images", {}), "hero": self.hero_image},
                "variants": [v.to_dict() for v in self.variants],
                "articles": [a.to_dict() for a in self.articles],
            }
        )
        return doc


# ---------------------------------------------------------------------------
# Homepage sections
# ---------------------------------------------------------------------------


@dataclass
class Slide:
    image: ImageUrl = ImageUrl("")
    link: str = ""
    order: int = 1

    def to_dict(self) -> dict[str, Any]:
        return {"image": self.image, "link": self.link, "order": self.order}


@dataclass
class Feature:
    icon: str = "Zap"
    title: BilingualText = field(default_factory=BilingualText)
    content: BilingualText = field(default_factory=BilingualText)

    def to_dict(self) -> dict[str, Any]:
        return {
            "icon": self.icon,
            "title": self.title.to_dict(),
            "content": self.content.to_dict(),
        }


@dataclass
class Stat:
    number: str = "0"
    label: BilingualText = field(default_factory=BilingualText)

    def to_dict(self) -> dict[str, Any]:
        return {"number": self.number, "label": self.label.to_dict()}


@dataclass
class About:
    title: BilingualText = field(default_factory=BilingualText)
    content: BilingualText = field(default_factory=BilingualText)
    image: ImageUrl = ImageUrl("")
    link: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title.to_dict(),
            "content": self.content.to_dict(),
            "image": self.image,
            "link": self.link,
        }


@dataclass
class HeroSliderData:
    slides: list[Slide] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"slides": [s.to_dict() for s in self.slides]}


@dataclass
class FeaturesData:
    features: list[Feature] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"features": [f.to_dict() for f in self.features]}


@dataclass
class StatsData:
    stats: list[Stat] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {"stats": [s.to_dict() for s in self.stats]}


@dataclass
class AboutData:
    about: About = field(default_factory=About)

    def to_dict(self) -> dict[str, Any]:
        return {"about": self.about.to_dict()}


@dataclass
class OpaqueData:
    """Payload of a section type this client does not know; written back as-is."""

    raw: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return dict(self.raw)


SectionData = Union[HeroSliderData, FeaturesData, StatsData, AboutData, OpaqueData]


@dataclass
class HomeSection:
    """A typed, independently orderable block of the homepage."""

    section: SectionId
    type: str
    data: SectionData
    is_active: bool = True
    order: int = 1
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        doc: dict[str, Any] = dict(self.extra)
        doc.update(
            {
                "section": self.section,
                "type": self.type,
                "isActive": self.is_active,
                "order": self.order,
                "data": self.data.to_dict(),
            }
        )
        return doc


# ---------------------------------------------------------------------------
# Static pages
# ---------------------------------------------------------------------------


@dataclass
class StaticPage:
    """Informational page (about, contact, legal pages)."""

    page: str
    title: BilingualText = field(default_factory=BilingualText)
    subtitle: BilingualText = field(default_factory=BilingualText)
    content: BilingualText = field(default_factory=BilingualText)
    data: dict[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        doc: dict[str, Any] = dict(self.extra)
        doc.update(
            {
                "page": self.page,
                "title": self.title.to_dict(),
                "subtitle": self.subtitle.to_dict(),
                "content": self.content.to_dict(),
                "data": dict(self.data),
            }
        )
        return doc
