"""Catalog section use cases: list, load, edit and save.

Catalog records are always normalized on load, so a save writes the fully
bilingual document back and legacy strings never reappear.
"""

from loguru import logger

from catalog_admin.api.client import StoreClient
from catalog_admin.models import (
    CATALOG_BILINGUAL_FIELDS,
    Article,
    CatalogSection,
    Language,
    Variant,
)
from catalog_admin.normalize.bilingual import normalize_catalog_section
from catalog_admin.parsers.lengths import parse_lengths

COLLECTION = "catalog-sections"

# Wire field name -> CatalogSection attribute
BILINGUAL_ATTRIBUTES = {
    "name": "name",
    "title": "title",
    "description": "description",
    "subDescription": "sub_description",
    "benefitBar": "benefit_bar",
    "applicationArea": "application_area",
}


class CatalogService:
    """Reads and writes the ``catalog-sections`` collection."""

    def __init__(self, client: StoreClient):
        self.client = client

    def list_catalogs(self) -> list[CatalogSection]:
        """Fetch all catalog sections, normalized.

        Raises:
            CatalogAdminError: If the request fails
        """
        data = self.client.get(COLLECTION).raise_for_failure() or []
        catalogs = [normalize_catalog_section(record) for record in data]
        logger.info(f"Loaded {len(catalogs)} catalog sections")
        return catalogs

    def get_catalog(self, catalog_id: str) -> CatalogSection:
        """Fetch one catalog section by id, normalized.

        Raises:
            CatalogAdminError: If the request fails
        """
        data = self.client.get(f"{COLLECTION}/{catalog_id}").raise_for_failure()
        catalog = normalize_catalog_section(data or {})
        if catalog.id is None:
            catalog.id = catalog_id
        return catalog

    def save_catalog(self, catalog: CatalogSection) -> None:
        """Overwrite the stored document with ``catalog``.

        Raises:
            ValueError: If the catalog has no id
            CatalogAdminError: If the request fails
        """
        if not catalog.id:
            raise ValueError("Cannot save a catalog section without an id")

        self.client.put(f"{COLLECTION}/{catalog.id}", catalog.to_dict()).raise_for_failure()
        logger.success(f"Saved catalog section {catalog.id} ({catalog.display_name})")


# ---------------------------------------------------------------------------
# Draft edits
# ---------------------------------------------------------------------------


def set_bilingual_field(
    catalog: CatalogSection, field_name: str, lang: Language, value: str
) -> None:
    """Set one language of a bilingual catalog field (wire name, e.g. 'benefitBar')."""
    if field_name not in CATALOG_BILINGUAL_FIELDS:
        raise ValueError(
            f"Unknown bilingual field: {field_name}. "
            f"Available: {', '.join(CATALOG_BILINGUAL_FIELDS)}"
        )
    getattr(catalog, BILINGUAL_ATTRIBUTES[field_name]).set(lang, value)


def add_variant(catalog: CatalogSection) -> Variant:
    variant = Variant()
    catalog.variants.append(variant)
    return variant


def remove_variant(catalog: CatalogSection, index: int) -> Variant:
    return catalog.variants.pop(index)


def set_variant_lengths(catalog: CatalogSection, index: int, text: str) -> list[str]:
    """Replace a variant's lengths from comma-separated input."""
    lengths = parse_lengths(text)
    catalog.variants[index].lengths = lengths
    return lengths


def add_article(catalog: CatalogSection) -> Article:
    article = Article()
    catalog.articles.append(article)
    return article


def remove_article(catalog: CatalogSection, index: int) -> Article:
    return catalog.articles.pop(index)
