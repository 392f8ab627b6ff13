"""Static page use cases."""

from typing import Any

from loguru import logger

from catalog_admin.api.client import StoreClient
from catalog_admin.models import PAGE_SLUGS, BilingualText, StaticPage
from catalog_admin.normalize.bilingual import normalize_static_page

COLLECTION = "static-pages"

CONTACT_FIELDS = ("email", "phone", "address")


class PageService:
    """Reads and writes the ``static-pages`` collection."""

    def __init__(self, client: StoreClient):
        self.client = client

    def list_pages(self) -> list[StaticPage]:
        """Fetch every editable page in fixed order.

        Pages the store does not have yet are returned as unsaved placeholders
        titled with their upper-cased slug.
        """
        data = self.client.get(COLLECTION).raise_for_failure() or []
        stored = {}
        for record in data:
            page = normalize_static_page(record)
            if page.page not in PAGE_SLUGS:
                logger.warning(f"Ignoring unknown static page '{page.page}'")
                continue
            stored[page.page] = page

        return [stored.get(slug) or placeholder_page(slug) for slug in PAGE_SLUGS]

    def get_page(self, slug: str) -> StaticPage:
        _check_slug(slug)
        for page in self.list_pages():
            if page.page == slug:
                return page
        return placeholder_page(slug)

    def save_page(self, page: StaticPage) -> None:
        """Overwrite the stored page document.

        Raises:
            ValueError: If the slug is not one of the editable pages
            CatalogAdminError: If the request fails
        """
        _check_slug(page.page)
        self.client.post(f"{COLLECTION}/{page.page}", page.to_dict()).raise_for_failure()
        logger.success(f"Page '{page.page}' saved")


def placeholder_page(slug: str) -> StaticPage:
    return StaticPage(page=slug, title=BilingualText(de=slug.upper(), en=""))


def set_page_field(page: StaticPage, field_name: str, lang: str, value: str) -> None:
    if field_name not in ("title", "subtitle", "content"):
        raise ValueError(f"Unknown page field: {field_name}")
    getattr(page, field_name).set(lang, value)


def set_data_field(page: StaticPage, key: str, value: Any) -> None:
    """Set a page-specific extra field (e.g. contact ``email``)."""
    if page.page == "contact" and key not in CONTACT_FIELDS:
        logger.warning(f"'{key}' is not a standard contact field")
    page.data[key] = value


def _check_slug(slug: str) -> None:
    if slug not in PAGE_SLUGS:
        raise ValueError(f"Unknown page: {slug}. Available: {', '.join(PAGE_SLUGS)}")
