"""Homepage section use cases.

Every write goes through the validator first. Reordering swaps the ``order``
of two neighbours, writes both concurrently and then re-reads the list, so
the displayed order always comes from the store.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from loguru import logger

from catalog_admin.api.client import ApiResult, StoreClient
from catalog_admin.errors import SectionValidationError
from catalog_admin.models import HomeSection, OpaqueData, SectionId
from catalog_admin.normalize.bilingual import normalize_home_section
from catalog_admin.sections.registry import create_default_payload
from catalog_admin.sections.validator import validate_home_section

COLLECTION = "home"


@dataclass
class ReorderResult:
    """Sections as re-read from the store after a move, plus failed writes."""

    sections: list[HomeSection]
    failures: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.failures


class HomeService:
    """Reads and writes the ``home`` collection."""

    def __init__(self, client: StoreClient):
        self.client = client

    def list_sections(self) -> list[HomeSection]:
        """Fetch all sections in display order.

        Raises:
            CatalogAdminError: If the request fails
        """
        data = self.client.get(COLLECTION).raise_for_failure() or []
        sections = [normalize_home_section(record) for record in data]
        # The store sorts already; a stable sort keeps its tie order
        sections.sort(key=lambda s: s.order)
        return sections

    def get_section(self, section_id: str) -> HomeSection:
        """Find one section by id in the current list.

        Raises:
            KeyError: If no section has this id
        """
        for section in self.list_sections():
            if section.section == section_id:
                return section
        raise KeyError(f"Home section not found: {section_id}")

    def save_section(self, section: HomeSection) -> None:
        """Validate and write one section.

        Raises:
            SectionValidationError: If the payload fails validation (nothing is sent)
            CatalogAdminError: If the request fails
        """
        self._validate(section)
        self.client.post(f"{COLLECTION}/{section.section}", section.to_dict()).raise_for_failure()
        logger.success(f"Section '{section.section}' saved")

    def delete_section(self, section_id: str) -> None:
        self.client.delete(f"{COLLECTION}/{section_id}").raise_for_failure()
        logger.info(f"Section '{section_id}' deleted")

    def toggle_active(self, section: HomeSection) -> HomeSection:
        """Flip visibility and save immediately.

        The flag is restored if the save fails so the draft matches the store.
        """
        section.is_active = not section.is_active
        try:
            self.save_section(section)
        except Exception:
            section.is_active = not section.is_active
            raise
        return section

    def move_section(
        self, sections: list[HomeSection], index: int, direction: int
    ) -> ReorderResult:
        """Swap a section with its neighbour and persist both.

        Args:
            sections: Sections in display order
            index: Position of the section to move
            direction: -1 (up) or 1 (down)

        Returns:
            ReorderResult with the list re-read from the store

        Raises:
            ValueError: If direction is not -1/1 or the move leaves the list
            SectionValidationError: If either section fails validation
            CatalogAdminError: If the list cannot be re-read
        """
        if direction not in (-1, 1):
            raise ValueError(f"direction must be -1 or 1, got {direction}")

        target = index + direction
        if index < 0 or index >= len(sections) or target < 0 or target >= len(sections):
            raise ValueError(f"Cannot move section at {index} by {direction}")

        first, second = sections[index], sections[target]
        self._validate(first)
        self._validate(second)

        first.order, second.order = second.order, first.order

        with ThreadPoolExecutor(max_workers=2) as pool:
            futures = [
                pool.submit(self.client.post, f"{COLLECTION}/{s.section}", s.to_dict())
                for s in (first, second)
            ]
            results: list[ApiResult] = [f.result() for f in futures]

        failures = [
            f"{s.section}: {r.error}" for s, r in zip((first, second), results) if not r.success
        ]
        if failures:
            logger.error(f"Reorder partially failed: {'; '.join(failures)}")
        else:
            logger.info(f"Swapped '{first.section}' and '{second.section}'")

        return ReorderResult(sections=self.list_sections(), failures=failures)

    def _validate(self, section: HomeSection) -> None:
        reason = validate_home_section(section)
        if reason:
            logger.warning(f"Section '{section.section}' rejected: {reason}")
            raise SectionValidationError(section.section, reason)


def new_section(section_type: str, existing: list[HomeSection]) -> HomeSection:
    """Create an unsaved section appended after ``existing``.

    The id is ``<type>-<epoch millis>``; ``order`` is one past the current
    maximum, or 1 for an empty page. Unknown types get an empty payload.
    """
    payload = create_default_payload(section_type) or OpaqueData()
    order = max((s.order for s in existing), default=0) + 1

    return HomeSection(
        section=SectionId(f"{section_type}-{int(time.time() * 1000)}"),
        type=section_type,
        data=payload,
        is_active=True,
        order=order,
    )
