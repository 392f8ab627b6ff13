"""Editing session for one record.

State flow: idle -> loading -> loaded -> editing -> saving -> saved | error.
Failures become a ``Notice`` instead of an exception, and the draft is kept
so the save can be retried. A save requested while another is in flight is
refused, not queued.
"""

import threading
from dataclasses import dataclass
from typing import Callable, Generic, Literal, Optional, TypeVar

from loguru import logger

from catalog_admin.errors import (
    AuthenticationError,
    CatalogAdminError,
    SectionValidationError,
    TransportError,
)

T = TypeVar("T")

EditorState = Literal["idle", "loading", "loaded", "editing", "saving", "saved", "error"]
NoticeLevel = Literal["success", "error", "info"]


@dataclass
class Notice:
    """Transient message for the user."""

    level: NoticeLevel
    message: str


def notice_for(error: CatalogAdminError) -> Notice:
    """Turn a service error into a user-facing notice."""
    if isinstance(error, SectionValidationError):
        return Notice("error", error.reason)
    if isinstance(error, AuthenticationError):
        return Notice("error", f"{error} - please log in again")
    if isinstance(error, TransportError):
        return Notice("error", f"Server unreachable: {error}")
    return Notice("error", str(error))


class Editor(Generic[T]):
    """Holds the draft of one record between load and save."""

    def __init__(
        self,
        load: Callable[[], T],
        save: Callable[[T], None],
        label: str = "record",
    ):
        """Initialize editor.

        Args:
            load: Fetches and normalizes the record
            save: Persists the draft; raises CatalogAdminError on failure
            label: Name used in notices (e.g. "Section 'hero-1'")
        """
        self._load = load
        self._save = save
        self.label = label
        self.state: EditorState = "idle"
        self.draft: Optional[T] = None
        self.notice: Optional[Notice] = None
        self._lock = threading.Lock()

    @property
    def busy(self) -> bool:
        return self.state in ("loading", "saving")

    def open(self) -> bool:
        """Load the record into the draft. Returns False on failure."""
        self.state = "loading"
        try:
            self.draft = self._load()
        except CatalogAdminError as e:
            logger.error(f"Failed to load {self.label}: {e}")
            self.state = "error"
            self.notice = notice_for(e)
            return False

        self.state = "loaded"
        self.notice = None
        return True

    def edit(self, change: Callable[[T], None]) -> None:
        """Apply an in-memory change to the draft."""
        if self.draft is None:
            raise RuntimeError(f"{self.label} is not loaded")
        change(self.draft)
        self.state = "editing"

    def save(self) -> bool:
        """Persist the draft.

        Returns:
            True if saved; False if refused as busy, blocked by validation or
            rejected by the store (see ``notice``)
        """
        if self.draft is None:
            raise RuntimeError(f"{self.label} is not loaded")

        if not self._lock.acquire(blocking=False):
            logger.debug(f"Ignoring save of {self.label}: already saving")
            return False

        try:
            previous = self.state
            self.state = "saving"
            try:
                self._save(self.draft)
            except SectionValidationError as e:
                self.state = previous
                self.notice = notice_for(e)
                return False
            except CatalogAdminError as e:
                logger.error(f"Failed to save {self.label}: {e}")
                self.state = "error"
                self.notice = notice_for(e)
                return False

            self.state = "saved"
            self.notice = Notice("success", f"{self.label} saved successfully!")
            return True
        finally:
            self._lock.release()

    def dismiss_notice(self) -> None:
        self.notice = None
