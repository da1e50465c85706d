from __future__ import annotations

from contextlib import AbstractContextManager
from typing import List, Optional, Protocol

from flask import current_app

from pagebuilder.domain.page import Page
from pagebuilder.domain.page_version import PageVersion


class PageRepository(Protocol):
    """
    Persistence collaborator for pages and their versions.

    Reads hand back private copies; writes store copies. Mutating a
    returned object never changes stored state until it is saved again.
    """

    def get_page_by_id(self, page_id: str) -> Optional[Page]:
        ...

    def save_page(self, page: Page) -> Page:
        """Atomically replace the page's components and updated_at."""
        ...

    def create_page(self, page: Page) -> Page:
        ...

    def list_pages(self) -> List[Page]:
        ...

    def delete_page(self, page_id: str) -> None:
        ...

    def get_versions_for_page(self, page_id: str) -> List[PageVersion]:
        """Newest first."""
        ...

    def save_version(self, version: PageVersion) -> PageVersion:
        ...

    def delete_version(self, page_id: str, version_id: str) -> PageVersion:
        ...

    def transaction(self, page_id: str) -> AbstractContextManager:
        """
        Serialize writers for one page and make the enclosed writes atomic:
        an exception leaving the block undoes every write made inside it.
        Re-entrant within one thread.
        """
        ...


def get_page_repository() -> PageRepository:
    return current_app.extensions["page_repository"]
