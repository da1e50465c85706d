import logging
import threading
from contextlib import contextmanager
from dataclasses import replace
from typing import Dict, List, Optional

from pagebuilder.domain.invariants.exceptions import (
    DuplicateKey,
    PageNotFound,
    VersionNotFound,
)
from pagebuilder.domain.page import Page
from pagebuilder.domain.page_version import PageVersion, newest_first
from pagebuilder.utils.locks import PageLocks

logger = logging.getLogger(__name__)


class InMemoryPageRepository:
    """
    Dictionary-backed store owned by one repository instance.

    Stored pages and versions are never handed out directly; every read
    and write goes through a copy.
    """

    def __init__(self):
        self._pages: Dict[str, Page] = {}
        self._versions: Dict[str, Dict[str, PageVersion]] = {}
        self._store_lock = threading.RLock()
        self._locks = PageLocks()
        self._local = threading.local()

    # -------------------------------------------------
    # Pages
    # -------------------------------------------------

    def get_page_by_id(self, page_id: str) -> Optional[Page]:
        with self._store_lock:
            page = self._pages.get(page_id)
            return page.clone() if page else None

    def list_pages(self) -> List[Page]:
        with self._store_lock:
            pages = sorted(self._pages.values(), key=lambda p: p.created_at)
            return [page.clone() for page in pages]

    def create_page(self, page: Page) -> Page:
        with self._store_lock:
            if page.id in self._pages:
                raise DuplicateKey("id", page.id, scope="Page")
            self._pages[page.id] = page.clone()
            self._versions[page.id] = {}
        return page.clone()

    def save_page(self, page: Page) -> Page:
        with self._store_lock:
            if page.id not in self._pages:
                raise PageNotFound(page.id)
            self._pages[page.id] = page.clone()
        return page.clone()

    def delete_page(self, page_id: str) -> None:
        with self.transaction(page_id):
            with self._store_lock:
                if page_id not in self._pages:
                    raise PageNotFound(page_id)
                del self._pages[page_id]
                self._versions.pop(page_id, None)
        self._locks.forget(page_id)

    # -------------------------------------------------
    # Versions
    # -------------------------------------------------

    def get_versions_for_page(self, page_id: str) -> List[PageVersion]:
        with self._store_lock:
            stored = list(self._versions.get(page_id, {}).values())
        return newest_first(replace(version) for version in stored)

    def save_version(self, version: PageVersion) -> PageVersion:
        with self._store_lock:
            if version.page_id not in self._pages:
                raise PageNotFound(version.page_id)
            versions = self._versions.setdefault(version.page_id, {})
            if any(v.version_number == version.version_number for v in versions.values()):
                raise DuplicateKey("versionNumber", version.version_number, scope="Version")
            versions[version.id] = replace(version)
        return replace(version)

    def delete_version(self, page_id: str, version_id: str) -> PageVersion:
        with self._store_lock:
            versions = self._versions.get(page_id, {})
            if version_id not in versions:
                raise VersionNotFound(version_id, page_id)
            return versions.pop(version_id)

    # -------------------------------------------------
    # Unit of work
    # -------------------------------------------------

    def _depths(self) -> Dict[str, int]:
        depths = getattr(self._local, "depths", None)
        if depths is None:
            depths = self._local.depths = {}
        return depths

    @contextmanager
    def transaction(self, page_id: str):
        with self._locks.hold(page_id):
            depths = self._depths()
            if depths.get(page_id):
                depths[page_id] += 1
                try:
                    yield self
                finally:
                    depths[page_id] -= 1
                return

            with self._store_lock:
                saved_page = self._pages.get(page_id)
                saved_versions = self._versions.get(page_id)
                if saved_versions is not None:
                    saved_versions = dict(saved_versions)

            depths[page_id] = 1
            try:
                yield self
            except Exception:
                with self._store_lock:
                    self._restore(page_id, saved_page, saved_versions)
                logger.debug("Rolled back writes for page %s", page_id)
                raise
            finally:
                depths.pop(page_id, None)

    def _restore(self, page_id, page, versions) -> None:
        if page is None:
            self._pages.pop(page_id, None)
        else:
            self._pages[page_id] = page
        if versions is None:
            self._versions.pop(page_id, None)
        else:
            self._versions[page_id] = versions
