import logging
import threading
from contextlib import contextmanager
from dataclasses import replace
from typing import Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from pagebuilder.extensions import db
from pagebuilder.models.page import Page as PageModel
from pagebuilder.models.page_version import PageVersion as PageVersionModel
from pagebuilder.domain.components import Component
from pagebuilder.domain.invariants.exceptions import (
    DuplicateKey,
    PageNotFound,
    VersionNotFound,
)
from pagebuilder.domain.page import Page
from pagebuilder.domain.page_version import PageVersion
from pagebuilder.utils.locks import PageLocks
from pagebuilder.utils.timestamps import normalize_ts
from pagebuilder.utils.transaction import transactional

logger = logging.getLogger(__name__)


class SqlAlchemyPageRepository:
    """
    Pages and versions in the ``pages`` / ``page_versions`` tables.

    Component collections are stored as JSON in their wire shape. Inside
    :meth:`transaction` the page row is read ``FOR UPDATE`` and writes are
    only flushed; the outermost block commits or rolls back.
    """

    def __init__(self):
        self._locks = PageLocks()
        self._local = threading.local()

    # -------------------------------------------------
    # Pages
    # -------------------------------------------------

    def get_page_by_id(self, page_id: str) -> Optional[Page]:
        stmt = select(PageModel).where(PageModel.id == page_id)
        if self._in_transaction():
            stmt = stmt.with_for_update()
        model = db.session.execute(stmt).scalar_one_or_none()
        return self._page_to_domain(model) if model else None

    def list_pages(self) -> List[Page]:
        stmt = select(PageModel).order_by(PageModel.created_at)
        return [self._page_to_domain(m) for m in db.session.execute(stmt).scalars()]

    def create_page(self, page: Page) -> Page:
        model = PageModel(
            id=page.id,
            template_id=page.template_id,
            components=self._components_to_json(page.get_ordered_components()),
            created_at=page.created_at,
            updated_at=page.updated_at,
        )
        try:
            db.session.add(model)
            self._write()
        except IntegrityError as exc:
            raise DuplicateKey("id", page.id, scope="Page") from exc
        return page.clone()

    def save_page(self, page: Page) -> Page:
        model = db.session.get(PageModel, page.id)
        if model is None:
            raise PageNotFound(page.id)

        model.template_id = page.template_id
        model.components = self._components_to_json(page.get_ordered_components())
        model.updated_at = page.updated_at
        self._write()
        return page.clone()

    def delete_page(self, page_id: str) -> None:
        with self.transaction(page_id):
            model = db.session.get(PageModel, page_id)
            if model is None:
                raise PageNotFound(page_id)
            db.session.delete(model)
        self._locks.forget(page_id)

    # -------------------------------------------------
    # Versions
    # -------------------------------------------------

    def get_versions_for_page(self, page_id: str) -> List[PageVersion]:
        stmt = (
            select(PageVersionModel)
            .where(PageVersionModel.page_id == page_id)
            .order_by(PageVersionModel.version_number.desc())
        )
        return [self._version_to_domain(m) for m in db.session.execute(stmt).scalars()]

    def save_version(self, version: PageVersion) -> PageVersion:
        if db.session.get(PageModel, version.page_id) is None:
            raise PageNotFound(version.page_id)

        model = PageVersionModel(
            id=version.id,
            page_id=version.page_id,
            version_number=version.version_number,
            timestamp=version.timestamp,
            author_id=version.author_id,
            version_name=version.version_name,
            change_description=version.change_description,
            components=self._components_to_json(version.copy_components()),
        )
        try:
            db.session.add(model)
            self._write()
        except IntegrityError as exc:
            raise DuplicateKey("versionNumber", version.version_number, scope="Version") from exc
        return replace(version)

    def delete_version(self, page_id: str, version_id: str) -> PageVersion:
        stmt = select(PageVersionModel).where(
            PageVersionModel.id == version_id,
            PageVersionModel.page_id == page_id,
        )
        model = db.session.execute(stmt).scalar_one_or_none()
        if model is None:
            raise VersionNotFound(version_id, page_id)

        deleted = self._version_to_domain(model)
        db.session.delete(model)
        self._write()
        return deleted

    # -------------------------------------------------
    # Unit of work
    # -------------------------------------------------

    def _depths(self) -> Dict[str, int]:
        depths = getattr(self._local, "depths", None)
        if depths is None:
            depths = self._local.depths = {}
        return depths

    def _in_transaction(self) -> bool:
        return any(self._depths().values())

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

            depths[page_id] = 1
            try:
                with transactional():
                    yield self
            finally:
                depths.pop(page_id, None)

    def _write(self) -> None:
        if self._in_transaction():
            db.session.flush()
            return
        with transactional():
            db.session.flush()

    # -------------------------------------------------
    # Mapping
    # -------------------------------------------------

    @staticmethod
    def _components_to_json(components):
        return [c.to_dict() for c in components]

    @staticmethod
    def _page_to_domain(model: PageModel) -> Page:
        return Page(
            id=model.id,
            template_id=model.template_id,
            components=[Component.from_dict(c) for c in model.components or []],
            created_at=normalize_ts(model.created_at),
            updated_at=normalize_ts(model.updated_at),
        )

    @staticmethod
    def _version_to_domain(model: PageVersionModel) -> PageVersion:
        return PageVersion(
            id=model.id,
            page_id=model.page_id,
            version_number=model.version_number,
            timestamp=normalize_ts(model.timestamp),
            author_id=model.author_id,
            version_name=model.version_name,
            change_description=model.change_description,
            components=tuple(Component.from_dict(c) for c in model.components or []),
        )
