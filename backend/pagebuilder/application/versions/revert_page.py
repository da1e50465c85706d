import logging
from dataclasses import dataclass
from typing import Callable, Optional

from pagebuilder.application.common import require_page, require_version
from pagebuilder.domain.comparison import components_equal
from pagebuilder.domain.page import Page
from pagebuilder.domain.page_version import PageVersion
from pagebuilder.utils.audit import log_action
from pagebuilder.utils.versioning import (
    backup_change_description,
    backup_version_name,
    next_version,
)

logger = logging.getLogger(__name__)


@dataclass
class RevertResult:
    reverted_to: PageVersion
    backup: Optional[PageVersion]
    page: Page


def revert_page(
    *,
    repository,
    page_id: str,
    version_id: str,
    create_backup: bool = True,
    author_id: Optional[str] = None,
    ignore_metadata_timestamps: bool = True,
    precondition: Optional[Callable[[Page], None]] = None,
) -> RevertResult:
    """
    Restore a page's components to those stored in one of its versions.

    Steps:
    - Resolve page and version (version must belong to the page)
    - Compare live components with the version's snapshot
    - If they differ and ``create_backup`` is set, snapshot the live state
      as the next version first
    - Overwrite the live components with a copy of the snapshot

    Backup and overwrite share the page's transaction: if saving the page
    fails the backup is rolled back with it.
    """
    with repository.transaction(page_id):
        page = require_page(repository, page_id)
        target = require_version(repository, page_id, version_id)
        if precondition is not None:
            precondition(page)

        backup = None
        unchanged = components_equal(
            page.components,
            target.components,
            ignore_metadata_timestamps=ignore_metadata_timestamps,
        )
        if create_backup and not unchanged:
            backup = PageVersion.snapshot(
                page,
                version_number=next_version(repository, page_id),
                author_id=author_id,
                version_name=backup_version_name(target.version_number),
                change_description=backup_change_description(target.version_number),
            )
            repository.save_version(backup)

        page.replace_components(target.copy_components())
        repository.save_page(page)

    logger.info(
        "Reverted page %s to v%s (backup: %s)",
        page_id,
        target.version_number,
        backup.version_number if backup else None,
    )
    log_action(
        action="page.revert",
        entity_type="page",
        entity_id=page_id,
        actor_id=author_id,
        payload={
            "to_version": target.version_number,
            "backup_version": backup.version_number if backup else None,
        },
    )
    return RevertResult(reverted_to=target, backup=backup, page=page)
