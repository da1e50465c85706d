from typing import Optional

from pagebuilder.application.common import require_page
from pagebuilder.domain.page_version import PageVersion
from pagebuilder.utils.audit import log_action


def delete_version(
    *,
    repository,
    page_id: str,
    version_id: str,
    actor_id: Optional[str] = None,
) -> PageVersion:
    with repository.transaction(page_id):
        require_page(repository, page_id)
        deleted = repository.delete_version(page_id, version_id)

    log_action(
        action="version.delete",
        entity_type="page_version",
        entity_id=version_id,
        actor_id=actor_id,
        payload={"page_id": page_id, "version_number": deleted.version_number},
    )
    return deleted
