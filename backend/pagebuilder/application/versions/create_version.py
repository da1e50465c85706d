from typing import Optional

from pagebuilder.application.common import require_page
from pagebuilder.domain.invariants.exceptions import ValidationFailed
from pagebuilder.domain.page_version import PageVersion
from pagebuilder.utils.audit import log_action
from pagebuilder.utils.versioning import next_version

MAX_VERSION_NAME_LENGTH = 255


def _check_labels(version_name, change_description):
    errors = []
    if version_name is not None:
        if not isinstance(version_name, str):
            errors.append("versionName must be a string")
        elif len(version_name) > MAX_VERSION_NAME_LENGTH:
            errors.append(f"versionName must not exceed {MAX_VERSION_NAME_LENGTH} characters")
    if change_description is not None and not isinstance(change_description, str):
        errors.append("changeDescription must be a string")
    if errors:
        raise ValidationFailed(errors)


def create_version(
    *,
    repository,
    page_id: str,
    author_id: Optional[str] = None,
    version_name: Optional[str] = None,
    change_description: Optional[str] = None,
) -> PageVersion:
    """
    Snapshot the page's current components as the next version.

    Numbering is ``max(existing) + 1`` read and written under the page's
    transaction, so concurrent snapshots never share a number.
    """
    _check_labels(version_name, change_description)

    with repository.transaction(page_id):
        page = require_page(repository, page_id)
        version = PageVersion.snapshot(
            page,
            version_number=next_version(repository, page_id),
            author_id=author_id,
            version_name=version_name,
            change_description=change_description,
        )
        repository.save_version(version)

    log_action(
        action="version.create",
        entity_type="page_version",
        entity_id=version.id,
        actor_id=author_id,
        payload={"page_id": page_id, "version_number": version.version_number},
    )
    return version
