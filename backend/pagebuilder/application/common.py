from typing import Any, Callable, Optional, Tuple

from pagebuilder.domain.invariants.exceptions import PageNotFound, VersionNotFound
from pagebuilder.domain.page import Page
from pagebuilder.domain.page_version import PageVersion
from pagebuilder.utils.audit import log_action


def require_page(repository, page_id: str) -> Page:
    page = repository.get_page_by_id(page_id)
    if page is None:
        raise PageNotFound(page_id)
    return page


def require_version(repository, page_id: str, version_id: str) -> PageVersion:
    """The version must exist and belong to ``page_id``."""
    for version in repository.get_versions_for_page(page_id):
        if version.id == version_id:
            return version
    raise VersionNotFound(version_id, page_id)


def mutate_page(
    *,
    repository,
    page_id: str,
    mutate: Callable[[Page], Any],
    precondition: Optional[Callable[[Page], None]] = None,
) -> Tuple[Page, Any]:
    """
    Load, check, mutate and save one page under its per-page transaction.

    ``precondition`` sees the freshly loaded page before anything changes
    (used for If-Unmodified-Since checks).
    """
    with repository.transaction(page_id):
        page = require_page(repository, page_id)
        if precondition is not None:
            precondition(page)
        result = mutate(page)
        repository.save_page(page)
    return page, result


def edit_nested(repository, page_id, action, component_id, mutate, actor_id, precondition, payload=None):
    """
    :func:`mutate_page` for accordion item / link edits, plus the audit
    record keyed by the owning component.
    """
    page, result = mutate_page(
        repository=repository,
        page_id=page_id,
        mutate=mutate,
        precondition=precondition,
    )
    log_action(
        action=action,
        entity_type="component",
        entity_id=component_id,
        actor_id=actor_id,
        payload=dict(payload or {}, page_id=page.id),
    )
    return result
