from typing import Any, List, Mapping, Optional, Sequence

from pagebuilder.application.common import edit_nested
from pagebuilder.domain.components import Link
from pagebuilder.domain.invariants.exceptions import ValidationFailed


def add_link(
    *,
    repository,
    page_id: str,
    component_id: str,
    data: Optional[Mapping[str, Any]] = None,
    actor_id: Optional[str] = None,
    precondition=None,
) -> Link:
    if data is not None and not isinstance(data, Mapping):
        raise ValidationFailed(["link must be an object"])
    return edit_nested(
        repository, page_id, "linkgroup.link.add", component_id,
        lambda page: page.add_link(component_id, data),
        actor_id, precondition,
    )


def update_link(
    *,
    repository,
    page_id: str,
    component_id: str,
    link_id: str,
    changes: Mapping[str, Any],
    actor_id: Optional[str] = None,
    precondition=None,
) -> Link:
    if not isinstance(changes, Mapping) or not changes:
        raise ValidationFailed(["nothing to update"])
    return edit_nested(
        repository, page_id, "linkgroup.link.update", component_id,
        lambda page: page.update_link(component_id, link_id, changes),
        actor_id, precondition, {"link_id": link_id, "fields": sorted(changes)},
    )


def remove_link(
    *,
    repository,
    page_id: str,
    component_id: str,
    link_id: str,
    actor_id: Optional[str] = None,
    precondition=None,
) -> Link:
    return edit_nested(
        repository, page_id, "linkgroup.link.remove", component_id,
        lambda page: page.remove_link(component_id, link_id),
        actor_id, precondition, {"link_id": link_id},
    )


def reorder_links(
    *,
    repository,
    page_id: str,
    component_id: str,
    link_ids: Sequence[str],
    actor_id: Optional[str] = None,
    precondition=None,
) -> List[Link]:
    if not isinstance(link_ids, list) or not all(isinstance(i, str) for i in link_ids):
        raise ValidationFailed(["linkIds must be an array of strings"])
    return edit_nested(
        repository, page_id, "linkgroup.link.reorder", component_id,
        lambda page: page.reorder_links(component_id, link_ids),
        actor_id, precondition, {"link_ids": list(link_ids)},
    )
