from typing import Any, List, Mapping, Optional, Sequence

from pagebuilder.application.common import edit_nested
from pagebuilder.domain.components import AccordionItem
from pagebuilder.domain.invariants.exceptions import ValidationFailed


def add_accordion_item(
    *,
    repository,
    page_id: str,
    component_id: str,
    data: Optional[Mapping[str, Any]] = None,
    actor_id: Optional[str] = None,
    precondition=None,
) -> AccordionItem:
    if data is not None and not isinstance(data, Mapping):
        raise ValidationFailed(["item must be an object"])
    return edit_nested(
        repository, page_id, "accordion.item.add", component_id,
        lambda page: page.add_accordion_item(component_id, data),
        actor_id, precondition,
    )


def update_accordion_item(
    *,
    repository,
    page_id: str,
    component_id: str,
    item_id: str,
    changes: Mapping[str, Any],
    actor_id: Optional[str] = None,
    precondition=None,
) -> AccordionItem:
    if not isinstance(changes, Mapping) or not changes:
        raise ValidationFailed(["nothing to update"])
    return edit_nested(
        repository, page_id, "accordion.item.update", component_id,
        lambda page: page.update_accordion_item(component_id, item_id, changes),
        actor_id, precondition, {"item_id": item_id, "fields": sorted(changes)},
    )


def remove_accordion_item(
    *,
    repository,
    page_id: str,
    component_id: str,
    item_id: str,
    actor_id: Optional[str] = None,
    precondition=None,
) -> AccordionItem:
    return edit_nested(
        repository, page_id, "accordion.item.remove", component_id,
        lambda page: page.remove_accordion_item(component_id, item_id),
        actor_id, precondition, {"item_id": item_id},
    )


def toggle_accordion_item(
    *,
    repository,
    page_id: str,
    component_id: str,
    item_id: str,
    actor_id: Optional[str] = None,
    precondition=None,
) -> bool:
    """Flip ``isOpen``; returns the new state."""
    return edit_nested(
        repository, page_id, "accordion.item.toggle", component_id,
        lambda page: page.toggle_accordion_item(component_id, item_id),
        actor_id, precondition, {"item_id": item_id},
    )


def reorder_accordion_items(
    *,
    repository,
    page_id: str,
    component_id: str,
    item_ids: Sequence[str],
    actor_id: Optional[str] = None,
    precondition=None,
) -> List[AccordionItem]:
    if not isinstance(item_ids, list) or not all(isinstance(i, str) for i in item_ids):
        raise ValidationFailed(["itemIds must be an array of strings"])
    return edit_nested(
        repository, page_id, "accordion.item.reorder", component_id,
        lambda page: page.reorder_accordion_items(component_id, item_ids),
        actor_id, precondition, {"item_ids": list(item_ids)},
    )
