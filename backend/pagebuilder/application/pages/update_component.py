from typing import Any, Mapping, Optional

from pagebuilder.application.common import mutate_page
from pagebuilder.domain.components import Component
from pagebuilder.domain.invariants.exceptions import ValidationFailed
from pagebuilder.utils.audit import log_action

ALLOWED_UPDATE_FIELDS = ("order", "data")


def update_component(
    *,
    repository,
    page_id: str,
    component_id: str,
    changes: Mapping[str, Any],
    actor_id: Optional[str] = None,
    precondition=None,
) -> Component:
    """
    Merge ``changes`` (``order`` and/or a partial ``data`` payload) into one
    component. ``id`` and ``type`` may be echoed back but never changed.
    """
    if not isinstance(changes, Mapping) or not any(key in changes for key in ALLOWED_UPDATE_FIELDS):
        raise ValidationFailed([f"nothing to update; expected one of: {', '.join(ALLOWED_UPDATE_FIELDS)}"])

    page, updated = mutate_page(
        repository=repository,
        page_id=page_id,
        mutate=lambda page: page.update_component(component_id, changes),
        precondition=precondition,
    )

    log_action(
        action="component.update",
        entity_type="page",
        entity_id=page.id,
        actor_id=actor_id,
        payload={
            "component_id": component_id,
            "fields": sorted(key for key in changes if key in ALLOWED_UPDATE_FIELDS),
        },
    )
    return updated
