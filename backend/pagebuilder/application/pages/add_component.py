from typing import Any, Mapping, Optional

from pagebuilder.application.common import mutate_page
from pagebuilder.domain.components import Component, ComponentKind
from pagebuilder.domain.invariants.exceptions import ValidationFailed
from pagebuilder.utils.audit import log_action


def add_component(
    *,
    repository,
    page_id: str,
    component_type: Any,
    data: Optional[Mapping[str, Any]] = None,
    order: Optional[int] = None,
    component_id: Optional[str] = None,
    actor_id: Optional[str] = None,
    precondition=None,
) -> Component:
    """
    Add a component of ``component_type``.

    Missing payload fields take the variant defaults; a missing order is
    appended after the current last component.
    """
    kind = ComponentKind.parse(component_type)
    if data is not None and not isinstance(data, Mapping):
        raise ValidationFailed(["data must be an object"])
    if component_id is not None and (not isinstance(component_id, str) or not component_id):
        raise ValidationFailed(["id must be a non-empty string"])

    def mutate(page):
        component = Component.create_default(
            kind,
            order=page.next_order() if order is None else order,
            component_id=component_id,
        )
        if data:
            component = component.with_changes({"data": data})
        return page.add_component(component)

    page, added = mutate_page(
        repository=repository,
        page_id=page_id,
        mutate=mutate,
        precondition=precondition,
    )

    log_action(
        action="component.add",
        entity_type="page",
        entity_id=page.id,
        actor_id=actor_id,
        payload={"component_id": added.id, "type": added.kind.value, "order": added.order},
    )
    return added
