from typing import Optional

from pagebuilder.application.common import mutate_page
from pagebuilder.domain.components import Component
from pagebuilder.utils.audit import log_action


def remove_component(
    *,
    repository,
    page_id: str,
    component_id: str,
    actor_id: Optional[str] = None,
    precondition=None,
) -> Component:
    page, removed = mutate_page(
        repository=repository,
        page_id=page_id,
        mutate=lambda page: page.remove_component(component_id),
        precondition=precondition,
    )

    log_action(
        action="component.remove",
        entity_type="page",
        entity_id=page.id,
        actor_id=actor_id,
        payload={"component_id": component_id, "type": removed.kind.value},
    )
    return removed
