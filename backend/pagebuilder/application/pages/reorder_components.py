from typing import List, Optional, Sequence

from pagebuilder.application.common import mutate_page
from pagebuilder.domain.components import Component
from pagebuilder.domain.invariants.exceptions import ValidationFailed
from pagebuilder.utils.audit import log_action


def reorder_components(
    *,
    repository,
    page_id: str,
    component_ids: Sequence[str],
    actor_id: Optional[str] = None,
    precondition=None,
) -> List[Component]:
    if not isinstance(component_ids, list) or not all(isinstance(cid, str) for cid in component_ids):
        raise ValidationFailed(["componentIds must be an array of strings"])

    page, ordered = mutate_page(
        repository=repository,
        page_id=page_id,
        mutate=lambda page: page.reorder_components(component_ids),
        precondition=precondition,
    )

    log_action(
        action="component.reorder",
        entity_type="page",
        entity_id=page.id,
        actor_id=actor_id,
        payload={"component_ids": [c.id for c in ordered]},
    )
    return ordered
