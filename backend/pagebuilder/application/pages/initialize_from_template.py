from typing import Any, Mapping, Optional

from pagebuilder.application.common import mutate_page
from pagebuilder.domain.invariants.exceptions import ValidationFailed
from pagebuilder.domain.page import Page
from pagebuilder.utils.audit import log_action


def initialize_from_template(
    *,
    repository,
    page_id: str,
    template: Mapping[str, Any],
    actor_id: Optional[str] = None,
    precondition=None,
) -> Page:
    """Wipe the page's components and rebuild them from ``template``."""
    if not isinstance(template, Mapping):
        raise ValidationFailed(["template must be an object"])

    page, _ = mutate_page(
        repository=repository,
        page_id=page_id,
        mutate=lambda page: page.initialize_from_template(template),
        precondition=precondition,
    )

    log_action(
        action="page.initialize",
        entity_type="page",
        entity_id=page.id,
        actor_id=actor_id,
        payload={"template_id": page.template_id, "component_count": len(page.components)},
    )
    return page
