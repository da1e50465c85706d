from typing import Any, Mapping, Optional

from pagebuilder.domain.invariants.exceptions import ValidationFailed
from pagebuilder.domain.page import Page
from pagebuilder.utils.audit import log_action


def create_page(
    *,
    repository,
    template_id: Optional[str] = None,
    template: Optional[Mapping[str, Any]] = None,
    page_id: Optional[str] = None,
    actor_id: Optional[str] = None,
) -> Page:
    """
    Create an empty page, or one initialised from ``template``.
    """
    if template_id is not None and not isinstance(template_id, str):
        raise ValidationFailed(["templateId must be a string"])
    if template is not None and not isinstance(template, Mapping):
        raise ValidationFailed(["template must be an object"])

    page = Page(template_id=template_id)
    if page_id is not None:
        page.id = page_id
    if template:
        page.initialize_from_template(template)

    page = repository.create_page(page)

    log_action(
        action="page.create",
        entity_type="page",
        entity_id=page.id,
        actor_id=actor_id,
        payload={
            "template_id": page.template_id,
            "component_count": len(page.components),
        },
    )
    return page
