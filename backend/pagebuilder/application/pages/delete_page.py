from typing import Optional

from pagebuilder.utils.audit import log_action


def delete_page(*, repository, page_id: str, actor_id: Optional[str] = None) -> None:
    """Remove the page together with every version recorded for it."""
    repository.delete_page(page_id)

    log_action(
        action="page.delete",
        entity_type="page",
        entity_id=page_id,
        actor_id=actor_id,
    )
