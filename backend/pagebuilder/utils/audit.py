import logging
from typing import Optional

audit_logger = logging.getLogger("pagebuilder.audit")


def log_action(
    *,
    action: str,
    entity_type: str,
    entity_id: Optional[str],
    payload: dict | None = None,
    actor_id: Optional[str] = None,
):
    """Emit one audit record for a committed mutation."""
    audit_logger.info(
        "%s %s=%s",
        action,
        entity_type,
        entity_id,
        extra={
            "audit": {
                "action": action,
                "entity_type": entity_type,
                "entity_id": entity_id,
                "actor_id": actor_id,
                "payload": payload or {},
            }
        },
    )
