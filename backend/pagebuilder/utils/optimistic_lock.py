from flask import request
from dateutil.parser import parse

from pagebuilder.domain.invariants.exceptions import ConcurrentModification, ValidationFailed
from pagebuilder.utils.timestamps import normalize_ts


def enforce_optimistic_lock(entity):
    """
    Enforces optimistic locking using the If-Unmodified-Since header.
    Raises ConcurrentModification if the entity has been modified since.
    """
    client_ts = request.headers.get("If-Unmodified-Since")
    if not client_ts:
        return  # No optimistic lock requested

    try:
        client_ts = normalize_ts(parse(client_ts))
    except (ValueError, OverflowError):
        raise ValidationFailed(["Invalid If-Unmodified-Since header"]) from None

    server_ts = normalize_ts(entity.updated_at)

    if server_ts > client_ts:
        raise ConcurrentModification(
            "Conflict detected. Resource has been modified."
        )
