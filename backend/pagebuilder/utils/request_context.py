from flask import current_app, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from pagebuilder.domain.invariants.exceptions import ValidationFailed


def current_author_id():
    """
    Author for version records: the JWT identity when a token is sent,
    else the configured default author.
    """
    verify_jwt_in_request(optional=True)
    identity = get_jwt_identity()
    if isinstance(identity, dict):
        identity = identity.get("user_id") or identity.get("id")
    if identity:
        return str(identity)
    return current_app.config.get("DEFAULT_AUTHOR_ID", "system")


def json_body():
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationFailed(["request body must be a JSON object"])
    return data
