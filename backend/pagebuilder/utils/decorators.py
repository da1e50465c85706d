import uuid
from functools import wraps
from flask import jsonify


def _is_uuid(value):
    try:
        uuid.UUID(str(value))
    except ValueError:
        return False
    return True


def valid_uuid_params(*names):
    """Reject requests whose named path params are not UUID strings."""
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            bad = [name for name in names if name in kwargs and not _is_uuid(kwargs[name])]
            if bad:
                return jsonify({
                    "error": "InvalidIdentifier",
                    "code": "INVALID_ID",
                    "message": f"Invalid ID format: {', '.join(bad)}",
                    "errors": [f"{name} must be a UUID" for name in bad],
                }), 400

            return fn(*args, **kwargs)
        return wrapper
    return decorator
