import logging

from flask import jsonify
from pagebuilder.domain.invariants.exceptions import (
    ConcurrentModification,
    DuplicateKey,
    InvariantViolation,
    MinimumCardinalityViolation,
    NotFound,
    ValidationFailed,
)

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (NotFound, 404),
    (ValidationFailed, 400),
    (DuplicateKey, 409),
    (ConcurrentModification, 409),
    (MinimumCardinalityViolation, 422),
)


def status_for(error):
    for error_type, status in STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return status
    return 400


def register_error_handlers(app):
    @app.errorhandler(InvariantViolation)
    def handle_invariant_violation(error):
        status = status_for(error)
        logger.debug("%s -> %s: %s", type(error).__name__, status, error.message)

        response = jsonify(error.to_dict())
        response.status_code = status
        return response
