# propdesk/errors.py
import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from .extensions import db

log = logging.getLogger(__name__)


class APIError(Exception):
    """Base class for errors surfaced to the caller as JSON."""

    status_code = 400
    error = "bad_request"

    def __init__(self, message=None):
        super().__init__(message or self.error)
        self.message = message or self.error

    def to_dict(self):
        return {"error": self.error, "message": self.message}


class ValidationError(APIError):
    status_code = 400
    error = "validation_error"


class InvalidCredentials(APIError):
    status_code = 401
    error = "invalid_credentials"

    def __init__(self, message="Invalid email or password"):
        super().__init__(message)


class DuplicateEmail(APIError):
    status_code = 409
    error = "duplicate_email"

    def __init__(self, message="Email already registered"):
        super().__init__(message)


class NotFound(APIError):
    status_code = 404
    error = "not_found"


class DeliveryError(APIError):
    status_code = 502
    error = "delivery_failed"


def require_fields(data: dict, *fields):
    """Raise ValidationError for the first field that is missing or blank."""
    for field in fields:
        value = data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValidationError(f"{field} is required")


def require_text(data: dict, field: str, max_length: int = None) -> str:
    """Return the stripped string value of a required text field."""
    value = data.get(field)
    if value is not None and not isinstance(value, str):
        raise ValidationError(f"{field} must be a string")
    require_fields(data, field)
    value = value.strip()
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return value


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def api_error(e):
        db.session.rollback()
        return jsonify(e.to_dict()), e.status_code

    @app.errorhandler(400)
    def bad_request(e):
        return jsonify(error="bad_request", message=getattr(e, "description", "Bad Request")), 400

    @app.errorhandler(401)
    def unauthorized(e): return jsonify(error="unauthorized", message="Authentication required"), 401

    @app.errorhandler(404)
    def not_found(e): return jsonify(error="not_found", message="Resource not found"), 404

    @app.errorhandler(405)
    def method_not_allowed(e): return jsonify(error="method_not_allowed", message="Method not allowed"), 405

    @app.errorhandler(500)
    def server_error(e):
        db.session.rollback()
        original = getattr(e, "original_exception", None) or e
        if not isinstance(original, HTTPException):
            log.exception("Unhandled exception: %s", original)
        return jsonify(error="server_error", message="Internal Server Error"), 500
