"""Error taxonomy for the API.

Services raise these; the app factory maps them onto JSON responses so that
routes never assemble error payloads by hand.
"""

import enum
from datetime import datetime, timezone

from flask import jsonify, request


class ErrorKind(enum.Enum):
    VALIDATION = 400
    AUTHENTICATION_REQUIRED = 401
    AUTHORIZATION_DENIED = 403
    NOT_FOUND = 404
    CONFLICT = 409
    INTERNAL = 500

    @property
    def status_code(self):
        return self.value


class ApiError(Exception):
    """Base error carrying a kind, a client-facing message and optional details."""

    kind = ErrorKind.INTERNAL
    default_message = 'An unexpected error occurred'

    def __init__(self, message=None, details=None):
        self.message = message or self.default_message
        self.details = details or None
        super().__init__(self.message)

    @property
    def status_code(self):
        return self.kind.status_code

    def __repr__(self):
        return f'<{type(self).__name__} {self.kind.name}: {self.message}>'


class ValidationFailed(ApiError):
    kind = ErrorKind.VALIDATION
    default_message = 'Validation failed'


class AuthenticationRequired(ApiError):
    kind = ErrorKind.AUTHENTICATION_REQUIRED
    default_message = 'Authentication required'


class AuthorizationDenied(ApiError):
    kind = ErrorKind.AUTHORIZATION_DENIED
    default_message = 'You do not have permission to modify this resource'


class NotFound(ApiError):
    kind = ErrorKind.NOT_FOUND
    default_message = 'Resource not found'


class Conflict(ApiError):
    kind = ErrorKind.CONFLICT
    default_message = 'Resource already exists'


def error_response(status_code, message, details=None):
    """Build the JSON error body shared by every failure path."""
    body = {
        'statusCode': status_code,
        'message': message,
        'timestamp': datetime.now(timezone.utc).isoformat(),
        'path': request.path,
    }
    if details:
        body['details'] = details
    return jsonify(body), status_code
