"""Request hooks: request logging, input screening and security headers."""

import logging
import re
import time
import uuid

from flask import current_app, g, request

from snackspot.errors import ValidationFailed

logger = logging.getLogger(__name__)

MARKUP_PATTERNS = [
    re.compile(p, re.IGNORECASE) for p in (
        r'<\s*script\b',
        r'javascript\s*:',
        r'<[^>]*\bon\w+\s*=',
        r'<\s*(iframe|object|embed)\b',
        r'\beval\s*\(',
        r'document\.cookie',
        r'window\.location',
        r'\.\./',
        r'\.\.\\',
        r'/etc/passwd',
    )
]

# Applied to query strings only
SQL_PATTERNS = [
    re.compile(p, re.IGNORECASE) for p in (
        r"'\s*(or|and)\s*'",
        r'\b(or|and)\s+\d+\s*=\s*\d+',
        r'\bunion\b.+\bselect\b',
        r';\s*(drop|delete|insert|update)\b',
    )
]

SENSITIVE_KEYS = {'password', 'refreshtoken', 'refresh_token', 'accesstoken', 'access_token', 'token'}


def is_malicious(value, query=False):
    patterns = MARKUP_PATTERNS + SQL_PATTERNS if query else MARKUP_PATTERNS
    return any(pattern.search(value) for pattern in patterns)


def _walk_strings(value):
    """Yield every string key and value nested in a JSON document."""
    if isinstance(value, str):
        yield value
    elif isinstance(value, dict):
        for key, item in value.items():
            yield str(key)
            yield from _walk_strings(item)
    elif isinstance(value, list):
        for item in value:
            yield from _walk_strings(item)


def redact(value):
    if isinstance(value, dict):
        return {
            key: '***' if str(key).lower() in SENSITIVE_KEYS else redact(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact(item) for item in value]
    return value


def screen_request():
    """Reject query strings and JSON bodies carrying injection payloads."""
    max_query = current_app.config['MAX_QUERY_VALUE_LENGTH']
    for key, value in request.args.items(multi=True):
        if len(value) > max_query:
            raise ValidationFailed(f"Query parameter '{key}' is too long")
        if is_malicious(key, query=True) or is_malicious(value, query=True):
            logger.warning(f"Blocked malicious query parameter '{key}' from {request.remote_addr}")
            raise ValidationFailed('Invalid input detected')

    if not request.is_json:
        return
    payload = request.get_json(silent=True)
    if payload is None:
        return
    max_string = current_app.config['MAX_JSON_STRING_LENGTH']
    for text in _walk_strings(payload):
        if len(text) > max_string:
            raise ValidationFailed('Request contains a value that is too long')
        if is_malicious(text):
            logger.warning(f"Blocked malicious JSON payload on {request.path} from {request.remote_addr}")
            raise ValidationFailed('Invalid input detected')


def register_middleware(app):
    """Attach the request/response hooks to ``app``."""

    @app.before_request
    def start_request():
        g.request_id = request.headers.get('X-Request-ID') or uuid.uuid4().hex
        g.request_started = time.perf_counter()

        if app.config['LOG_REQUEST_BODIES'] and request.is_json:
            logger.debug(f"{request.method} {request.path} body={redact(request.get_json(silent=True))}")

        if app.config['INPUT_VALIDATION_ENABLED']:
            screen_request()

    @app.after_request
    def finish_request(response):
        for header, value in app.config['SECURITY_HEADERS'].items():
            response.headers.setdefault(header, value)
        if request.is_secure:
            response.headers.setdefault(
                'Strict-Transport-Security',
                f"max-age={app.config['HSTS_MAX_AGE']}; includeSubDomains"
            )
        request_id = g.get('request_id')
        if request_id:
            response.headers['X-Request-ID'] = request_id

        started = g.get('request_started')
        elapsed_ms = (time.perf_counter() - started) * 1000 if started else 0.0
        message = (f"{request.method} {request.path} from {request.remote_addr} "
                   f"-> {response.status_code} in {elapsed_ms:.1f}ms")
        if response.status_code >= 500:
            logger.error(message)
        elif response.status_code >= 400:
            logger.warning(message)
        else:
            logger.info(message)
        return response
