"""Request payload validation with WTForms.

JSON bodies and query strings arrive with camelCase keys; they are mapped to
the snake_case field names used by the form classes before validation.
"""

import re

from flask import request
from flask_wtf import FlaskForm
from werkzeug.datastructures import MultiDict

from snackspot.errors import ValidationFailed

_CAMEL_BOUNDARY = re.compile(r'(?<!^)(?=[A-Z])')


class ApiForm(FlaskForm):
    """Base form for the token-authenticated JSON API (no CSRF token)."""

    class Meta:
        csrf = False


def to_snake_case(key):
    return _CAMEL_BOUNDARY.sub('_', key).lower()


def _formdata_from_mapping(mapping):
    formdata = MultiDict()
    for key, value in mapping.items():
        if value is None or isinstance(value, (dict, list)):
            continue
        formdata.add(to_snake_case(key), value if isinstance(value, str) else str(value))
    return formdata


def json_payload():
    """The request body as a dict; anything else is a validation failure."""
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationFailed('Request body must be a JSON object')
    return payload


def load_form(form_class, source=None):
    """Validate ``source`` (default: the JSON body) against ``form_class``.

    Returns the validated form; raises ValidationFailed with the per-field
    messages otherwise.
    """
    if source is None:
        source = json_payload()
    form = form_class(formdata=_formdata_from_mapping(source))
    if not form.validate():
        raise ValidationFailed(details=form.errors)
    return form


def provided_fields(source=None):
    """snake_case names of the keys actually present in the JSON body."""
    if source is None:
        source = json_payload()
    return {to_snake_case(key) for key in source}
