"""Audit trail for mutations."""

from datetime import datetime
from snackspot.extensions import db
from snackspot.models import AuditLog


def snapshot(resource, fields):
    """JSON-safe copy of the given attributes."""
    data = {}
    for field in fields:
        value = getattr(resource, field)
        if isinstance(value, datetime):
            value = value.isoformat()
        elif value is not None and not isinstance(value, (str, int, float, bool)):
            value = str(value)
        data[field] = value
    return data


def record(user, action, resource, old_value=None, new_value=None):
    """Stage an audit entry in the current transaction.

    The entry is committed together with the change it describes.
    """
    if resource.id is None:
        db.session.flush()
    entry = AuditLog(
        user_id=user.id,
        action=action,
        entity=type(resource).__name__,
        entity_id=resource.id,
        old_value=old_value,
        new_value=new_value,
    )
    db.session.add(entry)
    return entry
