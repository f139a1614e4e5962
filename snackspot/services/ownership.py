"""Ownership checks for update/delete operations."""

import logging

from snackspot.errors import AuthenticationRequired, AuthorizationDenied

logger = logging.getLogger(__name__)


def ensure_authenticated(user):
    if user is None or not getattr(user, 'is_authenticated', False):
        raise AuthenticationRequired()


def ensure_owner(resource, user):
    """Raise unless ``user`` created ``resource``.

    Must run before any attribute of the resource is touched so that a
    rejected caller leaves the row exactly as it was.
    """
    ensure_authenticated(user)
    if resource.owner_id != user.id:
        logger.warning(
            f"User {user.id} denied mutation of {type(resource).__name__} "
            f"{resource.id} owned by {resource.owner_id}"
        )
        raise AuthorizationDenied()
