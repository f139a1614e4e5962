"""Stores: listing, idempotent creation and owner-only edits."""

import logging
from decimal import Decimal

from flask import current_app
from sqlalchemy import func, or_

from snackspot.errors import NotFound, ValidationFailed
from snackspot.extensions import db
from snackspot.models import Store
from snackspot.services import audit
from snackspot.services.ownership import ensure_authenticated, ensure_owner
from snackspot.services.snack_service import like_pattern
from snackspot.utils.geo import validate_coordinates

logger = logging.getLogger(__name__)

STORE_AUDIT_FIELDS = ('name', 'address', 'latitude', 'longitude', 'is_deleted')
COORDINATE_PLACES = Decimal('0.000001')


def _coordinate(value):
    return Decimal(str(value)).quantize(COORDINATE_PLACES)


def _clean_store_fields(name, address, latitude, longitude):
    name = (name or '').strip()
    if not name:
        raise ValidationFailed('Store name is required')
    if latitude is None or longitude is None or not validate_coordinates(latitude, longitude):
        raise ValidationFailed('Invalid latitude or longitude values')
    address = address.strip() if address else None
    return name, address or None, _coordinate(latitude), _coordinate(longitude)


def list_stores(search=None, page=1, page_size=None):
    """Active stores ordered by name, optionally filtered by name/address."""
    page_size = page_size or current_app.config['ITEMS_PER_PAGE']
    query = Store.query.filter_by(is_deleted=False)
    if search and search.strip():
        pattern = like_pattern(search.strip())
        query = query.filter(
            or_(
                Store.name.ilike(pattern, escape='\\'),
                Store.address.ilike(pattern, escape='\\')
            )
        )
    return query.order_by(Store.name, Store.id).paginate(
        page=page, per_page=page_size, error_out=False
    )


def get_store(store_id):
    store = db.session.get(Store, store_id)
    if store is None or store.is_deleted:
        raise NotFound('Store not found')
    return store


def find_existing_store(name, latitude, longitude):
    return Store.query.filter(
        func.lower(Store.name) == name.lower(),
        Store.latitude == latitude,
        Store.longitude == longitude,
        Store.is_deleted == False,  # noqa: E712
    ).first()


def create_store(user, name, latitude, longitude, address=None):
    """Create a store, or return the matching one.

    Returns ``(store, created)``; ``created`` is False when an active store
    with the same name (ignoring case) already sits at the same coordinates.
    """
    ensure_authenticated(user)
    name, address, latitude, longitude = _clean_store_fields(name, address, latitude, longitude)

    existing = find_existing_store(name, latitude, longitude)
    if existing is not None:
        logger.info(f"Store '{name}' already exists as {existing.id}")
        return existing, False

    store = Store(
        name=name,
        address=address,
        latitude=latitude,
        longitude=longitude,
        created_by=user,
    )
    db.session.add(store)
    audit.record(user, 'create', store, new_value=audit.snapshot(store, STORE_AUDIT_FIELDS))
    db.session.commit()

    logger.info(f"User {user.id} created store {store.id} ({store.name})")
    return store, True


def update_store(user, store_id, name, latitude, longitude, address=None):
    """Replace the editable fields of a store. Owner only."""
    store = get_store(store_id)
    ensure_owner(store, user)
    name, address, latitude, longitude = _clean_store_fields(name, address, latitude, longitude)

    before = audit.snapshot(store, STORE_AUDIT_FIELDS)
    store.name = name
    store.address = address
    store.latitude = latitude
    store.longitude = longitude
    audit.record(user, 'update', store, old_value=before,
                 new_value=audit.snapshot(store, STORE_AUDIT_FIELDS))
    db.session.commit()

    logger.info(f"User {user.id} updated store {store.id}")
    return store


def delete_store(user, store_id):
    """Soft-delete a store with no active snacks. Owner only."""
    store = get_store(store_id)
    ensure_owner(store, user)

    if store.active_snack_count() > 0:
        raise ValidationFailed('Cannot delete store that has active snacks')

    before = audit.snapshot(store, STORE_AUDIT_FIELDS)
    store.is_deleted = True
    audit.record(user, 'delete', store, old_value=before,
                 new_value=audit.snapshot(store, STORE_AUDIT_FIELDS))
    db.session.commit()

    logger.info(f"User {user.id} deleted store {store.id}")
