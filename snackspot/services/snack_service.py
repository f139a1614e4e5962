"""Snack discovery and ownership-gated snack mutations."""

import logging
import math

from flask import current_app
from sqlalchemy import or_

from snackspot.errors import NotFound, ValidationFailed
from snackspot.extensions import db
from snackspot.models import Category, DataSource, Snack, Store
from snackspot.services import audit
from snackspot.services.ownership import ensure_authenticated, ensure_owner
from snackspot.utils.geo import bounding_box, haversine_distance, validate_coordinates
from snackspot.utils.images import allowed_file, sniff_content_type, DEFAULT_CONTENT_TYPE

logger = logging.getLogger(__name__)

SNACK_AUDIT_FIELDS = ('name', 'description', 'category_id', 'store_id', 'is_deleted')
SNACK_CREATION_XP = 10


def like_pattern(term):
    """Case-insensitive substring pattern with LIKE wildcards escaped."""
    escaped = term.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return f'%{escaped}%'


def validate_search_params(lat, lng, radius):
    """Check the search center and radius; returns the effective radius."""
    if lat is None or lng is None:
        raise ValidationFailed('Latitude and longitude parameters are required')
    if not validate_coordinates(lat, lng):
        raise ValidationFailed('Invalid latitude or longitude values')

    if radius is None:
        radius = current_app.config['DEFAULT_SEARCH_RADIUS_M']
    max_radius = current_app.config['MAX_SEARCH_RADIUS_M']
    try:
        radius = float(radius)
    except (TypeError, ValueError):
        raise ValidationFailed(f'Radius must be between 1 and {max_radius} meters')
    if math.isnan(radius) or radius <= 0 or radius > max_radius:
        raise ValidationFailed(f'Radius must be between 1 and {max_radius} meters')
    return radius


def find_nearby(lat, lng, radius=None, category_id=None, search=None):
    """Active snacks whose store lies within ``radius`` meters of (lat, lng).

    Returns a list of ``(snack, distance_m)`` ordered by ascending distance,
    then creation time, then id.
    """
    radius = validate_search_params(lat, lng, radius)
    lat = float(lat)
    lng = float(lng)

    query = Snack.query.join(Store, Snack.store_id == Store.id).filter(
        Snack.is_deleted == False,  # noqa: E712
        Store.is_deleted == False,  # noqa: E712
    )

    # Coarse box in SQL, exact haversine below
    min_lat, max_lat, min_lng, max_lng = bounding_box(lat, lng, radius)
    query = query.filter(Store.latitude >= min_lat, Store.latitude <= max_lat)
    if min_lng is not None:
        query = query.filter(Store.longitude >= min_lng, Store.longitude <= max_lng)

    if category_id is not None:
        query = query.filter(Snack.category_id == category_id)

    if search and search.strip():
        pattern = like_pattern(search.strip())
        query = query.filter(
            or_(
                Snack.name.ilike(pattern, escape='\\'),
                Snack.description.ilike(pattern, escape='\\'),
                Store.name.ilike(pattern, escape='\\')
            )
        )

    results = []
    for snack in query.all():
        distance = haversine_distance(lat, lng, snack.store.latitude, snack.store.longitude)
        if distance <= radius:
            results.append((snack, distance))

    results.sort(key=lambda item: (item[1], item[0].created_at, item[0].id))
    logger.debug(f"Nearby search ({lat}, {lng}) r={radius}m matched {len(results)} snacks")
    return results


def get_active_snack(snack_id):
    snack = db.session.get(Snack, snack_id)
    if snack is None or snack.is_deleted:
        raise NotFound('Snack not found')
    return snack


def _resolve_category(category_id):
    category = db.session.get(Category, category_id) if category_id is not None else None
    if category is None:
        raise ValidationFailed('Invalid category ID')
    return category


def _resolve_store(store_id):
    store = db.session.get(Store, store_id) if store_id is not None else None
    if store is None or store.is_deleted:
        raise ValidationFailed('Invalid store ID')
    return store


def _clean(text):
    if text is None:
        return None
    text = text.strip()
    return text or None


def create_snack(user, name, category_id, store_id, description=None,
                 data_source=DataSource.USER):
    """Add a snack owned by ``user``. Aggregates always start at zero."""
    ensure_authenticated(user)
    name = _clean(name)
    if not name:
        raise ValidationFailed('Name is required')
    category = _resolve_category(category_id)
    store = _resolve_store(store_id)

    snack = Snack(
        name=name,
        description=_clean(description),
        category=category,
        store=store,
        user=user,
        data_source=data_source,
    )
    db.session.add(snack)
    db.session.flush()
    user.award_experience(SNACK_CREATION_XP)
    audit.record(user, 'create', snack, new_value=audit.snapshot(snack, SNACK_AUDIT_FIELDS))
    db.session.commit()

    logger.info(f"User {user.id} created snack {snack.id} at store {store.id}")
    return snack


def update_snack(user, snack_id, name, category_id, store_id, description=None):
    """Replace the editable fields of a snack. Owner only."""
    snack = get_active_snack(snack_id)
    ensure_owner(snack, user)

    name = _clean(name)
    if not name:
        raise ValidationFailed('Name is required')
    category = _resolve_category(category_id)
    store = _resolve_store(store_id)

    before = audit.snapshot(snack, SNACK_AUDIT_FIELDS)
    snack.name = name
    snack.description = _clean(description)
    snack.category = category
    snack.store = store
    db.session.flush()
    audit.record(user, 'update', snack, old_value=before,
                 new_value=audit.snapshot(snack, SNACK_AUDIT_FIELDS))
    db.session.commit()

    logger.info(f"User {user.id} updated snack {snack.id}")
    return snack


def delete_snack(user, snack_id):
    """Soft-delete a snack and remove its reviews. Owner only."""
    snack = get_active_snack(snack_id)
    ensure_owner(snack, user)

    before = audit.snapshot(snack, SNACK_AUDIT_FIELDS)
    removed = 0
    for review in snack.reviews.all():
        db.session.delete(review)
        removed += 1

    snack.is_deleted = True
    snack.update_rating()
    audit.record(user, 'delete', snack, old_value=before,
                 new_value=audit.snapshot(snack, SNACK_AUDIT_FIELDS))
    db.session.commit()

    logger.info(f"User {user.id} deleted snack {snack.id} and {removed} reviews")


def list_user_snacks(user_id):
    """Active snacks added by a user, newest first."""
    return Snack.query.filter_by(user_id=user_id, is_deleted=False).order_by(
        Snack.created_at.desc(), Snack.id.desc()
    ).all()


def get_snack_image(snack_id):
    """Return ``(bytes, content_type)`` for a snack's image."""
    snack = get_active_snack(snack_id)
    if snack.image is None:
        raise NotFound('Image not found')
    return snack.image, sniff_content_type(snack.image)


def set_snack_image(user, snack_id, data, filename=None):
    """Attach an uploaded image to a snack. Owner only."""
    snack = get_active_snack(snack_id)
    ensure_owner(snack, user)

    if filename is not None and not allowed_file(filename):
        raise ValidationFailed('Invalid file type. Allowed: png, jpg, jpeg, gif, webp')
    if not data:
        raise ValidationFailed('No image file provided')
    max_bytes = current_app.config['MAX_IMAGE_BYTES']
    if len(data) > max_bytes:
        raise ValidationFailed(f'Image exceeds the maximum size of {max_bytes} bytes')
    content_type = sniff_content_type(data)
    if content_type == DEFAULT_CONTENT_TYPE:
        raise ValidationFailed('Unsupported image format')

    snack.image = data
    audit.record(user, 'update_image', snack, new_value={'contentType': content_type, 'bytes': len(data)})
    db.session.commit()

    logger.info(f"User {user.id} uploaded a {content_type} image for snack {snack.id}")
    return snack
