"""Snack categories."""

import logging

from sqlalchemy import func

from snackspot.errors import NotFound, ValidationFailed
from snackspot.extensions import db
from snackspot.models import Category
from snackspot.services import audit
from snackspot.services.ownership import ensure_authenticated

logger = logging.getLogger(__name__)

DEFAULT_CATEGORIES = [
    ('Sweet Snacks', 'Cookies, chocolates, and other sweet treats'),
    ('Savory Snacks', 'Chips, crackers, and salty snacks'),
    ('Healthy Snacks', 'Nuts, fruits, and nutritious options'),
    ('Drinks', 'Beverages and liquid refreshments'),
    ('Vegan Snacks', 'Plant-based snack options'),
]


def normalize_name(name):
    """Trim and collapse internal whitespace."""
    return ' '.join((name or '').split())


def list_categories():
    return Category.query.order_by(Category.name).all()


def get_category(category_id):
    category = db.session.get(Category, category_id)
    if category is None:
        raise NotFound('Category not found')
    return category


def find_by_name(name):
    return Category.query.filter(func.lower(Category.name) == name.lower()).first()


def create_category(user, name, description=None):
    """Create a category, or return the one with the same name.

    Returns ``(category, created)``.
    """
    ensure_authenticated(user)
    name = normalize_name(name)
    if not name:
        raise ValidationFailed('Category name is required')

    existing = find_by_name(name)
    if existing is not None:
        return existing, False

    category = Category(name=name, description=(description or '').strip() or None)
    category.generate_slug()
    db.session.add(category)
    audit.record(user, 'create', category, new_value={'name': name})
    db.session.commit()

    logger.info(f"User {user.id} created category {category.id} ({name})")
    return category, True


def ensure_default_categories():
    """Insert any missing default category. Returns how many were added."""
    added = 0
    for name, description in DEFAULT_CATEGORIES:
        if find_by_name(name) is None:
            category = Category(name=name, description=description)
            category.generate_slug()
            db.session.add(category)
            db.session.flush()
            added += 1
    db.session.commit()
    return added
