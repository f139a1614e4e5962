"""Snack category model."""

from datetime import datetime
from slugify import slugify
from snackspot.extensions import db


class Category(db.Model):
    """Shared snack category (Sweet Snacks, Drinks, ...)."""
    __tablename__ = 'categories'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)
    slug = db.Column(db.String(120), unique=True, index=True)
    description = db.Column(db.String(500))
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Snacks keep their category: deletion is restricted while any reference it
    snacks = db.relationship('Snack', backref='category', lazy='dynamic', passive_deletes='all')

    def generate_slug(self):
        """Generate a unique slug for the category."""
        base_slug = slugify(self.name) if self.name else 'category'
        slug = base_slug
        counter = 1
        while Category.query.filter_by(slug=slug).first() is not None:
            slug = f"{base_slug}-{counter}"
            counter += 1
        self.slug = slug

    def __repr__(self):
        return f'<Category {self.name}>'
