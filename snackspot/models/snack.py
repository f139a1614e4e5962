"""Snack model."""

import enum
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from snackspot.extensions import db

RATING_PLACES = Decimal('0.01')


class DataSource(enum.Enum):
    USER = 'user'
    SCRAPED = 'scraped'
    SEEDED = 'seeded'


class Snack(db.Model):
    """A food item sold at a store, owned by the user who added it."""
    __tablename__ = 'snacks'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.String(2000))
    category_id = db.Column(db.Integer, db.ForeignKey('categories.id', ondelete='RESTRICT'),
                            nullable=False)
    image = db.Column(db.LargeBinary)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'),
                        nullable=False, index=True)
    store_id = db.Column(db.Integer, db.ForeignKey('stores.id', ondelete='RESTRICT'),
                         nullable=False, index=True)
    average_rating = db.Column(db.Numeric(3, 2), nullable=False, default=Decimal('0.00'))
    total_ratings = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    data_source = db.Column(
        db.Enum(DataSource, name='data_source', values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=DataSource.USER,
    )
    is_deleted = db.Column(db.Boolean, nullable=False, default=False)

    # Relationships
    reviews = db.relationship('Review', backref='snack', lazy='dynamic',
                              cascade='all, delete-orphan', passive_deletes=True)

    __table_args__ = (
        db.CheckConstraint('average_rating >= 0 AND average_rating <= 5',
                           name='ck_snacks_average_rating_range'),
        db.CheckConstraint('total_ratings >= 0', name='ck_snacks_total_ratings_non_negative'),
    )

    @property
    def owner_id(self):
        return self.user_id

    @property
    def has_image(self):
        return self.image is not None

    def update_rating(self):
        """Recompute the aggregate from every visible review.

        Always a full recomputation over the current rows, never a running
        average, so repeated edits and deletes cannot drift.
        """
        ratings = [r.rating for r in self.reviews.filter_by(is_hidden=False).all()]
        if ratings:
            mean = Decimal(sum(ratings)) / Decimal(len(ratings))
            self.average_rating = mean.quantize(RATING_PLACES, rounding=ROUND_HALF_UP)
            self.total_ratings = len(ratings)
        else:
            self.average_rating = Decimal('0.00')
            self.total_ratings = 0

    def get_visible_reviews(self):
        """Visible reviews, newest first."""
        from .review import Review
        return self.reviews.filter_by(is_hidden=False).order_by(
            Review.created_at.desc(), Review.id.desc()
        ).all()

    def __repr__(self):
        return f'<Snack {self.name}>'
