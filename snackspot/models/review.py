"""Review model."""

from datetime import datetime
from snackspot.extensions import db

MIN_RATING = 1
MAX_RATING = 5


class Review(db.Model):
    """A user's rating (and optional comment) for a snack."""
    __tablename__ = 'reviews'

    id = db.Column(db.Integer, primary_key=True)
    snack_id = db.Column(db.Integer, db.ForeignKey('snacks.id', ondelete='CASCADE'), nullable=False)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False)
    rating = db.Column(db.Integer, nullable=False)  # 1-5
    comment = db.Column(db.String(1000))
    is_hidden = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.UniqueConstraint('snack_id', 'user_id', name='uq_reviews_snack_user'),
        db.CheckConstraint(f'rating >= {MIN_RATING} AND rating <= {MAX_RATING}',
                           name='ck_reviews_rating_range'),
    )

    @property
    def owner_id(self):
        return self.user_id

    def __repr__(self):
        return f'<Review {self.rating} stars>'
