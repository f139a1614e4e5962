"""Store model."""

from datetime import datetime
from snackspot.extensions import db


class Store(db.Model):
    """Physical location that hosts snacks."""
    __tablename__ = 'stores'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(80), nullable=False)
    address = db.Column(db.String(120))
    latitude = db.Column(db.Numeric(9, 6), nullable=False)
    longitude = db.Column(db.Numeric(9, 6), nullable=False)
    created_by_user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='RESTRICT'),
                                   nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    is_deleted = db.Column(db.Boolean, nullable=False, default=False)

    snacks = db.relationship('Snack', backref='store', lazy='dynamic', passive_deletes='all')

    __table_args__ = (
        db.Index('ix_stores_name_location', 'name', 'latitude', 'longitude'),
    )

    @property
    def owner_id(self):
        return self.created_by_user_id

    def active_snack_count(self):
        """Number of snacks at this store that have not been deleted."""
        return self.snacks.filter_by(is_deleted=False).count()

    def __repr__(self):
        return f'<Store {self.name}>'
