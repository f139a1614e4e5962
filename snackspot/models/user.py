"""User model."""

from datetime import datetime
from flask_login import UserMixin
from snackspot.extensions import db, bcrypt

XP_PER_LEVEL = 100


class User(UserMixin, db.Model):
    """Registered community member who adds snacks, stores and reviews."""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), unique=True, nullable=False, index=True)
    email = db.Column(db.String(256), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(256), nullable=False)
    level = db.Column(db.Integer, nullable=False, default=1)
    experience_points = db.Column(db.Integer, nullable=False, default=0)
    latitude = db.Column(db.Numeric(9, 6))
    longitude = db.Column(db.Numeric(9, 6))
    bio = db.Column(db.String(200))
    avatar_emoji = db.Column(db.String(8), default='\U0001F36A')
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    snacks = db.relationship('Snack', backref='user', lazy='dynamic')
    reviews = db.relationship('Review', backref='user', lazy='dynamic', cascade='all, delete-orphan')
    stores = db.relationship('Store', backref='created_by', lazy='dynamic')
    refresh_tokens = db.relationship('RefreshToken', backref='user', lazy='dynamic',
                                     cascade='all, delete-orphan')

    __table_args__ = (
        db.CheckConstraint('level >= 1', name='ck_users_level_positive'),
        db.CheckConstraint('experience_points >= 0', name='ck_users_xp_non_negative'),
    )

    def set_password(self, password):
        """Hash and set the password."""
        self.password_hash = bcrypt.generate_password_hash(password).decode('utf-8')

    def check_password(self, password):
        """Check if password matches."""
        return bcrypt.check_password_hash(self.password_hash, password)

    def award_experience(self, points):
        """Add experience points and recompute the level from the total."""
        self.experience_points = (self.experience_points or 0) + points
        self.level = 1 + self.experience_points // XP_PER_LEVEL

    def __repr__(self):
        return f'<User {self.username}>'
