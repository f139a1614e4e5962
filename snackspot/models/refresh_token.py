"""Refresh token model."""

import hashlib
from datetime import datetime
from snackspot.extensions import db


class RefreshToken(db.Model):
    """Long-lived token used to mint new access tokens. Only the hash is stored."""
    __tablename__ = 'refresh_tokens'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'),
                        nullable=False, index=True)
    token_hash = db.Column(db.String(64), unique=True, nullable=False, index=True)
    expires_at = db.Column(db.DateTime, nullable=False)
    revoked_at = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    @staticmethod
    def hash_token(raw_token):
        return hashlib.sha256(raw_token.encode('utf-8')).hexdigest()

    @property
    def is_active(self):
        return self.revoked_at is None and self.expires_at > datetime.utcnow()

    def revoke(self):
        if self.revoked_at is None:
            self.revoked_at = datetime.utcnow()

    def __repr__(self):
        return f'<RefreshToken user={self.user_id}>'
