"""Audit log model."""

from datetime import datetime
from snackspot.extensions import db


class AuditLog(db.Model):
    """Record of a create, update or delete performed by a user."""
    __tablename__ = 'audit_logs'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='RESTRICT'),
                        nullable=False, index=True)
    action = db.Column(db.String(100), nullable=False)
    entity = db.Column(db.String(100), nullable=False)
    entity_id = db.Column(db.Integer, nullable=False)
    timestamp = db.Column(db.DateTime, default=datetime.utcnow, index=True)
    old_value = db.Column(db.JSON)
    new_value = db.Column(db.JSON)

    __table_args__ = (
        db.Index('ix_audit_logs_entity', 'entity', 'entity_id'),
    )

    def __repr__(self):
        return f'<AuditLog {self.action} {self.entity}:{self.entity_id}>'
