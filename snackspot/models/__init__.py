"""Database models package."""

from .user import User
from .category import Category
from .store import Store
from .snack import Snack, DataSource
from .review import Review
from .refresh_token import RefreshToken
from .audit_log import AuditLog

__all__ = [
    'User',
    'Category',
    'Store',
    'Snack',
    'DataSource',
    'Review',
    'RefreshToken',
    'AuditLog',
]
