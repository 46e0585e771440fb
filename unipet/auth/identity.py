"""
Admin identity stored in the session.
"""

from datetime import datetime, timezone

from flask_login import UserMixin

ADMIN_ID = 'admin'


class AdminIdentity(UserMixin):
    """The authenticated admin. Never carries the password."""

    def __init__(self, username, created_at=None):
        self.id = ADMIN_ID
        self.username = username
        self.created_at = created_at or datetime.now(timezone.utc)

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'createdAt': self.created_at.isoformat(),
        }

    def __repr__(self):
        return f'<AdminIdentity {self.username}>'
