"""
Column helpers shared by the content models.
"""

import uuid
from datetime import datetime, timezone

from unipet.extensions import db


def new_id():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


def isoformat(value):
    return value.isoformat() + 'Z' if value else None


class ContentMixin:
    """UUID primary key plus creation timestamp."""

    id = db.Column(db.String(36), primary_key=True, default=new_id)
    created_at = db.Column(db.DateTime, default=utcnow, nullable=False)

    # attribute name -> JSON key, used by apply() and to_dict()
    FIELDS = {}

    def apply(self, values):
        """Copy validated values (keyed by attribute name) onto the row."""
        for attr, value in values.items():
            if attr in self.FIELDS:
                setattr(self, attr, value)
        return self

    def to_dict(self):
        data = {'id': self.id}
        for attr, key in self.FIELDS.items():
            data[key] = getattr(self, attr)
        data['createdAt'] = isoformat(self.created_at)
        return data
