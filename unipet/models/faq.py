"""
FAQ Model
"""

from unipet.extensions import db
from unipet.models.base import ContentMixin


class FaqItem(ContentMixin, db.Model):
    """Question and answer pair for the FAQ page"""
    __tablename__ = 'faq_items'

    question = db.Column(db.Text, nullable=False)
    answer = db.Column(db.Text, nullable=False)
    display_order = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    FIELDS = {
        'question': 'question',
        'answer': 'answer',
        'display_order': 'displayOrder',
        'is_active': 'isActive',
    }

    def __repr__(self):
        return f'<FaqItem {self.display_order}: {self.question[:30]}>'
