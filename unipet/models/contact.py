"""
Contact Submission Model
"""

from unipet.extensions import db
from unipet.models.base import ContentMixin


class ContactSubmission(ContentMixin, db.Model):
    """Quote request sent through the public contact form"""
    __tablename__ = 'contact_submissions'

    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(30), nullable=False)
    city = db.Column(db.String(100), nullable=False)
    pet_name = db.Column(db.String(100), nullable=False)
    animal_type = db.Column(db.String(50), nullable=False)
    pet_age = db.Column(db.String(50), nullable=False)
    plan_interest = db.Column(db.String(100), nullable=False)
    message = db.Column(db.Text)

    FIELDS = {
        'name': 'name',
        'email': 'email',
        'phone': 'phone',
        'city': 'city',
        'pet_name': 'petName',
        'animal_type': 'animalType',
        'pet_age': 'petAge',
        'plan_interest': 'planInterest',
        'message': 'message',
    }

    def __repr__(self):
        return f'<ContactSubmission {self.email}>'
