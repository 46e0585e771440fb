"""
Network Unit Model
"""

from unipet.extensions import db
from unipet.models.base import ContentMixin


class NetworkUnit(ContentMixin, db.Model):
    """Accredited clinic or hospital in the provider network"""
    __tablename__ = 'network_units'

    name = db.Column(db.String(100), nullable=False)
    address = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(30), nullable=False)
    whatsapp = db.Column(db.String(11))
    google_maps_url = db.Column(db.String(500))
    # Stored x10: 48 means 4.8 stars
    rating = db.Column(db.Integer, nullable=False)
    services = db.Column(db.JSON, nullable=False, default=list)
    image_url = db.Column(db.Text, nullable=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)

    FIELDS = {
        'name': 'name',
        'address': 'address',
        'phone': 'phone',
        'whatsapp': 'whatsapp',
        'google_maps_url': 'googleMapsUrl',
        'rating': 'rating',
        'services': 'services',
        'image_url': 'imageUrl',
        'is_active': 'isActive',
    }

    def __repr__(self):
        return f'<NetworkUnit {self.name}>'
