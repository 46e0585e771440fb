"""
Plan Model
"""

from unipet.extensions import db
from unipet.models.base import ContentMixin


class Plan(ContentMixin, db.Model):
    """Insurance plan shown on the plans page"""
    __tablename__ = 'plans'

    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=False)
    features = db.Column(db.JSON, nullable=False, default=list)
    # Prices in cents
    price_normal = db.Column(db.Integer, nullable=False)
    price_with_copay = db.Column(db.Integer, nullable=False)
    image = db.Column(db.Text)
    button_text = db.Column(db.String(100), nullable=False, default='Contratar Plano')
    redirect_url = db.Column(db.String(500), nullable=False, default='/contact')
    is_popular = db.Column(db.Boolean, nullable=False, default=False)
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    display_order = db.Column(db.Integer, nullable=False, default=0)

    FIELDS = {
        'name': 'name',
        'description': 'description',
        'features': 'features',
        'price_normal': 'priceNormal',
        'price_with_copay': 'priceWithCopay',
        'image': 'image',
        'button_text': 'buttonText',
        'redirect_url': 'redirectUrl',
        'is_popular': 'isPopular',
        'is_active': 'isActive',
        'display_order': 'displayOrder',
    }

    def __repr__(self):
        return f'<Plan {self.name}>'
