"""
Site Settings Model
"""

from unipet.extensions import db
from unipet.models.base import ContentMixin, isoformat, utcnow


class SiteSettings(ContentMixin, db.Model):
    """Single row of contact details, legal texts and page images"""
    __tablename__ = 'site_settings'

    whatsapp = db.Column(db.String(30))
    email = db.Column(db.String(255))
    phone = db.Column(db.String(30))
    address = db.Column(db.String(255))
    cnpj = db.Column(db.String(20))
    instagram_url = db.Column(db.String(500))
    facebook_url = db.Column(db.String(500))
    linkedin_url = db.Column(db.String(500))
    youtube_url = db.Column(db.String(500))
    business_hours = db.Column(db.Text)
    our_story = db.Column(db.Text)
    privacy_policy = db.Column(db.Text)
    terms_of_use = db.Column(db.Text)
    main_image = db.Column(db.Text)
    network_image = db.Column(db.Text)
    about_image = db.Column(db.Text)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    FIELDS = {
        'whatsapp': 'whatsapp',
        'email': 'email',
        'phone': 'phone',
        'address': 'address',
        'cnpj': 'cnpj',
        'instagram_url': 'instagramUrl',
        'facebook_url': 'facebookUrl',
        'linkedin_url': 'linkedinUrl',
        'youtube_url': 'youtubeUrl',
        'business_hours': 'businessHours',
        'our_story': 'ourStory',
        'privacy_policy': 'privacyPolicy',
        'terms_of_use': 'termsOfUse',
        'main_image': 'mainImage',
        'network_image': 'networkImage',
        'about_image': 'aboutImage',
    }

    def to_dict(self):
        data = super().to_dict()
        data['updatedAt'] = isoformat(self.updated_at)
        return data

    def __repr__(self):
        return f'<SiteSettings {self.email}>'
