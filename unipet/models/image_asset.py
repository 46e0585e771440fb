"""
Image Asset Model
"""

from unipet.extensions import db
from unipet.models.base import ContentMixin


class ImageAsset(ContentMixin, db.Model):
    """Processed image uploaded through the admin console"""
    __tablename__ = 'image_assets'

    filename = db.Column(db.String(255), nullable=False)
    mime_type = db.Column(db.String(50), nullable=False)
    width = db.Column(db.Integer, nullable=False)
    height = db.Column(db.Integer, nullable=False)
    size = db.Column(db.Integer, nullable=False)
    data = db.Column(db.LargeBinary, nullable=False)

    FIELDS = {
        'filename': 'filename',
        'mime_type': 'mimeType',
        'width': 'width',
        'height': 'height',
        'size': 'size',
    }

    @property
    def url(self):
        return f'/api/images/{self.id}'

    def to_dict(self):
        data = super().to_dict()
        data['url'] = self.url
        return data

    def __repr__(self):
        return f'<ImageAsset {self.filename} {self.width}x{self.height}>'
