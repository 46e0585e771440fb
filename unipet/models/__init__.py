"""
Models Package

Exports all models for easy importing.
"""

from unipet.models.plan import Plan
from unipet.models.network_unit import NetworkUnit
from unipet.models.faq import FaqItem
from unipet.models.contact import ContactSubmission
from unipet.models.site_settings import SiteSettings
from unipet.models.image_asset import ImageAsset

__all__ = ['Plan', 'NetworkUnit', 'FaqItem', 'ContactSubmission', 'SiteSettings', 'ImageAsset']
