"""
Admin Blueprint

JSON API behind the admin session: content management for plans, the
provider network, FAQ, site settings, contact requests and images.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from unipet.admin import routes  # noqa: E402, F401
