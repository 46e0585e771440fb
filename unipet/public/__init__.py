"""
Public Blueprint

Read-only site content for the marketing pages, the contact form and the
health probe.
"""

from flask import Blueprint

public_bp = Blueprint('public', __name__)

from unipet.public import routes  # noqa: E402, F401
