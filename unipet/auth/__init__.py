"""
Auth Blueprint

Session-based authentication for the single admin account.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from unipet.auth import routes  # noqa: E402, F401
