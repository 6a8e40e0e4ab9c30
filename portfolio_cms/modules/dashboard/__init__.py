"""
Dashboard Module
================

Admin home for the portfolio.

Provides:
- Admin login / logout (the client-side admin flag)
- Dashboard with section navigation, the hero editor and recent activity

This is the foundation module the other admin sections plug into.
"""

from flask import Blueprint

# Blueprint name is 'admin' so every module can redirect to admin.login
dashboard_bp = Blueprint(
    'admin',
    __name__,
    url_prefix='/admin',
    template_folder='templates',
)

# Import routes after blueprint is created
from . import routes
from .admin_session import AdminSession, admin_required, admin_api_required

__all__ = ['dashboard_bp', 'AdminSession', 'admin_required', 'admin_api_required']
