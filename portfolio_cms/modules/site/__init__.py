"""
Public Site Module
==================

The public portfolio page and its read-only API.

Provides:
- / -- hero plus every section ordered by position, and the contact form
- /contact -- contact form submission (append-only table)
- /api/hero, /api/sections/<entity> -- CORS-enabled JSON reads
"""

from flask import Blueprint

site_bp = Blueprint(
    'site',
    __name__,
    template_folder='templates',
    static_folder='static',
    static_url_path='/site-static'
)

from . import routes

__all__ = ['site_bp']
