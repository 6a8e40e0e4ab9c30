"""
Hero Admin Module
=================

Admin editor for the singleton hero section.

Provides:
- Name, roles, description and contact links
- Profile image and resume upload to the public asset bucket
"""

from flask import Blueprint

hero_bp = Blueprint(
    'hero_admin',
    __name__,
    url_prefix='/admin/hero',
    template_folder='templates',
)

from . import routes
from .editor import HeroEditor

__all__ = ['hero_bp', 'HeroEditor']
