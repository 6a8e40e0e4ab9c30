"""
Collections Admin Module
========================

Admin editors for the ordered content collections (experience, projects,
certifications, awards, volunteering, blogs). One generic editor driven by
per-entity schemas.

Provides:
- Creation form with required-field checks
- Inline edit, save and delete per record
- Drag reorder with position persistence
"""

from flask import Blueprint

collections_bp = Blueprint(
    'collections_admin',
    __name__,
    url_prefix='/admin',
    template_folder='templates',
    static_folder='static',
    static_url_path='/collections/static'
)

from . import routes
from .editor import OrderedCollectionEditor
from .schemas import ENTITY_SCHEMAS, get_schema

__all__ = ['collections_bp', 'OrderedCollectionEditor', 'ENTITY_SCHEMAS', 'get_schema']
