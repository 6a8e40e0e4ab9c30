"""
Portfolio CMS - Portfolio site with a Flask admin panel
=======================================================

A personal portfolio site backed by a hosted table store, with:
- Public page for the hero section and six ordered content sections
- Admin login gate and dashboard
- Generic ordered-collection editor (create, edit, save, delete, reorder)
- Hero editor with profile image and resume uploads

Usage:
    from flask import Flask
    from portfolio_cms import PortfolioCMS

    app = Flask(__name__)
    PortfolioCMS(app)
"""

__version__ = '0.1.0'

from .extension import PortfolioCMS

__all__ = ['PortfolioCMS']
