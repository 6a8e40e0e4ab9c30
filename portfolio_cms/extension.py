"""
PortfolioCMS Extension
======================

Registers the portfolio modules on a Flask app.

Usage:
    from flask import Flask
    from portfolio_cms import PortfolioCMS

    app = Flask(__name__)
    PortfolioCMS(app, {'brand_name': 'Jane Doe'})

Modules can be switched off with the 'features' mapping, e.g.
{'features': {'site': False}} for an admin-only deployment.
"""

import logging
import os

from .core.config import Config

logger = logging.getLogger(__name__)

DEFAULT_FEATURES = {
    'dashboard': True,
    'hero': True,
    'collections': True,
    'site': True,
}

DEV_SECRET_KEY = 'dev-secret-key-change-in-production'


class PortfolioCMS:
    """Flask extension wiring the admin panel and public site together"""

    def __init__(self, app=None, config=None, data_service=None):
        self._config = {}
        self._registered = []
        self.data_service = data_service
        if app is not None:
            self.init_app(app, config)

    def init_app(self, app, config=None):
        self._config = self._build_config(app, config or {})

        self._apply_app_defaults(app)
        self._setup_database_dir(app)
        self._register_blueprints(app)

        app.context_processor(self._inject_template_context)
        app.extensions['portfolio_cms'] = self

        logger.info("PortfolioCMS initialised with modules: %s", ', '.join(self._registered))

    # ===== Configuration =====

    def _build_config(self, app, config):
        features = dict(DEFAULT_FEATURES)
        features.update(config.get('features', {}))
        return {
            'brand_name': config.get('brand_name') or app.config.get('BRAND_NAME') or Config.BRAND_NAME,
            'features': features,
        }

    def _apply_app_defaults(self, app):
        """Fill app.config from Config for keys the app did not set"""
        if not app.config.get('SECRET_KEY'):
            app.config['SECRET_KEY'] = Config.SECRET_KEY or DEV_SECRET_KEY
            if app.config['SECRET_KEY'] == DEV_SECRET_KEY:
                logger.warning("FLASK_SECRET_KEY is not set, using the development key")

        for key in ('SUPABASE_URL', 'SUPABASE_KEY', 'STORAGE_BUCKET', 'REQUEST_TIMEOUT',
                    'ADMIN_USERNAME', 'ADMIN_PASSWORD', 'REORDER_ROLLBACK', 'EDITOR_IDLE_TIMEOUT',
                    'HERO_TABLE', 'CONTACT_TABLE'):
            if app.config.get(key) is None:
                app.config[key] = getattr(Config, key)

        if not app.config.get('DB_DIR'):
            app.config['DB_DIR'] = Config.DB_DIR
        if not app.config.get('LOG_DB'):
            app.config['LOG_DB'] = os.path.join(app.config['DB_DIR'], 'activity_log.db')

    def _setup_database_dir(self, app):
        db_dir = app.config['DB_DIR']
        try:
            os.makedirs(db_dir, exist_ok=True)
        except OSError as e:
            logger.warning("Could not create DB_DIR %s: %s", db_dir, e)

    # ===== Modules =====

    def _register_blueprints(self, app):
        features = self._config['features']

        if features.get('dashboard'):
            from .modules.dashboard import dashboard_bp
            app.register_blueprint(dashboard_bp)
            self._registered.append('dashboard')

        if features.get('hero'):
            from .modules.hero import hero_bp
            app.register_blueprint(hero_bp)
            self._registered.append('hero')

        if features.get('collections'):
            from .modules.collections import collections_bp
            from .modules.collections.registry import registry
            app.register_blueprint(collections_bp)
            registry.idle_timeout = int(app.config['EDITOR_IDLE_TIMEOUT'])
            self._registered.append('collections')

        if features.get('site'):
            from .modules.site import site_bp
            app.register_blueprint(site_bp)
            self._registered.append('site')

    def get_registered_modules(self):
        return list(self._registered)

    def _inject_template_context(self):
        return {
            'portfolio_config': self._config,
            'brand_name': self._config['brand_name'],
        }
