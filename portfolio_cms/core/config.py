import os
from dotenv import load_dotenv

load_dotenv(override=True)

class Config:
    """
    Base configuration for the portfolio site.
    Deployments provide the backend credentials via environment variables.
    """
    # Flask settings
    SECRET_KEY = os.getenv('FLASK_SECRET_KEY')
    BRAND_NAME = os.getenv('BRAND_NAME', 'Portfolio')

    # Hosted backend (Supabase-style REST + storage)
    SUPABASE_URL = os.getenv('SUPABASE_URL', '')
    SUPABASE_KEY = os.getenv('SUPABASE_KEY', '')
    STORAGE_BUCKET = os.getenv('STORAGE_BUCKET', 'public-assets')
    REQUEST_TIMEOUT = int(os.getenv('REQUEST_TIMEOUT', '15'))

    # Admin gate - a hardcoded credential pair, not a security boundary
    ADMIN_USERNAME = os.getenv('ADMIN_USERNAME', 'admin')
    ADMIN_PASSWORD = os.getenv('ADMIN_PASSWORD', 'admin')

    # Restore the previous order when persisting a reorder fails
    REORDER_ROLLBACK = os.getenv('REORDER_ROLLBACK', 'false')

    # Seconds before an idle admin session's editors are dropped
    EDITOR_IDLE_TIMEOUT = int(os.getenv('EDITOR_IDLE_TIMEOUT', '7200'))

    # Local activity log
    DB_DIR = os.getenv('DB_DIR', os.path.join(os.getcwd(), 'databases'))
    LOG_DB = os.getenv('LOG_DB', os.path.join(DB_DIR, 'activity_log.db'))

    # Table names
    HERO_TABLE = "hero"
    CONTACT_TABLE = "contact_form"

    # Port for local server (optional)
    port = int(os.getenv('PORT', '5000'))


def get_config_value(key, default=None):
    """Get configuration value: Flask app config first, then Config, then env var"""
    try:
        from flask import current_app
        val = current_app.config.get(key)
        if val:
            return val
    except RuntimeError:
        pass
    val = getattr(Config, key, None)
    if val:
        return val
    return os.getenv(key, default)
