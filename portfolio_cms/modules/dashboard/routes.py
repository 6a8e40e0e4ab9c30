"""
Admin Dashboard Routes
======================

Login gate, logout and the admin home page.
"""

from flask import current_app, render_template, request, redirect, url_for, flash
from . import dashboard_bp
from .admin_session import AdminSession, admin_required
from ...core.data_service import get_data_service
from ...core.logging_service import LoggingService
from ..collections.registry import release_session_editors
from ..collections.schemas import ENTITY_SCHEMAS
from ..hero.editor import HeroEditor


def _safe_next(next_page):
    """Only follow relative redirects"""
    if next_page and next_page.startswith('/') and not next_page.startswith('//'):
        return next_page
    return None


def site_enabled():
    """Whether the public site blueprint is registered on this app"""
    return 'site' in current_app.blueprints


@dashboard_bp.app_context_processor
def inject_admin_nav():
    """Section list for the admin sidebar"""
    return {
        'site_enabled': site_enabled(),
        'admin_sections': [
            {'key': key, 'title': schema['title']}
            for key, schema in ENTITY_SCHEMAS.items()
        ],
    }


@dashboard_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Admin login route"""
    admin = AdminSession()

    if request.method == 'POST':
        username = request.form.get('username', '').strip()
        password = request.form.get('password', '')

        if admin.login(username, password):
            LoggingService.log_user_action('auth', 'login')
            flash('Login correct', 'success')
            return redirect(_safe_next(request.args.get('next')) or url_for('admin.dashboard'))

        LoggingService.warning('auth', 'Failed admin login', {'username': username})
        flash('Invalid login. Please try again.', 'error')

    return render_template('dashboard/login.html')


@dashboard_bp.route('/logout', methods=['GET', 'POST'])
def logout():
    """Admin logout route"""
    AdminSession().logout()
    release_session_editors()
    LoggingService.log_user_action('auth', 'logout')
    flash('You have been logged out', 'info')
    if site_enabled():
        return redirect(url_for('site.index'))
    return redirect(url_for('admin.login'))


@dashboard_bp.route('/')
@dashboard_bp.route('/dashboard')
@admin_required
def dashboard():
    """Admin home - section navigation, hero editor and recent activity"""
    hero_editor = HeroEditor(get_data_service())
    hero_editor.load()
    hero_editor.notifier.flash_all()

    recent_logs = LoggingService.get_recent_logs(limit=15)
    return render_template('dashboard/dashboard.html',
                           hero=hero_editor.hero,
                           recent_logs=recent_logs)
