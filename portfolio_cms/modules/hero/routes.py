"""
Hero Admin Routes
=================

Edit form for the hero section and its save action (uploads + upsert).
"""

from flask import render_template, request, redirect, url_for
from . import hero_bp
from .editor import HeroEditor
from ...core.data_service import get_data_service
from ...core.logging_service import LoggingService
from ..dashboard.admin_session import admin_required

ALLOWED_IMAGE_EXTENSIONS = {'png', 'jpg', 'jpeg', 'gif', 'webp'}
ALLOWED_RESUME_EXTENSIONS = {'pdf'}


def _allowed_file(filename, allowed):
    return '.' in filename and filename.rsplit('.', 1)[1].lower() in allowed


def _read_upload(field_name, allowed):
    """(filename, bytes) for a submitted file, None when nothing was chosen"""
    file = request.files.get(field_name)
    if file is None or not file.filename:
        return None
    if not _allowed_file(file.filename, allowed):
        raise ValueError(f"Invalid file type: {file.filename}")
    return file.filename, file.read()


@hero_bp.route('/')
@admin_required
def hero_editor():
    """Hero editor page"""
    editor = HeroEditor(get_data_service())
    editor.load()
    editor.notifier.flash_all()
    return render_template('hero/hero_editor.html', hero=editor.hero)


@hero_bp.route('/save', methods=['POST'])
@admin_required
def save_hero():
    """Save hero fields, uploading a new profile image / resume first"""
    next_page = request.form.get('next') or url_for('hero_admin.hero_editor')
    if not next_page.startswith('/') or next_page.startswith('//'):
        next_page = url_for('hero_admin.hero_editor')

    editor = HeroEditor(get_data_service())
    if not editor.load():
        if editor.backend_unreachable:
            editor.notifier.flash_all()
            return redirect(next_page)
        # No hero row yet: the upsert below creates it
        editor.notifier.drain()

    try:
        profile_file = _read_upload('profile_image_file', ALLOWED_IMAGE_EXTENSIONS)
        resume_file = _read_upload('resume_file', ALLOWED_RESUME_EXTENSIONS)
    except ValueError as e:
        editor.notifier.error(str(e))
        editor.notifier.flash_all()
        return redirect(next_page)

    editor.update_fields({
        'name': request.form.get('name', '').strip(),
        'role': request.form.get('role', ''),
        'description': request.form.get('description', '').strip(),
        'linkedin_url': request.form.get('linkedin_url', '').strip(),
        'email': request.form.get('email', '').strip(),
    })

    if editor.save(profile_file=profile_file, resume_file=resume_file):
        LoggingService.log_user_action('hero', 'hero saved', {
            'profile_uploaded': bool(profile_file),
            'resume_uploaded': bool(resume_file),
        })
    else:
        LoggingService.warning('hero', 'Hero save failed')

    editor.notifier.flash_all()
    return redirect(next_page)
