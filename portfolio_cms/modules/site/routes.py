"""
Public Site Routes
==================

Everything here reads the backend on each request. Read failures degrade to
an empty section and are logged; visitors do not see backend errors.
"""

import logging
import re
from flask import render_template, request, redirect, url_for, flash, jsonify, abort
from flask_cors import cross_origin
from markupsafe import Markup, escape
from . import site_bp
from ...core.config import get_config_value
from ...core.data_service import DataServiceError, get_data_service
from ...core.logging_service import LoggingService
from ...core.storage import resolve_public_url
from ..collections.schemas import ENTITY_SCHEMAS, get_schema
from ..hero.editor import parse_roles

logger = logging.getLogger(__name__)

CONTACT_FIELDS = ['name', 'email', 'subject', 'message']


def format_content(content):
    """Escape text, then turn line breaks and basic markdown into HTML"""
    if not content:
        return ""

    content = str(escape(content))
    content = re.sub(r'\r\n', '\n', content)
    content = re.sub(r'\n\s*\n', '</p><p>', content)
    content = re.sub(r'\n', '<br>', content)
    content = f'<p>{content}</p>'
    content = re.sub(r'<p>\s*</p>', '', content)
    content = re.sub(r'\*\*(.*?)\*\*', r'<strong>\1</strong>', content)
    content = re.sub(r'\*(.*?)\*', r'<em>\1</em>', content)
    content = re.sub(r'`(.*?)`', r'<code>\1</code>', content)

    return Markup(content)


@site_bp.app_template_filter('format_content')
def format_content_filter(content):
    return format_content(content)


# ===== Data helpers =====

def get_section_records(entity):
    """Rows of one section ordered by position; [] when the read fails"""
    schema = get_schema(entity)
    try:
        return get_data_service().list(schema['table'], order_by='position')
    except DataServiceError as e:
        logger.error("Failed to fetch %s: %s", entity, e)
        return []


def get_hero():
    """Hero row with roles decoded and asset references resolved; None when missing"""
    table = get_config_value('HERO_TABLE', 'hero')
    try:
        hero = get_data_service().single(table)
    except DataServiceError as e:
        logger.error("Error fetching hero: %s", e)
        return None

    hero = dict(hero)
    hero['role'] = parse_roles(hero.get('role'))
    hero['profile_image_url'] = resolve_public_url(hero.get('profile_image'))
    hero['resume_url'] = resolve_public_url(hero.get('resume'))
    return hero


def _render_index(contact_form=None):
    sections = [
        {'key': key, 'title': schema['title'], 'records': get_section_records(key)}
        for key, schema in ENTITY_SCHEMAS.items()
    ]
    return render_template('site/index.html',
                           hero=get_hero(),
                           sections=sections,
                           contact_form=contact_form or {name: '' for name in CONTACT_FIELDS})


# ===== Pages =====

@site_bp.route('/')
def index():
    """Public portfolio page"""
    return _render_index()


@site_bp.route('/contact', methods=['POST'])
def contact():
    """Store a contact message; the form keeps its values on failure"""
    form = {name: request.form.get(name, '').strip() for name in CONTACT_FIELDS}

    if not all(form.values()):
        flash('Please fill in every field.', 'error')
        return _render_index(contact_form=form), 400

    table = get_config_value('CONTACT_TABLE', 'contact_form')
    try:
        get_data_service().insert(table, [form])
    except DataServiceError as e:
        logger.error("Error submitting form: %s", e)
        flash('Failed to submit message.', 'error')
        return _render_index(contact_form=form), 502

    LoggingService.info('contact', 'Contact message received',
                        {'email': form['email'], 'subject': form['subject']})
    flash('Message submitted successfully!', 'success')
    return redirect(url_for('site.index') + '#contact')


# ===== Public API =====

@site_bp.route('/api/hero', methods=['GET'])
@cross_origin()
def api_hero():
    hero = get_hero()
    if hero is None:
        return jsonify({'error': 'Hero not available'}), 404
    return jsonify(hero)


@site_bp.route('/api/sections/<entity>', methods=['GET'])
@cross_origin()
def api_section(entity):
    """Records of one section ordered by position"""
    if get_schema(entity) is None:
        abort(404)
    return jsonify(get_section_records(entity))
