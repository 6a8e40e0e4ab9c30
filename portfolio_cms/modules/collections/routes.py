"""
Collections Admin Routes
========================

Page routes mount an editor per admin session and render it; action routes
apply one editor operation, present its notifications and return to the
mounted view. The drag script talks to the JSON endpoints.

Routes (per entity):
- GET  /admin/<entity>/                 mount (fresh load) and render
- GET  /admin/<entity>/view             render the mounted editor
- POST /admin/<entity>/create           create from the form
- POST /admin/<entity>/<id>/edit        local field edit (JSON)
- POST /admin/<entity>/<id>/save        apply submitted fields, then save
- POST /admin/<entity>/<id>/delete      delete
- POST /admin/<entity>/reorder          drag end {active_id, over_id} or {from_index, to_index}
- GET  /admin/<entity>/api/state        mounted editor state (JSON)
"""

from flask import abort, render_template, request, redirect, url_for, jsonify
from . import collections_bp
from .editor import OrderedCollectionEditor
from .registry import registry, get_session_id
from .schemas import get_schema, get_field, format_list
from ...core.config import get_config_value
from ...core.data_service import get_data_service
from ...core.logging_service import LoggingService
from ..dashboard.admin_session import admin_required, admin_api_required


# ===== Editor helpers =====

def _schema_or_404(entity):
    schema = get_schema(entity)
    if schema is None:
        abort(404)
    return schema


def mount_editor(entity):
    """Create a fresh editor for this session and load it"""
    schema = _schema_or_404(entity)
    editor = OrderedCollectionEditor(
        schema,
        get_data_service(),
        rollback_on_failure=_config_flag('REORDER_ROLLBACK'),
    )
    editor.load()
    return registry.put(get_session_id(), entity, editor)


def get_editor(entity):
    """The mounted editor for this session, mounting one if needed"""
    _schema_or_404(entity)
    editor = registry.get(get_session_id(), entity)
    if editor is None:
        editor = mount_editor(entity)
    return editor


def _index_or_404(editor, record_id):
    """Current position of a record; the page that sent it may be stale"""
    index = editor.index_of(record_id)
    if index < 0:
        abort(404)
    return index


def _wants_json():
    return request.is_json or request.accept_mimetypes.best == 'application/json'


def _back_to_view(entity):
    return redirect(url_for('collections_admin.editor_view', entity=entity))


def _config_flag(key):
    value = get_config_value(key, False)
    if isinstance(value, str):
        return value.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(value)


def _parse_int(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@collections_bp.app_template_filter('field_value')
def field_value_filter(value, field):
    """Render a stored value into its form control"""
    if field.get('type') == 'list':
        return format_list(value, field.get('delimiter', ','))
    return '' if value is None else value


# ===== Page routes =====

@collections_bp.route('/<entity>/')
@admin_required
def editor_page(entity):
    """Mount the editor for an entity - full read ordered by position"""
    editor = mount_editor(entity)
    editor.notifier.flash_all()
    return render_template('collections/editor.html', editor=editor, schema=editor.schema)


@collections_bp.route('/<entity>/view')
@admin_required
def editor_view(entity):
    """Render the mounted editor without reloading"""
    editor = get_editor(entity)
    editor.notifier.flash_all()
    return render_template('collections/editor.html', editor=editor, schema=editor.schema)


# ===== Actions =====

@collections_bp.route('/<entity>/create', methods=['POST'])
@admin_required
def create_record(entity):
    """Create a record from the creation form"""
    editor = get_editor(entity)
    fields = {f['name']: request.form.get(f['name'], '') for f in editor.schema['fields']}

    inserted = editor.create(fields)
    if inserted is not None:
        LoggingService.log_user_action(entity, 'record created',
                                       {'ids': [row.get('id') for row in inserted]})

    editor.notifier.flash_all()
    return _back_to_view(entity)


@collections_bp.route('/<entity>/<int:record_id>/save', methods=['POST'])
@admin_required
def save_record(entity, record_id):
    """Apply the submitted field values locally, then save the record"""
    editor = get_editor(entity)
    index = _index_or_404(editor, record_id)

    for field in editor.schema['fields']:
        if field['name'] in request.form:
            editor.edit_field(index, field['name'], request.form.get(field['name']))

    if editor.save(index):
        LoggingService.log_user_action(entity, 'record saved', {'id': record_id})
    else:
        LoggingService.warning(entity, 'Record save failed', {'id': record_id})

    editor.notifier.flash_all()
    return _back_to_view(entity)


@collections_bp.route('/<entity>/<int:record_id>/delete', methods=['POST'])
@admin_required
def delete_record(entity, record_id):
    """Delete a record once the backend confirms"""
    editor = get_editor(entity)
    index = _index_or_404(editor, record_id)

    if editor.delete(index):
        LoggingService.log_user_action(entity, 'record deleted', {'id': record_id})

    editor.notifier.flash_all()
    return _back_to_view(entity)


@collections_bp.route('/<entity>/<int:record_id>/edit', methods=['POST'])
@admin_api_required
def edit_record(entity, record_id):
    """Local field edit - nothing is sent to the backend"""
    _schema_or_404(entity)
    try:
        editor = get_editor(entity)
        index = editor.index_of(record_id)
        if index < 0:
            return jsonify({'error': 'Record not found'}), 404

        data = request.get_json(silent=True) or request.form
        field_name = data.get('field')
        if not field_name or get_field(editor.schema, field_name) is None:
            return jsonify({'error': 'Unknown field'}), 400

        record = editor.edit_field(index, field_name, data.get('value', ''))
        return jsonify({'success': True, 'record': record})
    except Exception as e:
        LoggingService.log_error_with_traceback(entity, e)
        return jsonify({'error': str(e)}), 500


@collections_bp.route('/<entity>/reorder', methods=['POST'])
@admin_required
def reorder_records(entity):
    """Drag end: move one record and persist the new positions"""
    editor = get_editor(entity)
    data = request.get_json(silent=True) or request.form
    before = [r.get('id') for r in editor.records]

    if data.get('active_id') is not None:
        changed = editor.reorder_by_id(_parse_int(data.get('active_id')),
                                       _parse_int(data.get('over_id')))
    else:
        from_index = _parse_int(data.get('from_index'))
        to_index = _parse_int(data.get('to_index'))
        if from_index is None or to_index is None:
            if _wants_json():
                return jsonify({'error': 'from_index and to_index are required'}), 400
            return _back_to_view(entity)
        if from_index < 0 or from_index >= len(editor.records):
            abort(404)
        # Targets past either end clamp to it
        to_index = max(0, min(to_index, len(editor.records) - 1))
        changed = editor.reorder(from_index, to_index)

    after = [r.get('id') for r in editor.records]
    if changed or before != after:
        LoggingService.log_user_action(entity, 'records reordered',
                                       {'order': after, 'persisted': changed})

    # The drag script re-renders the view afterwards, so flash in both cases
    notifications = editor.notifier.flash_all()
    if _wants_json():
        return jsonify({
            'success': changed,
            'order': after,
            'notifications': [{'category': c, 'message': m} for c, m in notifications],
        })

    return _back_to_view(entity)


@collections_bp.route('/<entity>/api/state', methods=['GET'])
@admin_api_required
def editor_state(entity):
    """Mounted editor state"""
    _schema_or_404(entity)
    try:
        editor = get_editor(entity)
        state = editor.to_dict()
        state['notifications'] = editor.notifier.as_json()
        return jsonify(state)
    except Exception as e:
        LoggingService.log_error_with_traceback(entity, e)
        return jsonify({'error': str(e)}), 500
