"""
Ordered collection editor
=========================

Behaviour of the generic editor against the in-memory backend: load,
local edits, save, delete, create and reorder.
Run with: pytest tests/test_collection_editor.py -v
"""

import pytest

from portfolio_cms.modules.collections.editor import OrderedCollectionEditor, move_item
from portfolio_cms.modules.collections.schemas import (
    ENTITY_SCHEMAS, empty_form, get_message, get_schema, split_list
)

from conftest import FakeDataService


def make_editor(service, entity='projects', **kwargs):
    editor = OrderedCollectionEditor(get_schema(entity), service, **kwargs)
    editor.load()
    editor.notifier.drain()
    service.calls.clear()
    return editor


def titles(editor):
    return [record['title'] for record in editor.records]


# ---------------------------------------------------------------------------
# Load
# ---------------------------------------------------------------------------

def test_load_orders_by_position(fake_service):
    fake_service.tables['projects'].reverse()
    editor = OrderedCollectionEditor(get_schema('projects'), fake_service)

    assert editor.loaded is False
    assert editor.load() is True
    assert editor.loaded is True
    assert titles(editor) == ['A', 'B', 'C']
    assert fake_service.calls == [('list', 'projects')]


def test_load_failure_gives_empty_collection_and_one_notification(fake_service):
    fake_service.failing.add('list')
    editor = OrderedCollectionEditor(get_schema('experience'), fake_service)

    assert editor.load() is False
    assert editor.loaded is True
    assert editor.records == []
    assert editor.notifier.drain() == [('error', 'Failed to load experiences.')]
    assert len(fake_service.calls_to('list')) == 1


def test_load_empty_table():
    editor = OrderedCollectionEditor(get_schema('blogs'), FakeDataService())
    assert editor.load() is True
    assert editor.records == []
    assert editor.notifier.drain() == []


# ---------------------------------------------------------------------------
# Local edits and save
# ---------------------------------------------------------------------------

def test_edit_field_is_local_only(fake_service):
    editor = make_editor(fake_service)
    editor.edit_field(1, 'title', 'B2')

    assert titles(editor) == ['A', 'B2', 'C']
    assert fake_service.calls == []


def test_edit_list_field_splits_and_trims(fake_service):
    editor = make_editor(fake_service)
    editor.edit_field(0, 'tech', ' React ,Node,  SQL ')
    assert editor.records[0]['tech'] == ['React', 'Node', 'SQL']


def test_edit_unknown_field_raises(fake_service):
    editor = make_editor(fake_service)
    with pytest.raises(KeyError):
        editor.edit_field(0, 'nope', 'x')


def test_save_sends_full_record_keyed_by_id(fake_service):
    editor = make_editor(fake_service)
    editor.edit_field(2, 'title', 'C2')

    assert editor.save(2) is True
    assert fake_service.calls_to('update') == [('update', 'projects', editor.records[2], 3)]
    assert editor.notifier.drain() == [('success', 'Updated!')]


def test_failed_save_keeps_local_edits_and_notifies_once(fake_service):
    editor = make_editor(fake_service)
    fake_service.failing.add('update')
    editor.edit_field(0, 'title', 'Edited')

    assert editor.save(0) is False
    assert editor.records[0]['title'] == 'Edited'
    messages = editor.notifier.drain()
    assert messages == [('error', get_message(editor.schema, 'save_failed'))]


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------

def test_delete_removes_record_by_id(fake_service):
    editor = make_editor(fake_service)

    assert editor.delete(1) is True
    assert titles(editor) == ['A', 'C']
    assert fake_service.calls_to('delete') == [('delete', 'projects', 2)]
    # remaining positions are not renumbered
    assert [r['position'] for r in editor.records] == [1, 3]


def test_delete_matches_id_not_index(fake_service, monkeypatch):
    editor = make_editor(fake_service)
    original_delete = fake_service.delete

    def delete_then_reorder(table, row_id):
        original_delete(table, row_id)
        # the list changes while the request is in flight
        editor.records = list(reversed(editor.records))

    monkeypatch.setattr(fake_service, 'delete', delete_then_reorder)

    assert editor.delete(0) is True
    assert [r['id'] for r in editor.records] == [3, 2]


def test_failed_delete_leaves_state_unchanged(fake_service):
    editor = make_editor(fake_service)
    fake_service.failing.add('delete')

    assert editor.delete(0) is False
    assert titles(editor) == ['A', 'B', 'C']
    assert editor.notifier.drain() == [('error', get_message(editor.schema, 'delete_failed'))]


# ---------------------------------------------------------------------------
# Create
# ---------------------------------------------------------------------------

def test_create_with_missing_field_makes_no_remote_call(fake_service):
    editor = make_editor(fake_service)
    fields = {'title': 'New', 'description': '   ', 'tech': 'Go'}

    assert editor.create(fields) is None
    assert fake_service.calls == []
    assert editor.form['title'] == 'New'
    assert editor.form['tech'] == 'Go'
    assert editor.notifier.drain() == [('error', "Title, description, and tech are required.")]


def test_create_splits_tech_and_appends_record(fake_service):
    editor = make_editor(fake_service)

    inserted = editor.create({'title': 'D', 'description': 'Fourth', 'tech': 'React, Node, SQL'})

    assert len(inserted) == 1
    (_, table, rows), = fake_service.calls_to('insert')
    assert table == 'projects'
    assert rows[0]['tech'] == ['React', 'Node', 'SQL']
    assert rows[0]['position'] == 4
    assert editor.records[-1]['id'] == inserted[0]['id']
    assert len(editor.records) == 4
    assert editor.form == empty_form(editor.schema)
    assert editor.notifier.drain() == [('success', get_message(editor.schema, 'create_success'))]


def test_create_server_position_policy_omits_position(fake_service):
    editor = make_editor(fake_service, 'experience')
    editor.create({'role': 'Lead', 'company': 'Initech', 'duration': '2024', 'description': 'Led'})

    (_, _, rows), = fake_service.calls_to('insert')
    assert 'position' not in rows[0]


def test_optional_fields_are_not_required(fake_service):
    editor = make_editor(fake_service, 'certifications')
    assert editor.create({'title': 'AWS', 'issuer': 'Amazon', 'date': '2024'}) is not None
    (_, _, rows), = fake_service.calls_to('insert')
    assert rows[0]['certificateUrl'] == ''


def test_failed_create_keeps_form(fake_service):
    editor = make_editor(fake_service)
    fake_service.failing.add('insert')

    assert editor.create({'title': 'D', 'description': 'Fourth', 'tech': 'Rust'}) is None
    assert editor.form['title'] == 'D'
    assert len(editor.records) == 3
    assert editor.notifier.drain() == [('error', get_message(editor.schema, 'create_failed'))]


# ---------------------------------------------------------------------------
# Reorder
# ---------------------------------------------------------------------------

def test_reorder_first_to_last(fake_service):
    editor = make_editor(fake_service)

    assert editor.reorder(0, 2) is True
    assert titles(editor) == ['B', 'C', 'A']
    assert fake_service.calls_to('upsert') == [
        ('upsert', 'projects', [
            {'id': 2, 'position': 1},
            {'id': 3, 'position': 2},
            {'id': 1, 'position': 3},
        ])
    ]


def test_reorder_persists_contiguous_positions(fake_service):
    editor = make_editor(fake_service)
    editor.reorder(2, 0)

    stored = sorted(fake_service.tables['projects'], key=lambda r: r['position'])
    assert [r['position'] for r in stored] == [1, 2, 3]
    assert [r['id'] for r in stored] == [r['id'] for r in editor.records]
    assert sorted(r['id'] for r in stored) == [1, 2, 3]


def test_drop_on_itself_is_noop(fake_service):
    editor = make_editor(fake_service)

    assert editor.reorder_by_id(2, 2) is False
    assert editor.reorder(1, 1) is False
    assert titles(editor) == ['A', 'B', 'C']
    assert fake_service.calls == []
    assert editor.notifier.drain() == []


def test_reorder_by_id(fake_service):
    editor = make_editor(fake_service)
    assert editor.reorder_by_id(3, 1) is True
    assert titles(editor) == ['C', 'A', 'B']


def test_reorder_by_unknown_id_is_ignored(fake_service):
    editor = make_editor(fake_service)
    assert editor.reorder_by_id(99, 1) is False
    assert editor.reorder_by_id(1, None) is False
    assert fake_service.calls == []


def test_failed_reorder_keeps_new_order_by_default(fake_service):
    editor = make_editor(fake_service)
    fake_service.failing.add('upsert')

    assert editor.reorder(0, 2) is False
    assert titles(editor) == ['B', 'C', 'A']
    assert editor.notifier.drain() == [('error', get_message(editor.schema, 'reorder_failed'))]


def test_failed_reorder_restores_order_when_rollback_enabled(fake_service):
    editor = make_editor(fake_service, rollback_on_failure=True)
    fake_service.failing.add('upsert')

    assert editor.reorder(0, 2) is False
    assert titles(editor) == ['A', 'B', 'C']


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def test_move_item_returns_new_list():
    items = ['a', 'b', 'c', 'd']
    assert move_item(items, 3, 1) == ['a', 'd', 'b', 'c']
    assert items == ['a', 'b', 'c', 'd']


def test_split_list_drops_empty_items():
    assert split_list('React, Node, SQL') == ['React', 'Node', 'SQL']
    assert split_list('a,,b, ') == ['a', 'b']
    assert split_list('') == []


def test_every_schema_declares_a_table_and_required_fields():
    assert set(ENTITY_SCHEMAS) == {'experience', 'projects', 'certifications',
                                   'awards', 'volunteering', 'blogs'}
    for key, schema in ENTITY_SCHEMAS.items():
        assert schema['table']
        assert any(field['required'] for field in schema['fields']), key
