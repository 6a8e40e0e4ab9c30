"""
Ordered Collection Editor
=========================

One editable, reorderable list of records backed by a remote table, plus
its creation form. A single implementation serves every entity schema.

State is owned by the editor instance for as long as it is mounted:
- `records`: the ordered list, loaded once from the table by position
- `form`: the creation form values
- `loaded`: set once the initial read settles, never reset

Remote calls are independent. Failures become error notifications; local
state is only touched as described per operation.
"""

import logging

from ...core.data_service import DataServiceError
from ...core.notifications import Notifications
from .schemas import (POSITION_APPEND, empty_form, get_field, get_message,
                      split_list)

logger = logging.getLogger(__name__)


def move_item(items, from_index, to_index):
    """Return a new list with one element relocated (array-move semantics)"""
    result = list(items)
    item = result.pop(from_index)
    result.insert(to_index, item)
    return result


class OrderedCollectionEditor:
    """Create / edit / save / delete / reorder for one entity collection"""

    def __init__(self, schema, data_service, notifier=None, rollback_on_failure=False):
        self.schema = schema
        self.table = schema['table']
        self.data_service = data_service
        self.notifier = notifier or Notifications()
        self.rollback_on_failure = rollback_on_failure

        self.records = []
        self.form = empty_form(schema)
        self.loaded = False

    def _message(self, key):
        return get_message(self.schema, key)

    # ===== Load =====

    def load(self):
        """Full read of the table ordered by position. Returns True on success."""
        try:
            rows = self.data_service.list(self.table, order_by='position')
            self.records = list(rows or [])
            return True
        except DataServiceError as e:
            logger.error("Fetch of %s failed: %s", self.table, e)
            self.records = []
            self.notifier.error(self._message('load_failed'))
            return False
        finally:
            self.loaded = True

    # ===== Local edits =====

    def edit_field(self, index, field_name, value):
        """Replace one field of one record in local state (no remote call)"""
        field = get_field(self.schema, field_name)
        if field is None:
            raise KeyError(f"Unknown field '{field_name}' for {self.table}")

        if field['type'] == 'list':
            value = split_list(value, field.get('delimiter', ','))

        record = dict(self.records[index])
        record[field_name] = value
        self.records[index] = record
        return record

    def set_form_value(self, field_name, value):
        if get_field(self.schema, field_name) is None:
            raise KeyError(f"Unknown field '{field_name}' for {self.table}")
        self.form[field_name] = value

    # ===== Remote writes =====

    def save(self, index):
        """Send the full current record as an update keyed by id"""
        record = self.records[index]
        try:
            self.data_service.update(self.table, record, record['id'])
        except DataServiceError as e:
            # Local edits stay visible even though they were not persisted
            logger.error("Update of %s id=%s failed: %s", self.table, record['id'], e)
            self.notifier.error(self._message('save_failed'))
            return False

        self.notifier.success(self._message('save_success'))
        return True

    def delete(self, index):
        """Delete remotely; drop the record locally only once confirmed"""
        record_id = self.records[index]['id']
        try:
            self.data_service.delete(self.table, record_id)
        except DataServiceError as e:
            logger.error("Delete of %s id=%s failed: %s", self.table, record_id, e)
            self.notifier.error(self._message('delete_failed'))
            return False

        # Match on id, the list may have changed since the action was dispatched
        self.records = [r for r in self.records if r.get('id') != record_id]
        self.notifier.success(self._message('delete_success'))
        return True

    def missing_fields(self, values=None):
        values = self.form if values is None else values
        missing = []
        for field in self.schema['fields']:
            if not field['required']:
                continue
            value = values.get(field['name'])
            if isinstance(value, (list, tuple)):
                present = bool(value)
            else:
                present = bool(str(value).strip()) if value is not None else False
            if not present:
                missing.append(field['name'])
        return missing

    def create(self, fields=None):
        """Insert a record from the creation form.

        `fields` updates the form values first. On success the returned rows
        are appended and the form resets; on any failure the form is kept.
        """
        if fields:
            for name, value in fields.items():
                self.set_form_value(name, value)

        if self.missing_fields():
            self.notifier.error(self._message('missing_fields'))
            return None

        row = {}
        for field in self.schema['fields']:
            value = self.form.get(field['name'], '')
            if field['type'] == 'list':
                value = split_list(value, field.get('delimiter', ','))
            row[field['name']] = value

        if self.schema['position_policy'] == POSITION_APPEND:
            row['position'] = len(self.records) + 1

        try:
            inserted = self.data_service.insert(self.table, [row])
        except DataServiceError as e:
            logger.error("Insert into %s failed: %s", self.table, e)
            self.notifier.error(self._message('create_failed'))
            return None

        inserted = list(inserted or [])
        self.records = self.records + inserted
        self.form = empty_form(self.schema)
        self.notifier.success(self._message('create_success'))
        return inserted

    # ===== Reorder =====

    def index_of(self, record_id):
        for i, record in enumerate(self.records):
            if record.get('id') == record_id:
                return i
        return -1

    def reorder_by_id(self, active_id, over_id):
        """Drag-end entry point: the dragged record was dropped on another"""
        if over_id is None or active_id == over_id:
            return False

        from_index = self.index_of(active_id)
        to_index = self.index_of(over_id)
        if from_index < 0 or to_index < 0:
            return False
        return self.reorder(from_index, to_index)

    def reorder(self, from_index, to_index):
        """Move one record, update local order at once, then persist positions.

        Returns False for a no-op, otherwise whether the batch write succeeded.
        """
        if from_index == to_index:
            return False

        previous = self.records
        reordered = move_item(self.records, from_index, to_index)
        self.records = [dict(record, position=i + 1) for i, record in enumerate(reordered)]

        updates = [{'id': record['id'], 'position': record['position']}
                   for record in self.records]

        try:
            self.data_service.upsert(self.table, updates)
        except DataServiceError as e:
            logger.error("Reorder of %s failed: %s", self.table, e)
            if self.rollback_on_failure:
                self.records = previous
            self.notifier.error(self._message('reorder_failed'))
            return False

        self.notifier.success(self._message('reorder_success'))
        return True

    # ===== Presentation helpers =====

    def to_dict(self):
        return {
            'entity': self.schema.get('key'),
            'loaded': self.loaded,
            'records': self.records,
            'form': self.form,
        }
