"""
Entity Schemas
==============

Field declarations for each ordered content collection. The generic editor
and the admin templates are driven entirely by these.

Field types: text, textarea, url, list (delimited text stored as an array).
Position policy on create: 'append' sets position = len + 1 before the
insert, 'server' leaves it to the table default.
"""

POSITION_APPEND = 'append'
POSITION_SERVER = 'server'

DEFAULT_MESSAGES = {
    'load_failed': "Failed to load {plural}.",
    'save_success': "Updated!",
    'save_failed': "Update failed!",
    'delete_success': "{label} deleted.",
    'delete_failed': "Failed to delete {noun}.",
    'create_success': "{label} added!",
    'create_failed': "Failed to add {noun}.",
    'missing_fields': "All fields are required.",
    'reorder_success': "Order saved.",
    'reorder_failed': "Failed to update order.",
}

ENTITY_SCHEMAS = {
    'experience': {
        'title': 'Experience',
        'label': 'Experience',
        'plural': 'experiences',
        'table': 'experience',
        'position_policy': POSITION_SERVER,
        'fields': [
            {'name': 'role', 'label': 'Role', 'type': 'text', 'required': True},
            {'name': 'company', 'label': 'Company', 'type': 'text', 'required': True},
            {'name': 'duration', 'label': 'Duration', 'type': 'text', 'required': True},
            {'name': 'description', 'label': 'Description', 'type': 'textarea', 'required': True},
        ],
        'messages': {},
    },
    'projects': {
        'title': 'Projects',
        'label': 'Project',
        'plural': 'projects',
        'table': 'projects',
        'position_policy': POSITION_APPEND,
        'fields': [
            {'name': 'title', 'label': 'Title', 'type': 'text', 'required': True},
            {'name': 'description', 'label': 'Description', 'type': 'textarea', 'required': True},
            {'name': 'tech', 'label': 'Tech (comma separated)', 'type': 'list', 'delimiter': ',', 'required': True},
            {'name': 'github', 'label': 'GitHub URL', 'type': 'url', 'required': False},
            {'name': 'demo', 'label': 'Demo URL', 'type': 'url', 'required': False},
        ],
        'messages': {
            'missing_fields': "Title, description, and tech are required.",
        },
    },
    'certifications': {
        'title': 'Certifications',
        'label': 'Certification',
        'plural': 'certifications',
        'table': 'certifications',
        'position_policy': POSITION_APPEND,
        'fields': [
            {'name': 'title', 'label': 'Title', 'type': 'text', 'required': True},
            {'name': 'issuer', 'label': 'Issuer', 'type': 'text', 'required': True},
            {'name': 'date', 'label': 'Date', 'type': 'text', 'required': True},
            {'name': 'certificateUrl', 'label': 'Certificate URL', 'type': 'url', 'required': False},
        ],
        'messages': {
            'missing_fields': "Title, Issuer and Date are required.",
            'delete_success': "Deleted!",
            'delete_failed': "Failed to delete.",
            'reorder_success': "Order saved to Supabase!",
            'reorder_failed': "Failed to update order in Supabase.",
        },
    },
    'awards': {
        'title': 'Awards',
        'label': 'Award',
        'plural': 'awards',
        'table': 'awards',
        'position_policy': POSITION_SERVER,
        'fields': [
            {'name': 'title', 'label': 'Title', 'type': 'text', 'required': True},
            {'name': 'issuer', 'label': 'Issuer', 'type': 'text', 'required': True},
            {'name': 'date', 'label': 'Date', 'type': 'text', 'required': True},
            {'name': 'awardUrl', 'label': 'Award URL', 'type': 'url', 'required': False},
        ],
        'messages': {
            'missing_fields': "All fields except URL are required.",
            'reorder_success': "Order saved to Supabase!",
            'reorder_failed': "Failed to update order in Supabase.",
        },
    },
    'volunteering': {
        'title': 'Volunteering',
        'label': 'Volunteering',
        'plural': 'volunteering',
        'table': 'volunteering',
        'position_policy': POSITION_APPEND,
        'fields': [
            {'name': 'role', 'label': 'Role', 'type': 'text', 'required': True},
            {'name': 'company', 'label': 'Organisation', 'type': 'text', 'required': True},
            {'name': 'start_date', 'label': 'Start date', 'type': 'text', 'required': True},
            {'name': 'end_date', 'label': 'End date', 'type': 'text', 'required': True},
            {'name': 'description', 'label': 'Description', 'type': 'textarea', 'required': True},
        ],
        'messages': {
            'create_success': "Volunteering added!",
            'delete_success': "Deleted successfully!",
            'delete_failed': "Failed to delete.",
            'reorder_success': "Order saved to Supabase!",
            'reorder_failed': "Failed to update order in Supabase.",
        },
    },
    'blogs': {
        'title': 'Blogs',
        'label': 'Blog',
        'plural': 'blogs',
        'table': 'blogs',
        'position_policy': POSITION_SERVER,
        'fields': [
            {'name': 'title', 'label': 'Title', 'type': 'text', 'required': True},
            {'name': 'date_published', 'label': 'Date published', 'type': 'text', 'required': True},
            {'name': 'description', 'label': 'Description', 'type': 'textarea', 'required': True},
        ],
        'messages': {},
    },
}


def get_schema(entity):
    """Schema dict for an entity key, or None"""
    schema = ENTITY_SCHEMAS.get(entity)
    if schema is None:
        return None
    return dict(schema, key=entity)


def get_field(schema, name):
    for field in schema['fields']:
        if field['name'] == name:
            return field
    return None


def empty_form(schema):
    return {field['name']: '' for field in schema['fields']}


def get_message(schema, key):
    """Notification text for an outcome, with per-entity overrides"""
    template = schema['messages'].get(key) or DEFAULT_MESSAGES[key]
    return template.format(
        label=schema['label'],
        noun=schema['label'].lower(),
        plural=schema['plural'],
    )


def split_list(text, delimiter=','):
    """Split delimited text into trimmed, non-empty items"""
    if isinstance(text, (list, tuple)):
        return [str(item).strip() for item in text if str(item).strip()]
    if not text:
        return []
    return [item.strip() for item in str(text).split(delimiter) if item.strip()]


def format_list(value, delimiter=','):
    """Inverse of split_list for populating a text input"""
    if isinstance(value, (list, tuple)):
        joiner = f"{delimiter} " if delimiter.strip() else delimiter
        return joiner.join(str(item) for item in value)
    return value or ''
