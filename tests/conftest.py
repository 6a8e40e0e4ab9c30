"""
Shared fixtures: an in-memory data service and a fully initialised app.
"""

import copy
import shutil
import tempfile

import pytest
from flask import Flask

from portfolio_cms import PortfolioCMS
from portfolio_cms.core.data_service import DataServiceError


class FakeDataService:
    """In-memory stand-in for DataService that records every call.

    Put a method name in `failing` to make that call raise DataServiceError.
    """

    def __init__(self, tables=None):
        self.tables = {name: [dict(row) for row in rows] for name, rows in (tables or {}).items()}
        self.calls = []
        self.failing = set()
        self.objects = {}
        self.url = 'https://backend.test'
        self._next_id = 1000

    def _call(self, method, *args):
        self.calls.append((method,) + args)
        if method in self.failing:
            raise DataServiceError(f"{method} failed", status_code=500)

    def calls_to(self, method):
        return [call for call in self.calls if call[0] == method]

    def list(self, table, order_by='position'):
        self._call('list', table)
        rows = [dict(row) for row in self.tables.get(table, [])]
        if order_by:
            rows.sort(key=lambda row: (row.get(order_by) is None, row.get(order_by)))
        return rows

    def single(self, table):
        self._call('single', table)
        rows = self.tables.get(table, [])
        if len(rows) != 1:
            raise DataServiceError(f"Expected a single row from {table}", status_code=406)
        return dict(rows[0])

    def insert(self, table, rows):
        self._call('insert', table, copy.deepcopy(rows))
        stored = []
        for row in rows:
            self._next_id += 1
            new_row = dict(row, id=self._next_id)
            new_row.setdefault('position', None)
            self.tables.setdefault(table, []).append(new_row)
            stored.append(dict(new_row))
        return stored

    def update(self, table, row, row_id):
        self._call('update', table, copy.deepcopy(row), row_id)
        for stored in self.tables.get(table, []):
            if stored.get('id') == row_id:
                stored.update(row)

    def delete(self, table, row_id):
        self._call('delete', table, row_id)
        self.tables[table] = [r for r in self.tables.get(table, []) if r.get('id') != row_id]

    def upsert(self, table, rows):
        self._call('upsert', table, copy.deepcopy(rows))
        existing = {r.get('id'): r for r in self.tables.setdefault(table, [])}
        for row in rows:
            if row.get('id') in existing:
                existing[row['id']].update(row)
            else:
                self.tables[table].append(dict(row))

    def upload(self, bucket, path, data, content_type=None, overwrite=True):
        self._call('upload', bucket, path, content_type, overwrite)
        self.objects[(bucket, path)] = data
        return path

    def get_public_url(self, bucket, path):
        return f"{self.url}/storage/v1/object/public/{bucket}/{path}"


SAMPLE_TABLES = {
    'projects': [
        {'id': 1, 'position': 1, 'title': 'A', 'description': 'First', 'tech': ['Python'],
         'github': '', 'demo': ''},
        {'id': 2, 'position': 2, 'title': 'B', 'description': 'Second', 'tech': ['Flask'],
         'github': '', 'demo': ''},
        {'id': 3, 'position': 3, 'title': 'C', 'description': 'Third', 'tech': [],
         'github': '', 'demo': ''},
    ],
    'experience': [
        {'id': 10, 'position': 1, 'role': 'Engineer', 'company': 'Acme',
         'duration': '2020 - 2023', 'description': 'Built things'},
    ],
    'hero': [
        {'id': 1, 'name': 'Jane Doe', 'role': '["Developer", "Writer"]',
         'description': 'Hello there', 'linkedin_url': 'https://linkedin.com/in/jane',
         'email': 'jane@example.com', 'resume': 'resume/cv.pdf',
         'profile_image': 'https://cdn.example.com/me.jpg'},
    ],
}


@pytest.fixture
def fake_service():
    return FakeDataService(copy.deepcopy(SAMPLE_TABLES))


@pytest.fixture
def tmp_db_dir():
    """Create a temporary directory for the activity log, cleaned up after."""
    d = tempfile.mkdtemp(prefix="portfolio-test-")
    yield d
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def app(tmp_db_dir, fake_service):
    """Flask app with every module registered against the fake backend."""
    app = Flask(__name__)
    app.config["TESTING"] = True
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir
    app.config["ADMIN_USERNAME"] = "admin"
    app.config["ADMIN_PASSWORD"] = "admin"
    PortfolioCMS(app, {'brand_name': 'Test Portfolio'}, data_service=fake_service)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    """Test client with the admin flag set."""
    with client.session_transaction() as sess:
        sess['is_admin'] = True
    return client
