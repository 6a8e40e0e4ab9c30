"""
Activity log and mounted editor registry
"""

from portfolio_cms.core.logging_service import LoggingService
from portfolio_cms.modules.collections.registry import SESSION_KEY, EditorRegistry, registry


# ---------------------------------------------------------------------------
# LoggingService
# ---------------------------------------------------------------------------

def test_recent_logs_newest_first(app):
    with app.app_context():
        LoggingService.info('projects', 'first')
        LoggingService.warning('projects', 'second', {'id': 3})
        LoggingService.log_user_action('auth', 'login')

        logs = LoggingService.get_recent_logs(limit=10)
        assert [log['message'] for log in logs] == ['Admin action: login', 'second', 'first']
        assert '"id": 3' in logs[1]['details']

        warnings = LoggingService.get_recent_logs(level='warning')
        assert [log['message'] for log in warnings] == ['second']


def test_cleanup_old_logs(app):
    with app.app_context():
        LoggingService.info('projects', 'old entry')
        deleted = LoggingService.cleanup_old_logs(days_to_keep=0)

        assert deleted == 1
        messages = [log['message'] for log in LoggingService.get_recent_logs()]
        assert messages == ['Cleaned up 1 old log entries']


def test_error_with_traceback(app):
    with app.app_context():
        try:
            raise ValueError("boom")
        except ValueError as e:
            LoggingService.log_error_with_traceback('hero', e)

        log, = LoggingService.get_recent_logs(level='ERROR')
        assert log['message'] == 'Exception occurred: ValueError'
        assert 'boom' in log['details']


# ---------------------------------------------------------------------------
# Editor registry
# ---------------------------------------------------------------------------

def test_registry_is_keyed_by_session_and_entity():
    reg = EditorRegistry()
    reg.put('s1', 'projects', 'editor-a')
    reg.put('s1', 'blogs', 'editor-b')
    reg.put('s2', 'projects', 'editor-c')

    assert reg.get('s1', 'projects') == 'editor-a'
    assert reg.get('s2', 'projects') == 'editor-c'

    reg.discard_session('s1')
    assert len(reg) == 1
    assert reg.get('s1', 'blogs') is None


def test_idle_sessions_expire():
    now = [0]
    reg = EditorRegistry(idle_timeout=10, clock=lambda: now[0])
    reg.put('s1', 'projects', 'editor-a')

    now[0] = 5
    assert reg.get('s1', 'projects') == 'editor-a'

    now[0] = 14
    assert reg.get('s1', 'projects') == 'editor-a'

    now[0] = 25
    assert reg.get('s1', 'projects') is None
    assert len(reg) == 0


def test_activity_elsewhere_purges_idle_sessions():
    now = [0]
    reg = EditorRegistry(idle_timeout=10, clock=lambda: now[0])
    reg.put('abandoned', 'projects', 'editor-a')
    reg.put('abandoned', 'blogs', 'editor-b')

    now[0] = 30
    reg.put('active', 'projects', 'editor-c')

    assert len(reg) == 1
    assert reg.get('active', 'projects') == 'editor-c'


def test_idle_timeout_comes_from_config(tmp_db_dir, fake_service):
    from flask import Flask
    from portfolio_cms import PortfolioCMS

    app = Flask(__name__)
    app.config["SECRET_KEY"] = "test-secret"
    app.config["DB_DIR"] = tmp_db_dir
    app.config["EDITOR_IDLE_TIMEOUT"] = 60
    try:
        PortfolioCMS(app, data_service=fake_service)
        assert registry.idle_timeout == 60
    finally:
        registry.idle_timeout = 7200


def test_logout_releases_mounted_editors(admin_client):
    admin_client.get("/admin/projects/")
    with admin_client.session_transaction() as sess:
        sid = sess[SESSION_KEY]
    assert registry.get(sid, 'projects') is not None

    admin_client.get("/admin/logout")

    assert registry.get(sid, 'projects') is None
    with admin_client.session_transaction() as sess:
        assert SESSION_KEY not in sess
