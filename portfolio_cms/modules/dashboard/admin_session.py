"""
Admin Session
=============

The admin gate: a boolean flag under a well-known key in the signed session
cookie. Written on login, checked on every admin request, removed on logout.
It holds no server-verifiable credential and is not a security boundary.
"""

from functools import wraps
import hmac

from flask import jsonify, redirect, request, session, url_for

from ...core.config import get_config_value

ADMIN_FLAG_KEY = 'is_admin'


class AdminSession:
    """Capability check passed to whatever renders the admin surface"""

    def __init__(self, store=None):
        self.store = session if store is None else store

    @property
    def is_admin(self):
        return self.store.get(ADMIN_FLAG_KEY) is True

    @staticmethod
    def check_credentials(username, password):
        expected_user = get_config_value('ADMIN_USERNAME', 'admin')
        expected_password = get_config_value('ADMIN_PASSWORD', 'admin')
        user_ok = hmac.compare_digest((username or '').encode(), str(expected_user).encode())
        password_ok = hmac.compare_digest((password or '').encode(), str(expected_password).encode())
        return user_ok and password_ok

    def login(self, username, password):
        """Set the flag when the credential pair matches"""
        if not self.check_credentials(username, password):
            return False
        self.store[ADMIN_FLAG_KEY] = True
        return True

    def logout(self):
        self.store.pop(ADMIN_FLAG_KEY, None)


def current_admin():
    return AdminSession()


def admin_required(f):
    """Decorator to require the admin flag; redirects to login"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_admin().is_admin:
            return redirect(url_for('admin.login', next=request.path))
        return f(*args, **kwargs)
    return decorated_function


def admin_api_required(f):
    """Decorator to require the admin flag; answers 401 JSON"""
    @wraps(f)
    def decorated_function(*args, **kwargs):
        if not current_admin().is_admin:
            return jsonify({'error': 'Authentication required'}), 401
        return f(*args, **kwargs)
    return decorated_function
