"""
Mounted editors per admin session.

Each admin browser session gets its own editor per entity; an editor lives
from the time its page is mounted until it is re-mounted, the admin logs
out, or the session has been idle for longer than `idle_timeout` seconds.
"""

import threading
import time
import uuid

from flask import session

SESSION_KEY = 'editor_sid'
DEFAULT_IDLE_TIMEOUT = 2 * 60 * 60


class EditorRegistry:
    """In-process store of mounted editors keyed by (session id, entity)"""

    def __init__(self, idle_timeout=DEFAULT_IDLE_TIMEOUT, clock=time.monotonic):
        self.idle_timeout = idle_timeout
        self._clock = clock
        self._lock = threading.Lock()
        self._editors = {}
        self._last_used = {}

    def _expire(self, now):
        """Drop every session idle past the timeout. Caller holds the lock."""
        stale = [sid for sid, used in self._last_used.items()
                 if now - used > self.idle_timeout]
        for sid in stale:
            self._drop(sid)

    def _drop(self, sid):
        for key in [k for k in self._editors if k[0] == sid]:
            del self._editors[key]
        self._last_used.pop(sid, None)

    def get(self, sid, entity):
        with self._lock:
            now = self._clock()
            self._expire(now)
            editor = self._editors.get((sid, entity))
            if editor is not None:
                self._last_used[sid] = now
            return editor

    def put(self, sid, entity, editor):
        with self._lock:
            now = self._clock()
            self._expire(now)
            self._editors[(sid, entity)] = editor
            self._last_used[sid] = now
        return editor

    def discard_session(self, sid):
        with self._lock:
            self._drop(sid)

    def __len__(self):
        with self._lock:
            return len(self._editors)


registry = EditorRegistry()


def get_session_id(create=True):
    """Editor session id stored alongside the admin flag"""
    sid = session.get(SESSION_KEY)
    if sid is None and create:
        sid = uuid.uuid4().hex
        session[SESSION_KEY] = sid
    return sid


def release_session_editors():
    """Drop every editor mounted by the current session"""
    sid = session.pop(SESSION_KEY, None)
    if sid:
        registry.discard_session(sid)
