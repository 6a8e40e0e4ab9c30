"""
Activity logging service for the portfolio admin.
Records admin actions and backend failures in a local sqlite store so the
dashboard can show what happened recently.
"""

import json
import logging
import traceback
from datetime import datetime, timedelta
from flask import request, has_request_context
from .database import Database
from .config import get_config_value

console = logging.getLogger('portfolio_cms')


class LoggingService:
    """Centralized logging service for admin activity"""

    @staticmethod
    def _log_db():
        return get_config_value('LOG_DB')

    @staticmethod
    def _ensure_logs_table(conn):
        """Ensure the app_logs table exists"""
        cursor = conn.cursor()
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS app_logs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                timestamp TEXT NOT NULL,
                level TEXT NOT NULL,
                source TEXT NOT NULL,
                message TEXT NOT NULL,
                details TEXT,
                ip_address TEXT,
                request_path TEXT
            )
        """)
        cursor.execute("""
            CREATE INDEX IF NOT EXISTS idx_logs_timestamp
            ON app_logs(timestamp DESC)
        """)

    @staticmethod
    def _get_request_context():
        """Extract request context information"""
        if not has_request_context():
            return None, None

        ip_address = request.headers.get('X-Forwarded-For', request.remote_addr)
        if ip_address and ',' in ip_address:
            ip_address = ip_address.split(',')[0].strip()

        return ip_address, request.path

    @staticmethod
    def log(level, source, message, details=None):
        """
        Log a message to the activity store

        Args:
            level (str): Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            source (str): Source component (experience, hero, auth, etc.)
            message (str): Main log message
            details (str/dict): Additional details (JSON-encoded if dict or list)
        """
        level = level.upper()
        console.log(getattr(logging, level, logging.INFO), "[%s] %s", source, message)

        if isinstance(details, (dict, list)):
            details = json.dumps(details, indent=2, default=str)

        log_db = LoggingService._log_db()
        if not log_db:
            return

        try:
            ip_address, request_path = LoggingService._get_request_context()
            with Database.connect(log_db) as conn:
                LoggingService._ensure_logs_table(conn)
                conn.execute("""
                    INSERT INTO app_logs
                    (timestamp, level, source, message, details, ip_address, request_path)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                """, (
                    datetime.now().isoformat(), level, source, message, details,
                    ip_address, request_path
                ))
                conn.commit()
        except Exception as e:
            # Fallback to console logging if the store fails
            console.warning("Logging service error: %s", e)
            if details:
                console.warning("Details: %s", details)

    @staticmethod
    def debug(source, message, details=None):
        LoggingService.log('DEBUG', source, message, details)

    @staticmethod
    def info(source, message, details=None):
        LoggingService.log('INFO', source, message, details)

    @staticmethod
    def warning(source, message, details=None):
        LoggingService.log('WARNING', source, message, details)

    @staticmethod
    def error(source, message, details=None):
        LoggingService.log('ERROR', source, message, details)

    @staticmethod
    def log_user_action(source, action, details=None):
        """Log admin actions (login, save, reorder, etc.)"""
        LoggingService.info(source, f"Admin action: {action}", details)

    @staticmethod
    def log_error_with_traceback(source, error, details=None):
        """Log error with full traceback"""
        error_details = {
            'error_type': type(error).__name__,
            'error_message': str(error),
            'traceback': traceback.format_exc()
        }
        if details:
            error_details['additional_details'] = details

        LoggingService.error(source, f"Exception occurred: {type(error).__name__}", error_details)

    @staticmethod
    def get_recent_logs(limit=20, level=None):
        """Return the newest log entries as dicts, newest first"""
        log_db = LoggingService._log_db()
        if not log_db:
            return []

        try:
            with Database.connect(log_db) as conn:
                LoggingService._ensure_logs_table(conn)
                cursor = conn.cursor()
                if level:
                    cursor.execute("""
                        SELECT id, timestamp, level, source, message, details
                        FROM app_logs WHERE level = ?
                        ORDER BY id DESC LIMIT ?
                    """, (level.upper(), limit))
                else:
                    cursor.execute("""
                        SELECT id, timestamp, level, source, message, details
                        FROM app_logs
                        ORDER BY id DESC LIMIT ?
                    """, (limit,))

                columns = ['id', 'timestamp', 'level', 'source', 'message', 'details']
                return [dict(zip(columns, row)) for row in cursor.fetchall()]
        except Exception as e:
            console.warning("Failed to read activity log: %s", e)
            return []

    @staticmethod
    def cleanup_old_logs(days_to_keep=30):
        """Clean up old log entries"""
        log_db = LoggingService._log_db()
        if not log_db:
            return 0

        try:
            cutoff_iso = (datetime.now() - timedelta(days=days_to_keep)).isoformat()

            with Database.connect(log_db) as conn:
                LoggingService._ensure_logs_table(conn)
                cursor = conn.cursor()
                cursor.execute("DELETE FROM app_logs WHERE timestamp < ?", (cutoff_iso,))
                deleted_count = cursor.rowcount
                conn.commit()

            LoggingService.info('system', f"Cleaned up {deleted_count} old log entries")
            return deleted_count

        except Exception as e:
            LoggingService.error('system', f"Failed to cleanup old logs: {e}")
            return 0


# Convenience instance for easy importing
logger = LoggingService()
