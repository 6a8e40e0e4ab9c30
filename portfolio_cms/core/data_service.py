"""
Data Service Client
===================

Thin client for the hosted backend (Supabase-style REST): table reads and
writes through PostgREST under ``/rest/v1`` and blob storage under
``/storage/v1``.

Every transport or HTTP failure is raised as ``DataServiceError``; callers
decide how to surface it.
"""

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

logger = logging.getLogger(__name__)


class DataServiceError(Exception):
    """A read, write or upload against the backend failed"""

    def __init__(self, message, status_code=None, details=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details

    def __str__(self):
        if self.status_code:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class DataService:
    """Table and storage operations used by the site and the admin editors"""

    def __init__(self, url: str, key: str, timeout: int = 15, session: requests.Session = None):
        self.url = (url or '').rstrip('/')
        self.key = key
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config) -> 'DataService':
        """Build a client from a mapping such as ``app.config``"""
        return cls(
            url=config.get('SUPABASE_URL'),
            key=config.get('SUPABASE_KEY'),
            timeout=int(config.get('REQUEST_TIMEOUT') or 15),
        )

    # ===== Request plumbing =====

    def _headers(self, extra: Dict[str, str] = None) -> Dict[str, str]:
        headers = {
            "apikey": self.key or "",
            "Authorization": f"Bearer {self.key or ''}",
            "Accept": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    def _table_url(self, table: str) -> str:
        return f"{self.url}/rest/v1/{table}"

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        if not self.url:
            raise DataServiceError("Backend URL is not configured")

        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            logger.error("Backend %s %s failed: %s", method, url, e)
            raise DataServiceError(f"Request to backend failed: {e}") from e

        if resp.status_code >= 400:
            try:
                details = resp.json()
            except ValueError:
                details = resp.text
            message = details.get('message') if isinstance(details, dict) else None
            logger.error("Backend %s %s returned %s: %s", method, url, resp.status_code, details)
            raise DataServiceError(message or "Backend request was rejected",
                                   status_code=resp.status_code, details=details)
        return resp

    @staticmethod
    def _json(resp: requests.Response):
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            raise DataServiceError("Backend returned invalid JSON",
                                   status_code=resp.status_code) from e

    # ===== Tables =====

    def list(self, table: str, order_by: str = 'position') -> List[Dict[str, Any]]:
        """All rows of a table, ascending by ``order_by``"""
        params = {'select': '*'}
        if order_by:
            params['order'] = f"{order_by}.asc"
        resp = self._request('GET', self._table_url(table), headers=self._headers(), params=params)
        return self._json(resp) or []

    def single(self, table: str) -> Dict[str, Any]:
        """Exactly one row of a singleton table"""
        headers = self._headers({"Accept": "application/vnd.pgrst.object+json"})
        resp = self._request('GET', self._table_url(table), headers=headers, params={'select': '*'})
        row = self._json(resp)
        if not isinstance(row, dict):
            raise DataServiceError(f"Expected a single row from {table}")
        return row

    def insert(self, table: str, rows: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """Insert rows and return them as stored (with server-side defaults)"""
        headers = self._headers({
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        })
        resp = self._request('POST', self._table_url(table), headers=headers, json=rows)
        return self._json(resp) or []

    def update(self, table: str, row: Dict[str, Any], row_id: Any) -> None:
        """Update the row whose ``id`` matches"""
        headers = self._headers({
            "Content-Type": "application/json",
            "Prefer": "return=minimal",
        })
        self._request('PATCH', self._table_url(table), headers=headers,
                      params={'id': f"eq.{row_id}"}, json=row)

    def delete(self, table: str, row_id: Any) -> None:
        """Delete the row whose ``id`` matches"""
        headers = self._headers({"Prefer": "return=minimal"})
        self._request('DELETE', self._table_url(table), headers=headers,
                      params={'id': f"eq.{row_id}"})

    def upsert(self, table: str, rows: List[Dict[str, Any]]) -> None:
        """Batch write keyed by primary key; existing rows are merged"""
        headers = self._headers({
            "Content-Type": "application/json",
            "Prefer": "resolution=merge-duplicates,return=minimal",
        })
        self._request('POST', self._table_url(table), headers=headers, json=rows)

    # ===== Storage =====

    def upload(self, bucket: str, path: str, data: bytes,
               content_type: Optional[str] = None, overwrite: bool = True) -> str:
        """Store a blob at ``bucket/path``; returns the object path"""
        headers = self._headers({
            "Content-Type": content_type or "application/octet-stream",
            "x-upsert": "true" if overwrite else "false",
        })
        url = f"{self.url}/storage/v1/object/{bucket}/{quote(path)}"
        self._request('POST', url, headers=headers, data=data)
        return path

    def get_public_url(self, bucket: str, path: str) -> str:
        """Public URL of an object in a public bucket (no request made)"""
        return f"{self.url}/storage/v1/object/public/{bucket}/{quote(path.lstrip('/'))}"


def get_data_service() -> DataService:
    """Data service of the current app (configured by the extension)"""
    from flask import current_app
    ext = current_app.extensions.get('portfolio_cms')
    if ext is not None and ext.data_service is not None:
        return ext.data_service

    service = current_app.extensions.get('portfolio_cms.data_service')
    if service is None:
        service = DataService.from_config(current_app.config)
        current_app.extensions['portfolio_cms.data_service'] = service
    return service
