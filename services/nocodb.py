"""NocoDB REST client for table records and file storage."""
import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)


class NocoDBError(Exception):
    """Raised when NocoDB answers with a non-2xx status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NocoDBService:
    """Thin wrapper around the NocoDB v2 records API."""

    # Request timeout in seconds
    TIMEOUT = 30
    # Page size used for full-table listings
    LIST_LIMIT = 1000

    def __init__(self, api_token: str, base_url: str, timeout: Optional[float] = None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout or self.TIMEOUT
        self.session = requests.Session()
        self.session.headers.update({'xc-token': api_token})

    def _records_url(self, table_id: str, record_id: Any = None) -> str:
        url = f"{self.base_url}/api/v2/tables/{table_id}/records"
        if record_id is not None:
            url += f"/{record_id}"
        return url

    def _check(self, response: requests.Response, action: str):
        if not response.ok:
            logger.error(f"NocoDB API error while trying to {action}: {response.status_code} {response.text[:500]}")
            raise NocoDBError(f"Failed to {action}: {response.status_code} {response.reason or ''}".strip(),
                              status_code=response.status_code)

    def list_records(self, table_id: str, limit: int = None, offset: int = 0) -> List[Dict[str, Any]]:
        """Fetch one page of records (the first 1000 by default)."""
        response = self.session.get(
            self._records_url(table_id),
            params={'limit': limit or self.LIST_LIMIT, 'offset': offset},
            timeout=self.timeout
        )
        self._check(response, 'list records')
        return response.json().get('list', [])

    def get_record(self, table_id: str, record_id: Any) -> Dict[str, Any]:
        response = self.session.get(self._records_url(table_id, record_id), timeout=self.timeout)
        self._check(response, f"fetch record {record_id}")
        return response.json()

    def create_record(self, table_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        response = self.session.post(self._records_url(table_id), json=fields, timeout=self.timeout)
        self._check(response, 'create record')
        return response.json()

    def update_record(self, table_id: str, record_id: Any, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Patch the given columns of one record."""
        response = self.session.patch(self._records_url(table_id, record_id), json=fields, timeout=self.timeout)
        self._check(response, f"update record {record_id}")
        return response.json()

    def delete_record(self, table_id: str, record_id: Any):
        response = self.session.delete(self._records_url(table_id, record_id), timeout=self.timeout)
        self._check(response, f"delete record {record_id}")

    def upload_file(self, filename: str, content: bytes, mime_type: str) -> List[Dict[str, Any]]:
        """Upload a file to NocoDB storage.

        Returns:
            The attachment descriptor list NocoDB expects in attachment columns
        """
        response = self.session.post(
            f"{self.base_url}/api/v1/db/storage/upload",
            files={'file': (filename, content, mime_type)},
            timeout=self.timeout
        )
        self._check(response, f"upload {filename}")
        logger.info(f"Uploaded {filename} ({len(content)} bytes) to NocoDB storage")
        return response.json()
