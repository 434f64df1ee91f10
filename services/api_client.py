"""HTTP client for this service's own startup routes, used by the admin form."""
import logging
from typing import Any, Dict, List

import requests

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Raised with the `error` message of a failed API response."""

    def __init__(self, message: str, status_code: int = None):
        super().__init__(message)
        self.status_code = status_code


class StartupsAPIClient:
    """Calls the /api/startups routes the admin UI works against."""

    TIMEOUT = 30

    def __init__(self, base_url: str, session: requests.Session = None):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, fallback_error: str, **kwargs) -> Any:
        response = self.session.request(method, f"{self.base_url}{path}", timeout=self.TIMEOUT, **kwargs)
        if not response.ok:
            try:
                message = response.json().get('error') or fallback_error
            except ValueError:
                message = fallback_error
            raise APIError(message, status_code=response.status_code)
        return response.json()

    def list_startups(self) -> List[Dict[str, Any]]:
        return self._request('GET', '/api/startups', 'Failed to fetch startups')

    def get_startup(self, startup_id: Any) -> Dict[str, Any]:
        return self._request('GET', f"/api/startups/{startup_id}", 'Failed to fetch startup')

    def add_startup(self, form: Dict[str, Any]) -> Dict[str, Any]:
        return self._request('POST', '/api/startups/add', 'Failed to add startup', json=form)

    def update_startup(self, startup_id: Any, form: Dict[str, Any]) -> Dict[str, Any]:
        return self._request('PUT', f"/api/startups/{startup_id}", 'Failed to edit startup', json=form)

    def delete_startup(self, startup_id: Any) -> Dict[str, Any]:
        return self._request('DELETE', f"/api/startups/{startup_id}", 'Failed to delete startup')
