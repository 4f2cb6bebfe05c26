"""
Remote Stats Fetcher

Requests the authoritative statistics for the current user from the game
server and classifies failures.
"""

from typing import Any, Dict, Optional

import requests

from .errors import RemoteRejected, RemoteUnavailable


class RemoteStatsFetcher:
    """
    HTTP client for ``GET /api/users/stats``.

    This class handles:
    - Bearer authentication with the opaque credential
    - Timeouts and connection failures (RemoteUnavailable)
    - Non-2xx responses (RemoteRejected)
    - Empty or non-object bodies, reported as None
    """

    def __init__(self,
                 base_url: str,
                 endpoint: str = '/api/users/stats',
                 timeout: float = 10,
                 session: Optional[requests.Session] = None):
        """
        Initialize the fetcher.

        Args:
            base_url: Game server root, e.g. ``http://127.0.0.1:5000``
            endpoint: Stats path on the server
            timeout: Request timeout in seconds
            session: Shared requests session; a new one is created if omitted
        """
        self.url = base_url.rstrip('/') + '/' + endpoint.lstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def fetch(self, credential: Optional[str]) -> Optional[Dict[str, Any]]:
        """
        Fetch the user's statistics.

        Args:
            credential: Bearer token; a missing token is sent empty and left
                for the server to reject

        Returns:
            The decoded JSON object, or None if the body was empty or not an object

        Raises:
            RemoteUnavailable: On connection errors and timeouts
            RemoteRejected: On any non-2xx status
        """
        headers = {'Authorization': f"Bearer {credential or ''}"}

        try:
            response = self.session.get(self.url, headers=headers, timeout=self.timeout)
        except requests.Timeout as e:
            raise RemoteUnavailable(f"Stats request timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise RemoteUnavailable(f"Stats request failed: {e}") from e

        if not 200 <= response.status_code < 300:
            raise RemoteRejected(response.status_code)

        if not response.content:
            return None

        try:
            body = response.json()
        except ValueError:
            return None

        return body if isinstance(body, dict) else None

    def close(self):
        """Close the underlying HTTP session."""
        self.session.close()
