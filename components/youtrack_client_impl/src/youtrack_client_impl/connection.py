"""Connections to a YouTrack server.

A connection knows the server root URL and hands out an authenticated
``requests.Session``. The client asks for the session on every call and
never touches credentials itself.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

import requests

__all__ = ["BearerTokenConnection", "Connection"]


class Connection(ABC):
    """Provides an authenticated HTTP session for a YouTrack server."""

    def __init__(self, base_url: str, timeout: float | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    @property
    def base_url(self) -> str:
        """Server root URL, without a trailing slash."""
        return self._base_url

    @property
    def timeout(self) -> float | None:
        """Timeout in seconds handed to every request, or None to wait forever."""
        return self._timeout

    def url(self, path: str) -> str:
        """Return the absolute URL for a server-relative path like 'rest/issue'."""
        return f"{self._base_url}/{path.lstrip('/')}"

    @abstractmethod
    def get_authenticated_session(self) -> requests.Session:
        """Return a session whose requests carry the credentials."""
        raise NotImplementedError

    @abstractmethod
    def close(self) -> None:
        """Release the session and its pooled connections."""
        raise NotImplementedError


class BearerTokenConnection(Connection):
    """
    Args:
        base_url: YouTrack instance root URL (e.g. 'https://youtrack.example.com')
        token:    Permanent token generated from the YouTrack profile page
        timeout:  Optional request timeout in seconds
    """

    def __init__(self, base_url: str, token: str, timeout: float | None = None) -> None:
        super().__init__(base_url, timeout)
        #one session for the lifetime of the connection, shared by every call
        self._session = requests.Session()
        self._session.headers.update({
            "Accept": "application/json",
            "Authorization": f"Bearer {token}",
        })

    def get_authenticated_session(self) -> requests.Session:
        return self._session

    def close(self) -> None:
        self._session.close()
