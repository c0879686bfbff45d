"""YouTrack implementation of the issue tracker client."""

from youtrack_client_impl.connection import BearerTokenConnection, Connection
from youtrack_client_impl.youtrack_impl import YouTrackClient, get_client

__all__ = ["BearerTokenConnection", "Connection", "YouTrackClient", "get_client"]
