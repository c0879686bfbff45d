"""
Authentication
--------------
The client talks to the server through a Connection, which owns the credentials.
get_client() builds a BearerTokenConnection from two values:

1. When get_client(interactive = True)
    User is prompted for the values below at runtime if any are missing from the environment.
2. When get_client(interactive = False) - Default
        YOUTRACK_BASE_URL   https://youtrack.example.com
        YOUTRACK_TOKEN      <permanent token from Profile > Authentication>

Dependencies:
    uv add requests

"""
#to avoid having to consider forward declarations, the below line must be first line in the file
from __future__ import annotations

import logging
import os
from getpass import getpass
from typing import Any, NamedTuple

import requests
from urllib3 import encode_multipart_formdata

from issue_tracker_interface.client import (
    CommandRejectedError,
    InvalidArgumentError,
    IssueTrackerClient,
    IssueTrackerError,
    RequestFailedError,
)
from issue_tracker_interface.issue import Issue, Link
from youtrack_client_impl.connection import BearerTokenConnection, Connection
from youtrack_client_impl.youtrack_issue import build_issue, build_link

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

#the new issue id follows this marker in the Location header of a create response
_LOCATION_MARKER = "rest/issue/"

UNKNOWN_ERROR = "Unknown error"


class _PendingCommand(NamedTuple):
    command: str
    comment: str | None = None
    run_as: str | None = None


def _require(value: str | None, argument: str) -> str:
    if not value:
        raise InvalidArgumentError(argument)
    return value


def _empty_form() -> tuple[bytes, dict[str, str]]:
    #mutating endpoints expect a multipart/form-data body, even an empty one
    body, content_type = encode_multipart_formdata({})
    return body, {"Content-Type": content_type}


def _error_message(response: requests.Response) -> str:
    """Extract the human readable message from a rejected command response."""
    try:
        data = response.json()
    except ValueError:
        return UNKNOWN_ERROR
    if isinstance(data, dict) and data.get("value") is not None:
        return str(data["value"])
    return UNKNOWN_ERROR


def _issue_id_from_location(location: str) -> str:
    index = location.lower().find(_LOCATION_MARKER)
    if index < 0:
        raise IssueTrackerError(f"Unexpected Location header on created issue: {location!r}")
    return location[index + len(_LOCATION_MARKER):]


# ---------------------------------------------------------------------------
# Client implementation
# ---------------------------------------------------------------------------

class YouTrackClient(IssueTrackerClient):
    """
    Args:
        connection: Connection that provides an authenticated session to the YouTrack server
    """

    _API_PREFIX = "rest"

    def __init__(self, connection: Connection) -> None:
        if connection is None:
            raise InvalidArgumentError("connection")
        self._connection = connection

    def close(self) -> None:
        """Release the connection's HTTP session."""
        self._connection.close()

    # ------------------------------------------------------------------
    # Internal HTTP helpers
    # ------------------------------------------------------------------

    def _url(self, path: str) -> str:
        return self._connection.url(f"{self._API_PREFIX}/{path}")

    def _get(self, url: str, params: dict | None = None) -> requests.Response:
        logger.debug("GET %s %s", url, params or "")
        session = self._connection.get_authenticated_session()
        return session.get(url, params=params, timeout=self._connection.timeout)

    def _post(self, url: str, params: dict | None = None) -> requests.Response:
        logger.debug("POST %s %s", url, params or "")
        body, headers = _empty_form()
        session = self._connection.get_authenticated_session()
        return session.post(url, params=params, data=body, headers=headers, timeout=self._connection.timeout)

    def _put(self, url: str, params: dict | None = None) -> requests.Response:
        logger.debug("PUT %s %s", url, params or "")
        body, headers = _empty_form()
        session = self._connection.get_authenticated_session()
        return session.put(url, params=params, data=body, headers=headers, timeout=self._connection.timeout)

    def _delete(self, url: str) -> requests.Response:
        logger.debug("DELETE %s", url)
        session = self._connection.get_authenticated_session()
        return session.delete(url, timeout=self._connection.timeout)

    @staticmethod
    def _raise_for_status(response: requests.Response, url: str) -> None:
        if not response.ok:
            raise RequestFailedError(response.status_code, url, (response.text or "")[:200])

    # ------------------------------------------------------------------
    # IssueTrackerClient contract
    # ------------------------------------------------------------------

    def get_issue(self, issue_id: str, wikify_description: bool = False) -> Issue | None:
        """Fetch a single issue by id, or None if it does not exist."""
        _require(issue_id, "issue_id")

        url = self._url(f"issue/{issue_id}")
        #the server expects the flag capitalized, as True/False
        response = self._get(url, params={"wikifyDescription": str(bool(wikify_description))})
        if response.status_code == 404:
            return None
        self._raise_for_status(response, url)
        return build_issue(response.json())

    def exists(self, issue_id: str) -> bool:
        _require(issue_id, "issue_id")

        url = self._url(f"issue/{issue_id}/exists")
        response = self._get(url)
        if response.status_code == 404:
            return False
        self._raise_for_status(response, url)
        return True

    def create_issue(self, project_id: str, issue: Issue) -> str:
        """
        Notes on usage:
            Creates the issue with its summary and description, then applies every
            custom field, comment and tag as a separate command, in that order.
            Commands run one at a time since later ones may depend on earlier ones.

        Returns:
            The id the server assigned to the new issue, e.g. 'HBR-63'

        Raises:
            InvalidArgumentError: If project_id is empty.
            RequestFailedError:   If the issue cannot be created.
            CommandRejectedError: If one of the follow-up commands is refused. The issue
                                  stays created with the commands applied so far.
        """
        _require(project_id, "project_id")

        params: dict[str, Any] = {"project": project_id}
        if issue.summary:
            params["summary"] = issue.summary
        if issue.description:
            params["description"] = issue.description
        if issue.is_markdown:
            params["markdown"] = "true"

        url = self._url("issue")
        response = self._put(url, params=params)
        self._raise_for_status(response, url)

        location = response.headers.get("Location")
        if not location:
            raise IssueTrackerError("Created issue response carried no Location header")
        issue_id = _issue_id_from_location(location)
        logger.info("Created issue %s in project %s", issue_id, project_id)

        pending: list[_PendingCommand] = []
        pending.extend(_PendingCommand(field.command()) for field in issue.custom_fields())
        pending.extend(_PendingCommand("comment", comment.text, comment.author) for comment in issue.comments)
        pending.extend(_PendingCommand(f"tag {tag.value}") for tag in issue.tags)

        for command in pending:
            self.apply_command(issue_id, command.command, command.comment, run_as=command.run_as)

        return issue_id

    def update_issue(
        self,
        issue_id: str,
        summary: str | None = None,
        description: str | None = None,
        is_markdown: bool | None = None,
        ) -> None:
        _require(issue_id, "issue_id")

        #a markdown-only change is dropped here, the server needs summary or description
        if summary is None and description is None:
            return

        params: dict[str, Any] = {}
        if summary:
            params["summary"] = summary
        if description:
            params["description"] = description
        if is_markdown is not None:
            params["markdown"] = str(is_markdown).lower()

        url = self._url(f"issue/{issue_id}")
        response = self._post(url, params=params)
        self._raise_for_status(response, url)

    def apply_command(
        self,
        issue_id: str,
        command: str,
        comment: str | None = None,
        disable_notifications: bool = False,
        run_as: str | None = None,
        ) -> None:
        _require(issue_id, "issue_id")
        _require(command, "command")

        params: dict[str, Any] = {"command": command}
        if comment:
            params["comment"] = comment
        if disable_notifications:
            params["disableNotifications"] = "true"

        url = self._url(f"issue/{issue_id}/execute")
        if run_as:
            #sent as given in the path, the login is not encoded
            url = f"{url}?runAs={run_as}"

        logger.info("Applying command %r to %s", command, issue_id)
        response = self._post(url, params=params)

        if response.status_code == 400:
            message = _error_message(response)
            logger.warning("Command %r rejected for %s: %s", command, issue_id, message)
            raise CommandRejectedError(message)
        self._raise_for_status(response, url)

    def delete_issue(self, issue_id: str) -> None:
        """
        Notes on usage:
            Deleting an issue that is already gone is treated as success.
        """
        _require(issue_id, "issue_id")

        url = self._url(f"issue/{issue_id}")
        response = self._delete(url)
        if response.status_code == 404:
            return
        self._raise_for_status(response, url)

    def get_links_for_issue(self, issue_id: str) -> list[Link]:
        _require(issue_id, "issue_id")

        url = self._url(f"issue/{issue_id}/link")
        response = self._get(url)
        self._raise_for_status(response, url)

        data = response.json()
        if not isinstance(data, list) or not all(isinstance(raw, dict) for raw in data):
            raise IssueTrackerError(f"Expected a list of link objects from {url}, got: {str(data)[:200]}")
        return [build_link(raw) for raw in data]


# ---------------------------------------------------------------------------
# Get client
# ---------------------------------------------------------------------------

def get_client(*, interactive: bool = False) -> YouTrackClient:
    """Return a configured YouTrackClient.

    Reads configuration from environment variables. If "interactive = True" and
    any variable is missing, the user will be prompted.

    Environment variables:
        YOUTRACK_BASE_URL:  Root URL of the YouTrack instance.
        YOUTRACK_TOKEN:     Permanent token used as a bearer token.
    """
    base_url = os.environ.get("YOUTRACK_BASE_URL", "")
    token = os.environ.get("YOUTRACK_TOKEN", "")

    if interactive:
        if not base_url:
            base_url = input("YouTrack base URL (e.g. https://youtrack.example.com): ").strip()
        if not token:
            token = getpass("YouTrack permanent token: ")
    else:
        #collects the missing fields and raises an error alerting to the missing values
        missing = [name for name, val in [
            ("YOUTRACK_BASE_URL", base_url),
            ("YOUTRACK_TOKEN", token),
        ] if not val]
        if missing:
            raise EnvironmentError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "Set them or call get_client(interactive=True)."
            )

    return YouTrackClient(BearerTokenConnection(base_url, token))
