"""Core client contract definitions and factory placeholder."""

from __future__ import annotations

from abc import ABC, abstractmethod

from issue_tracker_interface.issue import Issue, Link

__all__ = [
    "CommandRejectedError",
    "InvalidArgumentError",
    "IssueTrackerClient",
    "IssueTrackerError",
    "RequestFailedError",
    "get_client",
]


class IssueTrackerError(Exception):
    """Base exception for everything raised by an issue tracker client."""


class InvalidArgumentError(IssueTrackerError, ValueError):
    """Raised before any request when a required argument is empty or missing."""

    def __init__(self, argument: str) -> None:
        super().__init__(f"{argument} must be a non-empty string")
        self.argument = argument


class RequestFailedError(IssueTrackerError):
    """Raised when the server answers with an unexpected non-success status."""

    def __init__(self, status_code: int, url: str, detail: str = "") -> None:
        message = f"Request to {url} failed with status {status_code}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class CommandRejectedError(IssueTrackerError):
    """Raised when the server refuses to apply a command to an issue."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class IssueTrackerClient(ABC):
    """Tracks issues."""

    # ------------------------------------------------------------------
    # Issue CRUD (create, read, update, delete)
    # ------------------------------------------------------------------
    @abstractmethod
    def get_issue(self, issue_id: str, wikify_description: bool = False) -> Issue | None:
        """Get an issue.

        Args:
            issue_id:           The unique identifier of the issue
            wikify_description: Ask the server to render the description as HTML

        Returns:
            The corresponding Issue, or None when no issue with that id exists

        Raises:
            InvalidArgumentError: If issue_id is empty
            RequestFailedError:   On any other non-success status

        """
        raise NotImplementedError

    @abstractmethod
    def exists(self, issue_id: str) -> bool:
        """Return True if an issue with this id exists."""
        raise NotImplementedError

    @abstractmethod
    def create_issue(self, project_id: str, issue: Issue) -> str:
        """Create an issue.

        Args:
            project_id: Short name of the project the issue is created in
            issue:      The issue to create, including custom fields, comments and tags

        Notes on usage:
            The issue is created first, then every custom field, comment and tag is
            applied as a command, one after the other. The first failing command
            propagates and the remaining ones are skipped; the issue is not rolled back.

        Returns:
            The server-assigned issue id

        """
        raise NotImplementedError

    @abstractmethod
    def update_issue(
        self,
        issue_id: str,
        summary: str | None = None,
        description: str | None = None,
        is_markdown: bool | None = None,
        ) -> None:
        """Update an issue's summary and/or description.

        Notes on usage:
            When both summary and description are None nothing is sent, even if
            is_markdown is set.

        """
        raise NotImplementedError

    @abstractmethod
    def apply_command(
        self,
        issue_id: str,
        command: str,
        comment: str | None = None,
        disable_notifications: bool = False,
        run_as: str | None = None,
        ) -> None:
        """Apply a command to an issue.

        Args:
            issue_id:              The unique identifier of the issue
            command:               The command text, e.g. 'Priority Critical'
            comment:               Optional comment added along with the command
            disable_notifications: Do not notify watchers about the change
            run_as:                Login of the user the command is attributed to

        Raises:
            CommandRejectedError: If the server refuses the command
            RequestFailedError:   On any other non-success status

        """
        raise NotImplementedError

    @abstractmethod
    def delete_issue(self, issue_id: str) -> None:
        """Delete an issue.

        Notes on usage:
            Deleting an issue that does not exist is not an error.

        """
        raise NotImplementedError

    @abstractmethod
    def get_links_for_issue(self, issue_id: str) -> list[Link]:
        """Return the links between this issue and other issues."""
        raise NotImplementedError


def get_client(*, interactive: bool = False) -> IssueTrackerClient:
    """Create instance of client.

    Args:
        interactive: When True, the implementation can prompt the user for missing
                     configuration. When False, it relies solely on environment variables.

    Raises:
        NotImplementedError: Until replaced by a concrete factory.

    """
    raise NotImplementedError
