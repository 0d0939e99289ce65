"""Custom exceptions for the team sync engine"""
from typing import Any, Optional


class TeamSyncException(Exception):
    """Base exception for team sync errors"""
    pass


class ValidationException(TeamSyncException):
    """Raised when local data validation fails"""
    pass


class RemoteFailure(TeamSyncException):
    """Raised when a remote API call fails; remote state is unchanged"""
    def __init__(self, service: str, message: str, status_code: Optional[int] = None,
                 detail: Any = None, request_id: Optional[str] = None):
        self.service = service
        self.message = message
        self.status_code = status_code
        self.detail = detail
        self.request_id = request_id
        super().__init__(f"{service} API error: {message}")


class RemoteValidationFailure(RemoteFailure):
    """Raised when the remote store rejects the submitted data"""
    pass


class NotFoundFailure(RemoteFailure):
    """Raised when a referenced team or project no longer exists remotely"""
    pass


class MalformedResponseFailure(RemoteFailure):
    """Raised when a successful response body cannot be decoded.

    The request itself was accepted, so the remote store may have changed.
    """
    pass
