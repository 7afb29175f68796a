"""Exception classes shared by the controller, the provisioning runner and the CLI."""

from typing import List, Optional


class ReplicationException(Exception):
    """
    Base exception class for all replication administration errors.
    """
    pass


class MalformedRequestError(ReplicationException):
    """
    Raised when a structured request body has the wrong shape or field types.
    """
    pass


class ValidationFailureError(ReplicationException):
    """
    Raised when a parsed request breaks one or more business rules.

    Carries every violation found, not just the first one.
    """

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Validation Failed: " + "; ".join(
            f"{i}: {error}" for i, error in enumerate(self.errors, start=1)
        ))


class TruncatedOrCorruptError(ReplicationException):
    """
    Raised when a binary payload is shorter than its layout or holds invalid values.
    """
    pass


class AutoFollowPatternExistsError(ReplicationException):
    """
    Raised when adding a pattern whose name is already registered for the connection.
    """
    pass


class AutoFollowPatternNotFoundError(ReplicationException):
    """
    Raised when removing a pattern that was never registered.
    """
    pass


class ProvisioningFailureError(ReplicationException):
    """
    Raised when a provisioning call does not answer 201 Created.
    """

    def __init__(
        self,
        message: str,
        phase: str,
        cluster: str,
        status_code: Optional[int] = None
    ):
        self.phase = phase
        self.cluster = cluster
        self.status_code = status_code
        super().__init__(message)
