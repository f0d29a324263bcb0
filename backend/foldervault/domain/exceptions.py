"""
Business exceptions raised by the hierarchy engine.
Separates business failures from HTTP and storage concerns.
"""
from typing import Optional


class FolderVaultError(Exception):
    """Base class for all business exceptions."""
    pass


class NotFound(FolderVaultError):
    """Raised when a folder or document does not exist."""
    pass


class Forbidden(FolderVaultError):
    """Raised when the caller does not own the targeted entity."""
    pass


class InvalidParent(FolderVaultError):
    """Raised when a parent folder reference fails existence, ownership or acyclicity checks."""
    pass


class InvalidFolder(FolderVaultError):
    """Raised when a document's folder reference fails existence or ownership checks."""
    pass


class ConcurrencyConflict(FolderVaultError):
    """Raised when an update was committed against a stale version."""

    def __init__(self, message: str, current_version: Optional[int] = None):
        super().__init__(message)
        self.current_version = current_version


class DeletionFailed(FolderVaultError):
    """
    Raised when a cascading folder delete fails at the store level.
    The folder must be treated as being in an unknown state and re-queried.
    """
    pass


class ValidationFailed(FolderVaultError):
    """Raised when a name or title is invalid."""
    pass
