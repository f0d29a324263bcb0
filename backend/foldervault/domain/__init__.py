"""
Domain layer - Contains business entities and domain logic.
This layer is independent of infrastructure and frameworks.
"""
from .entities import Document, DocumentSummary, DocumentWithFolder, Folder, FolderDetail, TreeNode
from .exceptions import (
    ConcurrencyConflict,
    DeletionFailed,
    FolderVaultError,
    Forbidden,
    InvalidFolder,
    InvalidParent,
    NotFound,
    ValidationFailed,
)
from .value_objects import DocumentId, FolderId, OwnerId, Version

__all__ = [
    "Document",
    "DocumentSummary",
    "DocumentWithFolder",
    "Folder",
    "FolderDetail",
    "TreeNode",
    "ConcurrencyConflict",
    "DeletionFailed",
    "FolderVaultError",
    "Forbidden",
    "InvalidFolder",
    "InvalidParent",
    "NotFound",
    "ValidationFailed",
    "DocumentId",
    "FolderId",
    "OwnerId",
    "Version",
]
