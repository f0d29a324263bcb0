"""
Repository layer - Abstracts data access.
Follows Repository Pattern for clean separation of data access from business logic.
"""
from .document_repository import DocumentRepository
from .folder_repository import FolderRepository
from .interfaces import IDocumentRepository, IFolderRepository

__all__ = [
    "DocumentRepository",
    "IDocumentRepository",
    "FolderRepository",
    "IFolderRepository"
]
