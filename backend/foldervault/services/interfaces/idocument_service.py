"""
Document Service Interface.

Defines the contract for document business logic operations.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from ...domain.entities import Document, DocumentWithFolder
from ...domain.value_objects import DocumentId, FolderId, OwnerId, Version


class IDocumentService(ABC):
    """
    Interface for document business logic.

    Defines the contract for document operations including:
    - Creation, optionally filed under a folder
    - Retrieval
    - Update
    - Deletion
    """

    @abstractmethod
    async def create_document(
        self,
        title: str,
        content: str,
        content_type: str,
        owner_id: OwnerId,
        folder_id: Optional[FolderId] = None
    ) -> DocumentWithFolder:
        """
        Create a new document.

        Args:
            title: Document title
            content: Document body
            content_type: Media type of the body
            owner_id: Owner of the new document
            folder_id: Optional folder, which must belong to the same owner

        Returns:
            The document together with its folder's projection

        Raises:
            InvalidFolder: If the folder is missing or owned by someone else
        """
        pass

    @abstractmethod
    async def get_document(self, doc_id: DocumentId, owner_id: OwnerId) -> DocumentWithFolder:
        """
        Get a document with its folder's projection.

        Raises:
            NotFound: If the document is missing or owned by someone else
        """
        pass

    @abstractmethod
    async def list_documents(self, owner_id: OwnerId) -> List[Document]:
        """Get every document of the owner, filed or not."""
        pass

    @abstractmethod
    async def update_document(
        self,
        doc_id: DocumentId,
        owner_id: OwnerId,
        title: str,
        content: str,
        content_type: str,
        folder_id: Optional[FolderId] = None,
        expected_version: Optional[Version] = None
    ) -> Document:
        """
        Replace a document's payload and folder assignment.
        A folder_id of 0 or None leaves the document unfiled.

        Raises:
            NotFound, Forbidden, ConcurrencyConflict
        """
        pass

    @abstractmethod
    async def delete_document(self, doc_id: DocumentId, owner_id: OwnerId) -> bool:
        """
        Delete a document.

        Returns:
            False if the document is missing or owned by someone else, True otherwise
        """
        pass
