"""
Repository interfaces - Define contracts for data access.
Follows Interface Segregation Principle - specific interfaces for specific needs.
"""
from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from ..domain.entities import Document, Folder
from ..domain.value_objects import DocumentId, FolderId, OwnerId, Version


class IFolderRepository(ABC):
    """
    Interface for folder data access.
    Business logic depends on this interface, not concrete implementations.
    """

    @abstractmethod
    async def get_by_id(self, folder_id: FolderId) -> Optional[Folder]:
        """Get folder by ID."""
        pass

    @abstractmethod
    async def get_roots(self, owner_id: OwnerId) -> List[Folder]:
        """Get the owner's folders that have no parent."""
        pass

    @abstractmethod
    async def get_children(self, folder_id: FolderId) -> List[Folder]:
        """Get the direct child folders of a folder."""
        pass

    @abstractmethod
    async def create(self, folder: Folder) -> Folder:
        """Create a new folder."""
        pass

    @abstractmethod
    async def update(self, folder: Folder, expected_version: Version) -> Folder:
        """Update a folder if it is still at expected_version."""
        pass

    @abstractmethod
    async def delete_many(self, folder_ids: Iterable[FolderId]) -> int:
        """Delete folders and return how many existed."""
        pass


class IDocumentRepository(ABC):
    """
    Interface for document data access.
    """

    @abstractmethod
    async def get_by_id(self, doc_id: DocumentId) -> Optional[Document]:
        """Get document by ID."""
        pass

    @abstractmethod
    async def get_by_owner(self, owner_id: OwnerId) -> List[Document]:
        """Get every document of an owner."""
        pass

    @abstractmethod
    async def get_in_folder(self, folder_id: FolderId) -> List[Document]:
        """Get the documents filed directly under a folder."""
        pass

    @abstractmethod
    async def create(self, document: Document) -> Document:
        """Create a new document."""
        pass

    @abstractmethod
    async def update(self, document: Document, expected_version: Version) -> Document:
        """Update a document if it is still at expected_version."""
        pass

    @abstractmethod
    async def delete_many(self, doc_ids: Iterable[DocumentId]) -> int:
        """Delete documents and return how many existed."""
        pass
