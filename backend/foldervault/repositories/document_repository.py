"""
Document Repository - Concrete implementation of document data access.
Maps between domain entities and store records.
"""
from datetime import datetime
from typing import Iterable, List, Optional

from .interfaces import IDocumentRepository
from ..domain.entities import Document
from ..domain.value_objects import DocumentId, FolderId, OwnerId, Version
from ..services.database.base import DOCUMENTS, StoreSession


class DocumentRepository(IDocumentRepository):
    """
    Repository for document data access.
    Maps domain entities to records of one store session.
    Follows Single Responsibility Principle - only handles data access.
    """

    def __init__(self, session: StoreSession):
        """
        Initialize repository with a store session.

        Args:
            session: Transaction-scoped store session (dependency injection)
        """
        self._session = session

    def _to_entity(self, data: dict) -> Document:
        """Convert database record to domain entity."""
        return Document(
            id=data["id"],
            owner_id=data["owner_id"],
            title=data["title"],
            content=data["content"],
            content_type=data["content_type"],
            folder_id=data.get("folder_id"),
            created_date=datetime.fromisoformat(data["created_date"]),
            version=data["version"]
        )

    def _to_dict(self, document: Document) -> dict:
        """Convert domain entity to database record."""
        data = {
            "owner_id": document.owner_id,
            "title": document.title,
            "content": document.content,
            "content_type": document.content_type,
            "folder_id": document.folder_id,
            "created_date": document.created_date.isoformat()
        }
        if document.id is not None:
            data["id"] = document.id
        return data

    async def get_by_id(self, doc_id: DocumentId) -> Optional[Document]:
        data = await self._session.get(DOCUMENTS, doc_id)
        return self._to_entity(data) if data else None

    async def get_by_owner(self, owner_id: OwnerId) -> List[Document]:
        data_list = await self._session.get_many(DOCUMENTS, owner_id=owner_id)
        return [self._to_entity(data) for data in data_list]

    async def get_in_folder(self, folder_id: FolderId) -> List[Document]:
        data_list = await self._session.get_many(DOCUMENTS, folder_id=folder_id)
        return [self._to_entity(data) for data in data_list]

    async def create(self, document: Document) -> Document:
        result = await self._session.insert(DOCUMENTS, self._to_dict(document))
        return self._to_entity(result)

    async def update(self, document: Document, expected_version: Version) -> Document:
        result = await self._session.update_with_version_check(
            DOCUMENTS, self._to_dict(document), expected_version
        )
        return self._to_entity(result)

    async def delete_many(self, doc_ids: Iterable[DocumentId]) -> int:
        return await self._session.delete_many(DOCUMENTS, doc_ids)
