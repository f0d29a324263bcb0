"""
Document Service - Business logic for document operations.
Follows Single Responsibility Principle - handles document business logic only.
"""
from datetime import datetime, timezone
from typing import List, Optional

from .interfaces import IDocumentService
from .database.base import DatabaseInterface, IntegrityViolation, VersionConflict
from .ownership import resolve_document, resolve_folder
from .tree_projector import to_tree_node
from ..domain.entities import Document, DocumentWithFolder
from ..domain.exceptions import ConcurrencyConflict, Forbidden, InvalidFolder, NotFound
from ..domain.value_objects import DocumentId, FolderId, OwnerId, Version
from ..repositories import DocumentRepository, FolderRepository
from ..utils.validators import validate_title
from ..core.logging_config import get_logger

logger = get_logger(__name__)


class DocumentService(IDocumentService):
    """
    Service for document business logic.
    Validates folder ownership for filed documents; unfiled documents have no folder.
    """

    def __init__(self, db: DatabaseInterface):
        """
        Initialize document service with dependencies.

        Args:
            db: Transactional entity store (dependency injection)
        """
        self._db = db

    async def create_document(
        self,
        title: str,
        content: str,
        content_type: str,
        owner_id: OwnerId,
        folder_id: Optional[FolderId] = None
    ) -> DocumentWithFolder:
        title = validate_title(title)

        try:
            async with self._db.transaction() as session:
                folders = FolderRepository(session)
                folder = None
                if folder_id is not None:
                    try:
                        folder = await resolve_folder(folders, folder_id, owner_id)
                    except (NotFound, Forbidden) as e:
                        raise InvalidFolder(
                            f"Folder {folder_id} not found or does not belong to the user"
                        ) from e

                document = await DocumentRepository(session).create(Document(
                    owner_id=owner_id,
                    title=title,
                    content=content,
                    content_type=content_type,
                    folder_id=folder_id,
                    created_date=datetime.now(timezone.utc)
                ))
        except IntegrityViolation as e:
            raise InvalidFolder(f"Folder {folder_id} no longer exists") from e

        logger.info(f"Created document {document.id} for user {owner_id} (folder: {folder_id})")
        return DocumentWithFolder(
            document=document,
            folder=to_tree_node(folder) if folder else None
        )

    async def get_document(self, doc_id: DocumentId, owner_id: OwnerId) -> DocumentWithFolder:
        async with self._db.transaction() as session:
            document = await DocumentRepository(session).get_by_id(doc_id)
            if document is None or not document.is_owned_by(owner_id):
                raise NotFound(f"Document {doc_id} not found or does not belong to the user")

            folder = None
            if document.folder_id is not None:
                folder = await FolderRepository(session).get_by_id(document.folder_id)

        return DocumentWithFolder(
            document=document,
            folder=to_tree_node(folder) if folder else None
        )

    async def list_documents(self, owner_id: OwnerId) -> List[Document]:
        async with self._db.transaction() as session:
            return await DocumentRepository(session).get_by_owner(owner_id)

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
        title = validate_title(title)
        # 0 and None both mean "unfiled"; the assignment is always replaced
        target_folder_id = folder_id if folder_id and folder_id > 0 else None

        try:
            async with self._db.transaction() as session:
                documents = DocumentRepository(session)
                document = await resolve_document(documents, doc_id, owner_id)

                if target_folder_id is not None:
                    try:
                        await resolve_folder(FolderRepository(session), target_folder_id, owner_id)
                    except NotFound as e:
                        raise Forbidden(f"User {owner_id} doesn't have access to folder {target_folder_id}") from e

                version = expected_version if expected_version is not None else document.version
                document.title = title
                document.content = content
                document.content_type = content_type
                document.folder_id = target_folder_id
                updated = await documents.update(document, version)
        except VersionConflict as e:
            current_version = await self._document_version(doc_id)
            if current_version is None:
                raise NotFound(f"Document {doc_id} not found") from e
            logger.warning(f"Concurrent update of document {doc_id} by user {owner_id}: {e}")
            raise ConcurrencyConflict(
                f"Document {doc_id} was modified by another request",
                current_version=current_version
            ) from e
        except IntegrityViolation as e:
            raise Forbidden(f"Folder {target_folder_id} no longer exists") from e

        logger.info(f"Updated document {doc_id} for user {owner_id} (folder: {target_folder_id})")
        return updated

    async def delete_document(self, doc_id: DocumentId, owner_id: OwnerId) -> bool:
        async with self._db.transaction() as session:
            documents = DocumentRepository(session)
            document = await documents.get_by_id(doc_id)
            if document is None or not document.is_owned_by(owner_id):
                logger.debug(f"Document {doc_id} not deleted: missing or not owned by user {owner_id}")
                return False

            await documents.delete_many([document.id])

        logger.info(f"Deleted document {doc_id} for user {owner_id}")
        return True

    async def _document_version(self, doc_id: DocumentId) -> Optional[Version]:
        async with self._db.transaction() as session:
            document = await DocumentRepository(session).get_by_id(doc_id)
            return document.version if document else None
