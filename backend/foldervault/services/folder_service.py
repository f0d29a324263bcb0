"""
Folder Service - Business logic for folder operations.
Follows Single Responsibility Principle.

Every operation runs in exactly one store transaction; repositories are built
on that transaction's session and never outlive it.
"""
from datetime import datetime, timezone
from typing import List, Optional

from .interfaces import IFolderService
from .database.base import DatabaseInterface, IntegrityViolation, VersionConflict
from .hierarchy import collect_subtree, is_same_or_descendant
from .ownership import resolve_folder
from .tree_projector import TreeProjector
from ..domain.entities import Folder, FolderDetail, TreeNode
from ..domain.exceptions import (
    ConcurrencyConflict,
    DeletionFailed,
    Forbidden,
    InvalidParent,
    NotFound,
)
from ..domain.value_objects import FolderId, OwnerId, Version
from ..repositories import DocumentRepository, FolderRepository
from ..utils.validators import validate_folder_name
from ..core.logging_config import get_logger

logger = get_logger(__name__)


class FolderService(IFolderService):
    """
    Service for folder business logic.
    Handles folder creation, validation, projection, reparenting and cascading deletion.
    """

    def __init__(self, db: DatabaseInterface):
        """
        Initialize folder service.

        Args:
            db: Transactional entity store (dependency injection)
        """
        self._db = db

    async def create_folder(
        self,
        name: str,
        owner_id: OwnerId,
        parent_folder_id: Optional[FolderId] = None
    ) -> Folder:
        name = validate_folder_name(name)

        try:
            async with self._db.transaction() as session:
                folders = FolderRepository(session)

                if parent_folder_id is not None:
                    await self._resolve_parent(folders, parent_folder_id, owner_id)

                folder = await folders.create(Folder(
                    owner_id=owner_id,
                    name=name,
                    parent_folder_id=parent_folder_id,
                    created_date=datetime.now(timezone.utc)
                ))
        except IntegrityViolation as e:
            # Parent deleted by a concurrent transaction before this one committed
            raise InvalidParent(f"Parent folder {parent_folder_id} no longer exists") from e

        logger.info(f"Created folder {folder.id} '{folder.name}' for user {owner_id} (parent: {parent_folder_id})")
        return folder

    async def get_folder_detail(self, folder_id: FolderId, owner_id: OwnerId) -> FolderDetail:
        async with self._db.transaction() as session:
            folders = FolderRepository(session)
            folder = await folders.get_by_id(folder_id)
            if folder is None or not folder.is_owned_by(owner_id):
                raise NotFound(f"Folder {folder_id} not found or does not belong to the user")

            return await TreeProjector(folders, DocumentRepository(session)).project_detail(folder)

    async def get_folder_tree(self, owner_id: OwnerId) -> List[TreeNode]:
        async with self._db.transaction() as session:
            projector = TreeProjector(FolderRepository(session), DocumentRepository(session))
            return await projector.project_forest(owner_id)

    async def update_folder(
        self,
        folder_id: FolderId,
        owner_id: OwnerId,
        name: str,
        new_parent_folder_id: Optional[FolderId] = None,
        expected_version: Optional[Version] = None
    ) -> Folder:
        name = validate_folder_name(name)

        try:
            async with self._db.transaction() as session:
                folders = FolderRepository(session)
                folder = await resolve_folder(folders, folder_id, owner_id)

                if new_parent_folder_id is not None:
                    await self._resolve_parent(folders, new_parent_folder_id, owner_id)
                    if await is_same_or_descendant(folders, folder.id, new_parent_folder_id):
                        raise InvalidParent(
                            f"Folder {new_parent_folder_id} is folder {folder_id} or one of its descendants"
                        )

                version = expected_version if expected_version is not None else folder.version
                folder.name = name
                folder.parent_folder_id = new_parent_folder_id
                updated = await folders.update(folder, version)
        except VersionConflict as e:
            current_version = await self._folder_version(folder_id)
            if current_version is None:
                raise NotFound(f"Folder {folder_id} not found") from e
            logger.warning(f"Concurrent update of folder {folder_id} by user {owner_id}: {e}")
            raise ConcurrencyConflict(
                f"Folder {folder_id} was modified by another request",
                current_version=current_version
            ) from e
        except IntegrityViolation as e:
            raise InvalidParent(
                f"Parent folder {new_parent_folder_id} no longer exists or is now below folder {folder_id}"
            ) from e

        logger.info(f"Updated folder {folder_id} for user {owner_id} (parent: {new_parent_folder_id})")
        return updated

    async def delete_folder(self, folder_id: FolderId, owner_id: OwnerId) -> bool:
        try:
            async with self._db.transaction() as session:
                folders = FolderRepository(session)
                documents = DocumentRepository(session)

                folder = await folders.get_by_id(folder_id)
                if folder is None or not folder.is_owned_by(owner_id):
                    logger.debug(f"Folder {folder_id} not deleted: missing or not owned by user {owner_id}")
                    return False

                deletion = await collect_subtree(folders, documents, folder.id)
                await documents.delete_many(deletion.document_ids)
                await folders.delete_many(deletion.folder_ids)
        except Exception as e:
            logger.error(f"Error deleting folder with ID {folder_id} for user {owner_id}", exc_info=True)
            raise DeletionFailed(f"Deleting folder {folder_id} failed: {e}") from e

        logger.info(
            f"Deleted folder {folder_id} for user {owner_id}: "
            f"{len(deletion.folder_ids)} folders, {len(deletion.document_ids)} documents"
        )
        return True

    @staticmethod
    async def _resolve_parent(folders: FolderRepository, parent_folder_id: FolderId, owner_id: OwnerId) -> Folder:
        try:
            return await resolve_folder(folders, parent_folder_id, owner_id)
        except (NotFound, Forbidden) as e:
            raise InvalidParent(
                f"Parent folder {parent_folder_id} not found or does not belong to the user"
            ) from e

    async def _folder_version(self, folder_id: FolderId) -> Optional[Version]:
        async with self._db.transaction() as session:
            folder = await FolderRepository(session).get_by_id(folder_id)
            return folder.version if folder else None
