"""
Folder Repository - Concrete implementation of folder data access.
"""
from datetime import datetime
from typing import Iterable, List, Optional

from .interfaces import IFolderRepository
from ..domain.entities import Folder
from ..domain.value_objects import FolderId, OwnerId, Version
from ..services.database.base import FOLDERS, StoreSession


class FolderRepository(IFolderRepository):
    """
    Repository for folder data access.
    Maps domain entities to records of one store session.
    """

    def __init__(self, session: StoreSession):
        """
        Initialize repository with a store session.

        Args:
            session: Transaction-scoped store session (dependency injection)
        """
        self._session = session

    def _to_entity(self, data: dict) -> Folder:
        """Convert database record to domain entity."""
        return Folder(
            id=data["id"],
            owner_id=data["owner_id"],
            name=data["name"],
            parent_folder_id=data.get("parent_folder_id"),
            created_date=datetime.fromisoformat(data["created_date"]),
            version=data["version"]
        )

    def _to_dict(self, folder: Folder) -> dict:
        """Convert domain entity to database record."""
        data = {
            "owner_id": folder.owner_id,
            "name": folder.name,
            "parent_folder_id": folder.parent_folder_id,
            "created_date": folder.created_date.isoformat()
        }
        if folder.id is not None:
            data["id"] = folder.id
        return data

    async def get_by_id(self, folder_id: FolderId) -> Optional[Folder]:
        data = await self._session.get(FOLDERS, folder_id)
        return self._to_entity(data) if data else None

    async def get_roots(self, owner_id: OwnerId) -> List[Folder]:
        data_list = await self._session.get_many(FOLDERS, owner_id=owner_id, parent_folder_id=None)
        return [self._to_entity(data) for data in data_list]

    async def get_children(self, folder_id: FolderId) -> List[Folder]:
        data_list = await self._session.get_many(FOLDERS, parent_folder_id=folder_id)
        return [self._to_entity(data) for data in data_list]

    async def create(self, folder: Folder) -> Folder:
        result = await self._session.insert(FOLDERS, self._to_dict(folder))
        return self._to_entity(result)

    async def update(self, folder: Folder, expected_version: Version) -> Folder:
        result = await self._session.update_with_version_check(
            FOLDERS, self._to_dict(folder), expected_version
        )
        return self._to_entity(result)

    async def delete_many(self, folder_ids: Iterable[FolderId]) -> int:
        return await self._session.delete_many(FOLDERS, folder_ids)
