"""
Folder Service Interface.

Defines the contract for folder business logic operations.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from ...domain.entities import Folder, FolderDetail, TreeNode
from ...domain.value_objects import FolderId, OwnerId, Version


class IFolderService(ABC):
    """
    Interface for folder business logic.

    Defines the contract for folder operations including:
    - Creation
    - Retrieval as detail view or full tree
    - Renaming and reparenting
    - Cascading deletion
    """

    @abstractmethod
    async def create_folder(
        self,
        name: str,
        owner_id: OwnerId,
        parent_folder_id: Optional[FolderId] = None
    ) -> Folder:
        """
        Create a new folder.

        Args:
            name: Folder name
            owner_id: Owner of the new folder
            parent_folder_id: Optional parent folder, which must belong to the same owner

        Returns:
            Created Folder entity

        Raises:
            InvalidParent: If the parent is missing or owned by someone else
        """
        pass

    @abstractmethod
    async def get_folder_detail(self, folder_id: FolderId, owner_id: OwnerId) -> FolderDetail:
        """
        Get a folder with its direct child folders and documents.

        Raises:
            NotFound: If the folder is missing or owned by someone else
        """
        pass

    @abstractmethod
    async def get_folder_tree(self, owner_id: OwnerId) -> List[TreeNode]:
        """
        Get every root folder of the owner, fully expanded.

        Returns:
            One TreeNode per root folder
        """
        pass

    @abstractmethod
    async def update_folder(
        self,
        folder_id: FolderId,
        owner_id: OwnerId,
        name: str,
        new_parent_folder_id: Optional[FolderId] = None,
        expected_version: Optional[Version] = None
    ) -> Folder:
        """
        Rename a folder and replace its parent.

        Args:
            folder_id: Folder to update
            owner_id: Calling owner
            name: New name
            new_parent_folder_id: New parent, None makes the folder a root
            expected_version: Version the caller last saw, defaults to the stored one

        Returns:
            Updated Folder entity

        Raises:
            NotFound, Forbidden, InvalidParent, ConcurrencyConflict
        """
        pass

    @abstractmethod
    async def delete_folder(self, folder_id: FolderId, owner_id: OwnerId) -> bool:
        """
        Delete a folder, its descendant folders and every document under them.

        Returns:
            False if the folder is missing or owned by someone else, True otherwise

        Raises:
            DeletionFailed: If the store fails while collecting or committing
        """
        pass
